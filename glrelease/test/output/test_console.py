"""Tests for glrelease.output.console."""

from __future__ import annotations

from glrelease.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


def test_style_str() -> None:
    assert str(Style.WARNING) == "warning"
    assert {s.name for s in Style} == {"DEFAULT", "SUCCESS", "ERROR", "WARNING", "INFO", "DIM"}


class TestMockConsole:
    def test_levels_are_prefixed(self) -> None:
        console = MockConsole()
        console.info("connecting")
        console.warning("no namespace")
        console.error("failed")
        console.success("tagged")

        assert console.messages == [
            "info: connecting",
            "warning: no namespace",
            "error: failed",
            "OK tagged",
        ]
        assert console.has_error()
        assert console.has_warning()

    def test_print_keeps_style(self) -> None:
        console = MockConsole()
        console.print("dimmed", Style.DIM)
        assert console.outputs[0].style == Style.DIM
        assert console.text == "dimmed"

    def test_find(self) -> None:
        console = MockConsole()
        console.info("Added tag: 1.0.0")
        console.info("other")
        assert len(console.find("Added tag")) == 1

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.info("typed")


def test_rich_console_does_not_interpret_markup(capsys) -> None:
    console = RichConsole()
    console.info("fix [bold]parser[/bold]")
    captured = capsys.readouterr()
    assert "[bold]parser[/bold]" in captured.out
