"""Create GitLab release tags with generated changelogs."""

__version__ = "0.1.0"
