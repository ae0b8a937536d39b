"""HTTP client abstraction for the GitLab REST API.

This module provides:
- HttpClient: Protocol for the two verbs the release flow needs
- RealHttpClient: urllib implementation sending the ``PRIVATE-TOKEN`` header
- MockHttpClient: canned responses keyed by URL, for tests
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from glrelease import __version__
from glrelease.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations against GitLab."""

    def get_json(self, url: str) -> Result[object, HttpError]:
        """GET ``url`` and parse the body as JSON (object or array)."""
        ...

    def post_json(self, url: str, form: Mapping[str, str]) -> Result[object, HttpError]:
        """POST ``form`` url-encoded to ``url`` and parse the JSON reply."""
        ...


class RealHttpClient:
    """HTTP client using urllib.

    Requests are synchronous and never retried; a socket timeout is the only
    bound on how long a call may block.
    """

    def __init__(
        self,
        token: str | None,
        timeout: float = 30.0,
        user_agent: str = f"glrelease/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        if self._token:
            headers["PRIVATE-TOKEN"] = self._token
        return headers

    def _request(
        self,
        url: str,
        *,
        method: str,
        headers: dict[str, str],
        data: bytes | None = None,
    ) -> Result[bytes, HttpError]:
        try:
            req = urllib.request.Request(url, data=data, headers=headers, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def _decode(self, url: str, body: bytes) -> Result[object, HttpError]:
        try:
            data: object = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        return Ok(data)

    def get_json(self, url: str) -> Result[object, HttpError]:
        result = self._request(url, method="GET", headers=self._headers())
        if isinstance(result, Err):
            return result
        return self._decode(url, result.value)

    def post_json(self, url: str, form: Mapping[str, str]) -> Result[object, HttpError]:
        body = urllib.parse.urlencode(dict(form)).encode("utf-8")
        headers = self._headers()
        headers["Content-Type"] = "application/x-www-form-urlencoded"
        result = self._request(url, method="POST", headers=headers, data=body)
        if isinstance(result, Err):
            return result
        return self._decode(url, result.value)


def _error_message(e: urllib.error.HTTPError) -> str:
    # GitLab explains rejections in a JSON {"message": ...} body.
    try:
        payload: object = json.loads(e.read().decode("utf-8"))
    except (OSError, ValueError):
        return str(e.reason)
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error")
        if message:
            return str(message)
    return str(e.reason)


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://gitlab.example/api/v4/projects/1", {"id": 1})
        result = client.get_json("https://gitlab.example/api/v4/projects/1")
        assert result == Ok({"id": 1})
    """

    def __init__(self) -> None:
        self._get_responses: dict[str, object | HttpError] = {}
        self._post_responses: dict[str, object | HttpError] = {}
        self.calls: list[tuple[str, str]] = []
        self.posted: list[tuple[str, dict[str, str]]] = []

    def set_json(self, url: str, response: object | HttpError) -> None:
        """Set GET response for URL."""
        self._get_responses[url] = response

    def set_post(self, url: str, response: object | HttpError) -> None:
        """Set POST response for URL."""
        self._post_responses[url] = response

    def get_json(self, url: str) -> Result[object, HttpError]:
        self.calls.append(("GET", url))
        if url not in self._get_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        response = self._get_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def post_json(self, url: str, form: Mapping[str, str]) -> Result[object, HttpError]:
        self.calls.append(("POST", url))
        self.posted.append((url, dict(form)))
        if url not in self._post_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        response = self._post_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
