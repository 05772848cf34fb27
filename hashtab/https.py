"""Minimal HTTPS client used by the update check and the VirusTotal lookup."""

from __future__ import annotations

import http.client
from dataclasses import dataclass, field

__all__ = [
    "HttpRequest",
    "HttpResponse",
    "HttpRequestError",
    "do_https",
    "check_reply",
]

HTTPS_PORT = 443
_TIMEOUT = 30.0


class HttpRequestError(RuntimeError):
    """An HTTPS request failed or the server answered with an error status."""


@dataclass(frozen=True)
class HttpRequest:
    """One request to send over HTTPS."""

    server_name: str
    uri: str
    method: str = "GET"
    user_agent: str = "hashtab"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass(frozen=True)
class HttpResponse:
    """Status code and decoded body of a reply."""

    status: int
    body: str


def do_https(request: HttpRequest) -> HttpResponse:
    """Send a request to the server's HTTPS port and read the whole reply.

    Raises HttpRequestError if the connection or the transfer fails.
    """
    connection = http.client.HTTPSConnection(request.server_name, HTTPS_PORT, timeout=_TIMEOUT)
    try:
        headers = {"User-Agent": request.user_agent, **request.headers}
        connection.request(
            request.method,
            request.uri,
            body=request.body or None,
            headers=headers,
        )
        reply = connection.getresponse()
        status = reply.status
        payload = reply.read()
    except (OSError, http.client.HTTPException) as exc:
        raise HttpRequestError(f"Request to {request.server_name} failed: {exc}") from exc
    finally:
        connection.close()
    return HttpResponse(status=status, body=payload.decode("utf-8", errors="replace"))


def check_reply(response: HttpResponse) -> str:
    """Return the body of a successful reply; raise HttpRequestError otherwise."""
    if response.status != 200:
        raise HttpRequestError(
            f"HTTP Status {response.status} received. Server says: {response.body}"
        )
    return response.body