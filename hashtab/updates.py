"""Look up the newest released version."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Callable, Optional

from hashtab.https import HttpRequest, HttpResponse, check_reply, do_https

__all__ = ["Version", "parse_latest_version", "get_latest_version"]

Fetch = Callable[[HttpRequest], HttpResponse]

_UPDATE_SERVER = "api.github.com"
_TAGS_URI = "/repos/hashtab/hashtab/tags"
_USER_AGENT = "hashtab_Update_Checker"
_VERSION = re.compile(r"v(\d+)\.(\d+)\.(\d+)", re.ASCII)
_COMPONENT_MAX = 0xFFFF


@dataclass(frozen=True, order=True)
class Version:
    """A three-part version number with 16-bit components."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def as_number(self) -> int:
        """Pack the version into one integer that orders like the version."""
        return self.major << 32 | self.minor << 16 | self.patch

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_latest_version(body: str) -> Version:
    """Read the version from the name of the first tag in a tag list reply.

    Raises ValueError if the reply is not the expected JSON.
    """
    try:
        root = json.loads(body)
    except ValueError as exc:
        raise ValueError(f"JSON parse error. Body: {body}") from exc

    if not (
        isinstance(root, list)
        and root
        and isinstance(root[0], dict)
        and isinstance(root[0].get("name"), str)
    ):
        raise ValueError(f"Malformed reply. Body: {body}")

    name = root[0]["name"]
    match = _VERSION.match(name)
    if match is None:
        raise ValueError(f"Malformed version number: {name}")
    parts = [int(part) for part in match.groups()]
    if any(part > _COMPONENT_MAX for part in parts):
        raise ValueError(f"Malformed version number: {name}")
    return Version(*parts)


def get_latest_version(fetch: Optional[Fetch] = None) -> Version:
    """Ask the release server for the newest version.

    ``fetch`` sends the request; it defaults to a real HTTPS request.
    """
    request = HttpRequest(
        server_name=_UPDATE_SERVER,
        uri=_TAGS_URI,
        method="GET",
        user_agent=_USER_AGENT,
        headers={
            "Content-Type": "application/json",
            "Accept": "application/vnd.github.v3+json",
        },
    )
    response = (fetch or do_https)(request)
    return parse_latest_version(check_reply(response))