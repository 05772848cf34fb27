"""Look up file hashes in the VirusTotal file report service."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Sequence
from urllib.parse import quote

from hashtab.codec import hash_bytes_to_string
from hashtab.https import HttpRequest, HttpResponse, check_reply, do_https

__all__ = [
    "VirusTotalEntry",
    "VirusTotalResult",
    "build_virustotal_query",
    "parse_virustotal_reply",
    "query_virustotal",
]

Fetch = Callable[[HttpRequest], HttpResponse]

_SERVER = "www.virustotal.com"
_USER_AGENT = "VirusTotal"  # the service checks for this
_REPORTS_URI = "/partners/sysinternals/file-reports?apikey="


@dataclass(frozen=True)
class VirusTotalEntry:
    """A hashed file to look up.

    ``created`` is the file's creation time; aware times are sent in UTC,
    naive ones as they are. Failed entries are not sent.
    """

    digest: bytes
    display_name: str
    created: datetime
    failed: bool = False


@dataclass(frozen=True)
class VirusTotalResult:
    """What the service knows about one file."""

    entry: VirusTotalEntry
    found: bool = False
    permalink: str = ""
    positives: int = 0
    total: int = 0


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def build_virustotal_query(entries: Iterable[VirusTotalEntry]) -> str:
    """Build the JSON request body for the given entries."""
    return json.dumps(
        [
            {
                "autostart_location": "",
                "autostart_entry": "",
                "hash": hash_bytes_to_string(entry.digest),
                "image_path": entry.display_name,
                "creation_datetime": _format_time(entry.created),
            }
            for entry in entries
            if not entry.failed
        ]
    )


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_virustotal_reply(
    body: str, entries: Sequence[VirusTotalEntry]
) -> list[VirusTotalResult]:
    """Match the reports in a reply to the entries, in entry order.

    Entries the reply says nothing about are left out. Raises ValueError if
    the reply is not the expected JSON.
    """
    try:
        root = json.loads(body)
    except ValueError as exc:
        raise ValueError(f"JSON parse error. Body: {body}") from exc

    data = root.get("data") if isinstance(root, dict) else None
    if not isinstance(data, list):
        raise ValueError(f"Malformed reply. Body: {body}")

    reports: dict[str, dict[str, object]] = {}
    for item in data:
        if not isinstance(item, dict):
            continue
        found = item.get("found")
        digest = item.get("hash")
        if not isinstance(found, bool) or not isinstance(digest, str):
            continue
        report: dict[str, object] = {"found": found}
        if found:
            permalink = item.get("permalink")
            if isinstance(permalink, str):
                report["permalink"] = permalink
            for key in ("positives", "total"):
                if _is_integer(item.get(key)):
                    report[key] = item[key]
        reports[digest] = report

    results = []
    for entry in entries:
        report = reports.get(hash_bytes_to_string(entry.digest))
        if report is not None:
            results.append(VirusTotalResult(entry=entry, **report))
    return results


def query_virustotal(
    entries: Sequence[VirusTotalEntry],
    api_key: str,
    fetch: Optional[Fetch] = None,
) -> list[VirusTotalResult]:
    """Send the entries' hashes to the service and return its reports.

    ``fetch`` sends the request; it defaults to a real HTTPS request.
    """
    request = HttpRequest(
        server_name=_SERVER,
        uri=_REPORTS_URI + quote(api_key, safe=""),
        method="POST",
        user_agent=_USER_AGENT,
        headers={"Content-Type": "application/json"},
        body=build_virustotal_query(entries).encode("utf-8"),
    )
    response = (fetch or do_https)(request)
    return parse_virustotal_reply(check_reply(response), entries)