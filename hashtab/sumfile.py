"""Parsing of checksum files (sfv, hex "sum" files and base64 variants)."""

from __future__ import annotations

import enum
import os
import re

from hashtab.codec import decode_base64, hash_string_to_bytes

__all__ = ["FileSum", "SumFileParser", "parse_sumfile", "try_parse_sumfile"]

FileSum = tuple[str, bytes]

_MIN_SUMFILE_SIZE = 6  # 6 bytes for a base64 CRC
_MAX_SUMFILE_SIZE = 1 << 32
_WHITESPACE = b"\r\n\t\f\v "
_BOM = b"\xef\xbb\xbf"

# The filename part of an sfv line may not contain spaces, and it must be
# separated from the hash by whitespace that starts with a space.
_SFV = re.compile(rb"([^ ]+) \s*([0-9a-fA-F]{8})")
_HEX = re.compile(rb"([0-9a-fA-F]{8,512}) [ *](.+)", re.DOTALL)
_B64 = re.compile(rb"([0-9a-zA-Z=+/,\-_]{6,512}) [ *](.+)", re.DOTALL)
_LINE_BREAK = re.compile(rb"[\r\n]")


class _CommentStyle(enum.Enum):
    UNKNOWN = enum.auto()
    SEMICOLON = enum.auto()
    HASH = enum.auto()


class _HashStyle(enum.Enum):
    UNKNOWN = enum.auto()
    HEX = enum.auto()
    SFV = enum.auto()
    BASE64 = enum.auto()


class SumFileParser:
    """Line-by-line parser that locks onto the first comment and hash style seen."""

    def __init__(self) -> None:
        self.files: list[FileSum] = []
        self.has_undecodable_names = False
        self._comment = _CommentStyle.UNKNOWN
        self._hash = _HashStyle.UNKNOWN

    def _add(self, name: bytes, digest: bytes) -> None:
        try:
            decoded = name.decode("utf-8")
        except UnicodeDecodeError:
            self.has_undecodable_names = True
            decoded = name.decode("utf-8", errors="replace")
        self.files.append((decoded, digest))

    def process_line(self, line: bytes | str) -> bool:
        """Consume one line; return False if it fits none of the known formats."""
        raw = line.encode("utf-8") if isinstance(line, str) else bytes(line)

        if not raw.strip(_WHITESPACE):
            return True

        if self._comment in (_CommentStyle.UNKNOWN, _CommentStyle.HASH) and raw[:1] == b"#":
            self._comment = _CommentStyle.HASH
            return True

        if self._comment in (_CommentStyle.UNKNOWN, _CommentStyle.SEMICOLON) and raw[:1] == b";":
            self._comment = _CommentStyle.SEMICOLON
            return True

        if self._hash in (_HashStyle.UNKNOWN, _HashStyle.SFV):
            match = _SFV.fullmatch(raw)
            if match:
                self._hash = _HashStyle.SFV
                digest = hash_string_to_bytes(match.group(2).decode("ascii"))
                if digest:
                    self._add(match.group(1).rstrip(b" "), digest)
                    return True

        if self._hash in (_HashStyle.UNKNOWN, _HashStyle.HEX):
            match = _HEX.fullmatch(raw)
            if match:
                self._hash = _HashStyle.HEX
                digest = hash_string_to_bytes(match.group(1).decode("ascii"))
                if digest:
                    self._add(match.group(2), digest)
                    return True

        if self._hash in (_HashStyle.UNKNOWN, _HashStyle.BASE64):
            match = _B64.fullmatch(raw)
            if match:
                self._hash = _HashStyle.BASE64
                digest = decode_base64(match.group(1))
                if digest:
                    self._add(match.group(2), digest)
                    return True

        return False


def parse_sumfile(data: bytes, max_hash_size: int) -> list[FileSum]:
    """Parse the contents of a checksum file.

    Returns an empty list if the data is not a checksum file. A file holding
    a single bare hash yields one entry with an empty name. ``max_hash_size``
    is the byte length of the longest supported digest.
    """
    size = len(data)
    if size < _MIN_SUMFILE_SIZE or size >= _MAX_SUMFILE_SIZE:
        return []

    body = data[len(_BOM):] if data.startswith(_BOM) else data

    # Longest hash, hexed, plus room for newlines and spaces.
    if size <= max_hash_size * 2 * 2:
        stripped = body.strip(_WHITESPACE)
        if stripped:
            digest = hash_string_to_bytes(stripped.decode("latin-1"))
            if digest:
                return [("", digest)]

    parser = SumFileParser()
    for line in _LINE_BREAK.split(body):
        if not line:
            continue
        if not parser.process_line(line):
            return []

    if parser.has_undecodable_names:
        return []
    return parser.files


def try_parse_sumfile(path: str | os.PathLike[str], max_hash_size: int) -> list[FileSum]:
    """Read and parse a checksum file; raises OSError if it cannot be read."""
    with open(path, "rb") as handle:
        size = os.fstat(handle.fileno()).st_size
        if size < _MIN_SUMFILE_SIZE or size >= _MAX_SUMFILE_SIZE:
            return []
        data = handle.read()
    return parse_sumfile(data, max_hash_size)