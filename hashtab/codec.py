"""Base64 and hexadecimal helpers for hash values."""

from __future__ import annotations

import base64
import re

__all__ = [
    "encode_base64",
    "decode_base64",
    "hex_digit",
    "unhex",
    "hash_bytes_to_string",
    "hash_string_to_bytes",
    "find_hash_in_string",
    "floor_icon_size",
]


def _build_decode_table() -> list[int]:
    table = [0] * 256
    for value, char in enumerate("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"):
        table[ord(char)] = value
    # Standard, URL-safe and a few lenient alternatives for the last two symbols.
    for char in "+-.":
        table[ord(char)] = 62
    for char in "/,_":
        table[ord(char)] = 63
    return table


_DECODE_TABLE = _build_decode_table()

_ICON_SIZES = (256, 192, 128, 96, 64, 48, 40, 32, 24, 16)

# Lookahead-plus-backreference makes the repetition atomic, so a run of hex
# digits that does not end on a word boundary is rejected as a whole.
_HASH_PATTERN = re.compile(
    r"\b(?=(?P<lower>[0-9a-f]{2}(?: ?[0-9a-f]{2}){3,}))(?P=lower)\b"
    r"|\b(?=(?P<upper>[0-9A-F]{2}(?: ?[0-9A-F]{2}){3,}))(?P=upper)\b",
    re.ASCII,
)


def encode_base64(data: bytes) -> str:
    """Encode bytes as padded standard base64."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_base64(text: str | bytes) -> bytes:
    """Decode base64 leniently.

    Padding is optional, URL-safe symbols are accepted and unknown
    characters decode as zero bits.
    """
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    length = len(raw)
    table = _DECODE_TABLE

    def sym(index: int) -> int:
        return table[raw[index]] if index < length else 0

    pad = 1 if length > 0 and (length % 4 or raw[-1] == ord("=")) else 0
    full = ((length + 3) // 4 - pad) * 4
    out = bytearray()
    for start in range(0, full, 4):
        n = sym(start) << 18 | sym(start + 1) << 12 | sym(start + 2) << 6 | sym(start + 3)
        out += bytes((n >> 16 & 0xFF, n >> 8 & 0xFF, n & 0xFF))
    if pad:
        n = sym(full) << 18 | sym(full + 1) << 12
        out.append(n >> 16 & 0xFF)
        if length > full + 2 and raw[full + 2] != ord("="):
            n |= sym(full + 2) << 6
            out.append(n >> 8 & 0xFF)
    return bytes(out)


def hex_digit(n: int, upper: bool = True) -> str:
    """Return the hex digit character for a nibble value."""
    if n < 0xA:
        return chr(ord("0") + n)
    return chr(ord("A" if upper else "a") + n - 0xA)


def unhex(ch: str) -> int | None:
    """Return the value of a hex digit character, or None if it is not one."""
    if len(ch) != 1 or ord(ch) >= 0x80:
        return None
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "a" <= ch <= "f":
        return ord(ch) - ord("a") + 0xA
    if "A" <= ch <= "F":
        return ord(ch) - ord("A") + 0xA
    return None


def hash_bytes_to_string(data: bytes, upper: bool = True) -> str:
    """Format hash bytes as a contiguous hex string."""
    return "".join(hex_digit(b >> 4, upper) + hex_digit(b & 0xF, upper) for b in data)


def hash_string_to_bytes(text: str) -> bytes:
    """Parse a hex hash, allowing spaces between byte pairs.

    Returns empty bytes if the text is not a valid hash. A trailing odd
    digit is ignored.
    """
    size = len(text)
    result = bytearray()
    i = 0
    while i < size - 1:
        while text[i] == " ":
            i += 1
            if i >= size - 1:
                break
        if i + 1 >= size:
            return b""
        high = unhex(text[i])
        low = unhex(text[i + 1])
        if high is None or low is None:
            return b""
        result.append(high << 4 | low)
        i += 2
    return bytes(result)


def find_hash_in_string(text: str) -> bytes:
    """Find the first hex hash of at least four bytes in free text."""
    match = _HASH_PATTERN.search(text)
    if match is None:
        return b""
    return hash_string_to_bytes(match.group(0))


def floor_icon_size(size: int) -> int:
    """Round a size down to the nearest standard icon size."""
    return next((v for v in _ICON_SIZES if size >= v), size)