"""Command line entry: hash the given files and check them against checksum files."""

from __future__ import annotations

import argparse
import hashlib
import zlib
from typing import Callable, Optional, Protocol, Sequence

from hashtab.codec import hash_bytes_to_string
from hashtab.paths import FileInfo, HashAlgorithmInfo, process_everything
from hashtab.settings import Settings, SettingsStore

__all__ = ["main"]

_CHUNK_SIZE = 1 << 20


class _Hasher(Protocol):
    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...


class _Crc32:
    """CRC-32 with the hashlib interface; digest is big-endian."""

    def __init__(self) -> None:
        self._value = 0

    def update(self, data: bytes) -> None:
        self._value = zlib.crc32(data, self._value)

    def digest(self) -> bytes:
        return self._value.to_bytes(4, "big")


_ALGORITHMS: tuple[tuple[HashAlgorithmInfo, Callable[[], _Hasher]], ...] = (
    (HashAlgorithmInfo("CRC32", ("sfv", "crc32"), 4), _Crc32),
    (HashAlgorithmInfo("MD5", ("md5",), 16), hashlib.md5),
    (HashAlgorithmInfo("SHA-1", ("sha1",), 20), hashlib.sha1),
    (HashAlgorithmInfo("SHA-224", ("sha224",), 28), hashlib.sha224),
    (HashAlgorithmInfo("SHA-256", ("sha256",), 32), hashlib.sha256),
    (HashAlgorithmInfo("SHA-384", ("sha384",), 48), hashlib.sha384),
    (HashAlgorithmInfo("SHA-512", ("sha512",), 64), hashlib.sha512),
    (HashAlgorithmInfo("SHA3-256", ("sha3-256",), 32), hashlib.sha3_256),
    (HashAlgorithmInfo("SHA3-512", ("sha3-512",), 64), hashlib.sha3_512),
    (HashAlgorithmInfo("BLAKE2b-512", ("blake2b",), 64), hashlib.blake2b),
    (HashAlgorithmInfo("BLAKE2s-256", ("blake2s",), 32), hashlib.blake2s),
)


def _hash_file(path: str, factories: Sequence[Callable[[], _Hasher]]) -> list[bytes]:
    hashers = [factory() for factory in factories]
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            for hasher in hashers:
                hasher.update(chunk)
    return [hasher.digest() for hasher in hashers]


def _report(
    info: FileInfo,
    names: Sequence[str],
    digests: Sequence[bytes],
    upper: bool,
) -> tuple[list[str], bool]:
    expected = set(info.expected_hashes)
    matched = any(digest in expected for digest in digests)
    mismatch = bool(expected) and not matched
    lines = []
    for name, digest in zip(names, digests):
        if digest in expected:
            status = "  OK"
        elif mismatch:
            status = "  MISMATCH"
        else:
            status = ""
        lines.append(f"{info.relative_path}  {name}  {hash_bytes_to_string(digest, upper)}{status}")
    return lines, mismatch


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Hash the files given on the command line; return 1 on errors or mismatches."""
    parser = argparse.ArgumentParser(
        prog="hashtab",
        description="Compute file hashes and verify them against checksum files.",
    )
    parser.add_argument("files", nargs="*", help="files, directories or a checksum file")
    parser.add_argument("--settings", metavar="PATH", help="JSON file holding persistent settings")
    args = parser.parse_args(argv)

    if not args.files:
        return 0

    infos = [info for info, _ in _ALGORITHMS]
    settings = Settings(SettingsStore(args.settings), [info.name for info in infos])
    processed = process_everything(args.files, settings, infos)

    # A checksum file's own algorithm is enabled for this run even if turned off.
    if processed.sumfile_type >= 0:
        settings.algorithms[infos[processed.sumfile_type].name].set_no_save(True)

    enabled = [(info, factory) for info, factory in _ALGORITHMS if settings.algorithms[info.name]]
    names = [info.name for info, _ in enabled]
    factories = [factory for _, factory in enabled]
    upper = bool(settings.display_uppercase)

    failed = False
    for path, info in sorted(processed.files.items(), key=lambda item: item[1].relative_path):
        try:
            digests = _hash_file(path, factories)
        except OSError as exc:
            print(f"{info.relative_path}: error: {exc.strerror or exc}")
            failed = True
            continue
        lines, mismatch = _report(info, names, digests, upper)
        failed = failed or mismatch
        for line in lines:
            print(line)

    return 1 if failed else 0