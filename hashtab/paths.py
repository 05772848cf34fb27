"""Turn a selection of paths into the list of files to hash."""

from __future__ import annotations

import os
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from hashtab.settings import Settings
from hashtab.sumfile import try_parse_sumfile

__all__ = [
    "HashAlgorithmInfo",
    "FileInfo",
    "ProcessedFileList",
    "normalize_path",
    "process_everything",
]

NOT_SUMFILE = -2
UNKNOWN_SUMFILE = -1

_DEFAULT_MAX_HASH_SIZE = 64


@dataclass(frozen=True)
class HashAlgorithmInfo:
    """Name, checksum file extensions and digest size of an algorithm."""

    name: str
    extensions: tuple[str, ...] = ()
    size: int = _DEFAULT_MAX_HASH_SIZE


@dataclass
class FileInfo:
    """A file to hash and the hashes it is expected to have."""

    # Relative to the base path, or absolute if the file lies outside it.
    relative_path: str = ""
    expected_hashes: list[bytes] = field(default_factory=list)


@dataclass
class ProcessedFileList:
    """Files to hash, keyed by normalized path.

    ``sumfile_type`` is -2 if the selection was not a checksum file, -1 for a
    checksum file of unknown algorithm, otherwise the index of the algorithm
    whose extension the checksum file has.
    """

    sumfile_type: int = NOT_SUMFILE
    base_path: str = ""
    files: dict[str, FileInfo] = field(default_factory=dict)


def normalize_path(path: str) -> str:
    """Make a path absolute and collapse redundant components."""
    return os.path.abspath(path)


def _with_trailing_sep(path: str) -> str:
    return path if path.endswith(os.sep) else path + os.sep


def _relative_to(path: str, base: str) -> str:
    return path[len(base):] if base and path.startswith(base) else path


def _read_sums(path: str, max_hash_size: int) -> list[tuple[str, bytes]]:
    try:
        return try_parse_sumfile(path, max_hash_size)
    except OSError:
        return []


def _list_directory(path: str) -> list[str] | None:
    try:
        with os.scandir(path) as entries:
            return [
                os.path.join(path, entry.name)
                for entry in entries
                if not entry.is_symlink()
            ]
    except OSError:
        return None


def process_everything(
    paths: Iterable[str],
    settings: Settings,
    algorithms: Sequence[HashAlgorithmInfo],
) -> ProcessedFileList:
    """Expand directories, read checksum files and compute relative paths."""
    pending = list(paths)
    result = ProcessedFileList()
    max_hash_size = max((algo.size for algo in algorithms), default=_DEFAULT_MAX_HASH_SIZE)
    absolute_sums: list[tuple[str, bytes]] = []

    if len(pending) == 1:
        sumfile_path = pending[0]
        base = sumfile_path[: len(sumfile_path) - len(os.path.basename(sumfile_path))]
        # With a single selected item the base path is its containing directory.
        result.base_path = base

        sums = _read_sums(sumfile_path, max_hash_size)
        if any(name for name, _ in sums):
            result.sumfile_type = UNKNOWN_SUMFILE
            extension = os.path.splitext(sumfile_path)[1]
            if extension.startswith("."):
                extension = extension[1:]
                for index, algo in enumerate(algorithms):
                    if extension in algo.extensions:
                        result.sumfile_type = index

            # A nameless entry means nothing when the checksum file is the selection.
            absolute_sums = [(base + name, digest) for name, digest in sums if name]

            if not settings.hash_sumfile_too:
                pending.pop(0)
    elif pending:
        pending.sort()
        first, last = pending[0], pending[-1]
        common = os.path.commonprefix([first, last])
        slash = common.rfind(os.sep)
        result.base_path = common[:slash] if slash != -1 else common

    if result.base_path:
        result.base_path = _with_trailing_sep(normalize_path(_with_trailing_sep(result.base_path)))

    for path, digest in absolute_sums:
        normalized = normalize_path(path)
        existing = result.files.get(normalized)
        if existing is not None:
            existing.expected_hashes.append(digest)
        else:
            result.files[normalized] = FileInfo(
                relative_path=_relative_to(normalized, result.base_path),
                expected_hashes=[digest],
            )

    queue = deque(pending)
    while queue:
        normalized = normalize_path(queue.popleft())

        if os.path.isdir(normalized):
            children = _list_directory(normalized)
            if children is not None:
                queue.extend(children)
                continue
            # An unlistable directory is treated as a file so that an error shows up.

        info = FileInfo(relative_path=_relative_to(normalized, result.base_path))

        # Never look for neighbouring checksum files while processing one.
        if result.sumfile_type == NOT_SUMFILE and settings.look_for_sumfiles:
            for algo in algorithms:
                enabled = settings.algorithms.get(algo.name)
                if not enabled:
                    continue
                for extension in algo.extensions:
                    sums = _read_sums(f"{normalized}.{extension}", max_hash_size)
                    info.expected_hashes.extend(digest for _, digest in sums)

        result.files.setdefault(normalized, info)

    return result