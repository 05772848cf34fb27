import os

import pytest

from hashtab.paths import (
    FileInfo,
    HashAlgorithmInfo,
    ProcessedFileList,
    normalize_path,
    process_everything,
)
from hashtab.settings import Settings, SettingsStore

ALGORITHMS = [
    HashAlgorithmInfo("MD5", ("md5",), 16),
    HashAlgorithmInfo("SHA-1", ("sha1",), 20),
    HashAlgorithmInfo("SHA-256", ("sha256",), 32),
    HashAlgorithmInfo("CRC32", ("sfv",), 4),
]

DIGEST = bytes(range(32))
MD5_DIGEST = bytes(range(16, 32))


@pytest.fixture
def settings():
    return Settings(SettingsStore(), [algo.name for algo in ALGORITHMS])


def _write_sumfile(path, entries):
    path.write_text("".join(f"{digest.hex()}  {name}\n" for name, digest in entries))


def test_normalize_path_makes_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert normalize_path("x") == os.path.join(os.getcwd(), "x")


def test_normalize_path_collapses_components(tmp_path):
    raw = os.path.join(str(tmp_path), "a", ".", "b", "..", "c")
    assert normalize_path(raw) == os.path.join(str(tmp_path), "a", "c")


def test_single_sumfile_with_known_extension(tmp_path, settings):
    (tmp_path / "a.txt").write_text("content")
    sumfile = tmp_path / "sums.sha256"
    _write_sumfile(sumfile, [("a.txt", DIGEST)])

    result = process_everything([str(sumfile)], settings, ALGORITHMS)

    assert result.sumfile_type == 2
    assert result.base_path == str(tmp_path) + os.sep
    target = os.path.join(str(tmp_path), "a.txt")
    assert list(result.files) == [target]
    assert result.files[target] == FileInfo("a.txt", [DIGEST])


def test_sumfile_hashed_too_when_enabled(tmp_path, settings):
    sumfile = tmp_path / "sums.sha256"
    _write_sumfile(sumfile, [("a.txt", DIGEST)])
    settings.hash_sumfile_too.set(True)

    result = process_everything([str(sumfile)], settings, ALGORITHMS)

    assert str(sumfile) in result.files
    assert result.files[str(sumfile)].expected_hashes == []
    assert result.files[str(sumfile)].relative_path == "sums.sha256"


def test_sumfile_with_unknown_extension(tmp_path, settings):
    sumfile = tmp_path / "sums.txt"
    _write_sumfile(sumfile, [("a.txt", DIGEST)])

    result = process_everything([str(sumfile)], settings, ALGORITHMS)

    assert result.sumfile_type == -1


def test_duplicate_sumfile_entries_are_merged(tmp_path, settings):
    sumfile = tmp_path / "sums.md5"
    _write_sumfile(sumfile, [("a.txt", MD5_DIGEST), ("a.txt", DIGEST[:16])])

    result = process_everything([str(sumfile)], settings, ALGORITHMS)

    target = os.path.join(str(tmp_path), "a.txt")
    assert result.sumfile_type == 0
    assert result.files[target].expected_hashes == [MD5_DIGEST, DIGEST[:16]]


def test_plain_single_file(tmp_path, settings):
    plain = tmp_path / "plain.bin"
    plain.write_bytes(b"\x00\x01")

    result = process_everything([str(plain)], settings, ALGORITHMS)

    assert result.sumfile_type == -2
    assert result.files == {str(plain): FileInfo("plain.bin", [])}


def test_multiple_files_share_base(tmp_path, settings):
    sub = tmp_path / "sub"
    sub.mkdir()
    first = sub / "one.bin"
    second = sub / "two.bin"
    first.write_bytes(b"1")
    second.write_bytes(b"2")

    result = process_everything([str(second), str(first)], settings, ALGORITHMS)

    assert result.base_path == str(sub) + os.sep
    assert {info.relative_path for info in result.files.values()} == {"one.bin", "two.bin"}


def test_directory_is_expanded(tmp_path, settings):
    folder = tmp_path / "d"
    folder.mkdir()
    (folder / "x.bin").write_bytes(b"x")
    nested = folder / "n"
    nested.mkdir()
    (nested / "y.bin").write_bytes(b"y")

    result = process_everything([str(folder)], settings, ALGORITHMS)

    relative = sorted(info.relative_path for info in result.files.values())
    assert relative == sorted([os.path.join("d", "x.bin"), os.path.join("d", "n", "y.bin")])
    assert str(folder) not in result.files


def test_neighbouring_sumfile_is_used(tmp_path, settings):
    target = tmp_path / "a.bin"
    target.write_bytes(b"data")
    (tmp_path / "a.bin.md5").write_text(MD5_DIGEST.hex() + "\n")
    (tmp_path / "a.bin.sfv").write_text("a.bin 01020304\n")
    settings.look_for_sumfiles.set(True)

    result = process_everything([str(target)], settings, ALGORITHMS)

    # CRC32 is disabled by default, so the .sfv file is ignored.
    assert result.files[str(target)].expected_hashes == [MD5_DIGEST]


def test_neighbouring_sumfile_ignored_when_disabled(tmp_path, settings):
    target = tmp_path / "a.bin"
    target.write_bytes(b"data")
    (tmp_path / "a.bin.md5").write_text(MD5_DIGEST.hex() + "\n")

    result = process_everything([str(target)], settings, ALGORITHMS)

    assert result.files[str(target)].expected_hashes == []


def test_empty_selection():
    settings = Settings(SettingsStore(), [])
    assert process_everything([], settings, []) == ProcessedFileList()