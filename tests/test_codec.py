import base64

import pytest

from hashtab.codec import (
    decode_base64,
    encode_base64,
    find_hash_in_string,
    floor_icon_size,
    hash_bytes_to_string,
    hash_string_to_bytes,
    hex_digit,
    unhex,
)

RFC_VECTORS = [
    (b"", ""),
    (b"f", "Zg=="),
    (b"fo", "Zm8="),
    (b"foo", "Zm9v"),
    (b"foob", "Zm9vYg=="),
    (b"fooba", "Zm9vYmE="),
    (b"foobar", "Zm9vYmFy"),
]


@pytest.mark.parametrize("raw,encoded", RFC_VECTORS)
def test_encode_rfc_vectors(raw, encoded):
    assert encode_base64(raw) == encoded


@pytest.mark.parametrize("raw,encoded", RFC_VECTORS)
def test_decode_rfc_vectors(raw, encoded):
    assert decode_base64(encoded) == raw


@pytest.mark.parametrize("length", range(0, 40))
def test_round_trip_padded_and_unpadded(length):
    data = bytes((i * 37 + 11) & 0xFF for i in range(length))
    encoded = encode_base64(data)
    assert encoded == base64.b64encode(data).decode()
    assert decode_base64(encoded) == data
    assert decode_base64(encoded.rstrip("=")) == data


def test_decode_accepts_url_safe_alphabet():
    data = bytes(range(256))
    standard = encode_base64(data)
    urlsafe = base64.urlsafe_b64encode(data).decode()
    assert urlsafe != standard
    assert decode_base64(urlsafe) == data


def test_decode_accepts_bytes_input():
    assert decode_base64(b"Zm9vYmFy") == b"foobar"


def test_hex_digit():
    assert hex_digit(0) == "0"
    assert hex_digit(9) == "9"
    assert hex_digit(10) == "A"
    assert hex_digit(15, False) == "f"


@pytest.mark.parametrize("n", range(16))
def test_unhex_inverts_hex_digit(n):
    assert unhex(hex_digit(n, True)) == n
    assert unhex(hex_digit(n, False)) == n


@pytest.mark.parametrize("ch", ["g", "G", " ", "\u00e9", "\uff11"])
def test_unhex_rejects(ch):
    assert unhex(ch) is None


def test_hash_bytes_to_string_case():
    data = bytes.fromhex("deadbeef00")
    assert hash_bytes_to_string(data) == "DEADBEEF00"
    assert hash_bytes_to_string(data, False) == "deadbeef00"


def test_hash_string_round_trip():
    data = bytes(range(256))
    assert hash_string_to_bytes(hash_bytes_to_string(data)) == data
    assert hash_string_to_bytes(hash_bytes_to_string(data, False)) == data


def test_hash_string_with_spaces():
    assert hash_string_to_bytes("de ad  be ef") == bytes.fromhex("deadbeef")


def test_hash_string_odd_trailing_digit_ignored():
    assert hash_string_to_bytes("abc") == bytes.fromhex("ab")


def test_find_hash_lowercase():
    assert find_hash_in_string("sum: deadbeef file") == bytes.fromhex("deadbeef")


def test_find_hash_uppercase_spaced():
    assert find_hash_in_string("value DE AD BE EF 01.") == bytes.fromhex("deadbeef01")


def test_find_hash_mixed_case_rejected():
    assert find_hash_in_string("DeadBeef") == b""


def test_find_hash_too_short():
    assert find_hash_in_string("deadbe") == b""


def test_find_hash_run_not_ending_on_boundary_rejected():
    assert find_hash_in_string("ab cd ef 01 23g") == b""


def test_find_hash_picks_first():
    text = "first 00112233 then 44556677"
    assert find_hash_in_string(text) == bytes.fromhex("00112233")


@pytest.mark.parametrize(
    "size,expected",
    [(1000, 256), (256, 256), (200, 192), (100, 96), (47, 40), (16, 16), (10, 10)],
)
def test_floor_icon_size(size, expected):
    assert floor_icon_size(size) == expected