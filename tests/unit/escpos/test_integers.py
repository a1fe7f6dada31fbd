"""Unit tests for posprint/escpos/integers.py."""

import pytest

from posprint.errors import IntegerRangeError
from posprint.escpos.integers import int_low_high, max_value


@pytest.mark.parametrize("byte_count", [1, 2, 3, 4])
def test_zero_encodes_to_zero_bytes(byte_count: int) -> None:
    assert int_low_high(0, byte_count) == b"\x00" * byte_count


@pytest.mark.parametrize(
    "value, byte_count, expected",
    [
        (300, 2, b"\x2c\x01"),
        (255, 1, b"\xff"),
        (0x548A, 4, b"\x8a\x54\x00\x00"),
        (65535, 2, b"\xff\xff"),
        (0x01020304, 4, b"\x04\x03\x02\x01"),
    ],
)
def test_little_endian_encoding(value: int, byte_count: int, expected: bytes) -> None:
    assert int_low_high(value, byte_count) == expected


@pytest.mark.parametrize("byte_count", [1, 2, 3, 4])
def test_largest_value_fits(byte_count: int) -> None:
    encoded = int_low_high(max_value(byte_count), byte_count)
    assert encoded == b"\xff" * byte_count


@pytest.mark.parametrize("byte_count", [0, 5, -1])
def test_byte_count_out_of_range(byte_count: int) -> None:
    with pytest.raises(IntegerRangeError):
        int_low_high(1, byte_count)


@pytest.mark.parametrize("value, byte_count", [(256, 1), (65536, 2), (-1, 2), (2**32, 4)])
def test_value_out_of_range_is_rejected(value: int, byte_count: int) -> None:
    with pytest.raises(IntegerRangeError, match="out of range"):
        int_low_high(value, byte_count)


def test_non_integer_value_rejected() -> None:
    with pytest.raises(IntegerRangeError):
        int_low_high(1.5, 2)  # type: ignore[arg-type]
    with pytest.raises(IntegerRangeError):
        int_low_high(True, 1)


def test_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        int_low_high(70000, 2)
