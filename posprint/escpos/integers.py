"""
Little-endian integer fields used by ESC/POS lengths and dimensions.
"""

import logging
from typing import Final

from ..errors import IntegerRangeError

__all__ = ["int_low_high", "max_value"]

logger: Final = logging.getLogger(__name__)

MIN_BYTES: Final[int] = 1
MAX_BYTES: Final[int] = 4


def max_value(byte_count: int) -> int:
    """Largest value representable in ``byte_count`` bytes."""
    return 256**byte_count - 1


def int_low_high(value: int, byte_count: int) -> bytes:
    """
    Encode ``value`` as ``byte_count`` bytes, least significant first.

    Args:
        value: Non-negative integer.
        byte_count: Field width, 1 to 4 bytes.

    Returns:
        Exactly ``byte_count`` bytes.

    Raises:
        IntegerRangeError: If ``byte_count`` is outside 1..4 or ``value``
            does not fit. No truncated encoding is produced.

    Example:
        >>> int_low_high(300, 2)
        b',\\x01'
    """
    if isinstance(byte_count, bool) or not isinstance(byte_count, int):
        raise IntegerRangeError(f"byte_count must be an int, got {type(byte_count).__name__}")
    if not (MIN_BYTES <= byte_count <= MAX_BYTES):
        logger.error("Can only output %d-%d bytes, got %d", MIN_BYTES, MAX_BYTES, byte_count)
        raise IntegerRangeError(
            f"byte_count must be {MIN_BYTES}-{MAX_BYTES}, got {byte_count}"
        )

    if isinstance(value, bool) or not isinstance(value, int):
        raise IntegerRangeError(f"value must be an int, got {type(value).__name__}")
    limit = max_value(byte_count)
    if not (0 <= value <= limit):
        logger.error("Number %d out of range: %d byte(s) hold 0..%d", value, byte_count, limit)
        raise IntegerRangeError(
            f"Value {value} out of range 0..{limit} for {byte_count} byte(s)"
        )

    return value.to_bytes(byte_count, "little")
