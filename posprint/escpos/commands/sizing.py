"""
Character size command for ESC/POS printers.

Reference: Epson ESC/POS Application Programming Guide, GS !
"""

from typing import Final

from ...model.state import validate_font_size

__all__ = [
    "GS_CHARACTER_SIZE",
    "select_character_size",
]

GS_CHARACTER_SIZE: Final[bytes] = b"\x1d!"
"""
Select character size.

Command: GS ! n
Hex: 1D 21 n
n: bits 4-7 = width magnification - 1, bits 0-3 = height magnification - 1
Range: 1..8 in each direction (n = 0x00 .. 0x77)

Example:
    >>> # Double width, triple height
    >>> printer.write(select_character_size(2, 3))  # 1D 21 12
"""


def select_character_size(width: int, height: int) -> bytes:
    """
    Build GS ! with both magnifications packed into one byte.

    Args:
        width: Horizontal magnification, 1..8.
        height: Vertical magnification, 1..8.

    Returns:
        ``1D 21 ((width-1) << 4 | (height-1))``

    Raises:
        FontSizeError: If either value is outside 1..8.
    """
    validate_font_size(width, height)
    return GS_CHARACTER_SIZE + bytes([((width - 1) << 4) | (height - 1)])
