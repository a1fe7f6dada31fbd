"""
Font face selection for ESC/POS printers.

Reference: Epson ESC/POS Application Programming Guide, ESC M
"""

from typing import Final, Union

from ...model.enums import Font

__all__ = [
    "ESC_SELECT_FONT",
    "select_font",
]

ESC_SELECT_FONT: Final[bytes] = b"\x1bM"
"""
Select character font.

Command: ESC M n
Hex: 1B 4D n
n: 0 = Font A (12x24), 1 = Font B (9x17), 2 = Font C (model dependent)
"""


def select_font(font: Union[Font, str]) -> bytes:
    """
    Build ESC M n.

    Unknown font names fall back to Font A (logged by ``Font.parse``).

    Example:
        >>> select_font(Font.B)
        b'\\x1bM\\x01'
    """
    return ESC_SELECT_FONT + bytes([Font.parse(font).code])
