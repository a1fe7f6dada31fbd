"""
Justification and absolute positioning for ESC/POS printers.

Reference: Epson ESC/POS Application Programming Guide, ESC a / ESC $ / GS $
Units: positions are in printer motion units (usually 1/180 or 1/203 inch)
"""

from typing import Final, Union

from ...model.enums import Alignment
from ..integers import int_low_high

__all__ = [
    "ESC_JUSTIFICATION",
    "ESC_ABSOLUTE_X",
    "GS_ABSOLUTE_Y",
    "MAX_POSITION",
    "select_justification",
    "set_absolute_x",
    "set_absolute_y",
]

MAX_POSITION: Final[int] = 0xFFFF

ESC_JUSTIFICATION: Final[bytes] = b"\x1ba"
"""
Select justification.

Command: ESC a n
Hex: 1B 61 n
n: 0 = left, 1 = centered, 2 = right
Scope: Applies to the whole line; only honoured at the start of a line.
"""

ESC_ABSOLUTE_X: Final[bytes] = b"\x1b$"
"""
Set absolute horizontal print position.

Command: ESC $ nL nH
Hex: 1B 24 nL nH
Position: (nL + nH × 256) motion units from the left margin
"""

GS_ABSOLUTE_Y: Final[bytes] = b"\x1d$"
"""
Set absolute vertical print position (page mode).

Command: GS $ nL nH
Hex: 1D 24 nL nH
"""


def select_justification(alignment: Union[Alignment, str]) -> bytes:
    """
    Build ESC a n. Unknown alignments fall back to left (logged).

    Example:
        >>> select_justification("center")
        b'\\x1ba\\x01'
    """
    return ESC_JUSTIFICATION + bytes([Alignment.parse(alignment).code])


def set_absolute_x(x: int) -> bytes:
    """
    Build ESC $ nL nH.

    Raises:
        IntegerRangeError: If ``x`` is outside 0..65535.
    """
    return ESC_ABSOLUTE_X + int_low_high(x, 2)


def set_absolute_y(y: int) -> bytes:
    """
    Build GS $ nL nH.

    Raises:
        IntegerRangeError: If ``y`` is outside 0..65535.
    """
    return GS_ABSOLUTE_Y + int_low_high(y, 2)
