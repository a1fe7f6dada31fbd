"""
Session, paper feed and cutter commands for ESC/POS printers.

Reference: Epson ESC/POS Application Programming Guide,
           ESC @ / LF / ESC d / GS V
"""

from typing import Final

from ..integers import int_low_high

__all__ = [
    "ESC_INIT_PRINTER",
    "END_SESSION",
    "LF",
    "ESC_FEED_LINES",
    "GS_CUT",
    "feed_lines",
]

# =============================================================================
# SESSION
# =============================================================================

ESC_INIT_PRINTER: Final[bytes] = b"\x1b@"
"""
Initialize printer.

Command: ESC @
Hex: 1B 40
Effect: Clears the print buffer and restores every mode to its power-on
        default (font size, styles, justification, character set).
"""

END_SESSION: Final[bytes] = b"\xfa"
"""
End-of-session marker.

Hex: FA
Note: Not an ESC/POS command; some spoolers use it as a job terminator and
      printers without support ignore it.
"""

# =============================================================================
# FEED
# =============================================================================

LF: Final[bytes] = b"\n"
"""
Print buffered data and feed one line.

Command: LF
Hex: 0A
"""

ESC_FEED_LINES: Final[bytes] = b"\x1bd"
"""
Print buffered data and feed n lines.

Command: ESC d n
Hex: 1B 64 n
Range: 0 <= n <= 255
"""

# =============================================================================
# CUTTER
# =============================================================================

GS_CUT: Final[bytes] = b"\x1dVA0"
"""
Feed to the cutting position and cut.

Command: GS V m n (function B)
Hex: 1D 56 41 30
m: 65 = feed paper by n dots then full cut, n = 48
"""


def feed_lines(count: int) -> bytes:
    """
    Build ESC d n.

    Raises:
        IntegerRangeError: If ``count`` is outside 0..255.

    Example:
        >>> feed_lines(3)
        b'\\x1bd\\x03'
    """
    return ESC_FEED_LINES + int_low_high(count, 1)
