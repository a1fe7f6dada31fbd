"""
Character style toggles for ESC/POS printers.

Each toggle is a three-byte command: a two-byte prefix followed by the
state byte (0 = off, 1 = on). The ESC family covers underline, emphasis,
upside-down and 90° rotation; the GS family covers reverse (white on
black) and smoothing.

Reference: Epson ESC/POS Application Programming Guide, "Print character"
Compatibility: TM-T20, TM-T88, TM-m30 and most ESC/POS clones
"""

from typing import Final

from ...model.state import validate_toggle

__all__ = [
    "ESC_UNDERLINE",
    "ESC_EMPHASIZE",
    "ESC_UPSIDEDOWN",
    "ESC_ROTATE",
    "GS_REVERSE",
    "GS_SMOOTH",
    "underline",
    "emphasize",
    "upsidedown",
    "rotate",
    "reverse",
    "smooth",
]

# =============================================================================
# ESC TOGGLES
# =============================================================================

ESC_UNDERLINE: Final[bytes] = b"\x1b-"
"""
Turn underline mode on/off.

Command: ESC - n
Hex: 1B 2D n
n: 0 = off, 1 = one-dot underline
"""

ESC_EMPHASIZE: Final[bytes] = b"\x1bG"
"""
Turn emphasized (double-strike) mode on/off.

Command: ESC G n
Hex: 1B 47 n
"""

ESC_UPSIDEDOWN: Final[bytes] = b"\x1b{"
"""
Turn upside-down printing on/off.

Command: ESC { n
Hex: 1B 7B n
Note: Only takes effect at the beginning of a line.
"""

ESC_ROTATE: Final[bytes] = b"\x1bV"
"""
Turn 90° clockwise rotation on/off.

Command: ESC V n
Hex: 1B 56 n
"""

# =============================================================================
# GS TOGGLES
# =============================================================================

GS_REVERSE: Final[bytes] = b"\x1dB"
"""
Turn white/black reverse printing on/off.

Command: GS B n
Hex: 1D 42 n
"""

GS_SMOOTH: Final[bytes] = b"\x1db"
"""
Turn smoothing of enlarged characters on/off.

Command: GS b n
Hex: 1D 62 n
"""


def _toggle(prefix: bytes, name: str, value: int) -> bytes:
    return prefix + bytes([validate_toggle(name, value)])


def underline(value: int) -> bytes:
    """
    Build ESC - n.

    Args:
        value: 0 or 1 (bool accepted).

    Raises:
        PrinterStateError: For any other value.

    Example:
        >>> underline(1)
        b'\\x1b-\\x01'
    """
    return _toggle(ESC_UNDERLINE, "underline", value)


def emphasize(value: int) -> bytes:
    """Build ESC G n."""
    return _toggle(ESC_EMPHASIZE, "emphasize", value)


def upsidedown(value: int) -> bytes:
    """Build ESC { n."""
    return _toggle(ESC_UPSIDEDOWN, "upsidedown", value)


def rotate(value: int) -> bytes:
    """Build ESC V n."""
    return _toggle(ESC_ROTATE, "rotate", value)


def reverse(value: int) -> bytes:
    """Build GS B n."""
    return _toggle(GS_REVERSE, "reverse", value)


def smooth(value: int) -> bytes:
    """Build GS b n."""
    return _toggle(GS_SMOOTH, "smooth", value)
