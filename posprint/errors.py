"""
Exception hierarchy for posprint.

Every error raised by the encoder derives from ``PrinterError``; the
concrete classes also derive from ``ValueError`` so callers that only
care about bad input can catch that.

Transport failures are not wrapped: whatever the sink raises (usually
``OSError``) reaches the caller unchanged.
"""

__all__ = [
    "PrinterError",
    "ValidationError",
    "PrinterStateError",
    "FontSizeError",
    "IntegerRangeError",
    "RasterError",
]


class PrinterError(Exception):
    """Base class for encoder errors."""


class ValidationError(PrinterError, ValueError):
    """Malformed caller input (non-integer numeric parameter, bad payload)."""


class PrinterStateError(PrinterError, ValueError):
    """A state value outside what the printer protocol accepts."""


class FontSizeError(PrinterStateError):
    """Font magnification outside 1..8."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"Invalid font size {width}x{height}: both must be in 1..8")
        self.width = width
        self.height = height


class IntegerRangeError(PrinterError, ValueError):
    """Value or byte count not representable as a little-endian field."""


class RasterError(PrinterError, ValueError):
    """Pixel buffer that does not match its declared geometry."""
