"""
Raster graphics commands for ESC/POS printers.

Reference: Epson ESC/POS Application Programming Guide,
           GS v 0 (print raster bit image),
           GS 8 L fn 112 (store raster graphics in the print buffer),
           GS ( L fn 50 (print the buffered graphics)

Raster data layout (both commands):
    - one bit per dot, 1 = black
    - MSB of each byte is the leftmost dot
    - rows are padded to a whole number of bytes and sent top to bottom

This module builds the fixed command frames only; splitting an image into
buffer-sized pieces lives in posprint/escpos/raster.py.
"""

from typing import Final

from ..integers import int_low_high

__all__ = [
    "GS_BIT_IMAGE",
    "GS_GRAPHICS_STORE",
    "GRAPHICS_PRINT_BUFFER",
    "GRAPHICS_PARAMS_LENGTH",
    "GRAPHICS_MAX_LINES",
    "bit_image_header",
    "graphics_store_header",
]

# =============================================================================
# BIT-IMAGE (SINGLE SHOT)
# =============================================================================

GS_BIT_IMAGE: Final[bytes] = b"\x1dv0"
"""
Print raster bit image.

Command: GS v 0 m xL xH yL yH d1...dk
Hex: 1D 76 30 m xL xH yL yH ...
m: 0 = normal density
x: bytes per line, y: number of lines
Limit: the whole image travels in one command, so only images the printer
       can buffer at once print correctly.
"""

BIT_IMAGE_NORMAL_DENSITY: Final[int] = 0

# =============================================================================
# GRAPHICS BUFFER (CHUNKED)
# =============================================================================

GS_GRAPHICS_STORE: Final[bytes] = b"\x1d8L"
"""
Store graphics data in the print buffer (extended length form).

Command: GS 8 L p1 p2 p3 p4 m fn a bx by c xL xH yL yH d1...dk
Hex: 1D 38 4C p1..p4 30 70 30 01 01 31 xL xH yL yH ...
p1..p4: parameter length = 10 + data length (little-endian, 4 bytes)
m fn a: 0x30 0x70 0x30 -- function 112, monochrome raster
bx by: 1, 1 -- no zoom
c: 0x31 -- first color
x: width in dots, y: height in dots
"""

GRAPHICS_FUNCTION_112: Final[bytes] = b"\x30\x70\x30"
GRAPHICS_ZOOM_1X1: Final[bytes] = b"\x01\x01"
GRAPHICS_COLOR_1: Final[bytes] = b"\x31"

GRAPHICS_PARAMS_LENGTH: Final[int] = 10
"""Bytes counted by p1..p4 before the raster data (m fn a bx by c xL xH yL yH)."""

GRAPHICS_MAX_LINES: Final[int] = 1662
"""Tallest band the print buffer holds, independent of image width."""

GRAPHICS_PRINT_BUFFER: Final[bytes] = b"\x1d(L\x02\x00\x30\x32"
"""
Print the graphics data in the print buffer.

Command: GS ( L pL pH m fn
Hex: 1D 28 4C 02 00 30 32
Effect: Prints the stored band and moves to the left side of the print area.
"""


def bit_image_header(bytes_per_line: int, height: int) -> bytes:
    """
    Build the GS v 0 header for a ``bytes_per_line`` × ``height`` image.

    Raises:
        IntegerRangeError: If either dimension exceeds 65535.
    """
    return (
        GS_BIT_IMAGE
        + bytes([BIT_IMAGE_NORMAL_DENSITY])
        + int_low_high(bytes_per_line, 2)
        + int_low_high(height, 2)
    )


def graphics_store_header(payload_length: int, width: int, lines: int) -> bytes:
    """
    Build the 17-byte GS 8 L header of one band.

    Args:
        payload_length: 10 + raster bytes in the band.
        width: Band width in dots.
        lines: Band height in dots.

    Raises:
        IntegerRangeError: If ``payload_length`` exceeds 4 bytes or
            ``width``/``lines`` exceed 2 bytes.

    Example:
        >>> graphics_store_header(10 + 64 * 338, 512, 338).hex(" ")
        '1d 38 4c 8a 54 00 00 30 70 30 01 01 31 00 02 52 01'
    """
    return (
        GS_GRAPHICS_STORE
        + int_low_high(payload_length, 4)
        + GRAPHICS_FUNCTION_112
        + GRAPHICS_ZOOM_1X1
        + GRAPHICS_COLOR_1
        + int_low_high(width, 2)
        + int_low_high(lines, 2)
    )
