"""
Raster image transfer.

Turns a packed monochrome buffer into protocol-legal command frames using
one of two modes:

    RasterMode.BIT_IMAGE  one GS v 0 command carrying the whole image
    RasterMode.GRAPHICS   the image is cut into bands of at most 1662 lines;
                          each band is stored with GS 8 L and printed with
                          GS ( L before the next one is sent

Band boundaries depend only on the line limit and the rows left, never on
the image width.
"""

import logging
from dataclasses import dataclass
from typing import Final, Iterator, List, Tuple

from ..errors import RasterError
from ..model.enums import RasterMode
from .commands.graphics import (
    GRAPHICS_MAX_LINES,
    GRAPHICS_PARAMS_LENGTH,
    GRAPHICS_PRINT_BUFFER,
    bit_image_header,
    graphics_store_header,
)
from .integers import max_value

__all__ = [
    "L_MAX",
    "MAX_CHUNK_PAYLOAD",
    "RasterChunk",
    "validate_raster",
    "plan_chunks",
    "iter_raster_frames",
    "encode_raster",
    "chunk_bounds",
]

logger: Final = logging.getLogger(__name__)

L_MAX: Final[int] = GRAPHICS_MAX_LINES
MAX_CHUNK_PAYLOAD: Final[int] = max_value(4)


@dataclass(frozen=True, slots=True)
class RasterChunk:
    """
    One GS 8 L band: rows ``[start_line, start_line + line_count)``.

    Attributes:
        start_line: First source row of the band.
        line_count: Number of rows, 1..L_MAX.
        bytes_per_line: Packed row stride of the source buffer.
        width: Image width in dots; the header declares the full stride.
    """

    start_line: int
    line_count: int
    bytes_per_line: int
    width: int

    def __post_init__(self) -> None:
        if not (1 <= self.line_count <= L_MAX):
            raise RasterError(f"Chunk line count must be 1..{L_MAX}, got {self.line_count}")
        if self.payload_length > MAX_CHUNK_PAYLOAD:
            raise RasterError(
                f"Chunk payload {self.payload_length} exceeds {MAX_CHUNK_PAYLOAD} bytes"
            )

    @property
    def end_line(self) -> int:
        return self.start_line + self.line_count

    @property
    def data_length(self) -> int:
        return self.line_count * self.bytes_per_line

    @property
    def payload_length(self) -> int:
        """p1..p4 of the header: fixed parameters plus raster bytes."""
        return GRAPHICS_PARAMS_LENGTH + self.data_length

    @property
    def declared_width(self) -> int:
        """Header width in dots; covers the whole stride so padding is part of the row."""
        return self.bytes_per_line * 8

    @property
    def header(self) -> bytes:
        return graphics_store_header(self.payload_length, self.declared_width, self.line_count)

    def slice(self, data: bytes) -> bytes:
        """Rows of this band out of the full image buffer."""
        start = self.start_line * self.bytes_per_line
        return data[start : start + self.data_length]


def validate_raster(data: bytes, width: int, height: int, bytes_per_line: int) -> None:
    """
    Check that ``data`` is exactly ``height`` rows of ``bytes_per_line`` bytes
    wide enough for ``width`` dots.

    Raises:
        RasterError: On any mismatch.
    """
    if width <= 0 or height <= 0:
        raise RasterError(f"Image dimensions must be positive, got {width}x{height}")
    min_stride = (width + 7) // 8
    if bytes_per_line < min_stride:
        raise RasterError(
            f"bytes_per_line {bytes_per_line} too small for {width} dots (need {min_stride})"
        )
    expected = bytes_per_line * height
    if len(data) != expected:
        raise RasterError(
            f"Pixel buffer is {len(data)} bytes, expected {expected} "
            f"({height} lines x {bytes_per_line} bytes)"
        )


def plan_chunks(height: int, bytes_per_line: int, width: int) -> List[RasterChunk]:
    """
    Partition ``height`` rows into GS 8 L bands.

    Returns:
        ``ceil(height / L_MAX)`` chunks in row order whose line counts sum to
        ``height``.

    Example:
        >>> [(c.start_line, c.line_count) for c in plan_chunks(2000, 64, 512)]
        [(0, 1662), (1662, 338)]
    """
    if height <= 0:
        raise RasterError(f"Image height must be positive, got {height}")

    chunks: List[RasterChunk] = []
    start = 0
    while start < height:
        lines = min(L_MAX, height - start)
        chunks.append(RasterChunk(start, lines, bytes_per_line, width))
        start += lines

    return chunks


def iter_raster_frames(
    data: bytes,
    width: int,
    height: int,
    bytes_per_line: int,
    mode: RasterMode = RasterMode.GRAPHICS,
) -> Iterator[bytes]:
    """
    Yield the frames that print the image, in write order.

    Bit-image mode yields one frame (header and payload together). Graphics
    mode yields header, rows and flush for every band.

    The buffer is validated before the first frame is produced.
    """
    validate_raster(data, width, height, bytes_per_line)
    mode = RasterMode(mode)

    if mode is RasterMode.BIT_IMAGE:
        yield bit_image_header(bytes_per_line, height) + bytes(data)
        return

    chunks = plan_chunks(height, bytes_per_line, width)
    # Headers are built up front so a field overflow surfaces before any write.
    headers = [chunk.header for chunk in chunks]
    logger.debug("Raster %dx%d split into %d band(s)", width, height, len(chunks))
    for chunk, header in zip(chunks, headers):
        yield header
        yield chunk.slice(data)
        yield GRAPHICS_PRINT_BUFFER


def encode_raster(
    data: bytes,
    width: int,
    height: int,
    bytes_per_line: int,
    mode: RasterMode = RasterMode.GRAPHICS,
) -> bytes:
    """Concatenation of ``iter_raster_frames``."""
    return b"".join(iter_raster_frames(data, width, height, bytes_per_line, mode))


def chunk_bounds(chunks: List[RasterChunk]) -> List[Tuple[int, int]]:
    """``(start, end)`` row ranges of a chunk plan."""
    return [(chunk.start_line, chunk.end_line) for chunk in chunks]
