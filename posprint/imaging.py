"""
Pillow adapters: images and rendered text to packed raster data.

The encoder core only understands packed monochrome buffers; this module
produces them from anything Pillow can open and from text drawn with a
TrueType font.

Packing: one bit per dot, MSB = leftmost dot, bit set = black, every row
padded to a whole byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from .config import PrinterConfig
from .errors import RasterError, ValidationError

__all__ = [
    "RasterImage",
    "image_to_raster",
    "load_raster",
    "TextRenderer",
]

logger: Final = logging.getLogger(__name__)

TEXT_MARGIN: Final[int] = 10


@dataclass(frozen=True, slots=True)
class RasterImage:
    """Packed monochrome buffer with its geometry."""

    data: bytes
    width: int
    height: int
    bytes_per_line: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise RasterError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if len(self.data) != self.bytes_per_line * self.height:
            raise RasterError(
                f"Raster buffer is {len(self.data)} bytes, expected "
                f"{self.bytes_per_line * self.height}"
            )


def image_to_raster(
    image: Image.Image,
    max_width: int = 512,
    threshold: float = 0.5,
) -> RasterImage:
    """
    Convert a Pillow image to a packed raster.

    Args:
        image: Any Pillow image; transparency is flattened onto white.
        max_width: Wider images are scaled down keeping the aspect ratio.
        threshold: Luminance cut-off in 0..1; pixels darker than it print.

    Returns:
        RasterImage ready for ``Printer.print_raster_image``.
    """
    if not (0.0 <= threshold <= 1.0):
        raise ValidationError(f"threshold must be within 0..1, got {threshold}")

    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        image = Image.alpha_composite(background, rgba)

    gray = image.convert("L")

    if gray.width > max_width:
        ratio = max_width / gray.width
        new_height = max(1, int(gray.height * ratio))
        gray = gray.resize((max_width, new_height), Image.LANCZOS)

    cutoff = threshold * 255
    # Mode "1" packs rows MSB first; dark pixels map to set bits.
    mono = gray.point(lambda v: 255 if v < cutoff else 0, mode="1")

    width, height = mono.size
    bytes_per_line = (width + 7) // 8
    return RasterImage(mono.tobytes(), width, height, bytes_per_line)


def load_raster(
    path: Union[str, Path],
    max_width: int = 512,
    threshold: float = 0.5,
) -> RasterImage:
    """
    Open an image file (PNG, JPEG, GIF, ...) and convert it.

    Raises:
        OSError: If the file cannot be read or decoded.
    """
    with Image.open(path) as img:
        logger.info("Loaded image %s, format: %s, size: %sx%s", path, img.format, *img.size)
        img.load()
        return image_to_raster(img, max_width=max_width, threshold=threshold)


class TextRenderer:
    """
    Draws text onto a fixed-size canvas with Pillow.

    Canvas size, colors, font and spacing come from the session's
    PrinterConfig.
    """

    def __init__(self, config: Optional[PrinterConfig] = None) -> None:
        self.config = config or PrinterConfig()
        self._fonts: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}

    def _font(self, pixels: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
        if pixels not in self._fonts:
            if self.config.font_file:
                self._fonts[pixels] = ImageFont.truetype(self.config.font_file, pixels)
            else:
                self._fonts[pixels] = ImageFont.load_default(size=pixels)
        return self._fonts[pixels]

    def render(
        self,
        text: str,
        font_size: Optional[float] = None,
        white_on_black: Optional[bool] = None,
    ) -> Image.Image:
        """
        Render ``text`` and return a grayscale canvas.

        Args:
            text: Text to draw; newlines start new lines.
            font_size: Points, overrides the configured size.
            white_on_black: Overrides the configured colors.
        """
        cfg = self.config
        size = cfg.font_size if font_size is None else font_size
        if size <= 0:
            raise ValidationError(f"font_size must be positive, got {size}")
        inverted = cfg.white_on_black if white_on_black is None else white_on_black
        fg, bg = (255, 0) if inverted else (0, 255)

        pixels = max(1, round(size * cfg.dpi / 72.0))
        font = self._font(pixels)

        canvas = Image.new("L", (cfg.canvas_width, cfg.image_height), color=bg)
        draw = ImageDraw.Draw(canvas)
        draw.multiline_text(
            (TEXT_MARGIN, TEXT_MARGIN),
            text,
            fill=fg,
            font=font,
            spacing=int(pixels * (cfg.spacing - 1)),
        )
        return canvas

    def to_raster(
        self,
        text: str,
        font_size: Optional[float] = None,
        white_on_black: Optional[bool] = None,
    ) -> RasterImage:
        """Render ``text`` and pack it with the configured width and threshold."""
        canvas = self.render(text, font_size=font_size, white_on_black=white_on_black)
        return image_to_raster(canvas, max_width=self.config.max_width, threshold=self.config.threshold)

    __call__ = to_raster
