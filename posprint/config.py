"""
Per-session printer configuration.

Rendering and raster settings travel with each Printer instead of living in
module-level globals, so two sessions never influence each other.
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Final, Mapping, Optional, Union

from .errors import ValidationError
from .model.enums import DEFAULT_RASTER_MODE, RasterMode

__all__ = ["PrinterConfig"]

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PrinterConfig:
    """
    Settings of one printer session.

    Attributes:
        encoding: Codec for plain text written with ``write_string``.
        font_file: TrueType font used by the text renderer (None = Pillow default).
        dpi: Resolution the font size is scaled with.
        font_size: Text size in points.
        spacing: Line spacing multiplier for multi-line text.
        white_on_black: Render text white on a black background.
        image_height: Height of the text canvas in dots.
        canvas_width: Width of the text canvas in dots.
        max_width: Images wider than this are scaled down.
        threshold: Luminance cut-off (0..1); darker pixels print black.
        raster_mode: Default transfer mode for images.
    """

    encoding: str = "cp437"
    font_file: Optional[str] = None
    dpi: float = 50.0
    font_size: float = 30.0
    spacing: float = 1.5
    white_on_black: bool = True
    image_height: int = 38
    canvas_width: int = 760
    max_width: int = 512
    threshold: float = 0.5
    raster_mode: RasterMode = DEFAULT_RASTER_MODE

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValidationError(f"Unknown text encoding: {self.encoding!r}") from e
        if self.dpi <= 0 or self.font_size <= 0:
            raise ValidationError("dpi and font_size must be positive")
        if self.spacing < 1:
            raise ValidationError(f"spacing must be >= 1, got {self.spacing}")
        if self.image_height <= 0 or self.canvas_width <= 0 or self.max_width <= 0:
            raise ValidationError("Canvas and image widths/heights must be positive")
        if not (0.0 <= self.threshold <= 1.0):
            raise ValidationError(f"threshold must be within 0..1, got {self.threshold}")
        try:
            object.__setattr__(self, "raster_mode", RasterMode(self.raster_mode))
        except ValueError as e:
            raise ValidationError(f"Unknown raster mode: {self.raster_mode!r}") from e

    @property
    def font_pixels(self) -> int:
        """Font size in dots at the configured resolution."""
        return max(1, round(self.font_size * self.dpi / 72.0))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "PrinterConfig":
        """
        Build a config from a mapping such as the result of ``load_config``.

        Keys that are not config fields are ignored.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            logger.debug("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in mapping.items() if k in known})

    @classmethod
    def from_file(cls, path: Optional[Union[str, Path]] = None) -> "PrinterConfig":
        from . import load_config

        return cls.from_mapping(load_config(Path(path) if path is not None else None))

    def with_changes(self, **changes: Any) -> "PrinterConfig":
        return replace(self, **changes)
