"""
Printer state model.

Tracks the configuration a printer accumulates from stateful commands
(font magnification and the ESC/GS style toggles) so that every command a
session emits reflects what the printer actually has set.

Module: posprint/model/state.py
"""

import logging
from dataclasses import dataclass, fields
from typing import Final, Union

from ..errors import FontSizeError, PrinterStateError

logger: Final = logging.getLogger(__name__)

# Font magnification limits (GS !)
MIN_FONT_SCALE: Final[int] = 1
MAX_FONT_SCALE: Final[int] = 8

TOGGLE_FIELDS: Final[tuple[str, ...]] = (
    "underline",
    "emphasize",
    "upsidedown",
    "rotate",
    "reverse",
    "smooth",
)

Toggle = Union[int, bool]


def validate_toggle(name: str, value: Toggle) -> int:
    """
    Normalize a style toggle to 0 or 1.

    Raises:
        PrinterStateError: For anything other than 0, 1, False or True.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int) and value in (0, 1):
        return value
    raise PrinterStateError(f"{name} must be 0 or 1, got {value!r}")


def validate_font_size(width: int, height: int) -> None:
    """
    Raises:
        FontSizeError: If either magnification is outside 1..8.
    """
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, int):
            raise FontSizeError(width, height)
        if not (MIN_FONT_SCALE <= value <= MAX_FONT_SCALE):
            raise FontSizeError(width, height)


@dataclass(slots=True)
class PrinterState:
    """
    Mutable configuration record of one printer session.

    Attributes:
        font_width: Horizontal magnification, 1..8.
        font_height: Vertical magnification, 1..8.
        underline: ESC - toggle.
        emphasize: ESC G toggle.
        upsidedown: ESC { toggle.
        rotate: ESC V toggle.
        reverse: GS B toggle (white on black).
        smooth: GS b toggle.

    Setters validate before mutating: a rejected value leaves the record
    untouched.
    """

    font_width: int = 1
    font_height: int = 1
    underline: int = 0
    emphasize: int = 0
    upsidedown: int = 0
    rotate: int = 0
    reverse: int = 0
    smooth: int = 0

    def __post_init__(self) -> None:
        validate_font_size(self.font_width, self.font_height)
        for name in TOGGLE_FIELDS:
            setattr(self, name, validate_toggle(name, getattr(self, name)))

    def reset(self) -> None:
        """Restore defaults: 1x1 font, every toggle off."""
        for f in fields(self):
            setattr(self, f.name, f.default)

    def set_font_size(self, width: int, height: int) -> None:
        validate_font_size(width, height)
        self.font_width, self.font_height = width, height

    def set_toggle(self, name: str, value: Toggle) -> int:
        if name not in TOGGLE_FIELDS:
            raise PrinterStateError(f"Unknown style toggle: {name!r}")
        normalized = validate_toggle(name, value)
        setattr(self, name, normalized)
        return normalized

    @property
    def font_size_byte(self) -> int:
        """GS ! parameter: width in the high nibble, height in the low one."""
        return ((self.font_width - 1) << 4) | (self.font_height - 1)

    @property
    def is_default(self) -> bool:
        return self == PrinterState()
