"""
model/enums.py

Parameter families of the ESC/POS encoder: alignment, language, font face,
barcode symbology, raster transfer mode and transport type.

Each protocol-facing enum carries the one-byte code sent to the printer.
String and integer input is coerced with ``parse``: unknown values fall
back to the documented default and are logged, never raised, so a bad
formatting hint does not abort a print job.

NO command byte assembly here, see posprint/escpos/commands.
"""

from __future__ import annotations

import logging
from enum import Enum, IntEnum
from typing import Final, Union

_logger: Final[logging.Logger] = logging.getLogger(__name__)

__all__ = [
    "Alignment",
    "Language",
    "Font",
    "BarcodeSymbology",
    "RasterMode",
    "ConnectionType",
    "DEFAULT_ALIGNMENT",
    "DEFAULT_LANGUAGE",
    "DEFAULT_FONT",
    "DEFAULT_SYMBOLOGY",
    "DEFAULT_RASTER_MODE",
    "BARCODE_LENGTH_PREFIX_THRESHOLD",
]


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @property
    def code(self) -> int:
        return {Alignment.LEFT: 0, Alignment.CENTER: 1, Alignment.RIGHT: 2}[self]

    @classmethod
    def parse(cls, value: Union[str, "Alignment"]) -> "Alignment":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            _logger.warning("Invalid alignment: %r, defaulting to %s", value, DEFAULT_ALIGNMENT.value)
            return DEFAULT_ALIGNMENT


class Language(str, Enum):
    """International character sets selectable with ESC R."""

    EN = "en"
    FR = "fr"
    DE = "de"
    UK = "uk"
    DA = "da"
    SV = "sv"
    IT = "it"
    ES = "es"
    JA = "ja"
    NO = "no"

    @property
    def code(self) -> int:
        return list(Language).index(self)

    @classmethod
    def parse(cls, value: Union[str, "Language"]) -> "Language":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            _logger.warning("Invalid language: %r, defaulting to %s", value, DEFAULT_LANGUAGE.value)
            return DEFAULT_LANGUAGE


class Font(str, Enum):
    A = "A"
    B = "B"
    C = "C"

    @property
    def code(self) -> int:
        return {Font.A: 0, Font.B: 1, Font.C: 2}[self]

    @classmethod
    def parse(cls, value: Union[str, "Font"]) -> "Font":
        """
        Accept ``"A"``, ``"b"`` or the node form ``"font_a"``.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        if text.lower().startswith("font_"):
            text = text[5:6]
        try:
            return cls(text.upper())
        except ValueError:
            _logger.warning("Invalid font: %r, defaulting to %s", value, DEFAULT_FONT.value)
            return DEFAULT_FONT


class BarcodeSymbology(IntEnum):
    """
    GS k symbology codes.

    Codes 0-6 are the NUL-terminated function A family, 65-73 the function B
    family. Codes above BARCODE_LENGTH_PREFIX_THRESHOLD carry a length byte.
    """

    UPC_A = 0
    UPC_E = 1
    EAN13 = 2
    EAN8 = 3
    CODE39 = 4
    ITF = 5
    CODABAR = 6
    UPC_A_B = 65
    UPC_E_B = 66
    EAN13_B = 67
    EAN8_B = 68
    CODE39_B = 69
    ITF_B = 70
    CODABAR_B = 71
    CODE93 = 72
    CODE128 = 73

    @property
    def length_prefixed(self) -> bool:
        return self.value > BARCODE_LENGTH_PREFIX_THRESHOLD

    @classmethod
    def parse(cls, value: Union[int, str, "BarcodeSymbology"]) -> "BarcodeSymbology":
        if isinstance(value, cls):
            return value
        try:
            if isinstance(value, str) and not value.strip().isdigit():
                return cls[value.strip().upper()]
            return cls(int(value))
        except (KeyError, ValueError):
            _logger.warning(
                "Invalid barcode symbology: %r, defaulting to %s", value, DEFAULT_SYMBOLOGY.name
            )
            return DEFAULT_SYMBOLOGY


class RasterMode(str, Enum):
    BIT_IMAGE = "bit_image"  # GS v 0, single shot
    GRAPHICS = "graphics"  # GS 8 L, chunked through the print buffer


class ConnectionType(str, Enum):
    USB = "usb"
    NETWORK = "network"


# === DEFAULTS ===
DEFAULT_ALIGNMENT: Final[Alignment] = Alignment.LEFT
DEFAULT_LANGUAGE: Final[Language] = Language.EN
DEFAULT_FONT: Final[Font] = Font.A
DEFAULT_SYMBOLOGY: Final[BarcodeSymbology] = BarcodeSymbology.CODE128
DEFAULT_RASTER_MODE: Final[RasterMode] = RasterMode.GRAPHICS

BARCODE_LENGTH_PREFIX_THRESHOLD: Final[int] = 69
