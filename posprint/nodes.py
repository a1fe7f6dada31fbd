"""
Node dispatch: named string parameters to printer calls.

Print jobs described as nodes (``text``, ``feed``, ``cut``, ``pulse``,
``image``) carry their options as a flat ``{name: string}`` mapping. The
``*Params.from_mapping`` constructors parse those strings into typed values
up front, so a malformed number aborts the node before any byte is sent,
while an unknown alignment/language/font only degrades to its default.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Final, Mapping, Optional

from .errors import ValidationError
from .escpos.integers import int_low_high
from .escpos.printer import Printer
from .escpos.raster import validate_raster
from .model.enums import Alignment, Font, Language, RasterMode
from .model.state import validate_font_size

__all__ = [
    "TextParams",
    "FeedParams",
    "CutParams",
    "ImageParams",
    "unescape_text",
    "write_node",
]

logger: Final = logging.getLogger(__name__)

TRUE_VALUES: Final[frozenset[str]] = frozenset({"true", "1"})

# &amp; last so that "&amp;lt;" decodes to "&lt;" and not "<".
_ENTITIES: Final[tuple[tuple[str, str], ...]] = (
    ("&#9;", "\t"),
    ("&#x9;", "\t"),
    ("&#10;", "\n"),
    ("&#xA;", "\n"),
    ("&apos;", "'"),
    ("&quot;", '"'),
    ("&gt;", ">"),
    ("&lt;", "<"),
    ("&amp;", "&"),
)


def unescape_text(text: str) -> str:
    """Decode the XML entities allowed in text nodes."""
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def _flag(params: Mapping[str, str], name: str) -> bool:
    value = params.get(name)
    return value is not None and value.strip().lower() in TRUE_VALUES


def _int(params: Mapping[str, str], name: str, required: bool = False) -> Optional[int]:
    value = params.get(name)
    if value is None:
        if required:
            raise ValidationError(f"Missing required parameter {name!r}")
        return None
    try:
        return int(value.strip())
    except (ValueError, AttributeError) as e:
        raise ValidationError(f"Invalid {name} parameter: {value!r}") from e


@dataclass(frozen=True, slots=True)
class TextParams:
    align: Optional[Alignment] = None
    lang: Optional[Language] = None
    font: Optional[Font] = None
    smooth: bool = False
    emphasize: bool = False
    underline: bool = False
    reverse: bool = False
    rotate: bool = False
    double_width: bool = False
    double_height: bool = False
    width: Optional[int] = None
    height: Optional[int] = None
    x: Optional[int] = None
    y: Optional[int] = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, str]) -> "TextParams":
        """
        Raises:
            ValidationError: If width, height, x or y is not an integer.
        """
        return cls(
            align=Alignment.parse(params["align"]) if "align" in params else None,
            lang=Language.parse(params["lang"]) if "lang" in params else None,
            font=Font.parse(params["font"]) if "font" in params else None,
            smooth=_flag(params, "smooth"),
            emphasize=_flag(params, "em"),
            underline=_flag(params, "ul"),
            reverse=_flag(params, "reverse"),
            rotate=_flag(params, "rotate"),
            double_width=_flag(params, "dw"),
            double_height=_flag(params, "dh"),
            width=_int(params, "width"),
            height=_int(params, "height"),
            x=_int(params, "x"),
            y=_int(params, "y"),
        )

    def validate(self, current_width: int, current_height: int) -> None:
        """
        Check the font size and positions this node would end up with.

        Raises:
            FontSizeError: If the resulting magnification is outside 1..8.
            IntegerRangeError: If x or y does not fit in two bytes.
        """
        for position in (self.x, self.y):
            if position is not None:
                int_low_high(position, 2)

        width = current_width
        height = current_height
        if self.double_width:
            width = 2
        if self.double_height:
            height = 2
        if self.width is not None:
            width = self.width
        if self.height is not None:
            height = self.height
        validate_font_size(width, height)


@dataclass(frozen=True, slots=True)
class FeedParams:
    line: Optional[int] = None
    unit: Optional[int] = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, str]) -> "FeedParams":
        parsed = cls(line=_int(params, "line"), unit=_int(params, "unit"))
        if parsed.line is not None:
            int_low_high(parsed.line, 1)
        if parsed.unit is not None:
            int_low_high(parsed.unit, 2)
        return parsed


@dataclass(frozen=True, slots=True)
class CutParams:
    feed: bool = False

    @classmethod
    def from_mapping(cls, params: Mapping[str, str]) -> "CutParams":
        return cls(feed=params.get("type") == "feed")


@dataclass(frozen=True, slots=True)
class ImageParams:
    width: int
    height: int
    align: Optional[Alignment] = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, str]) -> "ImageParams":
        """
        Raises:
            ValidationError: If width or height is missing or not an integer.
        """
        width = _int(params, "width", required=True)
        height = _int(params, "height", required=True)
        return cls(
            width=width,
            height=height,
            align=Alignment.parse(params["align"]) if "align" in params else None,
        )


def write_text(printer: Printer, params: Mapping[str, str], data: str) -> None:
    parsed = TextParams.from_mapping(params)
    with printer.transaction():
        parsed.validate(printer.state.font_width, printer.state.font_height)
        if parsed.align is not None:
            printer.set_align(parsed.align)
        if parsed.lang is not None:
            printer.set_lang(parsed.lang)
        if parsed.smooth:
            printer.set_smooth(1)
        if parsed.emphasize:
            printer.set_emphasize(1)
        if parsed.underline:
            printer.set_underline(1)
        if parsed.reverse:
            printer.set_reverse(1)
        if parsed.rotate:
            printer.set_rotate(1)
        if parsed.font is not None:
            printer.set_font(parsed.font)
        if parsed.double_width:
            printer.set_font_size(2, printer.state.font_height)
        if parsed.double_height:
            printer.set_font_size(printer.state.font_width, 2)
        if parsed.width is not None:
            printer.set_font_size(parsed.width, printer.state.font_height)
        if parsed.height is not None:
            printer.set_font_size(printer.state.font_width, parsed.height)
        if parsed.x is not None:
            printer.move_x(parsed.x)
        if parsed.y is not None:
            printer.move_y(parsed.y)
        if data:
            printer.write_string(unescape_text(data))


def write_feed(printer: Printer, params: Mapping[str, str]) -> None:
    parsed = FeedParams.from_mapping(params)
    printer.feed(lines=parsed.line, units=parsed.unit)


def write_cut(printer: Printer, params: Mapping[str, str]) -> None:
    printer.feed_and_cut(feed=CutParams.from_mapping(params).feed)


def write_image(printer: Printer, params: Mapping[str, str], data: str) -> None:
    """
    Print a base64-encoded packed raster in graphics mode.

    Raises:
        ValidationError: For bad dimensions or undecodable data.
        RasterError: If the decoded buffer does not match the dimensions.
    """
    parsed = ImageParams.from_mapping(params)
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Image data is not valid base64: {e}") from e

    bytes_per_line = (parsed.width + 7) // 8
    validate_raster(raw, parsed.width, parsed.height, bytes_per_line)
    logger.info("Image len: %d w: %d h: %d", len(raw), parsed.width, parsed.height)

    with printer.transaction():
        if parsed.align is not None:
            printer.set_align(parsed.align)
        printer.raster(raw, parsed.width, parsed.height, bytes_per_line, RasterMode.GRAPHICS)


def write_node(
    printer: Printer,
    name: str,
    params: Optional[Mapping[str, str]] = None,
    data: str = "",
) -> None:
    """
    Route one node to the printer.

    Args:
        printer: Target session.
        name: ``text``, ``feed``, ``cut``, ``pulse`` or ``image``.
        params: String options of the node.
        data: Node body (text, or base64 raster for images).

    Raises:
        ValidationError: For malformed numeric parameters; nothing is written.

    Unknown node names are logged and skipped.
    """
    params = params or {}
    preview = ""
    if data:
        preview = f" => {data[:40]!r}{' ...' if len(data) > 40 else ''}"
    logger.debug("Write: %s => %s%s", name, dict(params), preview)

    if name == "text":
        write_text(printer, params, data)
    elif name == "feed":
        write_feed(printer, params)
    elif name == "cut":
        write_cut(printer, params)
    elif name == "pulse":
        printer.pulse()
    elif name == "image":
        write_image(printer, params, data)
    else:
        logger.warning("Unknown node %r ignored", name)
