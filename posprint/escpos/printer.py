"""
Stateful ESC/POS printer session.

A Printer wraps a writable byte sink, keeps the PrinterState the printer
has accumulated, and turns every operation into command frames from
posprint.escpos.commands. Input is validated before anything is written,
so a rejected call never leaves a partial command in the stream.

Thread-safety: one re-entrant lock per session serializes every operation;
sessions share nothing.

Example:
    >>> import io
    >>> sink = io.BytesIO()
    >>> p = Printer(sink)
    >>> p.init()
    >>> p.set_font_size(2, 3)
    >>> sink.getvalue()
    b'\\x1b@\\x1d!\\x12'
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType
from typing import Callable, Final, Iterator, Optional, Protocol, Type, Union, runtime_checkable

from PIL import Image

from ..config import PrinterConfig
from ..errors import PrinterStateError, ValidationError
from ..imaging import TextRenderer, image_to_raster, load_raster
from ..model.enums import Alignment, BarcodeSymbology, Font, Language, RasterMode
from ..model.state import PrinterState, Toggle
from . import commands as cmd
from .raster import iter_raster_frames

__all__ = ["Sink", "Printer", "TextRasterizer"]

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class Sink(Protocol):
    """Anything with ``write(bytes)``: files, BytesIO, SocketSink."""

    def write(self, data: bytes) -> Optional[int]: ...


TextRasterizer = Callable[[str], "RasterImageLike"]


class RasterImageLike(Protocol):
    data: bytes
    width: int
    height: int
    bytes_per_line: int


class Printer:
    """
    ESC/POS encoder bound to one sink.

    Args:
        sink: Destination of every command byte.
        config: Session settings; defaults to ``PrinterConfig()``.
        text_renderer: Optional callable turning text into a raster image.
            When set, ``write_string`` prints text as graphics instead of
            encoded characters (see ``posprint.imaging.TextRenderer``).

    Raises:
        ValidationError: If ``sink`` has no ``write`` method.
    """

    def __init__(
        self,
        sink: Sink,
        config: Optional[PrinterConfig] = None,
        text_renderer: Optional[TextRasterizer] = None,
    ) -> None:
        if sink is None or not callable(getattr(sink, "write", None)):
            raise ValidationError("Printer requires a sink with a write() method")
        self._sink = sink
        self.config = config or PrinterConfig()
        self.text_renderer = text_renderer
        self.state = PrinterState()
        self._lock = threading.RLock()

    # =========================================================================
    # RAW OUTPUT
    # =========================================================================

    def write(self, data: bytes) -> int:
        """
        Send raw bytes to the sink.

        Sinks that accept only part of a buffer (unbuffered device files)
        are called again with the remainder until everything is written.

        Returns:
            ``len(data)``.

        Raises:
            OSError: If the sink accepts no bytes at all.

        Exceptions raised by the sink propagate unchanged.
        """
        view = memoryview(data)
        with self._lock:
            while view:
                written = self._sink.write(view)
                if written is None:
                    break
                if written <= 0:
                    raise OSError(
                        f"Sink accepted no bytes, {len(view)} of {len(data)} left unwritten"
                    )
                view = view[written:]
        return len(data)

    @contextmanager
    def transaction(self) -> Iterator["Printer"]:
        """
        Hold the session lock across several calls.

        Example:
            >>> with printer.transaction():
            ...     printer.set_align("center")
            ...     printer.write_string("TOTAL\\n")
        """
        with self._lock:
            yield self

    def write_string(self, text: str) -> int:
        """
        Print ``text``.

        With a text renderer the text is rasterized and printed as an image,
        otherwise it is encoded with ``config.encoding`` (unmappable
        characters become ``?``).
        """
        with self._lock:
            if self.text_renderer is not None:
                image = self.text_renderer(text)
                return self.print_raster_image(image)
            return self.write(text.encode(self.config.encoding, errors="replace"))

    def flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if callable(flush):
            with self._lock:
                flush()

    def close(self) -> None:
        """Flush and close the sink if it supports it."""
        with self._lock:
            self.flush()
            close = getattr(self._sink, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "Printer":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    # =========================================================================
    # SESSION
    # =========================================================================

    def reset(self) -> None:
        """Restore the recorded state to defaults. Writes nothing."""
        with self._lock:
            self.state.reset()

    def init(self) -> None:
        """Reset state and send ESC @."""
        with self._lock:
            self.reset()
            self.write(cmd.ESC_INIT_PRINTER)

    def end(self) -> None:
        self.write(cmd.END_SESSION)

    # =========================================================================
    # FIXED COMMANDS
    # =========================================================================

    def cut(self) -> None:
        self.write(cmd.GS_CUT)

    def cash(self) -> None:
        """Kick the cash drawer open."""
        self.write(cmd.ESC_CASH_DRAWER)

    def pulse(self) -> None:
        self.write(cmd.ESC_PULSE)

    def linefeed(self) -> None:
        self.write(cmd.LF)

    def formfeed_n(self, count: int) -> None:
        self.write(cmd.feed_lines(count))

    def formfeed(self) -> None:
        self.formfeed_n(1)

    def move_x(self, x: int) -> None:
        self.write(cmd.set_absolute_x(x))

    def move_y(self, y: int) -> None:
        self.write(cmd.set_absolute_y(y))

    # =========================================================================
    # STATELESS SELECTIONS
    # =========================================================================

    def set_align(self, alignment: Union[Alignment, str]) -> None:
        self.write(cmd.select_justification(alignment))

    def set_lang(self, language: Union[Language, str]) -> None:
        self.write(cmd.select_international_charset(language))

    def set_font(self, font: Union[Font, str]) -> None:
        self.write(cmd.select_font(font))

    # =========================================================================
    # STATEFUL STYLES
    # =========================================================================

    def send_font_size(self) -> None:
        with self._lock:
            self.write(cmd.select_character_size(self.state.font_width, self.state.font_height))

    def set_font_size(self, width: int, height: int) -> None:
        """
        Set character magnification and send GS !.

        Raises:
            FontSizeError: If either value is outside 1..8; the state is
                left unchanged and nothing is written.
        """
        with self._lock:
            try:
                self.state.set_font_size(width, height)
            except PrinterStateError:
                logger.warning("Invalid font size passed: %r x %r", width, height)
                raise
            self.send_font_size()

    def _set_toggle(self, name: str, value: Toggle) -> None:
        with self._lock:
            try:
                self.state.set_toggle(name, value)
            except PrinterStateError:
                logger.warning("Invalid %s value passed: %r", name, value)
                raise
            self._send_toggle(name)

    def _send_toggle(self, name: str) -> None:
        frame = _TOGGLE_FRAMES[name]
        with self._lock:
            self.write(frame(getattr(self.state, name)))

    def set_underline(self, value: Toggle) -> None:
        self._set_toggle("underline", value)

    def set_emphasize(self, value: Toggle) -> None:
        self._set_toggle("emphasize", value)

    def set_upsidedown(self, value: Toggle) -> None:
        self._set_toggle("upsidedown", value)

    def set_rotate(self, value: Toggle) -> None:
        self._set_toggle("rotate", value)

    def set_reverse(self, value: Toggle) -> None:
        self._set_toggle("reverse", value)

    def set_smooth(self, value: Toggle) -> None:
        self._set_toggle("smooth", value)

    def send_underline(self) -> None:
        self._send_toggle("underline")

    def send_emphasize(self) -> None:
        self._send_toggle("emphasize")

    def send_upsidedown(self) -> None:
        self._send_toggle("upsidedown")

    def send_rotate(self) -> None:
        self._send_toggle("rotate")

    def send_reverse(self) -> None:
        self._send_toggle("reverse")

    def send_smooth(self) -> None:
        self._send_toggle("smooth")

    def full_state_refresh(self) -> None:
        """
        Re-send every stateful command from the recorded state.

        Some printers treat a feed as a soft reset; this makes the device
        match the session again.
        """
        with self._lock:
            for name in _TOGGLE_FRAMES:
                self._send_toggle(name)
            self.send_font_size()

    # =========================================================================
    # COMPOSITE OPERATIONS
    # =========================================================================

    def feed(self, lines: Optional[int] = None, units: Optional[int] = None) -> None:
        """
        Feed paper, then return the printer to default styles.

        Args:
            lines: Feed this many lines first (ESC d n).
            units: Then move to this vertical position (GS $).
        """
        with self._lock:
            if lines is not None:
                self.formfeed_n(lines)
            if units is not None:
                self.move_y(units)
            self.linefeed()
            self.reset()
            self.full_state_refresh()

    def feed_and_cut(self, feed: bool = False) -> None:
        with self._lock:
            if feed:
                self.formfeed()
            self.cut()

    def barcode(self, data: str, symbology: Union[BarcodeSymbology, int, str]) -> None:
        """
        Reset styles, center, and print a barcode.

        Raises:
            ValidationError: For empty, non-ASCII or oversized data.
        """
        frame = cmd.print_barcode(symbology, data)
        with self._lock:
            self.reset()
            self.set_align(Alignment.CENTER)
            self.write(frame)

    # =========================================================================
    # RASTER
    # =========================================================================

    def raster(
        self,
        data: bytes,
        width: int,
        height: int,
        bytes_per_line: int,
        mode: Optional[Union[RasterMode, str]] = None,
    ) -> int:
        """
        Print a packed monochrome image.

        Args:
            data: ``height`` rows of ``bytes_per_line`` bytes, MSB leftmost.
            width: Image width in dots.
            height: Image height in dots.
            bytes_per_line: Row stride, at least ``ceil(width / 8)``.
            mode: BIT_IMAGE or GRAPHICS; defaults to ``config.raster_mode``.

        Returns:
            Bytes written.

        Raises:
            RasterError: If the buffer does not match its geometry; nothing
                is written in that case.
        """
        mode = _resolve_mode(mode, self.config.raster_mode)
        frames = iter_raster_frames(data, width, height, bytes_per_line, mode)
        with self._lock:
            first = next(frames)
            total = self.write(first)
            for frame in frames:
                total += self.write(frame)
        logger.debug("Printed %dx%d raster (%s), %d bytes", width, height, mode.value, total)
        return total

    def print_raster_image(
        self, image: RasterImageLike, mode: Optional[Union[RasterMode, str]] = None
    ) -> int:
        return self.raster(image.data, image.width, image.height, image.bytes_per_line, mode)

    def print_image(
        self,
        source: Union[str, Path, Image.Image],
        mode: Optional[Union[RasterMode, str]] = None,
    ) -> int:
        """
        Decode, scale and threshold an image with Pillow, then print it centered.

        Raises:
            OSError: If the file cannot be opened or decoded.
        """
        cfg = self.config
        if isinstance(source, Image.Image):
            image = image_to_raster(source, max_width=cfg.max_width, threshold=cfg.threshold)
        else:
            image = load_raster(source, max_width=cfg.max_width, threshold=cfg.threshold)
        with self._lock:
            self.set_align(Alignment.CENTER)
            return self.print_raster_image(image, mode)

    def text_to_raster(
        self,
        text: str,
        font_size: Optional[float] = None,
        white_on_black: Optional[bool] = None,
    ) -> RasterImageLike:
        """Render ``text`` with this session's configuration without printing it."""
        return TextRenderer(self.config).to_raster(
            text, font_size=font_size, white_on_black=white_on_black
        )


# Refresh order of full_state_refresh.
_TOGGLE_FRAMES: Final[dict[str, Callable[[int], bytes]]] = {
    "underline": cmd.underline,
    "emphasize": cmd.emphasize,
    "upsidedown": cmd.upsidedown,
    "rotate": cmd.rotate,
    "reverse": cmd.reverse,
    "smooth": cmd.smooth,
}


def _resolve_mode(
    mode: Optional[Union[RasterMode, str]], default: RasterMode
) -> RasterMode:
    if mode is None:
        return default
    try:
        return RasterMode(mode)
    except ValueError as e:
        raise ValidationError(f"Unknown raster mode: {mode!r}") from e
