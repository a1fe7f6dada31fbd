"""
Unit tests for posprint/escpos/printer.py.

The sink is an in-memory buffer; every assertion is on the exact bytes a
session emits.
"""

import io
import logging
import threading
from typing import List

import pytest
from PIL import Image

from posprint import Printer, PrinterConfig
from posprint.errors import FontSizeError, PrinterStateError, ValidationError
from posprint.imaging import RasterImage
from posprint.model.enums import Alignment, BarcodeSymbology

REFRESH_DEFAULTS = (
    b"\x1b-\x00"
    b"\x1bG\x00"
    b"\x1b{\x00"
    b"\x1bV\x00"
    b"\x1dB\x00"
    b"\x1db\x00"
    b"\x1d!\x00"
)


class FailingSink:
    def write(self, data: bytes) -> int:
        raise BrokenPipeError("printer went away")


class ShortWriteSink:
    """Accepts at most ``limit`` bytes per call, like a raw device file."""

    def __init__(self, limit: int = 4) -> None:
        self.limit = limit
        self.received = bytearray()

    def write(self, data: bytes) -> int:
        accepted = bytes(data[: self.limit])
        self.received += accepted
        return len(accepted)


class StalledSink:
    def write(self, data: bytes) -> int:
        return 0


class ListSink:
    """Sink that records every write call separately and returns None."""

    def __init__(self) -> None:
        self.writes: List[bytes] = []

    def write(self, data: bytes) -> None:
        self.writes.append(bytes(data))


class TestConstruction:
    def test_requires_writable_sink(self) -> None:
        with pytest.raises(ValidationError):
            Printer(object())  # type: ignore[arg-type]

    def test_defaults(self, printer: Printer) -> None:
        assert printer.state.is_default
        assert printer.config == PrinterConfig()

    def test_sessions_are_independent(self) -> None:
        first, second = Printer(io.BytesIO()), Printer(io.BytesIO())
        first.set_underline(1)
        assert second.state.underline == 0


class TestFixedCommands:
    def test_init_resets_and_sends_esc_at(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.state.set_font_size(4, 4)
        printer.init()
        assert printer.state.is_default
        assert sink.getvalue() == b"\x1b@"

    def test_reset_writes_nothing(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.set_emphasize(1)
        sink.seek(0)
        sink.truncate()
        printer.reset()
        assert sink.getvalue() == b""
        assert printer.state.emphasize == 0

    @pytest.mark.parametrize(
        "method, expected",
        [
            ("end", b"\xfa"),
            ("cut", b"\x1dVA0"),
            ("cash", b"\x1bp\x00\x0a\xff"),
            ("pulse", b"\x1bp\x02"),
            ("linefeed", b"\n"),
            ("formfeed", b"\x1bd\x01"),
        ],
    )
    def test_fixed_frames(
        self, printer: Printer, sink: io.BytesIO, method: str, expected: bytes
    ) -> None:
        getattr(printer, method)()
        assert sink.getvalue() == expected

    def test_moves(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.move_x(300)
        printer.move_y(5)
        assert sink.getvalue() == b"\x1b$\x2c\x01\x1d$\x05\x00"

    def test_selections(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.set_align("center")
        printer.set_lang("de")
        printer.set_font("B")
        assert sink.getvalue() == b"\x1ba\x01\x1bR\x02\x1bM\x01"


class TestFontSize:
    def test_set_font_size(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.set_font_size(2, 3)
        assert sink.getvalue() == b"\x1d!\x12"
        assert (printer.state.font_width, printer.state.font_height) == (2, 3)

    @pytest.mark.parametrize("width, height", [(9, 1), (0, 2), (3, 9), (2, -1)])
    def test_rejected_size_leaves_state_and_sink(
        self,
        printer: Printer,
        sink: io.BytesIO,
        caplog: pytest.LogCaptureFixture,
        width: int,
        height: int,
    ) -> None:
        printer.set_font_size(4, 5)
        before = sink.getvalue()

        with caplog.at_level(logging.WARNING):
            with pytest.raises(FontSizeError):
                printer.set_font_size(width, height)

        assert (printer.state.font_width, printer.state.font_height) == (4, 5)
        assert sink.getvalue() == before
        assert "Invalid font size" in caplog.text

    def test_reset_then_size_then_refresh(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.reset()
        printer.set_font_size(2, 3)
        sink.seek(0)
        sink.truncate()

        printer.full_state_refresh()

        assert sink.getvalue().endswith(b"\x1d!\x12")


class TestToggles:
    @pytest.mark.parametrize(
        "name, prefix",
        [
            ("underline", b"\x1b-"),
            ("emphasize", b"\x1bG"),
            ("upsidedown", b"\x1b{"),
            ("rotate", b"\x1bV"),
            ("reverse", b"\x1dB"),
            ("smooth", b"\x1db"),
        ],
    )
    def test_set_and_send(
        self, printer: Printer, sink: io.BytesIO, name: str, prefix: bytes
    ) -> None:
        getattr(printer, f"set_{name}")(1)
        getattr(printer, f"send_{name}")()
        assert sink.getvalue() == prefix + b"\x01" + prefix + b"\x01"
        assert getattr(printer.state, name) == 1

    def test_set_is_idempotent_on_the_wire(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.set_underline(1)
        printer.set_underline(1)
        assert sink.getvalue() == b"\x1b-\x01" * 2

    def test_bool_accepted(self, printer: Printer) -> None:
        printer.set_reverse(True)
        assert printer.state.reverse == 1

    def test_invalid_toggle(self, printer: Printer, sink: io.BytesIO) -> None:
        with pytest.raises(PrinterStateError):
            printer.set_smooth(2)
        assert sink.getvalue() == b""
        assert printer.state.smooth == 0

    def test_full_state_refresh_order(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.full_state_refresh()
        assert sink.getvalue() == REFRESH_DEFAULTS


class TestComposite:
    def test_feed_without_arguments(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.set_emphasize(1)
        sink.seek(0)
        sink.truncate()

        printer.feed()

        assert sink.getvalue() == b"\n" + REFRESH_DEFAULTS
        assert printer.state.is_default

    def test_feed_lines_and_units(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.feed(lines=3, units=20)
        assert sink.getvalue() == b"\x1bd\x03" + b"\x1d$\x14\x00" + b"\n" + REFRESH_DEFAULTS

    def test_feed_and_cut(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.feed_and_cut()
        printer.feed_and_cut(feed=True)
        assert sink.getvalue() == b"\x1dVA0" + b"\x1bd\x01\x1dVA0"

    def test_barcode(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.set_font_size(2, 2)
        sink.seek(0)
        sink.truncate()

        printer.barcode("ABC", BarcodeSymbology.CODE128)

        assert sink.getvalue() == b"\x1ba\x01" + b"\x1dk\x49\x03ABC"
        assert printer.state.is_default

    def test_invalid_barcode_writes_nothing(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.set_underline(1)
        sink.seek(0)
        sink.truncate()

        with pytest.raises(ValidationError):
            printer.barcode("", BarcodeSymbology.CODE128)

        assert sink.getvalue() == b""
        assert printer.state.underline == 1


class TestWrite:
    def test_write_string_encodes_with_config(self, printer: Printer, sink: io.BytesIO) -> None:
        printer.write_string("Total: 5€\n")
        assert sink.getvalue() == b"Total: 5?\n"

    def test_write_string_custom_encoding(self, sink: io.BytesIO) -> None:
        printer = Printer(sink, config=PrinterConfig(encoding="cp1252"))
        printer.write_string("5€")
        assert sink.getvalue() == b"5\x80"

    def test_write_string_with_renderer(self) -> None:
        sink = ListSink()
        calls: List[str] = []

        def render(text: str) -> RasterImage:
            calls.append(text)
            return RasterImage(b"\xff\x00", 8, 2, 1)

        printer = Printer(sink, text_renderer=render)
        written = printer.write_string("hi")

        assert calls == ["hi"]
        assert sink.writes[1] == b"\xff\x00"
        assert sink.writes[2] == b"\x1d(L\x02\x000\x32"
        assert written == sum(len(w) for w in sink.writes)

    def test_short_writes_are_completed(self) -> None:
        sink = ShortWriteSink(limit=4)
        printer = Printer(sink)
        data = bytes(range(8)) * 8

        written = printer.raster(data, 64, 8, 8, "graphics")

        assert written == len(sink.received) == 17 + len(data) + 7
        assert sink.received[17 : 17 + len(data)] == data
        assert sink.received.endswith(b"\x1d(L\x02\x000\x32")

    def test_stalled_sink_raises(self) -> None:
        printer = Printer(StalledSink())
        with pytest.raises(OSError, match="no bytes"):
            printer.cut()

    def test_transaction_holds_the_lock(self, printer: Printer, sink: io.BytesIO) -> None:
        acquired = []

        def other() -> None:
            acquired.append(printer._lock.acquire(blocking=False))

        with printer.transaction() as session:
            assert session is printer
            session.linefeed()
            worker = threading.Thread(target=other)
            worker.start()
            worker.join()

        assert acquired == [False]
        assert sink.getvalue() == b"\n"

    def test_sink_errors_propagate(self) -> None:
        printer = Printer(FailingSink())
        with pytest.raises(BrokenPipeError):
            printer.cut()

    def test_context_manager_closes_sink(self, sink: io.BytesIO) -> None:
        with Printer(sink) as printer:
            printer.linefeed()
        assert sink.closed


class TestImages:
    def test_print_image_centers_and_prints(self, printer: Printer, sink: io.BytesIO) -> None:
        image = Image.new("L", (16, 4), color=0)

        printer.print_image(image, mode="bit_image")

        out = sink.getvalue()
        assert out.startswith(b"\x1ba\x01" + b"\x1dv0\x00\x02\x00\x04\x00")
        assert out.endswith(b"\xff" * 8)

    def test_print_image_from_file(self, printer: Printer, sink: io.BytesIO, tmp_path) -> None:
        path = tmp_path / "logo.png"
        Image.new("RGB", (8, 3), color=(255, 255, 255)).save(path)

        printer.print_image(path)

        assert b"\x1d8L" in sink.getvalue()
        assert sink.getvalue().endswith(b"\x00\x00\x00" + b"\x1d(L\x02\x000\x32")

    def test_text_to_raster(self, printer: Printer) -> None:
        image = printer.text_to_raster("Hi")
        assert image.width == printer.config.max_width
        assert len(image.data) == image.bytes_per_line * image.height


class TestConcurrency:
    def test_concurrent_rasters_do_not_interleave(self) -> None:
        sink = ListSink()
        printer = Printer(sink)
        first = bytes([0x11]) * 4000
        second = bytes([0x22]) * 4000

        threads = [
            threading.Thread(target=printer.raster, args=(first, 8, 4000, 1, "graphics")),
            threading.Thread(target=printer.raster, args=(second, 8, 4000, 1, "graphics")),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        payloads = [w for w in sink.writes if w and w[0] in (0x11, 0x22)]
        fills = [p[0] for p in payloads]
        assert fills in ([0x11] * 3 + [0x22] * 3, [0x22] * 3 + [0x11] * 3)
