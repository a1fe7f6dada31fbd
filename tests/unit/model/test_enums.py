"""Unit tests for posprint/model/enums.py."""

import logging

import pytest

from posprint.model.enums import (
    BARCODE_LENGTH_PREFIX_THRESHOLD,
    DEFAULT_SYMBOLOGY,
    Alignment,
    BarcodeSymbology,
    ConnectionType,
    Font,
    Language,
    RasterMode,
)


def test_alignment_codes() -> None:
    assert [a.code for a in Alignment] == [0, 1, 2]


def test_language_codes_follow_declaration_order() -> None:
    assert [lang.code for lang in Language] == list(range(10))
    assert Language.JA.code == 8


@pytest.mark.parametrize(
    "value, expected",
    [("CENTER", Alignment.CENTER), (" right ", Alignment.RIGHT), (Alignment.LEFT, Alignment.LEFT)],
)
def test_alignment_parse(value: str, expected: Alignment) -> None:
    assert Alignment.parse(value) is expected


def test_parse_fallbacks_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert Alignment.parse("justify") is Alignment.LEFT
        assert Language.parse("pl") is Language.EN
        assert Font.parse("font_q") is Font.A
    assert caplog.text.count("defaulting to") == 3


@pytest.mark.parametrize("value", ["font_b", "B", "b", Font.B])
def test_font_parse(value: str) -> None:
    assert Font.parse(value) is Font.B


def test_length_prefix_threshold() -> None:
    assert BARCODE_LENGTH_PREFIX_THRESHOLD == 69
    prefixed = {s for s in BarcodeSymbology if s.length_prefixed}
    assert prefixed == {
        BarcodeSymbology.ITF_B,
        BarcodeSymbology.CODABAR_B,
        BarcodeSymbology.CODE93,
        BarcodeSymbology.CODE128,
    }


@pytest.mark.parametrize(
    "value, expected",
    [
        (73, BarcodeSymbology.CODE128),
        ("2", BarcodeSymbology.EAN13),
        ("code39", BarcodeSymbology.CODE39),
        (BarcodeSymbology.UPC_E_B, BarcodeSymbology.UPC_E_B),
        (100, DEFAULT_SYMBOLOGY),
        ("qr", DEFAULT_SYMBOLOGY),
    ],
)
def test_symbology_parse(value: object, expected: BarcodeSymbology) -> None:
    assert BarcodeSymbology.parse(value) is expected  # type: ignore[arg-type]


def test_string_enums() -> None:
    assert RasterMode("graphics") is RasterMode.GRAPHICS
    assert ConnectionType("usb") is ConnectionType.USB
