"""
Barcode printing command for ESC/POS printers.

Reference: Epson ESC/POS Application Programming Guide, GS k
Compatibility: TM series and clones; function B codes (65-73) require
               firmware from the late 1990s onward.

Two framings exist for GS k:

    function A (m = 0..6):    GS k m d1 ... dk NUL
    function B (m = 65..73):  GS k m n d1 ... dn

The framing is chosen by comparing the symbology code with
BARCODE_LENGTH_PREFIX_THRESHOLD (69): only codes above it carry the length
byte. Codes 65-69 therefore still use the NUL-terminated form, which is
what the firmware families this encoder targets accept.
"""

import logging
from typing import Final, Union

from ...errors import ValidationError
from ...model.enums import BarcodeSymbology

__all__ = [
    "GS_BARCODE",
    "MAX_BARCODE_LENGTH",
    "print_barcode",
]

logger: Final = logging.getLogger(__name__)

GS_BARCODE: Final[bytes] = b"\x1dk"
"""
Print barcode.

Command: GS k m ...
Hex: 1D 6B m ...
"""

MAX_BARCODE_LENGTH: Final[int] = 255


def print_barcode(
    symbology: Union[BarcodeSymbology, int, str],
    data: str,
) -> bytes:
    """
    Build GS k for ``data``.

    Args:
        symbology: Symbology enum member, or a raw code / name that is
            coerced with ``BarcodeSymbology.parse`` (unknown values fall
            back to CODE128 and are logged).
        data: Barcode content, ASCII only.

    Returns:
        ``1D 6B m n data`` when m > 69, otherwise ``1D 6B m data 00``.

    Raises:
        ValidationError: If ``data`` is empty, not ASCII, longer than 255
            bytes, or contains NUL in the NUL-terminated framing.

    Example:
        >>> print_barcode(BarcodeSymbology.CODE128, "AB12")
        b'\\x1dkI\\x04AB12'
        >>> print_barcode(BarcodeSymbology.EAN13, "978014300723")
        b'\\x1dk\\x02978014300723\\x00'
    """
    kind = BarcodeSymbology.parse(symbology)

    if not data:
        raise ValidationError("Barcode data must be a non-empty string")

    try:
        payload = data.encode("ascii")
    except UnicodeEncodeError as e:
        raise ValidationError(
            f"Barcode data must be ASCII-encodable. "
            f"Invalid character: {e.object[e.start:e.end]!r}"
        ) from e

    if len(payload) > MAX_BARCODE_LENGTH:
        raise ValidationError(
            f"Barcode data too long: {len(payload)} bytes (max {MAX_BARCODE_LENGTH})"
        )

    cmd = GS_BARCODE + bytes([kind.value])
    if kind.length_prefixed:
        cmd += bytes([len(payload)]) + payload
    else:
        if b"\x00" in payload:
            raise ValidationError("NUL-terminated barcode data must not contain NUL")
        cmd += payload + b"\x00"

    logger.debug("Barcode %s: %d data bytes", kind.name, len(payload))
    return cmd
