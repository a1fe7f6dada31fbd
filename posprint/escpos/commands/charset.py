"""
International character set selection for ESC/POS printers.

Reference: Epson ESC/POS Application Programming Guide, ESC R

Character sets:
    en = 0 (U.S.A.)     fr = 1 (France)     de = 2 (Germany)
    uk = 3 (U.K.)       da = 4 (Denmark I)  sv = 5 (Sweden)
    it = 6 (Italy)      es = 7 (Spain I)    ja = 8 (Japan)
    no = 9 (Norway)
"""

from typing import Final, Union

from ...model.enums import Language

__all__ = [
    "ESC_INTERNATIONAL_CHARSET",
    "select_international_charset",
]

ESC_INTERNATIONAL_CHARSET: Final[bytes] = b"\x1bR"
"""
Select an international character set.

Command: ESC R n
Hex: 1B 52 n
Effect: Replaces a handful of ASCII positions (#, $, @, [, \\, ], ^, `, {, |, }, ~)
        with national characters.
"""


def select_international_charset(language: Union[Language, str]) -> bytes:
    """Build ESC R n; unknown languages fall back to U.S.A."""
    return ESC_INTERNATIONAL_CHARSET + bytes([Language.parse(language).code])
