"""
ESC/POS command frames for thermal receipt printers.

Every function here is pure: it validates its arguments and returns the
exact bytes of one command. Nothing is written anywhere and no printer
state is tracked; the session in posprint/escpos/printer.py does that.

Module Structure:
    commands/
    ├── __init__.py             # This file (public API exports)
    ├── text_formatting.py      # Underline, emphasis, upside-down, rotate, reverse, smooth
    ├── sizing.py               # Character magnification (GS !)
    ├── fonts.py                # Font face (ESC M)
    ├── charset.py              # International character sets (ESC R)
    ├── positioning.py          # Justification, absolute X/Y
    ├── page_control.py         # Initialize, line feed, feed n, cut
    ├── hardware.py             # Drawer pulses
    ├── barcode.py              # GS k
    └── graphics.py             # GS v 0, GS 8 L, GS ( L

Usage:
    >>> from posprint.escpos.commands import underline, select_character_size
    >>> frame = underline(1) + select_character_size(2, 2)
    >>> sink.write(frame)
"""

from posprint.escpos.commands.barcode import GS_BARCODE, MAX_BARCODE_LENGTH, print_barcode
from posprint.escpos.commands.charset import (
    ESC_INTERNATIONAL_CHARSET,
    select_international_charset,
)
from posprint.escpos.commands.fonts import ESC_SELECT_FONT, select_font
from posprint.escpos.commands.graphics import (
    GRAPHICS_MAX_LINES,
    GRAPHICS_PARAMS_LENGTH,
    GRAPHICS_PRINT_BUFFER,
    GS_BIT_IMAGE,
    GS_GRAPHICS_STORE,
    bit_image_header,
    graphics_store_header,
)
from posprint.escpos.commands.hardware import ESC_CASH_DRAWER, ESC_PULSE
from posprint.escpos.commands.page_control import (
    END_SESSION,
    ESC_FEED_LINES,
    ESC_INIT_PRINTER,
    GS_CUT,
    LF,
    feed_lines,
)
from posprint.escpos.commands.positioning import (
    ESC_ABSOLUTE_X,
    ESC_JUSTIFICATION,
    GS_ABSOLUTE_Y,
    select_justification,
    set_absolute_x,
    set_absolute_y,
)
from posprint.escpos.commands.sizing import GS_CHARACTER_SIZE, select_character_size
from posprint.escpos.commands.text_formatting import (
    ESC_EMPHASIZE,
    ESC_ROTATE,
    ESC_UNDERLINE,
    ESC_UPSIDEDOWN,
    GS_REVERSE,
    GS_SMOOTH,
    emphasize,
    reverse,
    rotate,
    smooth,
    underline,
    upsidedown,
)

__all__ = [
    # Barcode
    "GS_BARCODE",
    "MAX_BARCODE_LENGTH",
    "print_barcode",
    # Character sets
    "ESC_INTERNATIONAL_CHARSET",
    "select_international_charset",
    # Fonts
    "ESC_SELECT_FONT",
    "select_font",
    # Graphics
    "GS_BIT_IMAGE",
    "GS_GRAPHICS_STORE",
    "GRAPHICS_PRINT_BUFFER",
    "GRAPHICS_PARAMS_LENGTH",
    "GRAPHICS_MAX_LINES",
    "bit_image_header",
    "graphics_store_header",
    # Hardware
    "ESC_PULSE",
    "ESC_CASH_DRAWER",
    # Page control
    "ESC_INIT_PRINTER",
    "END_SESSION",
    "LF",
    "ESC_FEED_LINES",
    "GS_CUT",
    "feed_lines",
    # Positioning
    "ESC_JUSTIFICATION",
    "ESC_ABSOLUTE_X",
    "GS_ABSOLUTE_Y",
    "select_justification",
    "set_absolute_x",
    "set_absolute_y",
    # Sizing
    "GS_CHARACTER_SIZE",
    "select_character_size",
    # Text formatting
    "ESC_UNDERLINE",
    "ESC_EMPHASIZE",
    "ESC_UPSIDEDOWN",
    "ESC_ROTATE",
    "GS_REVERSE",
    "GS_SMOOTH",
    "underline",
    "emphasize",
    "upsidedown",
    "rotate",
    "reverse",
    "smooth",
]
