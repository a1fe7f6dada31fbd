"""
Peripheral pulse commands (cash drawer kick-out).

Reference: Epson ESC/POS Application Programming Guide, ESC p
"""

from typing import Final

__all__ = [
    "ESC_PULSE",
    "ESC_CASH_DRAWER",
]

ESC_PULSE: Final[bytes] = b"\x1bp\x02"
"""
Generate a pulse on drawer connector pin 2.

Command: ESC p m
Hex: 1B 70 02
"""

ESC_CASH_DRAWER: Final[bytes] = b"\x1bp\x00\x0a\xff"
"""
Open the cash drawer.

Command: ESC p m t1 t2
Hex: 1B 70 00 0A FF
m: 0 = pin 2
t1: on time 10 × 2 ms
t2: off time 255 × 2 ms
"""
