"""Ledger — raw бухгалтерия балансов, allowance и total supply.

Fee-движок читает и пишет raw-значения через этот модуль; сам ledger
ничего не знает о затухании.
"""

from .raw_ledger import RawLedger

__all__ = [
    "RawLedger",
]
