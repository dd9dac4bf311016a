"""Central configuration for the payments engine package."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal, Inexact, InvalidOperation, Overflow

# Largest magnitude representable by a 96-bit mantissa fixed-point decimal.
MAX_AMOUNT = Decimal("79228162514264337593543950335")
# Fractional digits the same fixed-point type can carry.
MAX_SCALE = 28

INPUT_COLUMNS = ("type", "client", "tx", "amount")
OUTPUT_COLUMNS = ("client", "available", "held", "total", "locked")


@dataclass(slots=True, frozen=True)
class Settings:
    decimal_context: Context
    max_amount: Decimal
    max_scale: int
    output_scale: int
    csv_chunk_size: int
    input_columns: tuple[str, ...]
    output_columns: tuple[str, ...]


SETTINGS = Settings(
    # Wide enough that any sum of two in-range amounts is exact; rounding is trapped.
    decimal_context=Context(prec=64, traps=[Inexact, InvalidOperation, Overflow]),
    max_amount=MAX_AMOUNT,
    max_scale=MAX_SCALE,
    output_scale=4,
    csv_chunk_size=10_000,
    input_columns=INPUT_COLUMNS,
    output_columns=OUTPUT_COLUMNS,
)
