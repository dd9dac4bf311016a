"""Checked decimal arithmetic for account balances.

Every add/subtract is exact; anything that would round or leave the
fixed-point range raises ``DecimalOverflowError`` instead.
"""
from __future__ import annotations

from decimal import Context, Decimal, DecimalException

from payments_engine.config import SETTINGS

from .errors import DecimalOverflowError

ZERO = Decimal("0")

# Totals are reported, never stored; rounding is not trapped here.
_TOTAL_CONTEXT = Context(prec=64, traps=[])


def _checked(result: Decimal) -> Decimal:
    if result.copy_abs() > SETTINGS.max_amount:
        raise DecimalOverflowError()
    return result


def checked_add(left: Decimal, right: Decimal) -> Decimal:
    try:
        result = SETTINGS.decimal_context.add(left, right)
    except DecimalException as exc:
        raise DecimalOverflowError() from exc
    return _checked(result)


def checked_sub(left: Decimal, right: Decimal) -> Decimal:
    try:
        result = SETTINGS.decimal_context.subtract(left, right)
    except DecimalException as exc:
        raise DecimalOverflowError() from exc
    return _checked(result)


def balance_total(available: Decimal, held: Decimal) -> Decimal:
    """Exact ``available + held`` for reporting; not range-checked."""
    return _TOTAL_CONTEXT.add(available, held)
