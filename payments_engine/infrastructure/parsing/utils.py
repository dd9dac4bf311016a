"""Shared parsing utilities for transaction record ingestion."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path

import pandas as pd

from payments_engine.config import SETTINGS
from payments_engine.domain.models import EventType

MAX_CLIENT_ID = 0xFFFF
MAX_TRANSACTION_ID = 0xFFFFFFFF


class MalformedRecordError(ValueError):
    """A record could not be read; fatal to the whole run."""

    def __init__(self, row: int, message: str) -> None:
        self.row = row
        self.message = message
        super().__init__(f"row {row}: {message}")


def ensure_bytes(source: BytesIO | Path | bytes | str) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, str):
        source = Path(source)
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def _clean(value: object) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def parse_event_type(value: object, row: int) -> EventType:
    text = _clean(value).lower()
    try:
        return EventType(text)
    except ValueError:
        raise MalformedRecordError(row, f"unknown transaction type {text!r}") from None


def _parse_unsigned(value: object, row: int, column: str, upper: int) -> int:
    text = _clean(value)
    if not (text.isascii() and text.isdigit()):
        raise MalformedRecordError(row, f"{column} must be an unsigned integer, got {text!r}")
    number = int(text)
    if number > upper:
        raise MalformedRecordError(row, f"{column} {number} out of range 0..{upper}")
    return number


def parse_client_id(value: object, row: int) -> int:
    return _parse_unsigned(value, row, "client", MAX_CLIENT_ID)


def parse_transaction_id(value: object, row: int) -> int:
    return _parse_unsigned(value, row, "tx", MAX_TRANSACTION_ID)


def parse_amount(value: object, row: int) -> Decimal | None:
    text = _clean(value)
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise MalformedRecordError(row, f"amount is not a decimal number: {text!r}") from None
    if not amount.is_finite():
        raise MalformedRecordError(row, f"amount must be finite, got {text!r}")
    if amount.copy_abs() > SETTINGS.max_amount:
        raise MalformedRecordError(row, f"amount {text} exceeds the supported range")
    if -amount.as_tuple().exponent > SETTINGS.max_scale:
        raise MalformedRecordError(
            row, f"amount {text} has more than {SETTINGS.max_scale} fractional digits"
        )
    return amount
