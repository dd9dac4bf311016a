"""CSV parser producing input events in file order."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Iterator

import pandas as pd

from payments_engine.config import SETTINGS
from payments_engine.domain.models import InputEvent
from payments_engine.infrastructure.parsing.utils import (
    MalformedRecordError,
    ensure_bytes,
    parse_amount,
    parse_client_id,
    parse_event_type,
    parse_transaction_id,
)

REQUIRED_COLUMNS = ("type", "client", "tx")
HEADER_ROW = 0


def read_transactions_raw(source: BytesIO, chunk_size: int | None = None) -> Iterator[pd.DataFrame]:
    """Yield raw string-typed chunks with normalized column names."""
    try:
        reader = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            skip_blank_lines=True,
            chunksize=chunk_size or SETTINGS.csv_chunk_size,
        )
    except pd.errors.EmptyDataError:
        return

    with reader:
        while True:
            try:
                chunk = next(reader)
            except (StopIteration, pd.errors.EmptyDataError):
                return
            except pd.errors.ParserError as exc:
                raise MalformedRecordError(HEADER_ROW, f"unreadable CSV: {exc}") from exc
            chunk.columns = [str(column).strip().lower() for column in chunk.columns]
            yield chunk


def read_transaction_columns(source: BytesIO) -> list[str] | None:
    """Return the normalized header names, or ``None`` for an empty file."""
    try:
        header = pd.read_csv(source, nrows=0, dtype=str, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        return None
    except pd.errors.ParserError as exc:
        raise MalformedRecordError(HEADER_ROW, f"unreadable CSV: {exc}") from exc
    return [str(column).strip().lower() for column in header.columns]


def _check_columns(columns: list[str]) -> None:
    missing = [column for column in REQUIRED_COLUMNS if column not in columns]
    if missing:
        raise MalformedRecordError(HEADER_ROW, f"missing required columns: {', '.join(missing)}")


def row_to_event(row: dict[str, object], row_number: int) -> InputEvent:
    return InputEvent(
        event_type=parse_event_type(row.get("type"), row_number),
        client_id=parse_client_id(row.get("client"), row_number),
        transaction_id=parse_transaction_id(row.get("tx"), row_number),
        amount=parse_amount(row.get("amount"), row_number),
    )


def iter_transaction_events(source: BytesIO | Path | bytes, chunk_size: int | None = None) -> Iterator[InputEvent]:
    raw_bytes = ensure_bytes(source)
    columns = read_transaction_columns(BytesIO(raw_bytes))
    if columns is None:
        return
    _check_columns(columns)

    row_number = HEADER_ROW
    for chunk in read_transactions_raw(BytesIO(raw_bytes), chunk_size=chunk_size):
        for row in chunk.to_dict("records"):
            row_number += 1
            yield row_to_event(row, row_number)
