"""CSV-backed event sources."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Iterator

from payments_engine.domain.models import InputEvent
from payments_engine.domain.repositories import EventSource
from payments_engine.infrastructure.parsing.transactions_csv import iter_transaction_events
from payments_engine.infrastructure.parsing.utils import ensure_bytes


class CsvEventSource(EventSource):
    def __init__(self, source: BytesIO | Path | bytes | str, chunk_size: int | None = None) -> None:
        self._source = ensure_bytes(source)
        self._chunk_size = chunk_size

    def iter_events(self) -> Iterator[InputEvent]:
        return iter_transaction_events(self._source, chunk_size=self._chunk_size)
