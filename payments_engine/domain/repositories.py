"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Iterator, Protocol

from .models import InputEvent


class EventSource(Protocol):
    """Provides a finite, ordered stream of input events."""

    def iter_events(self) -> Iterator[InputEvent]:
        ...
