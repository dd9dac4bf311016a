"""Domain-level results of a ledger replay."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .errors import EventRejectedError, RoutingError
from .models import AccountSnapshot, InputEvent


@dataclass(frozen=True)
class Rejection:
    event: InputEvent
    error: RoutingError

    @property
    def code(self) -> str:
        if isinstance(self.error, EventRejectedError):
            return self.error.cause.code
        return self.error.code

    @property
    def message(self) -> str:
        if isinstance(self.error, EventRejectedError):
            return self.error.cause.message
        return self.error.message


@dataclass(frozen=True)
class ReplaySummary:
    total_events: int
    applied: int
    rejected: int
    accounts: int
    locked_accounts: int


@dataclass(frozen=True)
class ReplayReport:
    summary: ReplaySummary
    snapshots: Sequence[AccountSnapshot] = field(default_factory=tuple)
    rejections: Sequence[Rejection] = field(default_factory=tuple)

    def has_rejections(self) -> bool:
        return bool(self.rejections)

    def iter_locked(self) -> Iterable[AccountSnapshot]:
        return (snapshot for snapshot in self.snapshots if snapshot.locked)
