"""Application services orchestrating the ledger replay workflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from payments_engine.domain.errors import RoutingError
from payments_engine.domain.registry import AccountRegistry
from payments_engine.domain.repositories import EventSource
from payments_engine.domain.results import Rejection, ReplayReport, ReplaySummary

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LedgerReplayContext:
    event_source: EventSource
    registry: AccountRegistry = field(default_factory=AccountRegistry)


class ReplayLedgerUseCase:
    """Folds the event stream into the registry, one event at a time.

    Rejected events are collected and the run continues; errors raised by the
    event source itself abort the run.
    """

    def __init__(self, context: LedgerReplayContext) -> None:
        self._context = context

    def execute(self) -> ReplayReport:
        registry = self._context.registry
        rejections: list[Rejection] = []
        total = 0

        for event in self._context.event_source.iter_events():
            total += 1
            try:
                registry.route(event)
            except RoutingError as exc:
                logger.debug("Rejected event #%d: %s", total, exc.message)
                rejections.append(Rejection(event=event, error=exc))

        snapshots = registry.snapshots()
        summary = ReplaySummary(
            total_events=total,
            applied=total - len(rejections),
            rejected=len(rejections),
            accounts=len(snapshots),
            locked_accounts=sum(1 for snapshot in snapshots if snapshot.locked),
        )
        logger.info(
            "Replayed %d events into %d accounts (%d rejected, %d locked)",
            summary.total_events,
            summary.accounts,
            summary.rejected,
            summary.locked_accounts,
        )
        return ReplayReport(summary=summary, snapshots=tuple(snapshots), rejections=tuple(rejections))
