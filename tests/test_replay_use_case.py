from decimal import Decimal
from typing import Iterator, Sequence

import pytest

from payments_engine.application.use_cases import LedgerReplayContext, ReplayLedgerUseCase
from payments_engine.domain.models import EventType, InputEvent
from payments_engine.infrastructure.parsing.utils import MalformedRecordError
from payments_engine.infrastructure.repositories.csv_repositories import CsvEventSource


class ListEventSource:
    def __init__(self, events: Sequence[InputEvent]) -> None:
        self._events = list(events)

    def iter_events(self) -> Iterator[InputEvent]:
        yield from self._events


class FailingEventSource:
    def iter_events(self) -> Iterator[InputEvent]:
        yield InputEvent(EventType.DEPOSIT, 1, 1, Decimal("1"))
        raise MalformedRecordError(2, "broken row")


def test_rejections_do_not_stop_the_run():
    events = [
        InputEvent(EventType.DEPOSIT, 1, 1, Decimal("1.0")),
        InputEvent(EventType.WITHDRAWAL, 1, 2, Decimal("1.5")),
        InputEvent(EventType.DISPUTE, 1, 1),
        InputEvent(EventType.RESOLVE, 1, 1),
        InputEvent(EventType.DEPOSIT, 2, 3, Decimal("5.0")),
        InputEvent(EventType.DISPUTE, 2, 3),
        InputEvent(EventType.CHARGEBACK, 2, 3),
        InputEvent(EventType.DEPOSIT, 2, 4, Decimal("1.0")),
    ]
    use_case = ReplayLedgerUseCase(LedgerReplayContext(event_source=ListEventSource(events)))

    report = use_case.execute()

    assert report.summary.total_events == 8
    assert report.summary.applied == 6
    assert report.summary.rejected == 2
    assert report.summary.accounts == 2
    assert report.summary.locked_accounts == 1
    assert [rejection.code for rejection in report.rejections] == [
        "withdrawal_not_enough_money_available",
        "account_is_locked",
    ]
    first, second = report.snapshots
    assert (first.client_id, first.available, first.held, first.locked) == (1, Decimal("1.0"), Decimal("0"), False)
    assert (second.client_id, second.available, second.held, second.locked) == (2, Decimal("0"), Decimal("0"), True)
    assert [snapshot.client_id for snapshot in report.iter_locked()] == [2]
    assert report.has_rejections()


def test_source_errors_abort_the_run():
    use_case = ReplayLedgerUseCase(LedgerReplayContext(event_source=FailingEventSource()))

    with pytest.raises(MalformedRecordError):
        use_case.execute()


def test_replay_from_csv():
    source = CsvEventSource(b"type,client,tx,amount\ndeposit,1,1,10\nwithdrawal,1,2,2.5\ndispute,1,2,\n")

    report = ReplayLedgerUseCase(LedgerReplayContext(event_source=source)).execute()

    (snapshot,) = report.snapshots
    assert snapshot.available == Decimal("10.0")
    assert snapshot.held == Decimal("-2.5")
    assert snapshot.total == Decimal("7.5")
    assert not report.has_rejections()
