"""Domain models for the transaction ledger.

Input events arrive from a record source; transactions are the per-account
history entries created by deposits and withdrawals; snapshots are the
read-only balance rows handed to the report sink.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class EventType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class TransactionKind(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TransactionState(str, Enum):
    """Lifecycle of a recorded transaction.

    VALID -> DISPUTE -> RESOLVED | CHARGED_BACK; the last two are terminal.
    """

    VALID = "valid"
    DISPUTE = "dispute"
    RESOLVED = "resolved"
    CHARGED_BACK = "charged_back"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InputEvent:
    """One row of the incoming event stream."""

    event_type: EventType
    client_id: int
    transaction_id: int
    amount: Decimal | None = None


@dataclass
class Transaction:
    """A deposit or withdrawal recorded on an account.

    ``amount`` carries the direction: positive for deposits, negated for
    withdrawals.
    """

    kind: TransactionKind
    amount: Decimal
    state: TransactionState = TransactionState.VALID


@dataclass(frozen=True)
class AccountSnapshot:
    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool
