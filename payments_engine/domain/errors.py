"""Ledger error taxonomy.

``ProcessingError`` subclasses are raised by an account when an event breaks
a business rule. ``RoutingError`` subclasses are raised by the registry and
wrap the account-level cause. Neither is fatal to the event stream.
"""
from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import InputEvent, TransactionState


class LedgerError(Exception):
    """Base ledger error."""

    code = "ledger_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProcessingError(LedgerError):
    code = "processing_error"


class AccountIsLockedError(ProcessingError):
    code = "account_is_locked"

    def __init__(self) -> None:
        super().__init__("Account is locked")


class AmountMissingError(ProcessingError):
    code = "amount_missing"

    def __init__(self) -> None:
        super().__init__("Amount missing")


class DecimalOverflowError(ProcessingError):
    code = "decimal_overflow"

    def __init__(self) -> None:
        super().__init__("Decimal overflow")


class TransactionAlreadyExistsError(ProcessingError):
    code = "transaction_already_exists"

    def __init__(self, transaction_id: int) -> None:
        self.transaction_id = transaction_id
        super().__init__(f"Transaction already exists: {transaction_id}")


class TransactionMissingError(ProcessingError):
    code = "transaction_missing"

    def __init__(self, transaction_id: int) -> None:
        self.transaction_id = transaction_id
        super().__init__(f"Transaction missing: {transaction_id}")


class TransactionWrongStateError(ProcessingError):
    code = "transaction_wrong_state"

    def __init__(self, expected: TransactionState, actual: TransactionState) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Transaction wrong state, expected: {expected}, actual: {actual}")


class WithdrawalNotEnoughMoneyAvailableError(ProcessingError):
    code = "withdrawal_not_enough_money_available"

    def __init__(self, available: Decimal, requested: Decimal) -> None:
        self.available = available
        self.requested = requested
        super().__init__(
            f"Withdrawal: not enough money available, available: {available}, requested: {requested}"
        )


class RoutingError(LedgerError):
    code = "routing_error"


class EventRejectedError(RoutingError):
    """An account refused the routed event."""

    code = "event_rejected"

    def __init__(self, event: InputEvent, cause: ProcessingError) -> None:
        self.event = event
        self.cause = cause
        super().__init__(
            f"{event.event_type.value} tx={event.transaction_id} for client {event.client_id} rejected: {cause.message}"
        )


class AccountLookupError(RoutingError):
    code = "account_lookup_failed"

    def __init__(self, client_id: int) -> None:
        self.client_id = client_id
        super().__init__(f"Account not found for client {client_id}")
