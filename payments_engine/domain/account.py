"""Per-client account state machine."""
from __future__ import annotations

from decimal import Decimal
from typing import Mapping

from .errors import (
    AccountIsLockedError,
    AmountMissingError,
    TransactionAlreadyExistsError,
    TransactionMissingError,
    TransactionWrongStateError,
    WithdrawalNotEnoughMoneyAvailableError,
)
from .models import (
    AccountSnapshot,
    EventType,
    InputEvent,
    Transaction,
    TransactionKind,
    TransactionState,
)
from .money import ZERO, balance_total, checked_add, checked_sub


class Account:
    """Balance and deposit/withdrawal history of one client.

    ``apply`` is the only mutating entry point. Every new value is computed
    before any field is written, so a rejected event leaves the account
    exactly as it was.
    """

    def __init__(
        self,
        client_id: int,
        available: Decimal = ZERO,
        held: Decimal = ZERO,
        locked: bool = False,
        transactions: Mapping[int, Transaction] | None = None,
    ) -> None:
        self._client_id = client_id
        self._available = available
        self._held = held
        self._locked = locked
        self._transactions: dict[int, Transaction] = dict(transactions or {})

    @property
    def client_id(self) -> int:
        return self._client_id

    @property
    def available(self) -> Decimal:
        return self._available

    @property
    def held(self) -> Decimal:
        return self._held

    @property
    def total(self) -> Decimal:
        return balance_total(self._available, self._held)

    @property
    def locked(self) -> bool:
        return self._locked

    def transaction(self, transaction_id: int) -> Transaction | None:
        return self._transactions.get(transaction_id)

    @property
    def transaction_count(self) -> int:
        return len(self._transactions)

    def __repr__(self) -> str:
        return (
            f"Account(client={self._client_id}, available={self._available}, "
            f"held={self._held}, locked={self._locked})"
        )

    def apply(self, event: InputEvent) -> None:
        if self._locked:
            raise AccountIsLockedError()

        if event.event_type is EventType.DEPOSIT:
            self._deposit(event)
        elif event.event_type is EventType.WITHDRAWAL:
            self._withdraw(event)
        elif event.event_type is EventType.DISPUTE:
            self._dispute(event)
        elif event.event_type is EventType.RESOLVE:
            self._resolve(event)
        elif event.event_type is EventType.CHARGEBACK:
            self._chargeback(event)
        else:
            raise ValueError(f"Unsupported event type: {event.event_type!r}")

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client_id=self._client_id,
            available=self._available,
            held=self._held,
            total=self.total,
            locked=self._locked,
        )

    def _deposit(self, event: InputEvent) -> None:
        amount = self._new_transaction_amount(event)
        new_available = checked_add(self._available, amount)

        self._transactions[event.transaction_id] = Transaction(TransactionKind.DEPOSIT, amount)
        self._available = new_available

    def _withdraw(self, event: InputEvent) -> None:
        amount = self._new_transaction_amount(event)
        new_available = checked_sub(self._available, amount)
        if new_available < ZERO:
            raise WithdrawalNotEnoughMoneyAvailableError(self._available, amount)

        self._transactions[event.transaction_id] = Transaction(
            TransactionKind.WITHDRAWAL, amount.copy_negate()
        )
        self._available = new_available

    def _dispute(self, event: InputEvent) -> None:
        transaction = self._existing_transaction(event, TransactionState.VALID)
        new_available = checked_sub(self._available, transaction.amount)
        new_held = checked_add(self._held, transaction.amount)

        transaction.state = TransactionState.DISPUTE
        self._available = new_available
        self._held = new_held

    def _resolve(self, event: InputEvent) -> None:
        transaction = self._existing_transaction(event, TransactionState.DISPUTE)
        new_available, new_held = release_hold(transaction, self._available, self._held)

        transaction.state = TransactionState.RESOLVED
        self._available = new_available
        self._held = new_held

    def _chargeback(self, event: InputEvent) -> None:
        transaction = self._existing_transaction(event, TransactionState.DISPUTE)
        new_available, new_held = revert_transaction(transaction, self._available, self._held)

        transaction.state = TransactionState.CHARGED_BACK
        self._available = new_available
        self._held = new_held
        self._locked = True

    def _new_transaction_amount(self, event: InputEvent) -> Decimal:
        if event.transaction_id in self._transactions:
            raise TransactionAlreadyExistsError(event.transaction_id)
        if event.amount is None:
            raise AmountMissingError()
        return event.amount

    def _existing_transaction(self, event: InputEvent, expected: TransactionState) -> Transaction:
        transaction = self._transactions.get(event.transaction_id)
        if transaction is None:
            raise TransactionMissingError(event.transaction_id)
        if transaction.state is not expected:
            raise TransactionWrongStateError(expected, transaction.state)
        return transaction


def release_hold(transaction: Transaction, available: Decimal, held: Decimal) -> tuple[Decimal, Decimal]:
    """Return ``(available, held)`` with the dispute hold moved back to available.

    Exact inverse of the dispute step, so a resolved transaction leaves both
    balances where they were before the dispute.
    """
    if transaction.kind is TransactionKind.DEPOSIT:
        deposited = transaction.amount
        return checked_add(available, deposited), checked_sub(held, deposited)

    withdrawn = transaction.amount.copy_negate()
    return checked_sub(available, withdrawn), checked_add(held, withdrawn)


def revert_transaction(transaction: Transaction, available: Decimal, held: Decimal) -> tuple[Decimal, Decimal]:
    """Return ``(available, held)`` after charging back a disputed transaction.

    A charged-back deposit drops out of ``held``. A charged-back withdrawal
    is paid back: the withdrawn amount leaves ``held`` and is credited to
    ``available``.
    """
    if transaction.kind is TransactionKind.DEPOSIT:
        return available, checked_sub(held, transaction.amount)

    withdrawn = transaction.amount.copy_negate()
    return checked_add(available, withdrawn), checked_sub(held, withdrawn)
