"""Client-to-account routing."""
from __future__ import annotations

from typing import Iterator

from .account import Account
from .errors import AccountLookupError, EventRejectedError, ProcessingError
from .models import AccountSnapshot, InputEvent


class AccountRegistry:
    """Owns every account seen during a run, keyed by client id.

    Accounts are created on the first event for a client and never removed,
    even when that first event is rejected. Iteration follows first
    appearance.
    """

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}

    def route(self, event: InputEvent) -> None:
        if event.client_id not in self._accounts:
            self._accounts[event.client_id] = Account(event.client_id)
        account = self._accounts.get(event.client_id)
        if account is None:
            raise AccountLookupError(event.client_id)

        try:
            account.apply(event)
        except ProcessingError as exc:
            raise EventRejectedError(event, exc) from exc

    def snapshots(self) -> list[AccountSnapshot]:
        return [account.snapshot() for account in self._accounts.values()]

    def get(self, client_id: int) -> Account | None:
        return self._accounts.get(client_id)

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts.values())
