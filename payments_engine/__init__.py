"""Transaction ledger replay toolkit."""
from payments_engine.application.use_cases import LedgerReplayContext, ReplayLedgerUseCase
from payments_engine.domain.account import Account
from payments_engine.domain.registry import AccountRegistry
from payments_engine.infrastructure.repositories.csv_repositories import CsvEventSource

__all__ = [
    "Account",
    "AccountRegistry",
    "CsvEventSource",
    "LedgerReplayContext",
    "ReplayLedgerUseCase",
]
