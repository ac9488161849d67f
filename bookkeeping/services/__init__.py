"""Business logic services."""

from bookkeeping.services.account_service import AccountRegistry, SqlAccountStore
from bookkeeping.services.bookkeeping_service import Bookkeeper
from bookkeeping.services.journal_service import SqlJournalStore
from bookkeeping.services.ledger_service import LedgerPoster
from bookkeeping.services.report_service import ReportGenerator
from bookkeeping.services.settings_service import SettingsStore
from bookkeeping.services.validation_service import EntryValidator

__all__ = [
    "AccountRegistry",
    "SqlAccountStore",
    "Bookkeeper",
    "SqlJournalStore",
    "LedgerPoster",
    "ReportGenerator",
    "SettingsStore",
    "EntryValidator",
]
