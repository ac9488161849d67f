"""
Bookkeeping service — one user's book.

Each operation:
1. Validates the entry (balanced, accounts categorized)
2. Persists it through the JournalStore
3. Applies it to the in-memory ledger

Validation always finishes before the first mutation, so a
rejected or cancelled entry leaves the book untouched. All
mutations and reads take the session lock, so a report never
sees an edit halfway between reversal and re-posting.

The caller controls the database commit.
"""

import logging
import threading
import time
from datetime import date, datetime

from bookkeeping.exceptions import DuplicateEntryError, EntryNotFoundError
from bookkeeping.models.enums import AccountType
from bookkeeping.schemas.journal import JournalEntry
from bookkeeping.schemas.ledger import LedgerAccount
from bookkeeping.schemas.report import (
    BalanceSheet,
    DashboardSummary,
    IncomeStatement,
    TrialBalance,
)
from bookkeeping.services.account_service import AccountRegistry, AccountStore
from bookkeeping.services.formatting import CurrencyFormatter
from bookkeeping.services.journal_service import JournalStore
from bookkeeping.services.ledger_service import LedgerPoster
from bookkeeping.services.report_service import (
    Period,
    ReportGenerator,
    filter_entries,
)
from bookkeeping.services.validation_service import (
    Categorizer,
    EntryValidator,
    cancel_all,
)

logger = logging.getLogger(__name__)


# One lock per user, shared by every Bookkeeper built for that user
_user_locks: dict[str, threading.RLock] = {}
_user_locks_guard = threading.Lock()


def lock_for_user(username: str) -> threading.RLock:
    with _user_locks_guard:
        if username not in _user_locks:
            _user_locks[username] = threading.RLock()
        return _user_locks[username]


def new_entry_id() -> str:
    """Time-derived journal id, e.g. JE-1760000000000."""
    return f"JE-{time.time_ns() // 1_000_000}"


class Bookkeeper:
    """
    The in-memory book of a single user.

    Built from an AccountStore and a JournalStore. After load(),
    the ledger equals a full replay of the user's entries.
    """

    def __init__(
        self,
        username: str,
        account_store: AccountStore | None,
        journal_store: JournalStore | None,
        currency: str = "",
        seed_defaults: bool = False,
        lock: "threading.RLock | None" = None,
    ):
        self.username = username
        self.journal_store = journal_store
        self.registry = AccountRegistry(account_store)
        self.validator = EntryValidator(self.registry)
        self.ledger = LedgerPoster()
        self.formatter = CurrencyFormatter(currency)
        self.seed_defaults = seed_defaults
        self.lock = lock or lock_for_user(username)
        # Newest first
        self.entries: list[JournalEntry] = []

    # --- Loading ---

    def load(self) -> "Bookkeeper":
        """Rebuild the book from storage."""
        with self.lock:
            self.registry.load()
            if self.seed_defaults:
                self.registry.seed_defaults()

            entries = []
            if self.journal_store is not None:
                entries = self.journal_store.load_all_entries(self.username)
            self.entries = sorted(entries, key=lambda e: e.date, reverse=True)

            self.ledger.rebuild(self.registry.items(), self.entries)
            logger.info(
                "Loaded %d accounts and %d entries for %s",
                len(self.registry), len(self.entries), self.username,
            )
        return self

    # --- Entry helpers ---

    def next_placeholder_description(self) -> str:
        return f"Journal No-{len(self.entries) + 1}"

    def prepare_entry(
        self,
        entry_date: datetime,
        lines: list,
        description: str = "",
        entry_id: str | None = None,
    ) -> JournalEntry:
        """
        Build an entry from user input.

        A blank description becomes the next 'Journal No-<n>'
        and a missing id is generated from the clock.
        """
        description = description.strip()
        if not description:
            description = self.next_placeholder_description()
        return JournalEntry(
            id=entry_id or new_entry_id(),
            date=entry_date,
            description=description,
            lines=lines,
        )

    def find_entry(self, entry_id: str) -> JournalEntry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def get_entry(self, entry_id: str) -> JournalEntry:
        entry = self.find_entry(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    # --- Mutations ---

    def add_entry(
        self, entry: JournalEntry, categorize: Categorizer = cancel_all
    ) -> JournalEntry:
        """
        Validate, persist and post a new entry.

        Raises DuplicateEntryError, UnbalancedEntryError or
        PostingCancelledError without touching the book.
        """
        with self.lock:
            if self.find_entry(entry.id) is not None:
                raise DuplicateEntryError(entry.id)

            new_accounts = self.validator.check(entry, categorize)

            if self.journal_store is not None:
                self.journal_store.save_entry(entry, self.username)

            self._create_accounts(new_accounts)
            self.ledger.post(entry)
            self.entries.insert(0, entry)
            logger.info(
                "Posted entry %s (%s) for %s",
                entry.id, entry.total_debit, self.username,
            )
            return entry

    def update_entry(
        self,
        entry_id: str,
        new_entry: JournalEntry,
        categorize: Categorizer = cancel_all,
    ) -> JournalEntry:
        """
        Replace a posted entry.

        The replacement is validated first; if it fails, the old
        entry stays posted exactly as it was. The replacement is
        stored under the original id.
        """
        with self.lock:
            old_entry = self.get_entry(entry_id)
            if new_entry.id != entry_id:
                new_entry = new_entry.model_copy(update={"id": entry_id})

            new_accounts = self.validator.check(new_entry, categorize)

            if self.journal_store is not None:
                self.journal_store.save_entry(new_entry, self.username)

            self._create_accounts(new_accounts)
            self.ledger.edit(old_entry, new_entry)
            index = self.entries.index(old_entry)
            self.entries[index] = new_entry
            logger.info("Updated entry %s for %s", entry_id, self.username)
            return new_entry

    def delete_entry(self, entry_id: str) -> bool:
        """
        Delete and reverse an entry.

        Unknown ids are tolerated. Returns whether anything
        was removed from the book.
        """
        with self.lock:
            entry = self.find_entry(entry_id)
            if entry is None:
                logger.debug("Delete of unknown entry %s ignored", entry_id)
                return False

            if self.journal_store is not None:
                self.journal_store.delete_entry(entry_id)
            self.ledger.reverse(entry)
            self.entries.remove(entry)
            logger.info("Deleted entry %s for %s", entry_id, self.username)
            return True

    def clear_all_data(self) -> None:
        """Delete every entry of this user. Accounts are kept."""
        with self.lock:
            if self.journal_store is not None:
                self.journal_store.delete_all_entries(self.username)
            self.entries = []
            self.ledger.clear_transactions()
            logger.info("Cleared all entries for %s", self.username)

    def create_account(self, name: str, account_type: AccountType) -> bool:
        """Register an account explicitly. Existing names are left alone."""
        with self.lock:
            created = self.registry.register(name, account_type)
            if created:
                self.ledger.add_account(name, account_type)
                self._replay_into(name)
            return created

    def delete_account(self, name: str) -> bool:
        """
        Remove an account from the chart.

        Lines that reference it stay in the journal but drop out
        of the ledger until the account is created again.
        """
        with self.lock:
            removed = self.registry.remove(name)
            if removed:
                self.ledger.remove_account(name)
            return removed

    def _create_accounts(self, new_accounts: dict[str, AccountType]) -> None:
        for name, account_type in new_accounts.items():
            self.registry.register(name, account_type)
            self.ledger.add_account(name, account_type)
            self._replay_into(name)

    def _replay_into(self, name: str) -> None:
        """
        Post existing lines that reference a just-created account.

        Stored entries may name an account that was deleted and is
        now created again; a full replay would pick them up too.
        """
        self.ledger.replay_account(name, self.entries)

    # --- Queries ---

    def ledger_account(self, name: str) -> LedgerAccount:
        with self.lock:
            return self.ledger.get_account(name)

    def reports(self) -> ReportGenerator:
        return ReportGenerator(self.ledger.accounts, self.formatter)

    def trial_balance(self) -> TrialBalance:
        with self.lock:
            return self.reports().trial_balance()

    def income_statement(self) -> IncomeStatement:
        with self.lock:
            return self.reports().income_statement()

    def balance_sheet(self) -> BalanceSheet:
        with self.lock:
            return self.reports().balance_sheet()

    def filtered_entries(
        self,
        period: Period = Period.ALL_TIME,
        search: str = "",
        today: date | None = None,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> list[JournalEntry]:
        with self.lock:
            return filter_entries(
                self.entries, period, search,
                today=today, start=start, end=end,
            )

    def dashboard(
        self,
        period: Period = Period.THIS_MONTH,
        search: str = "",
        today: date | None = None,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> DashboardSummary:
        with self.lock:
            return self.reports().dashboard(
                self.entries, period, search,
                today=today, start=start, end=end,
            )
