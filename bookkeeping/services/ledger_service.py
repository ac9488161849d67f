"""
Ledger service — the general ledger projection.

This service maintains one rule: each account's transaction
list reflects exactly the journal entries currently posted,
no more and no less.

1. Posting appends one transaction per journal line
2. Reversal removes every transaction tagged with a journal id
3. Edits are reversal followed by posting
4. Every touched account is kept sorted oldest first

Nothing here validates. Entries reach the ledger only after
the EntryValidator has accepted them.
"""

import logging
from typing import Iterable

from bookkeeping.exceptions import AccountNotFoundError
from bookkeeping.models.enums import AccountType
from bookkeeping.schemas.journal import JournalEntry, JournalLine
from bookkeeping.schemas.ledger import LedgerAccount, LedgerTransaction

logger = logging.getLogger(__name__)


class LedgerPoster:
    """
    Owns the name -> LedgerAccount map for one session.

    The map is a projection of accounts plus journal entries.
    rebuild() always produces the same state as the sequence
    of post/reverse calls that led here.
    """

    def __init__(self):
        self.accounts: dict[str, LedgerAccount] = {}

    # --- Accounts ---

    def add_account(self, name: str, account_type: AccountType) -> LedgerAccount:
        if name not in self.accounts:
            self.accounts[name] = LedgerAccount(
                name=name, account_type=account_type
            )
        return self.accounts[name]

    def remove_account(self, name: str) -> None:
        self.accounts.pop(name, None)

    def get_account(self, name: str) -> LedgerAccount:
        try:
            return self.accounts[name]
        except KeyError:
            raise AccountNotFoundError(name) from None

    # --- Posting ---

    def post(self, entry: JournalEntry) -> None:
        """
        Post every line of an entry to its account.

        Lines naming an account that is not in the map are
        dropped from the projection.
        """
        touched = self._append(entry)
        self._sort(touched)
        logger.debug("Posted entry %s to %s", entry.id, sorted(touched))

    def post_all(self, entries: Iterable[JournalEntry]) -> None:
        """Post entries in any order, then sort every account by date."""
        count = 0
        for entry in entries:
            self._append(entry)
            count += 1
        self._sort(self.accounts)
        logger.debug("Replayed %d entries into the ledger", count)

    def reverse(self, entry_or_id: JournalEntry | str) -> None:
        """
        Remove all transactions of a journal entry.

        An id that was never posted is a no-op.
        """
        journal_id = (
            entry_or_id.id if isinstance(entry_or_id, JournalEntry)
            else entry_or_id
        )
        for account in self.accounts.values():
            account.transactions[:] = [
                t for t in account.transactions if t.journal_id != journal_id
            ]
        logger.debug("Reversed entry %s", journal_id)

    def edit(self, old_entry: JournalEntry, new_entry: JournalEntry) -> None:
        """Replace a posted entry. The new entry must already be validated."""
        self.reverse(old_entry)
        self.post(new_entry)

    def rebuild(
        self,
        accounts: Iterable[tuple[str, AccountType]],
        entries: Iterable[JournalEntry],
    ) -> None:
        """Start from empty accounts and replay every entry."""
        self.accounts = {}
        for name, account_type in accounts:
            self.add_account(name, account_type)
        self.post_all(entries)

    def replay_account(
        self, name: str, entries: Iterable[JournalEntry]
    ) -> None:
        """Post the lines of the given entries that touch one account."""
        account = self.accounts.get(name)
        if account is None:
            return
        for entry in entries:
            for line in entry.lines:
                if line.account_name == name:
                    account.transactions.append(
                        self._transaction(entry, line)
                    )
        self._sort([name])

    def clear_transactions(self) -> None:
        for account in self.accounts.values():
            account.transactions.clear()

    # --- Internals ---

    def _append(self, entry: JournalEntry) -> set[str]:
        touched = set()
        for line in entry.lines:
            account = self.accounts.get(line.account_name)
            if account is None:
                continue
            account.transactions.append(self._transaction(entry, line))
            touched.add(line.account_name)
        return touched

    @staticmethod
    def _transaction(entry: JournalEntry, line: JournalLine) -> LedgerTransaction:
        return LedgerTransaction(
            date=entry.date,
            description=entry.description,
            debit=line.debit,
            credit=line.credit,
            journal_id=entry.id,
        )

    def _sort(self, names: Iterable[str]) -> None:
        # list.sort is stable: same-date transactions keep posting order
        for name in names:
            self.accounts[name].transactions.sort(key=lambda t: t.date)
