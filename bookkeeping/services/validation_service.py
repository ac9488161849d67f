"""
Entry validator.

Runs before anything is posted:
1. The entry must balance (debits = credits within 0.01)
2. Every account it references must be in the chart of accounts

Unknown account names are not an error by themselves. The
caller is asked to categorize them through a callback; if the
caller cancels, nothing is created and nothing is posted.
"""

import logging
from typing import Callable

from bookkeeping.exceptions import PostingCancelledError, UnbalancedEntryError
from bookkeeping.models.enums import AccountType
from bookkeeping.schemas.journal import JournalEntry
from bookkeeping.services.account_service import AccountRegistry

logger = logging.getLogger(__name__)

# Given the unknown account names, return a type for each of
# them, or None to cancel posting.
Categorizer = Callable[[list[str]], dict[str, AccountType] | None]


def cancel_all(account_names: list[str]) -> None:
    """Categorizer that always cancels."""
    return None


class EntryValidator:

    def __init__(self, registry: AccountRegistry):
        self.registry = registry

    def is_balanced(self, entry: JournalEntry) -> bool:
        return entry.is_balanced

    def check_balanced(self, entry: JournalEntry) -> None:
        """Raise UnbalancedEntryError if the entry does not balance."""
        if not entry.is_balanced:
            logger.warning(
                "Rejected unbalanced entry %s: debits=%s credits=%s",
                entry.id, entry.total_debit, entry.total_credit,
            )
            raise UnbalancedEntryError(entry.id)

    def find_new_accounts(self, entry: JournalEntry) -> list[str]:
        """Account names used by the entry that are not registered yet."""
        return [
            name for name in entry.account_names
            if not self.registry.contains(name)
        ]

    def resolve_new_accounts(
        self, entry: JournalEntry, categorize: Categorizer
    ) -> dict[str, AccountType]:
        """
        Ask the caller to categorize unknown accounts.

        Returns the mapping for the new names without registering
        anything. A None answer, or one that leaves any name
        untyped, cancels the posting.
        """
        new_names = self.find_new_accounts(entry)
        if not new_names:
            return {}

        answer = categorize(new_names)
        if answer is None or any(name not in answer for name in new_names):
            logger.info(
                "Posting of entry %s cancelled; uncategorized accounts: %s",
                entry.id, new_names,
            )
            raise PostingCancelledError(new_names)

        return {name: AccountType(answer[name]) for name in new_names}

    def check(
        self, entry: JournalEntry, categorize: Categorizer = cancel_all
    ) -> dict[str, AccountType]:
        """
        Run every check without side effects.

        Returns the new accounts to create. The Bookkeeper calls
        this, stores the entry, and only then creates them, so a
        failed save leaves the chart of accounts unchanged.
        """
        self.check_balanced(entry)
        return self.resolve_new_accounts(entry, categorize)

    def validate(
        self, entry: JournalEntry, categorize: Categorizer = cancel_all
    ) -> dict[str, AccountType]:
        """
        Check an entry and register its new accounts in one step.

        For callers with nothing to persist in between, such as a
        bare ledger without a journal store. Nothing is registered
        unless every check passes. Returns the accounts created.
        """
        created = self.check(entry, categorize)
        for name, account_type in created.items():
            self.registry.register(name, account_type)
        return created
