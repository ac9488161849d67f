"""
Account service — the chart of accounts.

The registry is the in-memory name -> type mapping every
other component reads. It is loaded from an AccountStore
and writes new accounts through to it. Account names are
the only identifier; an account's type never changes once
chosen.
"""

import logging
from typing import Iterable, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping.exceptions import AccountNotFoundError
from bookkeeping.models.account import Account
from bookkeeping.models.enums import AccountType

logger = logging.getLogger(__name__)


# Seeded into every new book so common postings need no categorization.
DEFAULT_ACCOUNTS: dict[str, AccountType] = {
    "Cash": AccountType.ASSET,
    "Accounts Receivable": AccountType.ASSET,
    "Inventory": AccountType.ASSET,
    "Equipment": AccountType.ASSET,
    "Prepaid Rent": AccountType.ASSET,
    "Prepaid Insurance": AccountType.ASSET,
    "Land": AccountType.ASSET,
    "Building": AccountType.ASSET,
    "Accumulated Depreciation": AccountType.ASSET,
    "Accounts Payable": AccountType.LIABILITY,
    "Notes Payable": AccountType.LIABILITY,
    "Salaries Payable": AccountType.LIABILITY,
    "Unearned Revenue": AccountType.LIABILITY,
    "Interest Payable": AccountType.LIABILITY,
    "Capital": AccountType.EQUITY,
    "Drawings": AccountType.EQUITY,
    "Retained Earnings": AccountType.EQUITY,
    "Sales Revenue": AccountType.REVENUE,
    "Service Revenue": AccountType.REVENUE,
    "Interest Revenue": AccountType.REVENUE,
    "Cost of Goods Sold": AccountType.EXPENSE,
    "Rent Expense": AccountType.EXPENSE,
    "Salary Expense": AccountType.EXPENSE,
    "Utilities Expense": AccountType.EXPENSE,
    "Purchases": AccountType.EXPENSE,
    "Depreciation Expense": AccountType.EXPENSE,
    "Advertising Expense": AccountType.EXPENSE,
    "Interest Expense": AccountType.EXPENSE,
    "Insurance Expense": AccountType.EXPENSE,
}


class AccountStore(Protocol):
    """Durable storage for the chart of accounts."""

    def load_all_accounts(self) -> list[tuple[str, AccountType]]: ...

    def insert_account(self, name: str, account_type: AccountType) -> None: ...

    def delete_account(self, name: str) -> None: ...


class SqlAccountStore:
    """
    AccountStore backed by the accounts table.

    The caller owns the session and decides when to commit.
    """

    def __init__(self, db: Session):
        self.db = db

    def load_all_accounts(self) -> list[tuple[str, AccountType]]:
        accounts = self.db.execute(
            select(Account).order_by(Account.name)
        ).scalars().all()
        return [(a.name, a.account_type) for a in accounts]

    def insert_account(self, name: str, account_type: AccountType) -> None:
        """Insert an account. Inserting an existing name is a no-op."""
        if self.db.get(Account, name) is not None:
            return
        self.db.add(Account(name=name, account_type=account_type))
        self.db.flush()

    def delete_account(self, name: str) -> None:
        account = self.db.get(Account, name)
        if account is not None:
            self.db.delete(account)
            self.db.flush()


class AccountRegistry:
    """
    In-memory chart of accounts.

    Iteration follows registration order, which is also the
    tie-breaker for report ordering within an account type.
    """

    def __init__(self, store: AccountStore | None = None):
        self.store = store
        self._types: dict[str, AccountType] = {}

    def load(self) -> None:
        """Replace the in-memory chart with the store's contents."""
        self._types = {}
        if self.store is None:
            return
        for name, account_type in self.store.load_all_accounts():
            self._types[name] = account_type

    def seed_defaults(
        self, defaults: dict[str, AccountType] = DEFAULT_ACCOUNTS
    ) -> None:
        for name, account_type in defaults.items():
            self.register(name, account_type)

    def contains(self, name: str) -> bool:
        return name in self._types

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        return len(self._types)

    def get_type(self, name: str) -> AccountType:
        try:
            return self._types[name]
        except KeyError:
            raise AccountNotFoundError(name) from None

    def items(self) -> Iterable[tuple[str, AccountType]]:
        return list(self._types.items())

    def register(self, name: str, account_type: AccountType) -> bool:
        """
        Add an account. Returns False if the name was already taken.

        Registering an existing name never changes its type.
        """
        if name in self._types:
            if self._types[name] != account_type:
                logger.warning(
                    "Account %r already exists as %s; ignoring %s",
                    name, self._types[name].value, account_type.value,
                )
            return False

        if self.store is not None:
            self.store.insert_account(name, account_type)
        self._types[name] = account_type
        logger.info("Registered account %r as %s", name, account_type.value)
        return True

    def remove(self, name: str) -> bool:
        """Remove an account. Unknown names are ignored."""
        if name not in self._types:
            return False
        if self.store is not None:
            self.store.delete_account(name)
        del self._types[name]
        logger.info("Removed account %r", name)
        return True
