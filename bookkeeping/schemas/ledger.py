"""
Schemas for the general ledger projection.

A LedgerAccount is never stored. It is rebuilt from the
chart of accounts and filled by replaying journal entries,
so its balance is always derived, never cached.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bookkeeping.models.enums import AccountType


class LedgerTransaction(BaseModel):
    """One journal line as seen from a single account."""
    date: datetime
    description: str
    debit: Decimal
    credit: Decimal
    journal_id: str

    model_config = {"frozen": True}


class LedgerAccount(BaseModel):
    """An account together with its posted transactions, oldest first."""
    name: str
    account_type: AccountType
    transactions: list[LedgerTransaction] = Field(default_factory=list)

    @property
    def balance(self) -> Decimal:
        from bookkeeping.services.balance import calculate_balance
        return calculate_balance(self.account_type, self.transactions)

    @property
    def has_activity(self) -> bool:
        return bool(self.transactions)


# --- Response Schemas ---

class LedgerLineResponse(BaseModel):
    date: datetime
    description: str
    debit: Decimal
    credit: Decimal
    journal_id: str
    running_balance: Decimal


class LedgerAccountResponse(BaseModel):
    name: str
    account_type: AccountType
    balance: Decimal
    transactions: list[LedgerLineResponse]
