"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored. An invalid account type
is caught at the database level, not just in Python
validation.
"""

import enum


class AccountType(str, enum.Enum):
    """The five fundamental accounting categories."""
    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"

    @property
    def is_debit_normal(self) -> bool:
        """Asset and Expense balances grow with debits."""
        return self in (AccountType.ASSET, AccountType.EXPENSE)

    @property
    def precedence(self) -> int:
        """Position of this type in report ordering."""
        return ACCOUNT_TYPE_ORDER.index(self)


# Report ordering: Asset < Liability < Equity < Revenue < Expense
ACCOUNT_TYPE_ORDER: list[AccountType] = [
    AccountType.ASSET,
    AccountType.LIABILITY,
    AccountType.EQUITY,
    AccountType.REVENUE,
    AccountType.EXPENSE,
]
