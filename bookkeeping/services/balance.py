"""
Balance calculator.

Balances are never stored. They are always derived from the
posted transactions, using the sign convention of the
account type:

For ASSET and EXPENSE accounts: balance = debits - credits
For LIABILITY, EQUITY, and REVENUE: balance = credits - debits

Every balance, trial balance column and report total in the
system goes through these functions.
"""

from decimal import Decimal
from typing import Iterable, Protocol

from bookkeeping.models.enums import AccountType
from bookkeeping.schemas.journal import MONEY_EPSILON, ZERO


class Postable(Protocol):
    debit: Decimal
    credit: Decimal


def calculate_balance(
    account_type: AccountType, transactions: Iterable[Postable]
) -> Decimal:
    """Return the signed balance of an account."""
    total_debits = ZERO
    total_credits = ZERO
    for txn in transactions:
        total_debits += txn.debit
        total_credits += txn.credit

    if account_type.is_debit_normal:
        return total_debits - total_credits
    return total_credits - total_debits


def running_balances(
    account_type: AccountType, transactions: Iterable[Postable]
) -> list[Decimal]:
    """
    Balance after each transaction.

    Element i equals calculate_balance over transactions[0..i].
    """
    balances = []
    balance = ZERO
    for txn in transactions:
        if account_type.is_debit_normal:
            balance += txn.debit - txn.credit
        else:
            balance += txn.credit - txn.debit
        balances.append(balance)
    return balances


def is_zero(amount: Decimal) -> bool:
    return abs(amount) < MONEY_EPSILON


def amounts_equal(a: Decimal, b: Decimal) -> bool:
    return is_zero(a - b)


def split_balance(
    account_type: AccountType, balance: Decimal
) -> tuple[Decimal, Decimal]:
    """
    Place a signed balance into the (debit, credit) trial balance columns.

    A positive balance sits on the account's normal side. A negative
    balance flips to the opposite side at its absolute value.
    """
    if balance == ZERO:
        return ZERO, ZERO

    normal_side_is_debit = account_type.is_debit_normal
    if balance < ZERO:
        normal_side_is_debit = not normal_side_is_debit

    if normal_side_is_debit:
        return abs(balance), ZERO
    return ZERO, abs(balance)
