"""
Pydantic schemas for the financial reports.

Reports are read-only snapshots derived from the ledger.
Amounts are the raw signed balances unless a field says
otherwise.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from bookkeeping.models.enums import AccountType
from bookkeeping.schemas.journal import JournalEntryResponse


class AccountBalance(BaseModel):
    name: str
    account_type: AccountType
    balance: Decimal


# --- Trial Balance ---

class TrialBalanceRow(BaseModel):
    name: str
    account_type: AccountType
    debit: Decimal
    credit: Decimal


class TrialBalance(BaseModel):
    rows: list[TrialBalanceRow]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool
    as_of: datetime


# --- Income Statement ---

class IncomeStatement(BaseModel):
    revenues: list[AccountBalance]
    expenses: list[AccountBalance]
    total_revenue: Decimal
    total_expense: Decimal
    net_profit: Decimal


# --- Balance Sheet ---

class BalanceSheet(BaseModel):
    """
    Assets against liabilities plus equity.

    Net profit has not been closed into an equity account,
    so it is added to equity here as retained earnings.
    """
    assets: list[AccountBalance]
    liabilities: list[AccountBalance]
    equity: list[AccountBalance]
    total_assets: Decimal
    total_liabilities: Decimal
    base_equity: Decimal
    net_profit: Decimal
    total_equity: Decimal
    total_liabilities_and_equity: Decimal
    is_balanced: bool


# --- Dashboard ---

class BreakdownItem(BaseModel):
    name: str
    amount: Decimal


class DashboardSummary(BaseModel):
    period: str
    start: datetime
    end: datetime
    currency: str
    total_revenue: Decimal
    total_expense: Decimal
    net_profit: Decimal
    # Totals formatted with the book's currency, e.g. "৳ 1200.00"
    total_revenue_display: str
    total_expense_display: str
    net_profit_display: str
    expense_breakdown: list[BreakdownItem]
    revenue_breakdown: list[BreakdownItem]
    recent_entries: list[JournalEntryResponse]
