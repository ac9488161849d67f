"""
Report service — financial statements from the ledger.

All reports read the live LedgerAccount map, never the raw
journal entries. Accounts without activity, or whose balance
is within 0.01 of zero, are left out.

Net profit is never closed into an equity account. It is
recomputed from all revenue and expense balances every time
and added to equity on the balance sheet.
"""

import calendar
import enum
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from bookkeeping.models.enums import AccountType
from bookkeeping.schemas.journal import JournalEntry, JournalEntryResponse, ZERO
from bookkeeping.schemas.ledger import LedgerAccount
from bookkeeping.schemas.report import (
    AccountBalance,
    BalanceSheet,
    BreakdownItem,
    DashboardSummary,
    IncomeStatement,
    TrialBalance,
    TrialBalanceRow,
)
from bookkeeping.services.balance import amounts_equal, is_zero, split_balance
from bookkeeping.services.formatting import CurrencyFormatter


class Period(str, enum.Enum):
    """Date windows offered on the dashboard."""
    THIS_MONTH = "This Month"
    LAST_MONTH = "Last Month"
    CUSTOM_RANGE = "Custom Range"
    ALL_TIME = "All Time"


ONE_MS = timedelta(milliseconds=1)

# All Time, and a custom range with no dates picked
EARLIEST = datetime(2000, 1, 1)
LATEST = datetime(2100, 12, 31, 23, 59, 59, 999000)

# Month views only show the most recent entries
RECENT_ENTRY_LIMIT = 10


def _end_of_day(day: date) -> datetime:
    """The last millisecond of a day."""
    return datetime.combine(day + timedelta(days=1), time.min) - ONE_MS


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def date_window(
    period: Period,
    today: date | None = None,
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> tuple[datetime, datetime]:
    """
    Inclusive (start, end) bounds for a period.

    Month windows end on the last millisecond of the month's
    last day. A custom range includes its whole end day.
    """
    today = _as_date(today or datetime.now())

    if period == Period.THIS_MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return (
            datetime(today.year, today.month, 1),
            _end_of_day(date(today.year, today.month, last_day)),
        )

    if period == Period.LAST_MONTH:
        first_of_this_month = date(today.year, today.month, 1)
        last_of_last_month = first_of_this_month - timedelta(days=1)
        return (
            datetime(last_of_last_month.year, last_of_last_month.month, 1),
            _end_of_day(last_of_last_month),
        )

    if period == Period.CUSTOM_RANGE and start is not None and end is not None:
        return (
            datetime.combine(_as_date(start), time.min),
            _end_of_day(_as_date(end)),
        )

    return EARLIEST, LATEST


def in_window(moment: datetime, window: tuple[datetime, datetime]) -> bool:
    window_start, window_end = window
    # Compare at millisecond resolution: end is the last millisecond
    return window_start <= moment < window_end + ONE_MS


def filter_entries(
    entries: list[JournalEntry],
    period: Period = Period.ALL_TIME,
    search: str = "",
    today: date | None = None,
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> list[JournalEntry]:
    """
    Entries inside the period that match the search term, newest first.

    The search is case-insensitive and matches the description
    or any line's account name. Month views keep only the ten
    most recent matches.
    """
    window = date_window(period, today=today, start=start, end=end)
    matches = [e for e in entries if in_window(e.date, window)]

    term = search.strip().lower()
    if term:
        matches = [
            e for e in matches
            if term in e.description.lower()
            or any(term in line.account_name.lower() for line in e.lines)
        ]

    matches.sort(key=lambda e: e.date, reverse=True)

    if period in (Period.THIS_MONTH, Period.LAST_MONTH):
        return matches[:RECENT_ENTRY_LIMIT]
    return matches


class ReportGenerator:
    """
    Derives the financial statements from a ledger snapshot.

    The generator holds a reference to the ledger map and
    reads it on every call; it keeps no state of its own.
    """

    def __init__(
        self,
        accounts: dict[str, LedgerAccount],
        formatter: CurrencyFormatter | None = None,
    ):
        self.accounts = accounts
        self.formatter = formatter or CurrencyFormatter("")

    # --- Helpers ---

    def _of_type(self, *types: AccountType) -> list[LedgerAccount]:
        return [a for a in self.accounts.values() if a.account_type in types]

    def _nonzero(self, account_type: AccountType) -> list[AccountBalance]:
        rows = []
        for account in self._of_type(account_type):
            balance = account.balance
            if not is_zero(balance):
                rows.append(AccountBalance(
                    name=account.name,
                    account_type=account.account_type,
                    balance=balance,
                ))
        return rows

    def total_for(self, account_type: AccountType) -> Decimal:
        return sum((a.balance for a in self._of_type(account_type)), ZERO)

    # --- Trial Balance ---

    def trial_balance(self) -> TrialBalance:
        """
        Every account with activity, in debit or credit column.

        Rows are ordered Asset, Liability, Equity, Revenue, Expense;
        within a type they keep chart-of-accounts order.
        """
        active = [a for a in self.accounts.values() if a.has_activity]
        active.sort(key=lambda a: a.account_type.precedence)

        rows = []
        total_debit = ZERO
        total_credit = ZERO
        for account in active:
            debit, credit = split_balance(account.account_type, account.balance)
            total_debit += debit
            total_credit += credit
            rows.append(TrialBalanceRow(
                name=account.name,
                account_type=account.account_type,
                debit=debit,
                credit=credit,
            ))

        return TrialBalance(
            rows=rows,
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=amounts_equal(total_debit, total_credit),
            as_of=datetime.now(),
        )

    # --- Income Statement ---

    def income_statement(self) -> IncomeStatement:
        revenues = self._nonzero(AccountType.REVENUE)
        expenses = self._nonzero(AccountType.EXPENSE)
        total_revenue = sum((r.balance for r in revenues), ZERO)
        total_expense = sum((e.balance for e in expenses), ZERO)
        return IncomeStatement(
            revenues=revenues,
            expenses=expenses,
            total_revenue=total_revenue,
            total_expense=total_expense,
            net_profit=total_revenue - total_expense,
        )

    def net_profit(self) -> Decimal:
        return self.income_statement().net_profit

    # --- Balance Sheet ---

    def balance_sheet(self) -> BalanceSheet:
        assets = self._nonzero(AccountType.ASSET)
        liabilities = self._nonzero(AccountType.LIABILITY)
        equity = self._nonzero(AccountType.EQUITY)

        total_assets = sum((a.balance for a in assets), ZERO)
        total_liabilities = sum((l.balance for l in liabilities), ZERO)
        base_equity = sum((e.balance for e in equity), ZERO)
        net_profit = self.net_profit()
        total_equity = base_equity + net_profit

        return BalanceSheet(
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            base_equity=base_equity,
            net_profit=net_profit,
            total_equity=total_equity,
            total_liabilities_and_equity=total_liabilities + total_equity,
            is_balanced=amounts_equal(
                total_assets, total_liabilities + total_equity
            ),
        )

    # --- Breakdowns ---

    def breakdown(self, account_type: AccountType) -> list[BreakdownItem]:
        """Accounts of a type with a positive balance, largest first."""
        items = [
            BreakdownItem(name=a.name, amount=a.balance)
            for a in self._of_type(account_type)
            if a.balance > ZERO
        ]
        items.sort(key=lambda item: item.amount, reverse=True)
        return items

    def expense_breakdown(self) -> list[BreakdownItem]:
        return self.breakdown(AccountType.EXPENSE)

    def revenue_breakdown(self) -> list[BreakdownItem]:
        return self.breakdown(AccountType.REVENUE)

    # --- Dashboard ---

    def dashboard(
        self,
        entries: list[JournalEntry],
        period: Period = Period.THIS_MONTH,
        search: str = "",
        today: date | None = None,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> DashboardSummary:
        """
        Headline totals and breakdowns plus the entries in the period.

        Totals are all-time figures; only the entry list is
        restricted to the period.
        """
        window_start, window_end = date_window(
            period, today=today, start=start, end=end
        )
        recent = filter_entries(
            entries, period, search, today=today, start=start, end=end
        )
        total_revenue = self.total_for(AccountType.REVENUE)
        total_expense = self.total_for(AccountType.EXPENSE)
        net_profit = total_revenue - total_expense

        return DashboardSummary(
            period=period.value,
            start=window_start,
            end=window_end,
            currency=self.formatter.symbol,
            total_revenue=total_revenue,
            total_expense=total_expense,
            net_profit=net_profit,
            total_revenue_display=self.formatter.format_amount(total_revenue),
            total_expense_display=self.formatter.format_amount(total_expense),
            net_profit_display=self.formatter.format_accounting(net_profit),
            expense_breakdown=self.expense_breakdown(),
            revenue_breakdown=self.revenue_breakdown(),
            recent_entries=[JournalEntryResponse.from_entry(e) for e in recent],
        )
