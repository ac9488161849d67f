"""
Report API endpoints.

Reports are derived from the ledger on every request.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bookkeeping.api.dependencies import get_username, open_book
from bookkeeping.models.base import get_db
from bookkeeping.schemas.report import (
    BalanceSheet,
    DashboardSummary,
    IncomeStatement,
    TrialBalance,
)
from bookkeeping.services.report_service import Period

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/trial-balance", response_model=TrialBalance)
def trial_balance(
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    with open_book(db, username) as book:
        db.commit()
        return book.trial_balance()


@router.get("/income-statement", response_model=IncomeStatement)
def income_statement(
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    with open_book(db, username) as book:
        db.commit()
        return book.income_statement()


@router.get("/balance-sheet", response_model=BalanceSheet)
def balance_sheet(
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """Net profit to date is included in equity."""
    with open_book(db, username) as book:
        db.commit()
        return book.balance_sheet()


@router.get("/dashboard", response_model=DashboardSummary)
def dashboard(
    period: Period = Query(default=Period.THIS_MONTH),
    start: date | None = None,
    end: date | None = None,
    search: str = "",
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    with open_book(db, username) as book:
        db.commit()
        return book.dashboard(
            period=period, search=search, start=start, end=end
        )
