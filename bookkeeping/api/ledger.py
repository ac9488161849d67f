"""
Ledger API endpoints.

Per-account views of the general ledger. Balances are
calculated from the posted transactions, not stored.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookkeeping.api.dependencies import get_username, open_book, to_http_error
from bookkeeping.models.base import get_db
from bookkeeping.schemas.ledger import LedgerAccountResponse, LedgerLineResponse
from bookkeeping.schemas.report import AccountBalance
from bookkeeping.services.balance import running_balances

router = APIRouter(prefix="/ledger", tags=["Ledger"])


@router.get("/accounts", response_model=list[AccountBalance])
def list_balances(
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """Every account with its current balance."""
    with open_book(db, username) as book:
        db.commit()
        return [
            AccountBalance(
                name=account.name,
                account_type=account.account_type,
                balance=account.balance,
            )
            for account in book.ledger.accounts.values()
        ]


@router.get("/accounts/{name}", response_model=LedgerAccountResponse)
def get_ledger_account(
    name: str,
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """
    One account's transactions, oldest first, with running balance.
    """
    try:
        with open_book(db, username) as book:
            account = book.ledger_account(name)
            balances = running_balances(
                account.account_type, account.transactions
            )
            return LedgerAccountResponse(
                name=account.name,
                account_type=account.account_type,
                balance=account.balance,
                transactions=[
                    LedgerLineResponse(
                        date=txn.date,
                        description=txn.description,
                        debit=txn.debit,
                        credit=txn.credit,
                        journal_id=txn.journal_id,
                        running_balance=balance,
                    )
                    for txn, balance in zip(account.transactions, balances)
                ],
            )
    except ValueError as e:
        raise to_http_error(e)
