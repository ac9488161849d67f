"""
Chart of accounts and settings API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from bookkeeping.api.dependencies import get_username, open_book, to_http_error
from bookkeeping.models.base import get_db
from bookkeeping.schemas.account import (
    AccountCreate,
    AccountResponse,
    CurrencyResponse,
    CurrencyUpdate,
)
from bookkeeping.services.settings_service import SettingsStore

router = APIRouter(tags=["Accounts"])


# --- Account Endpoints ---

@router.get("/accounts", response_model=list[AccountResponse])
def list_accounts(
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """List the chart of accounts, including the seeded defaults."""
    with open_book(db, username) as book:
        db.commit()
        return [
            AccountResponse(name=name, account_type=account_type)
            for name, account_type in book.registry.items()
        ]


@router.post("/accounts", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """
    Register an account.

    Creating an existing name is not an error; the account
    keeps the type it was first created with.
    """
    try:
        with open_book(db, username) as book:
            book.create_account(request.name, request.account_type)
            db.commit()
            return AccountResponse(
                name=request.name,
                account_type=book.registry.get_type(request.name),
            )
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.delete("/accounts/{name}", status_code=204)
def delete_account(
    name: str,
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """Remove an account from the chart of accounts."""
    with open_book(db, username) as book:
        if not book.delete_account(name):
            db.rollback()
            raise HTTPException(
                status_code=404, detail=f"Account '{name}' not found"
            )
        db.commit()
    return Response(status_code=204)


# --- Settings Endpoints ---

@router.get("/settings/currency", response_model=CurrencyResponse)
def get_currency(db: Session = Depends(get_db)):
    return CurrencyResponse(symbol=SettingsStore(db).get_currency())


@router.put("/settings/currency", response_model=CurrencyResponse)
def set_currency(
    request: CurrencyUpdate,
    db: Session = Depends(get_db),
):
    """Change the currency symbol used when formatting amounts."""
    store = SettingsStore(db)
    store.set_currency(request.symbol)
    db.commit()
    return CurrencyResponse(symbol=store.get_currency())
