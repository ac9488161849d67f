"""
Pydantic schemas for the chart of accounts.
"""

from pydantic import BaseModel, Field

from bookkeeping.models.enums import AccountType


class AccountCreate(BaseModel):
    """Request to register an account."""
    name: str = Field(min_length=1, max_length=100)
    account_type: AccountType


class AccountResponse(BaseModel):
    name: str
    account_type: AccountType

    model_config = {"from_attributes": True}


class CurrencyUpdate(BaseModel):
    symbol: str = Field(min_length=1, max_length=10)


class CurrencyResponse(BaseModel):
    symbol: str
