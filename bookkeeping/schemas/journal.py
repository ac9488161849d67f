"""
Pydantic schemas for journal entries.

JournalEntry and JournalLine are the engine's input types:
the validator, the ledger poster and the stores all work on
them. The *Create / *Response schemas define the API contract.
"""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from bookkeeping.models.enums import AccountType

# Tolerance for every equality/zero check on money
MONEY_EPSILON = Decimal("0.01")

ZERO = Decimal("0")


def to_naive_utc(value: datetime) -> datetime:
    """
    Convert an aware datetime to naive UTC.

    Stored dates come back from the database without a zone,
    and every comparison in the engine is between naive values.
    Naive input is taken as already being in book time.
    """
    if value.tzinfo is not None and value.utcoffset() is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class JournalLine(BaseModel):
    """
    One line of a journal entry.

    Normally only one of debit/credit is non-zero, but the
    engine sums whichever is present and never relies on it.
    """
    account_name: str = Field(min_length=1, max_length=100)
    debit: Decimal = Field(default=ZERO, ge=0)
    credit: Decimal = Field(default=ZERO, ge=0)

    model_config = {"from_attributes": True}


class JournalEntry(BaseModel):
    """A dated, described group of lines that must balance."""
    id: str = Field(min_length=1, max_length=64)
    date: datetime
    description: str = Field(default="", max_length=255)
    lines: list[JournalLine] = Field(min_length=2)

    model_config = {"from_attributes": True}

    @field_validator("date")
    @classmethod
    def naive_utc_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), ZERO)

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_debit - self.total_credit) < MONEY_EPSILON

    @property
    def account_names(self) -> list[str]:
        """Distinct account names in first-appearance order."""
        return list(dict.fromkeys(line.account_name for line in self.lines))


# --- Request Schemas ---

class JournalEntryCreate(BaseModel):
    """
    Request to post or replace a journal entry.

    id may be omitted on create; the server assigns one.
    new_account_types answers the categorization question
    for any account name not yet in the chart of accounts.
    """
    id: str | None = Field(default=None, min_length=1, max_length=64)
    date: datetime
    description: str = Field(default="", max_length=255)
    lines: list[JournalLine] = Field(min_length=2)
    new_account_types: dict[str, AccountType] = Field(default_factory=dict)

    @field_validator("date")
    @classmethod
    def naive_utc_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


# --- Response Schemas ---

class JournalEntryResponse(BaseModel):
    id: str
    date: datetime
    description: str
    lines: list[JournalLine]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> "JournalEntryResponse":
        return cls(
            id=entry.id,
            date=entry.date,
            description=entry.description,
            lines=entry.lines,
            total_debit=entry.total_debit,
            total_credit=entry.total_credit,
            is_balanced=entry.is_balanced,
        )
