"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from bookkeeping.models.base import Base
from bookkeeping.models.enums import AccountType, ACCOUNT_TYPE_ORDER
from bookkeeping.models.account import Account
from bookkeeping.models.journal_entry import JournalEntryRecord, JournalLineRecord
from bookkeeping.models.setting import Setting

__all__ = [
    "Base",
    "AccountType",
    "ACCOUNT_TYPE_ORDER",
    "Account",
    "JournalEntryRecord",
    "JournalLineRecord",
    "Setting",
]
