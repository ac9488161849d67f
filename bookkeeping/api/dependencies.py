"""
Shared dependencies for the API layer.

Every request rebuilds the user's book from the database
(a full replay), under that user's lock. Holding the lock
for the whole request keeps load, mutation and commit from
interleaving with another request for the same user.
"""

from contextlib import contextmanager

from fastapi import Header, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.config import get_settings
from bookkeeping.exceptions import (
    AccountNotFoundError,
    EntryNotFoundError,
    PostingCancelledError,
)
from bookkeeping.services.account_service import SqlAccountStore
from bookkeeping.services.bookkeeping_service import Bookkeeper, lock_for_user
from bookkeeping.services.journal_service import SqlJournalStore
from bookkeeping.services.settings_service import SettingsStore


def get_username(x_username: str | None = Header(default=None)) -> str:
    """The acting user. Authentication happens elsewhere."""
    return x_username or get_settings().DEFAULT_USERNAME


@contextmanager
def open_book(db: Session, username: str):
    """
    Load a user's book and hold their lock until the block exits.

    Used inside endpoint bodies rather than as a dependency so
    the lock is acquired and released on the same thread.
    """
    settings = get_settings()
    with lock_for_user(username):
        book = Bookkeeper(
            username=username,
            account_store=SqlAccountStore(db),
            journal_store=SqlJournalStore(db),
            currency=SettingsStore(db).get_currency(),
            seed_defaults=settings.SEED_DEFAULT_ACCOUNTS,
        ).load()
        yield book


def to_http_error(error: ValueError) -> HTTPException:
    """
    Map a bookkeeping error to the matching HTTP status.

    Unbalanced entries and other input errors are 400.
    """
    if isinstance(error, PostingCancelledError):
        return HTTPException(
            status_code=409,
            detail={
                "message": str(error),
                "new_accounts": error.account_names,
            },
        )
    if isinstance(error, (EntryNotFoundError, AccountNotFoundError)):
        return HTTPException(status_code=404, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
