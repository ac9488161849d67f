"""
Journal API endpoints.

The API layer is thin: it turns requests into JournalEntry
objects, hands them to the Bookkeeper, and maps bookkeeping
errors to status codes. New account names are categorized
from the request's new_account_types field; any left
uncategorized cancel the posting with a 409.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from bookkeeping.api.dependencies import get_username, open_book, to_http_error
from bookkeeping.models.base import get_db
from bookkeeping.schemas.journal import JournalEntryCreate, JournalEntryResponse
from bookkeeping.services.report_service import Period

router = APIRouter(prefix="/journal", tags=["Journal"])


def _categorizer(request: JournalEntryCreate):
    """Answer the new-account question from the request body."""
    def categorize(names: list[str]):
        return {
            name: request.new_account_types[name]
            for name in names
            if name in request.new_account_types
        }
    return categorize


@router.get("/entries", response_model=list[JournalEntryResponse])
def list_entries(
    period: Period = Query(default=Period.ALL_TIME),
    start: date | None = None,
    end: date | None = None,
    search: str = "",
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """
    List journal entries, newest first.

    This Month and Last Month return at most the ten most
    recent entries; All Time and Custom Range are unlimited.
    """
    with open_book(db, username) as book:
        db.commit()
        entries = book.filtered_entries(
            period=period, search=search, start=start, end=end
        )
        return [JournalEntryResponse.from_entry(e) for e in entries]


@router.get("/entries/{entry_id}", response_model=JournalEntryResponse)
def get_entry(
    entry_id: str,
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    try:
        with open_book(db, username) as book:
            return JournalEntryResponse.from_entry(book.get_entry(entry_id))
    except ValueError as e:
        raise to_http_error(e)


@router.post("/entries", response_model=JournalEntryResponse, status_code=201)
def post_entry(
    request: JournalEntryCreate,
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """
    Post a balanced journal entry.

    A blank description becomes 'Journal No-<n>'. If the entry
    does not balance nothing is stored (400).
    """
    try:
        with open_book(db, username) as book:
            entry = book.prepare_entry(
                entry_date=request.date,
                lines=request.lines,
                description=request.description,
                entry_id=request.id,
            )
            book.add_entry(entry, _categorizer(request))
            db.commit()
            return JournalEntryResponse.from_entry(entry)
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.put("/entries/{entry_id}", response_model=JournalEntryResponse)
def update_entry(
    entry_id: str,
    request: JournalEntryCreate,
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """
    Replace a journal entry.

    The old version stays posted unless the new one is valid.
    """
    try:
        with open_book(db, username) as book:
            old_entry = book.get_entry(entry_id)
            description = request.description.strip() or old_entry.description
            entry = book.prepare_entry(
                entry_date=request.date,
                lines=request.lines,
                description=description,
                entry_id=entry_id,
            )
            book.update_entry(entry_id, entry, _categorizer(request))
            db.commit()
            return JournalEntryResponse.from_entry(entry)
    except ValueError as e:
        db.rollback()
        raise to_http_error(e)


@router.delete("/entries/{entry_id}", status_code=204)
def delete_entry(
    entry_id: str,
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """Delete a journal entry. Unknown ids are accepted silently."""
    with open_book(db, username) as book:
        book.delete_entry(entry_id)
        db.commit()
    return Response(status_code=204)


@router.delete("/entries", status_code=204)
def clear_entries(
    db: Session = Depends(get_db),
    username: str = Depends(get_username),
):
    """Delete every journal entry of the current user."""
    with open_book(db, username) as book:
        book.clear_all_data()
        db.commit()
    return Response(status_code=204)
