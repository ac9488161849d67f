"""
Journal service — durable storage of journal entries.

Entries belong to a user. The store does not validate or
order anything; the ledger re-sorts whatever it is given.
"""

import logging
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from bookkeeping.exceptions import DuplicateEntryError
from bookkeeping.models.journal_entry import JournalEntryRecord, JournalLineRecord
from bookkeeping.schemas.journal import JournalEntry, JournalLine

logger = logging.getLogger(__name__)


class JournalStore(Protocol):
    """Durable storage for journal entries, keyed by user."""

    def load_all_entries(self, username: str) -> list[JournalEntry]: ...

    def save_entry(self, entry: JournalEntry, username: str) -> None: ...

    def delete_entry(self, entry_id: str) -> None: ...

    def delete_all_entries(self, username: str) -> None: ...


class SqlJournalStore:
    """
    JournalStore backed by the journal_entries and journal_lines tables.

    The caller owns the session and decides when to commit.
    """

    def __init__(self, db: Session):
        self.db = db

    def load_all_entries(self, username: str) -> list[JournalEntry]:
        """Return the user's entries, newest first."""
        records = self.db.execute(
            select(JournalEntryRecord)
            .where(JournalEntryRecord.username == username)
            .options(selectinload(JournalEntryRecord.lines))
            .order_by(
                JournalEntryRecord.date.desc(), JournalEntryRecord.id.desc()
            )
        ).scalars().all()
        return [self._to_entry(record) for record in records]

    def save_entry(self, entry: JournalEntry, username: str) -> None:
        """
        Insert or replace an entry.

        Saving an existing id replaces its header and all of its
        lines, which is how an edit is persisted.
        """
        record = self.db.get(JournalEntryRecord, entry.id)
        if record is not None and record.username != username:
            raise DuplicateEntryError(entry.id)
        if record is None:
            record = JournalEntryRecord(id=entry.id)
            self.db.add(record)

        record.date = entry.date
        record.description = entry.description
        record.username = username
        record.lines = [
            JournalLineRecord(
                position=position,
                account_name=line.account_name,
                debit=line.debit,
                credit=line.credit,
            )
            for position, line in enumerate(entry.lines)
        ]
        self.db.flush()

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry and its lines. Unknown ids are ignored."""
        record = self.db.get(JournalEntryRecord, entry_id)
        if record is None:
            return
        self.db.delete(record)
        self.db.flush()

    def delete_all_entries(self, username: str) -> None:
        ids = select(JournalEntryRecord.id).where(
            JournalEntryRecord.username == username
        )
        self.db.execute(
            delete(JournalLineRecord).where(JournalLineRecord.journal_id.in_(ids))
        )
        self.db.execute(
            delete(JournalEntryRecord).where(
                JournalEntryRecord.username == username
            )
        )
        self.db.flush()
        logger.info("Deleted all journal entries for %s", username)

    @staticmethod
    def _to_entry(record: JournalEntryRecord) -> JournalEntry:
        return JournalEntry(
            id=record.id,
            date=record.date,
            description=record.description,
            lines=[
                JournalLine(
                    account_name=line.account_name,
                    debit=line.debit,
                    credit=line.credit,
                )
                for line in record.lines
            ],
        )
