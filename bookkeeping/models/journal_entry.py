"""
Journal entry models.

A journal entry belongs to one user and owns its lines.
Deleting an entry removes its lines through the
ON DELETE CASCADE foreign key, and through the ORM cascade
when the delete goes through the session.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base


class JournalEntryRecord(Base):
    """Stored header of a journal entry."""

    __tablename__ = "journal_entries"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )

    lines: Mapped[list["JournalLineRecord"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="JournalLineRecord.position",
    )

    def __repr__(self) -> str:
        return f"<JournalEntryRecord {self.id} {self.date:%Y-%m-%d}>"


class JournalLineRecord(Base):
    """
    One debit/credit line of a stored journal entry.

    account_name is a lookup key into the chart of accounts,
    not a foreign key: lines may outlive a deleted account,
    and they simply drop out of the ledger projection.
    """

    __tablename__ = "journal_lines"

    id: Mapped[int] = mapped_column(primary_key=True)
    journal_id: Mapped[str] = mapped_column(
        ForeignKey("journal_entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    account_name: Mapped[str] = mapped_column(String(100), nullable=False)
    debit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    credit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )

    entry: Mapped["JournalEntryRecord"] = relationship(back_populates="lines")

    def __repr__(self) -> str:
        return (
            f"<JournalLineRecord {self.account_name} "
            f"Dr {self.debit} Cr {self.credit}>"
        )
