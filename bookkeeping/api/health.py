"""
Health check endpoint.

Reports the running version and whether the book's tables
can be read. A failed check degrades the status instead of
returning 500, so monitors always get a parseable body.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookkeeping.config import get_settings
from bookkeeping.models import Account, JournalEntryRecord
from bookkeeping.models.base import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    settings = get_settings()
    try:
        accounts = db.scalar(select(func.count()).select_from(Account))
        entries = db.scalar(
            select(func.count()).select_from(JournalEntryRecord)
        )
        database = "healthy"
    except SQLAlchemyError:
        logger.exception("Health check could not read the ledger tables")
        accounts = entries = None
        database = "unhealthy"

    return {
        "status": "healthy" if database == "healthy" else "degraded",
        "service": "bookkeeping-ledger",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": database,
        "accounts": accounts,
        "journal_entries": entries,
    }
