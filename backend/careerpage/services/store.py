"""
Shared read/write policy for the persistence services.

Reads degrade to the sample dataset; writes surface every store error.
"""
import asyncio
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careerpage.exceptions import ConflictError, RemoteUnavailableError

logger = logging.getLogger(__name__)

# Errors that mean "the store could not answer" rather than a bug in our query
READ_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


def require_db(db: Optional[AsyncSession]) -> AsyncSession:
    """Writes need a configured store."""
    if db is None:
        raise RemoteUnavailableError("Database is not configured; changes cannot be saved.")
    return db


async def commit_write(db: AsyncSession, action: str) -> None:
    """
    Commit a pending write.

    Rolls back and raises ConflictError on uniqueness violations,
    RemoteUnavailableError on any other store failure.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Conflict while trying to {action}: {e.orig}")
        raise ConflictError(f"Could not {action}: a record with the same key already exists.") from e
    except READ_ERRORS as e:
        await db.rollback()
        logger.error(f"Store error while trying to {action}: {e}", exc_info=True)
        raise RemoteUnavailableError(f"Could not {action}: the database is unavailable.") from e


async def flush_write(db: AsyncSession, action: str) -> None:
    """
    Send a pending write without committing, so related rows can join the
    same transaction. Errors are mapped like commit_write.
    """
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Conflict while trying to {action}: {e.orig}")
        raise ConflictError(f"Could not {action}: a record with the same key already exists.") from e
    except READ_ERRORS as e:
        await db.rollback()
        logger.error(f"Store error while trying to {action}: {e}", exc_info=True)
        raise RemoteUnavailableError(f"Could not {action}: the database is unavailable.") from e


async def execute_for_write(db: AsyncSession, statement, action: str):
    """Run the lookup a write depends on; a failing store means the write cannot happen."""
    try:
        return await db.execute(statement)
    except READ_ERRORS as e:
        logger.error(f"Store error while trying to {action}: {e}", exc_info=True)
        raise RemoteUnavailableError(f"Could not {action}: the database is unavailable.") from e
