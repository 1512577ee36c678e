"""
SimpleNote: Note Store
======================

What:  The storage accessor. `NoteStore` is the contract the routes depend
       on; `SQLNoteStore` implements it over an async SQLAlchemy engine.
How:   Every operation opens its own session, runs one statement sequence,
       and commits. Driver errors are logged and re-raised as StorageError
       so no backend detail reaches a client.
Who:   Created once by `create_app()` and shared across requests through
       `app.state.store`; the engine's pool is safe for concurrent use.

Statement inventory:
    ensure_schema  CREATE TABLE IF NOT EXISTS notes (...)
    list_notes     SELECT ... ORDER BY created_at DESC, id DESC
    insert_note    INSERT INTO notes (title, body) ... RETURNING id
    delete_note    DELETE FROM notes WHERE id = :id
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from sqlalchemy import delete, desc, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from simplenote.config import Settings
from simplenote.database import Base, build_engine, build_session_factory
from simplenote.exceptions import StartupError, StorageError
from simplenote.models.note import Note
from simplenote.schemas.note import NoteResponse

logger = logging.getLogger(__name__)


class NoteStore(ABC):
    """
    Abstract interface for note persistence.

    Contract:
        - list_notes() returns newest first and an empty list when no rows exist
        - insert_note() returns the id assigned by the store
        - delete_note() does not distinguish "deleted" from "did not exist"
        - Backend failures surface as StorageError (StartupError for schema setup)
    """

    @abstractmethod
    async def ensure_schema(self) -> None:
        """Create the notes table if it does not exist. Raises StartupError."""
        ...

    @abstractmethod
    async def list_notes(self) -> List[NoteResponse]:
        ...

    @abstractmethod
    async def insert_note(self, title: str, body: str) -> int:
        ...

    @abstractmethod
    async def delete_note(self, note_id: int) -> None:
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight connectivity check used by /health."""
        ...

    async def close(self) -> None:
        """Release any pooled resources. No-op by default."""
        return None


class SQLNoteStore(NoteStore):
    """
    NoteStore backed by an async SQLAlchemy engine.

    PostgreSQL via asyncpg in production; any async dialect works (the test
    suite runs it on aiosqlite).
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLNoteStore":
        return cls(build_engine(settings))

    async def ensure_schema(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        except Exception as e:
            # Connect errors arrive unwrapped from the driver (OSError for a
            # refused socket, TypeError for connect arguments it rejects);
            # all of them abort startup the same way
            logger.error("Schema preparation failed: %s", str(e))
            raise StartupError(
                message="Could not prepare the notes table",
                context={"original_error": str(e)},
            ) from e
        logger.info("Notes table ready")

    async def list_notes(self) -> List[NoteResponse]:
        query = select(Note).order_by(desc(Note.created_at), desc(Note.id))
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                notes = list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [NoteResponse.model_validate(note) for note in notes]

    async def insert_note(self, title: str, body: str) -> int:
        try:
            async with self._session_factory() as session:
                note = Note(title=title, body=body)
                session.add(note)
                # flush assigns the primary key (INSERT ... RETURNING id)
                await session.flush()
                note_id = note.id
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error inserting note: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %d created", note_id)
        return note_id

    async def delete_note(self, note_id: int) -> None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(delete(Note).where(Note.id == note_id))
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise StorageError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Note %d delete requested (%d row(s) removed)", note_id, result.rowcount)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database unreachable: %s", str(e))
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()

