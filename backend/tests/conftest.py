"""
SimpleNote: Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the test suite.
How:   Endpoint tests run the real app with an in-memory NoteStore injected
       through create_app(); store tests run SQLNoteStore on aiosqlite.

Fixtures:
    memory_store:  InMemoryNoteStore, fresh per test
    page:          PageRenderer over the packaged template
    test_app:      create_app() wired to memory_store and page
    test_client:   HTTPX AsyncClient over ASGITransport
    sql_store:     SQLNoteStore on a temporary SQLite file, schema ensured
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import List, Optional

# Point the default settings at SQLite BEFORE any simplenote import so the
# module-level app never tries to reach PostgreSQL
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="simplenote_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from simplenote.config import Settings
from simplenote.exceptions import StartupError, StorageError
from simplenote.main import create_app
from simplenote.schemas.note import NoteResponse
from simplenote.services.note_store import NoteStore, SQLNoteStore
from simplenote.services.page import PageRenderer


class InMemoryNoteStore(NoteStore):
    """
    NoteStore fake with the same ordering and id semantics as SQLNoteStore.

    Each insert is stamped one second after the previous one so ordering
    tests do not depend on clock resolution. `fail_with` makes every
    statement raise, simulating a broken database.
    """

    def __init__(self):
        self.notes: List[NoteResponse] = []
        self.next_id = 1
        self.clock = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        self.fail_with: Optional[Exception] = None
        self.schema_ready = False
        self.closed = False
        self.deleted_ids: List[int] = []

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def ensure_schema(self) -> None:
        if self.fail_with is not None:
            raise StartupError(message="Could not prepare the notes table")
        self.schema_ready = True

    async def list_notes(self) -> List[NoteResponse]:
        self._check()
        return sorted(self.notes, key=lambda n: (n.created_at, n.id), reverse=True)

    async def insert_note(self, title: str, body: str) -> int:
        self._check()
        note = NoteResponse(id=self.next_id, title=title, body=body, created_at=self.clock)
        self.notes.append(note)
        self.next_id += 1
        self.clock += timedelta(seconds=1)
        return note.id

    async def delete_note(self, note_id: int) -> None:
        self._check()
        self.deleted_ids.append(note_id)
        self.notes = [n for n in self.notes if n.id != note_id]

    async def ping(self) -> bool:
        return self.fail_with is None

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def memory_store():
    return InMemoryNoteStore()


@pytest.fixture
def broken_store():
    """Store whose every statement raises StorageError with backend detail."""
    store = InMemoryNoteStore()
    store.fail_with = StorageError(
        message="A storage error occurred. Please try again later.",
        context={"original_error": 'relation "notes" does not exist'},
    )
    return store


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def page(settings):
    return PageRenderer(settings.template_dir, settings.template_name)


@pytest.fixture
def test_app(settings, memory_store, page):
    return create_app(settings=settings, store=memory_store, page=page)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    """SQLNoteStore on a throwaway SQLite database with the table created."""
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    store = SQLNoteStore.from_settings(settings)
    await store.ensure_schema()
    yield store
    await store.close()
