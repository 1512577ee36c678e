"""
SimpleNote: Note SQLAlchemy Model
=================================

What:  ORM model for the `notes` table.
Who:   Used by SQLNoteStore for every statement and for schema creation.

Table Design:
    - id:          SERIAL primary key, assigned by the database
    - title/body:  TEXT NOT NULL DEFAULT '' (may be empty, never NULL)
    - created_at:  TIMESTAMPTZ NOT NULL DEFAULT now(), the listing sort key
"""

from datetime import datetime

from sqlalchemy import Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from simplenote.database import Base


class Note(Base):
    """
    A persisted note.

    Lifecycle:
        1. Inserted with title/body; id and created_at come from the server
        2. Read-only afterwards
        3. Deleted permanently (no soft delete, no update)
    """

    __tablename__ = "notes"

    # Integer primary key without Identity() renders as SERIAL on PostgreSQL
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    # No Python-side default: the insertion time is the database's clock
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
