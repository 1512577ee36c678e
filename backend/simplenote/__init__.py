"""
SimpleNote: Application Package Initializer
===========================================

What: Marks the `simplenote` directory as a Python package.
Who:  Used by uvicorn (`simplenote.main:app`), pytest, and the console script.

Architecture Note:
    The service is a thin layered stack:

    ┌─────────────────────────────────────┐
    │      Routes (HTTP layer)            │  ← status codes, request parsing
    ├─────────────────────────────────────┤
    │      Store (persistence)            │  ← NoteStore / SQLNoteStore
    ├─────────────────────────────────────┤
    │      Models & Schemas (data)        │  ← SQLAlchemy table + Pydantic
    └─────────────────────────────────────┘

    The store and the page renderer are created once and handed to
    `create_app()`, so tests can swap either one out.
"""

__version__ = "1.0.0"
