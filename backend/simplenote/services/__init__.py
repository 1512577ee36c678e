# Services package init
"""
SimpleNote: Services Layer
==========================

Service Inventory:
    - note_store.py: NoteStore interface and its SQLAlchemy implementation
    - page.py:       PageRenderer for the single HTML page
"""
