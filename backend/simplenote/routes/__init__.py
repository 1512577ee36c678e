# Routes package init
"""
SimpleNote: API Routes Package
==============================

Route Inventory:
    - pages.py:   GET    /                   (HTML page)
    - notes.py:   GET    /api/notes          (list notes)
                  POST   /api/notes          (create from JSON or form)
                  DELETE /api/notes/{id}     (delete one note)
    - health.py:  GET    /health             (database connectivity)
"""
