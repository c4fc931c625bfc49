"""
PostBoard Backend: Application Package
======================================

What: Users and posts CRUD backend built around an explicit request pipeline.
Who:  Imported by uvicorn (``postboard.main:app``), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes (pipeline route tables)    │  ← which stages run for which path
    ├─────────────────────────────────────┤
    │   Pipeline (chain, router, boundary)│  ← Continue / Respond / Fail
    ├─────────────────────────────────────┤
    │   Services (resource handlers)      │  ← CRUD semantics
    ├─────────────────────────────────────┤
    │   Stores (memory or database)       │  ← record persistence
    └─────────────────────────────────────┘

    FastAPI is only the transport: it matches the HTTP path and hands the
    already-matched pipeline route a RequestContext.
"""

__version__ = "1.0.0"
