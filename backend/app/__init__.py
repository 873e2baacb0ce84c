"""
StudySphere Backend: Application Package Initializer
====================================================

What: Marks the `app` directory as a Python package.
Who:  Used by uvicorn (`uvicorn app.main:app`), Alembic and pytest.

Architecture Note:
    The backend is a thin layered CRUD service:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Catalog / Orders)     │  ← one query per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls, services talk to the database
    and raise application exceptions, and main.py maps those exceptions to
    JSON error responses.
"""

__version__ = "1.0.0"
