"""
StudySphere Backend: Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   One engine per process; one AsyncSession per request. The dependency
       commits on success and rolls back on error.
Who:   Route handlers via Depends(get_db_session); services receive the session.

Connection pooling is whatever the engine provides, sized from settings.
No session is shared across requests and failed queries are not retried.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    echo=settings.log_level == "DEBUG",
)

# expire_on_commit=False: services read attributes after committing
# (order placement commits mid-request), which must not trigger a reload.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives Alembic."""
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits whatever the handler left pending
        4. On error: rolls back the pending work and re-raises

    Work a service has already committed (see OrderService.place_order)
    is not undone by the rollback.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """Closes all pooled connections; called on application shutdown."""
    await engine.dispose()
