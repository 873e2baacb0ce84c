"""
StudySphere Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the test suite.

Fixtures:
    ├── db_engine:      in-memory SQLite engine with all tables created
    ├── db_session:     AsyncSession bound to that engine
    ├── seeded_lessons: a small catalog inserted into db_session
    ├── images_dir:     temporary IMAGES_DIR with one PNG in it
    └── test_client:    HTTPX AsyncClient with get_db_session overridden

Services run real queries against SQLite through aiosqlite, so no
PostgreSQL server is needed.
"""

import os
import tempfile

# Must be set before anything imports app.config
_test_dir = tempfile.mkdtemp(prefix="studysphere_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/unused.db"
os.environ["IMAGES_DIR"] = os.path.join(_test_dir, "images")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_db_session
from app.models.lesson import Lesson

# Smallest valid PNG: signature + IHDR + IDAT + IEND for a 1x1 pixel
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)

SAMPLE_LESSONS = [
    {"id": 1, "subject": "Math", "location": "London", "price": 100.0, "spaces": 5, "image": "math.png"},
    {"id": 2, "subject": "English", "location": "Oxford", "price": 80.0, "spaces": 5, "image": "english.png"},
    {"id": 3, "subject": "Music", "location": "Bristol", "price": 90.0, "spaces": 3, "image": "music.png"},
    {"id": 4, "subject": "Chemistry", "location": "Manchester", "price": 120.0, "spaces": 0, "image": "chemistry.png"},
]


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test; StaticPool keeps one shared connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_lessons(db_session):
    """Inserts SAMPLE_LESSONS and returns them as dicts."""
    db_session.add_all([Lesson(**data) for data in SAMPLE_LESSONS])
    await db_session.commit()
    return [dict(data) for data in SAMPLE_LESSONS]


@pytest.fixture
def images_dir(tmp_path):
    """A temporary images directory containing math.png and a nested icon."""
    root = tmp_path / "images"
    (root / "icons").mkdir(parents=True)
    (root / "math.png").write_bytes(PNG_BYTES)
    (root / "icons" / "star.png").write_bytes(PNG_BYTES)
    (tmp_path / "secret.png").write_bytes(PNG_BYTES)
    return root


@pytest_asyncio.fixture
async def test_client(db_session):
    """
    HTTPX AsyncClient talking to the app in-process.

    Every request shares the test's db_session, so data seeded by a test
    is visible to the routes and route writes are visible to assertions.
    """
    from app.main import app

    async def override_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
