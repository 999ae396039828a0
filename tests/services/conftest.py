"""Service test fixtures — async DB, seeded colleges, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Identity travels as X-User-* headers, exactly as the auth gateway sends it

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from campus_connect.db.base import Base
from campus_connect.infrastructure.database import get_db, DatabaseSessionManager
from campus_connect.models.college import College
from campus_connect.models.post import Post
from campus_connect.models.profile import Profile
import campus_connect.infrastructure.database as db_module
from campus_connect.main import app

from tests.services.identity import identity_headers


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def colleges(test_db):
    """Two colleges keyed by short name."""
    rows = {
        "exampleu": College(name="Example University", domain="student.exampleu.edu"),
        "state": College(name="State College", domain="college.edu"),
    }
    test_db.add_all(rows.values())
    await test_db.commit()
    return rows


@pytest.fixture
async def student(test_db, colleges):
    """An affiliated, verified profile at Example University."""
    profile = Profile(
        id=uuid.uuid4(),
        email="jane@student.exampleu.edu",
        display_name="Jane Doe",
        college_id=colleges["exampleu"].id,
        is_verified=True,
    )
    test_db.add(profile)
    await test_db.commit()
    return profile


@pytest.fixture
def student_headers(student) -> dict:
    return identity_headers(student.id, student.email)


@pytest.fixture
async def seed_posts(test_db, student, colleges):
    """One post of each type, oldest first: article, photo, video."""
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    posts = [
        Post(
            author_id=student.id, college_id=colleges["exampleu"].id,
            type="article", title="Welcome", content="Hello campus",
            created_at=base,
        ),
        Post(
            author_id=student.id, college_id=colleges["exampleu"].id,
            type="photo", media_url="https://cdn.example/p.jpg",
            media_type="image/jpeg", created_at=base + timedelta(hours=1),
        ),
        Post(
            author_id=student.id, college_id=colleges["exampleu"].id,
            type="video", media_url="https://cdn.example/v.mp4",
            media_type="video/mp4", created_at=base + timedelta(hours=2),
        ),
    ]
    test_db.add_all(posts)
    await test_db.commit()
    return posts
