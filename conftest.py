# conftest.py

from datetime import datetime, timedelta, timezone

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_db
from main import app
from models import Base, Category, Post

# Use a separate in-memory database; StaticPool keeps one shared connection
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def session_factory():
    test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)

    # Override the get_db dependency for testing
    async def override_get_db() -> AsyncSession:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield factory
    app.dependency_overrides.pop(get_db, None)
    await test_engine.dispose()


# Fixture for the async HTTP client
@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncClient:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Fixture to add sample data: 6 posts, id 6 is the newest
@pytest_asyncio.fixture(scope="function")
async def add_sample_data(session_factory):
    base = datetime(2025, 5, 10, tzinfo=timezone.utc)
    async with session_factory() as session:
        async with session.begin():
            session.add_all([
                Category(id=1, name="tech", description="Technology"),
                Category(id=2, name="python", description="", parent_id=1),
                Category(id=3, name="life", description=""),
            ])
            session.add_all([
                Post(id=i, title=title, content=content, category_id=category_id,
                     created_at=base + timedelta(hours=i), updated_at=base + timedelta(hours=i))
                for i, (title, content, category_id) in enumerate([
                    ("SQLAlchemy", "SQLAlchemy is great for Python ORM.", 2),
                    ("FastAPI", "FastAPI provides amazing speed.", 1),
                    ("Asyncio", "Async Python with asyncio is powerful.", 2),
                    ("Another", "Another post about Python.", 2),
                    ("Life hacks", "Simple life hacks.", 3),
                    ("More Python", "More Python content here.", None),
                ], start=1)
            ])
