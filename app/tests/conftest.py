import pytest_asyncio
import uuid
import os
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only-min-32-chars")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SKIP_CONFIG_VALIDATION", "true")

os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"

import sys
from pathlib import Path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.main import app
from app.core.auth import create_access_token
from app.database import enable_sqlite_foreign_keys, get_db
from app.models import Base

TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

@pytest_asyncio.fixture
async def async_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()

        db_file = "./test.db"
        if os.path.exists(db_file):
            os.remove(db_file)

    except Exception as e:
        print(f"Test cleanup warning: {e}")

@pytest_asyncio.fixture
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    async_session_maker = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

@pytest_asyncio.fixture
async def async_client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        timeout=30.0
    ) as ac:
        yield ac

    app.dependency_overrides.clear()

def _get_unique_owner_id(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"

def auth_headers_for(owner_id: str) -> dict[str, str]:
    token = create_access_token({"sub": owner_id})
    return {"Authorization": f"Bearer {token}"}

@pytest_asyncio.fixture
async def owner_id():
    return _get_unique_owner_id()

@pytest_asyncio.fixture
async def second_owner_id():
    return _get_unique_owner_id("other")

@pytest_asyncio.fixture
async def auth_headers(owner_id):
    return auth_headers_for(owner_id)

@pytest_asyncio.fixture
async def second_auth_headers(second_owner_id):
    return auth_headers_for(second_owner_id)

@pytest_asyncio.fixture
async def test_schedule_data():
    return {
        "timezone": "America/New_York",
        "availabilities": [
            {"dayOfWeek": "monday", "startTime": "9:00", "endTime": "12:00"},
            {"dayOfWeek": "monday", "startTime": "13:00", "endTime": "17:00"},
            {"dayOfWeek": "wednesday", "startTime": "10:00", "endTime": "11:30"},
        ],
    }

@pytest_asyncio.fixture
async def test_event_data():
    unique_id = str(uuid.uuid4())[:8]
    return {
        "name": f"Intro Call {unique_id}",
        "description": "A short introductory call",
        "durationInMinutes": 30,
    }
