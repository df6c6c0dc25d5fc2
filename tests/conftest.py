import os
import random
import string

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# FORCE TESTING MODE
# Must be set BEFORE importing labdesk.main so settings and the
# engine pick up the in-memory SQLite database.
# ------------------------------------------------------------------
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-labdesk-suite"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JOB_SECRET"] = "test-job-secret"
os.environ["BOOKING_OVERLAP_POLICY"] = "allow"

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from labdesk.main import app
from labdesk.api.deps import get_db_session
from labdesk.core.security import create_access_token
from labdesk.models import (  # noqa: F401
    user, computer, booking, issue, session_log,
    software, maintenance, notice, notification,
)
from labdesk.models.enums import AppRole
from labdesk.services.auth_service import create_user


def random_str(prefix=""):
    return f"{prefix}{''.join(random.choices(string.ascii_lowercase + string.digits, k=6))}"


# ------------------------------------------------------------------
# DATABASE (fresh in-memory database per test)
# ------------------------------------------------------------------
@pytest_asyncio.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


# ------------------------------------------------------------------
# USERS
# ------------------------------------------------------------------
@pytest.fixture
def make_user(session_maker):
    """
    Creates an account with the given role and returns
    (user, auth headers).
    """
    async def _make(role=AppRole.student, full_name=None, password="password123"):
        email = f"{random_str('user')}@lab.edu"
        async with session_maker() as session:
            account = await create_user(
                session,
                full_name=full_name or f"{role.value.title()} User",
                email=email,
                password=password,
                role=role,
            )
        token = create_access_token(subject=str(account.id))
        return account, {"Authorization": f"Bearer {token}"}

    return _make


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user(AppRole.admin)


@pytest_asyncio.fixture
async def staff(make_user):
    return await make_user(AppRole.lab_staff)


@pytest_asyncio.fixture
async def student(make_user):
    return await make_user(AppRole.student)


@pytest_asyncio.fixture
async def lab_computer(client, admin):
    _, headers = admin
    res = await client.post(
        "/api/computers",
        json={"system_id": random_str("PC-"), "name": "Lab PC 01", "location": "Room 101"},
        headers=headers,
    )
    assert res.status_code == 201
    return res.json()
