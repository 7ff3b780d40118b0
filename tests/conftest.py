"""
Shared fixtures: an in-memory SQLite database and an in-process API client.
"""

import os

# Must be set before ``config.settings`` is imported anywhere.
os.environ.setdefault("JWT_SECRET", "test-signing-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from database.models import Base
from database.session import get_db_session


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def client(session_factory):
    from main import app

    async def _session_override():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session_override
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def login_as(client):
    """Register a user, log in, and return auth headers plus the user's id."""
    from auth.jwt import verify_token

    async def _login_as(name: str, email: str, pswd: str = "s3cret") -> dict:
        resp = await client.post("/register", json={"name": name, "email": email, "pswd": pswd})
        assert resp.status_code == 201, resp.text
        resp = await client.post("/login", json={"email": email, "pswd": pswd})
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        claims = verify_token(token)
        return {"headers": {"Authorization": f"Bearer {token}"}, "user_id": claims.user_id, "token": token}

    return _login_as
