"""Test fixtures — a fresh in-memory database per test.

Learn: each test gets its own SQLite engine (StaticPool keeps the single
in-memory connection alive), with tables created from the ORM metadata.
The HTTP client overrides get_db to hand out sessions on that engine, and
get_token_service to sign with a fixed test secret. Auth is NOT mocked:
tests go through signup → login → bearer token like a real client.
"""

from datetime import timedelta

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bookshelf.auth.dependencies import get_token_service
from bookshelf.auth.tokens import TokenService
from bookshelf.db.engine import create_tables, get_db
from bookshelf.main import app

TEST_DB_URL = "sqlite+aiosqlite://"
TEST_SECRET = "test-secret-not-for-production"


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def tokens():
    return TokenService(secret=TEST_SECRET, algorithm="HS256", expires_in=timedelta(hours=2))


@pytest_asyncio.fixture()
async def client(session_factory, tokens):
    """HTTP client against the real app, with test DB and test signing key."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: tokens

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def graphql(client):
    """POST a GraphQL document; returns the decoded response body."""

    async def _run(query: str, variables: dict | None = None, token: str | None = None) -> dict:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        r = await client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert r.status_code == 200, r.text
        return r.json()

    return _run
