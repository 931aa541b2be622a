"""Bundled client serving — production only, never shadowing the API."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from bookshelf.config import settings
from bookshelf.db.engine import get_db
from bookshelf.main import create_app


@pytest.fixture()
def client_build(tmp_path):
    build = tmp_path / "build"
    build.mkdir()
    (build / "index.html").write_text("<html><body>bookshelf client</body></html>")
    return build


@pytest_asyncio.fixture()
async def make_client(session_factory, monkeypatch, client_build):
    """Build a fresh app under the given environment and return a client."""
    clients = []

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def _make(environment: str, build_dir=None) -> AsyncClient:
        monkeypatch.setattr(settings, "environment", environment)
        monkeypatch.setattr(settings, "client_build_dir", str(build_dir or client_build))
        app = create_app()
        app.dependency_overrides[get_db] = override_get_db
        ac = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(ac)
        return ac

    yield _make

    for ac in clients:
        await ac.aclose()


@pytest.mark.asyncio
async def test_production_serves_client_without_shadowing_api(make_client):
    client = await make_client("production")

    r = await client.get("/")
    assert r.status_code == 200
    assert "bookshelf client" in r.text

    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["server"] == "ok"

    r = await client.post("/graphql", json={"query": "{ __typename }"})
    assert r.status_code == 200
    assert r.json()["data"]["__typename"] == "Query"


@pytest.mark.asyncio
async def test_development_does_not_serve_client(make_client):
    client = await make_client("development")

    r = await client.get("/")
    assert r.status_code == 404

    r = await client.get("/api/health")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_production_without_build_dir_does_not_mount(make_client, tmp_path):
    client = await make_client("production", build_dir=tmp_path / "missing")

    r = await client.get("/")
    assert r.status_code == 404
