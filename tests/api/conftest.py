"""API test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.api.dependencies import get_db
from agents_manage.api.main import create_app

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

PROJECT_URL = "/tenants/tenant-1/projects/project-1"
GRAPH_URL = f"{PROJECT_URL}/graphs/graph-1"


@pytest.fixture
def app(db_session: AsyncSession) -> FastAPI:
    """Create test FastAPI app backed by the in-memory database."""
    app = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def graph(client: AsyncClient, project: object) -> dict:
    """A stored graph with two agents, agent-a and agent-b."""
    response = await client.post(
        f"{PROJECT_URL}/agent-graphs",
        json={"id": "graph-1", "name": "Graph one", "defaultAgentId": "agent-a"},
    )
    assert response.status_code == 201
    graph_data = response.json()["data"]
    for agent_id in ("agent-a", "agent-b"):
        response = await client.post(
            f"{GRAPH_URL}/agents",
            json={"id": agent_id, "name": agent_id.title(), "prompt": "Be helpful."},
        )
        assert response.status_code == 201
    return graph_data
