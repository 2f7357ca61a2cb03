"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.models import Project
from agents_manage.db.repository import ProjectRepository
from agents_manage.db.scopes import GraphScope, ProjectScope, TenantScope
from agents_manage.db.session import DatabaseSessionManager

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TENANT_ID = "tenant-1"
PROJECT_ID = "project-1"
GRAPH_ID = "graph-1"


@pytest.fixture
async def db_manager() -> AsyncGenerator[DatabaseSessionManager, None]:
    """In-memory database with every table created."""
    manager = DatabaseSessionManager(TEST_DATABASE_URL)
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
async def db_session(db_manager: DatabaseSessionManager) -> AsyncGenerator[AsyncSession, None]:
    """Database session bound to the in-memory database."""
    async with db_manager.session_factory() as session:
        yield session


@pytest.fixture
def tenant_scope() -> TenantScope:
    return TenantScope(TENANT_ID)


@pytest.fixture
def project_scope() -> ProjectScope:
    return ProjectScope(TENANT_ID, PROJECT_ID)


@pytest.fixture
def graph_scope() -> GraphScope:
    return GraphScope(TENANT_ID, PROJECT_ID, GRAPH_ID)


@pytest.fixture
async def project(db_session: AsyncSession) -> Project:
    """A stored, empty project."""
    instance = await ProjectRepository(db_session).create(
        tenant_id=TENANT_ID,
        id=PROJECT_ID,
        name="Test project",
        description="Project used in tests",
    )
    await db_session.commit()
    return instance


def make_graph_definition(graph_id: str = GRAPH_ID, **overrides: Any) -> dict[str, Any]:
    """Full graph document with a router agent, a worker and an external agent.

    Args:
        graph_id: Graph identifier
        **overrides: Top-level keys replacing the defaults

    Returns:
        camelCase graph document
    """
    definition: dict[str, Any] = {
        "id": graph_id,
        "name": "Support graph",
        "description": "Routes support questions",
        "defaultAgentId": "router",
        "agents": {
            "router": {
                "id": "router",
                "name": "Router",
                "description": "Entry point",
                "prompt": "Route the question to the right agent.",
                "canTransferTo": ["worker"],
                "canDelegateTo": ["billing-service"],
            },
            "worker": {
                "id": "worker",
                "name": "Worker",
                "prompt": "Answer the question.",
                "canTransferTo": ["router"],
            },
            "billing-service": {
                "id": "billing-service",
                "name": "Billing service",
                "description": "Remote billing agent",
                "baseUrl": "https://billing.example.com/agent",
            },
        },
    }
    definition.update(overrides)
    return definition


@pytest.fixture
def graph_document() -> Callable[..., dict[str, Any]]:
    """Factory for full graph documents."""
    return make_graph_definition
