"""Full graph router tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from httpx import AsyncClient

FULL_URL = "/tenants/tenant-1/projects/project-1/graph"

GraphDocument = Callable[..., dict[str, Any]]


class TestCreateFullGraph:
    """Tests for POST /graph."""

    async def test_create(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        response = await client.post(FULL_URL, json=graph_document())

        assert response.status_code == 201
        data = response.json()["data"]
        assert set(data["agents"]) == {"router", "worker", "billing-service"}
        router = data["agents"]["router"]
        assert router["canTransferTo"] == ["worker"]
        assert router["canDelegateTo"] == ["billing-service"]
        assert data["agents"]["billing-service"]["baseUrl"] == "https://billing.example.com/agent"

    async def test_transfer_to_external_agent_round_trips(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        document = graph_document()
        document["agents"]["router"]["canTransferTo"] = ["worker", "billing-service"]

        created = await client.post(FULL_URL, json=document)
        updated = await client.put(f"{FULL_URL}/graph-1", json=document)
        fetched = await client.get(f"{FULL_URL}/graph-1")

        assert created.status_code == 201
        assert updated.status_code == 200
        for response in (created, updated, fetched):
            router = response.json()["data"]["agents"]["router"]
            assert sorted(router["canTransferTo"]) == ["billing-service", "worker"]

    async def test_create_twice(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        await client.post(FULL_URL, json=graph_document())

        response = await client.post(FULL_URL, json=graph_document())

        assert response.status_code == 409
        assert response.json()["detail"] == "Agent graph 'graph-1' already exists"

    async def test_unknown_default_agent(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        response = await client.post(FULL_URL, json=graph_document(defaultAgentId="ghost"))

        assert response.status_code == 400
        assert response.json()["detail"] == "Default agent 'ghost' does not exist in agents"

    async def test_unknown_project(
        self, client: AsyncClient, graph_document: GraphDocument
    ) -> None:
        response = await client.post(FULL_URL, json=graph_document())

        assert response.status_code == 404

    async def test_missing_tool_is_skipped(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        """A tool reference that does not resolve does not abort the graph."""
        document = graph_document()
        document["agents"]["worker"]["canUse"] = [{"toolId": "ghost-tool"}]

        response = await client.post(FULL_URL, json=document)

        assert response.status_code == 201
        assert response.json()["data"]["agents"]["worker"]["canUse"] == []


class TestUpdateFullGraph:
    """Tests for PUT /graph/{graphId}."""

    async def test_put_creates_then_updates(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        created = await client.put(f"{FULL_URL}/graph-1", json=graph_document())
        updated = await client.put(
            f"{FULL_URL}/graph-1", json=graph_document(name="Renamed graph")
        )

        assert created.status_code == 201
        assert updated.status_code == 200
        assert updated.json()["data"]["name"] == "Renamed graph"

    async def test_id_mismatch(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        response = await client.put(f"{FULL_URL}/graph-2", json=graph_document())

        assert response.status_code == 400
        assert response.json()["detail"] == "Graph ID mismatch"

    async def test_removes_agents_missing_from_definition(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        await client.post(FULL_URL, json=graph_document())
        document = graph_document()
        del document["agents"]["worker"]
        document["agents"]["router"]["canTransferTo"] = []

        response = await client.put(f"{FULL_URL}/graph-1", json=document)

        agents = response.json()["data"]["agents"]
        assert set(agents) == {"router", "billing-service"}
        assert agents["router"].get("canTransferTo", []) == []

    async def test_invalid_transfer_target(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        await client.post(FULL_URL, json=graph_document())
        document = graph_document()
        document["agents"]["worker"]["canTransferTo"] = ["ghost"]

        response = await client.put(f"{FULL_URL}/graph-1", json=document)

        assert response.status_code == 400
        assert response.json()["code"] == "bad_request"


class TestReadAndDeleteFullGraph:
    """Tests for GET and DELETE /graph/{graphId}."""

    async def test_get(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        await client.post(FULL_URL, json=graph_document())

        response = await client.get(f"{FULL_URL}/graph-1")

        assert response.status_code == 200
        assert response.json()["data"]["defaultAgentId"] == "router"

    async def test_get_missing(self, client: AsyncClient, project: object) -> None:
        response = await client.get(f"{FULL_URL}/ghost")

        assert response.status_code == 404
        assert response.json()["detail"] == "Agent graph 'ghost' not found"

    async def test_delete(
        self, client: AsyncClient, project: object, graph_document: GraphDocument
    ) -> None:
        await client.post(FULL_URL, json=graph_document())

        assert (await client.delete(f"{FULL_URL}/graph-1")).status_code == 204
        assert (await client.delete(f"{FULL_URL}/graph-1")).status_code == 404
        assert (await client.get(f"{FULL_URL}/graph-1")).status_code == 404
