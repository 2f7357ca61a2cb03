"""Agent relation and external agent router tests."""

from __future__ import annotations

from httpx import AsyncClient

GRAPH_URL = "/tenants/tenant-1/projects/project-1/graphs/graph-1"
RELATIONS_URL = f"{GRAPH_URL}/agent-relations"
EXTERNAL_URL = f"{GRAPH_URL}/external-agents"

TRANSFER = {"sourceAgentId": "agent-a", "targetAgentId": "agent-b", "relationType": "transfer"}
DELEGATE_EXTERNAL = {
    "sourceAgentId": "agent-a",
    "externalAgentId": "billing",
    "relationType": "delegate",
}


class TestAgentRelations:
    """Tests for /agent-relations."""

    async def test_create_and_filter(self, client: AsyncClient, graph: dict) -> None:
        created = await client.post(RELATIONS_URL, json=TRANSFER)
        await client.post(
            RELATIONS_URL,
            json={**TRANSFER, "sourceAgentId": "agent-b", "targetAgentId": "agent-a"},
        )

        assert created.status_code == 201
        relation = created.json()["data"]
        assert relation["graphId"] == "graph-1"
        assert relation["relationType"] == "transfer"

        filtered = await client.get(RELATIONS_URL, params={"sourceAgentId": "agent-a"})
        assert [r["id"] for r in filtered.json()["data"]] == [relation["id"]]

    async def test_missing_target_agent(self, client: AsyncClient, graph: dict) -> None:
        response = await client.post(RELATIONS_URL, json={**TRANSFER, "targetAgentId": "ghost"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Target agent with ID ghost not found"

    async def test_missing_external_agent(self, client: AsyncClient, graph: dict) -> None:
        response = await client.post(
            RELATIONS_URL,
            json=DELEGATE_EXTERNAL | {"externalAgentId": "ghost"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "External agent with ID ghost not found"

    async def test_duplicate_relation(self, client: AsyncClient, graph: dict) -> None:
        await client.post(RELATIONS_URL, json=TRANSFER)

        response = await client.post(RELATIONS_URL, json=TRANSFER)

        assert response.status_code == 422
        assert response.json()["code"] == "unprocessable_entity"

    async def test_both_targets_rejected(self, client: AsyncClient, graph: dict) -> None:
        response = await client.post(
            RELATIONS_URL, json={**TRANSFER, "externalAgentId": "billing"}
        )

        assert response.status_code == 400

    async def test_delete(self, client: AsyncClient, graph: dict) -> None:
        relation = (await client.post(RELATIONS_URL, json=TRANSFER)).json()["data"]

        response = await client.delete(f"{RELATIONS_URL}/{relation['id']}")

        assert response.status_code == 204
        assert (await client.get(f"{RELATIONS_URL}/{relation['id']}")).status_code == 404


class TestExternalAgents:
    """Tests for /external-agents."""

    async def test_delegate_to_external_agent(self, client: AsyncClient, graph: dict) -> None:
        created = await client.post(
            EXTERNAL_URL,
            json={
                "id": "billing",
                "name": "Billing",
                "baseUrl": "https://billing.example.com/agent",
                "headers": {"X-Team": "finance"},
            },
        )
        assert created.status_code == 201
        assert created.json()["data"]["baseUrl"] == "https://billing.example.com/agent"

        relation = await client.post(
            RELATIONS_URL,
            json=DELEGATE_EXTERNAL,
        )
        assert relation.status_code == 201
        assert relation.json()["data"].get("targetAgentId") is None

    async def test_update_and_delete(self, client: AsyncClient, graph: dict) -> None:
        await client.post(
            EXTERNAL_URL, json={"id": "billing", "name": "Billing", "baseUrl": "https://a.example"}
        )

        updated = await client.put(f"{EXTERNAL_URL}/billing", json={"baseUrl": "https://b.example"})
        deleted = await client.delete(f"{EXTERNAL_URL}/billing")

        assert updated.json()["data"]["baseUrl"] == "https://b.example"
        assert deleted.status_code == 204

    async def test_requires_graph(self, client: AsyncClient, project: object) -> None:
        response = await client.post(
            "/tenants/tenant-1/projects/project-1/graphs/ghost/external-agents",
            json={"id": "billing", "name": "Billing", "baseUrl": "https://a.example"},
        )

        assert response.status_code == 404
