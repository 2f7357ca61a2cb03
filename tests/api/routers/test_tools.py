"""Tool, credential reference and agent-tool relation router tests."""

from __future__ import annotations

from httpx import AsyncClient

PROJECT_URL = "/tenants/tenant-1/projects/project-1"
TOOLS_URL = f"{PROJECT_URL}/tools"
CREDENTIALS_URL = f"{PROJECT_URL}/credentials"
TOOL_RELATIONS_URL = f"{PROJECT_URL}/graphs/graph-1/agent-tool-relations"

FORECAST_TOOL = {
    "id": "forecast",
    "name": "Forecast",
    "config": {"type": "mcp", "mcp": {"server": {"url": "https://mcp.example.com/forecast"}}},
}


class TestTools:
    """Tests for /tools."""

    async def test_create_and_get(self, client: AsyncClient, project: object) -> None:
        created = await client.post(TOOLS_URL, json=FORECAST_TOOL)

        assert created.status_code == 201
        fetched = (await client.get(f"{TOOLS_URL}/forecast")).json()["data"]
        assert fetched["config"]["mcp"]["server"]["url"] == "https://mcp.example.com/forecast"

    async def test_invalid_config(self, client: AsyncClient, project: object) -> None:
        response = await client.post(
            TOOLS_URL, json={**FORECAST_TOOL, "config": {"type": "mcp", "mcp": {}}}
        )

        assert response.status_code == 400

    async def test_filter_by_status(self, client: AsyncClient, project: object) -> None:
        await client.post(TOOLS_URL, json=FORECAST_TOOL)
        await client.post(TOOLS_URL, json={**FORECAST_TOOL, "id": "geocode", "name": "Geocode"})
        await client.put(f"{TOOLS_URL}/geocode", json={"status": "unhealthy"})

        response = await client.get(TOOLS_URL, params={"status": "unhealthy"})

        assert [tool["id"] for tool in response.json()["data"]] == ["geocode"]

    async def test_delete(self, client: AsyncClient, project: object) -> None:
        await client.post(TOOLS_URL, json=FORECAST_TOOL)

        assert (await client.delete(f"{TOOLS_URL}/forecast")).status_code == 204
        assert (await client.delete(f"{TOOLS_URL}/forecast")).status_code == 404


class TestCredentials:
    """Tests for /credentials."""

    async def test_delete_detaches_references(self, client: AsyncClient, graph: dict) -> None:
        created = await client.post(
            CREDENTIALS_URL,
            json={"id": "forecast-key", "type": "memory", "credentialStoreId": "memory-default"},
        )
        assert created.status_code == 201
        await client.post(
            TOOLS_URL, json={**FORECAST_TOOL, "credentialReferenceId": "forecast-key"}
        )
        await client.post(
            f"{PROJECT_URL}/graphs/graph-1/external-agents",
            json={
                "id": "billing",
                "name": "Billing",
                "baseUrl": "https://billing.example.com",
                "credentialReferenceId": "forecast-key",
            },
        )

        response = await client.delete(f"{CREDENTIALS_URL}/forecast-key")

        assert response.status_code == 204
        tool = (await client.get(f"{TOOLS_URL}/forecast")).json()["data"]
        external = (
            await client.get(f"{PROJECT_URL}/graphs/graph-1/external-agents/billing")
        ).json()["data"]
        assert tool.get("credentialReferenceId") is None
        assert external.get("credentialReferenceId") is None

    async def test_unknown_store_type(self, client: AsyncClient, project: object) -> None:
        response = await client.post(
            CREDENTIALS_URL,
            json={"id": "key", "type": "vault", "credentialStoreId": "store"},
        )

        assert response.status_code == 400


class TestAgentToolRelations:
    """Tests for /agent-tool-relations."""

    async def test_create_and_list_agents_for_tool(
        self, client: AsyncClient, graph: dict
    ) -> None:
        await client.post(TOOLS_URL, json=FORECAST_TOOL)

        created = await client.post(
            TOOL_RELATIONS_URL,
            json={"agentId": "agent-a", "toolId": "forecast", "selectedTools": ["daily"]},
        )

        assert created.status_code == 201
        relation = created.json()["data"]
        assert relation["selectedTools"] == ["daily"]

        agents = (await client.get(f"{TOOL_RELATIONS_URL}/tool/forecast/agents")).json()
        assert agents["data"] == [
            {
                "agentId": "agent-a",
                "graphId": "graph-1",
                "relationId": relation["id"],
                "selectedTools": ["daily"],
            }
        ]
        assert agents["pagination"]["total"] == 1

    async def test_unknown_tool(self, client: AsyncClient, graph: dict) -> None:
        response = await client.post(
            TOOL_RELATIONS_URL, json={"agentId": "agent-a", "toolId": "ghost"}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Tool 'ghost' not found"

    async def test_filter_by_agent(self, client: AsyncClient, graph: dict) -> None:
        await client.post(TOOLS_URL, json=FORECAST_TOOL)
        await client.post(TOOL_RELATIONS_URL, json={"agentId": "agent-a", "toolId": "forecast"})
        await client.post(TOOL_RELATIONS_URL, json={"agentId": "agent-b", "toolId": "forecast"})

        response = await client.get(TOOL_RELATIONS_URL, params={"agentId": "agent-b"})

        assert [r["agentId"] for r in response.json()["data"]] == ["agent-b"]
