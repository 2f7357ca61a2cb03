"""API key router tests."""

from __future__ import annotations

from httpx import AsyncClient

KEYS_URL = "/tenants/tenant-1/projects/project-1/api-keys"


class TestApiKeys:
    """Tests for /api-keys."""

    async def test_create_returns_key_once(self, client: AsyncClient, graph: dict) -> None:
        response = await client.post(KEYS_URL, json={"graphId": "graph-1"})

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["key"].startswith("sk_")
        assert data["key"].startswith(data["apiKey"]["keyPrefix"])
        assert "keyHash" not in data["apiKey"]

        fetched = (await client.get(f"{KEYS_URL}/{data['apiKey']['id']}")).json()["data"]
        assert "key" not in fetched
        assert fetched["publicId"] == data["apiKey"]["publicId"]

    async def test_unknown_graph(self, client: AsyncClient, project: object) -> None:
        response = await client.post(KEYS_URL, json={"graphId": "ghost"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid graphId - graph does not exist"

    async def test_list_filtered_by_graph(self, client: AsyncClient, graph: dict) -> None:
        await client.post(KEYS_URL, json={"graphId": "graph-1"})
        await client.post(KEYS_URL, json={"graphId": "graph-1"})

        listed = await client.get(KEYS_URL, params={"graphId": "graph-1"})
        other = await client.get(KEYS_URL, params={"graphId": "graph-2"})

        assert listed.json()["pagination"]["total"] == 2
        assert other.json()["data"] == []

    async def test_update_expiry_and_revoke(self, client: AsyncClient, graph: dict) -> None:
        created = (await client.post(KEYS_URL, json={"graphId": "graph-1"})).json()["data"]
        key_id = created["apiKey"]["id"]

        updated = await client.put(
            f"{KEYS_URL}/{key_id}", json={"expiresAt": "2030-01-01T00:00:00Z"}
        )

        assert updated.json()["data"]["expiresAt"].startswith("2030-01-01")
        assert (await client.delete(f"{KEYS_URL}/{key_id}")).status_code == 204
        assert (await client.get(f"{KEYS_URL}/{key_id}")).status_code == 404
