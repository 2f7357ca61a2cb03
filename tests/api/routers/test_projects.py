"""Project router tests."""

from __future__ import annotations

from httpx import AsyncClient

from agents_manage.api.handlers import PROBLEM_CONTENT_TYPE

PROJECTS_URL = "/tenants/tenant-1/projects"


class TestCreateProject:
    """Tests for POST /tenants/{tenantId}/projects."""

    async def test_create(self, client: AsyncClient) -> None:
        response = await client.post(
            PROJECTS_URL,
            json={"id": "p1", "name": "Project one", "stopWhen": {"transferCountIs": 5}},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] == "p1"
        assert data["stopWhen"] == {"transferCountIs": 5}
        assert "createdAt" in data
        assert "created_at" not in data

    async def test_duplicate_is_conflict(self, client: AsyncClient) -> None:
        await client.post(PROJECTS_URL, json={"id": "p1", "name": "One"})

        response = await client.post(PROJECTS_URL, json={"id": "p1", "name": "Again"})

        assert response.status_code == 409
        assert response.headers["content-type"].startswith(PROBLEM_CONTENT_TYPE)
        assert response.json()["code"] == "conflict"

    async def test_invalid_body_is_bad_request(self, client: AsyncClient) -> None:
        response = await client.post(PROJECTS_URL, json={"id": "bad id", "name": "x"})

        assert response.status_code == 400
        assert response.json()["code"] == "bad_request"


class TestReadProjects:
    """Tests for listing and reading projects."""

    async def test_list_paginated(self, client: AsyncClient) -> None:
        for index in range(3):
            await client.post(PROJECTS_URL, json={"id": f"p{index}", "name": f"P{index}"})

        response = await client.get(PROJECTS_URL, params={"page": 2, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 1
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}

    async def test_list_limit_above_maximum_is_bad_request(self, client: AsyncClient) -> None:
        await client.post(PROJECTS_URL, json={"id": "p1", "name": "P1"})

        response = await client.get(PROJECTS_URL, params={"limit": 101})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith(PROBLEM_CONTENT_TYPE)
        assert response.json()["code"] == "bad_request"

    async def test_list_limit_zero_is_bad_request(self, client: AsyncClient) -> None:
        response = await client.get(PROJECTS_URL, params={"limit": 0})

        assert response.status_code == 400

    async def test_list_is_tenant_scoped(self, client: AsyncClient) -> None:
        await client.post(PROJECTS_URL, json={"id": "p1", "name": "P1"})

        response = await client.get("/tenants/tenant-2/projects")

        assert response.json()["data"] == []

    async def test_get_missing(self, client: AsyncClient) -> None:
        response = await client.get(f"{PROJECTS_URL}/nope")

        assert response.status_code == 404
        data = response.json()
        assert data["title"] == "Not Found"
        assert data["instance"] == f"{PROJECTS_URL}/nope"
        assert data["requestId"] == response.headers["X-Request-ID"]


class TestUpdateProject:
    """Tests for PATCH /tenants/{tenantId}/projects/{id}."""

    async def test_partial_update(self, client: AsyncClient) -> None:
        await client.post(PROJECTS_URL, json={"id": "p1", "name": "P1", "description": "old"})

        response = await client.patch(f"{PROJECTS_URL}/p1", json={"description": "new"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["description"] == "new"
        assert data["name"] == "P1"

    async def test_stop_when_cascades_to_graphs(self, client: AsyncClient) -> None:
        """Graphs still on the old project limit follow the new one."""
        await client.post(
            PROJECTS_URL, json={"id": "p1", "name": "P1", "stopWhen": {"transferCountIs": 5}}
        )
        await client.post(
            f"{PROJECTS_URL}/p1/agent-graphs",
            json={"id": "g1", "name": "G1", "stopWhen": {"transferCountIs": 5}},
        )

        await client.patch(f"{PROJECTS_URL}/p1", json={"stopWhen": {"transferCountIs": 9}})

        graph = (await client.get(f"{PROJECTS_URL}/p1/agent-graphs/g1")).json()["data"]
        assert graph["stopWhen"] == {"transferCountIs": 9}

    async def test_update_missing(self, client: AsyncClient) -> None:
        response = await client.patch(f"{PROJECTS_URL}/nope", json={"name": "x"})

        assert response.status_code == 404


class TestDeleteProject:
    """Tests for DELETE /tenants/{tenantId}/projects/{id}."""

    async def test_delete_empty_project(self, client: AsyncClient) -> None:
        await client.post(PROJECTS_URL, json={"id": "p1", "name": "P1"})

        response = await client.delete(f"{PROJECTS_URL}/p1")

        assert response.status_code == 204
        assert (await client.get(f"{PROJECTS_URL}/p1")).status_code == 404

    async def test_project_with_graphs_is_kept(self, client: AsyncClient) -> None:
        await client.post(PROJECTS_URL, json={"id": "p1", "name": "P1"})
        await client.post(f"{PROJECTS_URL}/p1/agent-graphs", json={"id": "g1", "name": "G1"})

        response = await client.delete(f"{PROJECTS_URL}/p1")

        assert response.status_code == 409
        assert "still has resources" in response.json()["detail"]
