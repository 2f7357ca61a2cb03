"""Full project router tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

from agents_manage.cli.templates import weather_project

FULL_URL = "/tenants/tenant-1/project-full"


@pytest.fixture
def definition() -> dict[str, Any]:
    """The sample weather project."""
    return weather_project("weather-project", model="openai/gpt-4o")


class TestProjectFull:
    """Tests for /project-full."""

    async def test_create(self, client: AsyncClient, definition: dict[str, Any]) -> None:
        response = await client.post(FULL_URL, json=definition)

        assert response.status_code == 201
        data = response.json()["data"]
        assert set(data["tools"]) == {"forecast-weather", "geocode-address"}
        graph = data["graphs"]["weather-graph"]
        assistant = graph["agents"]["weather-assistant"]
        assert sorted(assistant["canDelegateTo"]) == ["geocoder-agent", "weather-forecaster"]
        forecaster = graph["agents"]["weather-forecaster"]
        assert [item["toolId"] for item in forecaster["canUse"]] == ["forecast-weather"]

    async def test_create_inherits_execution_limits(
        self, client: AsyncClient, definition: dict[str, Any]
    ) -> None:
        response = await client.post(FULL_URL, json=definition)

        graph = response.json()["data"]["graphs"]["weather-graph"]
        assert graph["stopWhen"] == {"transferCountIs": 10}
        assert graph["agents"]["geocoder-agent"]["stopWhen"] == {"stepCountIs": 50}

    async def test_create_twice(self, client: AsyncClient, definition: dict[str, Any]) -> None:
        await client.post(FULL_URL, json=definition)

        response = await client.post(FULL_URL, json=definition)

        assert response.status_code == 409

    async def test_unknown_tool_rolls_back(
        self, client: AsyncClient, definition: dict[str, Any]
    ) -> None:
        """Graphs are checked against the project's own tools."""
        del definition["tools"]["geocode-address"]

        response = await client.post(FULL_URL, json=definition)

        assert response.status_code == 400
        assert (await client.get(f"{FULL_URL}/weather-project")).status_code == 404

    async def test_put_creates_then_updates(
        self, client: AsyncClient, definition: dict[str, Any]
    ) -> None:
        created = await client.put(f"{FULL_URL}/weather-project", json=definition)
        definition["name"] = "Renamed"
        updated = await client.put(f"{FULL_URL}/weather-project", json=definition)

        assert created.status_code == 201
        assert updated.status_code == 200
        assert updated.json()["data"]["name"] == "Renamed"

    async def test_put_keeps_graphs_missing_from_definition(
        self, client: AsyncClient, definition: dict[str, Any]
    ) -> None:
        await client.post(FULL_URL, json=definition)
        definition["graphs"] = {}

        response = await client.put(f"{FULL_URL}/weather-project", json=definition)

        assert set(response.json()["data"]["graphs"]) == {"weather-graph"}

    async def test_id_mismatch(self, client: AsyncClient, definition: dict[str, Any]) -> None:
        response = await client.put(f"{FULL_URL}/other-project", json=definition)

        assert response.status_code == 400
        assert response.json()["detail"] == "Project ID mismatch"

    async def test_delete(self, client: AsyncClient, definition: dict[str, Any]) -> None:
        await client.post(FULL_URL, json=definition)

        assert (await client.delete(f"{FULL_URL}/weather-project")).status_code == 204
        assert (await client.get(f"{FULL_URL}/weather-project")).status_code == 404
        assert (await client.delete(f"{FULL_URL}/weather-project")).status_code == 404
