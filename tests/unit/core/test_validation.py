"""Tests for full graph structure validation."""

from typing import Any

import pytest

from agents_manage.api.schemas import FullGraphDefinition
from agents_manage.core import GraphValidationError, ProjectResources, validate_graph_structure


def _graph(**agents: dict[str, Any]) -> FullGraphDefinition:
    return FullGraphDefinition.model_validate(
        {"id": "g", "name": "Graph", "defaultAgentId": "a", "agents": agents}
    )


def _agent(agent_id: str, **extra: Any) -> dict[str, Any]:
    return {"id": agent_id, "name": agent_id, "prompt": "p", **extra}


class TestValidateGraphStructure:
    """Tests for validate_graph_structure."""

    def test_valid_graph(self) -> None:
        """Transfers and delegations to agents of the graph pass."""
        graph = _graph(
            a=_agent("a", canTransferTo=["b"], canDelegateTo=["ext"]),
            b=_agent("b"),
            ext={"id": "ext", "name": "ext", "baseUrl": "https://ext.example.com"},
        )

        validate_graph_structure(graph)

    def test_missing_default_agent(self) -> None:
        graph = _graph(b=_agent("b"))

        with pytest.raises(GraphValidationError, match="Default agent 'a' does not exist"):
            validate_graph_structure(graph)

    def test_missing_transfer_target(self) -> None:
        graph = _graph(a=_agent("a", canTransferTo=["ghost"]))

        with pytest.raises(GraphValidationError, match="transfer target 'ghost'"):
            validate_graph_structure(graph)

    def test_missing_delegate_target(self) -> None:
        graph = _graph(a=_agent("a", canDelegateTo=["ghost"]))

        with pytest.raises(GraphValidationError, match="delegate target 'ghost'"):
            validate_graph_structure(graph)

    def test_resources_unchecked_without_project(self) -> None:
        """Tool and component references pass when no project resources are given."""
        graph = _graph(a=_agent("a", canUse=[{"toolId": "t"}], dataComponents=["d"]))

        validate_graph_structure(graph)

    @pytest.mark.parametrize(
        ("agent_fields", "message"),
        [
            ({"canUse": [{"toolId": "missing"}]}, "tool 'missing'"),
            ({"dataComponents": ["missing"]}, "data component 'missing'"),
            ({"artifactComponents": ["missing"]}, "artifact component 'missing'"),
        ],
    )
    def test_missing_project_resource(self, agent_fields: dict[str, Any], message: str) -> None:
        graph = _graph(a=_agent("a", **agent_fields))
        resources = ProjectResources(
            tool_ids={"t"}, data_component_ids={"d"}, artifact_component_ids={"r"}
        )

        with pytest.raises(GraphValidationError, match=message):
            validate_graph_structure(graph, resources)

    def test_existing_project_resources(self) -> None:
        graph = _graph(
            a=_agent(
                "a",
                canUse=[{"toolId": "t"}],
                dataComponents=["d"],
                artifactComponents=["r"],
            )
        )
        resources = ProjectResources(
            tool_ids={"t"}, data_component_ids={"d"}, artifact_component_ids={"r"}
        )

        validate_graph_structure(graph, resources)
