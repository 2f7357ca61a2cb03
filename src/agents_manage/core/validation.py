"""Structural validation of full graph definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .exceptions import GraphValidationError

if TYPE_CHECKING:
    from agents_manage.api.schemas import FullGraphDefinition


@dataclass
class ProjectResources:
    """Ids of the project-level resources a graph may reference."""

    tool_ids: set[str] = field(default_factory=set)
    data_component_ids: set[str] = field(default_factory=set)
    artifact_component_ids: set[str] = field(default_factory=set)


def validate_graph_structure(
    definition: FullGraphDefinition,
    project_resources: ProjectResources | None = None,
) -> None:
    """Check that every reference inside a graph definition resolves.

    Agent references are checked against the graph's own agents. Tool and
    component references are only checked when project resources are given.

    Args:
        definition: Graph definition to check
        project_resources: Resources available in the owning project

    Raises:
        GraphValidationError: On the first reference that does not resolve
    """
    agent_ids = set(definition.agents)

    if definition.default_agent_id and definition.default_agent_id not in agent_ids:
        raise GraphValidationError(
            f"Default agent '{definition.default_agent_id}' does not exist in agents"
        )

    for agent_id, agent in definition.internal_agents.items():
        for target in agent.can_transfer_to:
            if target not in agent_ids:
                raise GraphValidationError(
                    f"Agent '{agent_id}' has transfer target '{target}' "
                    "that doesn't exist in graph"
                )
        for target in agent.can_delegate_to:
            if target not in agent_ids:
                raise GraphValidationError(
                    f"Agent '{agent_id}' has delegate target '{target}' "
                    "that doesn't exist in graph"
                )

        if project_resources is None:
            continue

        for item in agent.can_use:
            if item.tool_id not in project_resources.tool_ids:
                raise GraphValidationError(
                    f"Agent '{agent_id}' references tool '{item.tool_id}' "
                    "that doesn't exist in project"
                )
        for component_id in agent.data_components:
            if component_id not in project_resources.data_component_ids:
                raise GraphValidationError(
                    f"Agent '{agent_id}' references data component '{component_id}' "
                    "that doesn't exist in project"
                )
        for component_id in agent.artifact_components:
            if component_id not in project_resources.artifact_component_ids:
                raise GraphValidationError(
                    f"Agent '{agent_id}' references artifact component '{component_id}' "
                    "that doesn't exist in project"
                )
