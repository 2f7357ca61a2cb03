"""Domain rules shared by repositories and services."""

from .exceptions import GraphValidationError, ProjectHasResourcesError
from .inheritance import (
    DEFAULT_TRANSFER_COUNT,
    MODEL_TYPES,
    cascade_agent_models,
    inherited_step_count,
    inherited_transfer_count,
)
from .validation import ProjectResources, validate_graph_structure

__all__ = [
    "DEFAULT_TRANSFER_COUNT",
    "MODEL_TYPES",
    "GraphValidationError",
    "ProjectHasResourcesError",
    "ProjectResources",
    "cascade_agent_models",
    "inherited_step_count",
    "inherited_transfer_count",
    "validate_graph_structure",
]
