"""Ownership scopes used to filter every query.

Each resource lives under a tenant, most under a project, and graph-level
resources under a graph. A scope object carries exactly the keys needed to
address one level of that hierarchy.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class TenantScope:
    """Top level of the hierarchy."""

    tenant_id: str

    def as_filters(self) -> dict[str, Any]:
        """Column filters for this scope.

        Returns:
            Mapping of column name to value
        """
        return asdict(self)


@dataclass(frozen=True)
class ProjectScope(TenantScope):
    """A project inside a tenant."""

    project_id: str

    def graph(self, graph_id: str) -> "GraphScope":
        """Narrow this scope to one graph."""
        return GraphScope(self.tenant_id, self.project_id, graph_id)


@dataclass(frozen=True)
class GraphScope(ProjectScope):
    """An agent graph inside a project."""

    graph_id: str

    @property
    def project(self) -> ProjectScope:
        """The enclosing project scope."""
        return ProjectScope(self.tenant_id, self.project_id)
