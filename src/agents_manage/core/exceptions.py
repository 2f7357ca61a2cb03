"""Domain errors raised below the HTTP layer."""


class GraphValidationError(ValueError):
    """A graph definition references agents or resources that do not exist."""


class ProjectHasResourcesError(Exception):
    """A project cannot be deleted while it still owns resources."""

    def __init__(self, project_id: str, counts: dict[str, int] | None = None) -> None:
        super().__init__(
            f"Cannot delete project '{project_id}' while it still has resources"
        )
        self.project_id = project_id
        self.counts = counts or {}
