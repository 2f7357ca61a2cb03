"""Shared schema building blocks: base model, envelopes and config types."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

RESOURCE_ID_PATTERN = r"^[a-zA-Z0-9\-_.]+$"

ResourceId = Annotated[
    str,
    Field(min_length=1, max_length=255, pattern=RESOURCE_ID_PATTERN),
]


class APIModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_columns(self, exclude_unset: bool = False) -> dict[str, Any]:
        """Convert to ORM column values.

        Nested schemas become camelCase JSON documents, enums their values.

        Args:
            exclude_unset: Only include fields the client actually sent

        Returns:
            Mapping of column name to value
        """
        names = self.model_fields_set if exclude_unset else type(self).model_fields
        columns: dict[str, Any] = {}
        for name in names:
            value = getattr(self, name)
            if isinstance(value, BaseModel):
                value = value.model_dump(by_alias=True, exclude_none=True, mode="json")
            elif isinstance(value, Enum):
                value = value.value
            columns[name] = value
        return columns


# Envelopes


class Pagination(BaseModel):
    """Pagination metadata of a list response."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> Pagination:
        """Build pagination metadata; pages is ceil(total / limit)."""
        return cls(page=page, limit=limit, total=total, pages=-(-total // limit) if limit else 0)


class ListResponse(BaseModel, Generic[T]):
    """Paginated list envelope."""

    data: list[T]
    pagination: Pagination


class SingleResponse(BaseModel, Generic[T]):
    """Single resource envelope."""

    data: T


class ExistsResponse(BaseModel):
    """Existence check result."""

    exists: bool


class RemovedResponse(BaseModel):
    """Association removal result."""

    message: str
    removed: bool


class ErrorBody(BaseModel):
    """Short error payload kept for older clients."""

    code: str
    message: str


class ProblemDetails(APIModel):
    """RFC 7807 problem details body."""

    title: str
    status: int
    detail: str
    code: str
    instance: str | None = None
    request_id: str | None = None
    error: ErrorBody


# Configuration documents stored as JSON columns


class ModelSettings(APIModel):
    """A model name and provider-specific options."""

    model: str | None = None
    provider_options: dict[str, Any] | None = None


class Models(APIModel):
    """Model settings per usage."""

    base: ModelSettings | None = None
    structured_output: ModelSettings | None = None
    summarizer: ModelSettings | None = None


class GraphStopWhen(APIModel):
    """Graph-level execution limits."""

    model_config = ConfigDict(extra="ignore")

    transfer_count_is: int | None = Field(default=None, ge=1, le=100)


class AgentStopWhen(APIModel):
    """Agent-level execution limits."""

    model_config = ConfigDict(extra="ignore")

    step_count_is: int | None = Field(default=None, ge=1, le=1000)


class ProjectStopWhen(APIModel):
    """Project-level limits inherited by graphs and agents."""

    model_config = ConfigDict(extra="ignore")

    transfer_count_is: int | None = Field(default=None, ge=1, le=100)
    step_count_is: int | None = Field(default=None, ge=1, le=1000)


class StatusComponent(APIModel):
    """A structured status update an agent can emit."""

    type: str
    description: str | None = None
    details_schema: dict[str, Any] | None = None


class StatusUpdates(APIModel):
    """Periodic status update settings for long-running graphs."""

    enabled: bool | None = None
    num_events: int | None = Field(default=None, ge=1, le=100)
    time_in_seconds: int | None = Field(default=None, ge=1, le=600)
    prompt: str | None = Field(default=None, max_length=2000)
    status_components: list[StatusComponent] | None = None


class ConversationHistoryConfig(APIModel):
    """How much conversation history an agent receives."""

    mode: str | None = None
    limit: int | None = Field(default=None, ge=0)
    max_output_tokens: int | None = Field(default=None, ge=0)
    include_internal: bool | None = None
    message_types: list[str] | None = None
