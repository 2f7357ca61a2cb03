"""Tool and agent-tool relation models."""

from datetime import datetime
from typing import Any

from sqlalchemy import TEXT, VARCHAR, ForeignKeyConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin
from .enums import ToolStatus


class Tool(TimestampMixin, Base):
    """An MCP tool server registered in a project.

    Attributes:
        config: ``{"type": "mcp", "mcp": {"server": {"url": ...}, ...}}``
        credential_reference_id: Credentials used to reach the server
        headers: Extra request headers
        image_url: Icon shown in the UI
        capabilities: Capabilities advertised by the server
        status: Last known health (see ToolStatus)
        last_health_check: When status was last refreshed
        last_error: Error from the last failed check
        available_tools: Tool descriptors last discovered on the server
        last_tools_sync: When available_tools was last refreshed
    """

    __tablename__ = "tools"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    config: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    credential_reference_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    headers: Mapped[dict[str, str] | None] = mapped_column(JSONType)
    image_url: Mapped[str | None] = mapped_column(TEXT)
    capabilities: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    status: Mapped[str] = mapped_column(
        VARCHAR(20), nullable=False, default=ToolStatus.UNKNOWN.value
    )
    last_health_check: Mapped[datetime | None] = mapped_column()
    last_error: Mapped[str | None] = mapped_column(TEXT)
    available_tools: Mapped[list[dict[str, Any]] | None] = mapped_column(JSONType)
    last_tools_sync: Mapped[datetime | None] = mapped_column()

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_tools"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id"],
            ["projects.tenant_id", "projects.id"],
            ondelete="CASCADE",
            name="tools_project_fk",
        ),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Tool(project_id={self.project_id}, id={self.id}, status={self.status})>"


class AgentToolRelation(TimestampMixin, Base):
    """Grants an agent access to a tool, optionally to a subset of its functions.

    Attributes:
        selected_tools: Names of the tool functions the agent may call, None for all
        headers: Per-agent request headers for the tool server
    """

    __tablename__ = "agent_tool_relations"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    graph_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    agent_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    tool_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    selected_tools: Mapped[list[str] | None] = mapped_column(JSONType)
    headers: Mapped[dict[str, str] | None] = mapped_column(JSONType)

    __table_args__ = (
        PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_agent_tool_relations"
        ),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "graph_id", "agent_id"],
            ["agents.tenant_id", "agents.project_id", "agents.graph_id", "agents.id"],
            ondelete="CASCADE",
            name="agent_tool_relations_agent_fk",
        ),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "tool_id"],
            ["tools.tenant_id", "tools.project_id", "tools.id"],
            ondelete="CASCADE",
            name="agent_tool_relations_tool_fk",
        ),
    )
