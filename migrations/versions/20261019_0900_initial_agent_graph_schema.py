"""Initial agent graph schema

Revision ID: 202610190900
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "202610190900"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _scope(*names: str) -> list[sa.Column]:
    return [sa.Column(name, sa.VARCHAR(length=255), nullable=False) for name in names]


def _graph_fk(name: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["tenant_id", "project_id", "graph_id"],
        ["agent_graph.tenant_id", "agent_graph.project_id", "agent_graph.id"],
        ondelete="CASCADE",
        name=name,
    )


def _project_fk(name: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["tenant_id", "project_id"],
        ["projects.tenant_id", "projects.id"],
        ondelete="CASCADE",
        name=name,
    )


def _agent_fk(name: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["tenant_id", "project_id", "graph_id", "agent_id"],
        ["agents.tenant_id", "agents.project_id", "agents.graph_id", "agents.id"],
        ondelete="CASCADE",
        name=name,
    )


def upgrade() -> None:
    """Create all tables for agent graph management."""

    # projects table
    op.create_table(
        "projects",
        *_scope("tenant_id", "id"),
        sa.Column("name", sa.VARCHAR(length=255), nullable=False),
        sa.Column("description", sa.TEXT(), nullable=False),
        sa.Column("models", JSON, nullable=True),
        sa.Column("stop_when", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "id", name="pk_projects"),
    )

    # agent_graph table
    op.create_table(
        "agent_graph",
        *_scope("tenant_id", "project_id", "id"),
        sa.Column("name", sa.VARCHAR(length=255), nullable=False),
        sa.Column("description", sa.TEXT(), nullable=True),
        sa.Column("default_agent_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("context_config_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("models", JSON, nullable=True),
        sa.Column("status_updates", JSON, nullable=True),
        sa.Column("graph_prompt", sa.TEXT(), nullable=True),
        sa.Column("stop_when", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_agent_graph"),
        _project_fk("agent_graph_project_fk"),
    )

    # context_configs table
    op.create_table(
        "context_configs",
        *_scope("tenant_id", "project_id", "id"),
        sa.Column("name", sa.VARCHAR(length=255), nullable=False),
        sa.Column("description", sa.TEXT(), nullable=False),
        sa.Column("request_context_schema", JSON, nullable=True),
        sa.Column("context_variables", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_context_configs"),
        _project_fk("context_configs_project_fk"),
    )

    # agents table
    op.create_table(
        "agents",
        *_scope("tenant_id", "project_id", "graph_id", "id"),
        sa.Column("name", sa.VARCHAR(length=255), nullable=False),
        sa.Column("description", sa.TEXT(), nullable=False),
        sa.Column("prompt", sa.TEXT(), nullable=False),
        sa.Column("conversation_history_config", JSON, nullable=True),
        sa.Column("models", JSON, nullable=True),
        sa.Column("stop_when", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "project_id", "graph_id", "id", name="pk_agents"),
        _graph_fk("agents_graph_fk"),
    )

    # agent_relations table
    op.create_table(
        "agent_relations",
        *_scope("tenant_id", "project_id", "graph_id", "id", "source_agent_id"),
        sa.Column("target_agent_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("external_agent_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("relation_type", sa.VARCHAR(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_agent_relations"
        ),
        _graph_fk("agent_relations_graph_fk"),
    )
    op.create_index(
        "ix_agent_relations_source",
        "agent_relations",
        ["tenant_id", "project_id", "source_agent_id"],
        unique=False,
    )

    # external_agents table
    op.create_table(
        "external_agents",
        *_scope("tenant_id", "project_id", "graph_id", "id"),
        sa.Column("name", sa.VARCHAR(length=255), nullable=False),
        sa.Column("description", sa.TEXT(), nullable=False),
        sa.Column("base_url", sa.TEXT(), nullable=False),
        sa.Column("credential_reference_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("headers", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_external_agents"
        ),
        _graph_fk("external_agents_graph_fk"),
    )

    # tools table
    op.create_table(
        "tools",
        *_scope("tenant_id", "project_id", "id"),
        sa.Column("name", sa.VARCHAR(length=255), nullable=False),
        sa.Column("config", JSON, nullable=False),
        sa.Column("credential_reference_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("headers", JSON, nullable=True),
        sa.Column("image_url", sa.TEXT(), nullable=True),
        sa.Column("capabilities", JSON, nullable=True),
        sa.Column("status", sa.VARCHAR(length=20), nullable=False),
        sa.Column("last_health_check", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_error", sa.TEXT(), nullable=True),
        sa.Column("available_tools", JSON, nullable=True),
        sa.Column("last_tools_sync", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_tools"),
        _project_fk("tools_project_fk"),
    )

    # agent_tool_relations table
    op.create_table(
        "agent_tool_relations",
        *_scope("tenant_id", "project_id", "graph_id", "id", "agent_id", "tool_id"),
        sa.Column("selected_tools", JSON, nullable=True),
        sa.Column("headers", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_agent_tool_relations"
        ),
        _agent_fk("agent_tool_relations_agent_fk"),
        sa.ForeignKeyConstraint(
            ["tenant_id", "project_id", "tool_id"],
            ["tools.tenant_id", "tools.project_id", "tools.id"],
            ondelete="CASCADE",
            name="agent_tool_relations_tool_fk",
        ),
    )

    # data_components table
    op.create_table(
        "data_components",
        *_scope("tenant_id", "project_id", "id"),
        sa.Column("name", sa.VARCHAR(length=255), nullable=False),
        sa.Column("description", sa.TEXT(), nullable=False),
        sa.Column("props", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_data_components"),
        _project_fk("data_components_project_fk"),
    )

    # agent_data_components table
    op.create_table(
        "agent_data_components",
        *_scope("tenant_id", "project_id", "graph_id", "id", "agent_id", "data_component_id"),
        *_timestamps(),
        sa.PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_agent_data_components"
        ),
        _agent_fk("agent_data_components_agent_fk"),
        sa.ForeignKeyConstraint(
            ["tenant_id", "project_id", "data_component_id"],
            ["data_components.tenant_id", "data_components.project_id", "data_components.id"],
            ondelete="CASCADE",
            name="agent_data_components_component_fk",
        ),
    )

    # artifact_components table
    op.create_table(
        "artifact_components",
        *_scope("tenant_id", "project_id", "id"),
        sa.Column("name", sa.VARCHAR(length=255), nullable=False),
        sa.Column("description", sa.TEXT(), nullable=False),
        sa.Column("summary_props", JSON, nullable=True),
        sa.Column("full_props", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_artifact_components"),
        _project_fk("artifact_components_project_fk"),
    )

    # agent_artifact_components table
    op.create_table(
        "agent_artifact_components",
        *_scope(
            "tenant_id", "project_id", "graph_id", "id", "agent_id", "artifact_component_id"
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_agent_artifact_components"
        ),
        _agent_fk("agent_artifact_components_agent_fk"),
        sa.ForeignKeyConstraint(
            ["tenant_id", "project_id", "artifact_component_id"],
            [
                "artifact_components.tenant_id",
                "artifact_components.project_id",
                "artifact_components.id",
            ],
            ondelete="CASCADE",
            name="agent_artifact_components_component_fk",
        ),
    )

    # credential_references table
    op.create_table(
        "credential_references",
        *_scope("tenant_id", "project_id", "id"),
        sa.Column("type", sa.VARCHAR(length=20), nullable=False),
        sa.Column("credential_store_id", sa.VARCHAR(length=255), nullable=False),
        sa.Column("retrieval_params", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint(
            "tenant_id", "project_id", "id", name="pk_credential_references"
        ),
        _project_fk("credential_references_project_fk"),
    )

    # conversations table
    op.create_table(
        "conversations",
        *_scope("tenant_id", "project_id", "id"),
        sa.Column("user_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("active_agent_id", sa.VARCHAR(length=255), nullable=False),
        sa.Column("title", sa.TEXT(), nullable=True),
        sa.Column("last_context_resolution", sa.VARCHAR(length=64), nullable=True),
        sa.Column("metadata", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_conversations"),
        _project_fk("conversations_project_fk"),
    )

    # messages table
    op.create_table(
        "messages",
        *_scope("tenant_id", "project_id", "id", "conversation_id"),
        sa.Column("role", sa.VARCHAR(length=20), nullable=False),
        sa.Column("from_agent_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("to_agent_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("from_external_agent_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("to_external_agent_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("content", JSON, nullable=False),
        sa.Column("visibility", sa.VARCHAR(length=20), nullable=False),
        sa.Column("message_type", sa.VARCHAR(length=20), nullable=False),
        sa.Column("agent_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("task_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("parent_message_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("a2a_task_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("a2a_session_id", sa.VARCHAR(length=255), nullable=True),
        sa.Column("metadata", JSON, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_messages"),
        sa.ForeignKeyConstraint(
            ["tenant_id", "project_id", "conversation_id"],
            ["conversations.tenant_id", "conversations.project_id", "conversations.id"],
            ondelete="CASCADE",
            name="messages_conversation_fk",
        ),
    )
    op.create_index(
        "ix_messages_conversation",
        "messages",
        ["tenant_id", "project_id", "conversation_id"],
        unique=False,
    )

    # api_keys table
    op.create_table(
        "api_keys",
        *_scope("id", "tenant_id", "project_id", "graph_id"),
        sa.Column("public_id", sa.VARCHAR(length=64), nullable=False),
        sa.Column("key_hash", sa.VARCHAR(length=255), nullable=False),
        sa.Column("key_prefix", sa.VARCHAR(length=32), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("public_id"),
        _graph_fk("api_keys_graph_fk"),
    )
    op.create_index(
        "ix_api_keys_tenant_project", "api_keys", ["tenant_id", "project_id"], unique=False
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_api_keys_tenant_project", table_name="api_keys")
    op.drop_table("api_keys")
    op.drop_index("ix_messages_conversation", table_name="messages")
    op.drop_table("messages")
    op.drop_table("conversations")
    op.drop_table("credential_references")
    op.drop_table("agent_artifact_components")
    op.drop_table("artifact_components")
    op.drop_table("agent_data_components")
    op.drop_table("data_components")
    op.drop_table("agent_tool_relations")
    op.drop_table("tools")
    op.drop_table("external_agents")
    op.drop_index("ix_agent_relations_source", table_name="agent_relations")
    op.drop_table("agent_relations")
    op.drop_table("agents")
    op.drop_table("context_configs")
    op.drop_table("agent_graph")
    op.drop_table("projects")
