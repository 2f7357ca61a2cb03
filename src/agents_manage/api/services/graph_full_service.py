"""Create, read, replace and delete a whole agent graph in one operation."""

from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any
from uuid import uuid4

import structlog
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.core.inheritance import (
    cascade_agent_models,
    inherited_step_count,
    inherited_transfer_count,
)
from agents_manage.core.validation import ProjectResources, validate_graph_structure
from agents_manage.db.models import Agent, AgentGraph, AgentToolRelation
from agents_manage.db.models.enums import RelationType
from agents_manage.db.repository import (
    AgentArtifactComponentRepository,
    AgentDataComponentRepository,
    AgentGraphRepository,
    AgentRelationRepository,
    AgentRepository,
    AgentToolRelationRepository,
    ContextConfigRepository,
    ExternalAgentRepository,
    ProjectRepository,
)
from agents_manage.db.scopes import GraphScope, ProjectScope, TenantScope

from ..exceptions import InternalServerError
from ..schemas import (
    AgentStopWhen,
    CanUseItem,
    ContextConfigDefinition,
    ConversationHistoryConfig,
    ExternalAgentDefinition,
    FullGraphDefinition,
    GraphStopWhen,
    InternalAgentDefinition,
    Models,
    StatusUpdates,
)
from .base import require_project

logger = structlog.get_logger()


def dump_document(value: BaseModel | None) -> dict[str, Any] | None:
    """Serialize a nested schema to the camelCase document stored in JSON columns."""
    if value is None:
        return None
    return value.model_dump(by_alias=True, exclude_none=True, mode="json") or None


class GraphFullService:
    """Graph-full orchestration.

    Writes span many tables. Steps that attach tools, components and
    relations are best effort: each runs in a savepoint and a failure is
    logged and skipped, leaving the rest of the graph in place.

    Every write method takes ``commit``; callers composing several graphs
    into one transaction pass ``commit=False`` and commit themselves.
    """

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize graph-full service.

        Args:
            db_session: Database session
        """
        self.db = db_session
        self.project_repo = ProjectRepository(db_session)
        self.graph_repo = AgentGraphRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
        self.external_agent_repo = ExternalAgentRepository(db_session)
        self.relation_repo = AgentRelationRepository(db_session)
        self.tool_relation_repo = AgentToolRelationRepository(db_session)
        self.data_component_repo = AgentDataComponentRepository(db_session)
        self.artifact_component_repo = AgentArtifactComponentRepository(db_session)
        self.context_config_repo = ContextConfigRepository(db_session)

    async def graph_exists(self, scope: ProjectScope, graph_id: str) -> bool:
        """Check whether a graph exists."""
        return await self.graph_repo.exists(scope, graph_id)

    # Writes

    async def create_full_graph(
        self,
        scope: ProjectScope,
        definition: FullGraphDefinition,
        project_resources: ProjectResources | None = None,
        commit: bool = True,
    ) -> FullGraphDefinition:
        """Create (or overwrite) a graph with all of its agents and relations.

        Args:
            scope: Project scope
            definition: Full graph definition
            project_resources: Project resources to validate references against
            commit: Commit the transaction when done

        Returns:
            The stored graph, read back from the database

        Raises:
            GraphValidationError: If the definition references missing agents or resources
            NotFoundError: If the project does not exist
        """
        validate_graph_structure(definition, project_resources)
        await require_project(self.db, scope)
        await self._apply_execution_limits(scope, definition)

        graph_scope = scope.graph(definition.id)
        logger.info(
            "full_graph_create_started",
            project_id=scope.project_id,
            graph_id=definition.id,
            agent_count=len(definition.agents),
        )

        await self.graph_repo.upsert(scope, definition.id, **self._graph_columns(definition))
        if definition.context_config is not None:
            await self._upsert_context_config(scope, definition.context_config)
            await self.graph_repo.update(
                scope, definition.id, context_config_id=definition.context_config.id
            )

        for agent_id, agent in definition.internal_agents.items():
            await self.agent_repo.upsert(
                graph_scope, agent_id, **self._agent_columns(agent, dump_document(agent.models))
            )
        for agent_id, external in definition.external_agents.items():
            await self.external_agent_repo.upsert(
                graph_scope, agent_id, **self._external_agent_columns(external)
            )

        await self._write_tool_relations(graph_scope, definition)
        await self._write_component_associations(graph_scope, definition)
        await self._write_agent_relations(graph_scope, definition)

        if commit:
            await self.db.commit()
        logger.info("full_graph_created", project_id=scope.project_id, graph_id=definition.id)

        result = await self.get_full_graph(scope, definition.id, commit=commit)
        if result is None:
            raise InternalServerError(f"Agent graph '{definition.id}' could not be read back")
        return result

    async def update_full_graph(
        self,
        scope: ProjectScope,
        definition: FullGraphDefinition,
        project_resources: ProjectResources | None = None,
        commit: bool = True,
    ) -> FullGraphDefinition:
        """Replace a graph with the given definition, creating it when missing.

        Agents, external agents, tool relations, component associations and
        relations that are absent from the definition are removed. Agents
        still using the previous graph model receive the new one.

        Args:
            scope: Project scope
            definition: Full graph definition
            project_resources: Project resources to validate references against
            commit: Commit the transaction when done

        Returns:
            The stored graph, read back from the database

        Raises:
            GraphValidationError: If the definition references missing agents or resources
        """
        existing = await self.graph_repo.get_by_id(scope, definition.id)
        if existing is None:
            logger.info("full_graph_update_creates", graph_id=definition.id)
            return await self.create_full_graph(scope, definition, project_resources, commit)

        validate_graph_structure(definition, project_resources)
        await self._apply_execution_limits(scope, definition)

        graph_scope = scope.graph(definition.id)
        old_graph_models = existing.models
        new_graph_models = dump_document(definition.models)

        for agent_id, agent in definition.internal_agents.items():
            current = await self.agent_repo.get_by_id(graph_scope, agent_id)
            models = cascade_agent_models(
                current.models if current is not None else None,
                old_graph_models,
                new_graph_models,
                dump_document(agent.models),
            )
            await self.agent_repo.upsert(
                graph_scope, agent_id, **self._agent_columns(agent, models)
            )
        for agent_id, external in definition.external_agents.items():
            await self.external_agent_repo.upsert(
                graph_scope, agent_id, **self._external_agent_columns(external)
            )

        await self._best_effort(
            "stale_agents_delete_failed",
            lambda: self.agent_repo.delete_missing(graph_scope, set(definition.internal_agents)),
            graph_id=definition.id,
        )
        await self._best_effort(
            "stale_external_agents_delete_failed",
            lambda: self.external_agent_repo.delete_missing(
                graph_scope, set(definition.external_agents)
            ),
            graph_id=definition.id,
        )

        context_config_id = None
        if definition.context_config is not None:
            await self._upsert_context_config(scope, definition.context_config)
            context_config_id = definition.context_config.id
        await self.graph_repo.update(
            scope,
            definition.id,
            **self._graph_columns(definition),
            context_config_id=context_config_id,
        )

        for agent_id, agent in definition.internal_agents.items():
            keep_ids = {
                item.agent_tool_relation_id
                for item in agent.can_use
                if item.agent_tool_relation_id
            }
            await self.tool_relation_repo.delete_for_agent(graph_scope, agent_id, keep_ids)
        await self._write_tool_relations(graph_scope, definition)

        for agent_id in definition.internal_agents:
            await self.data_component_repo.clear_for_agent(graph_scope, agent_id)
            await self.artifact_component_repo.clear_for_agent(graph_scope, agent_id)
        await self._write_component_associations(graph_scope, definition)

        await self.relation_repo.delete_for_graph(graph_scope)
        await self._write_agent_relations(graph_scope, definition)

        if commit:
            await self.db.commit()
        logger.info("full_graph_updated", project_id=scope.project_id, graph_id=definition.id)

        result = await self.get_full_graph(scope, definition.id, commit=commit)
        if result is None:
            raise InternalServerError(f"Agent graph '{definition.id}' could not be read back")
        return result

    async def delete_full_graph(
        self,
        scope: ProjectScope,
        graph_id: str,
        commit: bool = True,
    ) -> bool:
        """Delete a graph and everything it owns.

        Returns:
            False if the graph does not exist
        """
        if not await self.graph_repo.exists(scope, graph_id):
            return False

        graph_scope = scope.graph(graph_id)
        await self.relation_repo.delete_for_graph(graph_scope)
        await self.tool_relation_repo.delete_where(graph_scope)
        await self.graph_repo.delete(scope, graph_id)

        if commit:
            await self.db.commit()
        logger.info("full_graph_deleted", project_id=scope.project_id, graph_id=graph_id)
        return True

    # Reads

    async def get_full_graph(
        self,
        scope: ProjectScope,
        graph_id: str,
        commit: bool = True,
    ) -> FullGraphDefinition | None:
        """Assemble the full definition of a stored graph.

        Agents without stepCountIs inherit the project's value, and the
        inherited value is saved.

        Args:
            scope: Project scope
            graph_id: Graph identifier
            commit: Commit when inherited limits were saved

        Returns:
            The full definition, or None if the graph does not exist
        """
        graph = await self.graph_repo.get_by_id(scope, graph_id)
        if graph is None:
            return None

        graph_scope = scope.graph(graph_id)
        agents = await self.agent_repo.get_all(graph_scope)
        if await self._persist_inherited_step_counts(scope, agents) and commit:
            await self.db.commit()

        definitions: dict[str, InternalAgentDefinition | ExternalAgentDefinition] = {}
        for agent in agents:
            definitions[agent.id] = await self._agent_definition(graph_scope, agent)
        for external in await self.external_agent_repo.get_all(graph_scope):
            definitions[external.id] = ExternalAgentDefinition(
                id=external.id,
                name=external.name,
                description=external.description,
                base_url=external.base_url,
                credential_reference_id=external.credential_reference_id,
                headers=external.headers,
            )

        return FullGraphDefinition(
            id=graph.id,
            name=graph.name,
            description=graph.description,
            default_agent_id=graph.default_agent_id,
            agents=definitions,
            context_config=await self._context_config_definition(scope, graph),
            status_updates=_validate_or_none(StatusUpdates, graph.status_updates),
            models=_validate_or_none(Models, graph.models),
            stop_when=_validate_or_none(GraphStopWhen, graph.stop_when),
            graph_prompt=graph.graph_prompt,
            created_at=graph.created_at,
            updated_at=graph.updated_at,
        )

    # Helpers

    async def _best_effort(
        self,
        event: str,
        operation: Callable[[], Awaitable[Any]],
        **context: Any,
    ) -> None:
        """Run one write in a savepoint; log and continue if the database rejects it."""
        try:
            async with self.db.begin_nested():
                await operation()
        except SQLAlchemyError as exc:
            logger.error(event, error=str(exc), **context)

    async def _apply_execution_limits(
        self,
        scope: ProjectScope,
        definition: FullGraphDefinition,
    ) -> None:
        """Fill in transferCountIs and stepCountIs from the project's stopWhen."""
        try:
            project = await self.project_repo.get_by_id(
                TenantScope(scope.tenant_id), scope.project_id
            )
            project_stop_when = project.stop_when if project is not None else None
            if not project_stop_when:
                return

            transfer_count = inherited_transfer_count(
                dump_document(definition.stop_when), project_stop_when
            )
            definition.stop_when = GraphStopWhen(transfer_count_is=transfer_count)

            for agent in definition.internal_agents.values():
                step_count = inherited_step_count(dump_document(agent.stop_when), project_stop_when)
                if step_count is not None:
                    agent.stop_when = AgentStopWhen(step_count_is=step_count)
        except (SQLAlchemyError, ValidationError) as exc:
            logger.error(
                "execution_limits_inheritance_failed",
                graph_id=definition.id,
                error=str(exc),
            )

    async def _persist_inherited_step_counts(
        self,
        scope: ProjectScope,
        agents: list[Agent],
    ) -> bool:
        project = await self.project_repo.get_by_id(TenantScope(scope.tenant_id), scope.project_id)
        project_step_count = ((project.stop_when if project else None) or {}).get("stepCountIs")
        if project_step_count is None:
            return False

        changed = False
        for agent in agents:
            if (agent.stop_when or {}).get("stepCountIs") is None:
                agent.stop_when = {**(agent.stop_when or {}), "stepCountIs": project_step_count}
                changed = True
        if changed:
            await self.db.flush()
        return changed

    async def _upsert_context_config(
        self,
        scope: ProjectScope,
        context_config: ContextConfigDefinition,
    ) -> None:
        await self.context_config_repo.upsert(
            scope,
            context_config.id,
            name=context_config.name,
            description=context_config.description,
            request_context_schema=context_config.request_context_schema,
            context_variables=context_config.context_variables,
        )

    async def _write_tool_relations(
        self,
        graph_scope: GraphScope,
        definition: FullGraphDefinition,
    ) -> None:
        for agent_id, agent in definition.internal_agents.items():
            for item in agent.can_use:
                await self._best_effort(
                    "agent_tool_relation_failed",
                    partial(self._upsert_tool_relation, graph_scope, agent_id, item),
                    agent_id=agent_id,
                    tool_id=item.tool_id,
                )

    async def _upsert_tool_relation(
        self,
        graph_scope: GraphScope,
        agent_id: str,
        item: CanUseItem,
    ) -> AgentToolRelation:
        return await self.tool_relation_repo.upsert(
            graph_scope,
            item.agent_tool_relation_id or str(uuid4()),
            agent_id=agent_id,
            tool_id=item.tool_id,
            selected_tools=item.tool_selection,
            headers=item.headers,
        )

    async def _write_component_associations(
        self,
        graph_scope: GraphScope,
        definition: FullGraphDefinition,
    ) -> None:
        for agent_id, agent in definition.internal_agents.items():
            for component_id in agent.data_components:
                await self._best_effort(
                    "agent_data_component_failed",
                    partial(
                        self._associate,
                        self.data_component_repo,
                        graph_scope,
                        agent_id,
                        component_id,
                    ),
                    agent_id=agent_id,
                    data_component_id=component_id,
                )
            for component_id in agent.artifact_components:
                await self._best_effort(
                    "agent_artifact_component_failed",
                    partial(
                        self._associate,
                        self.artifact_component_repo,
                        graph_scope,
                        agent_id,
                        component_id,
                    ),
                    agent_id=agent_id,
                    artifact_component_id=component_id,
                )

    @staticmethod
    async def _associate(
        repo: Any,
        graph_scope: GraphScope,
        agent_id: str,
        component_id: str,
    ) -> None:
        if not await repo.is_associated(graph_scope, agent_id, component_id):
            await repo.associate(graph_scope, agent_id, component_id)

    async def _write_agent_relations(
        self,
        graph_scope: GraphScope,
        definition: FullGraphDefinition,
    ) -> None:
        external_ids = set(definition.external_agents)
        for agent_id, agent in definition.internal_agents.items():
            targets = [(t, RelationType.TRANSFER) for t in agent.can_transfer_to]
            targets += [(t, RelationType.DELEGATE) for t in agent.can_delegate_to]
            for target_id, relation_type in targets:
                is_external = target_id in external_ids
                await self._best_effort(
                    "agent_relation_failed",
                    partial(
                        self.relation_repo.create,
                        **graph_scope.as_filters(),
                        id=str(uuid4()),
                        source_agent_id=agent_id,
                        target_agent_id=None if is_external else target_id,
                        external_agent_id=target_id if is_external else None,
                        relation_type=relation_type.value,
                    ),
                    source_agent_id=agent_id,
                    target_id=target_id,
                    relation_type=relation_type.value,
                )

    async def _agent_definition(
        self,
        graph_scope: GraphScope,
        agent: Agent,
    ) -> InternalAgentDefinition:
        tool_relations = await self.tool_relation_repo.get_by_agent(graph_scope, agent.id)
        return InternalAgentDefinition(
            id=agent.id,
            name=agent.name,
            description=agent.description,
            prompt=agent.prompt,
            conversation_history_config=_validate_or_none(
                ConversationHistoryConfig, agent.conversation_history_config
            ),
            models=_validate_or_none(Models, agent.models),
            stop_when=_validate_or_none(AgentStopWhen, agent.stop_when),
            can_use=[
                CanUseItem(
                    agent_tool_relation_id=relation.id,
                    tool_id=relation.tool_id,
                    tool_selection=relation.selected_tools,
                    headers=relation.headers,
                )
                for relation in tool_relations
            ],
            data_components=await self.data_component_repo.get_component_ids(graph_scope, agent.id),
            artifact_components=await self.artifact_component_repo.get_component_ids(
                graph_scope, agent.id
            ),
            can_transfer_to=await self.relation_repo.get_transfer_targets(graph_scope, agent.id),
            can_delegate_to=await self.relation_repo.get_delegate_targets(graph_scope, agent.id),
        )

    async def _context_config_definition(
        self,
        scope: ProjectScope,
        graph: AgentGraph,
    ) -> ContextConfigDefinition | None:
        if not graph.context_config_id:
            return None
        context_config = await self.context_config_repo.get_by_id(scope, graph.context_config_id)
        if context_config is None:
            return None
        return ContextConfigDefinition.model_validate(context_config)

    @staticmethod
    def _graph_columns(definition: FullGraphDefinition) -> dict[str, Any]:
        return {
            "name": definition.name,
            "description": definition.description,
            "default_agent_id": definition.default_agent_id,
            "models": dump_document(definition.models),
            "status_updates": dump_document(definition.status_updates),
            "graph_prompt": definition.graph_prompt,
            "stop_when": dump_document(definition.stop_when),
        }

    @staticmethod
    def _agent_columns(
        agent: InternalAgentDefinition,
        models: dict[str, Any] | None,
    ) -> dict[str, Any]:
        return {
            "name": agent.name,
            "description": agent.description,
            "prompt": agent.prompt,
            "conversation_history_config": dump_document(agent.conversation_history_config),
            "models": models,
            "stop_when": dump_document(agent.stop_when),
        }

    @staticmethod
    def _external_agent_columns(external: ExternalAgentDefinition) -> dict[str, Any]:
        return {
            "name": external.name,
            "description": external.description,
            "base_url": external.base_url,
            "credential_reference_id": external.credential_reference_id,
            "headers": external.headers,
        }


def _validate_or_none(schema: type[BaseModel], document: dict[str, Any] | None) -> Any:
    """Parse a stored JSON document, treating empty documents as absent."""
    if not document:
        return None
    return schema.model_validate(document)

