"""Data component, artifact component and context config endpoints."""

from fastapi import APIRouter, status

from ..dependencies import DBSession, Page, ProjectScopeDep
from ..schemas import (
    ArtifactComponentCreate,
    ArtifactComponentResponse,
    ArtifactComponentUpdate,
    ContextConfigCreate,
    ContextConfigResponse,
    ContextConfigUpdate,
    DataComponentCreate,
    DataComponentResponse,
    DataComponentUpdate,
    ListResponse,
    SingleResponse,
)
from ..services import ArtifactComponentService, ContextConfigService, DataComponentService

PROJECT_PREFIX = "/tenants/{tenantId}/projects/{projectId}"

data_components_router = APIRouter(
    prefix=f"{PROJECT_PREFIX}/data-components",
    tags=["data-components"],
)
artifact_components_router = APIRouter(
    prefix=f"{PROJECT_PREFIX}/artifact-components",
    tags=["artifact-components"],
)
context_configs_router = APIRouter(
    prefix=f"{PROJECT_PREFIX}/context-configs",
    tags=["context-configs"],
)


# Data components


@data_components_router.get(
    "",
    response_model=ListResponse[DataComponentResponse],
    summary="List data components",
)
async def list_data_components(
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[DataComponentResponse]:
    """List the data components of a project."""
    return await DataComponentService(db).list(scope, page)


@data_components_router.post(
    "",
    response_model=SingleResponse[DataComponentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a data component",
)
async def create_data_component(
    request: DataComponentCreate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[DataComponentResponse]:
    """Create a data component."""
    return SingleResponse(data=await DataComponentService(db).create(scope, request))


@data_components_router.get(
    "/{id}",
    response_model=SingleResponse[DataComponentResponse],
    summary="Get a data component",
)
async def get_data_component(
    id: str,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[DataComponentResponse]:
    """Get one data component."""
    return SingleResponse(data=await DataComponentService(db).get(scope, id))


@data_components_router.put(
    "/{id}",
    response_model=SingleResponse[DataComponentResponse],
    summary="Update a data component",
)
async def update_data_component(
    id: str,
    request: DataComponentUpdate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[DataComponentResponse]:
    """Update a data component."""
    return SingleResponse(data=await DataComponentService(db).update(scope, id, request))


@data_components_router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a data component",
)
async def delete_data_component(id: str, scope: ProjectScopeDep, db: DBSession) -> None:
    """Delete a data component and its agent associations."""
    await DataComponentService(db).delete(scope, id)


# Artifact components


@artifact_components_router.get(
    "",
    response_model=ListResponse[ArtifactComponentResponse],
    summary="List artifact components",
)
async def list_artifact_components(
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[ArtifactComponentResponse]:
    """List the artifact components of a project."""
    return await ArtifactComponentService(db).list(scope, page)


@artifact_components_router.post(
    "",
    response_model=SingleResponse[ArtifactComponentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an artifact component",
)
async def create_artifact_component(
    request: ArtifactComponentCreate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ArtifactComponentResponse]:
    """Create an artifact component."""
    return SingleResponse(data=await ArtifactComponentService(db).create(scope, request))


@artifact_components_router.get(
    "/{id}",
    response_model=SingleResponse[ArtifactComponentResponse],
    summary="Get an artifact component",
)
async def get_artifact_component(
    id: str,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ArtifactComponentResponse]:
    """Get one artifact component."""
    return SingleResponse(data=await ArtifactComponentService(db).get(scope, id))


@artifact_components_router.put(
    "/{id}",
    response_model=SingleResponse[ArtifactComponentResponse],
    summary="Update an artifact component",
)
async def update_artifact_component(
    id: str,
    request: ArtifactComponentUpdate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ArtifactComponentResponse]:
    """Update an artifact component."""
    return SingleResponse(data=await ArtifactComponentService(db).update(scope, id, request))


@artifact_components_router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an artifact component",
)
async def delete_artifact_component(id: str, scope: ProjectScopeDep, db: DBSession) -> None:
    """Delete an artifact component and its agent associations."""
    await ArtifactComponentService(db).delete(scope, id)


# Context configs


@context_configs_router.get(
    "",
    response_model=ListResponse[ContextConfigResponse],
    summary="List context configs",
)
async def list_context_configs(
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[ContextConfigResponse]:
    """List the context configs of a project."""
    return await ContextConfigService(db).list(scope, page)


@context_configs_router.post(
    "",
    response_model=SingleResponse[ContextConfigResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a context config",
)
async def create_context_config(
    request: ContextConfigCreate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ContextConfigResponse]:
    """Create a context config."""
    return SingleResponse(data=await ContextConfigService(db).create(scope, request))


@context_configs_router.get(
    "/{id}",
    response_model=SingleResponse[ContextConfigResponse],
    summary="Get a context config",
)
async def get_context_config(
    id: str,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ContextConfigResponse]:
    """Get one context config."""
    return SingleResponse(data=await ContextConfigService(db).get(scope, id))


@context_configs_router.put(
    "/{id}",
    response_model=SingleResponse[ContextConfigResponse],
    summary="Update a context config",
)
async def update_context_config(
    id: str,
    request: ContextConfigUpdate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ContextConfigResponse]:
    """Update a context config."""
    return SingleResponse(data=await ContextConfigService(db).update(scope, id, request))


@context_configs_router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a context config",
)
async def delete_context_config(id: str, scope: ProjectScopeDep, db: DBSession) -> None:
    """Delete a context config."""
    await ContextConfigService(db).delete(scope, id)
