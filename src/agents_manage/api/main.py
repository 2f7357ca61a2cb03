"""FastAPI application factory and configuration."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from agents_manage.db.session import close_db, init_db
from agents_manage.utils.logger import configure_logging

from .config import get_api_settings, get_database_settings, get_logging_settings
from .handlers import register_exception_handlers
from .middleware import LoggingMiddleware, RequestIDMiddleware
from .routers import (
    agent_artifact_components_router,
    agent_data_components_router,
    agent_graphs_router,
    agent_relations_router,
    agent_tool_relations_router,
    agents_router,
    api_keys_router,
    artifact_components_router,
    context_configs_router,
    conversations_router,
    credentials_router,
    data_components_router,
    external_agents_router,
    graph_full_router,
    health_router,
    project_full_router,
    projects_router,
    tools_router,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the database engine on startup and disposes it on shutdown.

    Args:
        app: FastAPI application

    Yields:
        None
    """
    settings = get_database_settings()
    logger.info("starting_application")
    manager = init_db(
        settings.url,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        echo=settings.echo,
    )
    if settings.create_tables:
        await manager.create_all()
        logger.info("database_tables_created")

    yield

    logger.info("shutting_down_application")
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_api_settings()
    log_settings = get_logging_settings()
    configure_logging(log_settings.level, log_settings.json_logs)

    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "projects", "description": "Tenant projects"},
            {"name": "agent-graphs", "description": "Agent graphs of a project"},
            {"name": "graph-full", "description": "Whole graphs in one document"},
            {"name": "project-full", "description": "Whole projects in one document"},
        ],
    )

    # Register middleware (order matters - first added = last executed)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # CORS
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Health checks (no prefix)
    app.include_router(health_router)

    for router in (
        projects_router,
        agent_graphs_router,
        agents_router,
        agent_relations_router,
        external_agents_router,
        agent_tool_relations_router,
        agent_data_components_router,
        agent_artifact_components_router,
        tools_router,
        credentials_router,
        data_components_router,
        artifact_components_router,
        context_configs_router,
        api_keys_router,
        conversations_router,
        graph_full_router,
        project_full_router,
    ):
        app.include_router(router, prefix=settings.api_prefix)

    logger.info(
        "application_configured",
        title=settings.title,
        version=settings.version,
        debug=settings.debug,
    )

    return app


# Application instance
app = create_app()
