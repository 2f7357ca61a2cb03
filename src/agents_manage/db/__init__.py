"""Database package for agent graph management."""

from .models.base import Base
from .scopes import GraphScope, ProjectScope, TenantScope
from .session import (
    DatabaseSessionManager,
    get_db_session,
    get_session_manager,
    init_db,
    session_manager,
)

__all__ = [
    "Base",
    "DatabaseSessionManager",
    "GraphScope",
    "ProjectScope",
    "TenantScope",
    "get_db_session",
    "get_session_manager",
    "init_db",
    "session_manager",
]
