"""Enums for database models."""

from enum import Enum


class RelationType(str, Enum):
    """How a source agent hands work to a target agent."""

    TRANSFER = "transfer"
    DELEGATE = "delegate"


class ToolStatus(str, Enum):
    """Last known health of an MCP tool server."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"
    NEEDS_AUTH = "needs_auth"


class CredentialStoreType(str, Enum):
    """Backends a credential reference can point into."""

    MEMORY = "memory"
    KEYCHAIN = "keychain"
    NANGO = "nango"


class MessageRole(str, Enum):
    """Author role of a conversation message."""

    USER = "user"
    AGENT = "agent"
    SYSTEM = "system"


class MessageVisibility(str, Enum):
    """Who may see a conversation message."""

    USER_FACING = "user-facing"
    INTERNAL = "internal"
    SYSTEM = "system"
    EXTERNAL = "external"
