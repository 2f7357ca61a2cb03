"""Multi-tenant management backend for agent graphs."""

__version__ = "0.1.0"
