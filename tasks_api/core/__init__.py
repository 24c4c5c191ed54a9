"""Core: config, logging bootstrap, lifespan and exception handlers."""

from tasks_api.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
