"""Application layer: interfaces implemented by infrastructure (DIP)."""

from tasks_api.application.interfaces import ITaskRepository

__all__ = ["ITaskRepository"]
