"""Application interfaces (ports): repository protocols.

No runtime imports from tasks_api.infrastructure.
"""

from tasks_api.application.interfaces.repositories import ITaskRepository

__all__ = ["ITaskRepository"]
