"""Infrastructure exceptions for document store operations.

Store errors extend TasksApiException so presentation can map them
to HTTP responses consistently.
"""

from tasks_api.domain.exceptions import TasksApiException


class StoreException(TasksApiException):
    """Document store unavailable or the store rejected the operation."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Store operation '{operation}' failed: {reason}",
            "STORE_ERROR",
            {"operation": operation, "reason": reason},
        )


class StoreNotConnectedException(StoreException):
    """No database connection has been established yet (or it failed)."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "database is not connected")
