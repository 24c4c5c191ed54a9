"""HTTP middleware. Applied in tasks_api.main (first added = outermost)."""

from tasks_api.middleware.cross_origin import CrossOriginHeadersMiddleware

__all__ = [
    "CrossOriginHeadersMiddleware",
]
