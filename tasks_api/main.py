"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, middleware, routers.
No business logic here. See tasks_api.core.lifespan and
tasks_api.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from tasks_api.api.v1 import api_router
from tasks_api.core.config import get_settings
from tasks_api.core.exception_handlers import register_exception_handlers
from tasks_api.core.lifespan import create_lifespan
from tasks_api.middleware import CrossOriginHeadersMiddleware
from tasks_api.shared.logging import setup_logging

# CORS preflights never get here; CrossOriginHeadersMiddleware answers them.
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(
        CrossOriginHeadersMiddleware,
        allowed_origins=settings.allowed_origins,
        allowed_headers=settings.allowed_headers,
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    # Registered last so that every route above matches first.
    @app.api_route(
        "/{path:path}",
        methods=_ALL_METHODS,
        response_class=PlainTextResponse,
        include_in_schema=False,
    )
    def welcome(path: str) -> PlainTextResponse:
        """Fallback for any route not matched above."""
        return PlainTextResponse(settings.welcome_message)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tasks_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


app = create_app()
