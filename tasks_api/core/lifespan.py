"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring. The database connection is made
in a background task so the server accepts requests immediately; until it
succeeds, store calls fail with StoreNotConnectedException.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from tasks_api.core.config import get_settings
from tasks_api.infrastructure.firebase.client import FirestoreConnection

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: create the shared FirestoreConnection on app.state.db and
    start connecting in the background. Shutdown: stop a pending connect,
    then close the HTTP connection pool.
    """
    settings = get_settings()

    # ---- Startup ----
    connection = FirestoreConnection(settings)
    app.state.db = connection
    connect_task = asyncio.create_task(connection.connect())
    app.state.db_connect_task = connect_task
    logger.info("Server running on port %s", settings.port)

    yield

    # ---- Shutdown ----
    if not connect_task.done():
        connect_task.cancel()
        try:
            await connect_task
        except asyncio.CancelledError:
            pass
        logger.info("Pending database connection cancelled")

    await connection.close()
    app.state.db = None
