"""
Application factory and process entrypoint.

The OAuth config file is loaded before the app is built; if it cannot be
read the process exits without binding the port.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager, suppress

import uvicorn
from fastapi import FastAPI

from coraserver.api.main import api_router
from coraserver.core.config import Settings, settings
from coraserver.core.db import init_db
from coraserver.core.oauth_config import OAuthConfig, OAuthConfigError, load_oauth_config
from coraserver.services.microsoft_oauth import MicrosoftOAuthClient
from coraserver.services.oauth_state_cleanup import run_cleanup_task

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()

    stop_event = asyncio.Event()
    cleanup_task = asyncio.create_task(
        run_cleanup_task(
            interval_seconds=app.state.settings.STATE_CLEANUP_INTERVAL_SECONDS,
            stop_event=stop_event,
        )
    )
    try:
        yield
    finally:
        stop_event.set()
        cleanup_task.cancel()
        with suppress(asyncio.CancelledError):
            await cleanup_task


def create_app(oauth_config: OAuthConfig, app_settings: Settings = settings) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        oauth_config: OAuth client configuration, loaded once at startup
        app_settings: Process settings

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Campus timetable queries with Microsoft sign-in",
        version=app_settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.oauth_config = oauth_config
    app.state.oauth_client = MicrosoftOAuthClient(
        oauth_config,
        graph_api_url=app_settings.GRAPH_API_URL,
        timeout=app_settings.OAUTH_HTTP_TIMEOUT_SECONDS,
    )

    app.include_router(api_router)
    return app


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        oauth_config = load_oauth_config(settings.OAUTH_CONFIG_FILE)
    except OAuthConfigError as e:
        logger.critical("%s", e)
        sys.exit(1)

    app = create_app(oauth_config)

    logger.info("Server starting on port %d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
