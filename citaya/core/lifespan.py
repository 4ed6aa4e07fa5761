"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: shared HTTP client, media gateway
(built from validated credentials), and the keep-alive job in production.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from citaya.core.config import get_settings
from citaya.domain.media import Credentials
from citaya.infrastructure.services import (
    MediaGatewayService,
    create_keep_alive_service,
)
from citaya.shared.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, shared HTTP client, media gateway, keep-alive
    (production only). Shutdown order: keep-alive stop, HTTP client close,
    DB engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    credentials = Credentials.from_settings(settings)
    http_client = httpx.AsyncClient(timeout=settings.cdn_timeout_seconds)
    app.state.http_client = http_client
    app.state.media_gateway = MediaGatewayService.create(
        credentials,
        http_client,
        upload_api_url=settings.cdn_upload_api_url,
        api_url=settings.cdn_api_url,
    )
    logger.info("Media gateway initialized (endpoint %s)", credentials.url_endpoint)

    app.state.keep_alive = None
    if settings.is_production and settings.keep_alive_enabled:
        keep_alive = create_keep_alive_service(settings, http=http_client)
        keep_alive.start()
        app.state.keep_alive = keep_alive

    yield

    # ---- Shutdown ----
    if getattr(app.state, "keep_alive", None) is not None:
        await app.state.keep_alive.stop()
        app.state.keep_alive = None

    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    from citaya.infrastructure.persistence import database

    await database.dispose_engine()
