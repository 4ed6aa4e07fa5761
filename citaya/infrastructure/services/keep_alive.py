"""Keep-alive job: periodic lightweight ping so free hosting tiers do not idle.

Idle -> Running -> Idle state machine around one asyncio task. start() is
idempotent; stop() cancels the task. In production each tick also hits the
service's own public /health URL, since the host only counts inbound HTTP.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from citaya.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 600


@dataclass(frozen=True)
class PingResult:
    """Outcome of one keep-alive ping. Always returned, never raised."""

    success: bool
    duration: int
    count: int | None = None
    http_ping: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "success": self.success,
            "duration": self.duration,
            "count": self.count,
            "http_ping": self.http_ping,
        }
        if self.error is not None:
            out["error"] = self.error
        return out


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class KeepAliveService:
    """Recurring datastore ping with a guarded start/stop lifecycle.

    Args:
        count_query: Coroutine factory returning a row count (the liveness query).
        interval_seconds: Delay between pings.
        http: Shared client for the self-ping; None disables it.
        health_url: Public health URL to hit in production.
        production: When False the HTTP self-ping is skipped.
    """

    def __init__(
        self,
        count_query: Callable[[], Awaitable[int]],
        *,
        interval_seconds: int = DEFAULT_INTERVAL_SECONDS,
        http: httpx.AsyncClient | None = None,
        health_url: str | None = None,
        production: bool = False,
    ):
        self._count_query = count_query
        self._interval = interval_seconds
        self._http = http
        self._health_url = health_url
        self._production = production
        self._task: asyncio.Task[None] | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Schedule the recurring ping. No-op (with a warning) if already running."""
        if self._running:
            logger.warning("Keep-alive already running")
            return
        self._task = asyncio.create_task(self._run(), name="keep-alive")
        self._running = True
        logger.info(
            "Keep-alive started (%s) - ping every %d seconds",
            "production" if self._production else "development",
            self._interval,
        )
        if self._production and self._health_url:
            logger.info("Keep-alive HTTP ping URL: %s", self._health_url)

    async def stop(self) -> None:
        """Cancel the recurring ping and return to idle. No-op when idle."""
        task = self._task
        self._task = None
        if not self._running or task is None:
            self._running = False
            return
        self._running = False
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Keep-alive stopped")

    async def ping_now(self) -> PingResult:
        """Run one ping immediately (diagnostics)."""
        return await self._ping()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self._ping()

    async def _ping_http(self) -> bool:
        """GET the public health URL; failures are logged only."""
        if not (self._production and self._http is not None and self._health_url):
            return False
        start = time.perf_counter()
        try:
            resp = await self._http.get(self._health_url)
        except httpx.HTTPError as e:
            logger.error("Keep-alive HTTP ping failed: %s", e)
            return True
        if resp.is_success:
            logger.info("Keep-alive HTTP ping ok (%dms)", _elapsed_ms(start))
        else:
            logger.warning("Keep-alive HTTP ping returned status %d", resp.status_code)
        return True

    async def _ping(self) -> PingResult:
        start = time.perf_counter()
        http_ping = False
        try:
            http_ping = await self._ping_http()
            db_start = time.perf_counter()
            count = await self._count_query()
            db_duration = _elapsed_ms(db_start)
        except Exception as e:
            duration = _elapsed_ms(start)
            logger.error("Keep-alive ping failed after %dms: %s", duration, e)
            return PingResult(
                success=False,
                duration=duration,
                http_ping=http_ping,
                error=str(e) or e.__class__.__name__,
            )
        logger.info("Keep-alive DB ping ok (%dms) - rows: %d", db_duration, count)
        return PingResult(
            success=True,
            duration=db_duration,
            count=count,
            http_ping=http_ping,
        )


def create_keep_alive_service(
    settings: Settings,
    http: httpx.AsyncClient | None = None,
) -> KeepAliveService:
    """Build a KeepAliveService that counts rows in settings.keep_alive_table."""
    from citaya.infrastructure.persistence.database import count_rows

    table_name = settings.keep_alive_table

    async def count_query() -> int:
        return await count_rows(table_name)

    health_url = (
        f"{settings.external_url.rstrip('/')}/health" if settings.external_url else None
    )
    return KeepAliveService(
        count_query,
        interval_seconds=settings.keep_alive_interval_seconds,
        http=http,
        health_url=health_url,
        production=settings.is_production,
    )
