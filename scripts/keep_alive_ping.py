"""Run one keep-alive ping and print the result (diagnostics).

Usage:
    python -m scripts.keep_alive_ping [table]
Counts rows in KEEP_ALIVE_TABLE (or the given table) and, when
DEPLOYMENT_MODE=production and EXTERNAL_URL is set, hits EXTERNAL_URL/health.
Exit code is 0 on success, 1 on failure.
"""

import asyncio
import json
import sys

import httpx

from citaya.core.config import get_settings
from citaya.infrastructure.persistence.database import dispose_engine
from citaya.infrastructure.services import create_keep_alive_service
from citaya.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def main() -> int:
    """Ping once; print the structured result as JSON."""
    setup_logging()
    settings = get_settings()
    if len(sys.argv) > 1:
        settings = settings.model_copy(update={"keep_alive_table": sys.argv[1]})
    if not settings.database_url:
        print("DATABASE_URL is not set", file=sys.stderr)
        return 1

    async with httpx.AsyncClient(timeout=10.0) as http:
        service = create_keep_alive_service(settings, http=http)
        result = await service.ping_now()
    await dispose_engine()

    print(json.dumps(result.to_dict(), indent=2))
    if not result.success:
        logger.error("Keep-alive ping failed against table %s", settings.keep_alive_table)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
