"""Infrastructure services: media gateway and keep-alive job."""

from citaya.infrastructure.services.keep_alive import (
    KeepAliveService,
    PingResult,
    create_keep_alive_service,
)
from citaya.infrastructure.services.media_gateway import MediaGatewayService

__all__ = [
    "KeepAliveService",
    "MediaGatewayService",
    "PingResult",
    "create_keep_alive_service",
]
