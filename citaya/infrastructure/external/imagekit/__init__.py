"""ImageKit CDN REST client (httpx; no vendor SDK)."""

from citaya.infrastructure.external.imagekit._rest_client import (
    ImageKitRESTClient,
    sign,
)

__all__ = ["ImageKitRESTClient", "sign"]
