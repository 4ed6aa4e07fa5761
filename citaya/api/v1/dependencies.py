"""Presentation-layer dependency injection (composition root).

Routes depend on these, never on infrastructure directly. The media gateway
is built once in the lifespan and read from app.state; the auth gate verifies
the bearer token before any handler code runs.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from citaya.domain.exceptions import AuthenticationException
from citaya.infrastructure.security.jwt import verify_token
from citaya.infrastructure.services import MediaGatewayService
from citaya.shared.context import set_current_user_id

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


def get_media_gateway(request: Request) -> MediaGatewayService:
    """Process-scoped media gateway (set in lifespan)."""
    gateway = getattr(request.app.state, "media_gateway", None)
    if gateway is None:
        raise RuntimeError("Media gateway not initialized; app lifespan did not run")
    return gateway


async def require_auth(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> dict[str, Any]:
    """Bearer-token gate. Returns the token claims; raises 401 otherwise.

    Resolved before the endpoint body, so a rejected request never reaches
    the media gateway.
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationException("Token not provided")
    try:
        claims = verify_token(credentials.credentials)
    except ValueError as e:
        logger.info("Rejected bearer token: %s", e)
        raise AuthenticationException("Invalid token") from e
    user_id = claims.get("userId") or claims.get("sub")
    set_current_user_id(str(user_id) if user_id else None)
    return claims


MediaGateway = Annotated[MediaGatewayService, Depends(get_media_gateway)]
CurrentClaims = Annotated[dict[str, Any], Depends(require_auth)]
