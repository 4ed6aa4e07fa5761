"""Health check endpoint. No dependencies; liveness probe and keep-alive target."""

from fastapi import APIRouter

from citaya.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()
