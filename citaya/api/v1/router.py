"""API router aggregation.

Mounted under /api by main. Health is mounted separately at /health so the
keep-alive self-ping and platform probes hit a stable root path.
"""

from fastapi import APIRouter

from citaya.api.v1.endpoints import imagekit

api_router = APIRouter()

api_router.include_router(imagekit.router, prefix="/imagekit", tags=["imagekit"])
