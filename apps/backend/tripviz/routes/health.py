"""
Health check endpoint.

Used by:
  - Docker HEALTHCHECK instruction
  - Load balancers / orchestrators
  - The map client, to check API connectivity before posting snapshots
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from tripviz import __version__
from tripviz.core.config import settings

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str  # Always "ok" if the API process is alive
    version: str
    environment: str


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check() -> HealthResponse:
    """Liveness only: the service has no database or upstream dependencies."""
    return HealthResponse(
        status="ok",
        version=__version__,
        environment=settings.environment,
    )
