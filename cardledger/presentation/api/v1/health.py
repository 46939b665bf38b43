"""Health check endpoint for service monitoring."""

from fastapi import APIRouter
from pydantic import BaseModel

from cardledger import __version__

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness",
    description="Reports that the service process is up.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)
