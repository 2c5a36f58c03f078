"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from records.config.app_config import AppConfig
from records.web.deps import get_config
from records.web.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(config: AppConfig = Depends(get_config)) -> HealthResponse:
    """Check API health status."""
    return HealthResponse(
        status="ok",
        version=config.api.version,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
