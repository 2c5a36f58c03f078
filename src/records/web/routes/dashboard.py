"""Dashboard endpoint."""

from fastapi import APIRouter, Depends

from records.config.app_config import AppConfig
from records.core.aggregation import dashboard_stats
from records.db.store import RecordStore
from records.web.deps import get_config, get_store
from records.web.schemas import DashboardStatsResponse

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    store: RecordStore = Depends(get_store),
    config: AppConfig = Depends(get_config),
) -> DashboardStatsResponse:
    """Summary counts, overall average, grade bands and top students."""
    stats = dashboard_stats(store, top_limit=config.dashboard.top_students)
    return DashboardStatsResponse.model_validate(stats)
