"""Dashboard endpoints."""

from fastapi import APIRouter, Depends, Query

from airos.api.dependencies import get_current_user, get_dashboard_stats_use_case
from airos.application.dto.responses import DashboardStatsResponse, SalesChartResponse
from airos.application.use_cases import DashboardStatsUseCase
from airos.core.entities.user import AuthPrincipal

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    _: AuthPrincipal = Depends(get_current_user),
    use_case: DashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
) -> DashboardStatsResponse:
    """Headline totals, revenue trend and fulfillment rate."""
    return await use_case.execute()


@router.get("/sales-chart", response_model=SalesChartResponse)
async def sales_chart(
    days: int = Query(default=30, ge=1, le=365),
    _: AuthPrincipal = Depends(get_current_user),
    use_case: DashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
) -> SalesChartResponse:
    """Delivered revenue per day."""
    return await use_case.sales_chart(days=days)
