"""Order endpoints: creation, lifecycle, edits and reporting."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from airos.api.dependencies import (
    get_create_order_use_case,
    get_current_user,
    get_dashboard_stats_use_case,
    get_delete_order_use_case,
    get_ord_store,
    get_transition_order_status_use_case,
    get_update_order_use_case,
    require_admin,
    require_manager,
)
from airos.application.dto.mappers import order_to_response
from airos.application.dto.requests import (
    CreateOrderRequest,
    UpdateOrderRequest,
    UpdateOrderStatusRequest,
)
from airos.application.dto.responses import (
    ErrorResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
)
from airos.application.use_cases import (
    CreateOrderUseCase,
    DashboardStatsUseCase,
    DeleteOrderUseCase,
    TransitionOrderStatusUseCase,
    UpdateOrderUseCase,
)
from airos.core.entities.user import AuthPrincipal
from airos.core.exceptions import OrderNotFoundError
from airos.core.services import parse_status
from airos.core.time_utils import day_bounds
from airos.infrastructure.storage.sqlite import SQLiteOrderStore

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _window(start_date: date | None, end_date: date | None):
    """Inclusive date range to a half-open datetime window."""
    start = day_bounds(start_date)[0] if start_date else None
    end = day_bounds(end_date)[1] if end_date else None
    return start, end


@router.get("", response_model=OrderListResponse, responses={400: {"model": ErrorResponse}})
async def list_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _: AuthPrincipal = Depends(get_current_user),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderListResponse:
    """List orders, newest first."""
    order_status = parse_status(status_filter) if status_filter else None
    start, end = _window(start_date, end_date)
    orders = await store.list_orders(
        status=order_status, search=search, start=start, end=end, limit=limit, offset=offset
    )
    total = await store.count_orders(
        [order_status] if order_status else None, start=start, end=end, search=search
    )
    return OrderListResponse(
        orders=[order_to_response(o) for o in orders],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/stats/overview", response_model=OrderStatsResponse)
async def order_stats(
    start_date: date | None = None,
    end_date: date | None = None,
    _: AuthPrincipal = Depends(require_manager),
    use_case: DashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
) -> OrderStatsResponse:
    """Order counts by status and daily totals for a date range."""
    start, end = _window(start_date, end_date)
    return await use_case.order_stats(start, end)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: int,
    _: AuthPrincipal = Depends(get_current_user),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderResponse:
    """Get an order by ID."""
    order = await store.get_order(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return order_to_response(order)


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_order(
    request: CreateOrderRequest,
    principal: AuthPrincipal = Depends(get_current_user),
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
) -> OrderResponse:
    """Price and reserve every line, then save the order."""
    order = await use_case.execute(request, created_by=principal.user_id)
    return use_case.to_response(order)


@router.put(
    "/{order_id}",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_order(
    order_id: int,
    request: UpdateOrderRequest,
    _: AuthPrincipal = Depends(require_manager),
    use_case: UpdateOrderUseCase = Depends(get_update_order_use_case),
) -> OrderResponse:
    """Edit a pending order, re-reserving stock for changed lines."""
    order = await use_case.execute(order_id, request)
    return use_case.to_response(order)


@router.put(
    "/{order_id}/status",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_order_status(
    order_id: int,
    request: UpdateOrderStatusRequest,
    _: AuthPrincipal = Depends(require_manager),
    use_case: TransitionOrderStatusUseCase = Depends(get_transition_order_status_use_case),
) -> OrderResponse:
    """Move an order to its next lifecycle status."""
    order = await use_case.execute(order_id, request)
    return use_case.to_response(order)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_order(
    order_id: int,
    _: AuthPrincipal = Depends(require_admin),
    use_case: DeleteOrderUseCase = Depends(get_delete_order_use_case),
) -> None:
    """Delete an order, returning any stock it still holds."""
    await use_case.execute(order_id)
