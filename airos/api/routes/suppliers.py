"""Supplier endpoints."""

from fastapi import APIRouter, Depends, status

from airos.api.dependencies import (
    get_adjust_supplier_balance_use_case,
    get_create_supplier_use_case,
    get_current_user,
    get_dashboard_stats_use_case,
    get_delete_supplier_use_case,
    get_supp_store,
    get_update_supplier_use_case,
    require_admin,
    require_manager,
)
from airos.application.dto.mappers import supplier_to_response
from airos.application.dto.requests import (
    AdjustBalanceRequest,
    CreateSupplierRequest,
    UpdateSupplierRequest,
)
from airos.application.dto.responses import (
    ErrorResponse,
    SupplierListResponse,
    SupplierResponse,
    SupplierStatsResponse,
)
from airos.application.use_cases import (
    AdjustSupplierBalanceUseCase,
    CreateSupplierUseCase,
    DashboardStatsUseCase,
    DeleteSupplierUseCase,
    UpdateSupplierUseCase,
)
from airos.core.entities.user import AuthPrincipal
from airos.core.exceptions import SupplierNotFoundError
from airos.infrastructure.storage.sqlite import SQLiteSupplierStore

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.get("", response_model=SupplierListResponse)
async def list_suppliers(
    search: str | None = None,
    category: str | None = None,
    is_active: bool | None = None,
    _: AuthPrincipal = Depends(get_current_user),
    store: SQLiteSupplierStore = Depends(get_supp_store),
) -> SupplierListResponse:
    """List suppliers ordered by name."""
    suppliers = await store.list_suppliers(search=search, category=category, is_active=is_active)
    return SupplierListResponse(
        suppliers=[supplier_to_response(s) for s in suppliers],
        total=len(suppliers),
    )


@router.get("/stats/overview", response_model=SupplierStatsResponse)
async def supplier_stats(
    _: AuthPrincipal = Depends(require_manager),
    use_case: DashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
) -> SupplierStatsResponse:
    """Supplier totals, credit exposure and largest balances."""
    return await use_case.supplier_stats()


@router.get(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_supplier(
    supplier_id: int,
    _: AuthPrincipal = Depends(get_current_user),
    store: SQLiteSupplierStore = Depends(get_supp_store),
) -> SupplierResponse:
    """Get a supplier by ID."""
    supplier = await store.get_supplier(supplier_id)
    if supplier is None:
        raise SupplierNotFoundError(supplier_id)
    return supplier_to_response(supplier)


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_supplier(
    request: CreateSupplierRequest,
    _: AuthPrincipal = Depends(require_manager),
    use_case: CreateSupplierUseCase = Depends(get_create_supplier_use_case),
) -> SupplierResponse:
    """Create a supplier."""
    return use_case.to_response(await use_case.execute(request))


@router.put(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_supplier(
    supplier_id: int,
    request: UpdateSupplierRequest,
    _: AuthPrincipal = Depends(require_manager),
    use_case: UpdateSupplierUseCase = Depends(get_update_supplier_use_case),
) -> SupplierResponse:
    """Edit a supplier."""
    return use_case.to_response(await use_case.execute(supplier_id, request))


@router.put(
    "/{supplier_id}/balance",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def adjust_balance(
    supplier_id: int,
    request: AdjustBalanceRequest,
    _: AuthPrincipal = Depends(require_manager),
    use_case: AdjustSupplierBalanceUseCase = Depends(get_adjust_supplier_balance_use_case),
) -> SupplierResponse:
    """Add to or subtract from the outstanding balance."""
    return use_case.to_response(await use_case.execute(supplier_id, request))


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_supplier(
    supplier_id: int,
    _: AuthPrincipal = Depends(require_admin),
    use_case: DeleteSupplierUseCase = Depends(get_delete_supplier_use_case),
) -> None:
    """Delete a supplier with no outstanding balance."""
    await use_case.execute(supplier_id)
