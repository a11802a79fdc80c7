"""Product catalog and stock endpoints."""

from fastapi import APIRouter, Depends, Query, status

from airos.api.dependencies import (
    get_adjust_stock_use_case,
    get_create_product_use_case,
    get_current_user,
    get_delete_product_use_case,
    get_inventory_ledger,
    get_prod_store,
    get_update_product_use_case,
    require_admin,
    require_manager,
)
from airos.application.dto.mappers import movement_to_response, product_to_response
from airos.application.dto.requests import (
    AdjustStockRequest,
    CreateProductRequest,
    UpdateProductRequest,
)
from airos.application.dto.responses import (
    AdjustStockResponse,
    CategoryCountResponse,
    ErrorResponse,
    LowStockStatusResponse,
    ProductListResponse,
    ProductResponse,
    StockMovementResponse,
)
from airos.application.use_cases import (
    AdjustStockUseCase,
    CreateProductUseCase,
    DeleteProductUseCase,
    UpdateProductUseCase,
)
from airos.core.entities.user import AuthPrincipal
from airos.core.exceptions import ProductNotFoundError
from airos.core.services import InventoryLedger
from airos.infrastructure.storage.sqlite import SQLiteProductStore

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    search: str | None = None,
    low_stock: bool = False,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _: AuthPrincipal = Depends(get_current_user),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductListResponse:
    """List products with optional category, text and low-stock filters."""
    products = await store.list_products(
        category=category, search=search, low_stock=low_stock, limit=limit, offset=offset
    )
    total = await store.count_products(low_stock=low_stock, category=category, search=search)
    return ProductListResponse(
        products=[product_to_response(p) for p in products],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/alerts/low-stock", response_model=list[ProductResponse])
async def low_stock_alerts(
    _: AuthPrincipal = Depends(get_current_user),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> list[ProductResponse]:
    """Products at or below their minimum stock level."""
    products = await store.list_products(low_stock=True, limit=1000)
    return [product_to_response(p) for p in products]


@router.get("/stats/category-distribution", response_model=list[CategoryCountResponse])
async def category_distribution(
    _: AuthPrincipal = Depends(get_current_user),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> list[CategoryCountResponse]:
    """Product count per category."""
    return [
        CategoryCountResponse(name=row.name, value=row.value)
        for row in await store.category_distribution()
    ]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    _: AuthPrincipal = Depends(get_current_user),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> ProductResponse:
    """Get a product by ID."""
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product_to_response(product)


@router.get(
    "/{product_id}/low-stock",
    response_model=LowStockStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_low_stock_status(
    product_id: int,
    _: AuthPrincipal = Depends(get_current_user),
    ledger: InventoryLedger = Depends(get_inventory_ledger),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> LowStockStatusResponse:
    """Whether a product is at or below its minimum level."""
    is_low = await ledger.is_low_stock(product_id)
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return LowStockStatusResponse(
        product_id=product_id,
        is_low_stock=is_low,
        stock_quantity=product.stock_quantity,
        min_stock_level=product.min_stock_level,
    )


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    _: AuthPrincipal = Depends(require_manager),
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> ProductResponse:
    """Create a product with its opening stock."""
    product = await use_case.execute(request)
    return use_case.to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    _: AuthPrincipal = Depends(require_manager),
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
) -> ProductResponse:
    """Edit catalog fields. Stock changes go through /stock."""
    product = await use_case.execute(product_id, request)
    return use_case.to_response(product)


@router.put(
    "/{product_id}/stock",
    response_model=AdjustStockResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def adjust_stock(
    product_id: int,
    request: AdjustStockRequest,
    _: AuthPrincipal = Depends(require_manager),
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> AdjustStockResponse:
    """Add or subtract on-hand stock."""
    result = await use_case.execute(product_id, request)
    return use_case.to_response(result)


@router.get(
    "/{product_id}/movements",
    response_model=list[StockMovementResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_movements(
    product_id: int,
    limit: int = Query(default=100, ge=1, le=1000),
    _: AuthPrincipal = Depends(require_manager),
    store: SQLiteProductStore = Depends(get_prod_store),
) -> list[StockMovementResponse]:
    """Stock movement history, newest first."""
    if await store.get_product(product_id) is None:
        raise ProductNotFoundError(product_id)
    movements = await store.get_movements(product_id, limit=limit)
    return [movement_to_response(m) for m in movements]


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: int,
    _: AuthPrincipal = Depends(require_admin),
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
) -> None:
    """Delete a product."""
    await use_case.execute(product_id)
