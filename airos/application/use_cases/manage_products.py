"""Product catalog use cases: create, update, delete."""

from airos.application.dto.mappers import product_to_response
from airos.application.dto.requests import CreateProductRequest, UpdateProductRequest
from airos.application.dto.responses import ProductResponse
from airos.config import get_logger, get_settings
from airos.core.entities.product import Product
from airos.core.exceptions import (
    DuplicateSkuError,
    ProductNotFoundError,
    SupplierNotFoundError,
)
from airos.core.interfaces.product_store import IProductStore
from airos.core.interfaces.supplier_store import ISupplierStore

logger = get_logger(__name__)


class _ProductUseCase:
    def __init__(
        self,
        product_store: IProductStore | None = None,
        supplier_store: ISupplierStore | None = None,
    ):
        self._product_store = product_store
        self._supplier_store = supplier_store

    async def _get_product_store(self) -> IProductStore:
        if self._product_store is None:
            from airos.infrastructure.storage.sqlite import get_product_store

            self._product_store = await get_product_store()
        return self._product_store

    async def _get_supplier_store(self) -> ISupplierStore:
        if self._supplier_store is None:
            from airos.infrastructure.storage.sqlite import get_supplier_store

            self._supplier_store = await get_supplier_store()
        return self._supplier_store

    async def _check_supplier(self, supplier_id: int | None) -> None:
        if supplier_id is None:
            return
        supplier_store = await self._get_supplier_store()
        if await supplier_store.get_supplier(supplier_id) is None:
            raise SupplierNotFoundError(supplier_id)

    def to_response(self, product: Product) -> ProductResponse:
        """Convert result to API response."""
        return product_to_response(product)


class CreateProductUseCase(_ProductUseCase):
    """Create a product; opening stock is recorded as an `add` movement."""

    async def execute(self, request: CreateProductRequest) -> Product:
        store = await self._get_product_store()
        if await store.get_product_by_sku(request.sku) is not None:
            raise DuplicateSkuError(request.sku.strip().upper())
        await self._check_supplier(request.supplier_id)

        data = request.model_dump()
        if data["min_stock_level"] is None:
            data["min_stock_level"] = get_settings().inventory.default_min_stock_level
        return await store.create_product(Product(**data))


class UpdateProductUseCase(_ProductUseCase):
    """Edit catalog fields. Stock is not editable here."""

    async def execute(self, product_id: int, request: UpdateProductRequest) -> Product:
        store = await self._get_product_store()
        product = await store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        changes = request.model_dump(exclude_unset=True)
        if changes.get("sku"):
            sku = changes["sku"].strip().upper()
            clash = await store.get_product_by_sku(sku)
            if clash is not None and clash.id != product_id:
                raise DuplicateSkuError(sku)
        if "supplier_id" in changes:
            await self._check_supplier(changes["supplier_id"])

        updated = Product.model_validate({**product.model_dump(), **changes})
        return await store.update_product(updated)


class DeleteProductUseCase(_ProductUseCase):
    """Delete a product. Historical orders keep their line snapshots."""

    async def execute(self, product_id: int) -> None:
        store = await self._get_product_store()
        if not await store.delete_product(product_id):
            raise ProductNotFoundError(product_id)
        logger.info("delete_product_complete", product_id=product_id)
