"""Supplier use cases: create, update, delete, balance adjustment."""

from airos.application.dto.mappers import supplier_to_response
from airos.application.dto.requests import (
    AdjustBalanceRequest,
    CreateSupplierRequest,
    UpdateSupplierRequest,
)
from airos.application.dto.responses import SupplierResponse
from airos.config import get_logger
from airos.core.entities.supplier import Supplier
from airos.core.exceptions import (
    DuplicateSupplierCodeError,
    SupplierHasBalanceError,
    SupplierNotFoundError,
)
from airos.core.interfaces.supplier_store import ISupplierStore

logger = get_logger(__name__)


class _SupplierUseCase:
    def __init__(self, supplier_store: ISupplierStore | None = None):
        self._supplier_store = supplier_store

    async def _get_supplier_store(self) -> ISupplierStore:
        if self._supplier_store is None:
            from airos.infrastructure.storage.sqlite import get_supplier_store

            self._supplier_store = await get_supplier_store()
        return self._supplier_store

    async def _get_or_raise(self, supplier_id: int) -> Supplier:
        store = await self._get_supplier_store()
        supplier = await store.get_supplier(supplier_id)
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)
        return supplier

    def to_response(self, supplier: Supplier) -> SupplierResponse:
        """Convert result to API response."""
        return supplier_to_response(supplier)


class CreateSupplierUseCase(_SupplierUseCase):
    async def execute(self, request: CreateSupplierRequest) -> Supplier:
        store = await self._get_supplier_store()
        code = request.code.strip().upper()
        if await store.get_supplier_by_code(code) is not None:
            raise DuplicateSupplierCodeError(code)
        return await store.create_supplier(Supplier.model_validate(request.model_dump()))


class UpdateSupplierUseCase(_SupplierUseCase):
    async def execute(self, supplier_id: int, request: UpdateSupplierRequest) -> Supplier:
        store = await self._get_supplier_store()
        supplier = await self._get_or_raise(supplier_id)

        changes = request.model_dump(exclude_unset=True)
        if changes.get("code"):
            code = changes["code"].strip().upper()
            clash = await store.get_supplier_by_code(code)
            if clash is not None and clash.id != supplier_id:
                raise DuplicateSupplierCodeError(code)

        updated = Supplier.model_validate({**supplier.model_dump(), **changes})
        return await store.update_supplier(updated)


class DeleteSupplierUseCase(_SupplierUseCase):
    """Suppliers with an outstanding balance cannot be deleted."""

    async def execute(self, supplier_id: int) -> None:
        store = await self._get_supplier_store()
        supplier = await self._get_or_raise(supplier_id)
        if supplier.current_balance > 0:
            raise SupplierHasBalanceError(supplier_id, supplier.current_balance)
        if not await store.delete_supplier(supplier_id):
            raise SupplierNotFoundError(supplier_id)


class AdjustSupplierBalanceUseCase(_SupplierUseCase):
    """Atomic balance change; subtraction never drives the balance below zero."""

    async def execute(self, supplier_id: int, request: AdjustBalanceRequest) -> Supplier:
        store = await self._get_supplier_store()
        supplier = await store.adjust_balance(supplier_id, request.amount, request.operation)
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)
        if supplier.current_balance > supplier.credit_limit:
            logger.warning(
                "supplier_credit_limit_exceeded",
                supplier_id=supplier_id,
                balance=supplier.current_balance,
                credit_limit=supplier.credit_limit,
            )
        return supplier
