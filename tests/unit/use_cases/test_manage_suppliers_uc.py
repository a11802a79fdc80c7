"""Tests for supplier use cases."""

from unittest.mock import AsyncMock, patch

import pytest

from airos.application.dto.requests import (
    AdjustBalanceRequest,
    CreateSupplierRequest,
    UpdateSupplierRequest,
)
from airos.application.use_cases import (
    AdjustSupplierBalanceUseCase,
    CreateSupplierUseCase,
    DeleteSupplierUseCase,
    UpdateSupplierUseCase,
)
from airos.core.entities.supplier import (
    BalanceOperation,
    ContactPerson,
    Supplier,
    SupplierAddress,
)
from airos.core.exceptions import (
    DuplicateSupplierCodeError,
    SupplierHasBalanceError,
    SupplierNotFoundError,
)


def make_supplier(**overrides) -> Supplier:
    data = {
        "id": 1,
        "name": "PT Teknologi Maju",
        "code": "TECH001",
        "contact_person": ContactPerson(
            name="Ahmad Wijaya", email="ahmad@tekmaju.co.id", phone="+62-21-555"
        ),
        "address": SupplierAddress(
            street="Jl. Sudirman 1", city="Jakarta", state="DKI", zip_code="10220"
        ),
        "credit_limit": 1000.0,
    }
    data.update(overrides)
    return Supplier(**data)


@pytest.fixture
def mock_supplier_store():
    store = AsyncMock()
    store.get_supplier.return_value = make_supplier()
    store.get_supplier_by_code.return_value = None
    store.delete_supplier.return_value = True

    async def _create(supplier):
        supplier.id = 7
        return supplier

    store.create_supplier.side_effect = _create
    store.update_supplier.side_effect = lambda supplier: supplier
    return store


class TestCreateSupplier:
    async def test_creates_with_normalized_code(self, mock_supplier_store):
        request = CreateSupplierRequest.model_validate(
            {
                "name": "CV Sumber Rejeki",
                "code": " sr002 ",
                "contact_person": {"name": "Dewi", "email": "dewi@sr.id", "phone": "0812"},
                "address": {
                    "street": "Jl. Pemuda 3",
                    "city": "Surabaya",
                    "state": "Jatim",
                    "zip_code": "60271",
                },
            }
        )

        supplier = await CreateSupplierUseCase(mock_supplier_store).execute(request)

        assert supplier.id == 7
        assert supplier.code == "SR002"
        mock_supplier_store.get_supplier_by_code.assert_awaited_once_with("SR002")

    async def test_duplicate_code(self, mock_supplier_store):
        mock_supplier_store.get_supplier_by_code.return_value = make_supplier()
        request = CreateSupplierRequest.model_validate(
            {
                "name": "Copy",
                "code": "tech001",
                "contact_person": {"name": "X", "email": "x@x.id", "phone": "1"},
                "address": {"street": "a", "city": "b", "state": "c", "zip_code": "d"},
            }
        )

        with pytest.raises(DuplicateSupplierCodeError):
            await CreateSupplierUseCase(mock_supplier_store).execute(request)
        mock_supplier_store.create_supplier.assert_not_awaited()


class TestUpdateSupplier:
    async def test_code_taken_by_another_supplier(self, mock_supplier_store):
        mock_supplier_store.get_supplier_by_code.return_value = make_supplier(id=2, code="OTHER")

        with pytest.raises(DuplicateSupplierCodeError):
            await UpdateSupplierUseCase(mock_supplier_store).execute(
                1, UpdateSupplierRequest(code="other")
            )

    async def test_keeping_own_code_is_allowed(self, mock_supplier_store):
        mock_supplier_store.get_supplier_by_code.return_value = make_supplier()

        supplier = await UpdateSupplierUseCase(mock_supplier_store).execute(
            1, UpdateSupplierRequest(code="tech001", rating=5)
        )

        assert supplier.rating == 5
        assert supplier.current_balance == 0.0

    async def test_missing_supplier(self, mock_supplier_store):
        mock_supplier_store.get_supplier.return_value = None

        with pytest.raises(SupplierNotFoundError):
            await UpdateSupplierUseCase(mock_supplier_store).execute(
                9, UpdateSupplierRequest(name="Gone")
            )


class TestDeleteSupplier:
    async def test_outstanding_balance_blocks_delete(self, mock_supplier_store):
        mock_supplier_store.get_supplier.return_value = make_supplier(current_balance=250.0)

        with pytest.raises(SupplierHasBalanceError) as exc_info:
            await DeleteSupplierUseCase(mock_supplier_store).execute(1)

        assert exc_info.value.details["value"] == "250.0"
        mock_supplier_store.delete_supplier.assert_not_awaited()

    async def test_zero_balance_deletes(self, mock_supplier_store):
        await DeleteSupplierUseCase(mock_supplier_store).execute(1)

        mock_supplier_store.delete_supplier.assert_awaited_once_with(1)

    async def test_missing_supplier(self, mock_supplier_store):
        mock_supplier_store.get_supplier.return_value = None

        with pytest.raises(SupplierNotFoundError):
            await DeleteSupplierUseCase(mock_supplier_store).execute(9)
        mock_supplier_store.delete_supplier.assert_not_awaited()

    async def test_removed_between_read_and_delete(self, mock_supplier_store):
        mock_supplier_store.delete_supplier.return_value = False

        with pytest.raises(SupplierNotFoundError):
            await DeleteSupplierUseCase(mock_supplier_store).execute(1)


class TestAdjustBalance:
    async def test_within_credit_limit(self, mock_supplier_store):
        mock_supplier_store.adjust_balance.return_value = make_supplier(current_balance=400.0)
        request = AdjustBalanceRequest(amount=400.0, operation=BalanceOperation.ADD)

        with patch("airos.application.use_cases.manage_suppliers.logger") as logger:
            supplier = await AdjustSupplierBalanceUseCase(mock_supplier_store).execute(1, request)

        assert supplier.current_balance == 400.0
        mock_supplier_store.adjust_balance.assert_awaited_once_with(
            1, 400.0, BalanceOperation.ADD
        )
        logger.warning.assert_not_called()

    async def test_over_credit_limit_is_applied_and_logged(self, mock_supplier_store):
        mock_supplier_store.adjust_balance.return_value = make_supplier(current_balance=1500.0)
        request = AdjustBalanceRequest(amount=1500.0, operation=BalanceOperation.ADD)

        with patch("airos.application.use_cases.manage_suppliers.logger") as logger:
            supplier = await AdjustSupplierBalanceUseCase(mock_supplier_store).execute(1, request)

        assert supplier.current_balance == 1500.0
        assert supplier.available_credit == 0.0
        logger.warning.assert_called_once_with(
            "supplier_credit_limit_exceeded",
            supplier_id=1,
            balance=1500.0,
            credit_limit=1000.0,
        )

    async def test_missing_supplier(self, mock_supplier_store):
        mock_supplier_store.adjust_balance.return_value = None
        request = AdjustBalanceRequest(amount=10.0, operation=BalanceOperation.SUBTRACT)

        with pytest.raises(SupplierNotFoundError):
            await AdjustSupplierBalanceUseCase(mock_supplier_store).execute(9, request)
