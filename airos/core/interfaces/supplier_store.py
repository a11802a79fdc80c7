"""Abstract interface for supplier storage."""

from abc import ABC, abstractmethod

from airos.core.entities.stats import RatingCount
from airos.core.entities.supplier import BalanceOperation, Supplier


class ISupplierStore(ABC):
    """Interface for supplier persistence."""

    @abstractmethod
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a supplier. Raises DuplicateSupplierCodeError on code clash."""
        pass

    @abstractmethod
    async def get_supplier(self, supplier_id: int) -> Supplier | None:
        """Get supplier by ID."""
        pass

    @abstractmethod
    async def get_supplier_by_code(self, code: str) -> Supplier | None:
        """Get supplier by (normalized) code."""
        pass

    @abstractmethod
    async def update_supplier(self, supplier: Supplier) -> Supplier:
        """Update supplier profile fields. Never touches current_balance."""
        pass

    @abstractmethod
    async def delete_supplier(self, supplier_id: int) -> bool:
        """Delete a supplier."""
        pass

    @abstractmethod
    async def list_suppliers(
        self,
        search: str | None = None,
        category: str | None = None,
        is_active: bool | None = None,
    ) -> list[Supplier]:
        """List suppliers ordered by name."""
        pass

    @abstractmethod
    async def adjust_balance(
        self, supplier_id: int, amount: float, operation: BalanceOperation
    ) -> Supplier | None:
        """
        Atomically add to or subtract from the balance, flooring at zero.

        Returns the updated supplier, None if it does not exist.
        """
        pass

    @abstractmethod
    async def count_suppliers(self, is_active: bool | None = None) -> int:
        """Count suppliers."""
        pass

    @abstractmethod
    async def credit_totals(self) -> tuple[float, float]:
        """Return (sum of credit limits, sum of current balances)."""
        pass

    @abstractmethod
    async def count_by_rating(self) -> list[RatingCount]:
        """Supplier count per rating, ascending."""
        pass

    @abstractmethod
    async def top_by_balance(self, limit: int = 5) -> list[Supplier]:
        """Suppliers with the largest outstanding balance."""
        pass
