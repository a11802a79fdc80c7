"""
Domain exceptions for the AIROS application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class AirosError(Exception):
    """Base exception for all AIROS errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Not Found Exceptions
class NotFoundError(AirosError):
    """Base exception for missing records."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not found in storage."""

    def __init__(self, product_id: int | str):
        super().__init__(
            f"Product {product_id} not found",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class OrderNotFoundError(NotFoundError):
    """Order not found in storage."""

    def __init__(self, order_id: int | str):
        super().__init__(
            f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class SupplierNotFoundError(NotFoundError):
    """Supplier not found in storage."""

    def __init__(self, supplier_id: int | str):
        super().__init__(
            f"Supplier not found: {supplier_id}",
            code="SUPPLIER_NOT_FOUND",
            details={"supplier_id": supplier_id},
        )


class UserNotFoundError(NotFoundError):
    """User not found in storage."""

    def __init__(self, user_id: int | str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


# Validation Exceptions
class ValidationError(AirosError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class SupplierHasBalanceError(ValidationError):
    """Supplier cannot be deleted while it owes a balance."""

    def __init__(self, supplier_id: int, balance: float):
        super().__init__(
            field="current_balance",
            message="Cannot delete supplier with outstanding balance",
            value=balance,
        )
        self.code = "SUPPLIER_HAS_BALANCE"
        self.details["supplier_id"] = supplier_id


class SelfDeletionError(ValidationError):
    """A user attempted to delete their own account."""

    def __init__(self, user_id: int):
        super().__init__(
            field="id",
            message="Cannot delete your own account",
            value=user_id,
        )
        self.code = "SELF_DELETION"


# Fulfillment Exceptions
class InsufficientStockError(AirosError):
    """Requested quantity exceeds stock on hand."""

    def __init__(
        self,
        product_id: int,
        requested: int,
        available: int,
        product_name: str | None = None,
    ):
        label = product_name or f"product {product_id}"
        super().__init__(
            f"Insufficient stock for {label}. Available: {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )


class InvalidStatusError(AirosError):
    """Unrecognized or illegal order status transition."""

    def __init__(self, status: str, current: str | None = None):
        if current is None:
            message = f"Invalid order status: {status}"
        else:
            message = f"Cannot transition order from '{current}' to '{status}'"
        super().__init__(
            message,
            code="INVALID_STATUS",
            details={"status": status, "current": current},
        )


class OrderNotEditableError(AirosError):
    """Order mutation attempted outside the pending state."""

    def __init__(self, order_id: int | None, status: str):
        super().__init__(
            "Cannot update order that is not in pending status",
            code="ORDER_NOT_EDITABLE",
            details={"order_id": order_id, "status": status},
        )


# Conflict Exceptions
class ConflictError(AirosError):
    """Unique constraint violation."""

    def __init__(self, field: str, value: Any, message: str | None = None):
        super().__init__(
            message or f"{field} already exists: {value}",
            code="CONFLICT",
            details={"field": field, "value": value},
        )


class DuplicateSkuError(ConflictError):
    """Product SKU already in use."""

    def __init__(self, sku: str):
        super().__init__("sku", sku, message="SKU already exists")
        self.code = "DUPLICATE_SKU"


class DuplicateSupplierCodeError(ConflictError):
    """Supplier code already in use."""

    def __init__(self, code: str):
        super().__init__("code", code, message="Supplier code already exists")
        self.code = "DUPLICATE_SUPPLIER_CODE"


class DuplicateEmailError(ConflictError):
    """User email already registered."""

    def __init__(self, email: str):
        super().__init__("email", email, message="User already exists")
        self.code = "DUPLICATE_EMAIL"


class DuplicateOrderNumberError(ConflictError):
    """Order number already issued."""

    def __init__(self, order_number: str):
        super().__init__("order_number", order_number)
        self.code = "DUPLICATE_ORDER_NUMBER"


# Storage Exceptions
class StoreUnavailableError(AirosError):
    """Persistent store failed or is unreachable."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="STORE_UNAVAILABLE",
            details={"operation": operation, "error": error},
        )


# Auth Exceptions
class AuthError(AirosError):
    """Base exception for authentication and authorization."""

    pass


class InvalidTokenError(AuthError):
    """Bearer token missing, unknown, expired or revoked."""

    def __init__(self, reason: str = "Not authorized, token failed"):
        super().__init__(reason, code="INVALID_TOKEN")


class InvalidCredentialsError(AuthError):
    """Email/password pair did not match an active user."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class PermissionDeniedError(AuthError):
    """Authenticated user lacks the role for this operation."""

    def __init__(self, role: str):
        super().__init__(
            f"User role {role} is not authorized to access this route",
            code="PERMISSION_DENIED",
            details={"role": role},
        )


class ConfigurationError(AirosError):
    """Configuration error."""

    pass
