"""Entity -> response DTO conversion shared by use cases and routes."""

from airos.application.dto.responses import (
    CustomerResponse,
    OrderLineResponse,
    OrderResponse,
    ProductResponse,
    StockMovementResponse,
    SupplierResponse,
    UserResponse,
)
from airos.core.entities.order import Order
from airos.core.entities.product import Product, StockMovement
from airos.core.entities.supplier import Supplier
from airos.core.entities.user import User


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,  # type: ignore[arg-type]
        name=user.name,
        email=user.email,
        role=user.role.value,
        department=user.department,
        is_active=user.is_active,
        last_login=user.last_login,
        created_at=user.created_at,
    )


def product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        description=product.description,
        sku=product.sku,
        category=product.category.value,
        price=product.price,
        cost=product.cost,
        stock_quantity=product.stock_quantity,
        min_stock_level=product.min_stock_level,
        supplier_id=product.supplier_id,
        unit=product.unit.value,
        is_active=product.is_active,
        image=product.image,
        tags=product.tags,
        is_low_stock=product.is_low_stock,
        profit_margin=product.profit_margin,
        total_value=product.total_value,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def movement_to_response(movement: StockMovement) -> StockMovementResponse:
    return StockMovementResponse(
        id=movement.id,  # type: ignore[arg-type]
        product_id=movement.product_id,
        movement_type=movement.movement_type.value,
        quantity=movement.quantity,
        balance_after=movement.balance_after,
        reference=movement.reference,
        created_at=movement.created_at,
    )


def supplier_to_response(supplier: Supplier) -> SupplierResponse:
    return SupplierResponse(
        id=supplier.id,  # type: ignore[arg-type]
        name=supplier.name,
        code=supplier.code,
        contact_person=supplier.contact_person.model_dump(),
        address=supplier.address.model_dump(),
        full_address=supplier.full_address,
        business_info=supplier.business_info.model_dump(),
        payment_terms=supplier.payment_terms.value,
        credit_limit=supplier.credit_limit,
        current_balance=supplier.current_balance,
        available_credit=supplier.available_credit,
        categories=[c.value for c in supplier.categories],
        rating=supplier.rating,
        is_active=supplier.is_active,
        notes=supplier.notes,
        last_order_date=supplier.last_order_date,
        created_at=supplier.created_at,
        updated_at=supplier.updated_at,
    )


def order_to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number or "",
        customer=CustomerResponse(
            name=order.customer.name,
            email=order.customer.email,
            phone=order.customer.phone,
            address=order.customer.address.model_dump(exclude_none=True),
        ),
        items=[
            OrderLineResponse(
                product_id=line.product_id,
                product_name=line.product_name,
                sku=line.sku,
                quantity=line.quantity,
                price=line.price,
                total=line.total,
            )
            for line in order.items
        ],
        subtotal=order.subtotal,
        tax=order.tax,
        shipping=order.shipping,
        total=order.total,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value,
        notes=order.notes,
        created_by=order.created_by,
        shipped_at=order.shipped_at,
        delivered_at=order.delivered_at,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
