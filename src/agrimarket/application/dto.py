"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP adapters and the application layer
without exposing domain internals to the outside world.  Money values
travel as plain decimal strings (e.g. ``"45.00"``).
"""

from __future__ import annotations

from dataclasses import dataclass

from agrimarket.domain.model.order import Order
from agrimarket.domain.model.product import Product


@dataclass(frozen=True)
class CheckoutItemSpec:
    """Input: what the buyer asked for (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    product_name: str
    farmer_id: str
    quantity: int
    unit: str
    price_per_unit: str
    subtotal: str
    stock_pool: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    buyer_id: str
    status: str
    items: list[OrderItemDTO]
    total_amount: str
    shipping_address: dict[str, str]
    payment_method: str
    payment_status: str
    notes: str | None
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    farmer_id: str
    name: str
    price_per_unit: str
    unit: str
    local_stock: int
    industrial_stock: int
    total_stock: int


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        buyer_id=order.buyer_id,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                farmer_id=item.farmer_id,
                quantity=item.quantity.value,
                unit=item.unit,
                price_per_unit=f"{item.price_per_unit.amount:.2f}",
                subtotal=f"{item.subtotal.amount:.2f}",
                stock_pool=item.stock_pool.value,
            )
            for item in order.items
        ],
        total_amount=f"{order.total_amount.amount:.2f}",
        shipping_address=order.shipping_address.to_dict(),
        payment_method=order.payment_method.value,
        payment_status=order.payment_status.value,
        notes=order.notes,
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
    )


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        farmer_id=product.farmer_id,
        name=product.name,
        price_per_unit=f"{product.price_per_unit.amount:.2f}",
        unit=product.unit,
        local_stock=product.local_stock,
        industrial_stock=product.industrial_stock,
        total_stock=product.total_stock,
    )
