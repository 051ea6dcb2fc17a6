"""Events the ordering core emits for the notification gateway."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from agrimarket.domain.model.order import Order, OrderItem, OrderStatus
from agrimarket.domain.model.value_objects import Money, ShippingAddress


@dataclass(frozen=True)
class OrderCreated:
    order_id: int
    buyer_id: str
    items: tuple[OrderItem, ...]
    total_amount: Money
    shipping_address: ShippingAddress
    occurred_at: datetime

    @staticmethod
    def from_order(order: Order) -> OrderCreated:
        return OrderCreated(
            order_id=order.id,  # type: ignore[arg-type]
            buyer_id=order.buyer_id,
            items=order.items,
            total_amount=order.total_amount,
            shipping_address=order.shipping_address,
            occurred_at=order.created_at,
        )


@dataclass(frozen=True)
class OrderStatusChanged:
    order_id: int
    buyer_id: str
    previous_status: OrderStatus
    new_status: OrderStatus
    items: tuple[OrderItem, ...]
    total_amount: Money
    shipping_address: ShippingAddress
    occurred_at: datetime

    @staticmethod
    def from_order(order: Order, previous_status: OrderStatus) -> OrderStatusChanged:
        return OrderStatusChanged(
            order_id=order.id,  # type: ignore[arg-type]
            buyer_id=order.buyer_id,
            previous_status=previous_status,
            new_status=order.status,
            items=order.items,
            total_amount=order.total_amount,
            shipping_address=order.shipping_address,
            occurred_at=datetime.now(timezone.utc),
        )


OrderEvent = OrderCreated | OrderStatusChanged
