"""Application service: Render Receipt use case.

Produces a plain-text receipt for a delivered order.  Only the buyer or
a farmer with an item in the order may fetch it.
"""

from __future__ import annotations

from agrimarket.application.show_order import load_visible_order
from agrimarket.domain.exceptions import ValidationError
from agrimarket.domain.model.order import Order, OrderStatus
from agrimarket.domain.model.user import User
from agrimarket.domain.repository.order_repository import OrderRepository
from agrimarket.domain.repository.user_repository import UserRepository

WIDTH = 64


def receipt_number(order_id: int) -> str:
    return f"{order_id:08d}"


class RenderReceiptHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(self, order_id: int, viewer: User) -> str:
        order = load_visible_order(self._order_repo, order_id, viewer)
        if order.status != OrderStatus.DELIVERED:
            raise ValidationError("Receipt is only available for delivered orders")

        buyer = self._user_repo.get_by_id(order.buyer_id)
        return self._render(order, buyer)

    @staticmethod
    def _render(order: Order, buyer: User | None) -> str:
        lines = [
            "AgriMarket Payment Receipt".center(WIDTH),
            "=" * WIDTH,
            f"Receipt No: {receipt_number(order.id)}",  # type: ignore[arg-type]
            f"Delivered:  {order.updated_at.strftime('%Y-%m-%d %H:%M UTC')}",
        ]
        if buyer is not None:
            lines.append(f"Billed to:  {buyer.name} <{buyer.email}>")
        lines.append(f"Ship to:    {order.shipping_address}")
        lines.append(f"Phone:      {order.shipping_address.phone}")
        lines.append("")
        lines.append(f"{'PRODUCT':<24} {'QTY':>10} {'RATE':>12} {'SUBTOTAL':>14}")
        lines.append("-" * WIDTH)
        for item in order.items:
            qty = f"{item.quantity} {item.unit}"
            lines.append(
                f"{item.product_name[:24]:<24} {qty:>10} "
                f"{item.price_per_unit.amount:>12.2f} {item.subtotal.amount:>14.2f}"
            )
        lines.append("-" * WIDTH)
        lines.append(f"{'TOTAL':<24} {str(order.total_amount):>39}")
        lines.append(f"Payment: {order.payment_method.value} ({order.payment_status.value})")
        return "\n".join(lines) + "\n"
