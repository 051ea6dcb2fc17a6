"""Application service: Show Order use case (query)."""

from __future__ import annotations

from agrimarket.application.dto import OrderDTO, to_order_dto
from agrimarket.domain.exceptions import Forbidden, OrderNotFound
from agrimarket.domain.model.order import Order
from agrimarket.domain.model.user import User
from agrimarket.domain.repository.order_repository import OrderRepository


def load_visible_order(order_repo: OrderRepository, order_id: int, viewer: User) -> Order:
    """Fetch an order the viewer is allowed to see: its buyer or one of its farmers."""
    order = order_repo.get_by_id(order_id)
    if order is None:
        raise OrderNotFound(f"Order #{order_id} not found")
    if not order.is_visible_to(viewer):
        raise Forbidden("Not authorized to view this order")
    return order


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, viewer: User) -> OrderDTO:
        return to_order_dto(load_visible_order(self._order_repo, order_id, viewer))
