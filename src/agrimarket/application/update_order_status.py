"""Application service: Update Order Status use case.

Drives the Order aggregate's status pipeline on behalf of a farmer.
Load, validate, mutate and save run under the order's lock, so two
concurrent transitions of one order are applied one after the other and
the second is validated against the first one's result.

Cancelling an order returns its reserved stock: each item's quantity is
released back into the pool it was drawn from, exactly once, because
``cancelled`` is terminal.  If storage fails during that release the
cancellation stays committed and its items are logged for repair.
"""

from __future__ import annotations

import structlog

from agrimarket.application.dto import OrderDTO, to_order_dto
from agrimarket.domain.exceptions import (
    Forbidden,
    InvalidTransition,
    OrderNotFound,
    PersistenceError,
)
from agrimarket.domain.model.events import OrderStatusChanged
from agrimarket.domain.model.order import Order, OrderStatus
from agrimarket.domain.model.user import User
from agrimarket.domain.repository.order_repository import OrderRepository
from agrimarket.domain.service.keyed_lock import KeyedLock
from agrimarket.domain.service.notification_gateway import (
    NotificationGateway,
    NullNotificationGateway,
    notify_safely,
)
from agrimarket.domain.service.stock_ledger import Reservation, StockLedger

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        ledger: StockLedger,
        notifier: NotificationGateway | None = None,
        locks: KeyedLock | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger
        self._notifier = notifier or NullNotificationGateway()
        self._locks = locks or KeyedLock()

    def handle(self, order_id: int, actor: User, new_status: str) -> OrderDTO:
        with self._locks(order_id):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise OrderNotFound(f"Order #{order_id} not found")

            if not actor.is_producer:
                raise Forbidden("Only farmers can update order status")
            if not order.is_sold_by(actor.id):
                raise Forbidden("Not authorized to update this order")

            target = self._parse_status(order, new_status)
            previous = order.transition_to(target)
            self._order_repo.save(order)

            if target == OrderStatus.CANCELLED:
                self._release_stock(order)

        logger.info(
            "Order status changed",
            order_id=order.id,
            farmer_id=actor.id,
            previous_status=previous.value,
            new_status=target.value,
        )
        notify_safely(self._notifier, OrderStatusChanged.from_order(order, previous))
        return to_order_dto(order)

    def _release_stock(self, order: Order) -> None:
        reservations = [
            Reservation(item.product_id, item.stock_pool, item.quantity.value)
            for item in order.items
        ]
        try:
            self._ledger.release_all(reservations)
        except PersistenceError:
            # cancellation is already saved; enough detail to restock by hand
            logger.error(
                "Stock release failed for cancelled order",
                order_id=order.id,
                items=[
                    {"product_id": r.product_id, "pool": r.pool.value, "quantity": r.quantity}
                    for r in reservations
                ],
            )
            raise
        logger.info("Released stock for cancelled order", order_id=order.id)

    @staticmethod
    def _parse_status(order: Order, raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw)
        except ValueError:
            raise InvalidTransition(order.status.value, str(raw)) from None
