"""Notification gateway that only records events in the log."""

from __future__ import annotations

import structlog

from agrimarket.domain.model.events import OrderCreated, OrderEvent
from agrimarket.domain.service.notification_gateway import NotificationGateway

logger = structlog.get_logger(__name__)


class LoggingNotificationGateway(NotificationGateway):

    def notify(self, event: OrderEvent) -> None:
        if isinstance(event, OrderCreated):
            logger.info(
                "Order confirmation",
                order_id=event.order_id,
                buyer_id=event.buyer_id,
                total_amount=str(event.total_amount.amount),
                city=event.shipping_address.city,
            )
        else:
            logger.info(
                "Order status update",
                order_id=event.order_id,
                buyer_id=event.buyer_id,
                previous_status=event.previous_status.value,
                new_status=event.new_status.value,
            )
