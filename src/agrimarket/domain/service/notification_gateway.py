"""Outbound contract for order notifications (emails, receipts).

The core informs the gateway after a mutation has committed and never
depends on the outcome: ``notify_safely`` logs and drops any failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog

from agrimarket.domain.model.events import OrderEvent

logger = structlog.get_logger(__name__)


class NotificationGateway(ABC):

    @abstractmethod
    def notify(self, event: OrderEvent) -> None:
        """Deliver *event*, best-effort."""


class NullNotificationGateway(NotificationGateway):

    def notify(self, event: OrderEvent) -> None:
        return None


def notify_safely(gateway: NotificationGateway, event: OrderEvent) -> None:
    try:
        gateway.notify(event)
    except Exception:
        logger.exception(
            "Notification failed",
            event=type(event).__name__,
            order_id=event.order_id,
        )
