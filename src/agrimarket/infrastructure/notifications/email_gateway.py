"""E-mail notifications for buyers, sent over SMTP with aiosmtplib.

Order confirmations go out when an order is placed; every status change
sends an update whose subject depends on the new status.
"""

from __future__ import annotations

import asyncio
from email.message import EmailMessage

import aiosmtplib
import structlog

from agrimarket.domain.exceptions import UserNotFound
from agrimarket.domain.model.events import OrderCreated, OrderEvent, OrderStatusChanged
from agrimarket.domain.model.order import OrderItem, OrderStatus
from agrimarket.domain.repository.user_repository import UserRepository
from agrimarket.domain.service.notification_gateway import NotificationGateway

logger = structlog.get_logger(__name__)

STATUS_LABEL = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.CONFIRMED: "Confirmed",
    OrderStatus.PROCESSING: "Processing",
    OrderStatus.SHIPPED: "Shipped",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}


def short_order_number(order_id: int) -> str:
    return f"{order_id:08d}"


def confirmation_subject(event: OrderCreated) -> str:
    return f"Order Confirmed #{short_order_number(event.order_id)} - AgriMarket"


def status_subject(event: OrderStatusChanged) -> str:
    number = short_order_number(event.order_id)
    if event.new_status == OrderStatus.DELIVERED:
        return f"Your order #{number} has been delivered - AgriMarket"
    if event.new_status == OrderStatus.CANCELLED:
        return f"Order #{number} cancelled - AgriMarket"
    return f"Order Update: {STATUS_LABEL[event.new_status]} #{number} - AgriMarket"


def _item_lines(items: tuple[OrderItem, ...]) -> list[str]:
    return [
        f"  {item.product_name} x {item.quantity} {item.unit} "
        f"@ {item.price_per_unit} = {item.subtotal}"
        for item in items
    ]


class EmailNotificationGateway(NotificationGateway):

    def __init__(
        self,
        user_repo: UserRepository,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._user_repo = user_repo
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender or username or "no-reply@agrimarket.local"
        self._timeout = timeout

    def notify(self, event: OrderEvent) -> None:
        buyer = self._user_repo.get_by_id(event.buyer_id)
        if buyer is None:
            raise UserNotFound(f"Buyer {event.buyer_id} not found")
        message = self.build_message(event, buyer.name, buyer.email)
        self._send(message)
        logger.info(
            "Email sent",
            order_id=event.order_id,
            to=buyer.email,
            subject=message["Subject"],
        )

    def build_message(self, event: OrderEvent, name: str, email: str) -> EmailMessage:
        if isinstance(event, OrderCreated):
            subject = confirmation_subject(event)
            body = [
                f"Hi {name},",
                "",
                "Thank you for your order! Here is what you bought:",
                *_item_lines(event.items),
                "",
                f"Total: {event.total_amount}",
                f"Shipping to: {event.shipping_address}",
            ]
        else:
            subject = status_subject(event)
            body = [
                f"Hi {name},",
                "",
                f"Your order #{short_order_number(event.order_id)} is now "
                f"{STATUS_LABEL[event.new_status]}.",
                *_item_lines(event.items),
                "",
                f"Total: {event.total_amount}",
            ]

        message = EmailMessage()
        message["From"] = f"AgriMarket <{self._sender}>"
        message["To"] = email
        message["Subject"] = subject
        message.set_content("\n".join(body) + "\n")
        return message

    def _send(self, message: EmailMessage) -> None:
        """Deliver *message* on a private event loop.

        Runs on the caller's thread, which is a notification worker when
        wrapped in BackgroundNotificationGateway.
        """
        credentials = {}
        if self._username and self._password:
            credentials = {"username": self._username, "password": self._password}
        asyncio.run(
            aiosmtplib.send(
                message,
                hostname=self._host,
                port=self._port,
                start_tls=True,
                timeout=self._timeout,
                **credentials,
            )
        )
