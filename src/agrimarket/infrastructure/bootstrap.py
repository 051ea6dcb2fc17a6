"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  One Container is
shared by every request in a process so that the Stock Ledger and the
per-order locks really are shared.
"""

from __future__ import annotations

from functools import lru_cache

from agrimarket.application.add_product import AddProductHandler
from agrimarket.application.list_orders import ListBuyerOrdersHandler, ListFarmerOrdersHandler
from agrimarket.application.place_order import PlaceOrderHandler
from agrimarket.application.register_user import RegisterUserHandler
from agrimarket.application.render_receipt import RenderReceiptHandler
from agrimarket.application.set_stock import SetStockAllocationHandler
from agrimarket.application.show_order import ShowOrderHandler
from agrimarket.application.update_order_status import UpdateOrderStatusHandler
from agrimarket.domain.exceptions import Unauthorized
from agrimarket.domain.model.user import User
from agrimarket.domain.repository.user_repository import UserRepository
from agrimarket.domain.service.keyed_lock import KeyedLock
from agrimarket.domain.service.notification_gateway import (
    NotificationGateway,
    NullNotificationGateway,
)
from agrimarket.domain.service.stock_ledger import StockLedger
from agrimarket.infrastructure.config import Settings
from agrimarket.infrastructure.logging import configure_logging
from agrimarket.infrastructure.notifications.background_gateway import (
    BackgroundNotificationGateway,
)
from agrimarket.infrastructure.notifications.email_gateway import EmailNotificationGateway
from agrimarket.infrastructure.notifications.logging_gateway import (
    LoggingNotificationGateway,
)
from agrimarket.infrastructure.persistence.json_order_repository import JsonOrderRepository
from agrimarket.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from agrimarket.infrastructure.persistence.json_user_repository import JsonUserRepository


def build_notifier(settings: Settings, user_repo: UserRepository) -> NotificationGateway:
    if settings.notifier == "none":
        return NullNotificationGateway()
    if settings.notifier == "email":
        return BackgroundNotificationGateway(
            EmailNotificationGateway(
                user_repo,
                host=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_user,
                password=settings.smtp_password,
            )
        )
    return LoggingNotificationGateway()


class Container:

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        data_dir = settings.data_dir
        self.user_repo = JsonUserRepository(data_dir / "users.json")
        self.product_repo = JsonProductRepository(data_dir / "products.json")
        self.order_repo = JsonOrderRepository(data_dir / "orders.json")
        self.ledger = StockLedger(self.product_repo)
        self.order_locks = KeyedLock()
        self.notifier = build_notifier(settings, self.user_repo)

    # --- Identity ---------------------------------------------------------------

    def authenticate(self, user_id: str | None) -> User:
        """Resolve the acting user; the session collaborator supplies the ID."""
        if not user_id:
            raise Unauthorized("Not authorized")
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise Unauthorized("Not authorized")
        return user

    # --- Handlers ---------------------------------------------------------------

    def place_order(self) -> PlaceOrderHandler:
        return PlaceOrderHandler(
            order_repo=self.order_repo,
            product_repo=self.product_repo,
            ledger=self.ledger,
            notifier=self.notifier,
        )

    def update_order_status(self) -> UpdateOrderStatusHandler:
        return UpdateOrderStatusHandler(
            order_repo=self.order_repo,
            ledger=self.ledger,
            notifier=self.notifier,
            locks=self.order_locks,
        )

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.order_repo)

    def list_buyer_orders(self) -> ListBuyerOrdersHandler:
        return ListBuyerOrdersHandler(self.order_repo)

    def list_farmer_orders(self) -> ListFarmerOrdersHandler:
        return ListFarmerOrdersHandler(self.order_repo)

    def render_receipt(self) -> RenderReceiptHandler:
        return RenderReceiptHandler(self.order_repo, self.user_repo)

    def set_stock(self) -> SetStockAllocationHandler:
        return SetStockAllocationHandler(self.product_repo, self.ledger)

    def add_product(self) -> AddProductHandler:
        return AddProductHandler(self.product_repo)

    def register_user(self) -> RegisterUserHandler:
        return RegisterUserHandler(self.user_repo)


@lru_cache(maxsize=None)
def container() -> Container:
    settings = Settings.from_env()
    configure_logging(settings)
    return Container(settings)
