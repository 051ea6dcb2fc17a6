"""Application service: Place Order use case (the Order Builder).

Turns a checkout request into a persisted, pending Order.  Stock for
every line item is reserved through the Stock Ledger in request order;
if any step fails, every reservation already made for this request is
released before the error propagates, so stock pools end up exactly as
they were before the call.
"""

from __future__ import annotations

import structlog

from agrimarket.application.dto import CheckoutItemSpec, OrderDTO, to_order_dto
from agrimarket.domain.exceptions import Forbidden, ProductNotFound, ValidationError
from agrimarket.domain.model.events import OrderCreated
from agrimarket.domain.model.order import Order, OrderItem, PaymentMethod, check_notes
from agrimarket.domain.model.stock_pool import pool_for
from agrimarket.domain.model.user import User
from agrimarket.domain.model.value_objects import Quantity, ShippingAddress
from agrimarket.domain.repository.order_repository import OrderRepository
from agrimarket.domain.repository.product_repository import ProductRepository
from agrimarket.domain.service.notification_gateway import (
    NotificationGateway,
    NullNotificationGateway,
    notify_safely,
)
from agrimarket.domain.service.stock_ledger import Reservation, StockLedger

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        ledger: StockLedger,
        notifier: NotificationGateway | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._ledger = ledger
        self._notifier = notifier or NullNotificationGateway()

    def handle(
        self,
        buyer: User,
        item_specs: list[CheckoutItemSpec],
        shipping_address: ShippingAddress | dict | None,
        payment_method: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Place an order for *buyer*.

        Steps:
        1. Validate the request shape (items, address, payment method, notes).
        2. Refuse producers; pick the stock pool from the buyer's role.
        3. Reserve each item in order, rolling back on the first failure.
        4. Snapshot the items, persist a pending order, notify.
        """
        if not item_specs:
            raise ValidationError("Order must have at least one item")
        address = self._parse_address(shipping_address)
        method = self._parse_payment_method(payment_method)
        check_notes(notes)
        for spec in item_specs:
            Quantity(spec.quantity)

        if buyer.is_producer:
            raise Forbidden("Farmers cannot place orders")

        pool = pool_for(buyer.role)
        reservations: list[Reservation] = []
        items: list[OrderItem] = []

        try:
            for spec in item_specs:
                product = self._product_repo.get_by_id(spec.product_id)
                if product is None or not product.is_active:
                    raise ProductNotFound(f"Product {spec.product_id} not found")

                self._ledger.reserve(product.id, pool, spec.quantity)
                reservations.append(Reservation(product.id, pool, spec.quantity))

                items.append(
                    OrderItem(
                        product_id=product.id,
                        product_name=product.name,
                        farmer_id=product.farmer_id,
                        quantity=Quantity(spec.quantity),
                        price_per_unit=product.price_per_unit,  # <-- price snapshot
                        unit=product.unit,
                        stock_pool=pool,
                    )
                )

            order = Order.place(
                buyer_id=buyer.id,
                items=items,
                shipping_address=address,
                payment_method=method,
                notes=notes,
            )
            self._order_repo.save(order)
        except Exception:
            if reservations:
                logger.warning(
                    "Checkout failed, rolling back stock reservations",
                    buyer_id=buyer.id,
                    reservations=len(reservations),
                )
                self._ledger.release_all(reservations)
            raise

        logger.info(
            "Order placed",
            order_id=order.id,
            buyer_id=buyer.id,
            items=len(order.items),
            total_amount=str(order.total_amount.amount),
            pool=pool.value,
        )
        notify_safely(self._notifier, OrderCreated.from_order(order))
        return to_order_dto(order)

    # --- Parsing --------------------------------------------------------------

    @staticmethod
    def _parse_address(raw: ShippingAddress | dict | None) -> ShippingAddress:
        if isinstance(raw, ShippingAddress):
            return raw
        return ShippingAddress.from_dict(raw)

    @staticmethod
    def _parse_payment_method(raw: str | None) -> PaymentMethod:
        if not raw:
            return PaymentMethod.CASH_ON_DELIVERY
        try:
            return PaymentMethod(raw)
        except ValueError:
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                f"Unknown payment method '{raw}'; expected one of {allowed}"
            ) from None
