"""Order aggregate, the core of the domain.

An Order is created once, from immutable item snapshots, and afterwards
only its ``status`` (and ``updated_at``) may change.  All status changes
go through ``transition_to`` which enforces the status pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from agrimarket.domain.exceptions import InvalidTransition, ValidationError
from agrimarket.domain.model.stock_pool import StockPool
from agrimarket.domain.model.user import User
from agrimarket.domain.model.value_objects import Money, Quantity, ShippingAddress


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "cod"
    ONLINE = "online"
    BANK_TRANSFER = "bank_transfer"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


MAX_NOTES_LENGTH = 500


def _now() -> datetime:
    return datetime.now(timezone.utc)


def check_notes(notes: str | None) -> None:
    if notes is not None and len(notes) > MAX_NOTES_LENGTH:
        raise ValidationError(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")


@dataclass(frozen=True)
class OrderItem:
    """Snapshot of a product at order-creation time.

    Name, price and unit are copied from the product so later catalog
    edits never reach historical orders.  ``farmer_id`` is denormalized
    for authorization and farmer-order queries.
    """

    product_id: str
    product_name: str
    farmer_id: str
    quantity: Quantity
    price_per_unit: Money  # locked at order-creation time
    unit: str
    stock_pool: StockPool

    @property
    def subtotal(self) -> Money:
        return self.price_per_unit * self.quantity.value


@dataclass
class Order:
    """Aggregate root for buyer orders.

    Use the ``Order.place()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    buyer_id: str
    items: tuple[OrderItem, ...]
    total_amount: Money
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    payment_status: PaymentStatus = PaymentStatus.PENDING
    status: OrderStatus = OrderStatus.PENDING
    notes: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        buyer_id: str,
        items: list[OrderItem],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY,
        notes: str | None = None,
    ) -> Order:
        """Create a new pending order, computing its total once."""
        if not items:
            raise ValidationError("Order must have at least one item")
        if shipping_address is None:
            raise ValidationError("Shipping address is required")
        check_notes(notes)

        total = Money.zero()
        for item in items:
            total = total + item.subtotal

        now = _now()
        return Order(
            id=None,
            buyer_id=buyer_id,
            items=tuple(items),
            total_amount=total,
            shipping_address=shipping_address,
            payment_method=payment_method,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, new_status: OrderStatus) -> OrderStatus:
        """Move along the status pipeline and return the previous status.

        Raises InvalidTransition, leaving the order untouched, for any
        pair not in ``ALLOWED_TRANSITIONS``.
        """
        if not self.can_transition_to(new_status):
            raise InvalidTransition(self.status.value, new_status.value)
        previous = self.status
        self.status = new_status
        self.updated_at = _now()
        return previous

    # --- Queries --------------------------------------------------------------

    @property
    def farmer_ids(self) -> frozenset[str]:
        return frozenset(item.farmer_id for item in self.items)

    def is_sold_by(self, farmer_id: str) -> bool:
        return farmer_id in self.farmer_ids

    def is_visible_to(self, user: User) -> bool:
        return user.id == self.buyer_id or (user.is_producer and self.is_sold_by(user.id))

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self.status]
