"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

import threading

from agrimarket.domain.exceptions import PersistenceError
from agrimarket.domain.model.events import OrderEvent
from agrimarket.domain.model.order import Order
from agrimarket.domain.model.product import Product
from agrimarket.domain.model.user import User, UserRole
from agrimarket.domain.model.value_objects import Money, ShippingAddress
from agrimarket.domain.repository.order_repository import OrderRepository
from agrimarket.domain.repository.product_repository import ProductRepository
from agrimarket.domain.repository.user_repository import UserRepository
from agrimarket.domain.service.notification_gateway import NotificationGateway

ADDRESS = {
    "street": "12 Market Road",
    "city": "Nashik",
    "state": "Maharashtra",
    "pincode": "422001",
    "phone": "9876543210",
}

FARMER = User(id="f1", name="Ravi", email="ravi@farm.in", role=UserRole.FARMER)
OTHER_FARMER = User(id="f2", name="Meena", email="meena@farm.in", role=UserRole.FARMER)
BUYER = User(id="b1", name="Asha", email="asha@home.in", role=UserRole.INDIVIDUAL)
INDUSTRIAL_BUYER = User(id="b2", name="Agro Foods", email="buy@agro.in", role=UserRole.INDUSTRIAL)


def make_product(
    id: str = "1",
    name: str = "Tomatoes",
    price: str = "30.00",
    local: int = 10,
    industrial: int = 10,
    farmer_id: str = FARMER.id,
    unit: str = "kg",
) -> Product:
    return Product(
        id=id,
        farmer_id=farmer_id,
        name=name,
        price_per_unit=Money.of(price),
        unit=unit,
        local_stock=local,
        industrial_stock=industrial,
    )


def make_address() -> ShippingAddress:
    return ShippingAddress(**ADDRESS)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self.fail_on_save = False

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def list_by_buyer(self, buyer_id: str) -> list[Order]:
        orders = [o for o in self._store.values() if o.buyer_id == buyer_id]
        return sorted(orders, key=lambda o: o.id, reverse=True)

    def list_by_farmer(self, farmer_id: str) -> list[Order]:
        orders = [o for o in self._store.values() if o.is_sold_by(farmer_id)]
        return sorted(orders, key=lambda o: o.id, reverse=True)

    def save(self, order: Order) -> None:
        if self.fail_on_save:
            raise PersistenceError("disk full")
        with self._lock:
            if order.id is None:
                order.id = self._next_id
                self._next_id += 1
            self._store[order.id] = order

    def count(self) -> int:
        return len(self._store)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def next_id(self) -> str:
        return str(len(self._store) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def list_by_farmer(self, farmer_id: str) -> list[Product]:
        return [p for p in self._store.values() if p.farmer_id == farmer_id]

    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeUserRepository(UserRepository):

    def __init__(self, users: list[User] | None = None) -> None:
        self._store: dict[str, User] = {u.id: u for u in users or []}

    def next_id(self) -> str:
        return f"u{len(self._store) + 1}"

    def get_by_id(self, user_id: str) -> User | None:
        return self._store.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        for u in self._store.values():
            if u.email.lower() == email.strip().lower():
                return u
        return None

    def list_all(self) -> list[User]:
        return list(self._store.values())

    def save(self, user: User) -> None:
        self._store[user.id] = user


class RecordingNotificationGateway(NotificationGateway):

    def __init__(self) -> None:
        self.events: list[OrderEvent] = []

    def notify(self, event: OrderEvent) -> None:
        self.events.append(event)


class FailingNotificationGateway(NotificationGateway):

    def notify(self, event: OrderEvent) -> None:
        raise ConnectionError("SMTP server unreachable")
