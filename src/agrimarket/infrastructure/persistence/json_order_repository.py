"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from agrimarket.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from agrimarket.domain.model.stock_pool import StockPool
from agrimarket.domain.model.value_objects import Money, Quantity, ShippingAddress
from agrimarket.domain.repository.order_repository import OrderRepository
from agrimarket.infrastructure.persistence.json_file import JsonFile, upsert


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_buyer(self, buyer_id: str) -> list[Order]:
        orders = [self._to_domain(r) for r in self._file.load() if r["buyer_id"] == buyer_id]
        return self._newest_first(orders)

    def list_by_farmer(self, farmer_id: str) -> list[Order]:
        orders = [
            self._to_domain(r)
            for r in self._file.load()
            if any(i["farmer_id"] == farmer_id for i in r["items"])
        ]
        return self._newest_first(orders)

    def save(self, order: Order) -> None:
        def _upsert(records: list[dict]) -> None:
            # ID assignment happens inside the lock so concurrent
            # checkouts never get the same number.
            if order.id is None:
                order.id = max((r["id"] for r in records), default=0) + 1
            upsert(records, "id", self._to_raw(order))

        self._file.update(_upsert)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _newest_first(orders: list[Order]) -> list[Order]:
        return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "buyer_id": order.buyer_id,
            "status": order.status.value,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "shipping_address": order.shipping_address.to_dict(),
            "payment_method": order.payment_method.value,
            "payment_status": order.payment_status.value,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "farmer_id": item.farmer_id,
                    "quantity": item.quantity.value,
                    "price_per_unit": str(item.price_per_unit.amount),
                    "currency": item.price_per_unit.currency,
                    "unit": item.unit,
                    "stock_pool": item.stock_pool.value,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = tuple(
            OrderItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                farmer_id=i["farmer_id"],
                quantity=Quantity(i["quantity"]),
                price_per_unit=Money(Decimal(i["price_per_unit"]), i.get("currency", "INR")),
                unit=i["unit"],
                stock_pool=StockPool(i["stock_pool"]),
            )
            for i in raw["items"]
        )
        return Order(
            id=raw["id"],
            buyer_id=raw["buyer_id"],
            items=items,
            total_amount=Money(Decimal(raw["total_amount"]), raw.get("currency", "INR")),
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            payment_method=PaymentMethod(raw["payment_method"]),
            payment_status=PaymentStatus(raw.get("payment_status", "pending")),
            status=OrderStatus(raw["status"]),
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
