"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from agrimarket.domain.model.product import Product
from agrimarket.domain.model.value_objects import Money
from agrimarket.domain.repository.product_repository import ProductRepository
from agrimarket.infrastructure.persistence.json_file import JsonFile, upsert


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        records = self._file.load()
        if not records:
            return "1"
        return str(max(int(r["id"]) for r in records) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def list_by_farmer(self, farmer_id: str) -> list[Product]:
        return [p for p in self.list_all() if p.farmer_id == farmer_id]

    def save(self, product: Product) -> None:
        record = self._to_raw(product)
        self._file.update(lambda records: upsert(records, "id", record))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "farmer_id": product.farmer_id,
            "name": product.name,
            "price_per_unit": str(product.price_per_unit.amount),
            "currency": product.price_per_unit.currency,
            "unit": product.unit,
            "local_stock": product.local_stock,
            "industrial_stock": product.industrial_stock,
            "is_active": product.is_active,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            farmer_id=raw["farmer_id"],
            name=raw["name"],
            price_per_unit=Money(Decimal(raw["price_per_unit"]), raw.get("currency", "INR")),
            unit=raw["unit"],
            local_stock=raw.get("local_stock", 0),
            industrial_stock=raw.get("industrial_stock", 0),
            is_active=raw.get("is_active", True),
        )
