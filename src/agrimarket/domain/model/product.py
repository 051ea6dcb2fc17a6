"""Product aggregate.

Products are owned by a farmer and live independently of orders. They
carry two independent stock pools; both must stay non-negative.  Stock
pools are only mutated through the Stock Ledger, which serializes access
per product.
"""

from __future__ import annotations

from dataclasses import dataclass

from agrimarket.domain.exceptions import ValidationError
from agrimarket.domain.model.stock_pool import StockPool
from agrimarket.domain.model.value_objects import Money

UNITS = ("kg", "quintal", "ton", "dozen", "piece", "liter", "bundle")


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because price edits and stock movements
    are legitimate mutations on the aggregate.
    """

    id: str
    farmer_id: str
    name: str
    price_per_unit: Money
    unit: str
    local_stock: int = 0
    industrial_stock: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.unit not in UNITS:
            raise ValidationError(
                f"Unknown unit '{self.unit}'; expected one of {', '.join(UNITS)}"
            )
        self._assert_non_negative(self.local_stock, self.industrial_stock)

    @property
    def total_stock(self) -> int:
        return self.local_stock + self.industrial_stock

    def stock_in(self, pool: StockPool) -> int:
        if pool == StockPool.INDUSTRIAL:
            return self.industrial_stock
        return self.local_stock

    # --- Stock movements ------------------------------------------------------

    def withdraw(self, pool: StockPool, quantity: int) -> int:
        """Take *quantity* units out of *pool* and return the new balance."""
        if quantity <= 0:
            raise ValidationError("Withdrawal quantity must be positive")
        available = self.stock_in(pool)
        if quantity > available:
            raise ValidationError(
                f"Cannot withdraw {quantity} of {self.name} "
                f"from {pool.value} stock (have {available})"
            )
        self._set_stock(pool, available - quantity)
        return self.stock_in(pool)

    def restock(self, pool: StockPool, quantity: int) -> int:
        """Put *quantity* units back into *pool* and return the new balance."""
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        self._set_stock(pool, self.stock_in(pool) + quantity)
        return self.stock_in(pool)

    def allocate(
        self,
        local_stock: int | None = None,
        industrial_stock: int | None = None,
    ) -> None:
        """Farmer-initiated stock edit.  ``None`` leaves a pool unchanged."""
        local = self.local_stock if local_stock is None else local_stock
        industrial = self.industrial_stock if industrial_stock is None else industrial_stock
        self._assert_non_negative(local, industrial)
        self.local_stock = local
        self.industrial_stock = industrial

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price_per_unit = new_price

    # --- Internal helpers -----------------------------------------------------

    def _set_stock(self, pool: StockPool, value: int) -> None:
        if pool == StockPool.INDUSTRIAL:
            self.industrial_stock = value
        else:
            self.local_stock = value

    @staticmethod
    def _assert_non_negative(local: int, industrial: int) -> None:
        for label, value in (("Local", local), ("Industrial", industrial)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(f"{label} stock must be an integer")
            if value < 0:
                raise ValidationError(f"{label} stock cannot be negative")
