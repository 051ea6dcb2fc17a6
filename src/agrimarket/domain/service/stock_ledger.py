"""Domain service: Stock Ledger.

The ledger is the sole arbiter of stock truth.  Every check-and-mutate
of a product's stock pools runs under that product's lock, so two
concurrent reservations against the same pool always observe each
other's effect.  Pools of different products never contend.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from agrimarket.domain.exceptions import (
    InsufficientStock,
    PersistenceError,
    ProductNotFound,
)
from agrimarket.domain.model.product import Product
from agrimarket.domain.model.stock_pool import StockPool
from agrimarket.domain.model.value_objects import Quantity
from agrimarket.domain.repository.product_repository import ProductRepository
from agrimarket.domain.service.keyed_lock import KeyedLock

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Reservation:
    """A successful decrement, kept so it can be compensated."""

    product_id: str
    pool: StockPool
    quantity: int


class StockLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: KeyedLock | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or KeyedLock()

    def reserve(self, product_id: str, pool: StockPool, quantity: int) -> int:
        """Decrement *pool* by *quantity* if it can cover it.

        Returns the new balance.  Raises InsufficientStock without side
        effects when the pool is too small.
        """
        qty = Quantity(quantity).value
        with self._locks(product_id):
            product = self._load(product_id)
            available = product.stock_in(pool)
            if qty > available:
                raise InsufficientStock(
                    product_id=product.id,
                    product_name=product.name,
                    pool=pool.value,
                    requested=qty,
                    available=available,
                )
            balance = product.withdraw(pool, qty)
            self._product_repo.save(product)

        logger.debug(
            "Stock reserved",
            product_id=product_id,
            pool=pool.value,
            quantity=qty,
            balance=balance,
        )
        return balance

    def release(self, product_id: str, pool: StockPool, quantity: int) -> int:
        """Increment *pool* by *quantity* and return the new balance."""
        qty = Quantity(quantity).value
        with self._locks(product_id):
            product = self._load(product_id)
            balance = product.restock(pool, qty)
            self._product_repo.save(product)

        logger.debug(
            "Stock released",
            product_id=product_id,
            pool=pool.value,
            quantity=qty,
            balance=balance,
        )
        return balance

    def release_all(self, reservations: list[Reservation]) -> None:
        """Compensate *reservations*, most recent first.

        Every release is attempted even if an earlier one fails; the
        first storage failure is re-raised afterwards.  A product that
        no longer exists has nothing to restock and is skipped.
        """
        failures: list[PersistenceError] = []
        for reservation in reversed(reservations):
            try:
                self.release(reservation.product_id, reservation.pool, reservation.quantity)
            except ProductNotFound:
                logger.warning(
                    "Skipping release for missing product",
                    product_id=reservation.product_id,
                    quantity=reservation.quantity,
                )
            except PersistenceError as exc:
                logger.error(
                    "Failed to release reserved stock",
                    product_id=reservation.product_id,
                    pool=reservation.pool.value,
                    quantity=reservation.quantity,
                    error=str(exc),
                )
                failures.append(exc)
        if failures:
            raise failures[0]

    def allocate(
        self,
        product_id: str,
        local_stock: int | None = None,
        industrial_stock: int | None = None,
    ) -> Product:
        """Overwrite stock pools (farmer edit) under the product's lock."""
        with self._locks(product_id):
            product = self._load(product_id)
            product.allocate(local_stock=local_stock, industrial_stock=industrial_stock)
            self._product_repo.save(product)
        logger.info(
            "Stock allocation updated",
            product_id=product_id,
            local_stock=product.local_stock,
            industrial_stock=product.industrial_stock,
        )
        return product

    def balance(self, product_id: str, pool: StockPool) -> int:
        with self._locks(product_id):
            return self._load(product_id).stock_in(pool)

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found")
        return product
