"""Application service: Set Stock Allocation use case.

A farmer re-splits a product's stock between the local and industrial
markets.  The write goes through the Stock Ledger so it is serialized
with in-flight reservations on the same product.
"""

from __future__ import annotations

from agrimarket.application.dto import ProductDTO, to_product_dto
from agrimarket.domain.exceptions import Forbidden, ProductNotFound, ValidationError
from agrimarket.domain.model.user import User
from agrimarket.domain.repository.product_repository import ProductRepository
from agrimarket.domain.service.stock_ledger import StockLedger


class SetStockAllocationHandler:

    def __init__(self, product_repo: ProductRepository, ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        actor: User,
        local_stock: int | None = None,
        industrial_stock: int | None = None,
    ) -> ProductDTO:
        if not actor.is_producer:
            raise Forbidden("Only farmers can manage stock")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found")
        if product.farmer_id != actor.id:
            raise Forbidden("Not authorized to manage this product's stock")

        if local_stock is None and industrial_stock is None:
            raise ValidationError("Specify local and/or industrial stock")

        updated = self._ledger.allocate(
            product_id, local_stock=local_stock, industrial_stock=industrial_stock
        )
        return to_product_dto(updated)
