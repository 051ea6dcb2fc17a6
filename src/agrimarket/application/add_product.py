"""Application service: Add Product use case."""

from __future__ import annotations

from agrimarket.application.dto import ProductDTO, to_product_dto
from agrimarket.domain.exceptions import Forbidden, ValidationError
from agrimarket.domain.model.product import Product
from agrimarket.domain.model.user import User
from agrimarket.domain.model.value_objects import Money
from agrimarket.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        farmer: User,
        name: str,
        price: str,
        unit: str,
        local_stock: int = 0,
        industrial_stock: int = 0,
    ) -> ProductDTO:
        """List a new product owned by *farmer*."""
        if not farmer.is_producer:
            raise Forbidden("Only farmers can add products")
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        price_per_unit = Money.of(price)
        if price_per_unit.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id=self._product_repo.next_id(),
            farmer_id=farmer.id,
            name=name.strip(),
            price_per_unit=price_per_unit,
            unit=unit,
            local_stock=local_stock,
            industrial_stock=industrial_stock,
        )
        self._product_repo.save(product)
        return to_product_dto(product)
