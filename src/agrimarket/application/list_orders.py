"""Application services: buyer and farmer order listings (queries)."""

from __future__ import annotations

from agrimarket.application.dto import OrderDTO, to_order_dto
from agrimarket.domain.exceptions import Forbidden
from agrimarket.domain.model.user import User
from agrimarket.domain.repository.order_repository import OrderRepository


class ListBuyerOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, buyer: User) -> list[OrderDTO]:
        return [to_order_dto(o) for o in self._order_repo.list_by_buyer(buyer.id)]


class ListFarmerOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, farmer: User) -> list[OrderDTO]:
        """Orders that contain at least one of the farmer's products."""
        if not farmer.is_producer:
            raise Forbidden("Only farmers can access this")
        return [to_order_dto(o) for o in self._order_repo.list_by_farmer(farmer.id)]
