"""Stock pools and the role-to-pool mapping."""

from __future__ import annotations

from enum import Enum

from agrimarket.domain.model.user import UserRole


class StockPool(Enum):
    LOCAL = "local"
    INDUSTRIAL = "industrial"


def pool_for(role: UserRole) -> StockPool:
    """Industrial buyers draw from the industrial pool, everyone else from local."""
    if role == UserRole.INDUSTRIAL:
        return StockPool.INDUSTRIAL
    return StockPool.LOCAL
