"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display user-friendly
messages.  Storage faults are *not* domain exceptions: they surface as
PersistenceError and are the only errors a caller may retry.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


InvalidRequest = ValidationError


class InsufficientStock(ValidationError):
    """A stock pool cannot cover the requested quantity."""

    def __init__(
        self,
        product_id: str,
        product_name: str,
        pool: str,
        requested: int,
        available: int,
    ) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.pool = pool
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient {pool} stock for {product_name}. Available: {available}"
        )


class InvalidTransition(ValidationError):
    """The requested status is not reachable from the current one."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change status from '{current}' to '{requested}'")


class Unauthorized(DomainException):
    """No authenticated user could be resolved for the request."""


class Forbidden(DomainException):
    """The acting user may not perform this operation."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFound(EntityNotFoundError):
    pass


class OrderNotFound(EntityNotFoundError):
    pass


class UserNotFound(EntityNotFoundError):
    pass


class PersistenceError(Exception):
    """The storage layer failed (I/O, corrupt data)."""
