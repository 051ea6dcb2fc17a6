"""User as seen by the ordering core: an identity with a role.

Registration, passwords and sessions belong to the identity collaborator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(Enum):
    FARMER = "farmer"
    INDIVIDUAL = "individual"
    INDUSTRIAL = "industrial"


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: UserRole

    @property
    def is_producer(self) -> bool:
        return self.role == UserRole.FARMER
