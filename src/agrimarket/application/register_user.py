"""Application service: Register User use case.

A thin stand-in for the identity collaborator so local setups can seed
buyers and farmers.  No credentials are stored.
"""

from __future__ import annotations

from agrimarket.domain.exceptions import ValidationError
from agrimarket.domain.model.user import User, UserRole
from agrimarket.domain.repository.user_repository import UserRepository


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, name: str, email: str, role: str) -> User:
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if not email or "@" not in email:
            raise ValidationError("Please provide a valid email")
        try:
            user_role = UserRole(role)
        except ValueError:
            raise ValidationError(f"Unknown role '{role}'") from None

        if self._user_repo.get_by_email(email) is not None:
            raise ValidationError(f"User with email '{email}' already exists")

        user = User(
            id=self._user_repo.next_id(),
            name=name.strip(),
            email=email.strip().lower(),
            role=user_role,
        )
        self._user_repo.save(user)
        return user
