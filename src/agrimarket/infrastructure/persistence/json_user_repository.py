"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from pathlib import Path

from agrimarket.domain.model.user import User, UserRole
from agrimarket.domain.repository.user_repository import UserRepository
from agrimarket.infrastructure.persistence.json_file import JsonFile, upsert


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def next_id(self) -> str:
        records = self._file.load()
        if not records:
            return "u1"
        return f"u{max(int(r['id'].lstrip('u')) for r in records) + 1}"

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._file.load():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_by_email(self, email: str) -> User | None:
        for raw in self._file.load():
            if raw["email"].lower() == email.strip().lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, user: User) -> None:
        record = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role.value,
        }
        self._file.update(lambda records: upsert(records, "id", record))

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            name=raw["name"],
            email=raw["email"],
            role=UserRole(raw["role"]),
        )
