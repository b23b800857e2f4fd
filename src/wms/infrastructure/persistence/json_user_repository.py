"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from wms.domain.model.user import Role, User
from wms.domain.repository.user_repository import UserRepository
from wms.infrastructure.persistence.json_file import JsonFileRepository

_ADDRESS_FIELDS = ("address", "city", "postal_code", "country", "phone")


class JsonUserRepository(JsonFileRepository, UserRepository):

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._load_raw():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, user: User) -> None:
        self._upsert("id", self._to_raw(user))

    @staticmethod
    def _to_raw(user: User) -> dict:
        raw = {
            "id": user.id,
            "full_name": user.full_name,
            "email": user.email,
            "role": user.role.value,
        }
        for name in _ADDRESS_FIELDS:
            raw[name] = getattr(user, name)
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            full_name=raw["full_name"],
            email=raw["email"],
            role=Role(raw.get("role", Role.CUSTOMER.value)),
            **{name: raw.get(name) for name in _ADDRESS_FIELDS},
        )
