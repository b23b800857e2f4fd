"""Application service: Add User use case."""

from __future__ import annotations

from wms.domain.exceptions import ValidationError
from wms.domain.model.user import Role, User
from wms.domain.repository.user_repository import UserRepository


class AddUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(
        self,
        full_name: str,
        email: str,
        role: str = Role.CUSTOMER.value,
        address: str | None = None,
        city: str | None = None,
        postal_code: str | None = None,
        country: str | None = None,
        phone: str | None = None,
    ) -> User:
        if not full_name or not full_name.strip():
            raise ValidationError("Full name is required")
        if not email or "@" not in email:
            raise ValidationError(f"Invalid email address: {email!r}")
        try:
            parsed_role = Role(role.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown role '{role}'") from exc

        existing = self._user_repo.list_all()
        if any(u.email.lower() == email.lower() for u in existing):
            raise ValidationError(f"A user with email '{email}' already exists")
        next_id = str(max((int(u.id) for u in existing), default=0) + 1)

        user = User(
            id=next_id,
            full_name=full_name.strip(),
            email=email.strip(),
            role=parsed_role,
            address=address,
            city=city,
            postal_code=postal_code,
            country=country,
            phone=phone,
        )
        self._user_repo.save(user)
        return user
