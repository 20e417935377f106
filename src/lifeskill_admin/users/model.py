from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account (trainer, school login, admin, ...).

    ``visits`` holds the ids of visits owned by a trainer, oldest first.
    """

    user_id: int
    first_name: Optional[str]
    last_name: Optional[str]
    mob_number: Optional[str]
    username: str
    password_hash: str
    role: Role
    device_token: Optional[str] = None
    visits: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "mobNumber": self.mob_number,
            "username": self.username,
            "role": self.role.value,
            "visits": list(self.visits),
        }

    def contact_dict(self) -> dict:
        return {
            "id": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "mobNumber": self.mob_number,
        }
