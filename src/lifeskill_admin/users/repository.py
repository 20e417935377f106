from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        first_name: Optional[str],
        last_name: Optional[str],
        mob_number: Optional[str],
        username: str,
        password_hash: str,
        role: Role,
        device_token: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def set_device_token(self, user_id: int, device_token: Optional[str]) -> bool:
        raise NotImplementedError
