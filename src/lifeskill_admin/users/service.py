from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: manage accounts (trainers, school logins, admins)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(
        self,
        *,
        username: str,
        password: str,
        role: Role,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        mob_number: Optional[str] = None,
        device_token: Optional[str] = None,
    ) -> User:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)

        if self._users.get_by_username(username):
            raise ConflictError("Username already taken")

        user_id = self._users.create_user(
            first_name=first_name,
            last_name=last_name,
            mob_number=mob_number,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            device_token=device_token,
        )
        logger.info("created %s account %s (id=%s)", role.value, username, user_id)
        return self.get_user(user_id)

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def set_device_token(self, user_id: int, device_token: Optional[str]) -> User:
        self.get_user(user_id)
        self._users.set_device_token(int(user_id), (device_token or "").strip() or None)
        return self.get_user(user_id)
