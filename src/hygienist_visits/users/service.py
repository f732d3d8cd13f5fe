from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    username: str
    role: Role
    hygienist_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_session(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "hygienist_id": self.hygienist_id,
        }

    @classmethod
    def from_session(cls, data: Mapping) -> Optional["SessionUser"]:
        if not data or "user_id" not in data:
            return None
        try:
            role = Role(data.get("role"))
        except ValueError:
            return None
        return cls(
            user_id=int(data["user_id"]),
            username=str(data.get("username") or ""),
            role=role,
            hygienist_id=data.get("hygienist_id"),
        )


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        username = require_non_empty(username, "Username")
        require_non_empty(password, "Password")

        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # placeholder or corrupted hash
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(
            user_id=user.id,
            username=user.username,
            role=user.role,
            hygienist_id=user.hygienist_id,
        )
