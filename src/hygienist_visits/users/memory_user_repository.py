from __future__ import annotations

from typing import Optional

from ..database.memory_store import InMemoryStore, store_cursor
from .model import User
from .repository import UserRepository


class MemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def get_by_username(self, username: str) -> Optional[User]:
        name = (username or "").strip()
        with store_cursor(self._store) as tables:
            for user in tables.users.values():
                if user.username == name:
                    return user
        return None

    def get_by_id(self, user_id: int) -> Optional[User]:
        with store_cursor(self._store) as tables:
            return tables.users.get(int(user_id))
