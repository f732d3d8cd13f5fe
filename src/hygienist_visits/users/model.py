from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Note: plain data object, no storage access.
    """

    id: int
    username: str
    password_hash: str
    role: Role
    hygienist_id: Optional[int] = None
    is_active: bool = True
