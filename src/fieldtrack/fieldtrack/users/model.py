from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class UserAccount:
    """Domain entity: an account row from the `users` table.

    Note: plain data object, no store access here.
    """

    user_id: str
    name: str
    role: Role
    mobile: str
    email: Optional[str]
    password_hash: str
    is_active: bool = True
    created_at: Optional[datetime] = None
