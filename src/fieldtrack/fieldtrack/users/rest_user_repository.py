from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import Role
from ..store.connection import StoreConnection
from ..store.rest_base import eq, insert_row, or_filter, select_rows
from .model import UserAccount
from .repository import UserRepository

TABLE = "users"


def _to_user(row: Dict[str, Any]) -> UserAccount:
    return UserAccount(
        user_id=str(row["id"]),
        name=row.get("name") or "",
        role=Role(row["role"]),
        mobile=row.get("mobile") or "",
        email=row.get("email"),
        password_hash=row.get("password_hash") or "",
        is_active=row.get("is_active") is not False,
        created_at=parse_iso_datetime(row.get("created_at")),
    )


class RestUserRepository(UserRepository):
    def __init__(self, conn: StoreConnection):
        self._conn = conn

    def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        rows = select_rows(self._conn, TABLE, filters={"id": eq(user_id)}, limit=1)
        return _to_user(rows[0]) if rows else None

    def find_matching(
        self,
        *,
        email: Optional[str] = None,
        mobile: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Sequence[UserAccount]:
        predicate = or_filter(email=email, mobile=mobile)
        if not predicate:
            return []
        rows = select_rows(self._conn, TABLE, filters={"or": predicate}, limit=limit)
        return [_to_user(r) for r in rows]

    def create_user(
        self,
        *,
        name: str,
        role: Role,
        email: Optional[str],
        mobile: str,
        password_hash: str,
        is_active: bool = True,
    ) -> UserAccount:
        row = insert_row(
            self._conn,
            TABLE,
            {
                "name": name,
                "role": role.value,
                "email": email,
                "mobile": mobile,
                "password_hash": password_hash,
                "is_active": is_active,
            },
        )
        return _to_user(row)
