from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import UserAccount


class UserRepository(Protocol):
    """Repository interface for user accounts.

    Note (DIP): services depend on this interface, not on the remote store client.
    """

    def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        raise NotImplementedError

    def find_matching(
        self,
        *,
        email: Optional[str] = None,
        mobile: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Sequence[UserAccount]:
        """Accounts whose email OR mobile equals one of the given values."""

        raise NotImplementedError

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
        raise NotImplementedError
