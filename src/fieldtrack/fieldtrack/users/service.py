from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.logger import get_logger
from ..common.validators import is_valid_email, is_valid_phone
from ..core.constants import MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH, PHONE_DIGITS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import UserAccount
from .repository import UserRepository

logger = get_logger("users")

_HASH_METHODS = ("scrypt:", "pbkdf2:")

PORTAL_DENIED = {
    Role.WORKER: "Access Denied: This account is not registered as a Field Worker.",
    Role.ADMIN: "Access Denied: Administrative privileges required.",
}


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    role: Role


def is_password_hash(value: str) -> bool:
    return bool(value) and value.startswith(_HASH_METHODS) and value.count("$") >= 2


class AuthService:
    """Use case: sign in through the worker or admin portal."""

    def __init__(self, users: UserRepository, *, allow_legacy_plaintext: bool = False):
        self._users = users
        self._allow_legacy_plaintext = bool(allow_legacy_plaintext)

    def _verify_password(self, account: UserAccount, password: str) -> bool:
        stored = account.password_hash or ""
        if is_password_hash(stored):
            try:
                return check_password_hash(stored, password)
            except ValueError:
                return False

        if not self._allow_legacy_plaintext:
            return False

        logger.warning("Account %s still stores a plaintext password", account.user_id)
        return hmac.compare_digest(stored.encode("utf-8"), (password or "").encode("utf-8"))

    def authenticate(self, identifier: str, password: str, portal: Role) -> SessionUser:
        clean_id = (identifier or "").strip().lower()
        if not clean_id:
            raise AuthenticationError("Invalid credentials or account not found.")

        if "@" in clean_id:
            matches = self._users.find_matching(email=clean_id, limit=2)
        else:
            matches = self._users.find_matching(mobile=clean_id, limit=2)

        if not matches:
            raise AuthenticationError("Invalid credentials or account not found.")
        if len(matches) > 1:
            logger.warning("Sign-in refused: identifier %s matches more than one account", clean_id)
            raise AuthenticationError("Invalid credentials or account not found.")
        account = matches[0]

        if account.role != portal:
            raise AuthorizationError(PORTAL_DENIED[portal])

        if not account.is_active:
            raise AuthorizationError("Account Suspended: Please contact your administrator.")

        if not self._verify_password(account, password):
            raise AuthenticationError("Incorrect password. Please try again.")

        return SessionUser(user_id=account.user_id, name=account.name, role=account.role)


class RegistrationService:
    """Use case: self-service account creation for workers and admins."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def validate(
        *,
        name: str,
        email: str,
        mobile: str,
        password: str,
        confirm_password: str,
        role: Role,
    ) -> None:
        errors: list[str] = []

        if len((name or "").strip()) < MIN_NAME_LENGTH:
            errors.append(f"Full Name must be at least {MIN_NAME_LENGTH} characters")

        if role == Role.WORKER and not is_valid_phone((mobile or "").strip()):
            errors.append(f"Mobile number must be exactly {PHONE_DIGITS} digits")

        if role == Role.ADMIN and not is_valid_email((email or "").strip()):
            errors.append("Valid corporate email required for admin access")

        if len(password or "") < MIN_PASSWORD_LENGTH:
            errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if password != confirm_password:
            errors.append("Passwords do not match")

        if errors:
            raise ValidationError("; ".join(errors), errors)

    def register(
        self,
        *,
        name: str,
        email: Optional[str],
        mobile: str,
        password: str,
        confirm_password: str,
        role: Role,
    ) -> SessionUser:
        self.validate(
            name=name,
            email=email or "",
            mobile=mobile or "",
            password=password,
            confirm_password=confirm_password,
            role=role,
        )

        clean_email = (email or "").strip().lower()
        clean_mobile = (mobile or "").strip()

        if self._users.find_matching(email=clean_email or None, mobile=clean_mobile or None, limit=1):
            raise ValidationError("An account already exists with this email or mobile number.")

        account = self._users.create_user(
            name=name.strip(),
            role=role,
            email=clean_email or None,
            mobile=clean_mobile,
            password_hash=generate_password_hash(password),
            is_active=True,
        )
        logger.info("Registered %s account %s", role.value, account.user_id)
        return SessionUser(user_id=account.user_id, name=account.name, role=account.role)
