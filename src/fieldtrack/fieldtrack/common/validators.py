from __future__ import annotations

import re
from typing import Optional

from ..core.constants import PHONE_DIGITS
from ..core.exceptions import ValidationError

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(value: Optional[str]) -> str:
    """Keep digits only, capped at the phone length (mirrors the input mask)."""
    return _NON_DIGITS.sub("", value or "")[:PHONE_DIGITS]


def is_valid_phone(value: str) -> bool:
    return len(value) == PHONE_DIGITS and value.isdigit()


def is_valid_email(value: Optional[str]) -> bool:
    return bool(value) and "@" in value


def parse_budget(value) -> float:
    """Budget input: anything unparsable counts as 0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_optional_float(value, field_name: str) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
