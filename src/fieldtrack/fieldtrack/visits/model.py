from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.enums import ActivityType, VisitStatus


@dataclass(frozen=True)
class VisitRecord:
    """Domain entity: one worker-to-client field visit.

    `budget`, `follow_up_at` and `rejection_reason` are meaningful only for the
    matching status. VisitService enforces that on write; the store does not.
    """

    worker_name: str
    client_name: str
    status: VisitStatus
    visit_id: Optional[str] = None
    created_at: Optional[datetime] = None
    worker_phone: str = ""
    client_type: str = ""
    client_phone: str = ""
    client_email: Optional[str] = None
    address: str = ""
    landmark: str = ""
    requirements: Optional[str] = None
    budget: float = 0.0
    follow_up_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class ActivityEntry:
    """Append-only audit entry for a visit."""

    activity_id: str
    visit_id: str
    action_type: ActivityType
    note: str
    performed_by: str
    created_at: Optional[datetime] = None
    field_name: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None


@dataclass(frozen=True)
class VisitDraft:
    """Raw visit form values, before validation."""

    worker_name: str = ""
    worker_phone: str = ""
    client_name: str = ""
    client_type: str = ""
    client_phone: str = ""
    client_email: str = ""
    landmark: str = ""
    requirements: str = ""
    budget: Any = 0
    status: str = VisitStatus.FOLLOW_UP.value
    follow_up_at: str = ""
    rejection_reason: str = ""
    latitude: Any = None
    longitude: Any = None
    location_error: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "VisitDraft":
        def _s(key: str) -> str:
            return str(form.get(key) or "")

        return cls(
            worker_name=_s("worker_name"),
            worker_phone=_s("worker_phone"),
            client_name=_s("client_name"),
            client_type=_s("client_type"),
            client_phone=_s("client_phone"),
            client_email=_s("client_email"),
            landmark=_s("landmark"),
            requirements=_s("requirements"),
            budget=form.get("budget"),
            status=_s("status") or VisitStatus.FOLLOW_UP.value,
            follow_up_at=_s("follow_up_at"),
            rejection_reason=_s("rejection_reason"),
            latitude=form.get("latitude"),
            longitude=form.get("longitude"),
            location_error=_s("location_error"),
        )


@dataclass(frozen=True)
class PhotoUpload:
    filename: str
    data: bytes
    content_type: Optional[str] = None
