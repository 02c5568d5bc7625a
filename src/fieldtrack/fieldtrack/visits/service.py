from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import default_follow_up_at, now_utc, parse_iso_datetime
from ..common.logger import get_logger
from ..common.validators import (
    is_valid_email,
    is_valid_phone,
    normalize_phone,
    parse_budget,
    parse_optional_float,
)
from ..core.constants import PHONE_DIGITS
from ..core.enums import ActivityType, VisitStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from .model import ActivityEntry, PhotoUpload, VisitDraft, VisitRecord
from .photo_storage import PhotoStorage
from .repository import ActivityRepository, VisitRepository

logger = get_logger("visits")


@dataclass(frozen=True)
class LocationFix:
    latitude: Optional[float]
    longitude: Optional[float]
    error: Optional[str] = None

    @property
    def captured(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class SaveResult:
    visit: VisitRecord
    created: bool
    activity: Optional[ActivityEntry] = None
    activity_error: Optional[str] = None
    photo_error: Optional[str] = None
    location_error: Optional[str] = None

    @property
    def activity_logged(self) -> bool:
        return self.activity is not None

    @property
    def message(self) -> str:
        return "Visit recorded successfully!" if self.created else "Visit updated successfully!"


def parse_location(draft: VisitDraft, errors: list[str]) -> LocationFix:
    """Coordinates from a single-shot browser position: both or neither."""
    try:
        lat = parse_optional_float(draft.latitude, "Latitude")
        lng = parse_optional_float(draft.longitude, "Longitude")
    except ValidationError as e:
        errors.append(str(e))
        return LocationFix(None, None, draft.location_error or None)

    if (lat is None) != (lng is None):
        errors.append("Latitude and longitude must be captured together")
        return LocationFix(None, None, draft.location_error or None)

    if lat is not None and not -90 <= lat <= 90:
        errors.append("Latitude out of range")
    if lng is not None and not -180 <= lng <= 180:
        errors.append("Longitude out of range")

    return LocationFix(lat, lng, draft.location_error or None)


class VisitService:
    """Use case: log and edit field visits, keeping the activity trail."""

    def __init__(
        self,
        visits: VisitRepository,
        activities: ActivityRepository,
        photos: Optional[PhotoStorage] = None,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._visits = visits
        self._activities = activities
        self._photos = photos
        self._clock = clock

    def list_visits(self) -> list[VisitRecord]:
        return list(self._visits.list_all())

    def get_visit(self, visit_id: str) -> VisitRecord:
        visit = self._visits.get_by_id(visit_id)
        if not visit:
            raise NotFoundError("Visit not found")
        return visit

    def list_activities(self, visit_id: str) -> list[ActivityEntry]:
        return list(self._activities.list_for_visit(visit_id))

    def build_record(
        self,
        draft: VisitDraft,
        *,
        previous: Optional[VisitRecord] = None,
        now: Optional[datetime] = None,
    ) -> tuple[VisitRecord, LocationFix]:
        """Validate the form and apply the status-exclusive field rule."""
        now = now or self._clock()
        errors: list[str] = []

        worker_name = (draft.worker_name or "").strip()
        client_name = (draft.client_name or "").strip()
        if not worker_name:
            errors.append("Worker name is required")
        if not client_name:
            errors.append("Client name is required")

        try:
            status = VisitStatus(draft.status)
        except ValueError:
            errors.append("Invalid visit status")
            status = VisitStatus.FOLLOW_UP

        worker_phone = normalize_phone(draft.worker_phone)
        client_phone = normalize_phone(draft.client_phone)
        if worker_phone and not is_valid_phone(worker_phone):
            errors.append(f"Worker phone: {PHONE_DIGITS} digits required")
        if client_phone and not is_valid_phone(client_phone):
            errors.append(f"Client phone: {PHONE_DIGITS} digits required")

        client_email = (draft.client_email or "").strip() or None
        if client_email and not is_valid_email(client_email):
            errors.append("Client email is not valid")

        follow_up_at = None
        if status == VisitStatus.FOLLOW_UP:
            try:
                follow_up_at = parse_iso_datetime(draft.follow_up_at)
            except ValueError:
                errors.append("Follow-up time is not valid")
            if follow_up_at is None:
                follow_up_at = (previous.follow_up_at if previous else None) or default_follow_up_at(now)

        location = parse_location(draft, errors)

        if errors:
            raise ValidationError("; ".join(errors), errors)

        latitude, longitude = location.latitude, location.longitude
        if not location.captured and previous:
            latitude, longitude = previous.latitude, previous.longitude

        record = VisitRecord(
            visit_id=previous.visit_id if previous else None,
            created_at=previous.created_at if previous else None,
            worker_name=worker_name,
            worker_phone=worker_phone,
            client_name=client_name,
            client_type=(draft.client_type or "").strip(),
            client_phone=client_phone,
            client_email=client_email,
            address="",
            landmark=(draft.landmark or "").strip(),
            requirements=(draft.requirements or "").strip() or None,
            budget=parse_budget(draft.budget) if status == VisitStatus.CONVERTED else 0.0,
            status=status,
            follow_up_at=follow_up_at,
            rejection_reason=((draft.rejection_reason or "").strip() or None) if status == VisitStatus.REJECTED else None,
            latitude=latitude,
            longitude=longitude,
            photo_url=previous.photo_url if previous else None,
        )
        return record, location

    def _upload_photo(self, photo: Optional[PhotoUpload]) -> tuple[Optional[str], Optional[str]]:
        if not photo or not photo.data or not self._photos:
            return None, None
        try:
            return self._photos.save(photo), None
        except DomainError as e:
            logger.warning("Photo upload failed, keeping previous photo: %s", e)
            return None, str(e)

    def _append_activity(
        self,
        *,
        visit: VisitRecord,
        created: bool,
        old_status: Optional[VisitStatus],
    ) -> tuple[Optional[ActivityEntry], Optional[str]]:
        status = visit.status.value
        if created:
            action, note = ActivityType.CREATED, f"New visit created with status: {status}"
        else:
            action, note = ActivityType.UPDATED, f"Visit updated. Status: {status}"

        try:
            entry = self._activities.append(
                visit_id=str(visit.visit_id),
                action_type=action,
                performed_by=visit.worker_name,
                note=note,
                field_name="status",
                old_value=old_status.value if old_status else None,
                new_value=status,
            )
            return entry, None
        except DomainError as e:
            # The visit write is already committed; the trail entry is lost.
            logger.error("Activity log append failed for visit %s: %s", visit.visit_id, e)
            return None, str(e)

    def save_visit(
        self,
        draft: VisitDraft,
        *,
        visit_id: Optional[str] = None,
        photo: Optional[PhotoUpload] = None,
        now: Optional[datetime] = None,
    ) -> SaveResult:
        previous = self.get_visit(visit_id) if visit_id else None
        record, location = self.build_record(draft, previous=previous, now=now)

        photo_url, photo_error = self._upload_photo(photo)
        if photo_url:
            record = replace(record, photo_url=photo_url)

        if previous:
            saved = self._visits.update(record)
        else:
            saved = self._visits.insert(record)

        activity, activity_error = self._append_activity(
            visit=saved,
            created=previous is None,
            old_status=previous.status if previous else None,
        )

        return SaveResult(
            visit=saved,
            created=previous is None,
            activity=activity,
            activity_error=activity_error,
            photo_error=photo_error,
            location_error=location.error,
        )