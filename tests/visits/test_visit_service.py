from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.fieldtrack.fieldtrack.core.enums import ActivityType, VisitStatus
from src.fieldtrack.fieldtrack.core.exceptions import NotFoundError, ValidationError
from src.fieldtrack.fieldtrack.visits.model import PhotoUpload, VisitDraft
from src.fieldtrack.fieldtrack.visits.service import VisitService
from tests.fakes import FakePhotoStorage, InMemoryActivities, InMemoryVisits


def _draft(**overrides) -> VisitDraft:
    data = {
        "worker_name": "Jane",
        "worker_phone": "98765-43210",
        "client_name": "Acme Traders",
        "client_type": "Retailer",
        "client_phone": "9000000001",
        "client_email": "buyer@acme.in",
        "landmark": "Near bus stand",
        "requirements": "Bulk tiles",
        "budget": "2500",
        "status": "follow_up",
        "follow_up_at": "",
        "rejection_reason": "",
    }
    data.update(overrides)
    return VisitDraft.from_form(data)


def _service(*, activities=None, photos=None):
    visits = InMemoryVisits()
    activities = activities or InMemoryActivities()
    return VisitService(visits, activities, photos), visits, activities


def test_create_writes_visit_and_created_activity(fixed_now):
    svc, visits, activities = _service()

    result = svc.save_visit(_draft(), now=fixed_now)

    assert result.created is True
    assert result.message == "Visit recorded successfully!"
    assert visits.get_by_id(result.visit.visit_id) is not None

    entry = activities.entries[0]
    assert entry.action_type == ActivityType.CREATED
    assert entry.performed_by == "Jane"
    assert entry.field_name == "status"
    assert entry.new_value == "follow_up"
    assert entry.old_value is None
    assert entry.note == "New visit created with status: follow_up"


def test_update_follow_up_to_converted_logs_updated_entry(fixed_now):
    svc, _, activities = _service()
    created = svc.save_visit(_draft(), now=fixed_now).visit

    result = svc.save_visit(_draft(status="converted"), visit_id=created.visit_id, now=fixed_now)

    assert result.created is False
    assert result.visit.status == VisitStatus.CONVERTED
    assert result.visit.budget == 2500

    entry = activities.entries[-1]
    assert entry.action_type == ActivityType.UPDATED
    assert entry.new_value == "converted"
    assert entry.old_value == "follow_up"
    assert entry.note == "Visit updated. Status: converted"


def test_status_exclusive_fields(fixed_now):
    svc, _, _ = _service()

    follow_up = svc.save_visit(_draft(rejection_reason="too costly"), now=fixed_now).visit
    rejected = svc.save_visit(_draft(status="rejected", rejection_reason=" too costly "), now=fixed_now).visit
    converted = svc.save_visit(_draft(status="converted", follow_up_at="2024-08-05T10:00"), now=fixed_now).visit

    assert follow_up.budget == 0
    assert follow_up.rejection_reason is None
    assert follow_up.follow_up_at == fixed_now + timedelta(hours=24)

    assert rejected.rejection_reason == "too costly"
    assert rejected.follow_up_at is None
    assert rejected.budget == 0

    assert converted.follow_up_at is None
    assert converted.budget == 2500


def test_explicit_follow_up_time_is_kept(fixed_now):
    svc, _, _ = _service()

    v = svc.save_visit(_draft(follow_up_at="2024-08-05T10:00"), now=fixed_now).visit

    assert v.follow_up_at == datetime(2024, 8, 5, 10, 0)


def test_phones_are_normalized_to_digits(fixed_now):
    svc, _, _ = _service()

    v = svc.save_visit(_draft(), now=fixed_now).visit

    assert v.worker_phone == "9876543210"
    assert v.address == ""


def test_short_phone_blocks_submission():
    svc, visits, activities = _service()

    with pytest.raises(ValidationError) as exc:
        svc.save_visit(_draft(client_phone="12345", worker_name=" "))

    assert "Client phone: 10 digits required" in exc.value.errors
    assert "Worker name is required" in exc.value.errors
    assert visits.list_all() == []
    assert activities.entries == []


def test_invalid_status_is_rejected():
    svc, _, _ = _service()

    with pytest.raises(ValidationError, match="Invalid visit status"):
        svc.save_visit(_draft(status="won"))


def test_activity_failure_keeps_visit_committed(fixed_now):
    svc, visits, _ = _service(activities=InMemoryActivities(fail_append=True))

    result = svc.save_visit(_draft(), now=fixed_now)

    assert result.activity_logged is False
    assert result.activity_error == "connection failed"
    assert visits.get_by_id(result.visit.visit_id) is not None


def test_photo_upload_sets_url(fixed_now):
    photos = FakePhotoStorage()
    svc, _, _ = _service(photos=photos)

    result = svc.save_visit(_draft(), photo=PhotoUpload("shop.jpg", b"\xff\xd8", "image/jpeg"), now=fixed_now)

    assert result.visit.photo_url.endswith("/visits/1.jpg")
    assert photos.saved[0].filename == "shop.jpg"


def test_failed_upload_keeps_previous_photo(fixed_now):
    photos = FakePhotoStorage()
    svc, _, _ = _service(photos=photos)
    first = svc.save_visit(_draft(), photo=PhotoUpload("shop.jpg", b"1"), now=fixed_now).visit

    photos.fail = True
    result = svc.save_visit(_draft(), visit_id=first.visit_id, photo=PhotoUpload("again.jpg", b"2"), now=fixed_now)

    assert result.visit.photo_url == first.photo_url
    assert result.photo_error == "Bucket not found"


def test_location_is_validated_and_kept_on_update(fixed_now):
    svc, _, _ = _service()
    first = svc.save_visit(_draft(latitude="24.5854", longitude="73.7125"), now=fixed_now).visit

    updated = svc.save_visit(_draft(location_error="Permission denied"), visit_id=first.visit_id, now=fixed_now)

    assert (updated.visit.latitude, updated.visit.longitude) == (24.5854, 73.7125)
    assert updated.location_error == "Permission denied"

    with pytest.raises(ValidationError, match="captured together"):
        svc.save_visit(_draft(latitude="24.5"), now=fixed_now)
    with pytest.raises(ValidationError, match="Latitude out of range"):
        svc.save_visit(_draft(latitude="124.5", longitude="73.7"), now=fixed_now)


def test_update_of_missing_visit():
    svc, _, _ = _service()

    with pytest.raises(NotFoundError):
        svc.save_visit(_draft(), visit_id="v-404")
