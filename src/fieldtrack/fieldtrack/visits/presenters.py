from __future__ import annotations

from ..common.datetime_utils import to_iso
from .model import ActivityEntry, VisitRecord


def status_label(value: str) -> str:
    return value.replace("_", " ")


def visit_row(v: VisitRecord) -> dict:
    return {
        "id": v.visit_id,
        "created_at": to_iso(v.created_at),
        "worker_name": v.worker_name,
        "worker_phone": v.worker_phone or None,
        "client_name": v.client_name,
        "client_type": v.client_type,
        "client_phone": v.client_phone or None,
        "client_email": v.client_email,
        "address": v.address,
        "landmark": v.landmark,
        "requirements": v.requirements,
        "budget": v.budget,
        "status": v.status.value,
        "status_label": status_label(v.status.value),
        "follow_up_at": to_iso(v.follow_up_at),
        "rejection_reason": v.rejection_reason,
        "latitude": v.latitude,
        "longitude": v.longitude,
        "photo_url": v.photo_url,
    }


def activity_row(a: ActivityEntry) -> dict:
    return {
        "id": a.activity_id,
        "visit_id": a.visit_id,
        "action_type": a.action_type.value,
        "field_name": a.field_name,
        "old_value": a.old_value,
        "new_value": a.new_value,
        "note": a.note,
        "performed_by": a.performed_by,
        "created_at": to_iso(a.created_at),
    }
