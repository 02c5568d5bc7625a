from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime, to_iso
from ..common.logger import get_logger
from ..core.enums import VisitStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..store.connection import StoreConnection
from ..store.rest_base import eq, insert_row, select_rows, update_rows
from .model import VisitRecord
from .repository import VisitRepository

TABLE = "visits"

logger = get_logger("visits")


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def to_visit(row: Dict[str, Any]) -> VisitRecord:
    return VisitRecord(
        visit_id=str(row["id"]) if row.get("id") is not None else None,
        created_at=parse_iso_datetime(row.get("created_at")),
        worker_name=row.get("worker_name") or "",
        worker_phone=row.get("worker_phone") or "",
        client_name=row.get("client_name") or "",
        client_type=row.get("client_type") or "",
        client_phone=row.get("client_phone") or "",
        client_email=row.get("client_email"),
        address=row.get("address") or "",
        landmark=row.get("landmark") or "",
        requirements=row.get("requirements"),
        budget=float(row.get("budget") or 0),
        status=VisitStatus(row.get("status")),
        follow_up_at=parse_iso_datetime(row.get("follow_up_at")),
        rejection_reason=row.get("rejection_reason"),
        latitude=_opt_float(row.get("latitude")),
        longitude=_opt_float(row.get("longitude")),
        photo_url=row.get("photo_url"),
    )


def read_visits(rows: Sequence[Dict[str, Any]]) -> list[VisitRecord]:
    """Rows with a status outside the known set are logged and left out."""
    visits = []
    for row in rows:
        try:
            visits.append(to_visit(row))
        except ValueError:
            logger.warning("Skipping visit %s with unknown status %r", row.get("id"), row.get("status"))
    return visits


def to_payload(visit: VisitRecord) -> Dict[str, Any]:
    """Column values written on insert/update (id and created_at stay store-owned)."""
    return {
        "worker_name": visit.worker_name,
        "worker_phone": visit.worker_phone,
        "client_name": visit.client_name,
        "client_type": visit.client_type,
        "client_phone": visit.client_phone,
        "client_email": visit.client_email,
        "address": visit.address,
        "landmark": visit.landmark,
        "requirements": visit.requirements,
        "budget": visit.budget,
        "status": visit.status.value,
        "follow_up_at": to_iso(visit.follow_up_at),
        "rejection_reason": visit.rejection_reason,
        "latitude": visit.latitude,
        "longitude": visit.longitude,
        "photo_url": visit.photo_url,
    }


class RestVisitRepository(VisitRepository):
    def __init__(self, conn: StoreConnection):
        self._conn = conn

    def list_all(self) -> Sequence[VisitRecord]:
        rows = select_rows(self._conn, TABLE, order="created_at.desc")
        return read_visits(rows)

    def get_by_id(self, visit_id: str) -> Optional[VisitRecord]:
        rows = select_rows(self._conn, TABLE, filters={"id": eq(visit_id)}, limit=1)
        found = read_visits(rows)
        return found[0] if found else None

    def insert(self, visit: VisitRecord) -> VisitRecord:
        return to_visit(insert_row(self._conn, TABLE, to_payload(visit)))

    def update(self, visit: VisitRecord) -> VisitRecord:
        if not visit.visit_id:
            raise ValidationError("Visit id is required for an update")

        rows = update_rows(self._conn, TABLE, to_payload(visit), filters={"id": eq(visit.visit_id)})
        if not rows:
            raise NotFoundError("Visit not found")
        return to_visit(rows[0])
