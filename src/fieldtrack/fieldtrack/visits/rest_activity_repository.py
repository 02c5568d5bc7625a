from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime
from ..common.logger import get_logger
from ..core.enums import ActivityType
from ..store.connection import StoreConnection
from ..store.rest_base import eq, insert_row, select_rows
from .model import ActivityEntry
from .repository import ActivityRepository

TABLE = "visit_activities"

logger = get_logger("visits")


def to_activity(row: Dict[str, Any]) -> ActivityEntry:
    return ActivityEntry(
        activity_id=str(row["id"]),
        visit_id=str(row["visit_id"]),
        action_type=ActivityType(row.get("action_type")),
        note=row.get("note") or "",
        performed_by=row.get("performed_by") or "",
        created_at=parse_iso_datetime(row.get("created_at")),
        field_name=row.get("field_name"),
        old_value=row.get("old_value"),
        new_value=row.get("new_value"),
    )


class RestActivityRepository(ActivityRepository):
    def __init__(self, conn: StoreConnection):
        self._conn = conn

    def list_for_visit(self, visit_id: str) -> Sequence[ActivityEntry]:
        rows = select_rows(
            self._conn,
            TABLE,
            filters={"visit_id": eq(visit_id)},
            order="created_at.desc",
        )
        entries = []
        for r in rows:
            try:
                entries.append(to_activity(r))
            except ValueError:
                logger.warning("Skipping activity %s with unknown action %r", r.get("id"), r.get("action_type"))
        return entries

    def append(
        self,
        *,
        visit_id: str,
        action_type: ActivityType,
        performed_by: str,
        note: str,
        field_name: Optional[str] = None,
        old_value: Optional[str] = None,
        new_value: Optional[str] = None,
    ) -> ActivityEntry:
        row = insert_row(
            self._conn,
            TABLE,
            {
                "visit_id": visit_id,
                "action_type": action_type.value,
                "performed_by": performed_by,
                "note": note,
                "field_name": field_name,
                "old_value": old_value,
                "new_value": new_value,
            },
        )
        return to_activity(row)
