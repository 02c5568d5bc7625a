from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ActivityType
from .model import ActivityEntry, VisitRecord


class VisitRepository(Protocol):
    def list_all(self) -> Sequence[VisitRecord]:
        """All visits, newest first by creation time."""

        raise NotImplementedError

    def get_by_id(self, visit_id: str) -> Optional[VisitRecord]:
        raise NotImplementedError

    def insert(self, visit: VisitRecord) -> VisitRecord:
        raise NotImplementedError

    def update(self, visit: VisitRecord) -> VisitRecord:
        """Full-record update keyed by `visit.visit_id`."""

        raise NotImplementedError


class ActivityRepository(Protocol):
    def list_for_visit(self, visit_id: str) -> Sequence[ActivityEntry]:
        """Entries of one visit, newest first."""

        raise NotImplementedError

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
        raise NotImplementedError
