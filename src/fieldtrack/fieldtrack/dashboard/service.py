from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.logger import get_logger
from ..core.constants import PERSONNEL_PREVIEW_LIMIT, PROFILE_RECENT_VISITS
from ..core.enums import VisitStatus
from ..core.exceptions import DomainError, NotFoundError
from ..visits.model import ActivityEntry, VisitRecord
from ..visits.service import VisitService
from .aggregation import (
    StatusTally,
    WorkerRollup,
    filter_visits,
    find_rollup,
    parse_status_filter,
    rollup_workers,
    tally_statuses,
    visits_for_worker,
)
from .state import DashboardState

logger = get_logger("dashboard")


@dataclass(frozen=True)
class Overview:
    tally: StatusTally
    personnel: list[WorkerRollup]


@dataclass(frozen=True)
class VisitTable:
    rows: list[VisitRecord]
    show_email: bool
    show_budget: bool


@dataclass(frozen=True)
class WorkerProfile:
    rollup: WorkerRollup
    recent: list[VisitRecord]


@dataclass(frozen=True)
class VisitDetail:
    visit: VisitRecord
    activities: list[ActivityEntry]
    activities_error: Optional[str] = None


class DashboardService:
    """Read side of the admin dashboard.

    Each call fetches the full visit list and derives its view from scratch.
    """

    def __init__(self, visits: VisitService):
        self._visits = visits

    def overview(self) -> Overview:
        visits = self._visits.list_visits()
        return Overview(
            tally=tally_statuses(visits),
            personnel=rollup_workers(visits)[:PERSONNEL_PREVIEW_LIMIT],
        )

    def table(self, state: DashboardState) -> VisitTable:
        wanted = parse_status_filter(state.status_filter)
        rows = filter_visits(self._visits.list_visits(), state.status_filter, state.search)
        return VisitTable(
            rows=rows,
            show_email=wanted in (VisitStatus.CONVERTED, VisitStatus.FOLLOW_UP),
            show_budget=wanted == VisitStatus.CONVERTED,
        )

    def workers(self) -> list[WorkerRollup]:
        return rollup_workers(self._visits.list_visits())

    def worker_profile(self, name: str) -> WorkerProfile:
        visits = self._visits.list_visits()
        rollup = find_rollup(rollup_workers(visits), name)
        if not rollup:
            raise NotFoundError("Worker not found")
        return WorkerProfile(
            rollup=rollup,
            recent=visits_for_worker(visits, name, limit=PROFILE_RECENT_VISITS),
        )

    def visit_detail(self, visit_id: str) -> VisitDetail:
        visit = self._visits.get_visit(visit_id)
        try:
            activities = self._visits.list_activities(visit_id)
        except DomainError as e:
            logger.error("Activity trail fetch error for visit %s: %s", visit_id, e)
            return VisitDetail(visit=visit, activities=[], activities_error=str(e))
        return VisitDetail(visit=visit, activities=activities)
