"""Derived views over the full visit list.

Every function here is pure: it reads the sequence it is given, never mutates
it, and is recomputed from scratch whenever the list or filter changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from ..core.constants import STATUS_ALL, UNKNOWN_WORKER
from ..core.enums import VisitStatus
from ..core.exceptions import ValidationError
from ..visits.model import VisitRecord

StatusFilter = Union[VisitStatus, str, None]


@dataclass(frozen=True)
class StatusTally:
    follow_up: int
    converted: int
    rejected: int
    total: int
    total_revenue: float

    def count(self, status: VisitStatus) -> int:
        return {
            VisitStatus.FOLLOW_UP: self.follow_up,
            VisitStatus.CONVERTED: self.converted,
            VisitStatus.REJECTED: self.rejected,
        }[status]


@dataclass(frozen=True)
class WorkerRollup:
    name: str
    phone: Optional[str]
    total: int
    converted: int
    follow_up: int
    rejected: int

    @property
    def key(self) -> str:
        return normalize_worker_key(self.name)

    @property
    def conversion_rate(self) -> int:
        """Converted share in whole percent."""
        return round(self.converted / (self.total or 1) * 100)


def normalize_worker_key(name: Optional[str]) -> str:
    return (name or "").strip().lower() or UNKNOWN_WORKER.lower()


def tally_statuses(visits: Iterable[VisitRecord]) -> StatusTally:
    counts = {status: 0 for status in VisitStatus}
    revenue = 0.0
    total = 0

    for v in visits:
        total += 1
        counts[v.status] += 1
        if v.status == VisitStatus.CONVERTED:
            revenue += v.budget or 0

    return StatusTally(
        follow_up=counts[VisitStatus.FOLLOW_UP],
        converted=counts[VisitStatus.CONVERTED],
        rejected=counts[VisitStatus.REJECTED],
        total=total,
        total_revenue=revenue,
    )


def rollup_workers(visits: Iterable[VisitRecord]) -> list[WorkerRollup]:
    """Per-worker counts keyed by the trimmed, lower-cased worker name.

    The display name is the first spelling seen; the phone is the first
    non-empty one. Output keeps the order in which workers first appear.
    """
    groups: dict[str, dict] = {}

    for v in visits:
        original = (v.worker_name or "").strip() or UNKNOWN_WORKER
        key = normalize_worker_key(original)

        g = groups.get(key)
        if g is None:
            g = {
                "name": original,
                "phone": v.worker_phone or None,
                "total": 0,
                VisitStatus.CONVERTED: 0,
                VisitStatus.FOLLOW_UP: 0,
                VisitStatus.REJECTED: 0,
            }
            groups[key] = g

        g["total"] += 1
        g[v.status] += 1
        if not g["phone"] and v.worker_phone:
            g["phone"] = v.worker_phone

    return [
        WorkerRollup(
            name=g["name"],
            phone=g["phone"],
            total=g["total"],
            converted=g[VisitStatus.CONVERTED],
            follow_up=g[VisitStatus.FOLLOW_UP],
            rejected=g[VisitStatus.REJECTED],
        )
        for g in groups.values()
    ]


def find_rollup(rollups: Iterable[WorkerRollup], name: str) -> Optional[WorkerRollup]:
    key = normalize_worker_key(name)
    for r in rollups:
        if r.key == key:
            return r
    return None


def parse_status_filter(status: StatusFilter) -> Optional[VisitStatus]:
    """`None` means every status."""
    if status is None or status == "" or status == STATUS_ALL:
        return None
    if isinstance(status, VisitStatus):
        return status
    try:
        return VisitStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown status filter: {status}")


def _matches_search(v: VisitRecord, needle: str) -> bool:
    return (
        needle in (v.client_name or "").lower()
        or needle in (v.worker_name or "").lower()
        or needle in (v.client_phone or "")
        or needle in (v.client_email or "").lower()
    )


def filter_visits(
    visits: Sequence[VisitRecord],
    status: StatusFilter = STATUS_ALL,
    search: str = "",
) -> list[VisitRecord]:
    wanted = parse_status_filter(status)
    result = list(visits)

    if wanted is not None:
        result = [v for v in result if v.status == wanted]

    if search:
        needle = search.lower()
        result = [v for v in result if _matches_search(v, needle)]

    return result


def visits_for_worker(
    visits: Iterable[VisitRecord],
    name: str,
    limit: Optional[int] = None,
) -> list[VisitRecord]:
    key = normalize_worker_key(name)
    matched = [v for v in visits if normalize_worker_key(v.worker_name) == key]
    return matched[:limit] if limit is not None else matched
