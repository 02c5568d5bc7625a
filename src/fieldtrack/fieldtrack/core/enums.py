from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role, also the portal a user signs in through."""

    WORKER = "worker"
    ADMIN = "admin"


class VisitStatus(str, Enum):
    """Outcome of a field visit as stored in the `visits` table."""

    FOLLOW_UP = "follow_up"
    CONVERTED = "converted"
    REJECTED = "rejected"


class ActivityType(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    STATUS_CHANGED = "status_changed"
    FOLLOW_UP_ADDED = "follow_up_added"
    ASSIGNED = "assigned"


class DashboardView(str, Enum):
    CARDS = "cards"
    TABLE = "table"
    ADD_NEW = "add_new"
    EDIT_VISIT = "edit_visit"
    PROFILES = "profiles"
