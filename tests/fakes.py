from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from src.fieldtrack.fieldtrack.core.enums import ActivityType, Role, VisitStatus
from src.fieldtrack.fieldtrack.core.exceptions import StoreError
from src.fieldtrack.fieldtrack.users.model import UserAccount
from src.fieldtrack.fieldtrack.visits.model import ActivityEntry, PhotoUpload, VisitRecord

BASE_TIME = datetime(2024, 8, 1, 9, 0, tzinfo=timezone.utc)


def visit(
    worker_name: str = "Jane",
    status: VisitStatus = VisitStatus.FOLLOW_UP,
    *,
    budget: float = 0.0,
    client_name: str = "Acme Traders",
    **kwargs,
) -> VisitRecord:
    return VisitRecord(worker_name=worker_name, client_name=client_name, status=status, budget=budget, **kwargs)


def account(
    *,
    user_id: str = "u-1",
    name: str = "Ravi Kumar",
    role: Role = Role.WORKER,
    mobile: str = "9876543210",
    email: Optional[str] = "ravi@example.com",
    password_hash: str = "secret123",
    is_active: bool = True,
) -> UserAccount:
    return UserAccount(
        user_id=user_id,
        name=name,
        role=role,
        mobile=mobile,
        email=email,
        password_hash=password_hash,
        is_active=is_active,
    )


@dataclass
class InMemoryUsers:
    accounts: list[UserAccount] = field(default_factory=list)
    lookups: list[dict] = field(default_factory=list)

    def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        return next((a for a in self.accounts if a.user_id == user_id), None)

    def find_matching(self, *, email=None, mobile=None, limit=None):
        self.lookups.append({"email": email, "mobile": mobile, "limit": limit})
        out = [
            a
            for a in self.accounts
            if (email and a.email == email) or (mobile and a.mobile == mobile)
        ]
        return out[:limit] if limit is not None else out

    def create_user(self, *, name, role, email, mobile, password_hash, is_active=True) -> UserAccount:
        acc = UserAccount(
            user_id=f"u-{len(self.accounts) + 1}",
            name=name,
            role=role,
            mobile=mobile,
            email=email,
            password_hash=password_hash,
            is_active=is_active,
            created_at=BASE_TIME,
        )
        self.accounts.append(acc)
        return acc


class InMemoryVisits:
    def __init__(self, visits: Optional[list[VisitRecord]] = None):
        self._rows: dict[str, VisitRecord] = {}
        self._next_id = 1
        self.list_calls = 0
        for v in visits or []:
            self.insert(v)

    def list_all(self):
        self.list_calls += 1
        return sorted(self._rows.values(), key=lambda v: v.created_at, reverse=True)

    def get_by_id(self, visit_id: str) -> Optional[VisitRecord]:
        return self._rows.get(visit_id)

    def insert(self, v: VisitRecord) -> VisitRecord:
        vid = f"v-{self._next_id}"
        created = v.created_at or BASE_TIME + timedelta(minutes=self._next_id)
        self._next_id += 1
        saved = replace(v, visit_id=vid, created_at=created)
        self._rows[vid] = saved
        return saved

    def update(self, v: VisitRecord) -> VisitRecord:
        saved = replace(v, created_at=self._rows[v.visit_id].created_at)
        self._rows[v.visit_id] = saved
        return saved


class InMemoryActivities:
    def __init__(self, *, fail_append: bool = False, fail_list: bool = False):
        self.entries: list[ActivityEntry] = []
        self.fail_append = fail_append
        self.fail_list = fail_list

    def list_for_visit(self, visit_id: str):
        if self.fail_list:
            raise StoreError("connection failed")
        rows = [e for e in self.entries if e.visit_id == visit_id]
        return list(reversed(rows))

    def append(self, *, visit_id, action_type: ActivityType, performed_by, note, field_name=None, old_value=None, new_value=None):
        if self.fail_append:
            raise StoreError("connection failed")
        entry = ActivityEntry(
            activity_id=f"a-{len(self.entries) + 1}",
            visit_id=visit_id,
            action_type=action_type,
            note=note,
            performed_by=performed_by,
            created_at=BASE_TIME + timedelta(seconds=len(self.entries)),
            field_name=field_name,
            old_value=old_value,
            new_value=new_value,
        )
        self.entries.append(entry)
        return entry


class FakePhotoStorage:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.saved: list[PhotoUpload] = []

    def save(self, photo: PhotoUpload) -> str:
        if self.fail:
            raise StoreError("Bucket not found")
        self.saved.append(photo)
        return f"https://store.test/storage/v1/object/public/visit-photos/visits/{len(self.saved)}.jpg"
