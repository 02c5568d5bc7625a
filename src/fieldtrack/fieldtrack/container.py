from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_BUCKET_NAME, DEFAULT_REQUEST_TIMEOUT
from .dashboard.service import DashboardService
from .store.bucket_storage import BucketStorage
from .store.connection import StoreConfig, StoreConnection
from .users.repository import UserRepository
from .users.rest_user_repository import RestUserRepository
from .users.service import AuthService, RegistrationService
from .visits.bucket_photo_storage import BucketPhotoStorage
from .visits.photo_storage import PhotoStorage
from .visits.repository import ActivityRepository, VisitRepository
from .visits.rest_activity_repository import RestActivityRepository
from .visits.rest_visit_repository import RestVisitRepository
from .visits.service import VisitService


@dataclass(frozen=True)
class Container:
    conn: Optional[StoreConnection]

    users_repo: UserRepository
    visits_repo: VisitRepository
    activities_repo: ActivityRepository
    photo_storage: Optional[PhotoStorage]

    auth_service: AuthService
    registration_service: RegistrationService
    visit_service: VisitService
    dashboard_service: DashboardService


def wire(
    *,
    users_repo: UserRepository,
    visits_repo: VisitRepository,
    activities_repo: ActivityRepository,
    photo_storage: Optional[PhotoStorage] = None,
    conn: Optional[StoreConnection] = None,
    allow_legacy_plaintext: bool = False,
) -> Container:
    visit_service = VisitService(visits_repo, activities_repo, photo_storage)
    return Container(
        conn=conn,
        users_repo=users_repo,
        visits_repo=visits_repo,
        activities_repo=activities_repo,
        photo_storage=photo_storage,
        auth_service=AuthService(users_repo, allow_legacy_plaintext=allow_legacy_plaintext),
        registration_service=RegistrationService(users_repo),
        visit_service=visit_service,
        dashboard_service=DashboardService(visit_service),
    )


def build_container(*, store_config: dict, allow_legacy_plaintext: bool = False) -> Container:
    config = StoreConfig(
        url=str(store_config["url"]),
        api_key=str(store_config["api_key"]),
        bucket=str(store_config.get("bucket") or DEFAULT_BUCKET_NAME),
        timeout=float(store_config.get("timeout", DEFAULT_REQUEST_TIMEOUT)),
    )
    conn = StoreConnection.get_instance(config)

    return wire(
        users_repo=RestUserRepository(conn),
        visits_repo=RestVisitRepository(conn),
        activities_repo=RestActivityRepository(conn),
        photo_storage=BucketPhotoStorage(BucketStorage(conn)),
        conn=conn,
        allow_legacy_plaintext=allow_legacy_plaintext,
    )
