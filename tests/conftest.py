from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.fieldtrack.fieldtrack.core.enums import VisitStatus
from tests.fakes import visit


@pytest.fixture
def fixed_now():
    return datetime(2024, 8, 1, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_visits():
    return [
        visit("Jane", VisitStatus.CONVERTED, budget=500, client_phone="9876500001", client_email="buyer@acme.in"),
        visit(" jane ", VisitStatus.FOLLOW_UP, client_name="Blue Hardware", worker_phone="9000000001"),
        visit("JANE", VisitStatus.REJECTED, client_name="Sunrise Paints", worker_phone="9000000002"),
        visit("Arun", VisitStatus.CONVERTED, budget=1200, client_name="Metro Tiles", client_email="Sales@MetroTiles.com"),
        visit("", VisitStatus.FOLLOW_UP, client_name="Walk-in"),
    ]
