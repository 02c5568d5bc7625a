from __future__ import annotations

from dataclasses import replace

import pytest

from src.fieldtrack.fieldtrack.core.enums import VisitStatus
from src.fieldtrack.fieldtrack.core.exceptions import ValidationError
from src.fieldtrack.fieldtrack.dashboard.aggregation import (
    filter_visits,
    find_rollup,
    rollup_workers,
    tally_statuses,
    visits_for_worker,
)
from tests.fakes import visit


def test_tally_scenario_counts_and_revenue():
    visits = [
        visit(status=VisitStatus.CONVERTED, budget=500),
        visit(status=VisitStatus.FOLLOW_UP),
        visit(status=VisitStatus.REJECTED),
    ]

    tally = tally_statuses(visits)

    assert (tally.converted, tally.follow_up, tally.rejected, tally.total) == (1, 1, 1, 3)
    assert tally.total_revenue == 500


def test_tally_parts_add_up_to_total(sample_visits):
    tally = tally_statuses(sample_visits)

    assert tally.follow_up + tally.converted + tally.rejected == tally.total == len(sample_visits)
    assert tally.count(VisitStatus.CONVERTED) == 2


def test_tally_of_empty_list():
    tally = tally_statuses([])

    assert tally.total == 0
    assert tally.total_revenue == 0


def test_revenue_ignores_budget_on_non_converted_visits(sample_visits):
    before = tally_statuses(sample_visits).total_revenue

    tampered = [
        replace(v, budget=99999) if v.status != VisitStatus.CONVERTED else v
        for v in sample_visits
    ]

    assert before == 1700
    assert tally_statuses(tampered).total_revenue == before


def test_rollup_collapses_name_variants():
    visits = [visit("Jane"), visit(" jane "), visit("JANE", VisitStatus.CONVERTED)]

    rollups = rollup_workers(visits)

    assert len(rollups) == 1
    assert rollups[0].name == "Jane"
    assert rollups[0].total == 3
    assert rollups[0].follow_up == 2
    assert rollups[0].converted == 1


def test_rollup_keeps_first_non_empty_phone_and_first_appearance_order(sample_visits):
    rollups = rollup_workers(sample_visits)

    assert [r.name for r in rollups] == ["Jane", "Arun", "Unknown"]
    assert rollups[0].phone == "9000000001"
    assert rollups[1].phone is None


def test_rollup_defaults_missing_worker_name_to_unknown():
    rollups = rollup_workers([visit(""), visit("  unknown ")])

    assert len(rollups) == 1
    assert rollups[0].name == "Unknown"
    assert rollups[0].total == 2


def test_conversion_rate_rounds_to_whole_percent():
    visits = [visit("Arun", VisitStatus.CONVERTED), visit("Arun"), visit("Arun")]

    assert rollup_workers(visits)[0].conversion_rate == 33


def test_find_rollup_matches_normalized_name(sample_visits):
    rollups = rollup_workers(sample_visits)

    assert find_rollup(rollups, "  ARUN").name == "Arun"
    assert find_rollup(rollups, "Meera") is None


def test_filter_all_with_empty_search_returns_everything(sample_visits):
    assert filter_visits(sample_visits, "all", "") == sample_visits


def test_filter_by_status(sample_visits):
    converted = filter_visits(sample_visits, VisitStatus.CONVERTED)

    assert {v.client_name for v in converted} == {"Acme Traders", "Metro Tiles"}
    assert filter_visits(sample_visits, "rejected")[0].client_name == "Sunrise Paints"


@pytest.mark.parametrize(
    "term, expected",
    [
        ("BLUE hard", {"Blue Hardware"}),
        ("arun", {"Metro Tiles"}),
        ("98765000", {"Acme Traders"}),
        ("metrotiles.COM", {"Metro Tiles"}),
    ],
)
def test_search_is_case_insensitive_across_fields(sample_visits, term, expected):
    assert {v.client_name for v in filter_visits(sample_visits, "all", term)} == expected


def test_search_combines_with_status(sample_visits):
    assert filter_visits(sample_visits, "follow_up", "jane")[0].client_name == "Blue Hardware"
    assert filter_visits(sample_visits, "rejected", "arun") == []


def test_filter_is_idempotent(sample_visits):
    once = filter_visits(sample_visits, "converted", "a")

    assert filter_visits(once, "converted", "a") == once


def test_filter_does_not_mutate_input(sample_visits):
    snapshot = list(sample_visits)

    filter_visits(sample_visits, "converted", "zzz")

    assert sample_visits == snapshot


def test_unknown_status_filter_is_rejected(sample_visits):
    with pytest.raises(ValidationError):
        filter_visits(sample_visits, "archived")


def test_visits_for_worker_uses_normalized_names(sample_visits):
    assert len(visits_for_worker(sample_visits, "jane")) == 3
    assert len(visits_for_worker(sample_visits, "Jane", limit=2)) == 2
    assert visits_for_worker(sample_visits, "unknown")[0].client_name == "Walk-in"
