from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, form_data, handle_errors
from ..core.constants import DASHBOARD_STATE_KEY
from ..container import Container
from ..visits.presenters import activity_row, visit_row
from .aggregation import StatusTally, WorkerRollup, parse_status_filter
from .state import DashboardState, apply_action


def _tally_body(t: StatusTally) -> dict:
    return {
        "follow_up": t.follow_up,
        "converted": t.converted,
        "rejected": t.rejected,
        "total": t.total,
        "total_revenue": t.total_revenue,
    }


def _rollup_body(r: WorkerRollup) -> dict:
    return {
        "name": r.name,
        "phone": r.phone,
        "total": r.total,
        "converted": r.converted,
        "follow_up": r.follow_up,
        "rejected": r.rejected,
        "conversion_rate": r.conversion_rate,
    }


def _load_state() -> DashboardState:
    return DashboardState.from_dict(session.get(DASHBOARD_STATE_KEY))


def _save_state(state: DashboardState) -> DashboardState:
    session[DASHBOARD_STATE_KEY] = state.to_dict()
    return state


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @admin_required
    @handle_errors
    def dashboard():
        overview = container.dashboard_service.overview()
        return jsonify(
            {
                "stats": _tally_body(overview.tally),
                "personnel": [_rollup_body(r) for r in overview.personnel],
                "state": _load_state().to_dict(),
            }
        )

    @app.route("/dashboard/state", methods=["POST"], endpoint="dashboard_state")
    @admin_required
    @handle_errors
    def dashboard_state():
        data = form_data()
        state = _save_state(apply_action(_load_state(), str(data.get("action") or ""), data))
        return jsonify({"state": state.to_dict()})

    @app.route("/visits", methods=["GET"], endpoint="list_visits")
    @admin_required
    @handle_errors
    def list_visits():
        state = _load_state()
        if "status" in request.args:
            status = request.args.get("status", "")
            parse_status_filter(status)
            state = state.open_card(status)
        if "search" in request.args:
            state = state.with_search(request.args.get("search", ""))
        _save_state(state)

        table = container.dashboard_service.table(state)
        return jsonify(
            {
                "visits": [visit_row(v) for v in table.rows],
                "count": len(table.rows),
                "show_email": table.show_email,
                "show_budget": table.show_budget,
                "state": state.to_dict(),
            }
        )

    @app.route("/visits/<visit_id>", methods=["GET"], endpoint="visit_detail")
    @admin_required
    @handle_errors
    def visit_detail(visit_id: str):
        detail = container.dashboard_service.visit_detail(visit_id)
        return jsonify(
            {
                "visit": visit_row(detail.visit),
                "activities": [activity_row(a) for a in detail.activities],
                "activities_error": detail.activities_error,
            }
        )

    @app.route("/workers", methods=["GET"], endpoint="workers")
    @admin_required
    @handle_errors
    def workers():
        return jsonify({"workers": [_rollup_body(r) for r in container.dashboard_service.workers()]})

    @app.route("/workers/<path:name>", methods=["GET"], endpoint="worker_profile")
    @admin_required
    @handle_errors
    def worker_profile(name: str):
        profile = container.dashboard_service.worker_profile(name)
        _save_state(_load_state().select_worker(profile.rollup.name))
        return jsonify(
            {
                "worker": _rollup_body(profile.rollup),
                "recent_visits": [visit_row(v) for v in profile.recent],
            }
        )
