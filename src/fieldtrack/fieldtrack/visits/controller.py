from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, form_data, handle_errors, login_required
from ..core.constants import DASHBOARD_STATE_KEY
from ..container import Container
from ..dashboard.state import DashboardState
from .model import PhotoUpload, VisitDraft
from .presenters import activity_row, visit_row
from .service import SaveResult


def _photo_from_request() -> Optional[PhotoUpload]:
    storage = request.files.get("photo")
    if not storage or not storage.filename:
        return None
    return PhotoUpload(
        filename=storage.filename,
        data=storage.read(),
        content_type=storage.mimetype or None,
    )


def _result_body(result: SaveResult) -> dict:
    warnings = []
    if result.activity_error:
        warnings.append(f"Activity log not saved: {result.activity_error}")
    if result.photo_error:
        warnings.append(f"Photo not uploaded: {result.photo_error}")
    if result.location_error:
        warnings.append(f"Location not captured: {result.location_error}")

    return {
        "message": result.message,
        "visit": visit_row(result.visit),
        "activity": activity_row(result.activity) if result.activity else None,
        "activity_logged": result.activity_logged,
        "warnings": warnings,
    }


def _advance_dashboard_state() -> None:
    if DASHBOARD_STATE_KEY in session:
        state = DashboardState.from_dict(session[DASHBOARD_STATE_KEY]).after_save()
        session[DASHBOARD_STATE_KEY] = state.to_dict()


def register(app: Flask, container: Container) -> None:
    @app.route("/visits", methods=["POST"], endpoint="create_visit")
    @login_required
    @handle_errors
    def create_visit():
        draft = VisitDraft.from_form(form_data())
        result = container.visit_service.save_visit(draft, photo=_photo_from_request())
        _advance_dashboard_state()
        return jsonify(_result_body(result)), 201

    @app.route("/visits/<visit_id>", methods=["POST", "PUT"], endpoint="update_visit")
    @admin_required
    @handle_errors
    def update_visit(visit_id: str):
        draft = VisitDraft.from_form(form_data())
        result = container.visit_service.save_visit(draft, visit_id=visit_id, photo=_photo_from_request())
        _advance_dashboard_state()
        return jsonify(_result_body(result))
