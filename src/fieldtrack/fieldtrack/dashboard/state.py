from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from ..core.constants import STATUS_ALL
from ..core.enums import DashboardView, VisitStatus
from ..core.exceptions import ValidationError
from .aggregation import parse_status_filter


@dataclass(frozen=True)
class DashboardState:
    """Admin dashboard view state.

    Immutable: each transition returns a new state. The controller keeps it in
    the user's session between requests.
    """

    view: DashboardView = DashboardView.CARDS
    status_filter: str = STATUS_ALL
    search: str = ""
    selected_worker: Optional[str] = None
    editing_visit_id: Optional[str] = None

    def open_card(self, status: str) -> "DashboardState":
        return replace(self, view=DashboardView.TABLE, status_filter=_status_or_all(status))

    def show_table(self) -> "DashboardState":
        return self.open_card(STATUS_ALL)

    def show_cards(self) -> "DashboardState":
        return replace(self, view=DashboardView.CARDS, editing_visit_id=None)

    def show_profiles(self) -> "DashboardState":
        return replace(self, view=DashboardView.PROFILES, selected_worker=None)

    def select_worker(self, name: Optional[str]) -> "DashboardState":
        return replace(self, view=DashboardView.PROFILES, selected_worker=(name or None))

    def with_search(self, search: str) -> "DashboardState":
        return replace(self, search=search or "")

    def start_add(self) -> "DashboardState":
        return replace(self, view=DashboardView.ADD_NEW, editing_visit_id=None)

    def start_edit(self, visit_id: str) -> "DashboardState":
        return replace(self, view=DashboardView.EDIT_VISIT, editing_visit_id=visit_id)

    def cancel_edit(self) -> "DashboardState":
        return replace(self, view=DashboardView.TABLE, editing_visit_id=None)

    def after_save(self) -> "DashboardState":
        # New visits land back on the cards, edits on the table.
        if self.view == DashboardView.EDIT_VISIT:
            return self.cancel_edit()
        return self.show_cards()

    def to_dict(self) -> dict:
        return {
            "view": self.view.value,
            "status_filter": self.status_filter,
            "search": self.search,
            "selected_worker": self.selected_worker,
            "editing_visit_id": self.editing_visit_id,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "DashboardState":
        if not data:
            return cls()
        try:
            view = DashboardView(data.get("view") or DashboardView.CARDS.value)
        except ValueError:
            view = DashboardView.CARDS
        return cls(
            view=view,
            status_filter=_status_or_all(data.get("status_filter")),
            search=str(data.get("search") or ""),
            selected_worker=data.get("selected_worker") or None,
            editing_visit_id=data.get("editing_visit_id") or None,
        )


def _status_or_all(value: Any) -> str:
    if isinstance(value, VisitStatus):
        return value.value
    if value in {s.value for s in VisitStatus}:
        return value
    return STATUS_ALL


def apply_action(state: DashboardState, action: str, payload: Mapping[str, Any]) -> DashboardState:
    """Dispatch a named UI action to its transition."""
    if action == "open_card":
        status = payload.get("status") or STATUS_ALL
        parse_status_filter(status)
        return state.open_card(status)
    if action == "show_table":
        return state.show_table()
    if action == "show_cards":
        return state.show_cards()
    if action == "show_profiles":
        return state.show_profiles()
    if action == "select_worker":
        return state.select_worker(payload.get("name"))
    if action == "search":
        return state.with_search(str(payload.get("search") or ""))
    if action == "add_new":
        return state.start_add()
    if action == "edit_visit":
        visit_id = str(payload.get("visit_id") or "")
        if not visit_id:
            raise ValidationError("visit_id is required")
        return state.start_edit(visit_id)
    if action == "cancel_edit":
        return state.cancel_edit()
    raise ValidationError(f"Unknown dashboard action: {action}")
