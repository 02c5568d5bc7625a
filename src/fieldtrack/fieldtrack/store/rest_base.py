from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.exceptions import StoreError
from .connection import StoreConnection

_RESERVED = set(',()":')

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


def quote_value(value: Any) -> str:
    """Quote a filter value when it contains PostgREST reserved characters."""
    s = str(value)
    if any(ch in _RESERVED for ch in s):
        s = s.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{s}"'
    return s


def eq(value: Any) -> str:
    return f"eq.{quote_value(value)}"


def or_filter(**conditions: Any) -> Optional[str]:
    """Build an `or=(a.eq.x,b.eq.y)` predicate; empty conditions are skipped."""
    parts = [f"{column}.eq.{quote_value(value)}" for column, value in conditions.items() if value]
    if not parts:
        return None
    return f"({','.join(parts)})"


def _rows(resp) -> List[Dict[str, Any]]:
    if not resp.content:
        return []
    body = resp.json()
    if isinstance(body, dict):
        return [body]
    return list(body or [])


def select_rows(
    conn: StoreConnection,
    table: str,
    *,
    columns: str = "*",
    filters: Optional[Dict[str, str]] = None,
    order: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    params: Dict[str, Any] = {"select": columns}
    if filters:
        params.update(filters)
    if order:
        params["order"] = order
    if limit is not None:
        params["limit"] = int(limit)

    resp = conn.request("GET", conn.rest_url(table), params=params)
    return _rows(resp)


def insert_row(conn: StoreConnection, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    resp = conn.request(
        "POST",
        conn.rest_url(table),
        params={"select": "*"},
        json=[payload],
        headers=RETURN_REPRESENTATION,
    )
    rows = _rows(resp)
    if not rows:
        raise StoreError(f"Insert into {table} returned no rows")
    return rows[0]


def update_rows(
    conn: StoreConnection,
    table: str,
    payload: Dict[str, Any],
    *,
    filters: Dict[str, str],
) -> List[Dict[str, Any]]:
    params: Dict[str, Any] = {"select": "*"}
    params.update(filters)
    resp = conn.request(
        "PATCH",
        conn.rest_url(table),
        params=params,
        json=payload,
        headers=RETURN_REPRESENTATION,
    )
    return _rows(resp)
