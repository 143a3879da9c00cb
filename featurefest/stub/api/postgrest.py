"""The small subset of PostgREST query syntax the stub understands.

- ``column=eq.<value>`` equality filters
- ``order=col.desc,col2.asc``
- ``select=*``
- ``Prefer: return=representation`` on writes
"""

from collections.abc import Mapping
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy import ColumnElement

_RESERVED_PARAMS = {"select", "order"}


class PostgrestError(HTTPException):
    """HTTP error rendered as a PostgREST error body."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.details = details
        self.hint = hint


def eq_filters(request: Request, columns: Mapping[str, ColumnElement]) -> list[ColumnElement]:
    """Translate ``col=eq.value`` query parameters into WHERE clauses."""
    clauses = []
    for name, raw in request.query_params.multi_items():
        if name in _RESERVED_PARAMS:
            continue
        column = columns.get(name)
        if column is None:
            raise PostgrestError(
                400, f"Could not find the '{name}' column", code="PGRST204"
            )
        operator, sep, value = raw.partition(".")
        if operator != "eq" or not sep:
            raise PostgrestError(
                400,
                f'"failed to parse filter ({raw})" (line 1, column 1)',
                code="PGRST100",
                hint="Only eq filters are supported",
            )
        clauses.append(column == value)
    return clauses


def order_by(request: Request, columns: Mapping[str, ColumnElement]) -> list[Any]:
    raw = request.query_params.get("order")
    if not raw:
        return []

    terms = []
    for term in raw.split(","):
        name, _, modifiers = term.partition(".")
        column = columns.get(name)
        if column is None:
            raise PostgrestError(400, f"Could not find the '{name}' column", code="PGRST204")
        direction = modifiers.split(".")[0] if modifiers else "asc"
        if direction not in ("asc", "desc"):
            raise PostgrestError(
                400, f'"failed to parse order ({raw})" (line 1, column 1)', code="PGRST100"
            )
        terms.append(column.desc() if direction == "desc" else column.asc())
    return terms


def check_select(request: Request) -> None:
    raw = request.query_params.get("select")
    if raw not in (None, "*"):
        raise PostgrestError(400, "Only select=* is supported", code="PGRST100")


def wants_representation(request: Request) -> bool:
    return "return=representation" in request.headers.get("prefer", "")


def write_response(request: Request, rows: list[dict], status_code: int) -> Response:
    """201/200 with the affected rows when asked for them, otherwise an empty body."""
    if wants_representation(request):
        return JSONResponse(status_code=status_code, content=rows)
    return Response(status_code=204 if status_code == 200 else status_code)
