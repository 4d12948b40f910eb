"""
Render a QueryDescription as a GROQ query plus parameters.

Shape (PREFER_PUBLISHED overlay):

    *[<filter> && <cursor>] | order(<field> <dir>, _id <dir>) {
      "_isDraft": _id in path("drafts.**"),
      "_publishedId": string::split(_id, "drafts.")[1],
      "document": @{<projection>}
    }[!_isDraft || count(*[_id == ^._publishedId]._id) == 0]{...document}[<start>...<end>]

The published-counterpart lookup runs against the whole dataset (`*`), not the
filtered one. Cursor values travel as $cursorValue / $cursorId parameters.
"""
from typing import Any

from docpager.schemas.query import FIELD_NAME_RE, OverlayRule, QueryDescription
from docpager.services.overlay import DRAFTS_PREFIX

_GROQ_OPS = {"gt": ">", "lt": "<"}


def _field(name: str) -> str:
    if not FIELD_NAME_RE.match(name):
        raise ValueError(f"Invalid GROQ field name: {name!r}")
    return name


def _constraints(description: QueryDescription, params: dict[str, Any]) -> str:
    parts: list[str] = []
    if description.filter is not None:
        if not isinstance(description.filter, str):
            raise ValueError(f"GROQ filter must be a string expression, got {type(description.filter).__name__}")
        if description.filter.strip():
            parts.append(f"({description.filter.strip()})")
    cursor = description.cursor
    if cursor is not None:
        field = _field(cursor.field)
        op = _GROQ_OPS[cursor.op]
        id_op = _GROQ_OPS[cursor.id_op]
        parts.append(f"({field} {op} $cursorValue || ({field} == $cursorValue && _id {id_op} $cursorId))")
        params["cursorValue"] = cursor.bound.value
        params["cursorId"] = cursor.bound.id
    return " && ".join(parts) if parts else "true"


def _projection(fields: tuple[str, ...]) -> str:
    return "{" + ", ".join(_field(f) for f in fields) + "}"


def _resolved(description: QueryDescription) -> str:
    """Overlay stage (plus projection); empty string when nothing to add."""
    if description.overlay == OverlayRule.RAW:
        return " " + _projection(description.projection) if description.projection else ""
    document = "@" + _projection(description.projection) if description.projection else "@"
    return (
        " {"
        f'"_isDraft": _id in path("{DRAFTS_PREFIX}**"), '
        f'"_publishedId": string::split(_id, "{DRAFTS_PREFIX}")[1], '
        f'"document": {document}'
        "}[!_isDraft || count(*[_id == ^._publishedId]._id) == 0]{...document}"
    )


def render_query(description: QueryDescription) -> tuple[str, dict[str, Any]]:
    """GROQ for QueryExecutor.execute."""
    params: dict[str, Any] = {}
    sort = description.sort
    query = (
        f"{description.source}[{_constraints(description, params)}]"
        f" | order({_field(sort.field)} {sort.direction}, _id {sort.id_direction})"
        f"{_resolved(description)}"
    )
    if description.window is not None:
        query += f"[{description.window.start}...{description.window.end}]"
    return query, params


def render_count(description: QueryDescription) -> tuple[str, dict[str, Any]]:
    """GROQ for QueryExecutor.count; order and window are dropped."""
    params: dict[str, Any] = {}
    query = f"count({description.source}[{_constraints(description, params)}]{_resolved(description)})"
    return query, params
