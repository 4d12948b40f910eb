"""In-process executor over a list of documents (tests, fixtures, small local datasets)."""

import operator
from typing import Any, Callable, Iterable

from docpager.schemas.query import CursorPredicate, Document, OverlayRule, QueryDescription, SortSpec
from docpager.services.overlay import resolve_logical

_OPS: dict[str, Callable[[Any, Any], bool]] = {"gt": operator.gt, "lt": operator.lt}


class InMemoryExecutor:
    """Evaluates query descriptions against `documents`.

    Filters must be callables taking a document (or None). Only the "*" source is
    supported. The overlay is resolved over the full document list before filtering,
    so window offsets count logical documents only.
    """

    def __init__(self, documents: Iterable[Document]):
        self._documents = [dict(d) for d in documents]

    @property
    def documents(self) -> list[Document]:
        return self._documents

    async def execute(self, description: QueryDescription) -> list[Document]:
        rows = self._select(description)
        rows = _sorted(rows, description.sort)
        if description.window is not None:
            rows = rows[description.window.start:description.window.end]
        return [_project(row, description.projection) for row in rows]

    async def count(self, description: QueryDescription) -> int:
        return len(self._select(description))

    def _select(self, description: QueryDescription) -> list[Document]:
        if description.source != "*":
            raise ValueError(f"InMemoryExecutor only supports the '*' source, got {description.source!r}")
        predicate = description.filter
        if predicate is not None and not callable(predicate):
            raise ValueError(f"InMemoryExecutor filter must be callable or None, got {type(predicate).__name__}")
        rows = self._documents
        if description.overlay == OverlayRule.PREFER_PUBLISHED:
            rows = resolve_logical(rows)
        if predicate is not None:
            rows = [row for row in rows if predicate(row)]
        if description.cursor is not None:
            rows = [row for row in rows if _matches_cursor(row, description.cursor)]
        return rows


def _sort_value(document: Document, field: str) -> Any:
    if document.get(field) is None:
        raise ValueError(f"Document {document.get('_id')!r} has no value for sort field {field!r}")
    return document[field]


def _matches_cursor(document: Document, cursor: CursorPredicate) -> bool:
    value = _sort_value(document, cursor.field)
    if value == cursor.bound.value:
        return _OPS[cursor.id_op](document["_id"], cursor.bound.id)
    return _OPS[cursor.op](value, cursor.bound.value)


def _sorted(rows: list[Document], sort: SortSpec) -> list[Document]:
    # Two stable passes: tie-break key first, then primary key
    by_id = sorted(rows, key=lambda d: d["_id"], reverse=sort.id_direction == "desc")
    return sorted(by_id, key=lambda d: _sort_value(d, sort.field), reverse=sort.direction == "desc")


def _project(document: Document, projection: tuple[str, ...]) -> Document:
    if not projection:
        return dict(document)
    return {field: document[field] for field in projection if field in document}
