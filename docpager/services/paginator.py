"""
Keyset (cursor) pagination over a filtered, sorted document listing.

get_page(n) is offset based; next_page()/previous_page() continue from the bounds of
the last fetched page, so their cost does not grow with the page index. Rows are
totally ordered by (sort field, _id), which keeps the cursor from skipping or
repeating rows whose sort values collide at a page boundary.

A Paginator is not safe for concurrent use: await each call before issuing the next,
or create one Paginator per navigation stream.
"""
import logging
from typing import Any

from docpager.config import settings
from docpager.schemas.pagination import PaginatorOptions
from docpager.schemas.query import (
    CursorBound,
    CursorPredicate,
    Document,
    OverlayRule,
    QueryDescription,
    SortDirection,
    SortSpec,
    Window,
)
from docpager.services.executor import QueryExecutor

logger = logging.getLogger(__name__)


class Paginator:
    def __init__(self, executor: QueryExecutor, options: PaginatorOptions) -> None:
        self._executor = executor
        self._options = options
        self._current_page: int | None = None
        self._lower_bound: CursorBound | None = None
        self._upper_bound: CursorBound | None = None

    @property
    def options(self) -> PaginatorOptions:
        return self._options

    @property
    def current_page(self) -> int | None:
        """Best-effort page index; advisory only, never used for windowing."""
        return self._current_page

    @property
    def lower_bound(self) -> CursorBound | None:
        return self._lower_bound

    @property
    def upper_bound(self) -> CursorBound | None:
        return self._upper_bound

    def _sort(self) -> SortSpec:
        return SortSpec(field=self._options.sort_field, direction=self._options.direction, id_direction="asc")

    def _describe(
        self,
        *,
        window: Window | None,
        sort: SortSpec | None = None,
        cursor: CursorPredicate | None = None,
    ) -> QueryDescription:
        return QueryDescription(
            source=self._options.source,
            filter=self._options.filter,
            overlay=OverlayRule.PREFER_PUBLISHED,
            projection=self._options.effective_projection,
            sort=sort or self._sort(),
            window=window,
            cursor=cursor,
        )

    def _bound(self, document: Document) -> CursorBound:
        value = document.get(self._options.sort_field)
        if value is None:
            raise ValueError(
                f"Document {document.get('_id')!r} has no value for sort field {self._options.sort_field!r}"
            )
        return CursorBound(value=value, id=document["_id"])

    def _position(self, page: int, rows: list[Document]) -> None:
        self._current_page = page
        self._lower_bound = self._bound(rows[0])
        self._upper_bound = self._bound(rows[-1])

    async def get_page(self, page: int) -> list[Document]:
        """Fetch page `page` (0-based) by offset. Cost grows with page * page_size."""
        if isinstance(page, bool) or not isinstance(page, int) or page < 0:
            raise ValueError(f"page must be a non-negative integer, got {page!r}")
        start = page * self._options.page_size
        window = Window(start=start, end=start + self._options.page_size)
        rows = await self._executor.execute(self._describe(window=window))
        logger.debug("get_page(%s): window=[%s, %s) rows=%s", page, window.start, window.end, len(rows))
        if not rows:
            return rows
        self._position(page, rows)
        return rows

    async def next_page(self) -> list[Document]:
        """Page after the last fetched one; get_page(0) if nothing was fetched yet."""
        if self._upper_bound is None:
            return await self.get_page(0)
        direction: SortDirection = self._options.direction
        cursor = CursorPredicate(
            field=self._options.sort_field,
            bound=self._upper_bound,
            op="gt" if direction == "asc" else "lt",
            id_op="gt",
        )
        rows = await self._executor.execute(
            self._describe(window=Window(start=0, end=self._options.page_size), cursor=cursor)
        )
        logger.debug("next_page: after %s rows=%s", self._upper_bound, len(rows))
        if not rows:
            return rows
        self._position((self._current_page or 0) + 1, rows)
        return rows

    async def previous_page(self) -> list[Document]:
        """Page before the last fetched one; get_page(0) if nothing was fetched yet.

        Queries in reversed order so the window picks the rows right before the lower
        bound, then restores the configured order before returning.
        """
        if self._lower_bound is None:
            return await self.get_page(0)
        direction: SortDirection = self._options.direction
        cursor = CursorPredicate(
            field=self._options.sort_field,
            bound=self._lower_bound,
            op="lt" if direction == "asc" else "gt",
            id_op="lt",
        )
        rows = await self._executor.execute(
            self._describe(
                window=Window(start=0, end=self._options.page_size),
                sort=self._sort().reversed(),
                cursor=cursor,
            )
        )
        logger.debug("previous_page: before %s rows=%s", self._lower_bound, len(rows))
        if not rows:
            return rows
        rows = list(reversed(rows))
        self._position(max((self._current_page or 0) - 1, 0), rows)
        return rows

    async def num_pages(self) -> int:
        """ceil(logical filtered documents / page_size). Does not touch the cursor."""
        total = await self._executor.count(self._describe(window=None))
        size = self._options.page_size
        return (total + size - 1) // size


def create_paginated_query(
    executor: QueryExecutor,
    *,
    order: tuple[str, SortDirection],
    page_size: int | None = None,
    filter: Any = None,
    projection: Any = (),
    source: str = "*",
) -> Paginator:
    """Build a Paginator; `order` is (sort field, "asc" | "desc"). page_size defaults to DEFAULT_PAGE_SIZE."""
    sort_field, direction = order
    options = PaginatorOptions(
        filter=filter,
        projection=projection,
        sort_field=sort_field,
        direction=direction,
        page_size=settings.default_page_size if page_size is None else page_size,
        source=source,
    )
    return Paginator(executor, options)
