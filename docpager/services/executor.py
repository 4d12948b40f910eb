"""Query executor contract used by the paginator."""

from typing import Protocol, runtime_checkable

from docpager.schemas.query import Document, QueryDescription


@runtime_checkable
class QueryExecutor(Protocol):
    """Runs a QueryDescription in one round trip.

    Contract:
        - apply the overlay rule over the whole source before filter, cursor and window
        - return rows in exactly the order given by `description.sort`
        - window is offset/limit over the already sorted, already resolved sequence
        - transport errors propagate unchanged; no retry
    """

    async def execute(self, description: QueryDescription) -> list[Document]:
        """Return the ordered, windowed documents."""
        ...

    async def count(self, description: QueryDescription) -> int:
        """Return the number of matching logical documents (window ignored)."""
        ...
