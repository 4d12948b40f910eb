"""Query description handed from the paginator to a query executor."""

import re
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Document = dict[str, Any]
# Top-level document attributes only; cursor bounds and in-memory sorting read plain keys
FIELD_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*\Z")
SortDirection = Literal["asc", "desc"]
CompareOp = Literal["gt", "lt"]


def flip(direction: SortDirection) -> SortDirection:
    return "desc" if direction == "asc" else "asc"


class OverlayRule(str, Enum):
    PREFER_PUBLISHED = "prefer_published"  # hide drafts.<id> when <id> exists
    RAW = "raw"


class CursorBound(BaseModel):
    """(primary sort value, _id) of a page's first or last row."""

    model_config = ConfigDict(frozen=True)

    value: Any
    id: str


class SortSpec(BaseModel):
    """Primary sort field plus the mandatory _id tie-break."""

    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = "asc"
    id_direction: SortDirection = "asc"

    @field_validator("field")
    @classmethod
    def check_field(cls, v: str) -> str:
        if not FIELD_NAME_RE.match(v):
            raise ValueError(f"sort field must be a top-level field name, got {v!r}")
        return v

    def reversed(self) -> "SortSpec":
        """Exact reverse of this ordering (both keys flipped)."""
        return SortSpec(field=self.field, direction=flip(self.direction), id_direction=flip(self.id_direction))


class Window(BaseModel):
    """Offset/limit slice [start, end) over the sorted, resolved sequence."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "Window":
        if self.end < self.start:
            raise ValueError("window end must be >= start")
        return self


class CursorPredicate(BaseModel):
    """Keyset condition: `field op value OR (field == value AND _id id_op id)`."""

    model_config = ConfigDict(frozen=True)

    field: str
    bound: CursorBound
    op: CompareOp
    id_op: CompareOp


class QueryDescription(BaseModel):
    """Everything an executor needs for one round trip.

    `filter` is opaque to the paginator: the Sanity executor expects a GROQ
    expression string, the in-memory executor a callable taking a document.
    Executors apply `overlay` over the whole source before the filter, cursor,
    sort and window. An empty `projection` returns full documents.
    """

    model_config = ConfigDict(frozen=True)

    source: str = "*"
    filter: Any = None
    overlay: OverlayRule = OverlayRule.PREFER_PUBLISHED
    projection: tuple[str, ...] = ()
    sort: SortSpec
    window: Window | None = None
    cursor: CursorPredicate | None = None
