"""Paginator configuration."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docpager.schemas.query import FIELD_NAME_RE, SortDirection


class PaginatorOptions(BaseModel):
    """Fixed at construction: filter, projection, sort and page size for one paginated listing."""

    model_config = ConfigDict(frozen=True)

    filter: Any = None
    projection: tuple[str, ...] = ()
    sort_field: str = Field(min_length=1)
    direction: SortDirection = "asc"
    page_size: int = Field(gt=0, description="Documents per page")
    source: str = Field(default="*", min_length=1)

    @field_validator("projection", mode="before")
    @classmethod
    def split_projection(cls, v: Any) -> Any:
        # Accept "order, _id" as well as any iterable of field names
        if isinstance(v, str):
            return tuple(part.strip() for part in v.split(",") if part.strip())
        if isinstance(v, (set, frozenset)):
            return tuple(sorted(v))
        return v

    @field_validator("sort_field")
    @classmethod
    def check_sort_field(cls, v: str) -> str:
        if not FIELD_NAME_RE.match(v):
            raise ValueError(f"sort_field must be a top-level field name, got {v!r}")
        return v

    @field_validator("projection")
    @classmethod
    def check_projection(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        bad = [name for name in v if not FIELD_NAME_RE.match(name)]
        if bad:
            raise ValueError(f"projection must list top-level field names, got {bad!r}")
        return v

    @property
    def effective_projection(self) -> tuple[str, ...]:
        """Projection with _id and the sort field added; cursor bounds are read from them."""
        if not self.projection:
            return ()
        fields = list(self.projection)
        for required in ("_id", self.sort_field):
            if required not in fields:
                fields.append(required)
        return tuple(fields)
