"""Keyset pagination over Sanity-style document collections with draft/published overlay."""

from docpager.schemas.pagination import PaginatorOptions
from docpager.services.memory_executor import InMemoryExecutor
from docpager.services.paginator import Paginator, create_paginated_query
from docpager.services.sanity_client import SanityExecutor, SanityQueryError
from docpager.version import __version__

__all__ = [
    "InMemoryExecutor",
    "Paginator",
    "PaginatorOptions",
    "SanityExecutor",
    "SanityQueryError",
    "__version__",
    "create_paginated_query",
]
