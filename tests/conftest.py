"""Pytest configuration and shared fixtures for paginator tests."""

import os

import pytest

# Keep a developer's .env / shell config out of the test settings
os.environ.setdefault("SANITY_PROJECT_ID", "test-project")
os.environ.setdefault("SANITY_DATASET", "test")

from docpager.services.memory_executor import InMemoryExecutor
from docpager.services.paginator import create_paginated_query


def is_test_type(doc: dict) -> bool:
    return doc.get("_type") == "test"


@pytest.fixture
def dataset():
    """21 logical documents in 5 pages of 5; drafts shadowed by published ids are hidden."""
    return [
        # Page 1
        {"_id": "drafts.a", "_type": "test", "order": 1},
        {"_id": "a", "_type": "test", "order": 1},
        {"_id": "drafts.b", "_type": "test", "order": 2},
        {"_id": "b", "_type": "test", "order": 2},
        {"_id": "c", "_type": "test", "order": 3},
        {"_id": "drafts.d", "_type": "test", "order": 4},
        {"_id": "drafts.e", "_type": "test", "order": 5},
        {"_id": "e", "_type": "test", "order": 5},
        # Page 2
        {"_id": "drafts.f", "_type": "test", "order": 6},
        {"_id": "f", "_type": "test", "order": 6},
        {"_id": "g", "_type": "test", "order": 7},
        {"_id": "drafts.h", "_type": "test", "order": 8},
        {"_id": "i", "_type": "test", "order": 9},
        {"_id": "drafts.i", "_type": "test", "order": 9},
        {"_id": "j", "_type": "test", "order": 10},
        # Page 3
        {"_id": "k", "_type": "test", "order": 11},
        {"_id": "l", "_type": "test", "order": 12},
        {"_id": "m", "_type": "test", "order": 13},
        {"_id": "n", "_type": "test", "order": 14},
        {"_id": "o", "_type": "test", "order": 15},
        # Page 4
        {"_id": "drafts.p", "_type": "test", "order": 16},
        {"_id": "drafts.q", "_type": "test", "order": 17},
        {"_id": "drafts.r", "_type": "test", "order": 18},
        {"_id": "drafts.s", "_type": "test", "order": 19},
        {"_id": "drafts.t", "_type": "test", "order": 20},
        # Page 5
        {"_id": "u", "_type": "test", "order": 21},
        # Filtered out
        {"_id": "other", "_type": "other", "order": 3},
    ]


@pytest.fixture
def executor(dataset):
    return InMemoryExecutor(dataset)


@pytest.fixture
def make_paginator(executor):
    """Factory over the shared dataset: make_paginator(direction="asc", page_size=5, using=None, **overrides)."""

    def _make(direction: str = "asc", page_size: int = 5, using=None, **overrides):
        kwargs = {"filter": is_test_type, "projection": "order, _id"}
        kwargs.update(overrides)
        return create_paginated_query(using or executor, order=("order", direction), page_size=page_size, **kwargs)

    return _make
