"""
Draft/published overlay: which documents of a raw set are visible.

A document whose _id starts with "drafts." shadows the published document with the
remaining suffix as _id. A draft is hidden iff that published document exists in the
raw set, so every logical identity has exactly one visible row.
"""
from typing import Iterable

from docpager.schemas.query import Document

DRAFTS_PREFIX = "drafts."


def is_draft(document_id: str) -> bool:
    return document_id.startswith(DRAFTS_PREFIX)


def published_id(document_id: str) -> str:
    """Published _id a document stands for (its own _id unless it is a draft)."""
    if is_draft(document_id):
        return document_id[len(DRAFTS_PREFIX):]
    return document_id


def is_visible(document: Document, raw_ids: set[str]) -> bool:
    """Overlay predicate for one document, given the _ids of the whole raw set."""
    doc_id = document["_id"]
    return not is_draft(doc_id) or published_id(doc_id) not in raw_ids


def resolve_logical(documents: Iterable[Document]) -> list[Document]:
    """Logical document set of `documents`, in input order."""
    raw = list(documents)
    raw_ids = {d["_id"] for d in raw}
    return [d for d in raw if is_visible(d, raw_ids)]
