from docpager.schemas.query import Document


def ids(rows: list[Document]) -> list[str]:
    return [row["_id"] for row in rows]


def orders(rows: list[Document]) -> list[int]:
    return [row["order"] for row in rows]
