from __future__ import annotations

from typing import Any, Optional

from db_core import get_db

COLLECTION_NAME = "config"
DIMENSIONS_DOCUMENT_ID = "dimensions"


def _collection():
    return get_db()[COLLECTION_NAME]


async def find_dimensions_document() -> Optional[dict[str, Any]]:
    """Return the stored registry document without its ``_id``, if present."""

    doc = await _collection().find_one({"_id": DIMENSIONS_DOCUMENT_ID})
    if not doc:
        return None
    return {key: value for key, value in doc.items() if key != "_id"}
