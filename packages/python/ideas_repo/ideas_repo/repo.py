"""Async persistence layer for ideas and their board ordering."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from loguru import logger
from pymongo import ReturnDocument, UpdateOne

from db_core import get_db, get_mongo_client, settings as mongo_settings
from db_core.typing import MongoDocument

from .errors import DuplicateTitleError, IdeaNotFoundError, InvalidIdeaError
from .models import Idea, IdeaCreate, IdeaUpdate, TitleValidation

COLLECTION_NAME = "ideas"

# Keys that may not be cleared through an update.
_NON_NULLABLE_UPDATE_KEYS = ("content", "dimensions", "sub_ideas", "order")
_NON_NULLABLE_DIMENSION_KEYS = ("field", "readiness", "complexity")


def _collection():
    return get_db()[COLLECTION_NAME]


def _now() -> datetime:
    return datetime.now(UTC)


def _doc_to_model(doc: MongoDocument) -> Idea:
    payload = {key: value for key, value in doc.items() if key != "_id"}
    payload["id"] = str(doc.get("_id") or doc["id"])
    return Idea.model_validate(payload)


async def _fetch_idea_doc(idea_id: str) -> dict:
    doc = await _collection().find_one({"_id": idea_id})
    if not doc:
        raise IdeaNotFoundError(f"Idea {idea_id} not found")
    return doc


async def _find_title_conflict(title: str, exclude_id: Optional[str] = None) -> Optional[dict]:
    """Return the first idea using ``title`` whose id differs from ``exclude_id``."""

    cursor = _collection().find({"title": title})
    async for doc in cursor:
        if exclude_id is None or str(doc["_id"]) != exclude_id:
            return doc
    return None


async def _next_order() -> int:
    """One more than the highest ``order`` across all ideas, or 1 for an empty store."""

    cursor = _collection().find({}).sort("order", -1).limit(1)
    docs = await cursor.to_list(length=1)
    if docs:
        return int(docs[0].get("order", 0)) + 1
    return 1


async def list_ideas() -> List[Idea]:
    """Return every idea sorted ascending by ``order``."""

    cursor = _collection().find({}).sort("order", 1)
    docs = [doc async for doc in cursor]
    return [_doc_to_model(doc) for doc in docs]


async def get_idea(idea_id: str) -> Idea:
    doc = await _fetch_idea_doc(idea_id)
    return _doc_to_model(doc)


async def create_idea(payload: IdeaCreate) -> Idea:
    """
    Persist a new idea at the end of the global ordering.

    The title check and the "next order" read are separate queries from the
    insert, so two concurrent creates may both pass them.
    """

    if not payload.title or not payload.content:
        raise InvalidIdeaError("Title and content are required")

    if await _find_title_conflict(payload.title):
        raise DuplicateTitleError("Title already exists")

    order = await _next_order()
    now = _now()
    doc: Dict[str, Any] = {
        "_id": uuid4().hex,
        **payload.model_dump(),
        "order": order,
        "createdAt": now,
        "updatedAt": now,
    }
    await _collection().insert_one(doc)
    logger.info("Created idea {idea_id} with order {order}", idea_id=doc["_id"], order=order)
    return _doc_to_model(doc)


def _flatten_update(payload: IdeaUpdate) -> Dict[str, Any]:
    """Translate a partial update into ``$set`` fields, merging nested dimensions."""

    changes = payload.model_dump(exclude_unset=True)
    for key in _NON_NULLABLE_UPDATE_KEYS:
        if key in changes and changes[key] is None:
            changes.pop(key)

    dimensions = changes.pop("dimensions", None) or {}
    fields = dict(changes)
    for key, value in dimensions.items():
        # Only the connection may be cleared with null.
        if value is None and key in _NON_NULLABLE_DIMENSION_KEYS:
            continue
        fields[f"dimensions.{key}"] = value
    return fields


async def update_idea(idea_id: str, payload: IdeaUpdate) -> Idea:
    """
    Apply a partial update and refresh ``updatedAt``.

    ``order`` is only rewritten when the payload carries it, so moving an idea
    to another readiness column keeps its previous position value.
    """

    await _fetch_idea_doc(idea_id)

    fields = _flatten_update(payload)
    if "title" in fields:
        if not fields["title"]:
            raise InvalidIdeaError("Title cannot be empty")
        if await _find_title_conflict(fields["title"], exclude_id=idea_id):
            raise DuplicateTitleError("Title already exists")

    fields["updatedAt"] = _now()
    doc = await _collection().find_one_and_update(
        {"_id": idea_id},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise IdeaNotFoundError(f"Idea {idea_id} not found")

    logger.debug("Updated idea {idea_id}: {keys}", idea_id=idea_id, keys=sorted(fields))
    return _doc_to_model(doc)


async def delete_idea(idea_id: str) -> None:
    """
    Hard-delete an idea.

    Ideas pointing at it through ``potentially_connected_idea`` are left as they
    are; readers must tolerate the dangling id.
    """

    result = await _collection().delete_one({"_id": idea_id})
    if result.deleted_count == 0:
        raise IdeaNotFoundError(f"Idea {idea_id} not found")
    logger.info("Deleted idea {idea_id}", idea_id=idea_id)


async def reorder_ideas(idea_ids: Sequence[str]) -> int:
    """
    Assign ``order = position + 1`` to every id in ``idea_ids`` in one batch.

    Either all ideas are updated or none are: an unknown id aborts the whole
    batch with ``IdeaNotFoundError``. Returns the number of ideas written.
    """

    ids = list(idea_ids)
    if not ids:
        return 0

    now = _now()
    requests = [
        UpdateOne({"_id": idea_id}, {"$set": {"order": index + 1, "updatedAt": now}})
        for index, idea_id in enumerate(ids)
    ]
    collection = _collection()

    if mongo_settings.transactions:
        client = get_mongo_client()
        async with await client.start_session() as session:
            async with session.start_transaction():
                result = await collection.bulk_write(requests, ordered=True, session=session)
                # Raising inside the block aborts the transaction.
                if result.matched_count != len(requests):
                    raise IdeaNotFoundError("One or more ideas in the reorder batch do not exist")
    else:
        unique_ids = list(dict.fromkeys(ids))
        existing = await collection.count_documents({"_id": {"$in": unique_ids}})
        if existing != len(unique_ids):
            raise IdeaNotFoundError("One or more ideas in the reorder batch do not exist")
        await collection.bulk_write(requests, ordered=True)

    logger.info("Reordered {count} ideas", count=len(ids))
    return len(ids)


async def validate_title(title: str, exclude_id: Optional[str] = None) -> TitleValidation:
    """Check whether ``title`` is free, ignoring the idea ``exclude_id`` itself."""

    if not title:
        raise InvalidIdeaError("Title is required")

    conflict = await _find_title_conflict(title, exclude_id=exclude_id)
    if conflict is None:
        return TitleValidation(is_valid=True)
    return TitleValidation(
        is_valid=False,
        conflicting_id=str(conflict["_id"]),
        conflicting_title=conflict.get("title"),
    )
