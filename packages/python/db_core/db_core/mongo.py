"""Async MongoDB helpers built on top of Motor.

Only generic utilities live here; domain repositories import these helpers and
build their own queries and error handling on top."""

from functools import lru_cache
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import MongoClient

from .settings import settings


@lru_cache
def get_mongo_client() -> AsyncIOMotorClient:
    """Return a cached Motor client configured via ``db_core.settings``."""

    return AsyncIOMotorClient(
        settings.uri,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        tz_aware=True,
    )


def get_db() -> AsyncIOMotorDatabase:
    """Return the main application database defined by ``settings.db_name``."""

    client = get_mongo_client()
    return client[settings.db_name]


async def ping() -> dict[str, Any]:
    """Run a simple ``ping`` command against the configured MongoDB server."""

    db = get_db()
    await db.command("ping")
    return {"ok": True}


def check_connection() -> None:
    """Blocking ``ping`` used before the event loop starts.

    Raises the underlying pymongo error when the server is unreachable.
    """

    client: MongoClient = MongoClient(
        settings.uri,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )
    try:
        client.admin.command("ping")
    finally:
        client.close()
