"""Minimal MongoDB helpers shared across domain repositories.

Example usage in a domain repository:

    from db_core import get_db

    async def list_ideas():
        db = get_db()
        cursor = db["ideas"].find({}).sort("order", 1)
        return await cursor.to_list(length=None)
"""

from .settings import MongoSettings, settings
from .mongo import check_connection, get_mongo_client, get_db, ping

__all__ = [
    "MongoSettings",
    "settings",
    "check_connection",
    "get_mongo_client",
    "get_db",
    "ping",
]
