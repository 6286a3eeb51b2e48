"""Typing helpers shared by Mongo-backed repositories."""

from typing import Any, Mapping

# Raw documents as returned by Motor cursors.
MongoDocument = Mapping[str, Any]
