"""Shared pytest fixtures: an in-memory stand-in for the Motor database."""

from __future__ import annotations

import copy
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

_MISSING = object()


def _get_path(doc: dict, path: str) -> Any:
    current: Any = doc
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _set_path(doc: dict, path: str, value: Any) -> None:
    parts = path.split(".")
    current = doc
    for part in parts[:-1]:
        current = current.setdefault(part, {})
    current[parts[-1]] = value


def _matches(doc: dict, query: Dict[str, Any]) -> bool:
    for key, expected in query.items():
        actual = _get_path(doc, key)
        if isinstance(expected, dict) and "$in" in expected:
            if actual is _MISSING or actual not in expected["$in"]:
                return False
        elif actual is _MISSING or actual != expected:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: List[dict]):
        self._docs = docs
        self._limit: Optional[int] = None

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs.sort(key=lambda doc: doc.get(key, 0), reverse=direction < 0)
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._limit = count
        return self

    def _results(self) -> List[dict]:
        docs = self._docs if self._limit is None else self._docs[: self._limit]
        return [copy.deepcopy(doc) for doc in docs]

    async def to_list(self, length: Optional[int] = None) -> List[dict]:
        docs = self._results()
        return docs if length is None else docs[:length]

    def __aiter__(self):
        self._iter = iter(self._results())
        return self

    async def __anext__(self) -> dict:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    def __init__(self):
        self.docs: Dict[str, dict] = {}
        self.fail_with: Optional[Exception] = None
        self.bulk_sessions: List[Any] = []

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        self._check_failure()
        query = query or {}
        return FakeCursor([doc for doc in self.docs.values() if _matches(doc, query)])

    async def find_one(self, query: Dict[str, Any]) -> Optional[dict]:
        self._check_failure()
        for doc in self.docs.values():
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc: dict):
        self._check_failure()
        if doc["_id"] in self.docs:
            raise DuplicateKeyError(f"duplicate _id {doc['_id']}")
        self.docs[doc["_id"]] = copy.deepcopy(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    def _apply_update(self, query: Dict[str, Any], update: Dict[str, Any]) -> Optional[dict]:
        for doc in self.docs.values():
            if _matches(doc, query):
                for path, value in update.get("$set", {}).items():
                    _set_path(doc, path, copy.deepcopy(value))
                return doc
        return None

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        self._check_failure()
        before = await self.find_one(query)
        after = self._apply_update(query, update)
        if return_document == ReturnDocument.AFTER:
            return copy.deepcopy(after)
        return before

    async def delete_one(self, query: Dict[str, Any]):
        self._check_failure()
        for key, doc in list(self.docs.items()):
            if _matches(doc, query):
                del self.docs[key]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def count_documents(self, query: Dict[str, Any]) -> int:
        self._check_failure()
        return sum(1 for doc in self.docs.values() if _matches(doc, query))

    async def bulk_write(self, requests, ordered: bool = True, session=None):
        self._check_failure()
        self.bulk_sessions.append(session)
        matched = 0
        for request in requests:
            if self._apply_update(request._filter, request._doc) is not None:
                matched += 1
        return SimpleNamespace(matched_count=matched, modified_count=matched)


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeSession:
    """Snapshots every collection when a transaction starts and restores it on error."""

    def __init__(self, db: FakeDatabase):
        self._db = db
        self.committed = 0
        self.aborted = 0

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    @asynccontextmanager
    async def start_transaction(self):
        snapshot = {name: copy.deepcopy(coll.docs) for name, coll in self._db.collections.items()}
        try:
            yield self
        except BaseException:
            for name, docs in snapshot.items():
                self._db.collections[name].docs = docs
            self.aborted += 1
            raise
        self.committed += 1


class FakeMongoClient:
    def __init__(self):
        self.db = FakeDatabase()
        self.sessions: List[FakeSession] = []

    async def start_session(self) -> FakeSession:
        session = FakeSession(self.db)
        self.sessions.append(session)
        return session


@pytest.fixture
def mongo_client(monkeypatch) -> FakeMongoClient:
    """Route every repository at a fresh in-memory database."""

    import dimensions_repo.repository as dimensions_repository
    import ideas_repo.repo as ideas_repository

    client = FakeMongoClient()
    monkeypatch.setattr(ideas_repository, "get_db", lambda: client.db)
    monkeypatch.setattr(ideas_repository, "get_mongo_client", lambda: client)
    monkeypatch.setattr(ideas_repository.mongo_settings, "transactions", True)
    monkeypatch.setattr(dimensions_repository, "get_db", lambda: client.db)
    return client


@pytest.fixture
def fake_db(mongo_client: FakeMongoClient) -> FakeDatabase:
    return mongo_client.db
