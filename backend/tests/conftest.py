"""
Shared fixtures: an in-memory stand-in for the Mongo collections, bearer
tokens, and a mockable upstream for the Google/GitHub proxies.
"""

import sys
from datetime import datetime, timedelta
from itertools import count
from pathlib import Path

import httpx
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from jose import jwt
from pymongo.errors import DuplicateKeyError

# Allow importing from backend/mappr
sys.path.insert(0, str(Path(__file__).parent.parent))

from mappr.core.config import JWT_ALGORITHM, JWT_SECRET  # noqa: E402
from mappr.db import database  # noqa: E402
from mappr.main import app  # noqa: E402

_REAL_ASYNC_CLIENT = httpx.AsyncClient


def _matches(doc: dict, query: dict) -> bool:
    for key, expected in query.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in expected):
                return False
            continue
        value = doc.get(key)
        if isinstance(expected, dict) and "$in" in expected:
            if value not in expected["$in"]:
                return False
        elif value != expected:
            return False
    return True


class _Result:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


class FakeCursor:
    def __init__(self, docs: list[dict]):
        self._docs = docs

    def sort(self, key: str, direction: int = 1):
        # Stable sort; ties keep insertion order
        self._docs = sorted(
            self._docs, key=lambda d: d.get(key) or datetime.min, reverse=direction < 0
        )
        return self

    async def to_list(self, length=None):
        return [dict(d) for d in self._docs]


class FakeCollection:
    """The subset of the motor collection API the routers use."""

    def __init__(self, unique: tuple[str, ...] | None = None):
        self.docs: list[dict] = []
        self._unique = unique
        self._tick = count()

    async def find_one(self, query: dict):
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    def find(self, query: dict | None = None):
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    async def insert_one(self, doc: dict):
        if self._unique and any(
            all(d.get(k) == doc.get(k) for k in self._unique) for d in self.docs
        ):
            raise DuplicateKeyError("duplicate key")
        stored = dict(doc)
        stored.setdefault("_id", ObjectId())
        # Keep created_at strictly increasing so sort order is deterministic
        if "created_at" in stored:
            stored["created_at"] = datetime(2025, 1, 1) + timedelta(seconds=next(self._tick))
        self.docs.append(stored)
        doc["_id"] = stored["_id"]
        return _Result(inserted_id=stored["_id"])

    async def update_one(self, query: dict, update: dict):
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(update.get("$set", {}))
                return _Result(modified_count=1)
        return _Result(modified_count=0)

    async def update_many(self, query: dict, update: dict):
        hits = [d for d in self.docs if _matches(d, query)]
        for doc in hits:
            doc.update(update.get("$set", {}))
        return _Result(modified_count=len(hits))

    async def delete_one(self, query: dict):
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return _Result(deleted_count=1)
        return _Result(deleted_count=0)

    async def delete_many(self, query: dict):
        before = len(self.docs)
        self.docs = [d for d in self.docs if not _matches(d, query)]
        return _Result(deleted_count=before - len(self.docs))


class FakeDatabase:
    def __init__(self):
        self.trips = FakeCollection()
        self.collaborators = FakeCollection(unique=("trip_id", "user_id"))
        self.pins = FakeCollection()
        self.categories = FakeCollection()
        self.list_items = FakeCollection()


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDatabase()
    monkeypatch.setattr(database, "_database", db)
    return db


@pytest.fixture
def client():
    return TestClient(app)


def make_token(user_id: str, **claims) -> str:
    payload = {"sub": user_id, "exp": datetime.utcnow() + timedelta(hours=1), **claims}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def upstream(monkeypatch):
    """
    Route every httpx.AsyncClient request to a handler set by the test:
        upstream.handler = lambda request: httpx.Response(200, json={...})
    Requests seen are kept in upstream.requests.
    """

    class Upstream:
        handler = None
        requests: list[httpx.Request] = []

    state = Upstream()
    state.requests = []

    def dispatch(request: httpx.Request) -> httpx.Response:
        state.requests.append(request)
        return state.handler(request)

    def make_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(dispatch)
        return _REAL_ASYNC_CLIENT(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", make_client)
    return state


@pytest.fixture
def maps_key(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "test-maps-key")
    return "test-maps-key"
