"""Shared pytest fixtures.

The API tests run the real App, Core and services against an in-memory
stand-in for the handful of pymongo collection calls the services make.
"""

import copy
from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from recordstore.app import App
from recordstore.config import Config
from recordstore.core.core import Core
from recordstore.core.modules.session.registry import SessionRegistry
from recordstore.web.server import create_fastapi_app


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = iter(docs)

    def __aiter__(self) -> "FakeCursor":
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._docs)
        except StopIteration:
            raise StopAsyncIteration from None


class FakeCollection:
    """Subset of AsyncCollection used by the services. Set `fail_with` to make every call raise."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.unique_fields: list[str] = []
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        self._check()
        if unique:
            self.unique_fields.extend(field for field, _ in keys)
        return "_".join(field for field, _ in keys)

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self._check()
        for field in ["_id", *self.unique_fields]:
            if any(existing.get(field) == doc.get(field) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {field}")
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        self._check()
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query or {})])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        found = next((d for d in self.docs if _matches(d, query)), None)
        return copy.deepcopy(found)

    async def find_one_and_replace(
        self, query: dict[str, Any], replacement: dict[str, Any], **_: Any
    ) -> dict[str, Any] | None:
        self._check()
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                self.docs[i] = copy.deepcopy(replacement)
                return copy.deepcopy(replacement)
        return None

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        self._check()
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self, name: str) -> None:
        self.name = name
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection(name))


class FakeAdmin:
    def __init__(self) -> None:
        self.fail_with: Exception | None = None

    async def command(self, name: str) -> dict[str, Any]:
        if self.fail_with is not None:
            raise self.fail_with
        return {"ok": 1.0, "command": name}


class FakeMongoClient:
    def __init__(self) -> None:
        self.admin = FakeAdmin()
        self.databases: dict[str, FakeDatabase] = {}
        self.closed = False

    def get_database(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase(name))

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def config():
    return Config(database_url="mongodb://localhost:27017/recordstore_test", debug=True)


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest.fixture
def database(mongo_client):
    return mongo_client.get_database("recordstore_test")


@pytest.fixture
def sessions():
    return SessionRegistry()


@pytest.fixture
def core(config, mongo_client, sessions):
    return Core(config, mongo_client=mongo_client, sessions=sessions)


@pytest.fixture
def client(config, core) -> Iterator[TestClient]:
    """HTTP client with the application lifespan running."""
    fastapi_app = create_fastapi_app(App(config, core), config)
    with TestClient(fastapi_app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def user_record():
    return {"name": "Developer", "email": "nodejs-is-awesome@gmail.com", "password": "iamnotsecure"}


@pytest.fixture
def credentials(user_record):
    return {"email": user_record["email"], "password": user_record["password"]}


@pytest.fixture
def auth_header(client, user_record):
    """authorization header of a freshly signed-up user."""
    response = client.post("/signup", json=user_record)
    assert response.status_code == 201
    return {"authorization": response.headers["authorization"]}
