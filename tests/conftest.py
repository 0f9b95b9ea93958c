"""
Shared fixtures.

MongoDB is replaced by a small in-memory collection double that understands the
filters the service issues (equality and ``$in``). The source API is replaced with
``httpx.MockTransport``; the ASGI app is driven in-process through ``httpx.ASGITransport``.
"""

import copy
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo.errors import InvalidOperation

from swift_backend.config import Settings
from swift_backend.main import create_app
from swift_backend.services.seed_service import SeedLoader

SOURCE_API_BASE_URL = "https://source.test"


class FakeDeleteResult:
    def __init__(self, deleted_count: int):
        self.deleted_count = deleted_count


class FakeInsertOneResult:
    def __init__(self, inserted_id: ObjectId):
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        documents = [copy.deepcopy(doc) for doc in self._documents]
        return documents if length is None else documents[:length]


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []

    @staticmethod
    def _matches(document: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
        for key, condition in (query or {}).items():
            if isinstance(condition, dict) and "$in" in condition:
                if key not in document or document[key] not in condition["$in"]:
                    return False
            elif key not in document or document[key] != condition:
                return False
        return True

    async def find_one(self, query: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        for document in self.documents:
            if self._matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor([doc for doc in self.documents if self._matches(doc, query)])

    async def insert_one(self, document: Dict[str, Any]) -> FakeInsertOneResult:
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return FakeInsertOneResult(document["_id"])

    async def insert_many(self, documents: List[Dict[str, Any]]) -> None:
        if not documents:
            raise InvalidOperation("documents must be a non-empty list")
        for document in documents:
            await self.insert_one(document)

    async def delete_one(self, query: Dict[str, Any]) -> FakeDeleteResult:
        for index, document in enumerate(self.documents):
            if self._matches(document, query):
                del self.documents[index]
                return FakeDeleteResult(1)
        return FakeDeleteResult(0)

    async def delete_many(self, query: Dict[str, Any]) -> FakeDeleteResult:
        kept = [doc for doc in self.documents if not self._matches(doc, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return FakeDeleteResult(deleted)


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


@pytest.fixture
def source_data() -> Dict[str, List[Dict[str, Any]]]:
    """Source API payloads; tests may mutate them before calling /load."""
    return {
        "users": [
            {
                "id": 1,
                "name": "Leanne Graham",
                "username": "Bret",
                "email": "Sincere@april.biz",
                "address": {
                    "street": "Kulas Light",
                    "suite": "Apt. 556",
                    "city": "Gwenborough",
                    "zipcode": "92998-3874",
                    "geo": {"lat": "-37.3159", "lng": "81.1496"},
                },
                "phone": "1-770-736-8031 x56442",
                "website": "hildegard.org",
                "company": {
                    "name": "Romaguera-Crona",
                    "catchPhrase": "Multi-layered client-server neural-net",
                    "bs": "harness real-time e-markets",
                },
                "favouriteColour": "teal",
            },
            {
                "id": 2,
                "name": "Ervin Howell",
                "username": "Antonette",
                "email": "Shanna@melissa.tv",
                "phone": "010-692-6593 x09125",
                "website": "anastasia.net",
            },
            {
                "id": 3,
                "name": "Clementine Bauch",
                "username": "Samantha",
                "email": "Nathan@yesenia.net",
            },
        ],
        "posts": [
            {"id": 1, "userId": 1, "title": "sunt aut facere", "body": "quia et suscipit"},
            {"id": 2, "userId": 1, "title": "qui est esse", "body": "est rerum tempore", "draft": True},
            {"id": 3, "userId": 2, "title": "ea molestias", "body": "et iusto sed"},
        ],
        "comments": [
            {"id": 1, "postId": 1, "name": "id labore", "email": "Eliseo@gardner.biz", "body": "laudantium"},
            {"id": 2, "postId": 1, "name": "quo vero", "email": "Jayne_Kuhic@sydney.com", "body": "est natus"},
            {"id": 3, "postId": 2, "name": "odio adipisci", "email": "Nikita@garfield.biz", "body": "quia molestiae"},
            {"id": 4, "postId": 3, "name": "alias odio", "email": "Lew@alysha.tv", "body": "non et atque"},
        ],
    }


@pytest.fixture
def source_api(source_data):
    """MockTransport serving `source_data`; `failures` maps a path to a forced response."""

    failures: Dict[str, httpx.Response] = {}
    calls: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        calls.append(path)
        if path in failures:
            return failures[path]
        name = path.strip("/")
        if name in source_data:
            return httpx.Response(200, json=source_data[name])
        return httpx.Response(404, json={})

    transport = httpx.MockTransport(handler)
    transport.failures = failures
    transport.calls = calls
    return transport


@pytest.fixture
def settings() -> Settings:
    return Settings(
        MONGODB_URL="mongodb://localhost:27017",
        MONGODB_DATABASE="swift-backend-test",
        SOURCE_API_BASE_URL=SOURCE_API_BASE_URL,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def app(settings, fake_database, source_api):
    application = create_app(settings)
    db_manager = application.state.db_manager
    db_manager.client = MagicMock()
    db_manager.database = fake_database
    application.state.seed_loader = SeedLoader(db_manager, settings, transport=source_api)
    return application


@pytest_asyncio.fixture
async def client(app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as test_client:
        yield test_client
