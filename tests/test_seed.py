"""
Tests for the seed loader and the GET /load endpoint.
"""

import httpx
import pytest

from swift_backend.services.seed_service import LOAD_SUCCESS_MESSAGE, SeedLoader


def collection_sizes(fake_database):
    return {name: len(fake_database[name].documents) for name in ("users", "posts", "comments")}


@pytest.mark.asyncio
async def test_load_data_populates_collections(app, fake_database, source_api):
    loader: SeedLoader = app.state.seed_loader

    result = await loader.load_data()

    assert result == {"message": LOAD_SUCCESS_MESSAGE}
    assert collection_sizes(fake_database) == {"users": 3, "posts": 3, "comments": 4}
    assert sorted(source_api.calls) == ["/comments", "/posts", "/users"]


@pytest.mark.asyncio
async def test_load_data_projects_records(app, fake_database):
    await app.state.seed_loader.load_data()

    leanne = next(doc for doc in fake_database["users"].documents if doc["id"] == 1)
    assert "favouriteColour" not in leanne
    assert leanne["address"]["geo"] == {"lat": -37.3159, "lng": 81.1496}
    assert leanne["company"]["catchPhrase"] == "Multi-layered client-server neural-net"

    post = next(doc for doc in fake_database["posts"].documents if doc["id"] == 2)
    assert set(post) - {"_id"} == {"id", "userId", "title", "body"}

    comment = fake_database["comments"].documents[0]
    assert set(comment) - {"_id"} == {"id", "postId", "name", "email", "body"}


@pytest.mark.asyncio
async def test_seeding_twice_is_idempotent(client, fake_database):
    first = await client.get("/load")
    second = await client.get("/load")

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json() == {"message": "Data loaded successfully"}
    assert collection_sizes(fake_database) == {"users": 3, "posts": 3, "comments": 4}
    user_ids = [doc["id"] for doc in fake_database["users"].documents]
    assert sorted(user_ids) == [1, 2, 3]


@pytest.mark.asyncio
async def test_seeding_reflects_latest_source_data(client, fake_database, source_data):
    await client.get("/load")
    source_data["users"] = source_data["users"][:1]

    await client.get("/load")

    assert len(fake_database["users"].documents) == 1


@pytest.mark.asyncio
async def test_seeding_replaces_manually_created_users(client, fake_database):
    await client.put("/users", json={"id": 50, "name": "Temp", "username": "temp", "email": "temp@example.com"})

    await client.get("/load")

    assert all(doc["id"] != 50 for doc in fake_database["users"].documents)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failed_path, failure",
    [
        ("/posts", httpx.Response(503, text="Service Unavailable")),
        ("/comments", httpx.Response(200, text="<html>not json</html>")),
        ("/users", httpx.Response(200, json={"users": []})),
    ],
)
async def test_load_failure_leaves_existing_data(client, fake_database, source_api, failed_path, failure):
    await client.get("/load")
    before = collection_sizes(fake_database)
    source_api.failures[failed_path] = failure

    response = await client.get("/load")

    assert response.status_code == 500
    assert set(response.json()) == {"error"}
    assert response.json()["error"]
    assert collection_sizes(fake_database) == before


@pytest.mark.asyncio
async def test_load_network_error_returns_error_result(app, fake_database, settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    loader = SeedLoader(app.state.db_manager, settings, transport=httpx.MockTransport(handler))

    result = await loader.load_data()

    assert set(result) == {"error"}
    assert "connection refused" in result["error"]
    assert collection_sizes(fake_database) == {"users": 0, "posts": 0, "comments": 0}


@pytest.mark.asyncio
async def test_load_with_empty_source_collection(app, fake_database, source_data):
    source_data["comments"] = []

    result = await app.state.seed_loader.load_data()

    assert result == {"message": LOAD_SUCCESS_MESSAGE}
    assert collection_sizes(fake_database) == {"users": 3, "posts": 3, "comments": 0}


@pytest.mark.asyncio
async def test_load_with_malformed_record_keeps_collections(client, fake_database, source_data):
    await client.get("/load")
    source_data["posts"].append({"id": "not-a-number", "userId": 1})

    response = await client.get("/load")

    assert response.status_code == 500
    assert collection_sizes(fake_database) == {"users": 3, "posts": 3, "comments": 4}
