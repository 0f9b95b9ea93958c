"""
# Seed Service

Populates the local `users`, `posts` and `comments` collections from the source REST API
(JSONPlaceholder by default).

## Load Sequence

Each step completes before the next begins:

1.  **Store handle**: `DatabaseManager.connect()`.
2.  **Fetch**: `/users`, `/posts` and `/comments` are requested concurrently. Any transport
    error, non-2xx status or non-array JSON body aborts the load.
3.  **Project**: every record is re-projected onto its model; unknown fields are dropped.
4.  **Clear**: the three collections are emptied concurrently.
5.  **Insert**: users, then posts, then comments.

Seeding is a full replace, so running it twice leaves one copy of each record. There is no
transaction spanning the clear and insert phases: a crash in between can leave a
collection empty.

## Usage Example

```python
loader = SeedLoader(db_manager, settings)
result = await loader.load_data()
if "error" in result:
    print(f"Seeding failed: {result['error']}")
```
"""

import asyncio
from typing import Any, Dict, List, Optional

import httpx

from swift_backend.config import Settings
from swift_backend.database import COMMENTS_COLLECTION, POSTS_COLLECTION, USERS_COLLECTION, DatabaseManager
from swift_backend.managers.logging_manager import get_logger
from swift_backend.models.user_models import Comment, Post, User

logger = get_logger(prefix="[SEED]")

LOAD_SUCCESS_MESSAGE = "Data loaded successfully"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


class SeedLoader:
    """
    Bulk import of users, posts and comments from the source API.

    Args:
        db_manager: Gateway used to reach the local collections.
        settings: Provides `SOURCE_API_BASE_URL` and `SOURCE_API_TIMEOUT`.
        transport: Optional httpx transport, used to substitute the source API.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.db_manager = db_manager
        self.base_url = settings.SOURCE_API_BASE_URL.rstrip("/")
        self.timeout = settings.SOURCE_API_TIMEOUT
        self._transport = transport

    async def load_data(self) -> Dict[str, str]:
        """
        Replace the local collections with the current source data.

        Returns:
            ``{"message": ...}`` on success, ``{"error": ...}`` on any failure.
        """
        try:
            logger.info("Connecting to MongoDB...")
            database = await self.db_manager.connect()
            users_collection = database[USERS_COLLECTION]
            posts_collection = database[POSTS_COLLECTION]
            comments_collection = database[COMMENTS_COLLECTION]

            logger.info("Fetching data from %s...", self.base_url)
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                users_raw, posts_raw, comments_raw = await asyncio.gather(
                    self._fetch_collection(client, "/users"),
                    self._fetch_collection(client, "/posts"),
                    self._fetch_collection(client, "/comments"),
                )
            logger.info(
                "Fetched %d users, %d posts, and %d comments.", len(users_raw), len(posts_raw), len(comments_raw)
            )

            users = [User.model_validate(user).to_document() for user in users_raw]
            posts = [Post.model_validate(post).to_document() for post in posts_raw]
            comments = [Comment.model_validate(comment).to_document() for comment in comments_raw]

            # Full replace: clear everything before inserting
            await asyncio.gather(
                users_collection.delete_many({}),
                posts_collection.delete_many({}),
                comments_collection.delete_many({}),
            )
            logger.info("Cleared old data.")

            await self._insert_all(users_collection, users, "users")
            await self._insert_all(posts_collection, posts, "posts")
            await self._insert_all(comments_collection, comments, "comments")

            return {"message": LOAD_SUCCESS_MESSAGE}
        except Exception as e:
            logger.error("Error loading data: %s", e, exc_info=True)
            return {"error": str(e) or UNKNOWN_ERROR_MESSAGE}

    async def _fetch_collection(self, client: httpx.AsyncClient, path: str) -> List[Dict[str, Any]]:
        response = await client.get(path)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array from {path}, got {type(data).__name__}")
        return data

    async def _insert_all(self, collection, documents: List[Dict[str, Any]], label: str) -> None:
        logger.info("Inserting %s...", label)
        # insert_many rejects an empty batch
        if documents:
            await collection.insert_many(documents)
        logger.info("Inserted %d %s.", len(documents), label)
