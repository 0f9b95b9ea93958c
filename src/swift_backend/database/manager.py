"""
# Database Management Module

This module provides the **MongoDB gateway** for swift-backend. The `DatabaseManager`
owns the single **Motor** client of the process and hands out collection handles for
the three collections the service works with: `users`, `posts` and `comments`.

## Connection Lifecycle

1.  **Instantiation**: `DatabaseManager(settings)` is created by `create_app()`; no I/O.
2.  **Connection**: `connect()` creates the client, pings the server and memoizes the
    database handle. The FastAPI lifespan calls it at startup; request handlers call it
    again and simply receive the memoized handle.
3.  **Operations**: `users`, `posts`, `comments` or `get_collection()`.
4.  **Shutdown**: `disconnect()` closes the client. Calling it without a connection is a no-op.

## Fail-Fast Policy

The service is unusable without storage. A missing connection string or a failed
initial connection is logged at CRITICAL and raises `SystemExit(1)`. There is no retry.

## Concurrency

The manager is designed for **asyncio** and is **not thread-safe**. The first connection
attempt is serialized with an `asyncio.Lock` and the handle is re-checked inside the lock,
so two coroutines racing through `connect()` still create exactly one client.

## Usage

```python
manager = DatabaseManager(settings)
database = await manager.connect()

user = await manager.users.find_one({"id": 1})

await manager.disconnect()
```

Attributes:
    db_logger (Logger): Logger for connection lifecycle events (`[DATABASE]`).
    perf_logger (Logger): Logger for connection timings (`[DB_PERFORMANCE]`).
"""

import asyncio
import time
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from swift_backend.config import Settings
from swift_backend.managers.logging_manager import get_logger

db_logger = get_logger(prefix="[DATABASE]")
perf_logger = get_logger(prefix="[DB_PERFORMANCE]")

USERS_COLLECTION = "users"
POSTS_COLLECTION = "posts"
COMMENTS_COLLECTION = "comments"


class DatabaseManager:
    """
    Manages the MongoDB connection and collection access.

    Attributes:
        settings (`Settings`): Application settings holding the connection string,
            database name and driver timeouts.
        client (`Optional[AsyncIOMotorClient]`): The Motor client, `None` until
            `connect()` succeeds and again after `disconnect()`.
        database (`Optional[AsyncIOMotorDatabase]`): The selected database, `None`
            until connected.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> AsyncIOMotorDatabase:
        """
        Return the live database handle, connecting on the first call.

        Returns:
            `AsyncIOMotorDatabase`: The same handle on every call within the process.

        Raises:
            `SystemExit`: If no connection string is configured or the initial connection
                attempt fails.
        """
        if self.database is not None:
            return self.database

        async with self._connect_lock:
            if self.database is not None:
                return self.database

            connection_string = self.settings.MONGODB_URL
            if not connection_string:
                db_logger.critical("MongoDB URI is missing, check MONGODB_URL / MONGO_URI")
                raise SystemExit(1)

            start_time = time.time()
            db_logger.info(
                "Connecting to MongoDB database %s (ServerTimeout: %dms, ConnTimeout: %dms)",
                self.settings.MONGODB_DATABASE,
                self.settings.MONGODB_SERVER_SELECTION_TIMEOUT,
                self.settings.MONGODB_CONNECTION_TIMEOUT,
            )

            client: Optional[AsyncIOMotorClient] = None
            try:
                client = AsyncIOMotorClient(
                    connection_string,
                    serverSelectionTimeoutMS=self.settings.MONGODB_SERVER_SELECTION_TIMEOUT,
                    connectTimeoutMS=self.settings.MONGODB_CONNECTION_TIMEOUT,
                )
                await client.admin.command("ping")
            except (PyMongoError, ConnectionError, TimeoutError) as e:
                if client is not None:
                    client.close()
                db_logger.critical("MongoDB connection error: %s", e, exc_info=True)
                raise SystemExit(1) from e

            self.client = client
            self.database = client[self.settings.MONGODB_DATABASE]
            perf_logger.info("MongoDB connection established in %.3fs", time.time() - start_time)
            db_logger.info("Connected to MongoDB database: %s", self.settings.MONGODB_DATABASE)
            return self.database

    async def disconnect(self) -> None:
        """Close the MongoDB client if one is open; otherwise do nothing."""
        if self.client is None:
            db_logger.debug("Disconnect called but no active MongoDB connection found")
            return

        self.client.close()
        self.client = None
        self.database = None
        db_logger.info("MongoDB connection closed")

    close = disconnect

    def get_collection(self, collection_name: str) -> AsyncIOMotorCollection:
        """
        Retrieve a collection from the connected database.

        Raises:
            `ConnectionError`: If `connect()` has not completed yet.
        """
        if self.database is None:
            db_logger.error("Attempted to get collection '%s' without database connection", collection_name)
            raise ConnectionError("Database not connected. Call connect() first.")
        return self.database[collection_name]

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self.get_collection(USERS_COLLECTION)

    @property
    def posts(self) -> AsyncIOMotorCollection:
        return self.get_collection(POSTS_COLLECTION)

    @property
    def comments(self) -> AsyncIOMotorCollection:
        return self.get_collection(COMMENTS_COLLECTION)
