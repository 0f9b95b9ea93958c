"""
# Database Package

Persistence layer of swift-backend, built on **Motor** (async MongoDB driver).

- **`manager`**: `DatabaseManager`, owner of the process-wide client and the
  `users` / `posts` / `comments` collection handles.

One `DatabaseManager` is created per application by `create_app()` and stored on
`app.state.db_manager`; route dependencies read it from there.
"""

from swift_backend.database.manager import (
    COMMENTS_COLLECTION,
    POSTS_COLLECTION,
    USERS_COLLECTION,
    DatabaseManager,
)

__all__ = ["DatabaseManager", "USERS_COLLECTION", "POSTS_COLLECTION", "COMMENTS_COLLECTION"]
