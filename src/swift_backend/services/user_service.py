from typing import Any, Dict, List, Optional

from swift_backend.database import DatabaseManager
from swift_backend.managers.logging_manager import get_logger
from swift_backend.models.user_models import NewUserRequest

logger = get_logger(prefix="[UserService]")


class UserService:
    """
    Storage operations behind the `/users` endpoints.

    Posts and comments are joined onto a user here, in application code; the
    database never sees a join or a cascade.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def get_user_with_posts(self, user_id: int) -> Optional[Dict[str, Any]]:
        """
        Fetch a user with its posts, each post carrying its comments.

        Returns `None` if no user has this id.
        """
        await self.db_manager.connect()

        logger.info("Searching for user with ID: %s", user_id)
        user = await self.db_manager.users.find_one({"id": user_id})
        if not user:
            return None

        posts: List[Dict[str, Any]] = await self.db_manager.posts.find({"userId": user["id"]}).to_list(length=None)
        if posts:
            post_ids = [post["id"] for post in posts]
            comments = await self.db_manager.comments.find({"postId": {"$in": post_ids}}).to_list(length=None)

            comments_by_post: Dict[Any, List[Dict[str, Any]]] = {}
            for comment in comments:
                comments_by_post.setdefault(comment.get("postId"), []).append(comment)
            for post in posts:
                post["comments"] = comments_by_post.get(post["id"], [])

        return {**user, "posts": posts}

    async def delete_user(self, user_id: int) -> bool:
        """Delete one user by id. Posts and comments are left untouched."""
        await self.db_manager.connect()
        result = await self.db_manager.users.delete_one({"id": user_id})
        return result.deleted_count > 0

    async def delete_all_users(self) -> int:
        """Delete every user and return how many were removed."""
        await self.db_manager.connect()
        result = await self.db_manager.users.delete_many({})
        logger.info("Deleted %d users", result.deleted_count)
        return result.deleted_count

    async def email_exists(self, email: str) -> bool:
        await self.db_manager.connect()
        return await self.db_manager.users.find_one({"email": email}) is not None

    async def create_user(self, new_user: NewUserRequest) -> None:
        await self.db_manager.connect()
        await self.db_manager.users.insert_one(new_user.to_document())
        logger.info("Created user %s", new_user.id)
