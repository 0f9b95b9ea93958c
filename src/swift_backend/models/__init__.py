from swift_backend.models.user_models import (
    Address,
    Comment,
    Company,
    Geo,
    NewUserRequest,
    Post,
    User,
    UserValidationError,
    parse_new_user,
)

__all__ = [
    "Address",
    "Comment",
    "Company",
    "Geo",
    "NewUserRequest",
    "Post",
    "User",
    "UserValidationError",
    "parse_new_user",
]
