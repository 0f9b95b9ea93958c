"""
# User, Post and Comment Models

Pydantic models for the three collections the service stores, plus the decoder for
the create-user request body.

## Domain Model Overview

Each entity lives in its own collection and is joined only in application code:

1.  **User**: identity, contact details, nested `address` (with `geo`) and `company`.
2.  **Post**: belongs to a user through the soft reference `userId`.
3.  **Comment**: belongs to a post through the soft reference `postId`.

`User.posts` and `Post.comments` are response-only; `to_document()` never includes them.

## Re-projection

Unknown fields are ignored on validation, so `User.model_validate(raw).to_document()`
turns any upstream record into exactly the stored shape:

```python
raw = {"id": 1, "name": "Leanne Graham", "extra": "dropped", ...}
document = User.model_validate(raw).to_document()
```

## Create-User Decoding

`parse_new_user()` validates a decoded JSON body and raises `UserValidationError`
naming the first field that failed, in the order: body, id, name, username, email.
"""

import re
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

USER_FIELDS = ("id", "name", "username", "email", "address", "phone", "website", "company")

# Field name -> client-facing message for create-user validation failures
FIELD_ERROR_MESSAGES: Dict[str, str] = {
    "body": "Invalid request body.",
    "id": "User ID is required and must be a number.",
    "name": "User name is required.",
    "username": "Username is required.",
    "email": "Invalid email format.",
}


def is_valid_email(email: str) -> bool:
    """Return True if `email` looks like ``local@domain.tld``."""
    return EMAIL_PATTERN.fullmatch(email) is not None


class Geo(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class Address(BaseModel):
    street: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None
    geo: Optional[Geo] = None


class Company(BaseModel):
    name: Optional[str] = None
    catchPhrase: Optional[str] = None
    bs: Optional[str] = None


class Comment(BaseModel):
    """A comment on a post, stored in the `comments` collection."""

    id: int
    postId: int
    name: Optional[str] = None
    email: Optional[str] = None
    body: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()


class Post(BaseModel):
    """A post, stored in the `posts` collection. `comments` is filled only for responses."""

    id: int
    userId: int
    title: Optional[str] = None
    body: Optional[str] = None
    comments: Optional[List[Comment]] = None

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"comments"})


class User(BaseModel):
    """A user, stored in the `users` collection. `posts` is filled only for responses."""

    id: int
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    address: Optional[Address] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    company: Optional[Company] = None
    posts: Optional[List[Post]] = None

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"posts"})


class UserValidationError(ValueError):
    """Raised when a create-user body fails validation.

    Attributes:
        field: The first field that failed (``"body"`` when the body itself is unusable).
        message: Client-facing message for that field.
    """

    def __init__(self, field: str):
        self.field = field
        self.message = FIELD_ERROR_MESSAGES.get(field, FIELD_ERROR_MESSAGES["body"])
        super().__init__(self.message)


class NewUserRequest(BaseModel):
    """
    Body of ``PUT /users``.

    The four required fields use strict types so that, for example, ``"5"`` is not
    accepted as an id and ``true`` is not a number. The remaining user fields are
    stored as received; anything else in the body is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: Union[StrictInt, StrictFloat]
    name: StrictStr
    username: StrictStr
    email: StrictStr
    address: Any = None
    phone: Any = None
    website: Any = None
    company: Any = None

    @field_validator("id")
    @classmethod
    def id_must_be_set(cls, v: Union[int, float]) -> Union[int, float]:
        # zero and NaN count as missing
        if not v or v != v:
            raise ValueError("id is required")
        return v

    @field_validator("name", "username")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        if not is_valid_email(v):
            raise ValueError("invalid email format")
        return v

    def to_document(self) -> Dict[str, Any]:
        """The stored user: the eight persisted fields and nothing else."""
        return self.model_dump(include=set(USER_FIELDS))


def parse_new_user(payload: Any) -> NewUserRequest:
    """
    Decode a create-user body.

    Args:
        payload: The result of ``json.loads`` on the request body.

    Returns:
        NewUserRequest: The validated request.

    Raises:
        UserValidationError: For the first failing field, checked in declaration order.
    """
    if not isinstance(payload, dict):
        raise UserValidationError("body")

    try:
        return NewUserRequest.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors()
        field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else "body"
        raise UserValidationError(field) from exc
