"""
# User Routes

REST endpoints over the `users` resource.

## API Endpoints

- `GET /users/{id}` - User with its posts and each post's comments
- `DELETE /users/{id}` - Delete one user (posts and comments are kept)
- `DELETE /users` - Delete every user
- `PUT /users` - Create a user

## Id Parsing

The id is the first path segment after `/users/`, read as a leading integer: optional
whitespace and sign, then digits; anything after the digits is ignored
(`/users/12abc` addresses user 12). Ids that do not parse, are not positive
or do not fit in a 64-bit BSON integer get a 400.

Module Attributes:
    router (APIRouter): Router for the `/users` endpoints.
"""

import json
import re
from typing import Optional

from fastapi import APIRouter, Depends, Request

from swift_backend.models.user_models import UserValidationError, parse_new_user
from swift_backend.routes.dependencies import get_user_service
from swift_backend.services.user_service import UserService
from swift_backend.utils.responses import PrettyJSONResponse, handle_error, send_response

router = APIRouter(tags=["Users"])

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

# Largest integer BSON can store
MAX_USER_ID = 2**63 - 1


def extract_user_id(user_path: str) -> Optional[int]:
    """Return the positive integer id at the start of `user_path`, or None."""
    segment = user_path.split("/", 1)[0]
    match = _LEADING_INTEGER.match(segment)
    if not match:
        return None
    user_id = int(match.group(1))
    return user_id if 0 < user_id <= MAX_USER_ID else None


def _reject_constant(name: str) -> float:
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


@router.get("/users/{user_path:path}")
async def get_user(user_path: str, service: UserService = Depends(get_user_service)) -> PrettyJSONResponse:
    """Get a user with posts and comments joined in."""
    try:
        user_id = extract_user_id(user_path)
        if user_id is None:
            return send_response(400, {"error": "Invalid User ID"})

        user = await service.get_user_with_posts(user_id)
        if user is None:
            return send_response(404, {"error": "User not found"})

        return send_response(200, user)
    except Exception as e:
        return handle_error(e)


@router.delete("/users/{user_path:path}")
async def delete_user(user_path: str, service: UserService = Depends(get_user_service)) -> PrettyJSONResponse:
    """Delete a single user."""
    try:
        user_id = extract_user_id(user_path)
        if user_id is None:
            return send_response(400, {"error": "Invalid User ID"})

        if not await service.delete_user(user_id):
            return send_response(404, {"error": "User not found"})

        return send_response(200, {"message": "User deleted successfully"})
    except Exception as e:
        return handle_error(e)


@router.delete("/users")
async def delete_all_users(service: UserService = Depends(get_user_service)) -> PrettyJSONResponse:
    """Delete every user."""
    try:
        deleted_count = await service.delete_all_users()
        if deleted_count == 0:
            return send_response(404, {"message": "No users found to delete"})

        return send_response(200, {"message": "All users deleted successfully"})
    except Exception as e:
        return handle_error(e)


@router.put("/users")
async def add_user(request: Request, service: UserService = Depends(get_user_service)) -> PrettyJSONResponse:
    """
    Create a user.

    Malformed JSON is not treated as a client error: it fails the request with a 500.
    Duplicates are detected by email, not by id.
    """
    try:
        body = await request.body()
        payload = json.loads(body, parse_constant=_reject_constant)

        try:
            new_user = parse_new_user(payload)
        except UserValidationError as e:
            return send_response(400, {"error": e.message})

        if await service.email_exists(new_user.email):
            return send_response(409, {"error": "User already exists"})

        await service.create_user(new_user)
        return send_response(201, {"message": "User added successfully", "user": payload})
    except Exception as e:
        return handle_error(e)
