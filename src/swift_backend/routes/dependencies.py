"""FastAPI dependencies that hand the app-owned gateway and services to route handlers."""

from fastapi import Request

from swift_backend.database import DatabaseManager
from swift_backend.services.seed_service import SeedLoader
from swift_backend.services.user_service import UserService


def get_db_manager(request: Request) -> DatabaseManager:
    return request.app.state.db_manager


def get_seed_loader(request: Request) -> SeedLoader:
    return request.app.state.seed_loader


def get_user_service(request: Request) -> UserService:
    return UserService(get_db_manager(request))
