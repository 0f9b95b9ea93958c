from swift_backend.services.seed_service import SeedLoader
from swift_backend.services.user_service import UserService

__all__ = ["SeedLoader", "UserService"]
