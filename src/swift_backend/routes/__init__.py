from swift_backend.routes.load import router as load_router
from swift_backend.routes.users import router as users_router

__all__ = ["load_router", "users_router"]
