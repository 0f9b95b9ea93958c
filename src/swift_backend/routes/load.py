from fastapi import APIRouter, Depends

from swift_backend.routes.dependencies import get_seed_loader
from swift_backend.services.seed_service import SeedLoader
from swift_backend.utils.responses import PrettyJSONResponse, handle_error, send_response

router = APIRouter(tags=["Seed"])


@router.get("/load")
async def load_data(loader: SeedLoader = Depends(get_seed_loader)) -> PrettyJSONResponse:
    """Replace local users, posts and comments with the source API data."""
    try:
        result = await loader.load_data()
        if "error" in result:
            return send_response(500, {"error": result["error"]})
        return send_response(200, result)
    except Exception as e:
        return handle_error(e)
