from fastapi import APIRouter, Depends
from app.core.dependencies import get_item_service
from app.services.analytics import build_dashboard
from app.services.item_service import ItemService
from app.schemas.dashboard import DashboardSummary
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=DashboardSummary)
def get_dashboard(service: ItemService = Depends(get_item_service)):
    """
    Inventory analytics over the full item list. Sales figures are
    projections; recorded sales live only in the client session.
    """
    logger.info("GET /api/dashboard HIT...")
    items = [item.model_dump(by_alias=True) for item in service.search_items()]
    return build_dashboard(items)
