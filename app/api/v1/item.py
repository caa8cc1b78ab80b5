from fastapi import APIRouter, Body, Depends, Query, Response, status
from typing import Any, Dict, List, Optional
from app.core.dependencies import get_item_service
from app.services.item_service import ItemService
from app.services.item_validator import parse_patch
from app.schemas.item import ItemResponse
from app.logger_config import logger

router = APIRouter()


@router.get("", response_model=List[ItemResponse])
def get_items(
    q: Optional[str] = Query(None),
    service: ItemService = Depends(get_item_service)
):
    """
    List items, optionally filtered by a case-insensitive substring of
    name, brand or category.
    """
    logger.info(f"GET /api/items HIT... q={q!r}")
    return service.search_items(q)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: int,
    service: ItemService = Depends(get_item_service)
):
    """
    Get item by ID.
    """
    logger.info(f"GET /api/items/{item_id} HIT...")
    return service.get_item(item_id)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item_route(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: ItemService = Depends(get_item_service)
):
    """
    Create a new item. Name, brand, category, stock and both prices are required.
    """
    logger.info("POST /api/items HIT...")
    return service.create_item(parse_patch(payload))


@router.put("/{item_id}", response_model=ItemResponse)
def update_item_route(
    item_id: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    service: ItemService = Depends(get_item_service)
):
    """
    Update an item. Omitted fields keep their current values.
    """
    logger.info(f"PUT /api/items/{item_id} HIT...")
    return service.update_item(item_id, parse_patch(payload))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_item_route(
    item_id: int,
    service: ItemService = Depends(get_item_service)
):
    """
    Delete an item.
    """
    logger.info(f"DELETE /api/items/{item_id} HIT...")
    service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
