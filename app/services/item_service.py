from typing import List, Optional

from app.common.exceptions import ItemNotFound, ItemValidationError
from app.logger_config import logger
from app.repositories.item_repository import ItemRepository
from app.schemas.item import Item, ItemPatch, ItemResponse
from app.services.item_validator import normalize_item


def shape_item(item: Item) -> ItemResponse:
    """Attach the derived fields returned on every read and write."""
    raw_price = float(item.raw_price)
    selling_price = float(item.selling_price)
    return ItemResponse(
        id=item.id,
        name=item.name,
        brand=item.brand,
        category=item.category,
        stock=item.stock,
        raw_price=raw_price,
        selling_price=selling_price,
        min_stock_alert=int(item.min_stock_alert),
        profit=selling_price - raw_price,
        # Older clients still read `price`
        price=selling_price,
    )


class ItemService:
    """
    Service for creating, updating, deleting and searching inventory items.
    """

    def __init__(self, repository: ItemRepository):
        self.repository = repository

    def search_items(self, query: Optional[str] = None) -> List[ItemResponse]:
        items = self.repository.search(query)
        logger.debug(f"Search {query!r} matched {len(items)} items")
        return [shape_item(item) for item in items]

    def get_item(self, item_id: int) -> ItemResponse:
        item = self.repository.get(item_id)
        if item is None:
            raise ItemNotFound(item_id)
        return shape_item(item)

    def create_item(self, patch: ItemPatch) -> ItemResponse:
        try:
            data = normalize_item(patch, is_create=True)
        except ItemValidationError as e:
            logger.warning(f"Rejected new item: {e.message}")
            raise
        item = self.repository.create(data)
        logger.info(f"Item {item.id} ({item.name}) created")
        return shape_item(item)

    def update_item(self, item_id: int, patch: ItemPatch) -> ItemResponse:
        try:
            item = self.repository.update(
                item_id, lambda existing: normalize_item(patch, existing, is_create=False)
            )
        except ItemValidationError as e:
            logger.warning(f"Rejected update of item {item_id}: {e.message}")
            raise
        logger.info(f"Item {item_id} updated")
        return shape_item(item)

    def delete_item(self, item_id: int) -> None:
        self.repository.delete(item_id)
        logger.info(f"Item {item_id} deleted")
