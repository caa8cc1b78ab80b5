import threading
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import sessionmaker

from app.common.exceptions import ItemNotFound
from app.logger_config import logger
from app.models.item import ItemRecord
from app.schemas.item import Item, NormalizedItem

ItemMerge = Callable[[Item], NormalizedItem]

_ITEM_FIELDS = tuple(NormalizedItem.model_fields)


class ItemRepository(ABC):
    """
    Ordered store of inventory items keyed by a unique integer id.

    Ids are assigned as max(existing ids) + 1, so iteration order (by id) is
    insertion order. Mutations are serialized by `lock`.
    """

    def __init__(self):
        self.lock = threading.RLock()

    @abstractmethod
    def list(self) -> List[Item]:
        ...

    @abstractmethod
    def get(self, item_id: int) -> Optional[Item]:
        ...

    @abstractmethod
    def create(self, data: NormalizedItem) -> Item:
        ...

    @abstractmethod
    def update(self, item_id: int, merge: ItemMerge) -> Item:
        """
        Apply `merge(existing)` to the item with `item_id` in place.

        The merge runs under the store lock; if it raises, nothing is written.
        """

    @abstractmethod
    def delete(self, item_id: int) -> None:
        ...

    @abstractmethod
    def search(self, query: Optional[str]) -> List[Item]:
        ...

    def count(self) -> int:
        return len(self.list())

    def load(self, items: Iterable[NormalizedItem]) -> List[Item]:
        """Insert several items in order, returning the stored copies."""
        with self.lock:
            return [self.create(data) for data in items]

    @staticmethod
    def _normalize_query(query: Optional[str]) -> str:
        return (query or "").strip().lower()


class InMemoryItemRepository(ItemRepository):
    def __init__(self, items: Optional[Iterable[Item]] = None):
        super().__init__()
        self._items: List[Item] = list(items or [])

    def _next_id(self) -> int:
        return max((item.id for item in self._items), default=0) + 1

    def list(self) -> List[Item]:
        with self.lock:
            return list(self._items)

    def get(self, item_id: int) -> Optional[Item]:
        with self.lock:
            return next((item for item in self._items if item.id == item_id), None)

    def create(self, data: NormalizedItem) -> Item:
        with self.lock:
            item = Item(id=self._next_id(), **data.model_dump())
            self._items.append(item)
            logger.debug(f"Stored item {item.id} ({item.name})")
            return item

    def update(self, item_id: int, merge: ItemMerge) -> Item:
        with self.lock:
            item = self.get(item_id)
            if item is None:
                raise ItemNotFound(item_id)
            merged = merge(item)
            for field in _ITEM_FIELDS:
                setattr(item, field, getattr(merged, field))
            return item

    def delete(self, item_id: int) -> None:
        with self.lock:
            previous_length = len(self._items)
            self._items = [item for item in self._items if item.id != item_id]
            if len(self._items) == previous_length:
                raise ItemNotFound(item_id)

    def search(self, query: Optional[str]) -> List[Item]:
        term = self._normalize_query(query)
        with self.lock:
            if not term:
                return list(self._items)
            return [
                item for item in self._items
                if any(term in value.lower() for value in (item.name, item.brand, item.category))
            ]


class SqlItemRepository(ItemRepository):
    """Item store backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        super().__init__()
        self.session_factory = session_factory

    @staticmethod
    def _to_item(record: ItemRecord) -> Item:
        return Item.model_validate(record)

    def list(self) -> List[Item]:
        with self.session_factory() as db:
            records = db.query(ItemRecord).order_by(ItemRecord.id).all()
            return [self._to_item(record) for record in records]

    def get(self, item_id: int) -> Optional[Item]:
        with self.session_factory() as db:
            record = db.get(ItemRecord, item_id)
            return self._to_item(record) if record else None

    def count(self) -> int:
        with self.session_factory() as db:
            return db.query(func.count(ItemRecord.id)).scalar() or 0

    def create(self, data: NormalizedItem) -> Item:
        with self.lock, self.session_factory() as db:
            next_id = (db.query(func.max(ItemRecord.id)).scalar() or 0) + 1
            record = ItemRecord(id=next_id, **data.model_dump())
            db.add(record)
            try:
                db.commit()
            except Exception:
                db.rollback()
                logger.exception("Database error while creating item")
                raise
            return self._to_item(record)

    def update(self, item_id: int, merge: ItemMerge) -> Item:
        with self.lock, self.session_factory() as db:
            record = db.get(ItemRecord, item_id)
            if record is None:
                raise ItemNotFound(item_id)
            merged = merge(self._to_item(record))
            for field in _ITEM_FIELDS:
                setattr(record, field, getattr(merged, field))
            try:
                db.commit()
            except Exception:
                db.rollback()
                logger.exception(f"Database error while updating item {item_id}")
                raise
            return self._to_item(record)

    def delete(self, item_id: int) -> None:
        with self.lock, self.session_factory() as db:
            deleted = db.query(ItemRecord).filter(ItemRecord.id == item_id).delete()
            if not deleted:
                raise ItemNotFound(item_id)
            db.commit()

    def search(self, query: Optional[str]) -> List[Item]:
        term = self._normalize_query(query)
        with self.session_factory() as db:
            base_query = db.query(ItemRecord)
            if term:
                base_query = base_query.filter(
                    or_(
                        ItemRecord.name.icontains(term, autoescape=True),
                        ItemRecord.brand.icontains(term, autoescape=True),
                        ItemRecord.category.icontains(term, autoescape=True),
                    )
                )
            return [self._to_item(record) for record in base_query.order_by(ItemRecord.id).all()]
