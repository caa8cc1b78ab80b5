from fastapi import Depends, Request

from app.core.config import Settings
from app.core.database import build_engine, build_session_factory, init_db
from app.core.seed_data import SAMPLE_ITEMS
from app.logger_config import logger
from app.repositories.item_repository import (
    InMemoryItemRepository,
    ItemRepository,
    SqlItemRepository,
)
from app.services.item_service import ItemService


def build_repository(settings: Settings) -> ItemRepository:
    """
    Pick the item store for this process: SQL when DATABASE_URL is set,
    otherwise an in-memory list. Sample items are loaded into an empty store
    when SEED_SAMPLE_DATA is on.
    """
    if settings.uses_database:
        engine = build_engine(settings.DATABASE_URL)
        init_db(engine)
        repository: ItemRepository = SqlItemRepository(build_session_factory(engine))
        logger.info(f"Using SQL item store at {engine.url.render_as_string(hide_password=True)}")
    else:
        repository = InMemoryItemRepository()
        logger.info("Using in-memory item store")

    if settings.SEED_SAMPLE_DATA and repository.count() == 0:
        repository.load(SAMPLE_ITEMS)
        logger.info(f"Seeded {len(SAMPLE_ITEMS)} sample items")

    return repository


def get_repository(request: Request) -> ItemRepository:
    """Dependency returning the store attached to the running app."""
    return request.app.state.repository


def get_item_service(repository: ItemRepository = Depends(get_repository)) -> ItemService:
    return ItemService(repository)
