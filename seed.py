"""
Load inventory into the configured SQL store.

    DATABASE_URL=sqlite:///inventory.db python seed.py [EXTRA_COUNT]

Clears the items table, inserts the sample items, then EXTRA_COUNT
randomly generated products (default 0).
"""
import random
import sys

from faker import Faker

from app.core.config import settings
from app.core.database import build_engine, build_session_factory, init_db
from app.core.seed_data import SAMPLE_ITEMS
from app.models.item import ItemRecord
from app.repositories.item_repository import SqlItemRepository
from app.schemas.item import NormalizedItem
from app.services.analytics import CATEGORY_OPTIONS

fake = Faker()


def fake_item() -> NormalizedItem:
    raw_price = random.randint(50, 500)
    return NormalizedItem(
        name=f"{fake.word().title()} {random.choice(['30ml', '60ml', 'Pod', 'Coil', 'Kit'])}",
        brand=fake.company(),
        category=random.choice(CATEGORY_OPTIONS),
        stock=random.randint(0, 60),
        raw_price=raw_price,
        selling_price=raw_price + random.randint(20, 300),
        min_stock_alert=random.choice([5, 8, 10, 12, 15]),
    )


def main(extra_count: int = 0):
    if not settings.uses_database:
        print("DATABASE_URL is not set; the in-memory store is seeded at startup.")
        return 1

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    session_factory = build_session_factory(engine)

    print("🔄 Clearing existing items...")
    with session_factory() as db:
        db.query(ItemRecord).delete()
        db.commit()
    print("✅ Items cleared.")

    repository = SqlItemRepository(session_factory)
    stored = repository.load(SAMPLE_ITEMS)
    stored += repository.load(fake_item() for _ in range(extra_count))
    print(f"✅ Seeded {len(stored)} items")
    return 0


if __name__ == "__main__":
    sys.exit(main(int(sys.argv[1]) if len(sys.argv) > 1 else 0))
