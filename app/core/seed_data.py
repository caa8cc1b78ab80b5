from app.schemas.item import NormalizedItem

# Inventory loaded at startup when SEED_SAMPLE_DATA is enabled
SAMPLE_ITEMS = [
    NormalizedItem(
        name="Strawberry Milk 60ml",
        brand="Cloudy Co.",
        category="E-Liquid",
        stock=24,
        raw_price=280,
        selling_price=450,
        min_stock_alert=10,
    ),
    NormalizedItem(
        name="Mint Freeze Disposable",
        brand="VapeX",
        category="Disposable",
        stock=15,
        raw_price=230,
        selling_price=380,
        min_stock_alert=8,
    ),
    NormalizedItem(
        name="Mesh Coil 0.8Ω",
        brand="SmokeLab",
        category="Coils",
        stock=40,
        raw_price=120,
        selling_price=220,
        min_stock_alert=15,
    ),
    NormalizedItem(
        name="Pod Cartridge 2ml",
        brand="VapeX",
        category="Pods",
        stock=28,
        raw_price=95,
        selling_price=180,
        min_stock_alert=12,
    ),
    NormalizedItem(
        name="Battery 18650 3000mAh",
        brand="PowerLeaf",
        category="Accessories",
        stock=12,
        raw_price=340,
        selling_price=520,
        min_stock_alert=6,
    ),
]
