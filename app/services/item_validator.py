import math
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from app.common.exceptions import (
    InvalidNumber,
    MissingField,
    MissingPriceOnCreate,
    PriceInversion,
)
from app.schemas.item import Item, ItemPatch, NormalizedItem

DEFAULT_MIN_STOCK_ALERT = 10

MISSING_FIELD_MESSAGE = "Name, brand, and category are required."
MISSING_PRICE_MESSAGE = "Raw price and selling price are required."
PRICE_INVERSION_MESSAGE = "Selling price must be greater than or equal to raw price."

NUMBER_MESSAGES = {
    "stock": "Stock must be a valid non-negative number.",
    "raw_price": "Raw price must be a valid non-negative number.",
    "selling_price": "Selling price must be a valid non-negative number.",
    "min_stock_alert": "Minimum stock alert must be a valid non-negative number.",
}

# Wire keys of numeric fields mapped to patch attributes
_NUMERIC_KEYS = {
    "stock": "stock",
    "rawPrice": "raw_price",
    "raw_price": "raw_price",
    "sellingPrice": "selling_price",
    "selling_price": "selling_price",
    "price": "price",
    "minStockAlert": "min_stock_alert",
    "min_stock_alert": "min_stock_alert",
}


def parse_patch(payload: Optional[Mapping[str, Any]]) -> ItemPatch:
    """
    Build an ItemPatch from a decoded JSON body.

    Numbers that cannot be read are not rejected here; they are recorded on
    the patch so normalize_item reports them in rule order.
    """
    if payload is None:
        payload = {}
    try:
        return ItemPatch.model_validate(payload)
    except ValidationError as e:
        unreadable = {}
        for error in e.errors():
            key = str(error["loc"][0]) if error["loc"] else ""
            if key not in _NUMERIC_KEYS:
                raise MissingField(MISSING_FIELD_MESSAGE)
            unreadable[key] = _NUMERIC_KEYS[key]

    cleaned = {key: value for key, value in payload.items() if key not in unreadable}
    return ItemPatch.model_validate(cleaned).mark_invalid(unreadable.values())


def _resolve_text(patch: ItemPatch, existing: Optional[Item], field: str) -> str:
    value = getattr(patch, field)
    if value is None:
        value = getattr(existing, field, None) if existing else None
    return (value or "").strip()


def _resolve_number(value: Optional[float], field: str, whole: bool = False):
    if value is None or isinstance(value, bool) or not math.isfinite(value) or value < 0:
        raise InvalidNumber(NUMBER_MESSAGES[field], field)
    if whole:
        if value != int(value):
            raise InvalidNumber(NUMBER_MESSAGES[field], field)
        return int(value)
    return float(value)


def normalize_item(
    patch: ItemPatch,
    existing: Optional[Item] = None,
    is_create: bool = False,
) -> NormalizedItem:
    """
    Merge a patch over an existing item (or over nothing, on create) and
    validate the result.

    Every field resolves to the patched value if supplied, otherwise the
    existing item's value, otherwise its default. Raises a subclass of
    ItemValidationError on the first failing rule; never mutates anything.
    """
    # Defaults from a prior record only apply to updates
    base = None if is_create else existing

    name = _resolve_text(patch, base, "name")
    brand = _resolve_text(patch, base, "brand")
    category = _resolve_text(patch, base, "category")

    if not name or not brand or not category:
        raise MissingField(MISSING_FIELD_MESSAGE)

    selling_supplied = patch.supplied("selling_price") or patch.supplied("price")
    if is_create and (not patch.supplied("raw_price") or not selling_supplied):
        raise MissingPriceOnCreate(MISSING_PRICE_MESSAGE)

    def pick(field, fallback=None):
        value = patch.value_of(field)
        if value is not None:
            return value
        if base is not None:
            return getattr(base, field)
        return fallback

    selling_source = patch.value_of("selling_price")
    if selling_source is None:
        selling_source = patch.value_of("price")
    if selling_source is None and base is not None:
        selling_source = base.selling_price

    stock = _resolve_number(pick("stock"), "stock", whole=True)
    raw_price = _resolve_number(pick("raw_price"), "raw_price")
    selling_price = _resolve_number(selling_source, "selling_price")

    if selling_price < raw_price:
        raise PriceInversion(PRICE_INVERSION_MESSAGE)

    min_stock_alert = _resolve_number(
        pick("min_stock_alert", DEFAULT_MIN_STOCK_ALERT), "min_stock_alert", whole=True
    )

    return NormalizedItem(
        name=name,
        brand=brand,
        category=category,
        stock=stock,
        raw_price=raw_price,
        selling_price=selling_price,
        min_stock_alert=min_stock_alert,
    )
