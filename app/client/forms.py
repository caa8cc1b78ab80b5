import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.services.analytics import raw_price_of, selling_price_of, min_stock_alert_of

MULTI_VARIANT_CATEGORIES = {"pods", "battery", "batteries"}
BATTERY_CATEGORIES = {"battery", "batteries"}


def parse_number(text: Any) -> float:
    """
    Read a numeric form field. Blank input reads as 0, anything unparsable
    as NaN, matching how the browser form coerces values.
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)
    text = str(text if text is not None else "").strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def is_valid_amount(value: float) -> bool:
    return math.isfinite(value) and value >= 0


def is_valid_count(value: float) -> bool:
    return is_valid_amount(value) and value == int(value)


def is_positive_quantity(value: float) -> bool:
    return math.isfinite(value) and value > 0


class VariantEntry(BaseModel):
    name: str = ""
    stock: str = ""


class ItemForm(BaseModel):
    """Raw text of the add/edit item form."""
    name: str = ""
    brand: str = ""
    category: str = ""
    stock: str = ""
    raw_price: str = ""
    selling_price: str = ""
    min_stock_alert: str = ""

    @classmethod
    def for_new_item(cls) -> "ItemForm":
        return cls(min_stock_alert="10")

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "ItemForm":
        return cls(
            name=item.get("name", ""),
            brand=item.get("brand", ""),
            category=item.get("category", ""),
            stock=str(item.get("stock", "")),
            raw_price=_plain(raw_price_of(item)),
            selling_price=_plain(selling_price_of(item)),
            min_stock_alert=str(min_stock_alert_of(item)),
        )

    @property
    def normalized_category(self) -> str:
        return self.category.strip().lower()

    @property
    def allows_multiple_names(self) -> bool:
        return self.normalized_category in MULTI_VARIANT_CATEGORIES

    @property
    def is_battery(self) -> bool:
        return self.normalized_category in BATTERY_CATEGORIES

    @property
    def variant_label(self) -> str:
        return "color" if self.is_battery else "flavor"

    def payload(self) -> Dict[str, Any]:
        return {
            "name": self.name.strip(),
            "brand": self.brand.strip(),
            "category": self.category.strip(),
            "stock": parse_number(self.stock),
            "rawPrice": parse_number(self.raw_price),
            "sellingPrice": parse_number(self.selling_price),
            "minStockAlert": parse_number(self.min_stock_alert),
        }


class QuantityForm(BaseModel):
    """Item selection plus quantity, used by the add-stock and record-sale flows."""
    item_id: str = ""
    quantity: str = ""


class ValidatedItemForm(BaseModel):
    payload: Dict[str, Any]
    entries: List[Dict[str, Any]] = Field(default_factory=list)


def _plain(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def validate_item_form(
    form: ItemForm,
    variants: List[VariantEntry],
    editing: bool,
) -> ValidatedItemForm:
    """
    Apply the item rules to the form before anything is sent.

    Returns the request payload plus, when creating, one entry (name, stock)
    per record to create. Raises ValueError with a user-facing message.
    """
    payload = form.payload()
    label = form.variant_label
    allow_multiple = form.allows_multiple_names

    multi_entries = []
    if allow_multiple:
        multi_entries = [
            {"name": entry.name.strip(), "stock": parse_number(entry.stock)}
            for entry in variants
            if entry.name.strip()
        ]

    if not payload["brand"] or not payload["category"]:
        raise ValueError(f"Please provide brand, {label}, and category.")

    if not editing and allow_multiple and not multi_entries:
        raise ValueError(f"Please provide at least one {label} with stock.")

    if not editing and not allow_multiple and not payload["name"]:
        raise ValueError(f"Please provide {label}.")

    if (not allow_multiple or editing) and not is_valid_count(payload["stock"]):
        raise ValueError("Stock must be a valid non-negative number.")

    if not editing and allow_multiple:
        if any(not is_valid_count(entry["stock"]) for entry in multi_entries):
            raise ValueError("Each flavor/color stock must be a valid non-negative number.")

    if not is_valid_amount(payload["rawPrice"]):
        raise ValueError("Raw price must be a valid non-negative amount.")

    if not is_valid_amount(payload["sellingPrice"]):
        raise ValueError("Selling price must be a valid non-negative amount.")

    if payload["sellingPrice"] < payload["rawPrice"]:
        raise ValueError("Selling price must be greater than or equal to raw price.")

    if not is_valid_count(payload["minStockAlert"]):
        raise ValueError("Minimum stock alert must be a valid non-negative number.")

    if editing:
        entries = []
    elif allow_multiple:
        entries = multi_entries
    else:
        entries = [{"name": payload["name"], "stock": payload["stock"]}]

    return ValidatedItemForm(payload=payload, entries=entries)


def find_item(items: List[Dict[str, Any]], item_id: Optional[str]) -> Optional[Dict[str, Any]]:
    return next((item for item in items if str(item.get("id")) == str(item_id)), None)
