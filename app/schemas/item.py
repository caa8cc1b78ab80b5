import math

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from typing import Iterable, Optional, Set


class ItemPatch(BaseModel):
    """
    Fields submitted on create or update. Every field is optional; a field
    that is absent (or null) falls back to the existing item's value.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[float] = None
    raw_price: Optional[float] = Field(None, alias="rawPrice")
    selling_price: Optional[float] = Field(None, alias="sellingPrice")
    # Legacy alias of sellingPrice sent by older clients
    price: Optional[float] = None
    min_stock_alert: Optional[float] = Field(None, alias="minStockAlert")

    @field_validator("name", "brand", "category", mode="before")
    @classmethod
    def stringify_labels(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    # Numeric fields that were sent but could not be read as numbers
    _invalid: Set[str] = PrivateAttr(default_factory=set)

    def mark_invalid(self, fields: Iterable[str]) -> "ItemPatch":
        self._invalid = set(fields)
        return self

    def is_invalid(self, field: str) -> bool:
        return field in self._invalid

    def supplied(self, field: str) -> bool:
        return getattr(self, field) is not None or self.is_invalid(field)

    def value_of(self, field: str) -> Optional[float]:
        """The patched number, NaN if it was unreadable, None if absent."""
        if self.is_invalid(field):
            return math.nan
        return getattr(self, field)


class NormalizedItem(BaseModel):
    """A fully resolved, validated item without an id."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    brand: str
    category: str
    stock: int
    raw_price: float = Field(alias="rawPrice")
    selling_price: float = Field(alias="sellingPrice")
    min_stock_alert: int = Field(10, alias="minStockAlert")


class Item(NormalizedItem):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int


class ItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    brand: str
    category: str
    stock: int
    raw_price: float = Field(alias="rawPrice")
    selling_price: float = Field(alias="sellingPrice")
    min_stock_alert: int = Field(alias="minStockAlert")
    profit: float
    price: float


class HealthResponse(BaseModel):
    status: str
    service: str
