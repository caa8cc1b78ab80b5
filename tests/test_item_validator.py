import math

import pytest

from app.common.exceptions import (
    InvalidNumber,
    ItemValidationError,
    MissingField,
    MissingPriceOnCreate,
    PriceInversion,
)
from app.schemas.item import Item, ItemPatch
from app.services.item_validator import normalize_item, parse_patch


def make_patch(**fields):
    return parse_patch(fields)


@pytest.fixture
def existing():
    return Item(
        id=3,
        name="Mesh Coil 0.8Ω",
        brand="SmokeLab",
        category="Coils",
        stock=40,
        raw_price=120,
        selling_price=220,
        min_stock_alert=15,
    )


def test_create_normalizes_fields():
    patch = make_patch(name="  Test ", brand="B ", category=" C", stock="5", rawPrice=10, sellingPrice="15")

    item = normalize_item(patch, is_create=True)

    assert item.name == "Test"
    assert item.brand == "B"
    assert item.category == "C"
    assert item.stock == 5 and isinstance(item.stock, int)
    assert item.raw_price == 10.0
    assert item.selling_price == 15.0
    assert item.min_stock_alert == 10


def test_create_accepts_legacy_price_alias():
    patch = make_patch(name="Test", brand="B", category="C", stock=1, rawPrice=10, price=12)

    assert normalize_item(patch, is_create=True).selling_price == 12


def test_selling_price_wins_over_price_alias():
    patch = make_patch(name="Test", brand="B", category="C", stock=1, rawPrice=10, sellingPrice=20, price=12)

    assert normalize_item(patch, is_create=True).selling_price == 20


@pytest.mark.parametrize("field", ["name", "brand", "category"])
def test_blank_text_field_is_missing(field):
    fields = dict(name="Test", brand="B", category="C", stock=1, rawPrice=1, sellingPrice=2)
    fields[field] = "   "

    with pytest.raises(MissingField):
        normalize_item(make_patch(**fields), is_create=True)


def test_create_requires_explicit_prices():
    with pytest.raises(MissingPriceOnCreate):
        normalize_item(make_patch(name="Test", brand="B", category="C", stock=1, sellingPrice=5), is_create=True)

    with pytest.raises(MissingPriceOnCreate):
        normalize_item(make_patch(name="Test", brand="B", category="C", stock=1, rawPrice=5), is_create=True)


def test_create_ignores_existing_record_defaults(existing):
    patch = make_patch(name="Test", brand="B", category="C", rawPrice=1, sellingPrice=2)

    with pytest.raises(InvalidNumber) as exc:
        normalize_item(patch, existing, is_create=True)

    assert exc.value.field == "stock"


@pytest.mark.parametrize(
    "field, value",
    [
        ("stock", -1),
        ("stock", 2.5),
        ("stock", math.inf),
        ("rawPrice", -0.01),
        ("sellingPrice", math.nan),
        ("minStockAlert", -3),
    ],
)
def test_invalid_numbers_are_rejected(field, value):
    fields = dict(name="Test", brand="B", category="C", stock=1, rawPrice=1, sellingPrice=2)
    fields[field] = value

    with pytest.raises(InvalidNumber):
        normalize_item(make_patch(**fields), is_create=True)


def test_non_numeric_text_is_invalid_number():
    patch = parse_patch({"name": "Test", "brand": "B", "category": "C", "stock": "abc",
                         "rawPrice": 1, "sellingPrice": 2})

    with pytest.raises(InvalidNumber) as exc:
        normalize_item(patch, is_create=True)

    assert exc.value.field == "stock"
    assert exc.value.message == "Stock must be a valid non-negative number."


def test_non_numeric_aliased_field_reports_its_message(existing):
    with pytest.raises(InvalidNumber) as exc:
        normalize_item(parse_patch({"rawPrice": "ten"}), existing)

    assert exc.value.field == "raw_price"


def test_unreadable_number_does_not_hide_missing_text_field():
    patch = parse_patch({"brand": "B", "category": "C", "stock": "lots", "rawPrice": 1, "sellingPrice": 2})

    with pytest.raises(MissingField):
        normalize_item(patch, is_create=True)


def test_unreadable_price_does_not_hide_missing_price():
    patch = parse_patch({"name": "T", "brand": "B", "category": "C", "stock": 5, "sellingPrice": "x"})

    with pytest.raises(MissingPriceOnCreate):
        normalize_item(patch, is_create=True)


def test_unreadable_price_counts_as_supplied():
    patch = parse_patch({"name": "T", "brand": "B", "category": "C", "stock": 5,
                         "rawPrice": "x", "sellingPrice": 2})

    with pytest.raises(InvalidNumber) as exc:
        normalize_item(patch, is_create=True)

    assert exc.value.field == "raw_price"


def test_numbers_are_checked_in_field_order():
    patch = parse_patch({"name": "T", "brand": "B", "category": "C", "stock": "many",
                         "rawPrice": "x", "sellingPrice": "y", "minStockAlert": "z"})

    with pytest.raises(InvalidNumber) as exc:
        normalize_item(patch, is_create=True)

    assert exc.value.field == "stock"


def test_unreadable_legacy_price_is_invalid_selling_price(existing):
    with pytest.raises(InvalidNumber) as exc:
        normalize_item(parse_patch({"price": "cheap"}), existing)

    assert exc.value.field == "selling_price"


def test_price_inversion_on_create():
    patch = make_patch(name="Test", brand="B", category="C", stock=1, rawPrice=20, sellingPrice=10)

    with pytest.raises(PriceInversion):
        normalize_item(patch, is_create=True)


def test_price_inversion_on_update_against_existing_price(existing):
    with pytest.raises(PriceInversion):
        normalize_item(make_patch(rawPrice=500), existing)


def test_update_preserves_omitted_fields(existing):
    item = normalize_item(make_patch(stock=20), existing)

    assert item.stock == 20
    assert item.name == existing.name
    assert item.brand == existing.brand
    assert item.category == existing.category
    assert item.raw_price == existing.raw_price
    assert item.selling_price == existing.selling_price
    assert item.min_stock_alert == existing.min_stock_alert


def test_null_fields_fall_back_to_existing(existing):
    item = normalize_item(parse_patch({"name": None, "sellingPrice": None}), existing)

    assert item.name == existing.name
    assert item.selling_price == existing.selling_price


def test_normalize_does_not_touch_existing(existing):
    normalize_item(make_patch(stock=1, name="Renamed"), existing)

    assert existing.stock == 40
    assert existing.name == "Mesh Coil 0.8Ω"


def test_validation_errors_are_value_errors():
    assert issubclass(ItemValidationError, ValueError)
    with pytest.raises(ValueError):
        normalize_item(ItemPatch(), is_create=True)
