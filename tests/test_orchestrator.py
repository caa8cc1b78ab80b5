import requests

from app.client.api import InventoryApi
from app.client.forms import ItemForm, VariantEntry
from app.client.orchestrator import InventoryOrchestrator


def fill_form(orchestrator, **fields):
    orchestrator.open_add_form()
    values = dict(name="Mango Ice", brand="VapeX", category="Disposable", stock="12",
                  raw_price="200", selling_price="350")
    values.update(fields)
    orchestrator.form = orchestrator.form.model_copy(update=values)


def item_named(orchestrator, name):
    return next(item for item in orchestrator.items if item["name"] == name)


def test_load_items(orchestrator):
    assert orchestrator.load_items() is True

    assert len(orchestrator.items) == 5
    assert orchestrator.error == ""


def test_load_items_with_filter(orchestrator):
    orchestrator.load_items("vapex")

    assert [item["id"] for item in orchestrator.items] == [2, 4]
    assert orchestrator.search == "vapex"


def test_add_single_flavor(orchestrator):
    orchestrator.load_items()
    fill_form(orchestrator)

    assert orchestrator.submit_item_form() is True

    created = item_named(orchestrator, "Mango Ice")
    assert created["stock"] == 12
    assert created["minStockAlert"] == 10
    assert created["profit"] == 150
    assert orchestrator.notifications[-1].title == "Flavor added"
    assert orchestrator.form == ItemForm()


def test_add_pod_flavors_in_batch(orchestrator):
    orchestrator.load_items()
    fill_form(orchestrator, name="", category="Pods", stock="")
    orchestrator.variant_entries = [
        VariantEntry(name="Grape", stock="4"),
        VariantEntry(name="  ", stock="9"),
        VariantEntry(name="Lychee", stock="6"),
    ]

    assert orchestrator.submit_item_form() is True

    assert item_named(orchestrator, "Grape")["stock"] == 4
    assert item_named(orchestrator, "Lychee")["stock"] == 6
    assert len(orchestrator.items) == 7
    assert orchestrator.notifications[-1].title == "2 flavors added"
    assert orchestrator.variant_entries == [VariantEntry()]


def test_add_battery_colors_in_batch(orchestrator):
    fill_form(orchestrator, name="", category="battery")
    orchestrator.variant_entries = [VariantEntry(name="Red", stock="2"), VariantEntry(name="Blue", stock="3")]

    assert orchestrator.submit_item_form() is True
    assert orchestrator.notifications[-1].title == "2 colors added"


def test_batch_requires_a_variant(orchestrator):
    fill_form(orchestrator, category="Battery")

    assert orchestrator.submit_item_form() is False
    assert orchestrator.error == "Please provide at least one color with stock."


def test_invalid_form_is_kept_and_nothing_is_sent(orchestrator):
    orchestrator.load_items()
    fill_form(orchestrator, selling_price="150")
    submitted = orchestrator.form

    assert orchestrator.submit_item_form() is False

    assert orchestrator.error == "Selling price must be greater than or equal to raw price."
    assert orchestrator.form == submitted
    orchestrator.load_items()
    assert len(orchestrator.items) == 5


def test_invalid_stock_text(orchestrator):
    fill_form(orchestrator, stock="a dozen")

    assert orchestrator.submit_item_form() is False
    assert orchestrator.error == "Stock must be a valid non-negative number."


def test_edit_item(orchestrator):
    orchestrator.load_items()
    orchestrator.start_edit(item_named(orchestrator, "Mesh Coil 0.8Ω"))
    orchestrator.form = orchestrator.form.model_copy(update={"selling_price": "250"})

    assert orchestrator.submit_item_form() is True

    edited = item_named(orchestrator, "Mesh Coil 0.8Ω")
    assert edited["sellingPrice"] == 250
    assert edited["stock"] == 40
    assert orchestrator.editing_id is None
    assert orchestrator.notifications[-1].title == "Item updated"


def test_server_rejection_is_reported_and_form_kept(orchestrator):
    orchestrator.load_items()
    orchestrator.start_edit(item_named(orchestrator, "Pod Cartridge 2ml"))
    orchestrator.form = orchestrator.form.model_copy(update={"name": "   "})

    assert orchestrator.submit_item_form() is False

    assert orchestrator.error == "Name, brand, and category are required."
    assert orchestrator.notifications[-1].level == "error"
    assert orchestrator.notifications[-1].title == "Save failed"
    assert orchestrator.editing_id == 4


def test_add_stock(orchestrator):
    orchestrator.load_items()

    assert orchestrator.add_stock(2, "5") is True

    assert item_named(orchestrator, "Mint Freeze Disposable")["stock"] == 20
    assert orchestrator.notifications[-1].text == "Added 5 stock to Mint Freeze Disposable."


def test_add_stock_rejects_non_positive_quantity(orchestrator):
    orchestrator.load_items()

    assert orchestrator.add_stock(2, "0") is False

    assert orchestrator.notifications[-1].title == "Invalid quantity"
    assert orchestrator.stock_form.quantity == "0"


def test_fractional_quantity_asks_for_whole_number(orchestrator):
    orchestrator.load_items()

    assert orchestrator.record_sale(1, "2.5") is False

    assert orchestrator.notifications[-1].title == "Invalid quantity"
    assert orchestrator.notifications[-1].text == "Sale quantity must be a whole number."
    orchestrator.load_items()
    assert item_named(orchestrator, "Strawberry Milk 60ml")["stock"] == 24


def test_record_sale(orchestrator):
    orchestrator.load_items()

    assert orchestrator.record_sale(1, 4) is True

    assert item_named(orchestrator, "Strawberry Milk 60ml")["stock"] == 20
    sale = orchestrator.sales_log[0]
    assert sale.item_id == 1
    assert sale.quantity == 4
    assert sale.selling_price == 450
    assert sale.total_amount == 1800
    assert sale.date.endswith("Z")

    summary = orchestrator.sales()
    assert summary.total_revenue == 1800
    assert summary.total_units == 4


def test_newest_sale_comes_first(orchestrator):
    orchestrator.load_items()
    orchestrator.record_sale(1, 1)
    orchestrator.record_sale(2, 1)

    assert [sale.item_id for sale in orchestrator.sales_log] == [2, 1]


def test_sale_above_stock_is_rejected_locally(orchestrator):
    orchestrator.load_items()

    assert orchestrator.record_sale(5, 13) is False

    assert orchestrator.notifications[-1].title == "Not enough stock"
    assert orchestrator.notifications[-1].text == "Battery 18650 3000mAh only has 12 stocks available."
    assert orchestrator.sales_log == []
    orchestrator.load_items()
    assert item_named(orchestrator, "Battery 18650 3000mAh")["stock"] == 12


def test_sale_of_unknown_item(orchestrator):
    orchestrator.load_items()

    assert orchestrator.record_sale(99, 1) is False
    assert orchestrator.notifications[-1].title == "Invalid item"


def test_open_forms_need_items(orchestrator):
    assert orchestrator.open_sale_form() is False
    assert orchestrator.notifications[-1].title == "No products yet"

    orchestrator.load_items()
    assert orchestrator.open_stock_form() is True
    assert orchestrator.stock_form.item_id == "1"


def test_reload_keeps_search_filter(orchestrator):
    orchestrator.load_items("vapex")

    orchestrator.add_stock(4, 2)

    assert [item["id"] for item in orchestrator.items] == [2, 4]
    assert orchestrator.items[1]["stock"] == 30


def test_delete_item(orchestrator):
    orchestrator.load_items()

    assert orchestrator.delete_item(3, "Mesh Coil 0.8Ω") is True

    assert [item["id"] for item in orchestrator.items] == [1, 2, 4, 5]
    assert orchestrator.notifications[-1].text == "Mesh Coil 0.8Ω was removed from inventory."


def test_delete_missing_item(orchestrator):
    assert orchestrator.delete_item(77, "Ghost") is False

    assert orchestrator.error == "Item not found."
    assert orchestrator.notifications[-1].title == "Delete failed"


def test_dashboard_follows_loaded_items(orchestrator):
    orchestrator.load_items()
    before = orchestrator.dashboard().totals.total_stock

    orchestrator.record_sale(3, 10)

    assert orchestrator.dashboard().totals.total_stock == before - 10


def test_variant_entries_keep_at_least_one(orchestrator):
    orchestrator.remove_variant_entry(0)
    assert len(orchestrator.variant_entries) == 1

    orchestrator.add_variant_entry()
    orchestrator.update_variant_entry(1, name="Peach")
    orchestrator.remove_variant_entry(0)
    assert orchestrator.variant_entries == [VariantEntry(name="Peach")]


class UnreachableSession:
    def get(self, *args, **kwargs):
        raise requests.ConnectionError("Connection refused")


def test_network_failure_is_reported():
    orchestrator = InventoryOrchestrator(InventoryApi(base_url="http://offline/api", session=UnreachableSession()))

    assert orchestrator.load_items() is False

    assert orchestrator.error == "Connection refused"
    assert orchestrator.loading is False
