import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel

from app.client.api import InventoryApi, InventoryApiError
from app.client.forms import (
    ItemForm,
    QuantityForm,
    VariantEntry,
    find_item,
    is_positive_quantity,
    parse_number,
    validate_item_form,
)
from app.logger_config import logger
from app.schemas.dashboard import DashboardSummary, SalesSummary
from app.schemas.sales import SaleRecord
from app.services.analytics import (
    build_dashboard,
    min_stock_alert_of,
    raw_price_of,
    sales_summary,
    selling_price_of,
    stock_of,
)

ClientError = (InventoryApiError, requests.RequestException)


class Notification(BaseModel):
    level: str
    title: str
    text: str = ""


class InventoryOrchestrator:
    """
    Client-side state for the inventory screens: the loaded item list, the
    add/edit/stock/sale forms, the session sales log and the notifications
    shown to the user.

    Each flow validates locally, calls the API, and on success resets its
    form and reloads the current (filtered) list. On failure the form is
    left as the user typed it and an error notification is queued.
    """

    def __init__(self, api: Optional[InventoryApi] = None):
        self.api = api or InventoryApi()
        self.items: List[Dict[str, Any]] = []
        self.search = ""
        self.loading = False
        self.error = ""
        self.notifications: List[Notification] = []
        self.sales_log: List[SaleRecord] = []

        self.form = ItemForm()
        self.editing_id: Optional[int] = None
        self.variant_entries: List[VariantEntry] = [VariantEntry()]
        self.stock_form = QuantityForm()
        self.sale_form = QuantityForm()

    # -- derived views -------------------------------------------------

    def dashboard(self) -> DashboardSummary:
        return build_dashboard(self.items)

    def sales(self) -> SalesSummary:
        return sales_summary(self.sales_log)

    # -- notifications -------------------------------------------------

    def notify(self, level: str, title: str, text: str = ""):
        self.notifications.append(Notification(level=level, title=title, text=text))
        log = logger.info if level in ("success", "info") else logger.warning
        log(f"[{level}] {title} {text}".rstrip())

    # -- loading -------------------------------------------------------

    def load_items(self, query: Optional[str] = None) -> bool:
        if query is not None:
            self.search = query
        self.loading = True
        self.error = ""
        try:
            self.items = self.api.list_items(self.search.strip())
            return True
        except ClientError as e:
            self.error = str(e) or "Could not load inventory."
            return False
        finally:
            self.loading = False

    # -- add / edit ----------------------------------------------------

    def reset_form(self):
        self.form = ItemForm()
        self.editing_id = None
        self.variant_entries = [VariantEntry()]

    def open_add_form(self):
        self.reset_form()
        self.form = ItemForm.for_new_item()
        self.error = ""

    def start_edit(self, item: Dict[str, Any]):
        self.editing_id = item["id"]
        self.form = ItemForm.from_item(item)
        self.error = ""

    def add_variant_entry(self):
        self.variant_entries.append(VariantEntry())

    def update_variant_entry(self, index: int, **fields):
        entry = self.variant_entries[index]
        self.variant_entries[index] = entry.model_copy(update=fields)

    def remove_variant_entry(self, index: int):
        if len(self.variant_entries) <= 1:
            return
        del self.variant_entries[index]

    def submit_item_form(self) -> bool:
        """Create one item, a batch of variants, or save an edit."""
        self.error = ""
        editing = self.editing_id is not None
        is_battery = self.form.is_battery

        try:
            validated = validate_item_form(self.form, self.variant_entries, editing)
        except ValueError as e:
            self.error = str(e)
            return False

        created_count = 0
        try:
            if editing:
                self.api.update_item(self.editing_id, validated.payload)
            else:
                for entry in validated.entries:
                    self.api.create_item({**validated.payload, **entry})
                    created_count += 1
                if created_count == 0:
                    raise InventoryApiError("No flavors were added.", 400)
        except ClientError as e:
            message = str(e) or "Could not save inventory item."
            self.error = message
            self.notify("error", "Save failed", message)
            return False

        self.reset_form()
        self.load_items()

        if editing:
            title = "Item updated"
        elif created_count > 1:
            title = f"{created_count} {'colors' if is_battery else 'flavors'} added"
        else:
            title = "Color added" if is_battery else "Flavor added"
        self.notify("success", title)
        return True

    # -- delete --------------------------------------------------------

    def delete_item(self, item_id: int, name: str = "") -> bool:
        self.error = ""
        try:
            self.api.delete_item(item_id)
        except ClientError as e:
            message = str(e) or "Could not delete inventory item."
            self.error = message
            self.notify("error", "Delete failed", message)
            return False

        if self.editing_id == item_id:
            self.reset_form()

        self.load_items()
        self.notify("success", "Deleted", f"{name or 'Item'} was removed from inventory.")
        return True

    # -- stock and sales -----------------------------------------------

    def _selected_payload(self, item: Dict[str, Any], stock: int) -> Dict[str, Any]:
        return {
            "name": item["name"],
            "brand": item["brand"],
            "category": item["category"],
            "stock": stock,
            "rawPrice": raw_price_of(item),
            "sellingPrice": selling_price_of(item),
            "minStockAlert": min_stock_alert_of(item),
        }

    def open_stock_form(self) -> bool:
        if not self.items:
            self.notify("info", "No products yet", "Add products first before adding stock.")
            return False
        self.stock_form = QuantityForm(item_id=str(self.items[0]["id"]))
        return True

    def open_sale_form(self) -> bool:
        if not self.items:
            self.notify("info", "No products yet", "Add products first before recording a sale.")
            return False
        self.sale_form = QuantityForm(item_id=str(self.items[0]["id"]))
        return True

    def _read_quantity_form(self, form: QuantityForm, label: str):
        item = find_item(self.items, form.item_id)
        if item is None:
            self.notify("error", "Invalid item", "Please select a valid product.")
            return None, None
        quantity = parse_number(form.quantity)
        if not is_positive_quantity(quantity):
            self.notify("error", "Invalid quantity", f"{label} quantity must be greater than 0.")
            return None, None
        if quantity != int(quantity):
            self.notify("error", "Invalid quantity", f"{label} quantity must be a whole number.")
            return None, None
        return item, int(quantity)

    def submit_stock_form(self) -> bool:
        item, quantity = self._read_quantity_form(self.stock_form, "Stock")
        if item is None:
            return False

        payload = self._selected_payload(item, stock_of(item) + quantity)
        try:
            self.api.update_item(item["id"], payload, fallback="Failed to add stock.")
        except ClientError as e:
            self.notify("error", "Update failed", str(e) or "Could not add stock.")
            return False

        self.stock_form = QuantityForm()
        self.load_items()
        self.notify("success", "Stock updated", f"Added {quantity} stock to {item['name']}.")
        return True

    def submit_sale_form(self) -> bool:
        item, quantity = self._read_quantity_form(self.sale_form, "Sale")
        if item is None:
            return False

        current_stock = stock_of(item)
        if quantity > current_stock:
            self.notify(
                "warning",
                "Not enough stock",
                f"{item['name']} only has {current_stock} stocks available.",
            )
            return False

        payload = self._selected_payload(item, current_stock - quantity)
        try:
            self.api.update_item(item["id"], payload, fallback="Failed to record sale.")
        except ClientError as e:
            self.notify("error", "Sale failed", str(e) or "Could not record sale.")
            return False

        selling_price = selling_price_of(item)
        sale = SaleRecord(
            id=int(time.time() * 1000),
            date=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            item_id=item["id"],
            name=item["name"],
            brand=item["brand"],
            category=item["category"],
            quantity=quantity,
            selling_price=selling_price,
            total_amount=selling_price * quantity,
        )
        self.sales_log.insert(0, sale)

        self.sale_form = QuantityForm()
        self.load_items()
        self.notify("success", "Sale recorded", f"Sold {quantity} units of {item['name']}.")
        return True

    def add_stock(self, item_id: int, quantity: Any) -> bool:
        self.stock_form = QuantityForm(item_id=str(item_id), quantity=str(quantity))
        return self.submit_stock_form()

    def record_sale(self, item_id: int, quantity: Any) -> bool:
        self.sale_form = QuantityForm(item_id=str(item_id), quantity=str(quantity))
        return self.submit_sale_form()
