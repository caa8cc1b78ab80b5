"""Domain errors raised by the item services and mapped to HTTP responses."""


class InventoryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ItemValidationError(InventoryError, ValueError):
    """An item payload failed validation. Nothing was written."""
    status_code = 400


class MissingField(ItemValidationError):
    pass


class InvalidNumber(ItemValidationError):
    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


class PriceInversion(ItemValidationError):
    pass


class MissingPriceOnCreate(ItemValidationError):
    pass


class ItemNotFound(InventoryError, LookupError):
    status_code = 404

    def __init__(self, item_id: int, message: str = "Item not found."):
        super().__init__(message)
        self.item_id = item_id
