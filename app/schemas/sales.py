from pydantic import BaseModel, ConfigDict, Field


class SaleRecord(BaseModel):
    """A sale recorded during the current client session. Never sent to the server."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    date: str
    item_id: int = Field(alias="itemId")
    name: str
    brand: str
    category: str
    quantity: int
    selling_price: float = Field(alias="sellingPrice")
    total_amount: float = Field(alias="totalAmount")
