"""Order models.

Orders are not persisted by this service. The models describe the shape an
order would take if order persistence is added, so that the cross-field
total check in the schema validators has a concrete input.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class DeliveryMethod(str, Enum):
    """Enumeration of delivery methods."""

    DELIVERY = "delivery"
    PICKUP = "pickup"


class OrderItem(BaseModel):
    """A single line of an order."""

    id: str = Field(..., description="Menu item identifier")
    name: str = Field(..., description="Item name", min_length=2, max_length=100)
    price: Decimal = Field(..., description="Unit price", gt=0, le=100000)
    quantity: int = Field(..., description="Ordered quantity", ge=1, le=100)


class OrderSubmission(BaseModel):
    """An order as submitted by a customer."""

    customer_name: str = Field(..., min_length=2, max_length=100)
    customer_email: str = Field(..., min_length=1, max_length=255)
    customer_phone: str = Field(..., min_length=1)
    delivery_method: DeliveryMethod
    delivery_address: str = ""
    total_amount: Decimal = Field(..., gt=0)
    notes: str | None = Field(None, max_length=1000)
    items: list[OrderItem] = Field(..., min_length=1, max_length=50)
