"""Menu data models.

These models represent menu items as published by the hosted menu table.
Menu items are managed by the admin dashboard and are read-only from the
inquiry flow's perspective.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MenuCategory(str, Enum):
    """Enumeration of menu categories."""

    FEATURED = "featured"
    SPECIALS = "specials"
    MAINS = "mains"
    SNACKS = "snacks"
    DRINKS = "drinks"
    DESSERTS = "desserts"
    BITES = "bites"


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(json_encoders={Decimal: str})

    id: str = Field(..., description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name")
    description: str | None = Field(None, description="Item description")
    price: Decimal = Field(..., description="Item price", ge=0)
    category: MenuCategory = Field(..., description="Category this item belongs to")
    image_url: str | None = Field(None, description="URL to item image")
    available: bool = Field(default=True, description="Whether item is currently available")
    minimum_order_quantity: int | None = Field(
        None, description="Smallest quantity that can be ordered", ge=1
    )
    includes: list[str] | None = Field(None, description="Sub-items included with this item")

    @property
    def order_floor(self) -> int:
        """Smallest quantity this item may be staged with."""
        return max(1, self.minimum_order_quantity or 1)
