"""Inquiry cart and form submission models.

InquiryItem is the staged copy of a menu item in an inquiry cart. The
submission models are transient: they exist for the duration of a single
submission attempt and are never persisted.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FormType(str, Enum):
    """Enumeration of the forms that can be submitted."""

    CONTACT = "contact"
    CAREERS = "careers"


# Draft field names per form, in display order
FORM_FIELDS: dict[FormType, tuple[str, ...]] = {
    FormType.CONTACT: ("name", "email", "phone", "eventDate", "guestCount", "message"),
    FormType.CAREERS: ("name", "email", "phone", "jobTitle", "socialMedia", "message"),
}


class InquiryItem(BaseModel):
    """A menu item staged in an inquiry cart.

    The price is copied from the menu item when it is added, so later menu
    price changes do not affect an open inquiry.
    """

    id: str = Field(..., description="Identifier of the referenced menu item")
    name: str = Field(..., description="Item name")
    price: Decimal = Field(..., description="Unit price at the time the item was added", ge=0)
    quantity: int = Field(..., description="Requested quantity", ge=1)
    minimum_order_quantity: int | None = Field(
        None, description="Minimum order quantity copied from the menu item", ge=1
    )
    image_url: str | None = Field(None, description="URL to item image")

    @property
    def order_floor(self) -> int:
        """Smallest quantity the item may be decremented to."""
        return max(1, self.minimum_order_quantity or 1)

    @property
    def line_total(self) -> Decimal:
        """Price multiplied by quantity."""
        return self.price * self.quantity

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB map format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }

        if self.minimum_order_quantity is not None:
            item["minimum_order_quantity"] = self.minimum_order_quantity

        if self.image_url is not None:
            item["image_url"] = self.image_url

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "InquiryItem":
        """Create InquiryItem from a DynamoDB map.

        Args:
            item: DynamoDB map attribute

        Returns:
            InquiryItem: Parsed model instance
        """
        moq = item.get("minimum_order_quantity")
        return cls(
            id=item["id"],
            name=item["name"],
            price=Decimal(str(item["price"])),
            quantity=int(item["quantity"]),
            minimum_order_quantity=int(moq) if moq is not None else None,
            image_url=item.get("image_url"),
        )


class CartTotals(BaseModel):
    """Derived pricing summary for an inquiry cart."""

    item_count: int = Field(..., description="Total quantity across all items", ge=0)
    subtotal: Decimal = Field(..., description="Sum of price times quantity", ge=0)
    delivery_fee: Decimal = Field(..., description="Delivery fee, zero when waived", ge=0)
    total: Decimal = Field(..., description="Subtotal plus delivery fee", ge=0)
    qualifies_for_free_delivery: bool = Field(
        ..., description="Whether the subtotal reached the free delivery threshold"
    )
    amount_until_free_delivery: Decimal = Field(
        ..., description="Amount still needed to reach free delivery", ge=0
    )


class ContactSubmission(BaseModel):
    """A validated catering inquiry."""

    name: str
    email: str
    phone: str | None = None
    event_date: date | None = None
    guest_count: int | None = None
    message: str | None = None
    items: list[InquiryItem] = Field(default_factory=list)


class CareersSubmission(BaseModel):
    """A validated job application."""

    name: str
    email: str
    phone: str
    job_title: str
    social_media: str | None = None
    message: str
