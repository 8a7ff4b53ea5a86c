"""Inquiry session model.

An inquiry session is the context object owned by a single browser session:
one form draft and one inquiry cart. It is stored in DynamoDB with
session_id as partition key and expires through the table's TTL attribute.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from catering_inquiry_service.models.inquiry_models import FORM_FIELDS, FormType, InquiryItem


def empty_fields(form_type: FormType) -> dict[str, str]:
    """Return a blank draft for the given form."""
    return {name: "" for name in FORM_FIELDS[form_type]}


class InquirySession(BaseModel):
    """Form draft and inquiry cart for one visitor."""

    session_id: str = Field(..., description="Unique session identifier")
    form_type: FormType = Field(..., description="Form this session is filling in")
    fields: dict[str, str] = Field(default_factory=dict, description="Draft field values")
    items: list[InquiryItem] = Field(default_factory=list, description="Inquiry cart contents")
    submitting: bool = Field(default=False, description="Whether a submission is in flight")
    submitting_since: datetime | None = Field(
        None, description="When the in-flight submission started"
    )
    created_at: datetime = Field(..., description="Session creation timestamp")
    expires_at: int | None = Field(None, description="Expiry as epoch seconds (DynamoDB TTL)")

    def reset(self) -> None:
        """Clear the form draft and the cart after a successful submission."""
        self.fields = empty_fields(self.form_type)
        self.items = []

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "session_id": self.session_id,
            "form_type": self.form_type.value,
            "fields": dict(self.fields),
            "items": [i.to_dynamodb_item() for i in self.items],
            "submitting": self.submitting,
            "created_at": self.created_at.isoformat(),
        }

        if self.submitting_since is not None:
            item["submitting_since"] = self.submitting_since.isoformat()

        if self.expires_at is not None:
            item["expires_at"] = self.expires_at

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "InquirySession":
        """Create InquirySession from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            InquirySession: Parsed model instance
        """
        form_type = FormType(item["form_type"])
        fields = empty_fields(form_type)
        fields.update(item.get("fields", {}))

        data: dict[str, Any] = {
            "session_id": item["session_id"],
            "form_type": form_type,
            "fields": fields,
            "items": [InquiryItem.from_dynamodb_item(i) for i in item.get("items", [])],
            "submitting": bool(item.get("submitting", False)),
            "created_at": datetime.fromisoformat(item["created_at"]),
        }

        if item.get("submitting_since"):
            data["submitting_since"] = datetime.fromisoformat(item["submitting_since"])

        if "expires_at" in item:
            data["expires_at"] = int(item["expires_at"])

        return cls(**data)
