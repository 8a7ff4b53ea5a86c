"""Whole-form validation run before any submission leaves the service."""

import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal

from catering_inquiry_service.models.inquiry_models import (
    FORM_FIELDS,
    CareersSubmission,
    ContactSubmission,
    FormType,
    InquiryItem,
)
from catering_inquiry_service.models.order_models import DeliveryMethod, OrderSubmission
from catering_inquiry_service.services.pricing import PricingPolicy
from catering_inquiry_service.validation.field_validators import validate_field

logger = logging.getLogger(__name__)

TOTAL_TOLERANCE = Decimal("0.01")
MIN_DELIVERY_ADDRESS_LENGTH = 2


def validate_form(
    form_type: FormType,
    data: Mapping[str, str | None],
    today: date | None = None,
) -> dict[str, str]:
    """Validate every field of a form and collect all errors.

    Args:
        form_type: The form being submitted
        data: Raw field values keyed by field name
        today: Reference date for date rules (defaults to today)

    Returns:
        Mapping of field name to error message, empty if the form is valid
    """
    errors: dict[str, str] = {}
    for field_name in FORM_FIELDS[form_type]:
        error = validate_field(field_name, data.get(field_name), form_type, today=today)
        if error:
            errors[field_name] = error

    if errors:
        logger.info(f"{form_type.value} form failed validation on {', '.join(sorted(errors))}")

    return errors


def _optional(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def build_contact_submission(
    data: Mapping[str, str | None], items: list[InquiryItem]
) -> ContactSubmission:
    """Convert a validated contact draft into a typed submission.

    Empty optional fields become None so "not provided" is never confused
    with "provided but empty".
    """
    event_date = _optional(data.get("eventDate"))
    guest_count = _optional(data.get("guestCount"))

    return ContactSubmission(
        name=(data.get("name") or "").strip(),
        email=(data.get("email") or "").strip(),
        phone=_optional(data.get("phone")),
        event_date=date.fromisoformat(event_date) if event_date else None,
        guest_count=int(guest_count) if guest_count else None,
        message=_optional(data.get("message")),
        items=list(items),
    )


def build_careers_submission(data: Mapping[str, str | None]) -> CareersSubmission:
    """Convert a validated careers draft into a typed submission."""
    return CareersSubmission(
        name=(data.get("name") or "").strip(),
        email=(data.get("email") or "").strip(),
        phone=(data.get("phone") or "").strip(),
        job_title=(data.get("jobTitle") or "").strip(),
        social_media=_optional(data.get("socialMedia")),
        message=(data.get("message") or "").strip(),
    )


def validate_order(order: OrderSubmission, pricing: PricingPolicy | None = None) -> dict[str, str]:
    """Apply the cross-field rules of an order.

    The total must equal the item subtotal plus the delivery fee (charged for
    delivery orders only) within one cent, and delivery orders need an address.

    Args:
        order: Order with field-level constraints already enforced by the model
        pricing: Pricing configuration supplying the delivery fee

    Returns:
        Mapping of field name to error message, empty if the order is consistent
    """
    pricing = pricing or PricingPolicy()
    errors: dict[str, str] = {}

    if (
        order.delivery_method == DeliveryMethod.DELIVERY
        and len(order.delivery_address.strip()) < MIN_DELIVERY_ADDRESS_LENGTH
    ):
        errors["delivery_address"] = "Delivery address is required for delivery orders"

    subtotal = sum((item.price * item.quantity for item in order.items), Decimal("0"))
    fee = pricing.delivery_fee if order.delivery_method == DeliveryMethod.DELIVERY else Decimal("0")
    if abs(subtotal + fee - order.total_amount) >= TOTAL_TOLERANCE:
        errors["total_amount"] = "Total amount does not match cart items and delivery fee"

    return errors
