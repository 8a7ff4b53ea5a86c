"""Shared pytest fixtures and configuration for all tests."""

import os
from datetime import UTC, date, datetime
from decimal import Decimal

# Keep module-level app construction out of test collection
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402

from catering_inquiry_service.models.inquiry_models import FormType, InquiryItem  # noqa: E402
from catering_inquiry_service.models.menu_models import MenuCategory, MenuItem  # noqa: E402
from catering_inquiry_service.models.session_models import (  # noqa: E402
    InquirySession,
    empty_fields,
)
from catering_inquiry_service.services.pricing import PricingPolicy  # noqa: E402


@pytest.fixture
def today() -> date:
    """Fixture providing a fixed reference date for date rules."""
    return date(2024, 6, 1)


@pytest.fixture
def pricing() -> PricingPolicy:
    """Fixture providing a pricing policy with a 49 fee and a 500 threshold."""
    return PricingPolicy(delivery_fee=Decimal("49"), free_delivery_threshold=Decimal("500"))


@pytest.fixture
def menu_item() -> MenuItem:
    """Fixture providing a menu item without a minimum order quantity."""
    return MenuItem(
        id="item_1",
        name="Chicken Shawarma",
        description="Marinated chicken with garlic sauce",
        price=Decimal("180"),
        category=MenuCategory.MAINS,
        image_url="https://example.com/shawarma.jpg",
    )


@pytest.fixture
def platter_item() -> MenuItem:
    """Fixture providing a menu item that must be ordered in batches of ten."""
    return MenuItem(
        id="item_2",
        name="Falafel Platter",
        description="Falafel with hummus and pickles",
        price=Decimal("25"),
        category=MenuCategory.BITES,
        minimum_order_quantity=10,
        includes=["hummus", "pickles"],
    )


@pytest.fixture
def menu_rows() -> list[dict]:
    """Fixture providing menu rows as returned by the hosted menu table."""
    return [
        {
            "id": "item_1",
            "name": "Chicken Shawarma",
            "description": "Marinated chicken with garlic sauce",
            "price": 180,
            "category": "mains",
            "image_url": "https://example.com/shawarma.jpg",
            "available": True,
            "minimum_order_quantity": None,
            "includes": None,
        },
        {
            "id": "item_2",
            "name": "Falafel Platter",
            "description": "Falafel with hummus and pickles",
            "price": 25.5,
            "category": "bites",
            "image_url": None,
            "available": True,
            "minimum_order_quantity": 10,
            "includes": ["hummus", "pickles"],
        },
    ]


@pytest.fixture
def valid_contact_fields() -> dict[str, str]:
    """Fixture providing a complete, valid contact form draft."""
    return {
        "name": "Alex Svensson",
        "email": "alex@example.com",
        "phone": "0701234567",
        "eventDate": "2024-06-15",
        "guestCount": "12",
        "message": "We are planning a birthday lunch.",
    }


@pytest.fixture
def valid_careers_fields() -> dict[str, str]:
    """Fixture providing a complete, valid careers form draft."""
    return {
        "name": "Sam Berg",
        "email": "sam@example.com",
        "phone": "0709876543",
        "jobTitle": "Line Cook",
        "socialMedia": "",
        "message": "Five years on the grill at a busy bistro.",
    }


@pytest.fixture
def inquiry_items() -> list[InquiryItem]:
    """Fixture providing staged cart contents."""
    return [
        InquiryItem(id="item_1", name="Chicken Shawarma", price=Decimal("180"), quantity=1),
        InquiryItem(
            id="item_2",
            name="Falafel Platter",
            price=Decimal("25"),
            quantity=10,
            minimum_order_quantity=10,
        ),
    ]


@pytest.fixture
def contact_session() -> InquirySession:
    """Fixture providing a fresh contact session."""
    return InquirySession(
        session_id="inq_0123456789abcdef",
        form_type=FormType.CONTACT,
        fields=empty_fields(FormType.CONTACT),
        created_at=datetime(2024, 6, 1, 12, 0, tzinfo=UTC),
        expires_at=1717329600,
    )


@pytest.fixture
def careers_session() -> InquirySession:
    """Fixture providing a fresh careers session."""
    return InquirySession(
        session_id="inq_fedcba9876543210",
        form_type=FormType.CAREERS,
        fields=empty_fields(FormType.CAREERS),
        created_at=datetime(2024, 6, 1, 12, 0, tzinfo=UTC),
        expires_at=1717329600,
    )
