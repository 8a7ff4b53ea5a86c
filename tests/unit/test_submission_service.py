"""Unit tests for the submission dispatcher."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from catering_inquiry_service.adapters.base_adapter import (
    EmailRelayAdapter,
    RelayConfigurationError,
)
from catering_inquiry_service.models.inquiry_models import (
    CareersSubmission,
    ContactSubmission,
    FormType,
    InquiryItem,
)
from catering_inquiry_service.services.pricing import PricingPolicy
from catering_inquiry_service.services.submission_service import (
    MISCONFIGURED_MESSAGE,
    RELAY_FAILED_MESSAGE,
    SUCCESS_MESSAGES,
    VALIDATION_FAILED_MESSAGE,
    SubmissionOutcome,
    SubmissionService,
)


@pytest.fixture
def mock_relay() -> MagicMock:
    """Relay that builds a simple payload and accepts every message."""
    relay = MagicMock(spec=EmailRelayAdapter)
    relay.relay_name = "web3forms"
    relay.build_payload.side_effect = lambda **kwargs: {"access_key": "key", **kwargs}
    relay.send_message = AsyncMock(return_value=True)
    return relay


@pytest.fixture
def service(mock_relay: MagicMock, pricing: PricingPolicy) -> SubmissionService:
    """Submission service wired to the mocked relay."""
    return SubmissionService(relay=mock_relay, pricing=pricing, contact_email="hello@example.com")


@pytest.mark.unit
class TestDispatch:
    """Tests for SubmissionService.dispatch."""

    @pytest.mark.asyncio
    async def test_contact_success(
        self,
        service: SubmissionService,
        mock_relay: MagicMock,
        valid_contact_fields: dict[str, str],
        inquiry_items: list[InquiryItem],
        today: date,
    ) -> None:
        """Test that a valid contact form is sent with its cart summary."""
        result = await service.dispatch(
            FormType.CONTACT, valid_contact_fields, items=inquiry_items, today=today
        )

        assert result.success is True
        assert result.outcome == SubmissionOutcome.SENT
        assert result.message == SUCCESS_MESSAGES[FormType.CONTACT]
        assert result.errors == {}

        kwargs = mock_relay.build_payload.call_args.kwargs
        assert kwargs["subject"] == "Catering Inquiry from Alex Svensson"
        assert kwargs["name"] == "Alex Svensson"
        assert kwargs["email"] == "alex@example.com"
        assert "Items of Interest (11):" in kwargs["message"]
        mock_relay.send_message.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_careers_success(
        self,
        service: SubmissionService,
        mock_relay: MagicMock,
        valid_careers_fields: dict[str, str],
        today: date,
    ) -> None:
        """Test that a valid careers form is sent."""
        result = await service.dispatch(FormType.CAREERS, valid_careers_fields, today=today)

        assert result.success is True
        assert result.message == SUCCESS_MESSAGES[FormType.CAREERS]
        kwargs = mock_relay.build_payload.call_args.kwargs
        assert kwargs["subject"] == "Job Application: Line Cook - Sam Berg"

    @pytest.mark.asyncio
    async def test_invalid_form_makes_no_relay_call(
        self, service: SubmissionService, mock_relay: MagicMock, today: date
    ) -> None:
        """Test that validation errors stop the submission before the network."""
        result = await service.dispatch(
            FormType.CAREERS,
            {"name": "Sam", "email": "not-an-email", "message": "a" * 9},
            today=today,
        )

        assert result.success is False
        assert result.outcome == SubmissionOutcome.INVALID
        assert result.message == VALIDATION_FAILED_MESSAGE
        assert result.errors["email"] == "Please enter a valid email address"
        assert result.errors["message"] == "Please tell us a bit more (at least 10 characters)"
        assert set(result.errors) == {"email", "phone", "jobTitle", "message"}
        mock_relay.build_payload.assert_not_called()
        mock_relay.send_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_relay_failure_shows_generic_message(
        self,
        service: SubmissionService,
        mock_relay: MagicMock,
        valid_contact_fields: dict[str, str],
        today: date,
    ) -> None:
        """Test that relay failures never leak relay details to the user."""
        mock_relay.send_message.return_value = False

        result = await service.dispatch(FormType.CONTACT, valid_contact_fields, today=today)

        assert result.success is False
        assert result.outcome == SubmissionOutcome.RELAY_FAILED
        assert result.message == f"{RELAY_FAILED_MESSAGE} at hello@example.com"

    @pytest.mark.asyncio
    async def test_relay_failure_without_contact_email(
        self, mock_relay: MagicMock, valid_contact_fields: dict[str, str], today: date
    ) -> None:
        """Test the generic message when no contact address is configured."""
        mock_relay.send_message.return_value = False
        service = SubmissionService(relay=mock_relay)

        result = await service.dispatch(FormType.CONTACT, valid_contact_fields, today=today)

        assert result.message == RELAY_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_missing_configuration(
        self,
        service: SubmissionService,
        mock_relay: MagicMock,
        valid_contact_fields: dict[str, str],
        today: date,
    ) -> None:
        """Test that a missing access key produces a generic message and no request."""
        mock_relay.build_payload.side_effect = RelayConfigurationError("not configured")

        result = await service.dispatch(FormType.CONTACT, valid_contact_fields, today=today)

        assert result.outcome == SubmissionOutcome.MISCONFIGURED
        assert result.message == MISCONFIGURED_MESSAGE
        mock_relay.send_message.assert_not_called()


@pytest.mark.unit
class TestComposeMessages:
    """Tests for the email bodies."""

    def test_contact_message_with_cart(
        self, service: SubmissionService, inquiry_items: list[InquiryItem]
    ) -> None:
        """Test the contact body with event details and an itemized cart."""
        submission = ContactSubmission(
            name="Alex",
            email="alex@example.com",
            phone="0701234567",
            event_date=date(2024, 6, 15),
            guest_count=12,
            message="Birthday lunch",
            items=inquiry_items,
        )

        subject, message = service.compose_contact_message(submission)

        assert subject == "Catering Inquiry from Alex"
        assert message == "\n".join(
            [
                "Phone: 0701234567",
                "Event Date: 2024-06-15",
                "Number of Guests: 12",
                "",
                "Message:",
                "Birthday lunch",
                "",
                "Items of Interest (11):",
                "- Chicken Shawarma x 1 @ 180.00 SEK = 180.00 SEK",
                "- Falafel Platter x 10 @ 25.00 SEK = 250.00 SEK",
                "",
                "Subtotal: 430.00 SEK",
                "Delivery Fee: 49.00 SEK",
                "Estimated Total: 479.00 SEK",
                "",
                "---",
                "Submitted from the Catering Inquiry Form",
            ]
        )

    def test_contact_message_without_optional_fields(self, service: SubmissionService) -> None:
        """Test that absent optional fields render as not provided and the cart is omitted."""
        submission = ContactSubmission(name="Alex", email="alex@example.com")

        _subject, message = service.compose_contact_message(submission)

        assert "Phone: Not provided" in message
        assert "Event Date: Not provided" in message
        assert "Number of Guests: Not provided" in message
        assert "Items of Interest" not in message

    def test_cart_summary_with_free_delivery(self, service: SubmissionService) -> None:
        """Test that a waived fee is shown as free."""
        items = [InquiryItem(id="tray", name="Mezze Tray", price=Decimal("300"), quantity=2)]

        lines = service.render_cart_summary(items)

        assert "Delivery Fee: FREE" in lines
        assert "Estimated Total: 600.00 SEK" in lines

    def test_careers_message(self, service: SubmissionService) -> None:
        """Test the careers body."""
        submission = CareersSubmission(
            name="Sam",
            email="sam@example.com",
            phone="0709876543",
            job_title="Line Cook",
            social_media="https://instagram.com/samcooks",
            message="Five years on the grill.",
        )

        subject, message = service.compose_careers_message(submission)

        assert subject == "Job Application: Line Cook - Sam"
        assert message.startswith("JOB APPLICATION\n\nPosition: Line Cook")
        assert "Social Media: https://instagram.com/samcooks" in message
        assert "About Them:\nFive years on the grill." in message
        assert message.endswith("---\nSubmitted from the Careers Page")

    def test_careers_message_without_social_media(self, service: SubmissionService) -> None:
        """Test that the social media line is omitted when not provided."""
        submission = CareersSubmission(
            name="Sam",
            email="sam@example.com",
            phone="0709876543",
            job_title="Line Cook",
            message="Five years on the grill.",
        )

        _subject, message = service.compose_careers_message(submission)

        assert "Social Media" not in message
