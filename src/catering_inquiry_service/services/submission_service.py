"""Submission dispatcher for the contact and careers forms."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

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
from catering_inquiry_service.observability import traced
from catering_inquiry_service.observability.metrics import (
    record_submission_failure,
    record_submission_success,
    record_validation_failure,
)
from catering_inquiry_service.services.inquiry_cart import InquiryCart
from catering_inquiry_service.services.pricing import PricingPolicy
from catering_inquiry_service.validation.schema_validators import (
    build_careers_submission,
    build_contact_submission,
    validate_form,
)

logger = logging.getLogger(__name__)

NOT_PROVIDED = "Not provided"

SUCCESS_MESSAGES = {
    FormType.CONTACT: "Thank you for your inquiry! We will get back to you soon.",
    FormType.CAREERS: "Thank you for your application! We will review it and get back to you soon.",
}
VALIDATION_FAILED_MESSAGE = "Please fix the errors in the form"
MISCONFIGURED_MESSAGE = "Something went wrong on our end."
RELAY_FAILED_MESSAGE = "Something went wrong. Please try again or contact us directly"


class SubmissionOutcome(str, Enum):
    """Enumeration of submission outcomes."""

    SENT = "sent"
    INVALID = "invalid"
    RELAY_FAILED = "relay_failed"
    MISCONFIGURED = "misconfigured"
    IN_PROGRESS = "in_progress"


@dataclass
class SubmissionResult:
    """Result of one submission attempt.

    Attributes:
        outcome: What happened to the submission
        message: User-facing status message, never a relay error string
        errors: Field errors when validation failed
    """

    outcome: SubmissionOutcome
    message: str
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.outcome == SubmissionOutcome.SENT


class SubmissionService:
    """Validates a form and forwards it to the email relay.

    One relay call per submission: no retry loop, no backoff and no
    idempotency key. Relay and configuration failures are logged here and
    replaced with a generic message.
    """

    def __init__(
        self,
        relay: EmailRelayAdapter,
        pricing: PricingPolicy | None = None,
        contact_email: str | None = None,
    ) -> None:
        """Initialize the SubmissionService.

        Args:
            relay: Adapter for the email relay
            pricing: Pricing configuration for the cart summary
            contact_email: Address shown to users when delivery fails
        """
        self.relay = relay
        self.pricing = pricing or PricingPolicy()
        self.contact_email = contact_email

    @property
    def relay_failed_message(self) -> str:
        if self.contact_email:
            return f"{RELAY_FAILED_MESSAGE} at {self.contact_email}"
        return RELAY_FAILED_MESSAGE

    @traced("dispatch_submission", attributes={"relay": "web3forms"})
    async def dispatch(
        self,
        form_type: FormType,
        fields: Mapping[str, str | None],
        items: list[InquiryItem] | None = None,
        today: date | None = None,
    ) -> SubmissionResult:
        """Validate and send a form submission.

        Args:
            form_type: The form being submitted
            fields: Raw field values keyed by field name
            items: Inquiry cart contents (contact form only)
            today: Reference date for date rules (defaults to today)

        Returns:
            SubmissionResult describing the outcome
        """
        errors = validate_form(form_type, fields, today=today)
        if errors:
            record_validation_failure(form_type.value, len(errors))
            return SubmissionResult(
                outcome=SubmissionOutcome.INVALID,
                message=VALIDATION_FAILED_MESSAGE,
                errors=errors,
            )

        if form_type == FormType.CONTACT:
            contact = build_contact_submission(fields, items or [])
            subject, message = self.compose_contact_message(contact)
            name, email = contact.name, contact.email
        else:
            careers = build_careers_submission(fields)
            subject, message = self.compose_careers_message(careers)
            name, email = careers.name, careers.email

        try:
            payload = self.relay.build_payload(
                subject=subject, name=name, email=email, message=message
            )
        except RelayConfigurationError as e:
            logger.error(f"Cannot send {form_type.value} submission: {e}")
            record_submission_failure(form_type.value, "configuration")
            return SubmissionResult(
                outcome=SubmissionOutcome.MISCONFIGURED,
                message=MISCONFIGURED_MESSAGE,
            )

        if not await self.relay.send_message(payload):
            logger.error(f"{self.relay.relay_name} did not accept {form_type.value} submission")
            record_submission_failure(form_type.value, "relay")
            return SubmissionResult(
                outcome=SubmissionOutcome.RELAY_FAILED,
                message=self.relay_failed_message,
            )

        record_submission_success(form_type.value)
        return SubmissionResult(outcome=SubmissionOutcome.SENT, message=SUCCESS_MESSAGES[form_type])

    def compose_contact_message(self, submission: ContactSubmission) -> tuple[str, str]:
        """Render a catering inquiry as an email subject and body.

        Returns:
            Tuple of (subject, message)
        """
        event_date = submission.event_date.isoformat() if submission.event_date else None
        lines = [
            f"Phone: {submission.phone or NOT_PROVIDED}",
            f"Event Date: {event_date or NOT_PROVIDED}",
            f"Number of Guests: {submission.guest_count or NOT_PROVIDED}",
            "",
            "Message:",
            submission.message or NOT_PROVIDED,
        ]

        if submission.items:
            lines.extend(["", *self.render_cart_summary(submission.items)])

        lines.extend(["", "---", "Submitted from the Catering Inquiry Form"])
        return f"Catering Inquiry from {submission.name}", "\n".join(lines)

    def render_cart_summary(self, items: list[InquiryItem]) -> list[str]:
        """Render cart contents and the pricing breakdown as text lines."""
        cart = InquiryCart(items, pricing=self.pricing)
        totals = cart.compute_totals()
        price = self.pricing.format_price

        lines = [f"Items of Interest ({totals.item_count}):"]
        for item in cart.items:
            lines.append(
                f"- {item.name} x {item.quantity} @ {price(item.price)} = {price(item.line_total)}"
            )

        delivery = "FREE" if totals.qualifies_for_free_delivery else price(totals.delivery_fee)
        lines.extend(
            [
                "",
                f"Subtotal: {price(totals.subtotal)}",
                f"Delivery Fee: {delivery}",
                f"Estimated Total: {price(totals.total)}",
            ]
        )
        return lines

    def compose_careers_message(self, submission: CareersSubmission) -> tuple[str, str]:
        """Render a job application as an email subject and body.

        Returns:
            Tuple of (subject, message)
        """
        lines = [
            "JOB APPLICATION",
            "",
            f"Position: {submission.job_title}",
            "",
            "Applicant Details:",
            f"Name: {submission.name}",
            f"Email: {submission.email}",
            f"Phone: {submission.phone}",
        ]

        if submission.social_media:
            lines.append(f"Social Media: {submission.social_media}")

        lines.extend(
            ["", "About Them:", submission.message, "", "---", "Submitted from the Careers Page"]
        )
        subject = f"Job Application: {submission.job_title} - {submission.name}"
        return subject, "\n".join(lines)
