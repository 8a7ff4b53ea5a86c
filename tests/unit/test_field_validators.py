"""Unit tests for per-field form validation."""

from datetime import date, timedelta

import pytest

from catering_inquiry_service.models.inquiry_models import FormType
from catering_inquiry_service.validation.field_validators import (
    GUEST_LIMIT_MESSAGE,
    FieldRules,
    validate_field,
)


@pytest.mark.unit
class TestNameAndEmail:
    """Tests for the rules shared by both forms."""

    @pytest.mark.parametrize("form_type", [FormType.CONTACT, FormType.CAREERS])
    def test_missing_name(self, form_type: FormType) -> None:
        """Test that an empty name is reported as required."""
        assert validate_field("name", "", form_type) == "Please enter your name"

    def test_whitespace_only_name_counts_as_missing(self) -> None:
        """Test that whitespace is not accepted as a name."""
        assert validate_field("name", "   ") == "Please enter your name"

    def test_name_too_short(self) -> None:
        """Test that a one-character name is rejected."""
        assert validate_field("name", "A") == "Name must be at least 2 characters"

    def test_name_bounds(self) -> None:
        """Test that names of 2 and 100 characters pass and 101 fails."""
        assert validate_field("name", "Al") == ""
        assert validate_field("name", "a" * 100) == ""
        assert validate_field("name", "a" * 101) == "Name is too long"

    def test_missing_email(self) -> None:
        """Test that an empty email is reported as required."""
        assert validate_field("email", "") == "Please enter your email"

    @pytest.mark.parametrize(
        "email",
        [
            "alex",
            "alex@example",
            "alex @example.com",
            "@example.com",
            "alex@.com",
            "alex@example.com\n",
        ],
    )
    def test_invalid_email(self, email: str) -> None:
        """Test that malformed addresses are rejected."""
        assert validate_field("email", email) == "Please enter a valid email address"

    def test_valid_email(self) -> None:
        """Test that a well-formed address passes."""
        assert validate_field("email", "alex@example.com") == ""

    def test_unknown_field_is_valid(self) -> None:
        """Test that fields without rules are never reported."""
        assert validate_field("favouriteColour", "") == ""

    def test_none_value_counts_as_missing(self) -> None:
        """Test that an absent value behaves like an empty string."""
        assert validate_field("email", None) == "Please enter your email"


@pytest.mark.unit
class TestContactFields:
    """Tests for the contact form's optional fields."""

    def test_phone_is_optional(self) -> None:
        """Test that an empty phone number passes on the contact form."""
        assert validate_field("phone", "", FormType.CONTACT) == ""

    def test_phone_bounds(self) -> None:
        """Test the phone length limits."""
        assert validate_field("phone", "1234567") == "Please enter a valid phone number"
        assert validate_field("phone", "12345678") == ""
        assert validate_field("phone", "1" * 20) == ""
        assert validate_field("phone", "1" * 21) == "Phone number is too long"

    def test_message_is_optional(self) -> None:
        """Test that the contact message may be left empty."""
        assert validate_field("message", "", FormType.CONTACT) == ""

    def test_message_too_long(self) -> None:
        """Test that messages over 1000 characters are rejected."""
        assert validate_field("message", "x" * 1000) == ""
        assert validate_field("message", "x" * 1001) == "Message is too long (max 1000 characters)"

    def test_event_date_format(self, today: date) -> None:
        """Test that dates must be written as YYYY-MM-DD."""
        message = "Invalid date format (use YYYY-MM-DD)"
        assert validate_field("eventDate", "15/06/2024", today=today) == message
        assert validate_field("eventDate", "2024-02-30", today=today) == message
        assert validate_field("eventDate", "2024-06-15\n", today=today) == message

    def test_event_date_in_past(self, today: date) -> None:
        """Test that past dates are rejected while today is accepted."""
        yesterday = (today - timedelta(days=1)).isoformat()

        assert validate_field("eventDate", yesterday, today=today) == (
            "Date must be today or in the future"
        )
        assert validate_field("eventDate", today.isoformat(), today=today) == ""

    def test_guest_count_must_be_positive_number(self) -> None:
        """Test that zero, negative and non-numeric guest counts are rejected."""
        message = "Please enter a valid number of guests"
        assert validate_field("guestCount", "0") == message
        assert validate_field("guestCount", "-3") == message
        assert validate_field("guestCount", "ten") == message

    @pytest.mark.parametrize("guest_count", ["\u00b2", "\u0663", "\uff11\uff12"])
    def test_guest_count_rejects_non_ascii_digits(self, guest_count: str) -> None:
        """Test that Unicode digits are reported instead of raising."""
        assert validate_field("guestCount", guest_count) == (
            "Please enter a valid number of guests"
        )

    def test_guest_count_allows_surrounding_whitespace(self) -> None:
        """Test that a padded count is read as its number."""
        assert validate_field("guestCount", " 12 ") == ""

    def test_guest_count_limit(self) -> None:
        """Test that at most 20 guests can be catered for."""
        assert validate_field("guestCount", "20") == ""
        assert validate_field("guestCount", "21") == GUEST_LIMIT_MESSAGE


@pytest.mark.unit
class TestCareersFields:
    """Tests for the careers form's rules."""

    def test_phone_is_required(self) -> None:
        """Test that careers applicants must leave a phone number."""
        assert validate_field("phone", "", FormType.CAREERS) == "Please enter your phone number"

    def test_job_title_is_required(self) -> None:
        """Test that a position must be selected."""
        assert validate_field("jobTitle", "", FormType.CAREERS) == "Please select a position"
        assert validate_field("jobTitle", "Line Cook", FormType.CAREERS) == ""

    def test_message_is_required(self) -> None:
        """Test that applicants must write about themselves."""
        assert validate_field("message", "", FormType.CAREERS) == "Please tell us about yourself"

    def test_message_of_nine_characters_is_too_short(self) -> None:
        """Test the ten character minimum on careers messages."""
        assert validate_field("message", "a" * 9, FormType.CAREERS) == (
            "Please tell us a bit more (at least 10 characters)"
        )

    def test_message_of_ten_characters_passes(self) -> None:
        """Test that exactly ten characters is enough."""
        assert validate_field("message", "a" * 10, FormType.CAREERS) == ""

    def test_social_media_limit(self) -> None:
        """Test that social media links are optional but bounded."""
        assert validate_field("socialMedia", "", FormType.CAREERS) == ""
        assert validate_field("socialMedia", "x" * 201, FormType.CAREERS) == (
            "Social media link is too long"
        )

    def test_contact_only_fields_are_ignored(self) -> None:
        """Test that contact-only fields have no rules on the careers form."""
        assert validate_field("guestCount", "500", FormType.CAREERS) == ""


@pytest.mark.unit
class TestFieldRules:
    """Tests for the FieldRules evaluation order."""

    def test_first_failing_check_wins(self, today: date) -> None:
        """Test that checks are evaluated in order."""
        rules = FieldRules(
            required_message="required",
            checks=(
                (lambda value, _today: False, "first"),
                (lambda value, _today: False, "second"),
            ),
        )

        assert rules.validate("anything", today) == "first"

    def test_optional_field_skips_checks_when_empty(self, today: date) -> None:
        """Test that empty optional values are never checked."""
        rules = FieldRules(checks=((lambda value, _today: False, "never"),))

        assert rules.validate("", today) == ""
