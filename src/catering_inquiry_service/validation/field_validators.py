"""Per-field validation for the contact and careers forms.

Each field has an ordered list of rules. Validation checks the required
rule first and then the remaining rules in order; the first failing rule
provides the message. An empty string means the value is valid.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from catering_inquiry_service.models.inquiry_models import FormType

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MAX_GUESTS = 20

GUEST_LIMIT_MESSAGE = (
    "We're still a small operation and can only cater for up to 20 people at once. "
    "Please contact us directly for larger events."
)

# A check receives the raw value and today's date and returns True when it passes
Check = Callable[[str, date], bool]


@dataclass(frozen=True)
class FieldRules:
    """Validation rules for one field.

    Attributes:
        required_message: Message for a missing value, None when the field is optional
        checks: Ordered (check, message) pairs applied to non-empty values
    """

    required_message: str | None = None
    checks: tuple[tuple[Check, str], ...] = field(default_factory=tuple)

    def validate(self, value: str | None, today: date) -> str:
        if value is None or not value.strip():
            return self.required_message or ""

        for check, message in self.checks:
            if not check(value, today):
                return message

        return ""


def _min_length(limit: int) -> Check:
    return lambda value, _today: len(value) >= limit


def _max_length(limit: int) -> Check:
    return lambda value, _today: len(value) <= limit


def _matches(pattern: re.Pattern[str]) -> Check:
    return lambda value, _today: pattern.fullmatch(value) is not None


def _is_calendar_date(value: str, _today: date) -> bool:
    if not DATE_PATTERN.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _not_in_past(value: str, today: date) -> bool:
    return date.fromisoformat(value) >= today


def _is_positive_whole_number(value: str, _today: date) -> bool:
    # isdigit alone admits Unicode digits such as "²" that int() rejects
    digits = value.strip()
    return digits.isascii() and digits.isdigit() and int(digits) >= 1


def _within_guest_limit(value: str, _today: date) -> bool:
    return int(value.strip()) <= MAX_GUESTS


NAME_RULES = FieldRules(
    required_message="Please enter your name",
    checks=(
        (_min_length(2), "Name must be at least 2 characters"),
        (_max_length(100), "Name is too long"),
    ),
)

EMAIL_RULES = FieldRules(
    required_message="Please enter your email",
    checks=((_matches(EMAIL_PATTERN), "Please enter a valid email address"),),
)

_PHONE_CHECKS: tuple[tuple[Check, str], ...] = (
    (_min_length(8), "Please enter a valid phone number"),
    (_max_length(20), "Phone number is too long"),
)

_MESSAGE_TOO_LONG = "Message is too long (max 1000 characters)"

CONTACT_RULES: dict[str, FieldRules] = {
    "name": NAME_RULES,
    "email": EMAIL_RULES,
    "phone": FieldRules(checks=_PHONE_CHECKS),
    "eventDate": FieldRules(
        checks=(
            (_is_calendar_date, "Invalid date format (use YYYY-MM-DD)"),
            (_not_in_past, "Date must be today or in the future"),
        ),
    ),
    "guestCount": FieldRules(
        checks=(
            (_is_positive_whole_number, "Please enter a valid number of guests"),
            (_within_guest_limit, GUEST_LIMIT_MESSAGE),
        ),
    ),
    "message": FieldRules(checks=((_max_length(1000), _MESSAGE_TOO_LONG),)),
}

CAREERS_RULES: dict[str, FieldRules] = {
    "name": NAME_RULES,
    "email": EMAIL_RULES,
    "phone": FieldRules(required_message="Please enter your phone number", checks=_PHONE_CHECKS),
    "jobTitle": FieldRules(required_message="Please select a position"),
    "socialMedia": FieldRules(checks=((_max_length(200), "Social media link is too long"),)),
    "message": FieldRules(
        required_message="Please tell us about yourself",
        checks=(
            (_min_length(10), "Please tell us a bit more (at least 10 characters)"),
            (_max_length(1000), _MESSAGE_TOO_LONG),
        ),
    ),
}

RULES_BY_FORM: dict[FormType, dict[str, FieldRules]] = {
    FormType.CONTACT: CONTACT_RULES,
    FormType.CAREERS: CAREERS_RULES,
}


def validate_field(
    field_name: str,
    value: str | None,
    form_type: FormType = FormType.CONTACT,
    today: date | None = None,
) -> str:
    """Validate a single form field.

    Args:
        field_name: Name of the field (e.g. "name", "jobTitle")
        value: Raw value as entered by the user
        form_type: Form the field belongs to
        today: Reference date for date rules (defaults to today)

    Returns:
        Empty string if the value is valid, otherwise a user-facing message
    """
    rules = RULES_BY_FORM[form_type].get(field_name)
    if rules is None:
        return ""

    return rules.validate(value, today or date.today())
