"""Custom metrics for the catering inquiry service."""

from opentelemetry import metrics

meter = metrics.get_meter("inquiry-svc")

submission_success_counter = meter.create_counter(
    name="inquiry_submission_success_total",
    description="Total number of submissions accepted by the email relay, by form",
    unit="1",
)

submission_failure_counter = meter.create_counter(
    name="inquiry_submission_failure_total",
    description="Total number of submissions that could not be delivered, by form and reason",
    unit="1",
)

validation_failure_counter = meter.create_counter(
    name="inquiry_validation_failure_total",
    description="Total number of submissions blocked by validation errors, by form",
    unit="1",
)

cart_mutation_counter = meter.create_counter(
    name="inquiry_cart_mutation_total",
    description="Total number of inquiry cart mutations, by operation",
    unit="1",
)

relay_response_time = meter.create_histogram(
    name="email_relay_response_time_seconds",
    description="Response time for email relay calls",
    unit="s",
)


def record_submission_success(form_type: str) -> None:
    """Record a submission accepted by the relay.

    Args:
        form_type: The form that was submitted (e.g., "contact", "careers")
    """
    submission_success_counter.add(1, {"form_type": form_type})


def record_submission_failure(form_type: str, reason: str) -> None:
    """Record a submission that could not be delivered.

    Args:
        form_type: The form that was submitted
        reason: Failure category (e.g., "relay", "configuration")
    """
    submission_failure_counter.add(1, {"form_type": form_type, "reason": reason})


def record_validation_failure(form_type: str, error_count: int) -> None:
    """Record a submission blocked by validation."""
    validation_failure_counter.add(1, {"form_type": form_type, "error_count": error_count})


def record_cart_mutation(operation: str) -> None:
    """Record an inquiry cart mutation (e.g., "add", "remove")."""
    cart_mutation_counter.add(1, {"operation": operation})


def record_relay_call(relay: str, duration_seconds: float) -> None:
    """Record the duration of an email relay call.

    Args:
        relay: The relay that was called
        duration_seconds: Duration in seconds
    """
    relay_response_time.record(duration_seconds, {"relay": relay})
