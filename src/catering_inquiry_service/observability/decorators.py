"""OpenTelemetry tracing decorators."""

import asyncio
import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span, Tracer

# Keeps the decorated function's signature for type checkers
F = TypeVar("F", bound=Callable[..., Any])


@contextmanager
def _traced_span(
    tracer: Tracer, name: str, func_name: str, attributes: dict[str, str]
) -> Iterator[Span]:
    with tracer.start_as_current_span(name, record_exception=False) as span:
        # Identify the code path even when the span has a custom name
        span.set_attribute("code.function", func_name)
        for key, value in attributes.items():
            span.set_attribute(key, value)

        # Exceptions are recorded once here, then re-raised to the caller
        try:
            yield span
        except Exception as e:
            span.set_attribute("success", False)
            span.set_attribute("error.type", type(e).__name__)
            span.record_exception(e)
            raise

        span.set_attribute("success", True)


def traced(
    span_name: str | None = None,
    service_name: str = "inquiry-svc",
    attributes: dict[str, str] | None = None,
) -> Callable[[F], F]:
    """Decorator to add OpenTelemetry tracing to a function.

    Each call runs in its own span, marked with success=True or with the
    exception type. Async functions are supported.

    Args:
        span_name: Name for the span (defaults to the function name)
        service_name: Instrumentation scope name of the tracer
        attributes: Static attributes set on every span

    Returns:
        Decorated function with tracing

    Example:
        @traced("dispatch_submission", attributes={"component": "dispatcher"})
        async def dispatch(self, form_type: FormType, fields: dict[str, str]) -> SubmissionResult:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)
        static = dict(attributes or {})

        # Coroutines need an awaiting wrapper so the span covers the whole call
        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _traced_span(tracer, name, func.__name__, static):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _traced_span(tracer, name, func.__name__, static):
                return func(*args, **kwargs)

        return sync_wrapper  # type: ignore

    return decorator
