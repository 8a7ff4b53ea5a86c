"""OpenTelemetry and logging configuration."""

import logging
import os
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from pythonjsonlogger.json import JsonFormatter

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "inquiry-svc"
DEFAULT_OTLP_ENDPOINT = "http://localhost:4318"
METRIC_EXPORT_INTERVAL_MS = 60000

# Third-party loggers that log every request URL at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "botocore", "boto3", "urllib3")


def service_name() -> str:
    return os.getenv("OTEL_SERVICE_NAME", DEFAULT_SERVICE_NAME)


def get_service_resource() -> Resource:
    """Create OpenTelemetry resource with service identification.

    Returns:
        Resource with service name and environment attributes
    """
    return Resource.create(
        {
            "service.name": service_name(),
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        }
    )


def _otlp_url(signal: str) -> str:
    base = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT).rstrip("/")
    return f"{base}/v1/{signal}"


def setup_tracing(resource: Resource) -> None:
    """Export spans in batches to the OTLP collector.

    Args:
        resource: Service resource for trace identification
    """
    # Spans are batched so request latency does not include the export
    endpoint = _otlp_url("traces")
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)

    logger.info(f"Exporting traces to {endpoint}")


def setup_metrics(resource: Resource) -> None:
    """Export submission and cart metrics to the OTLP collector once a minute.

    Args:
        resource: Service resource for metric identification
    """
    # Counters and the relay histogram are pushed on a fixed interval
    endpoint = _otlp_url("metrics")
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=endpoint),
        export_interval_millis=METRIC_EXPORT_INTERVAL_MS,
    )
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[reader]))

    logger.info(f"Exporting metrics to {endpoint}")


def instrument_http_clients() -> None:
    """Trace outbound calls to Web3Forms and the menu table."""
    # Warm Lambda containers can build the app again; instrument once
    instrumentor = HTTPXClientInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument()


def setup_observability(app: Any = None, enable_exporters: bool = True) -> None:
    """Initialize tracing, metrics and auto-instrumentation.

    Exporters are always off when ENVIRONMENT=test; spans and metrics are
    then recorded by local providers and dropped.

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to ship telemetry to the OTLP collector
    """
    resource = get_service_resource()

    # Ship telemetry only from deployed environments
    if enable_exporters and os.getenv("ENVIRONMENT", "development") != "test":
        setup_tracing(resource)
        setup_metrics(resource)
    else:
        # Local providers keep @traced and the counters working without a collector
        trace.set_tracer_provider(TracerProvider(resource=resource))
        metrics.set_meter_provider(MeterProvider(resource=resource))

    instrument_http_clients()

    # One server span per inquiry API request
    if app is not None:
        FastAPIInstrumentor.instrument_app(app)

    logger.info(f"Observability configured for {service_name()}")


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger.

    Every record carries the service name so Lambda and local logs can be
    filtered the same way.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    # LOG_LEVEL wins over the caller's default
    level_str = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    # One JSON object per line for CloudWatch
    formatter = JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"levelname": "level"},
        static_fields={"service": service_name()},
        timestamp=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    # Replace handlers so repeated configuration does not duplicate output
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info(f"Structured JSON logging configured at {level_str} level")
