"""Logging and OpenTelemetry setup for the menu service.

Traces and metrics are exported over OTLP/HTTP when exporters are enabled.
With exporters off (always the case when ENVIRONMENT=test) the SDK providers
are still installed, so ``traced`` spans and the menu counters keep working
without a collector.
"""

import logging
import os
import sys
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.botocore import BotocoreInstrumentor
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from pythonjsonlogger import jsonlogger

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "menu-svc"
DEFAULT_OTLP_ENDPOINT = "http://localhost:4318"
METRIC_EXPORT_INTERVAL_MS = 60000

# boto and urllib3 log every request at DEBUG
NOISY_LOGGERS = ("botocore", "boto3", "urllib3")


def get_service_name() -> str:
    return os.getenv("OTEL_SERVICE_NAME", DEFAULT_SERVICE_NAME)


def get_environment() -> str:
    return os.getenv("ENVIRONMENT", "development")


def get_service_resource() -> Resource:
    """Build the resource that identifies this service in traces and metrics."""
    return Resource.create(
        {
            "service.name": get_service_name(),
            "deployment.environment": get_environment(),
        }
    )


def _otlp_base() -> str:
    return os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT).rstrip("/")


def _otlp_url(signal: str) -> str:
    return f"{_otlp_base()}/v1/{signal}"


def build_tracer_provider(resource: Resource, enable_exporters: bool) -> TracerProvider:
    """Create the tracer provider, with an OTLP span exporter when enabled.

    Args:
        resource: Service resource attached to every span
        enable_exporters: Whether spans are shipped to the collector

    Returns:
        Configured tracer provider
    """
    provider = TracerProvider(resource=resource)
    if enable_exporters:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=_otlp_url("traces"))))
    return provider


def build_meter_provider(resource: Resource, enable_exporters: bool) -> MeterProvider:
    """Create the meter provider, with a periodic OTLP reader when enabled.

    Args:
        resource: Service resource attached to every metric
        enable_exporters: Whether metrics are shipped to the collector

    Returns:
        Configured meter provider
    """
    if not enable_exporters:
        return MeterProvider(resource=resource)

    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=_otlp_url("metrics")),
        export_interval_millis=METRIC_EXPORT_INTERVAL_MS,
    )
    return MeterProvider(resource=resource, metric_readers=[reader])


def setup_observability(app: Any = None, enable_exporters: bool = True) -> None:
    """Install tracing and metrics providers and instrument boto and FastAPI.

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to export over OTLP (forced off when ENVIRONMENT=test)
    """
    if get_environment() == "test":
        enable_exporters = False

    resource = get_service_resource()
    trace.set_tracer_provider(build_tracer_provider(resource, enable_exporters))
    metrics.set_meter_provider(build_meter_provider(resource, enable_exporters))

    # Every DynamoDB call becomes a client span
    BotocoreInstrumentor().instrument()

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)

    if enable_exporters:
        logger.info(f"Telemetry for {get_service_name()} exported to {_otlp_base()}")
    else:
        logger.info(f"Telemetry for {get_service_name()} configured without exporters")


def configure_logging(log_level: str = "INFO") -> None:
    """Send every log record to stdout as one JSON object per line.

    Records carry the service name and environment so Lambda and local logs
    can be filtered the same way.

    Args:
        log_level: Level used when LOG_LEVEL is not set
    """
    level_name = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        timestamp=True,
        static_fields={"service": get_service_name(), "environment": get_environment()},
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info(f"JSON logging configured at {level_name}")
