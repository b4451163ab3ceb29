"""
OpenTelemetry instrumentation setup.

This module configures OpenTelemetry for distributed tracing and
exposes Prometheus metrics on a side port.
"""

import logging
import os
import socket

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode  # noqa: F401
from prometheus_client import start_http_server

logger = logging.getLogger(__name__)


def setup_opentelemetry():
    """
    Configure OpenTelemetry instrumentation.

    Sets up:
    - Distributed tracing exported over OTLP
    - Auto-instrumentation for Django and PostgreSQL
    - The Prometheus metrics server

    Tracing export is skipped when OTEL_EXPORTER_OTLP_ENDPOINT is unset;
    spans are then recorded by the default no-op provider.
    """
    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint:
        _setup_tracing(otlp_endpoint)
    else:
        logger.info("OTEL_EXPORTER_OTLP_ENDPOINT not set, tracing export disabled")

    prometheus_port = os.environ.get("PROMETHEUS_PORT")
    if prometheus_port:
        _start_metrics_server(int(prometheus_port))


def _setup_tracing(otlp_endpoint: str):
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.django import DjangoInstrumentor
    from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor

    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "device-license-service"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(trace_provider)

    otlp_exporter = OTLPSpanExporter(
        endpoint=otlp_endpoint,
        insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
    )
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    DjangoInstrumentor().instrument()
    Psycopg2Instrumentor().instrument()

    logger.info("OpenTelemetry tracing configured", extra={"endpoint": otlp_endpoint})


def _start_metrics_server(port: int):
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    in_use = sock.connect_ex(("127.0.0.1", port)) == 0
    sock.close()

    if in_use:
        logger.info("Prometheus metrics server already running on port %s", port)
        return
    try:
        start_http_server(port, addr="0.0.0.0")
    except OSError as e:
        logger.warning("Could not start Prometheus metrics server: %s", e)
        return
    logger.info("Prometheus metrics server started on 0.0.0.0:%s", port)


def get_tracer(name: str):
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance (no-op until a provider is configured)
    """
    return trace.get_tracer(name)
