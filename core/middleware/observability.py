"""
Observability middleware.

This middleware adds logging, metrics, and request tracing.
"""

import logging
import re
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

from core.metrics import http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)

_LICENSE_KEY_IN_PATH = re.compile(r"/[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}")
_ORDER_ID_IN_PATH = re.compile(r"(/api/v1/orders/)[^/]+")


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Generates correlation IDs for request tracing
    2. Logs request/response information
    3. Records Prometheus request count and duration
    4. Adds correlation ID to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        trace_id = None
        span_id = None
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            trace_id = format_trace_id(span_context.trace_id)
            span_id = format_span_id(span_context.span_id)
            request.trace_id = trace_id  # type: ignore

        start_time = time.time()
        endpoint = self._normalize_endpoint(request.path)
        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
            "user_agent": request.META.get("HTTP_USER_AGENT", ""),
        }
        if trace_id:
            log_extra["trace_id"] = trace_id
            log_extra["span_id"] = span_id

        logger.info("Request started", extra=log_extra)

        try:
            response = self.get_response(request)
        except Exception as e:
            self._handle_exception(request, e, start_time, correlation_id, endpoint)
            raise

        duration = time.time() - start_time
        request_status = self._get_request_status(response)

        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

        self._log_response(
            request, response, correlation_id, request_status, duration, trace_id, span_id
        )
        self._add_observability_headers(
            response, correlation_id, request_status, duration, trace_id
        )
        return response

    def _normalize_endpoint(self, path: str) -> str:
        """Collapse license keys and order ids so metric labels stay bounded."""
        path = _LICENSE_KEY_IN_PATH.sub("/{license_key}", path)
        return _ORDER_ID_IN_PATH.sub(r"\1{order_id}", path)

    def _get_request_status(self, response: HttpResponse) -> str:
        """Determine request status based on status code."""
        if response.status_code >= 500:
            return "server_error"
        if response.status_code >= 400:
            return "client_error"
        return "success"

    def _log_response(self, request, response, correlation_id, status, duration, trace_id, span_id):
        """Log structured response information."""
        log_extra = {
            "correlation_id": correlation_id,
            "request_status": status,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
            "response_size": len(response.content) if hasattr(response, "content") else 0,
        }
        if trace_id:
            log_extra["trace_id"] = trace_id
            log_extra["span_id"] = span_id
        if getattr(request, "is_admin", False):
            log_extra["admin"] = True

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=log_extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=log_extra)
        else:
            logger.info("Request completed successfully", extra=log_extra)

    def _add_observability_headers(self, response, correlation_id, status, duration, trace_id):
        """Add observability headers to response."""
        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Status"] = status
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id

    def _handle_exception(self, request, e, start_time, correlation_id, endpoint):
        """Record and log a request that raised."""
        duration = time.time() - start_time
        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=500,
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)
        logger.error(
            "Request failed",
            extra={
                "correlation_id": correlation_id,
                "request_status": "exception",
                "method": request.method,
                "path": request.path,
                "error": str(e),
                "error_type": type(e).__name__,
                "duration_ms": round(duration * 1000, 2),
            },
            exc_info=True,
        )
