"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error body has the shape ``{"error": {"code": ..., "message": ...}}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ConflictError,
    DomainException,
    ExhaustedError,
    InvalidInputError,
    NotFoundError,
    StateViolationError,
    UnauthorizedError,
    UpstreamFailureError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = (
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (StateViolationError, status.HTTP_403_FORBIDDEN),
    (UpstreamFailureError, status.HTTP_502_BAD_GATEWAY),
    (ExhaustedError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Custom exception handler for REST API.

    Views may declare ``error_extra`` (a dict) to have its items
    merged into the top level of every error body they produce.
    """
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, ValidationError):
        response = exception_handler(exc, context)
        response.data = {
            "error": {
                "code": "INVALID_INPUT",
                "message": "Invalid input",
                "details": response.data,
            }
        }
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = str(getattr(exc, "default_code", "api_error")).upper().replace("-", "_")
        detail = exc.default_detail
        if isinstance(response.data, dict):
            detail = response.data.get("detail", detail)
        response.data = {"error": {"code": code, "message": str(detail)}}
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        return _handle_unexpected_exception(exc, context, trace_id)

    _apply_view_extra(response, context)
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def domain_status_code(exc: DomainException) -> int:
    """HTTP status for a domain exception family."""
    for family, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, family):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _apply_view_extra(response: Response, context: Dict[str, Any]) -> None:
    view = context.get("view")
    extra = getattr(view, "error_extra", None)
    if extra:
        response.data = {**extra, **response.data}


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = domain_status_code(exc)
    request = context.get("request")
    errors_total.labels(
        error_type=exc.code,
        endpoint=request.path if request else "unknown",
    ).inc()

    log = logger.error if status_code >= 500 else logger.warning
    log("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    request = context.get("request")
    errors_total.labels(
        error_type=type(exc).__name__,
        endpoint=request.path if request else "unknown",
    ).inc()
    response = Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response
