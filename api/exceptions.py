"""
API exception handlers.

This module converts domain and framework exceptions into the
``{success: false, error, code}`` failure shape.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, MethodNotAllowed, ParseError, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ActivationValidationError,
    DomainException,
    InvalidDomainError,
    InvalidLicenseCountError,
    LicenseKeyCollisionError,
    RegistryIntegrityError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def failure(message: str, code: str, status_code: int) -> Response:
    """Build a failure response."""
    return Response({"success": False, "error": message, "code": code}, status=status_code)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, APIException):
        response = _handle_api_exception(exc, context)
    elif isinstance(exc, Http404):
        response = failure("Resource not found", "NOT_FOUND", status.HTTP_404_NOT_FOUND)
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request is not None else "unknown"


def _domain_status(exc: DomainException) -> int:
    """Map a domain exception to its HTTP status."""
    if isinstance(exc, (RegistryIntegrityError, LicenseKeyCollisionError)):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, InvalidDomainError):
        return status.HTTP_200_OK
    if isinstance(exc, (ActivationValidationError, InvalidLicenseCountError)):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_200_OK


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = _domain_status(exc)
    if status_code >= 500:
        logger.error(
            "Registry fault: %s - %s",
            exc.code,
            exc.message,
            extra={"trace_id": trace_id},
            exc_info=exc,
        )
        errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
        return failure(INTERNAL_ERROR_MESSAGE, exc.code, status_code)

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return failure(exc.message, exc.code, status_code)


def _handle_api_exception(exc: APIException, context: Dict[str, Any]) -> Response:
    """Handle framework exceptions raised by DRF."""
    response = exception_handler(exc, context)
    status_code = response.status_code if response else exc.status_code

    if isinstance(exc, MethodNotAllowed):
        message, code = "Method not allowed", "METHOD_NOT_ALLOWED"
    elif isinstance(exc, ParseError):
        message, code = "Invalid request body", "PARSE_ERROR"
    elif isinstance(exc, ValidationError):
        message, code = first_error_message(exc.detail), "VALIDATION_ERROR"
    else:
        message = str(exc.detail) if hasattr(exc, "detail") else exc.default_detail
        code = str(exc.default_code).upper().replace("-", "_")

    result = failure(message, code, status_code)
    if response is not None:
        for header, value in response.items():
            result[header] = value
    return result


def first_error_message(detail) -> str:
    """Flatten a DRF validation detail to its first message."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = first_error_message(value)
            return message if field == "non_field_errors" else f"{field}: {message}"
    if isinstance(detail, list) and detail:
        return first_error_message(detail[0])
    return str(detail) or "Invalid request"


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    return failure(INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR", status.HTTP_500_INTERNAL_SERVER_ERROR)
