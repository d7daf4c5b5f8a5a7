"""Mapping of domain errors to HTTP responses."""

from rest_framework import status
from rest_framework.response import Response

from experiences.domain.errors import (
    BusinessRuleViolation,
    DomainError,
    NotFoundError,
    StoreError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolation, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: DomainError) -> int:
    for error_type, http_status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return http_status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: DomainError, **extra) -> Response:
    """Render a domain error as ``{"error": message}`` plus any extra keys."""
    body = {**extra, "error": exc.message}
    if isinstance(exc, StoreError) and exc.retryable:
        body["retryable"] = True
    return Response(body, status=status_for(exc))
