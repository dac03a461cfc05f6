"""
Application exception hierarchy.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from fastapi import status


class HealthGoalsError(Exception):
    """
    Base class for all application errors.

    Each subclass carries the HTTP status code and an application-specific
    error code, so the global handler can turn it into a response without
    knowing the concrete type.

    Attributes:
        message: User-facing message, returned as the ``error`` field
        code: Application-specific error code for logs
        status_code: HTTP status code of the response
        detail: Optional internal detail, only ever logged
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        code: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.detail = detail
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class ValidationError(HealthGoalsError):
    """A request field is missing, malformed or out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class NotFoundError(HealthGoalsError):
    """No goal is stored under the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_id: str, message: str = "Health goal not found"):
        super().__init__(message, detail=f"id={resource_id}")
        self.resource_id = resource_id


class InternalError(HealthGoalsError):
    """
    Unexpected server-side failure.

    Catch-all type: the unhandled-exception handler wraps any exception
    that is not a HealthGoalsError in one before answering.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_SERVER_ERROR"
