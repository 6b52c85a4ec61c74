"""
Custom Exception Classes for the portfolio site

This module defines custom exceptions for consistent error pages and
error responses across the application.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in JSON error envelopes."""

    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"
    CONTENT_INVALID = "CONTENT_INVALID"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_PAGE_NOT_FOUND = "RESOURCE_PAGE_NOT_FOUND"
    RESOURCE_POST_NOT_FOUND = "RESOURCE_POST_NOT_FOUND"
    RESOURCE_TAG_NOT_FOUND = "RESOURCE_TAG_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    CONTACT_DELIVERY_FAILED = "CONTACT_DELIVERY_FAILED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class PortfolioError(Exception):
    """Base exception class for all portfolio exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration & Content Exceptions
# ============================================================================


class ConfigurationError(PortfolioError):
    """Raised when site configuration is missing or inconsistent"""

    def __init__(self, message: str, key: str | None = None):
        details = {"key": key} if key else {}
        super().__init__(message=message, error_code=ErrorCode.CONFIGURATION_INVALID, details=details)


class ContentError(PortfolioError):
    """Raised when a content file cannot be parsed into a post"""

    def __init__(self, message: str, source: str | None = None):
        details = {"source": source} if source else {}
        super().__init__(message=message, error_code=ErrorCode.CONTENT_INVALID, details=details)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(PortfolioError):
    """Base class for resource not found errors"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any | None = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=error_code,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class PageNotFoundError(ResourceNotFoundError):
    """Raised when a page (or archive page number) does not exist"""

    def __init__(self, path: str | None = None):
        super().__init__(resource_type="Page", resource_id=path, error_code=ErrorCode.RESOURCE_PAGE_NOT_FOUND)


class PostNotFoundError(ResourceNotFoundError):
    """Raised when a blog post is not found"""

    def __init__(self, slug: str | None = None):
        super().__init__(resource_type="Post", resource_id=slug, error_code=ErrorCode.RESOURCE_POST_NOT_FOUND)


class TagNotFoundError(ResourceNotFoundError):
    """Raised when a tag is neither in the taxonomy nor used by any post"""

    def __init__(self, tag: str | None = None):
        super().__init__(resource_type="Tag", resource_id=tag, error_code=ErrorCode.RESOURCE_TAG_NOT_FOUND)


# ============================================================================
# Contact Form Exceptions
# ============================================================================


class ContactValidationError(PortfolioError):
    """Raised when a contact submission fails validation"""

    def __init__(self, message: str = "Invalid contact submission", errors: list[dict[str, Any]] | None = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.VALIDATION_FAILED,
            details={"validation_errors": errors or []},
        )


class ContactRelayError(PortfolioError):
    """Raised when the contact form endpoint rejects or cannot receive a submission"""

    def __init__(self, message: str = "Contact form delivery failed", upstream_status: int | None = None):
        details = {"upstream_status": upstream_status} if upstream_status is not None else {}
        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code=ErrorCode.CONTACT_DELIVERY_FAILED,
            details=details,
        )
