"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure and have no external dependencies.
Application exceptions bridge domain errors and HTTP responses.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    INVALID_REQUEST = "invalid_request"
    INVALID_TOKEN = "invalid_token"
    FILE_NOT_FOUND = "file_not_found"
    STORAGE_ERROR = "storage_error"
    CONFIGURATION_ERROR = "configuration_error"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check your input and try again.",
    },
    ErrorCategory.INVALID_TOKEN: {
        "title": "Invalid Token",
        "message": "The access token does not match the requested file.",
        "action": "Use the token returned when the file was uploaded.",
    },
    ErrorCategory.FILE_NOT_FOUND: {
        "title": "File Not Found",
        "message": "The requested file could not be found or has been deleted.",
        "action": "Please upload the file again.",
    },
    ErrorCategory.STORAGE_ERROR: {
        "title": "Storage Error",
        "message": "The object store could not complete the request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
    ErrorCategory.CONFIGURATION_ERROR: {
        "title": "Service Misconfigured",
        "message": "The service is not configured to issue or verify access tokens.",
        "action": "Please contact the service administrator.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================


class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions are pure and have no external dependencies.
    They can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class ConfigurationError(DomainError):
    """Raised when the shared token secret is missing or empty."""

    pass


class InvalidTokenError(DomainError):
    """
    Raised when a presented access token does not match the object name.

    Always raised before any object store call is made.
    """

    pass


class InvalidLinkError(DomainError):
    """Raised when a view-file link does not point into the configured bucket."""

    pass


class ObjectStoreErrorKind(Enum):
    """Closed set of failure kinds reported by an object store adapter."""

    NOT_FOUND = "not_found"
    INTERNAL = "internal"
    UNAUTHORIZED = "unauthorized"


class ObjectStoreError(DomainError):
    """
    Raised by object store adapters when a backend call fails.

    Adapters translate their library-specific errors into one of the
    ObjectStoreErrorKind variants so callers never inspect backend shapes.
    """

    def __init__(
        self,
        message: str,
        kind: ObjectStoreErrorKind = ObjectStoreErrorKind.INTERNAL,
        original_error: Exception = None,
    ):
        super().__init__(message, original_error)
        self.kind = kind


class ObjectNotFoundError(ObjectStoreError):
    """Raised when the targeted object does not exist in the bucket."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message, ObjectStoreErrorKind.NOT_FOUND, original_error)


class BatchUploadError(DomainError):
    """
    Raised when an item of a batch upload fails.

    The batch is aborted at the failing item; objects stored before it are
    not rolled back and their results are available in ``completed``.
    """

    def __init__(
        self,
        message: str,
        completed: Optional[List[Any]] = None,
        failed_filename: Optional[str] = None,
        original_error: Exception = None,
    ):
        super().__init__(message, original_error)
        self.completed = list(completed or [])
        self.failed_filename = failed_filename


# ============================================================================
# Application Layer Exceptions
# ============================================================================


class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    This is an application-layer concern that bridges domain errors
    with user-facing error messages and HTTP responses.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
            context: Additional context information
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.context = context or {}

        # Get user-friendly message
        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        context: Additional context information
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context)
    return error.to_dict(), status_code
