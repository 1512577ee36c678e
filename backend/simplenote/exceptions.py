"""
SimpleNote: Exception Hierarchy
===============================

What:  Application-specific exceptions, one per error kind.
How:   Each exception carries a client-safe message, an optional context dict
       (logged, never returned), and an `ErrorKind`. The kind alone decides
       the HTTP status via `STATUS_CODES`.
Who:   Raised by the store, the page renderer and the routes; translated to
       responses by the handler registered in main.py.

Exception Hierarchy:
    SimpleNoteError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    ├── StorageError      → 500 Internal Server Error
    └── StartupError      → aborts startup (never served)
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of failure categories the service distinguishes."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    STORAGE_FAILURE = "storage_error"
    STARTUP_FAILURE = "startup_error"


STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE_FAILURE: 500,
    ErrorKind.STARTUP_FAILURE: 500,
}


class SimpleNoteError(Exception):
    """
    Base exception for all SimpleNote errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to the client)
    """

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class ValidationError(SimpleNoteError):
    """
    Raised when client input fails a presence or format check.

    When:    Form submission with neither title nor body, malformed JSON,
             empty or non-integer note id on delete.
    HTTP:    400 Bad Request
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(SimpleNoteError):
    """Raised when a requested resource does not exist. HTTP 404."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(SimpleNoteError):
    """
    Raised when a database statement fails.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The driver error
    is kept in `context` and logged server-side only.
    """

    kind = ErrorKind.STORAGE_FAILURE

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StartupError(SimpleNoteError):
    """
    Raised when the service cannot start: database unreachable, schema
    cannot be created, or the page template is missing or malformed.
    """

    kind = ErrorKind.STARTUP_FAILURE

    def __init__(
        self,
        message: str = "Service failed to start",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
