"""
StudySphere Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error cases of the API.
How:   Each exception carries a user-facing message and a context dict.
       Global handlers in main.py turn them into JSON error responses.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    StudySphereError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class StudySphereError(Exception):
    """
    Base exception for all StudySphere application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (may be returned as `details`)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StudySphereError):
    """
    Raised when client input breaks a business rule.

    Schema-level problems (wrong types, missing fields) never get here:
    FastAPI rejects those with 422 before the handler runs.
    """

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


class NotFoundError(StudySphereError):
    """
    Raised when a requested lesson, order or image does not exist.

    The message reads "<Resource> not found", e.g. "Lesson not found".
    The identifier goes into the context rather than the message.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(StudySphereError):
    """Raised when creating a record whose identifier is already taken."""

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} already exists"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' already exists"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(StudySphereError):
    """
    Raised when a database operation fails unexpectedly.

    The handler returns a generic message; the context (operation name,
    original exception type, order id) is only logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
