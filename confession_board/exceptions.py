"""
Confession Board — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the handful of failure kinds the
       API reports.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers (registered in main.py) turn them into
       responses; the context is logged but never returned.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    ConfessionBoardError (base)  → 500 {"message": "An error occurred"}
    ├── AuthenticationError      → 401 {"message": <reason>}
    ├── NotFoundError            → 404 {"message": ...}
    └── DatabaseError            → 500 JSON, or plain text when plain_text=True
"""

from typing import Any, Dict, Optional

GENERIC_MESSAGE = "An error occurred"
GENERIC_TEXT_MESSAGE = "An error occurred. Check server logs."


class ConfessionBoardError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = GENERIC_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationError(ConfessionBoardError):
    """
    Raised by login when the username is unknown or the password is wrong.

    HTTP: 401 Unauthorized, body {"message": <message>}
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ConfessionBoardError):
    """
    Raised when a requested resource does not exist.

    Only used when STRICT_NOT_FOUND is enabled; by default a missing
    confession is answered with 200 and a null body.
    HTTP: 404 Not Found
    """

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


class DatabaseError(ConfessionBoardError):
    """
    Raised when a database operation (or the work right around it) fails.

    The client always gets a generic message. Detailed error info (SQL,
    constraint names, driver messages) is logged server-side only.

    `plain_text=True` makes the handler answer with a text/plain body instead
    of JSON; registration and the health check report failures that way.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = GENERIC_MESSAGE,
        plain_text: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.plain_text = plain_text
