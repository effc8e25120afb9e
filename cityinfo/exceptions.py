"""
CityInfo API - Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the two error kinds the API knows.
Why:   Services raise these instead of building HTTP responses; global
       exception handlers (registered in main.py) translate them to status
       codes in one place.
How:   Each exception carries a message and optional context dict.

Exception Hierarchy:
    CityInfoError (base)
    ├── ValidationError   → 400 Bad Request (field-level error list)
    └── NotFoundError     → 404 Not Found (no body)

Anything else that escapes a handler (including persistence failures) is
treated as an unexpected fault and answered with a generic 500.
"""

from typing import Any, Dict, Iterable, List, Optional


class CityInfoError(Exception):
    """
    Base exception for all CityInfo application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CityInfoError):
    """
    Raised when client input fails validation.

    What:    The request body, a patched representation, or a field rule was
             rejected. The client can fix the input and retry.
    HTTP:    400 Bad Request

    `errors` maps a field name to its messages, e.g.:
        {"description": ["The provided description should be different from the name."]}
    """

    def __init__(
        self,
        message: str = "One or more validation errors occurred.",
        errors: Optional[Dict[str, List[str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors: Dict[str, List[str]] = errors or {}

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Shortcut for a single field-level error."""
        return cls(errors={field: [message]})

    @classmethod
    def from_pydantic_errors(cls, errors: Iterable[Dict[str, Any]]) -> "ValidationError":
        """
        Group Pydantic / FastAPI error entries by field.

        The location prefix FastAPI adds ("body", "query", "path") is dropped,
        so {"loc": ("body", "name"), "msg": "..."} is reported under "name".
        Errors about the body as a whole are reported under "body": an empty
        location, a JSON syntax error, or a location made only of positions
        (a JSON decode error carries its byte offset, e.g. ("body", 9)).
        """
        grouped: Dict[str, List[str]] = {}
        for error in errors:
            parts = [
                part for part in error.get("loc", ())
                if part not in ("body", "query", "path")
            ]
            if error.get("type") == "json_invalid" or all(isinstance(p, int) for p in parts):
                key = "body"
            else:
                key = ".".join(str(p) for p in parts)
            grouped.setdefault(key, []).append(error.get("msg", "Invalid value"))
        return cls(errors=grouped)


class NotFoundError(CityInfoError):
    """
    Raised when a requested city or point of interest does not exist.

    HTTP:    404 Not Found

    The repository returns None (or False) for missing records; services turn
    that into this exception so routes stay free of status-code branching.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id
