"""Exception hierarchy for the Cocoro client.

All exceptions raised by this library derive from :class:`CocoroError`.
Property model errors are raised synchronously to the immediate caller and
are never retried or replaced with defaults.

Hierarchy::

    CocoroError
    ├── PropertyError
    │   ├── MalformedValueError
    │   ├── UnknownPropertyError
    │   ├── NotSettableError
    │   ├── PropertyNotPresentError
    │   ├── PropertyKindMismatchError
    │   └── InvalidFieldValueError
    └── APIError
        └── AuthenticationError
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "CocoroError",
    "PropertyError",
    "MalformedValueError",
    "UnknownPropertyError",
    "NotSettableError",
    "PropertyNotPresentError",
    "PropertyKindMismatchError",
    "InvalidFieldValueError",
    "APIError",
    "AuthenticationError",
]


class CocoroError(Exception):
    """Base exception for all Cocoro errors."""


class PropertyError(CocoroError):
    """Base exception for property model errors.

    Attributes:
        status_code: Status code the error refers to, if any
    """

    def __init__(self, message: str, status_code: str | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedValueError(PropertyError, ValueError):
    """A wire value failed the parse or shape check for its kind."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        status_code: str | None = None,
    ):
        super().__init__(message, status_code)
        self.value = value


class UnknownPropertyError(PropertyError):
    """The device declares no property with the given status code."""

    def __init__(self, status_code: str):
        super().__init__(
            f"property {status_code} does not exist on this device",
            status_code,
        )


class NotSettableError(PropertyError):
    """The property exists but is not settable."""

    def __init__(self, status_code: str, status_name: str = ""):
        label = status_name or status_code
        super().__init__(f"property {label} is not settable", status_code)
        self.status_name = status_name


class PropertyNotPresentError(PropertyError):
    """No current value is known for the status code."""

    def __init__(self, status_code: str):
        super().__init__(
            f"no status value present for property {status_code}",
            status_code,
        )


class PropertyKindMismatchError(PropertyError):
    """A status value's kind disagrees with the declared property kind."""

    def __init__(self, status_code: str, expected: Any, actual: Any):
        super().__init__(
            f"property {status_code} is declared as {expected}, "
            f"got a {actual} value",
            status_code,
        )
        self.expected = expected
        self.actual = actual


class InvalidFieldValueError(PropertyError, ValueError):
    """A composite state field was set outside its domain."""

    def __init__(self, field: str, value: Any, message: str):
        super().__init__(f"Invalid value {value!r} for {field}: {message}")
        self.field = field
        self.value = value


class APIError(CocoroError):
    """The cloud API returned an error or an unusable response.

    Attributes:
        status: HTTP status code, if a response was received
        response: Raw response body, if available
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        response: str | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.response = response

    def __str__(self) -> str:
        if self.status is not None:
            return f"{super().__str__()} (HTTP {self.status})"
        return super().__str__()


class AuthenticationError(APIError):
    """Login failed or the session is no longer accepted."""
