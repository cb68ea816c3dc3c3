"""Exception types raised by the service registry.

Every registry error derives from ``ServiceRegistryError`` and from the
built-in exception closest in meaning, so callers can catch either.

Classes
-------
- ServiceRegistryError   - common base for registry errors
- UnknownCategoryError   - a category was referenced but never declared
- InvalidArgumentError   - a required provider/category argument was missing or malformed
- NotSupportedError      - a reserved operation was called
- NoSuchElementError     - an exhausted iterator was inspected
- ErrorCode              - status codes carried by ``ServiceProviderError``
- ServiceProviderError   - generic error raised by service providers
"""
from __future__ import annotations

from enum import IntEnum


class ServiceRegistryError(Exception):
    """Base class for all errors raised by the registry core."""


class UnknownCategoryError(ServiceRegistryError, KeyError):
    """Raised when an operation references a category that was never added."""

    def __init__(self, category: object) -> None:
        self.category = category
        super().__init__(f"Unknown category: {category!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class InvalidArgumentError(ServiceRegistryError, ValueError):
    """Raised when a required argument is ``None`` or has the wrong shape."""


class NotSupportedError(ServiceRegistryError, NotImplementedError):
    """Raised by reserved extension points that are not implemented."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not supported")


class NoSuchElementError(ServiceRegistryError, LookupError):
    """Raised when peeking at an exhausted iterator."""


class ErrorCode(IntEnum):
    """Status codes for ``ServiceProviderError``, a subset of HTTP codes."""

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    RESOURCE_LOCKED = 423
    INTERNAL_ERROR = 500
    NOT_IMPLEMENTED = 501
    INSUFFICIENT_STORAGE = 507


class ServiceProviderError(Exception):
    """Generic exception that service providers may raise.

    Parameters
    ----------
    error_code:
        One of the ``ErrorCode`` values, or an exception to wrap.  A wrapped
        exception is reported as ``ErrorCode.INTERNAL_ERROR``.
    message:
        Human-readable description.  Ignored when wrapping an exception.
    """

    def __init__(self, error_code: ErrorCode | int | BaseException, message: str = "") -> None:
        if isinstance(error_code, BaseException):
            self.error_code = ErrorCode.INTERNAL_ERROR
            super().__init__(str(error_code))
            self.__cause__ = error_code
            return
        self.error_code = ErrorCode(error_code)
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ServiceProviderError(error_code={self.error_code.name}, message={str(self)!r})"
