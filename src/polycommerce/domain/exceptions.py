"""Domain-level exceptions.

All failures of a required ingestion step are expressed as subclasses of
DomainException.  Each subclass carries the ErrorKind that the application
layer reports to the caller, so the HTTP and CLI adapters can map them
uniformly without inspecting messages.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID = "INVALID"
    INTERNAL = "INTERNAL"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.INTERNAL


class UnauthorizedError(DomainException):
    """The caller's store token did not resolve to a store."""

    kind = ErrorKind.UNAUTHORIZED


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    kind = ErrorKind.INVALID


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.INVALID
