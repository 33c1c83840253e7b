"""
Exception types raised by PyD2RQ.

All errors derive from :class:`D2RQError`. Location and access errors also
derive from the closest built-in exception (``ValueError`` and ``OSError``)
so that callers using generic handlers keep working.
"""

from __future__ import annotations

from typing import Optional


class D2RQError(Exception):
    """Base class for all PyD2RQ errors.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    location : str, optional
        The location (original or canonical) of the resource involved.
    """

    def __init__(self, message: str, location: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        return self.message


class InvalidLocationError(D2RQError, ValueError):
    """A location string could not be resolved to a canonical location."""

    def __init__(self, location: str, reason: Optional[str] = None) -> None:
        message = f"Malformed URI: {location!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, location)


class ResourceAccessError(D2RQError, OSError):
    """A resolved resource could not be opened.

    The underlying cause is chained as ``__cause__``.
    """

    def __init__(self, location: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Error reading from translation table: {location}", location)


class ResourceNotFoundError(ResourceAccessError):
    """The resolved resource does not exist."""

    def __init__(self, location: str) -> None:
        super().__init__(location, f"File not found at URL: {location}")


class TranslationLoadError(D2RQError):
    """Reading lines from an opened translation table failed.

    Any translations parsed before the failure are discarded.
    """

    def __init__(self, location: Optional[str], reason: Optional[str] = None) -> None:
        message = f"Failed to read translation table {location}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, location)
