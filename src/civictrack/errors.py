"""Error hierarchy for civictrack."""
from __future__ import annotations

from typing import Any


class CivicTrackError(Exception):
    """Base error for all civictrack errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidArgumentError(CivicTrackError, ValueError):
    """An argument was out of range or otherwise malformed."""


class LocationUnavailableError(CivicTrackError):
    """No reference coordinate could be obtained."""


# ---------------------------------------------------------------------------
# Classification errors
# ---------------------------------------------------------------------------


class ClassificationError(CivicTrackError):
    """Base for remote classification failures."""


class ClassificationTransportFailure(ClassificationError):
    """The classification service could not be reached or answered with an error."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class ClassificationShapeFailure(ClassificationError):
    """The classification service answered, but not with a valid classification."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[str] | None = None,
        raw: Any = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.errors = errors or []
        self.raw = raw


def transport_failure_from_status(status_code: int, message: str) -> ClassificationTransportFailure:
    """Build a transport failure for a non-success HTTP status."""
    if status_code == 401:
        reason = "authentication failed"
    elif status_code == 403:
        reason = "access denied"
    elif status_code == 404:
        reason = "endpoint not found"
    elif status_code == 429:
        reason = "rate limited"
    elif 500 <= status_code <= 599:
        reason = "server error"
    else:
        reason = "request failed"
    return ClassificationTransportFailure(
        f"Classification {reason} ({status_code}): {message}",
        status_code=status_code,
    )
