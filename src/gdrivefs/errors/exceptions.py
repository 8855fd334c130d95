"""Exception hierarchy and HTTP error mapping for gdrivefs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DriveFSError(Exception):
    """
    Base exception for gdrivefs.

    Attributes:
        details: Optional structured information (e.g., HTTP status, path).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class NotInitializedError(DriveFSError):
    """Raised when an operation needs the root node before connect() succeeded."""


class InvalidCredentialsError(DriveFSError):
    """Raised when credentials cannot be loaded, refreshed or validated."""


class PathNotFoundError(DriveFSError):
    """Raised when no remote entry matches a path segment."""


class NotADirectoryError(DriveFSError):
    """Raised when traversal or listing goes through a file."""


class IsADirectoryError(DriveFSError):
    """Raised when a file operation targets a folder."""


class InvalidArgumentError(DriveFSError):
    """Raised when arguments are rejected before any remote call is made."""


class RemoteFailureError(DriveFSError):
    """Base class for failures reported by the remote store."""


class BadRequestError(RemoteFailureError):
    """Raised when the request is rejected as malformed (HTTP 400)."""


class PermissionError(RemoteFailureError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class NotFoundError(RemoteFailureError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(RemoteFailureError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(RemoteFailureError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(RemoteFailureError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(RemoteFailureError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(RemoteFailureError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivefs exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> DriveFSError:
    """
    Map an HTTP error to a gdrivefs exception.

    Policy:
        - 400 -> BadRequestError
        - 401 -> InvalidCredentialsError
        - 403 -> PermissionError, or QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise (5xx included) -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return BadRequestError(message, details=details, cause=cause)
    if info.status_code == 401:
        return InvalidCredentialsError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)


def annotate_error(exc: DriveFSError, message: str, **details: Any) -> DriveFSError:
    """
    Re-create `exc` as the same class with an operation-scoped message.

    The new error keeps the original details, adds `details` on top, and
    records `exc` as its cause.
    """
    merged = dict(exc.details)
    merged.update(details)
    return type(exc)(f"{message}: {exc}", details=merged, cause=exc)
