"""Public error exports for gdrivefs."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    BadRequestError,
    ConflictError,
    DriveFSError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidCredentialsError,
    IsADirectoryError,
    NetworkError,
    NotADirectoryError,
    NotFoundError,
    NotInitializedError,
    PathNotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RemoteFailureError,
    annotate_error,
    map_http_error,
)

__all__ = [
    "DriveFSError",
    "NotInitializedError",
    "InvalidCredentialsError",
    "PathNotFoundError",
    "NotADirectoryError",
    "IsADirectoryError",
    "InvalidArgumentError",
    "RemoteFailureError",
    "BadRequestError",
    "PermissionError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "annotate_error",
    "map_http_error",
]
