"""gdrivefs public API."""

from __future__ import annotations

from gdrivefs.auth import AuthInfo, OAuthClient, ServiceAccountClient
from gdrivefs.errors import (
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
    map_http_error,
)
from gdrivefs.fs import GoogleDriveFS
from gdrivefs.models import FileInfo, Node, NodeStat, SearchOptions
from gdrivefs.options import DriveFSOptions
from gdrivefs.tree import PathResolver

__version__ = "0.1.0"

__all__ = [
    # High-level
    "GoogleDriveFS",
    "DriveFSOptions",
    "PathResolver",
    # Auth
    "AuthInfo",
    "OAuthClient",
    "ServiceAccountClient",
    # Models
    "Node",
    "NodeStat",
    "FileInfo",
    "SearchOptions",
    # Errors
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
    "map_http_error",
]
