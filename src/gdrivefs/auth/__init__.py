"""Public auth exports for gdrivefs."""

from __future__ import annotations

from .auth_info import AuthInfo
from .oauth_client import OAuthClient
from .service import DriveServiceClient, client_for
from .service_account_client import ServiceAccountClient

__all__ = [
    "AuthInfo",
    "DriveServiceClient",
    "OAuthClient",
    "ServiceAccountClient",
    "client_for",
]
