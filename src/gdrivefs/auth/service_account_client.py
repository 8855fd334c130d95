"""Service account (JWT) credentials for gdrivefs."""

from __future__ import annotations

from typing import Sequence

from gdrivefs.errors import InvalidArgumentError, InvalidCredentialsError

from .auth_info import AuthInfo
from .oauth_client import _validate_scopes
from .service import DriveServiceClient


class ServiceAccountClient(DriveServiceClient):
    """Create service account credentials from a key file or an email/key pair."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "service_account":
            raise InvalidArgumentError(
                "ServiceAccountClient requires AuthInfo(kind='service_account')"
            )
        self._auth_info = auth_info

    def get_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Return google.oauth2.service_account.Credentials for the given scopes.

        Service account tokens are minted on first request, so `ensure_valid`
        has nothing to refresh here.
        """
        _validate_scopes(scopes)

        from google.oauth2 import service_account

        key_file = self._auth_info.service_account_file
        try:
            if key_file is not None:
                return service_account.Credentials.from_service_account_file(
                    key_file,
                    scopes=list(scopes),
                )
            info = self._auth_info.service_account_info()
            return service_account.Credentials.from_service_account_info(
                info,
                scopes=list(scopes),
            )
        except InvalidCredentialsError:
            raise
        except Exception as exc:
            raise InvalidCredentialsError(
                "Failed to load service account credentials",
                details={"service_account_file": key_file},
                cause=exc,
            ) from exc
