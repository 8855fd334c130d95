"""Drive service construction shared by the credential clients."""

from __future__ import annotations

from typing import Sequence

from gdrivefs.errors import InvalidCredentialsError

from .auth_info import AuthInfo


class DriveServiceClient:
    """Base for clients that turn AuthInfo into a Drive API service."""

    def get_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        raise NotImplementedError

    def build_drive_service(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Build a Drive API service resource.

        Returns:
            googleapiclient.discovery.Resource
        """
        from googleapiclient.discovery import build

        creds = self.get_credentials(scopes=scopes, ensure_valid=ensure_valid)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise InvalidCredentialsError("Failed to build Drive service", cause=exc) from exc


def client_for(auth_info: AuthInfo) -> DriveServiceClient:
    """Return the credential client matching `auth_info.kind`."""
    if auth_info.kind == "oauth":
        from .oauth_client import OAuthClient

        return OAuthClient(auth_info)

    from .service_account_client import ServiceAccountClient

    return ServiceAccountClient(auth_info)
