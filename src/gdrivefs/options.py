"""Configuration for GoogleDriveFS."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional

from gdrivefs.auth import AuthInfo
from gdrivefs.errors import InvalidCredentialsError
from gdrivefs.util.mime import DEFAULT_FILE_MIME

DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

DEFAULT_CONNECTION_TIMEOUT: timedelta = timedelta(hours=3)


@dataclass(slots=True, frozen=True)
class DriveFSOptions:
    """
    Options for GoogleDriveFS.

    Attributes:
        root_id: Drive folder id that becomes `/`.
        auth_info: Credentials used on connect.
        connection_timeout: Age after which the next operation reconnects.
        max_retries: Transport-level retries for transient Drive errors.
        default_mime_type: MIME type sent by write_file when none is given.
    """

    root_id: str
    auth_info: AuthInfo
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    supports_all_drives: bool = True
    connection_timeout: timedelta = DEFAULT_CONNECTION_TIMEOUT
    max_retries: int = 3
    default_mime_type: str = DEFAULT_FILE_MIME

    def __post_init__(self) -> None:
        if not isinstance(self.root_id, str) or not self.root_id.strip():
            raise ValueError("DriveFSOptions.root_id must be a non-empty string")
        if self.connection_timeout <= timedelta(0):
            raise ValueError("DriveFSOptions.connection_timeout must be positive")
        if self.max_retries < 0:
            raise ValueError("DriveFSOptions.max_retries must not be negative")

    @classmethod
    def from_env(
        cls,
        prefix: str = "GDRIVEFS_",
        environ: Optional[Mapping[str, str]] = None,
    ) -> DriveFSOptions:
        """
        Build options from environment variables.

        Reads `<prefix>ROOT_ID` plus one credential set, checked in order:
            - SERVICE_ACCOUNT_FILE
            - CLIENT_EMAIL + PRIVATE_KEY (literal "\\n" becomes a newline)
            - CLIENT_SECRETS + TOKEN_FILE

        Raises:
            InvalidCredentialsError: if ROOT_ID or every credential set is missing.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str:
            return env.get(prefix + name, "").strip()

        root_id = get("ROOT_ID")
        if not root_id:
            raise InvalidCredentialsError(f"Missing env var: {prefix}ROOT_ID")

        if get("SERVICE_ACCOUNT_FILE"):
            auth_info = AuthInfo(
                kind="service_account",
                data={"service_account_file": get("SERVICE_ACCOUNT_FILE")},
            )
        elif get("CLIENT_EMAIL") and get("PRIVATE_KEY"):
            auth_info = AuthInfo(
                kind="service_account",
                data={
                    "client_email": get("CLIENT_EMAIL"),
                    "private_key": get("PRIVATE_KEY").replace("\\n", "\n"),
                },
            )
        elif get("CLIENT_SECRETS") and get("TOKEN_FILE"):
            auth_info = AuthInfo(
                kind="oauth",
                data={
                    "client_secrets_file": get("CLIENT_SECRETS"),
                    "token_file": get("TOKEN_FILE"),
                },
            )
        else:
            raise InvalidCredentialsError(
                "No credentials configured in environment",
                details={"prefix": prefix},
            )

        return cls(root_id=root_id, auth_info=auth_info)
