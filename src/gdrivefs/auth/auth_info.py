"""Authentication information for gdrivefs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from gdrivefs.errors import InvalidCredentialsError

SUPPORTED_KINDS: tuple[str, ...] = ("oauth", "service_account")


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    kind = "oauth"
        data must include:
            - client_secrets_file
            - token_file
    kind = "service_account"
        data must include either:
            - service_account_file
        or:
            - client_email
            - private_key
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind not in SUPPORTED_KINDS:
            raise ValueError(f"AuthInfo.kind must be one of {SUPPORTED_KINDS}")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        if self.kind == "oauth":
            for key in ("client_secrets_file", "token_file"):
                if not _non_empty(self.data.get(key)):
                    raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

    @property
    def client_secrets_file(self) -> str:
        """Path to OAuth client secrets JSON."""
        return str(self.data["client_secrets_file"])

    @property
    def token_file(self) -> str:
        """Path to OAuth token JSON (authorized user)."""
        return str(self.data["token_file"])

    def service_account_info(self) -> dict[str, Any]:
        """
        Return the service account key as a dict for google-auth.

        Raises:
            InvalidCredentialsError: if neither a key file nor an email/key pair
                is configured.
        """
        if self.kind != "service_account":
            raise InvalidCredentialsError("AuthInfo is not a service account")

        email = self.data.get("client_email")
        private_key = self.data.get("private_key")
        if not (_non_empty(email) and _non_empty(private_key)):
            raise InvalidCredentialsError(
                "Invalid authentication credentials",
                details={"missing": ["client_email", "private_key"]},
            )

        return {
            "type": "service_account",
            "client_email": email,
            "private_key": private_key,
            "token_uri": self.data.get(
                "token_uri", "https://oauth2.googleapis.com/token"
            ),
        }

    @property
    def service_account_file(self) -> str | None:
        value = self.data.get("service_account_file")
        return str(value) if _non_empty(value) else None


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
