import json
import tempfile
import unittest
from pathlib import Path

from gdrivefs.auth import AuthInfo, OAuthClient
from gdrivefs.errors import InvalidArgumentError, InvalidCredentialsError


class TestOAuthClient(unittest.TestCase):
    def _auth_info(self, tmp_path: Path) -> AuthInfo:
        return AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": str(tmp_path / "client_secrets.json"),
                "token_file": str(tmp_path / "token.json"),
            },
        )

    def test_get_credentials_loads_token_file_without_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            token_payload = {
                "token": "fake-token",
                "refresh_token": "fake-refresh-token",
                "token_uri": "https://oauth2.googleapis.com/token",
                "client_id": "fake-client-id",
                "client_secret": "fake-client-secret",
                "scopes": ["https://www.googleapis.com/auth/drive"],
                "type": "authorized_user",
            }
            (tmp_path / "token.json").write_text(json.dumps(token_payload), encoding="utf-8")

            client = OAuthClient(self._auth_info(tmp_path))
            creds = client.get_credentials(
                scopes=["https://www.googleapis.com/auth/drive"],
                ensure_valid=False,
            )

            self.assertEqual(creds.refresh_token, "fake-refresh-token")

    def test_corrupt_token_file_is_invalid_credentials(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            (tmp_path / "token.json").write_text("not json", encoding="utf-8")

            client = OAuthClient(self._auth_info(tmp_path))
            with self.assertRaises(InvalidCredentialsError):
                client.get_credentials(scopes=["https://www.googleapis.com/auth/drive"])

    def test_rejects_empty_scopes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            client = OAuthClient(self._auth_info(Path(tmp)))
            with self.assertRaises(InvalidArgumentError):
                client.get_credentials(scopes=[])

    def test_requires_oauth_kind(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            OAuthClient(AuthInfo(kind="service_account", data={}))


if __name__ == "__main__":
    unittest.main()
