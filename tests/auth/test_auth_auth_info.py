import unittest

from gdrivefs.auth import AuthInfo
from gdrivefs.errors import InvalidCredentialsError


class TestAuthInfo(unittest.TestCase):
    def test_auth_info_valid_oauth(self) -> None:
        info = AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": "/tmp/client_secrets.json",
                "token_file": "/tmp/token.json",
            },
        )
        self.assertEqual(info.kind, "oauth")
        self.assertEqual(info.token_file, "/tmp/token.json")

    def test_auth_info_invalid_kind(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="api_key", data={})

    def test_auth_info_missing_oauth_keys(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="oauth", data={"client_secrets_file": "x"})

    def test_auth_info_data_must_be_dict(self) -> None:
        with self.assertRaises(TypeError):
            AuthInfo(kind="oauth", data=[])  # type: ignore[arg-type]

    def test_service_account_info_from_email_and_key(self) -> None:
        info = AuthInfo(
            kind="service_account",
            data={"client_email": "bot@example.iam.gserviceaccount.com", "private_key": "KEY"},
        )
        sa = info.service_account_info()
        self.assertEqual(sa["type"], "service_account")
        self.assertEqual(sa["client_email"], "bot@example.iam.gserviceaccount.com")
        self.assertEqual(sa["private_key"], "KEY")
        self.assertIsNone(info.service_account_file)

    def test_service_account_missing_credentials_fails_late(self) -> None:
        info = AuthInfo(kind="service_account", data={"client_email": "bot@example.com"})
        with self.assertRaises(InvalidCredentialsError):
            info.service_account_info()


if __name__ == "__main__":
    unittest.main()
