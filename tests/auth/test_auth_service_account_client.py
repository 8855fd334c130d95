import unittest
from unittest.mock import patch

from gdrivefs.auth import AuthInfo, OAuthClient, ServiceAccountClient, client_for
from gdrivefs.errors import InvalidCredentialsError

SCOPES = ["https://www.googleapis.com/auth/drive"]


class TestServiceAccountClient(unittest.TestCase):
    def test_credentials_from_email_and_key(self) -> None:
        info = AuthInfo(
            kind="service_account",
            data={"client_email": "bot@example.com", "private_key": "KEY"},
        )
        with patch(
            "google.oauth2.service_account.Credentials.from_service_account_info"
        ) as from_info:
            creds = ServiceAccountClient(info).get_credentials(SCOPES)

        self.assertIs(creds, from_info.return_value)
        passed = from_info.call_args.args[0]
        self.assertEqual(passed["client_email"], "bot@example.com")
        self.assertEqual(from_info.call_args.kwargs["scopes"], SCOPES)

    def test_credentials_from_key_file(self) -> None:
        info = AuthInfo(kind="service_account", data={"service_account_file": "/tmp/sa.json"})
        with patch(
            "google.oauth2.service_account.Credentials.from_service_account_file"
        ) as from_file:
            ServiceAccountClient(info).get_credentials(SCOPES)

        self.assertEqual(from_file.call_args.args[0], "/tmp/sa.json")

    def test_missing_key_is_invalid_credentials(self) -> None:
        info = AuthInfo(kind="service_account", data={"client_email": "bot@example.com"})
        with self.assertRaises(InvalidCredentialsError):
            ServiceAccountClient(info).get_credentials(SCOPES)

    def test_unreadable_key_is_invalid_credentials(self) -> None:
        info = AuthInfo(
            kind="service_account",
            data={"client_email": "bot@example.com", "private_key": "not a pem"},
        )
        with self.assertRaises(InvalidCredentialsError) as ctx:
            ServiceAccountClient(info).get_credentials(SCOPES)
        self.assertIsNotNone(ctx.exception.cause)

    def test_client_for_dispatches_on_kind(self) -> None:
        sa = AuthInfo(kind="service_account", data={})
        oauth = AuthInfo(kind="oauth", data={"client_secrets_file": "a", "token_file": "b"})

        self.assertIsInstance(client_for(sa), ServiceAccountClient)
        self.assertIsInstance(client_for(oauth), OAuthClient)


if __name__ == "__main__":
    unittest.main()
