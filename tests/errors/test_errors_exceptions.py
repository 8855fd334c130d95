import unittest

from gdrivefs.errors.exceptions import (
    ApiError,
    BadRequestError,
    ConflictError,
    DriveFSError,
    HttpErrorInfo,
    InvalidCredentialsError,
    NotFoundError,
    PathNotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RemoteFailureError,
    annotate_error,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = DriveFSError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)
        self.assertIsInstance(err, RemoteFailureError)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, BadRequestError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(HttpErrorInfo(status_code=409, message="conflict"))
        self.assertIsInstance(err, ConflictError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, InvalidCredentialsError)

    def test_map_http_error_403_quota_vs_permission(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="quotaExceeded", message="quota")
        )
        self.assertIsInstance(err, QuotaExceededError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="insufficientPermissions", message="x")
        )
        self.assertIsInstance(err, PermissionError)

    def test_map_http_error_5xx_is_api_error(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=503, message="unavail"))
        self.assertIsInstance(err, ApiError)
        self.assertEqual(err.details["status_code"], 503)

    def test_map_http_error_default_message(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=418))
        self.assertIsInstance(err, ApiError)
        self.assertEqual(str(err), "HTTP error 418")

    def test_annotate_error_keeps_class(self) -> None:
        original = PathNotFoundError("Path not found: /a", details={"segment": "a"})

        err = annotate_error(original, "Failed to read file", operation="read_file", path="/a")

        self.assertIsInstance(err, PathNotFoundError)
        self.assertEqual(str(err), "Failed to read file: Path not found: /a")
        self.assertEqual(
            err.details,
            {"segment": "a", "operation": "read_file", "path": "/a"},
        )
        self.assertIs(err.cause, original)


if __name__ == "__main__":
    unittest.main()
