import unittest

import gdrivefs


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(gdrivefs, "GoogleDriveFS"))
        self.assertTrue(hasattr(gdrivefs, "DriveFSOptions"))
        self.assertTrue(hasattr(gdrivefs, "PathResolver"))
        self.assertTrue(hasattr(gdrivefs, "AuthInfo"))

        self.assertTrue(hasattr(gdrivefs, "Node"))
        self.assertTrue(hasattr(gdrivefs, "NodeStat"))
        self.assertTrue(hasattr(gdrivefs, "SearchOptions"))

        self.assertTrue(hasattr(gdrivefs, "DriveFSError"))
        self.assertTrue(hasattr(gdrivefs, "PathNotFoundError"))
        self.assertTrue(hasattr(gdrivefs, "NotADirectoryError"))
        self.assertTrue(hasattr(gdrivefs, "InvalidCredentialsError"))
        self.assertTrue(hasattr(gdrivefs, "RemoteFailureError"))
        self.assertTrue(hasattr(gdrivefs, "NotInitializedError"))

    def test___all___is_defined(self) -> None:
        for name in gdrivefs.__all__:
            self.assertTrue(hasattr(gdrivefs, name), name)
        self.assertIn("GoogleDriveFS", gdrivefs.__all__)


if __name__ == "__main__":
    unittest.main()
