import unittest

from gdrivefs.util.paths import join_path, split_parent, split_path


class TestUtilPaths(unittest.TestCase):
    def test_split_path_discards_empty_segments(self) -> None:
        self.assertEqual(split_path("/"), [])
        self.assertEqual(split_path(""), [])
        self.assertEqual(split_path("//a///b/"), ["a", "b"])

    def test_join_path(self) -> None:
        self.assertEqual(join_path([]), "/")
        self.assertEqual(join_path(["a", "b"]), "/a/b")

    def test_split_parent(self) -> None:
        self.assertEqual(split_parent("/a/b.txt"), ("/a", "b.txt"))
        self.assertEqual(split_parent("b.txt"), ("/", "b.txt"))
        self.assertEqual(split_parent("/a/b/"), ("/a", "b"))
        self.assertEqual(split_parent("/"), ("/", ""))


if __name__ == "__main__":
    unittest.main()
