import unittest
from datetime import datetime, timezone

from gdrivefs.controller.query import build_parent_query, build_search_query, quote
from gdrivefs.models import SearchOptions


class TestQuery(unittest.TestCase):
    def test_quote_escapes(self) -> None:
        self.assertEqual(quote("a'b"), "'a\\'b'")
        self.assertEqual(quote("a\\b"), "'a\\\\b'")

    def test_parent_query(self) -> None:
        self.assertEqual(build_parent_query("P"), "'P' in parents and trashed = false")
        self.assertEqual(
            build_parent_query("P", name="x", include_trashed=True),
            "'P' in parents and name = 'x'",
        )

    def test_search_query_only_parent_by_default(self) -> None:
        self.assertEqual(
            build_search_query("P", SearchOptions()),
            "'P' in parents and trashed = false",
        )

    def test_search_query_server_side_criteria(self) -> None:
        options = SearchOptions(
            name="report",
            mime_type="application/pdf",
            min_size=100,
            max_size=200,
            modified_after=datetime(2025, 1, 1, tzinfo=timezone.utc),
            modified_before=datetime(2025, 2, 1, tzinfo=timezone.utc),
        )
        q = build_search_query("P", options)

        self.assertEqual(
            q.split(" and "),
            [
                "'P' in parents",
                "trashed = false",
                "name contains 'report'",
                "mimeType = 'application/pdf'",
                "modifiedTime > '2025-01-01T00:00:00.000000Z'",
                "modifiedTime < '2025-02-01T00:00:00.000000Z'",
            ],
        )
        self.assertNotIn("size", q)


if __name__ == "__main__":
    unittest.main()
