"""
Tests for utility functions in tmdbkit.utils module.
"""

import unittest
from datetime import date, datetime, timezone

from tmdbkit.commands import ExternalIdSource
from tmdbkit.utils import (
    build_query,
    empty_string_to_none,
    image_url,
    null_to_empty_list,
    parse_optional_date,
    parse_utc_datetime,
    to_query_value,
)


class TestNormalisers(unittest.TestCase):
    """Test nullability helpers."""

    def test_empty_string_to_none(self):
        self.assertIsNone(empty_string_to_none(""))
        self.assertIsNone(empty_string_to_none(None))
        self.assertEqual(empty_string_to_none("US"), "US")
        self.assertEqual(empty_string_to_none(" "), " ")

    def test_null_to_empty_list(self):
        self.assertEqual(null_to_empty_list(None), [])
        self.assertEqual(null_to_empty_list([1]), [1])

    def test_parse_optional_date(self):
        self.assertEqual(parse_optional_date("2008-01-20"), date(2008, 1, 20))
        self.assertIsNone(parse_optional_date(""))
        self.assertIsNone(parse_optional_date(None))
        self.assertEqual(parse_optional_date(date(2008, 1, 20)), date(2008, 1, 20))
        self.assertEqual(parse_optional_date(datetime(2008, 1, 20, 5)), date(2008, 1, 20))

    def test_parse_optional_date_invalid(self):
        with self.assertRaises(ValueError):
            parse_optional_date("20/01/2008")
        with self.assertRaises(ValueError):
            parse_optional_date(2008)

    def test_parse_utc_datetime(self):
        self.assertEqual(
            parse_utc_datetime("2024-05-01 12:30:04 UTC"),
            datetime(2024, 5, 1, 12, 30, 4, tzinfo=timezone.utc),
        )
        self.assertEqual(parse_utc_datetime("2024-05-01T12:30:04Z"), "2024-05-01T12:30:04Z")


class TestQueryBuilding(unittest.TestCase):
    """Test query string conversion."""

    def test_to_query_value(self):
        self.assertIsNone(to_query_value(None))
        self.assertIsNone(to_query_value(False))
        self.assertEqual(to_query_value(True), "true")
        self.assertEqual(to_query_value(2), "2")
        self.assertEqual(to_query_value(0), "0")
        self.assertEqual(to_query_value(date(2024, 1, 2)), "2024-01-02")
        self.assertEqual(to_query_value(ExternalIdSource.TVDB), "tvdb_id")
        self.assertEqual(to_query_value("fr-FR"), "fr-FR")

    def test_build_query_drops_unset(self):
        query = build_query({"query": "alien", "page": None, "include_adult": False, "year": 1979})

        self.assertEqual(query, {"query": "alien", "year": "1979"})
        self.assertEqual(list(query), ["query", "year"])


class TestImageUrl(unittest.TestCase):
    def test_default_size(self):
        self.assertEqual(
            image_url("/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg"),
            "https://image.tmdb.org/t/p/w500/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
        )

    def test_custom_size_and_missing_slash(self):
        self.assertEqual(image_url("abc.png", size="original"), "https://image.tmdb.org/t/p/original/abc.png")

    def test_missing_path(self):
        self.assertEqual(image_url(None), "")
        self.assertEqual(image_url(""), "")


if __name__ == '__main__':
    unittest.main()
