"""
Unit tests for record parsing.

- wrong top-level shapes raise ParseFailure
- unknown categories are skipped, not fatal
- empty settings fields count as absent
- non-text settings fields are shape errors
"""

import datetime
import unittest

from errors import ParseFailure
from models import (Category, ContentItem, DisplaySettings, ScheduleEntry,
                    parse_items, parse_schedule)


class TestItems(unittest.TestCase):
    def test_parse_items(self) -> None:
        body = [
            {"id": 1, "title": "Exam week", "content": "", "category": "announcement",
             "created_at": "2026-10-01T08:00:00.000Z"},
            {"id": 2, "title": "Clip", "content": "/uploads/1.mp4", "category": "video"},
        ]
        items = parse_items(body)
        self.assertEqual([i.category for i in items], [Category.ANNOUNCEMENT, Category.VIDEO])
        self.assertEqual(items[0].created_at.tzinfo, datetime.timezone.utc)
        self.assertEqual(items[1].content, "/uploads/1.mp4")
        self.assertIsNone(items[1].created_at)

    def test_unknown_category_is_skipped(self) -> None:
        with self.assertLogs("models", level="WARNING"):
            items = parse_items([{"id": 1, "title": "x", "category": "weather"}])
        self.assertEqual(items, [])

    def test_bad_shapes(self) -> None:
        with self.assertRaises(ParseFailure):
            parse_items({"error": "Server error"})
        with self.assertRaises(ParseFailure):
            parse_items(["not an object"])
        with self.assertRaises(ParseFailure):
            parse_items([{"id": 1, "category": "news"}])

    def test_bad_timestamp_becomes_none(self) -> None:
        it = ContentItem.from_json({"id": 1, "title": "t", "category": "news",
                                    "start_date": "yesterday"})
        self.assertIsNone(it.start_date)

    def test_non_text_image_url_is_a_shape_error(self) -> None:
        with self.assertRaises(ParseFailure):
            ContentItem.from_json({"id": 1, "title": "t", "category": "slideshow",
                                   "image_url": 42})


class TestSchedule(unittest.TestCase):
    def test_parse_and_cells(self) -> None:
        rows = parse_schedule([{
            "id": 3, "course_name": "Algorithms", "lecturer": "Dr. A",
            "room": "B201", "day_of_week": "Monday",
            "start_time": "08:00:00", "end_time": "09:40:00",
        }])
        self.assertEqual(rows[0].cells(), ("08:00 - 09:40", "Algorithms", "Dr. A", "B201"))

    def test_missing_optional_fields(self) -> None:
        e = ScheduleEntry.from_json({"id": 1, "course_name": "X", "day_of_week": "Friday",
                                     "start_time": "10:00:00", "end_time": "11:00:00",
                                     "lecturer": None})
        self.assertEqual(e.lecturer, "")
        self.assertEqual(e.room, "")

    def test_not_a_list(self) -> None:
        with self.assertRaises(ParseFailure):
            parse_schedule(None)


class TestSettings(unittest.TestCase):
    def test_empty_object(self) -> None:
        self.assertEqual(DisplaySettings.from_json({}), DisplaySettings())

    def test_blank_fields_are_absent_and_unknown_ignored(self) -> None:
        s = DisplaySettings.from_json({"id": 1, "school_name": "X", "logo_url": "",
                                       "color_bg_page": None, "updated_at": "..."})
        self.assertEqual(s.school_name, "X")
        self.assertIsNone(s.logo_url)
        self.assertIsNone(s.color_bg_page)

    def test_not_an_object(self) -> None:
        with self.assertRaises(ParseFailure):
            DisplaySettings.from_json([1, 2])

    def test_non_text_field_is_a_shape_error(self) -> None:
        for body in ({"color_bg_page": 123}, {"school_name": ["X"]},
                     {"logo_url": {"path": "/l.png"}}):
            with self.assertRaises(ParseFailure):
                DisplaySettings.from_json(body)


if __name__ == "__main__":
    unittest.main()
