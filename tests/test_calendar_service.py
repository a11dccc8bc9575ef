import unittest

from core.models import Entry, normalize_photo
from core.moods import MOODS, Mood
from core.services.calendar_service import (
    MonthCursor,
    ViewMode,
    build_month,
    build_year,
    date_key,
    format_long_date,
    format_short_date,
    leading_blanks,
    month_scope,
    resolve_day,
    year_scope,
)


def entry(date, mood=Mood.HAPPY, photos=0):
    return Entry(
        id=date,
        user_id="u1",
        date=date,
        title=f"t {date}",
        mood=mood,
        photos=[normalize_photo(f"file:///{date}-{i}.jpg", rotation=0.0) for i in range(photos)],
    )


class MonthCursorTests(unittest.TestCase):
    def test_next_month_wraps_year(self):
        self.assertEqual(MonthCursor(2023, 12).next_month(), MonthCursor(2024, 1))

    def test_prev_month_wraps_year(self):
        self.assertEqual(MonthCursor(2024, 1).prev_month(), MonthCursor(2023, 12))

    def test_shift_many_months(self):
        self.assertEqual(MonthCursor(2024, 5).shift_months(-17), MonthCursor(2022, 12))

    def test_year_step_resets_to_january(self):
        c = MonthCursor(2024, 7)
        self.assertEqual(c.step(ViewMode.YEAR, forward=True), MonthCursor(2025, 1))
        self.assertEqual(c.step(ViewMode.YEAR, forward=False), MonthCursor(2023, 1))

    def test_month_step(self):
        c = MonthCursor(2024, 7)
        self.assertEqual(c.step(ViewMode.MONTH, forward=True), MonthCursor(2024, 8))
        self.assertEqual(c.step(ViewMode.MONTH, forward=False), MonthCursor(2024, 6))

    def test_invalid_month(self):
        with self.assertRaises(ValueError):
            MonthCursor(2024, 13)

    def test_days_in_month(self):
        self.assertEqual(MonthCursor(2024, 2).days_in_month, 29)
        self.assertEqual(MonthCursor(2023, 2).days_in_month, 28)

    def test_month_prefix_and_name(self):
        c = MonthCursor(2024, 3)
        self.assertEqual(c.month_prefix, "2024-03")
        self.assertEqual(c.month_name, "March")


class MonthModelTests(unittest.TestCase):
    def test_leading_blanks_sunday_first(self):
        # 2024-09-01 is a Sunday, 2024-03-01 a Friday
        self.assertEqual(leading_blanks(2024, 9), 0)
        self.assertEqual(leading_blanks(2024, 3), 5)

    def test_build_month_resolves_entries(self):
        model = build_month(2024, 3, [entry("2024-03-07", Mood.CALM, photos=2), entry("2024-04-01")])
        self.assertEqual(len(model.days), 31)
        self.assertEqual(model.blanks, 5)
        self.assertEqual(model.title, "March 2024")
        self.assertEqual(model.entry_count, 1)
        day7 = model.days[6]
        self.assertEqual(day7.date, "2024-03-07")
        self.assertTrue(day7.has_entry)
        self.assertTrue(day7.has_photos)
        self.assertEqual(day7.mood_color, MOODS[Mood.CALM].bg)
        self.assertIsNone(model.days[0].mood_color)

    def test_build_year_has_twelve_months(self):
        model = build_year(2024, [entry("2024-01-02"), entry("2024-12-31"), entry("2023-12-31")])
        self.assertEqual(len(model.months), 12)
        self.assertEqual([m.entry_count for m in model.months].count(1), 2)

    def test_resolve_day(self):
        entries = [entry("2024-03-07")]
        self.assertEqual(resolve_day(entries, "2024-03-07").date, "2024-03-07")
        self.assertIsNone(resolve_day(entries, "2024-03-08"))


class ScopeTests(unittest.TestCase):
    def setUp(self):
        self.entries = [entry("2024-03-07"), entry("2024-03-20"), entry("2024-04-01"), entry("2023-03-07")]

    def test_month_scope(self):
        title, scoped = month_scope(MonthCursor(2024, 3), self.entries)
        self.assertEqual(title, "March 2024")
        self.assertEqual([e.date for e in scoped], ["2024-03-07", "2024-03-20"])

    def test_year_scope(self):
        title, scoped = year_scope(MonthCursor(2024, 3), self.entries)
        self.assertEqual(title, "2024 Recap")
        self.assertEqual(len(scoped), 3)


class FormatTests(unittest.TestCase):
    def test_date_key_pads(self):
        self.assertEqual(date_key(2024, 3, 7), "2024-03-07")

    def test_long_and_short_dates(self):
        self.assertEqual(format_long_date("2024-03-07"), "March 7, 2024")
        self.assertEqual(format_short_date("2024-03-07"), "7 Mar")


if __name__ == "__main__":
    unittest.main()
