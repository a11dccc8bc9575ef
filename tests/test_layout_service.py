import unittest

from core.models import normalize_photo
from core.services.layout_service import (
    LayoutKind,
    cover_source_rect,
    select_layout,
)


def make_photos(n):
    return [normalize_photo(f"file:///p{i}.jpg", id=f"p{i}", rotation=0.0) for i in range(n)]


class SelectLayoutTests(unittest.TestCase):
    def test_slot_count_matches_photo_count(self):
        for n in range(0, 7):
            with self.subTest(n=n):
                self.assertEqual(len(select_layout(n).slots), n)

    def test_kinds_by_count(self):
        self.assertEqual(select_layout(0).kind, LayoutKind.EMPTY)
        self.assertEqual(select_layout(1).kind, LayoutKind.SINGLE)
        self.assertEqual(select_layout(2).kind, LayoutKind.OVERLAP)
        self.assertEqual(select_layout(3).kind, LayoutKind.FEATURE_COLUMN)
        self.assertEqual(select_layout(4).kind, LayoutKind.GRID)
        self.assertEqual(select_layout(5).kind, LayoutKind.HERO)
        self.assertEqual(select_layout(6).kind, LayoutKind.HERO)

    def test_first_photo_is_hero_where_layout_has_one(self):
        for n in (2, 3, 5, 6):
            with self.subTest(n=n):
                self.assertEqual(select_layout(n).hero_index, 0)

    def test_empty_layout_has_no_hero(self):
        self.assertIsNone(select_layout(0).hero_index)

    def test_negative_count_rejected(self):
        with self.assertRaises(ValueError):
            select_layout(-1)

    def test_counts_above_cap_render_six_slots(self):
        self.assertEqual(len(select_layout(9).slots), 6)

    def test_overlap_second_photo_on_top(self):
        first, second = select_layout(2).slots
        self.assertGreater(second.z, first.z)
        self.assertAlmostEqual(first.width, 2.0 / 3.0)

    def test_feature_column_first_spans_two_rows(self):
        slots = select_layout(3).slots
        self.assertEqual(slots[0].row_span, 2)
        self.assertAlmostEqual(slots[0].height, 1.0 - 2 * 0.04)
        self.assertAlmostEqual(slots[1].left, slots[2].left)

    def test_hero_spans_two_by_two(self):
        hero = select_layout(6).slots[0]
        self.assertEqual((hero.col_span, hero.row_span), (2, 2))

    def test_slots_stay_inside_unit_square(self):
        for n in range(1, 7):
            for slot in select_layout(n).slots:
                with self.subTest(n=n, index=slot.index):
                    self.assertGreaterEqual(slot.left, 0.0)
                    self.assertGreaterEqual(slot.top, 0.0)
                    self.assertLessEqual(slot.left + slot.width, 1.0 + 1e-9)
                    self.assertLessEqual(slot.top + slot.height, 1.0 + 1e-9)

    def test_paint_order_bottom_first(self):
        photos = make_photos(2)
        order = select_layout(2).paint_order(photos)
        self.assertEqual([p.id for _, p in order], ["p0", "p1"])

    def test_to_pixels_scales(self):
        slot = select_layout(1).slots[0]
        x, y, w, h = slot.to_pixels(200, 100)
        self.assertAlmostEqual(x, 10.0)
        self.assertAlmostEqual(y, 5.0)
        self.assertAlmostEqual(w, 180.0)
        self.assertAlmostEqual(h, 90.0)


class CoverSourceRectTests(unittest.TestCase):
    def test_centered_crop_of_wide_image(self):
        x, y, w, h = cover_source_rect(200, 100, 100, 100, 50, 50)
        self.assertEqual((x, y, w, h), (50.0, 0.0, 100.0, 100.0))

    def test_pan_zero_shows_left_edge(self):
        x, _, _, _ = cover_source_rect(200, 100, 100, 100, 0, 50)
        self.assertEqual(x, 0.0)

    def test_pan_hundred_shows_right_edge(self):
        x, _, w, _ = cover_source_rect(200, 100, 100, 100, 100, 50)
        self.assertEqual(x + w, 200.0)

    def test_degenerate_window_returns_full_source(self):
        self.assertEqual(cover_source_rect(200, 100, 0, 100), (0.0, 0.0, 200, 100))


if __name__ == "__main__":
    unittest.main()
