import random
import unittest

from core.models import Entry, normalize_photo
from core.services.highlights_service import (
    EMPTY_MESSAGE,
    MAX_HIGHLIGHTS,
    Composition,
    compose_highlights,
    select_entries,
)


def entry(i, photos=1):
    date = f"2024-01-{(i % 28) + 1:02d}"
    return Entry(
        id=f"e{i}",
        user_id="u1",
        date=date,
        title=f"Entry {i}",
        photos=[normalize_photo(f"file:///{i}-{k}.jpg", id=f"p{i}-{k}", rotation=0.0) for k in range(photos)],
    )


class HighlightsTests(unittest.TestCase):
    def test_caps_at_thirty(self):
        comp = compose_highlights("January 2024", [entry(i) for i in range(35)])
        self.assertEqual(len(comp.items), MAX_HIGHLIGHTS)

    def test_excludes_entries_without_photos(self):
        entries = [entry(0), entry(1, photos=0), entry(2, photos=3)]
        picked = select_entries(entries)
        self.assertEqual([e.id for e in picked], ["e0", "e2"])

    def test_uses_first_photo_of_each_entry(self):
        comp = compose_highlights("x", [entry(2, photos=3)])
        self.assertEqual(comp.items[0].photo.id, "p2-0")
        self.assertEqual(comp.items[0].entry_date, "2024-01-03")

    def test_rotation_and_scale_ranges(self):
        comp = compose_highlights("x", [entry(i) for i in range(30)], rng=random.Random(1))
        for item in comp.items:
            self.assertGreaterEqual(item.rotation, -5.0)
            self.assertLess(item.rotation, 5.0)
            self.assertGreaterEqual(item.scale, 0.8)
            self.assertLess(item.scale, 1.2)

    def test_seeded_rng_is_reproducible(self):
        entries = [entry(i) for i in range(10)]
        a = compose_highlights("x", entries, rng=random.Random(42))
        b = compose_highlights("x", entries, rng=random.Random(42))
        self.assertEqual([i.rotation for i in a.items], [i.rotation for i in b.items])

    def test_empty_composition(self):
        comp = compose_highlights("March 2024", [entry(0, photos=0)])
        self.assertTrue(comp.is_empty)
        self.assertTrue(EMPTY_MESSAGE)

    def test_file_name_replaces_first_space(self):
        self.assertEqual(Composition("March 2024").file_name, "Highlights-March-2024.png")
        self.assertEqual(Composition("2024 Recap").file_name, "Highlights-2024-Recap.png")
        self.assertEqual(Composition("a b c").file_name, "Highlights-a-b c.png")


if __name__ == "__main__":
    unittest.main()
