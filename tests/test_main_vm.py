import random
import unittest

from app.viewmodels.main_vm import MainVM
from core.models import Entry, normalize_photo
from core.services.calendar_service import MonthCursor, ViewMode
from core.services.entry_service import EntryService
from core.services.interfaces import StoreError
from fakes import FakeObjects, FakeReporter, FakeSession, FakeStore


def entry(date, photos=1, id=None):
    return Entry(
        id=id or date,
        user_id="u1",
        date=date,
        title=f"t {date}",
        photos=[normalize_photo(f"file:///{date}-{i}.jpg", rotation=0) for i in range(photos)],
    )


class MainVMTests(unittest.TestCase):
    def setUp(self):
        self.session = FakeSession()
        self.store = FakeStore([entry("2024-03-07"), entry("2024-03-20", photos=0), entry("2024-07-01")])
        self.objects = FakeObjects()
        self.reporter = FakeReporter()
        service = EntryService(self.session, self.store, self.objects, rng=random.Random(0))
        self.vm = MainVM(service, self.reporter, cursor=MonthCursor(2024, 3), highlights_seed=11)
        self.vm.load()

    def test_load_orders_newest_first(self):
        self.assertEqual([e.date for e in self.vm.entries], ["2024-07-01", "2024-03-20", "2024-03-07"])

    def test_failed_load_keeps_entries_and_alerts(self):
        self.store.fail = StoreError("Failed to load entries. Please try again.")
        self.assertFalse(self.vm.load())
        self.assertEqual(len(self.vm.entries), 3)
        self.assertEqual(self.reporter.alerts[0][0], StoreError.title)

    def test_click_day_with_entry_opens_detail(self):
        action = self.vm.click_day(7)
        self.assertFalse(action.is_create)
        self.assertEqual(action.entry.date, "2024-03-07")

    def test_click_empty_day_opens_create(self):
        action = self.vm.click_day(8)
        self.assertTrue(action.is_create)
        self.assertEqual(action.date, "2024-03-08")

    def test_month_navigation_wraps(self):
        self.vm.cursor = MonthCursor(2023, 12)
        self.vm.go_next()
        self.assertEqual(self.vm.cursor, MonthCursor(2024, 1))
        self.vm.go_prev()
        self.assertEqual(self.vm.cursor, MonthCursor(2023, 12))

    def test_year_navigation_resets_to_january(self):
        self.vm.set_view_mode(ViewMode.YEAR)
        self.vm.go_next()
        self.assertEqual(self.vm.cursor, MonthCursor(2025, 1))
        self.assertEqual(self.vm.heading, "2025")
        self.assertEqual(self.vm.recap_label, "Year Recap")

    def test_open_month_switches_to_month_view(self):
        self.vm.set_view_mode(ViewMode.YEAR)
        self.vm.open_month(7)
        self.assertIs(self.vm.view_mode, ViewMode.MONTH)
        self.assertEqual(self.vm.heading, "July 2024")

    def test_save_same_date_replaces(self):
        replacement = entry("2024-03-07", photos=0, id="other")
        replacement.title = "again"
        self.assertTrue(self.vm.save_entry(replacement))
        on_day = [e for e in self.vm.entries if e.date == "2024-03-07"]
        self.assertEqual(len(on_day), 1)
        self.assertEqual(on_day[0].title, "again")

    def test_save_without_token_alerts_and_leaves_state(self):
        self.session.token = None
        self.assertFalse(self.vm.save_entry(entry("2024-03-09")))
        self.assertIsNone(self.vm.get_entry_by_date("2024-03-09"))
        self.assertEqual(len(self.reporter.alerts), 1)

    def test_delete_removes_locally_and_releases_media(self):
        target = self.vm.get_entry_by_date("2024-03-07")
        self.assertTrue(self.vm.delete_entry(target))
        self.assertIsNone(self.vm.get_entry_by_date("2024-03-07"))
        self.assertEqual(len(self.objects.deleted), 1)

    def test_month_highlights_scope(self):
        comp = self.vm.highlights()
        self.assertEqual(comp.title, "March 2024")
        self.assertEqual([i.entry_date for i in comp.items], ["2024-03-07"])

    def test_year_highlights_scope(self):
        self.vm.set_view_mode(ViewMode.YEAR)
        comp = self.vm.highlights()
        self.assertEqual(comp.title, "2024 Recap")
        self.assertEqual(len(comp.items), 2)

    def test_seeded_highlights_are_stable(self):
        a = self.vm.highlights()
        b = self.vm.highlights()
        self.assertEqual([i.rotation for i in a.items], [i.rotation for i in b.items])

    def test_greeting_uses_first_name(self):
        self.assertEqual(self.vm.greeting, "Welcome, Ada")

    def test_month_model_marks_entries(self):
        model = self.vm.month_model()
        self.assertEqual(model.entry_count, 2)


if __name__ == "__main__":
    unittest.main()
