"""ViewModel for the calendar: navigation, entry CRUD and highlights."""

from __future__ import annotations

from dataclasses import dataclass
import random

from loguru import logger

from core.models import Entry
from core.services.calendar_service import (
    MonthCursor,
    MonthModel,
    ViewMode,
    YearModel,
    build_month,
    build_year,
    date_key,
    index_by_date,
    month_scope,
    year_scope,
)
from core.services.entry_service import EntryService
from core.services.highlights_service import MAX_HIGHLIGHTS, Composition, compose_highlights
from core.services.interfaces import MemoryAppError, StatusReporter


@dataclass(frozen=True)
class DayAction:
    """What clicking a day should open: the read view or the create form."""

    date: str
    entry: Entry | None

    @property
    def is_create(self) -> bool:
        return self.entry is None


class MainVM:
    """Main application view-model.

    Mediates between the entry service and the calendar views. Failures are
    logged and surfaced through the reporter; local state only changes after
    a successful operation.
    """

    def __init__(
        self,
        service: EntryService,
        reporter: StatusReporter | None = None,
        cursor: MonthCursor | None = None,
        highlights_seed: int | None = None,
        max_highlights: int = MAX_HIGHLIGHTS,
    ) -> None:
        self._service = service
        self._reporter = reporter
        self.cursor = cursor or MonthCursor.today()
        self.view_mode = ViewMode.MONTH
        self.entries: list[Entry] = []
        self.loading = False
        self._highlights_seed = highlights_seed
        self._max_highlights = max_highlights

    def set_reporter(self, reporter: StatusReporter) -> None:
        self._reporter = reporter

    def _fail(self, action: str, ex: MemoryAppError) -> None:
        logger.error("{} failed: {}", action, ex)
        if self._reporter is not None:
            self._reporter.alert(ex.title, str(ex) or f"{action} failed. Please try again.")

    # Loading / CRUD
    def load(self) -> bool:
        """Reload entries from the store; on failure keep the current list."""
        self.loading = True
        try:
            self.entries = self._service.load()
            return True
        except MemoryAppError as ex:
            self._fail("Loading entries", ex)
            return False
        finally:
            self.loading = False

    def save_entry(self, entry: Entry) -> bool:
        """Persist `entry` (upsert on its date) and refresh the list."""
        try:
            self._service.save(entry)
        except MemoryAppError as ex:
            self._fail("Saving entry", ex)
            return False
        self.load()
        return True

    def delete_entry(self, entry: Entry) -> bool:
        """Delete `entry` together with its media."""
        try:
            self._service.delete(entry)
        except MemoryAppError as ex:
            self._fail("Deleting entry", ex)
            return False
        self.entries = [e for e in self.entries if e.id != entry.id]
        return True

    def get_entry_by_date(self, key: str) -> Entry | None:
        return index_by_date(self.entries).get(key)

    # Navigation
    def go_prev(self) -> None:
        self.cursor = self.cursor.step(self.view_mode, forward=False)

    def go_next(self) -> None:
        self.cursor = self.cursor.step(self.view_mode, forward=True)

    def set_view_mode(self, mode: ViewMode) -> None:
        self.view_mode = mode

    def go_today(self) -> None:
        self.cursor = MonthCursor.today()

    def open_month(self, month: int) -> None:
        """Jump from the year view into `month` (1-12) of the current year."""
        self.cursor = MonthCursor(self.cursor.year, month)
        self.view_mode = ViewMode.MONTH

    def click_day(self, day: int) -> DayAction:
        key = date_key(self.cursor.year, self.cursor.month, day)
        return DayAction(date=key, entry=self.get_entry_by_date(key))

    @property
    def greeting(self) -> str:
        user = self._service.current_user
        if user is None:
            return "Welcome"
        return f"Welcome, {user.greeting_name}"

    @property
    def heading(self) -> str:
        if self.view_mode is ViewMode.YEAR:
            return str(self.cursor.year)
        return f"{self.cursor.month_name} {self.cursor.year}"

    def month_model(self) -> MonthModel:
        return build_month(self.cursor.year, self.cursor.month, self.entries)

    def year_model(self) -> YearModel:
        return build_year(self.cursor.year, self.entries)

    # Highlights
    @property
    def recap_label(self) -> str:
        return "Year Recap" if self.view_mode is ViewMode.YEAR else "Month Recap"

    def highlights(self) -> Composition:
        """Compose highlights for the visible month or year."""
        if self.view_mode is ViewMode.YEAR:
            title, scoped = year_scope(self.cursor, self.entries)
        else:
            title, scoped = month_scope(self.cursor, self.entries)
        rng = random.Random(self._highlights_seed) if self._highlights_seed is not None else None
        comp = compose_highlights(title, scoped, rng=rng, max_items=self._max_highlights)
        logger.info("Highlights '{}': {} of {} entries", title, len(comp.items), len(scoped))
        return comp

    @property
    def entry_count(self) -> int:
        """Number of entries currently loaded."""
        return len(self.entries)
