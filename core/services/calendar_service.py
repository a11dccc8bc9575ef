"""Month/year calendar models and cursor navigation.

Everything here is a pure function of a (year, month) cursor and the loaded
entries. Weeks start on Sunday.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from core.models import Entry
from core.moods import mood_style

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEKDAY_INITIALS = ["S", "M", "T", "W", "T", "F", "S"]
MONTH_NAMES = [calendar.month_name[i] for i in range(1, 13)]
MONTH_ABBR = [calendar.month_abbr[i] for i in range(1, 13)]


class ViewMode(str, Enum):
    MONTH = "month"
    YEAR = "year"


def date_key(year: int, month: int, day: int) -> str:
    """Return the YYYY-MM-DD key used to index entries."""
    return f"{year:04d}-{month:02d}-{day:02d}"


def format_long_date(key: str) -> str:
    """'2024-03-07' -> 'March 7, 2024'."""
    d = date.fromisoformat(key)
    return f"{MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"


def format_short_date(key: str) -> str:
    """'2024-03-07' -> '7 Mar'."""
    d = date.fromisoformat(key)
    return f"{d.day} {MONTH_ABBR[d.month - 1]}"


def leading_blanks(year: int, month: int) -> int:
    """Number of empty cells before day 1 with Sunday as the first column."""
    monday_based, _ = calendar.monthrange(year, month)
    return (monday_based + 1) % 7


@dataclass(frozen=True)
class MonthCursor:
    """Calendar position; `month` is 1-12."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")

    @classmethod
    def today(cls) -> "MonthCursor":
        t = date.today()
        return cls(t.year, t.month)

    def shift_months(self, delta: int) -> "MonthCursor":
        total = self.year * 12 + (self.month - 1) + delta
        return MonthCursor(total // 12, total % 12 + 1)

    def next_month(self) -> "MonthCursor":
        return self.shift_months(1)

    def prev_month(self) -> "MonthCursor":
        return self.shift_months(-1)

    def next_year(self) -> "MonthCursor":
        return MonthCursor(self.year + 1, 1)

    def prev_year(self) -> "MonthCursor":
        return MonthCursor(self.year - 1, 1)

    def step(self, mode: ViewMode, forward: bool) -> "MonthCursor":
        """Advance/retreat by exactly one unit of the current view."""
        if mode is ViewMode.YEAR:
            return self.next_year() if forward else self.prev_year()
        return self.next_month() if forward else self.prev_month()

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def month_prefix(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]


@dataclass(frozen=True)
class DayCell:
    day: int
    date: str
    entry: Entry | None = None

    @property
    def has_entry(self) -> bool:
        return self.entry is not None

    @property
    def mood_color(self) -> str | None:
        return mood_style(self.entry.mood).bg if self.entry is not None else None

    @property
    def has_photos(self) -> bool:
        return self.entry is not None and self.entry.has_photos


@dataclass(frozen=True)
class MonthModel:
    year: int
    month: int
    blanks: int
    days: list[DayCell] = field(default_factory=list)

    @property
    def title(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    @property
    def entry_count(self) -> int:
        return sum(1 for d in self.days if d.has_entry)


@dataclass(frozen=True)
class YearModel:
    year: int
    months: list[MonthModel] = field(default_factory=list)


def index_by_date(entries: Iterable[Entry]) -> dict[str, Entry]:
    """Map date -> entry; the first entry seen for a date wins."""
    result: dict[str, Entry] = {}
    for e in entries:
        result.setdefault(e.date, e)
    return result


def build_month(year: int, month: int, entries: Iterable[Entry] | dict[str, Entry]) -> MonthModel:
    """Compute the day grid of one month with each day resolved to its entry."""
    by_date = entries if isinstance(entries, dict) else index_by_date(entries)
    cursor = MonthCursor(year, month)
    days = []
    for day in range(1, cursor.days_in_month + 1):
        key = date_key(year, month, day)
        days.append(DayCell(day=day, date=key, entry=by_date.get(key)))
    return MonthModel(year=year, month=month, blanks=leading_blanks(year, month), days=days)


def build_year(year: int, entries: Iterable[Entry]) -> YearModel:
    """Compute the twelve mini-month grids of `year`."""
    by_date = index_by_date(entries)
    return YearModel(year=year, months=[build_month(year, m, by_date) for m in range(1, 13)])


def resolve_day(entries: Iterable[Entry] | dict[str, Entry], key: str) -> Entry | None:
    """Return the entry recorded on `key`, or None (which opens the create view)."""
    by_date = entries if isinstance(entries, dict) else index_by_date(entries)
    return by_date.get(key)


def month_scope(cursor: MonthCursor, entries: Iterable[Entry]) -> tuple[str, list[Entry]]:
    """Title and entries for a month recap."""
    prefix = cursor.month_prefix
    return f"{cursor.month_name} {cursor.year}", [e for e in entries if e.date.startswith(prefix)]


def year_scope(cursor: MonthCursor, entries: Iterable[Entry]) -> tuple[str, list[Entry]]:
    """Title and entries for a year recap."""
    prefix = f"{cursor.year:04d}-"
    return f"{cursor.year} Recap", [e for e in entries if e.date.startswith(prefix)]
