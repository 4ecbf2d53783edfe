"""Hijri month grid with per-day habit completion."""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from hijri import MAX_SCAN_STEPS, ONE_DAY, normalize_locale, to_hijri, year_start
from special_days import classify

# Sunday-first column headers
WEEKDAY_INITIALS = {
    'en': ('S', 'M', 'T', 'W', 'T', 'F', 'S'),
    'ar': ('ح', 'ن', 'ث', 'ر', 'خ', 'ج', 'س'),
}


@dataclass(frozen=True)
class CalendarDay:
    gregorian_date: date
    hijri_day: int
    hijri_month: int
    required_progress: Optional[int] = None  # None when no record exists
    optional_progress: Optional[int] = None
    special_label: Optional[str] = None
    range_tags: frozenset = field(default_factory=frozenset)
    is_today: bool = False

    @property
    def has_record(self):
        return self.required_progress is not None


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month_index: int
    leading_blank_count: int
    days: tuple

    @property
    def start(self):
        return self.days[0].gregorian_date if self.days else None

    @property
    def end(self):
        return self.days[-1].gregorian_date if self.days else None


def progress(record, habit_names):
    """Percentage of `habit_names` marked done in `record`, rounded half up."""
    total = len(habit_names)
    if total == 0:
        return 0
    done = sum(1 for name in habit_names if record.get(name))
    return (200 * done + total) // (2 * total)


def sunday_weekday(d):
    """0 = Sunday ... 6 = Saturday."""
    return (d.weekday() + 1) % 7


def month_range(year_map, month_index, next_year_start=None, oracle=to_hijri,
                max_steps=MAX_SCAN_STEPS):
    """Inclusive (start, end) Gregorian range of a Hijri month."""
    start = year_map.start_of(month_index)
    end = year_map.end_of(month_index)
    if end is None:
        if next_year_start is None:
            next_year_start = year_start(year_map.year + 1, start, oracle=oracle,
                                         max_steps=max_steps)
        end = next_year_start - ONE_DAY
    return start, end


def build_month(year_map, month_index, lookup, required_habits, optional_habits,
                next_year_start=None, today=None, locale='en', oracle=to_hijri,
                max_steps=MAX_SCAN_STEPS):
    """Enumerate every day of one Hijri month with its progress and markers.

    `lookup(date)` returns the habit mapping stored for that date or None.
    Days without a record get None progress, which is not the same as 0.
    """
    if not 0 <= month_index <= 11:
        raise ValueError(f"month_index must be 0-11, got {month_index}")

    locale = normalize_locale(locale)
    start, end = month_range(year_map, month_index, next_year_start,
                             oracle=oracle, max_steps=max_steps)

    days = []
    current = start
    while current <= end:
        parts = oracle(current)
        record = lookup(current)
        required_value = None
        optional_value = None
        if record is not None:
            required_value = progress(record, required_habits)
            optional_value = progress(record, optional_habits)

        marks = classify(parts.month, parts.day, locale)
        days.append(CalendarDay(
            gregorian_date=current,
            hijri_day=parts.day,
            hijri_month=parts.month,
            required_progress=required_value,
            optional_progress=optional_value,
            special_label=marks.label,
            range_tags=marks.range_tags,
            is_today=(today is not None and current == today),
        ))
        current += ONE_DAY

    return MonthGrid(
        year=year_map.year,
        month_index=month_index,
        leading_blank_count=sunday_weekday(start),
        days=tuple(days),
    )
