"""Hijri (Umm al-Qura) date conversion and year/month boundary scanning.

The converter only answers point queries (Gregorian day -> Hijri day, month,
year), so every boundary here is found empirically by stepping one Gregorian
day at a time and asking again.
"""
from collections import namedtuple
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from hijri_converter import Gregorian

HijriDate = namedtuple('HijriDate', ['day', 'month', 'year'])

DEFAULT_HIJRI = HijriDate(1, 1, 1)
HIJRI_YEAR_DAYS = 354
MAX_SCAN_STEPS = 400
SUPPORTED_LOCALES = ('en', 'ar')

ONE_DAY = timedelta(days=1)


class ScanLimitExceeded(RuntimeError):
    """Raised when a boundary scan runs past its step bound.

    A correct converter never gets here; hitting it means the converter does
    not produce the requested year near the anchor at all.
    """

    def __init__(self, target_year, max_steps, what='year'):
        self.target_year = target_year
        self.max_steps = max_steps
        super().__init__(
            f"Hijri {what} scan for year {target_year} exceeded {max_steps} steps"
        )


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def _part(converted, name):
    try:
        return int(getattr(converted, name))
    except (AttributeError, TypeError, ValueError):
        return 1


def _convert(value):
    d = _as_date(value)
    return Gregorian(d.year, d.month, d.day).to_hijri()


def to_hijri(value):
    """Convert a Gregorian date (or datetime) to a HijriDate.

    All three parts come from the same conversion. Dates the converter cannot
    handle map to HijriDate(1, 1, 1) instead of raising.
    """
    try:
        converted = _convert(value)
    except (OverflowError, ValueError):
        return DEFAULT_HIJRI
    return HijriDate(
        day=_part(converted, 'day'),
        month=_part(converted, 'month'),
        year=_part(converted, 'year'),
    )


def normalize_locale(locale):
    """'ar-SA' -> 'ar'; anything unsupported -> 'en'."""
    if not locale:
        return 'en'
    base = str(locale).replace('_', '-').split('-')[0].lower()
    return base if base in SUPPORTED_LOCALES else 'en'


def month_label(value, locale='en'):
    """Name of the Hijri month that the given Gregorian date falls in."""
    try:
        return _convert(value).month_name(normalize_locale(locale))
    except (OverflowError, ValueError):
        return ''


def month_title(value, locale='en'):
    """e.g. 'Muharram 1446 AH' for the month containing the given date."""
    lang = normalize_locale(locale)
    try:
        converted = _convert(value)
    except (OverflowError, ValueError):
        return ''
    return f"{converted.month_name(lang)} {converted.year} {converted.notation(lang)}"


@dataclass(frozen=True)
class HijriYearMap:
    year: int
    year_start: date
    month_starts: tuple  # 12 entries, index 0 = month 1, None when never observed
    month_labels: tuple

    def start_of(self, index):
        return self.month_starts[index] or self.year_start

    def end_of(self, index):
        """Last day of month `index`, or None if it runs to the end of the year."""
        for later in self.month_starts[index + 1:]:
            if later is not None:
                return later - ONE_DAY
        return None


def date_in_year(target_year, anchor, oracle=to_hijri, max_steps=MAX_SCAN_STEPS):
    """Return some Gregorian date whose Hijri year is `target_year`."""
    anchor = _as_date(anchor)
    anchor_year = oracle(anchor).year
    guess = anchor + timedelta(days=(target_year - anchor_year) * HIJRI_YEAR_DAYS)

    current = oracle(guess).year
    if current == target_year:
        return guess

    step = ONE_DAY if current < target_year else -ONE_DAY
    for _ in range(max_steps):
        guess += step
        if oracle(guess).year == target_year:
            return guess
    raise ScanLimitExceeded(target_year, max_steps)


def year_start(target_year, anchor, oracle=to_hijri, max_steps=MAX_SCAN_STEPS):
    """Gregorian date of 1 Muharram of `target_year`."""
    start = date_in_year(target_year, anchor, oracle=oracle, max_steps=max_steps)
    for _ in range(max_steps):
        previous = start - ONE_DAY
        if oracle(previous).year != target_year:
            return start
        start = previous
    raise ScanLimitExceeded(target_year, max_steps, what='year start')


def month_starts(target_year, anchor, locale='en', oracle=to_hijri,
                 max_steps=MAX_SCAN_STEPS):
    """Walk the whole Hijri year once and record where each month begins."""
    first = year_start(target_year, anchor, oracle=oracle, max_steps=max_steps)
    starts = [None] * 12

    cursor = first
    for _ in range(max_steps):
        parts = oracle(cursor)
        if parts.year != target_year:
            break
        if parts.day == 1 and 1 <= parts.month <= 12 and starts[parts.month - 1] is None:
            starts[parts.month - 1] = cursor
        cursor += ONE_DAY
    else:
        raise ScanLimitExceeded(target_year, max_steps, what='month')

    labels = tuple(month_label(d, locale) if d else '' for d in starts)
    return HijriYearMap(
        year=target_year,
        year_start=first,
        month_starts=tuple(starts),
        month_labels=labels,
    )
