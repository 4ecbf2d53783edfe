import unittest
from datetime import date, timedelta
from fractions import Fraction
from itertools import product

from calendar_grid import (WEEKDAY_INITIALS, build_month, month_range,
                           progress, sunday_weekday)
from hijri import HijriDate, month_starts, to_hijri, year_start
from special_days import RAMADAN_LAST_TEN, WHITE_DAY
from test_hijri import ANCHOR, EPOCH, fake_oracle

REQUIRED = ['fajr', 'dhuhr', 'asr', 'maghrib', 'isha']
OPTIONAL = ['duhaPrayer', 'witrPrayer', 'tahajjudPrayer']


class ProgressTestCase(unittest.TestCase):
    def test_basic_values(self):
        self.assertEqual(progress({'fajr': True, 'dhuhr': False}, ['fajr', 'dhuhr']), 50)
        self.assertEqual(progress({'a': True}, ['a']), 100)
        self.assertEqual(progress({}, ['a', 'b']), 0)
        self.assertEqual(progress({'a': True, 'b': True}, ['a', 'b', 'c']), 67)
        self.assertEqual(progress({'a': True}, ['a', 'b', 'c']), 33)

    def test_rounds_half_up(self):
        names = [f"h{i}" for i in range(8)]
        self.assertEqual(progress({'h0': True}, names), 13) # 12.5

    def test_empty_names_is_zero(self):
        self.assertEqual(progress({'fajr': True}, []), 0)

    def test_ignores_habits_outside_the_group(self):
        record = {'fajr': True, 'duhaPrayer': True}
        self.assertEqual(progress(record, OPTIONAL), 33)

    def test_matches_formula(self):
        for size in range(1, 9):
            names = [f"h{i}" for i in range(size)]
            for flags in product([False, True], repeat=size):
                record = dict(zip(names, flags))
                done = sum(flags)
                expected = int(Fraction(100 * done, size) + Fraction(1, 2))
                value = progress(record, names)
                self.assertEqual(value, expected)
                self.assertTrue(0 <= value <= 100)


class FakeCalendarGridTestCase(unittest.TestCase):
    def setUp(self):
        self.year_map = month_starts(1403, EPOCH, oracle=fake_oracle)
        self.records = {}

    def build(self, index, **kwargs):
        return build_month(self.year_map, index, self.records.get, REQUIRED, OPTIONAL,
                           oracle=fake_oracle, **kwargs)

    def test_every_month_has_thirty_days(self):
        for index in range(12):
            grid = self.build(index)
            self.assertEqual(len(grid.days), 30)
            self.assertEqual([d.hijri_day for d in grid.days], list(range(1, 31)))
            self.assertTrue(all(d.hijri_month == index + 1 for d in grid.days))

    def test_last_month_runs_to_next_year(self):
        grid = self.build(11)
        self.assertEqual(grid.end, EPOCH + timedelta(days=4 * 360 - 1))

    def test_supplied_next_year_start_is_used(self):
        next_start = EPOCH + timedelta(days=4 * 360)
        start, end = month_range(self.year_map, 11, next_year_start=next_start,
                                 oracle=fake_oracle)
        self.assertEqual(end, next_start - timedelta(days=1))

    def test_progress_absent_without_record(self):
        start = self.year_map.month_starts[0]
        self.records[start] = {'fajr': True, 'dhuhr': True, 'duhaPrayer': True}
        self.records[start + timedelta(days=1)] = {}

        grid = self.build(0)
        first, second, third = grid.days[:3]
        self.assertEqual(first.required_progress, 40)
        self.assertEqual(first.optional_progress, 33)
        self.assertEqual(second.required_progress, 0)
        self.assertEqual(second.optional_progress, 0)
        self.assertTrue(second.has_record)
        self.assertIsNone(third.required_progress)
        self.assertIsNone(third.optional_progress)
        self.assertFalse(third.has_record)

    def test_special_days_and_ranges(self):
        dhu_al_hijjah = self.build(11)
        self.assertEqual(dhu_al_hijjah.days[8].special_label, 'Day of Arafah')
        self.assertEqual(dhu_al_hijjah.days[9].special_label, 'Eid al-Adha')
        self.assertIsNone(dhu_al_hijjah.days[10].special_label)

        ramadan = self.build(8)
        self.assertNotIn(WHITE_DAY, ramadan.days[13].range_tags)
        self.assertIn(RAMADAN_LAST_TEN, ramadan.days[20].range_tags)

        shaban = self.build(7)
        self.assertIn(WHITE_DAY, shaban.days[13].range_tags)

    def test_arabic_labels(self):
        grid = self.build(9, locale='ar-SA')
        self.assertEqual(grid.days[0].special_label, 'عيد الفطر')

    def test_today_flag(self):
        today = self.year_map.month_starts[4] + timedelta(days=6)
        grid = self.build(4, today=today)
        flagged = [d for d in grid.days if d.is_today]
        self.assertEqual(len(flagged), 1)
        self.assertEqual(flagged[0].gregorian_date, today)
        self.assertFalse(any(d.is_today for d in self.build(5, today=today).days))

    def test_leading_blanks(self):
        grid = self.build(0)
        self.assertEqual(grid.leading_blank_count, sunday_weekday(grid.start))
        self.assertTrue(0 <= grid.leading_blank_count <= 6)

    def test_bad_month_index(self):
        with self.assertRaises(ValueError):
            self.build(12)

    def test_missing_slot_falls_back_to_year_start(self):
        def skips_month_five(d):
            parts = fake_oracle(d)
            if parts.month == 5 and parts.day == 1:
                return HijriDate(2, 5, parts.year)
            return parts

        year_map = month_starts(1403, EPOCH, oracle=skips_month_five)
        self.assertIsNone(year_map.month_starts[4])
        grid = build_month(year_map, 3, {}.get, REQUIRED, OPTIONAL, oracle=skips_month_five)
        # month 4 runs until the next month that was observed
        self.assertEqual(len(grid.days), 60)
        fallback = build_month(year_map, 4, {}.get, REQUIRED, OPTIONAL, oracle=skips_month_five)
        self.assertEqual(fallback.start, year_map.year_start)


class UmmAlQuraGridTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.year_map = month_starts(1446, ANCHOR)
        cls.next_start = year_start(1447, ANCHOR)

    def test_grid_completeness(self):
        for index in range(12):
            grid = build_month(self.year_map, index, {}.get, REQUIRED, OPTIONAL,
                               next_year_start=self.next_start)
            start = self.year_map.month_starts[index]
            if index < 11:
                end = self.year_map.month_starts[index + 1] - timedelta(days=1)
            else:
                end = self.next_start - timedelta(days=1)
            self.assertEqual(len(grid.days), (end - start).days + 1)
            self.assertEqual(grid.start, start)
            self.assertEqual(grid.end, end)
            for day in grid.days:
                parts = to_hijri(day.gregorian_date)
                self.assertEqual((day.hijri_day, day.hijri_month), (parts.day, parts.month))
                self.assertEqual(parts.year, 1446)

    def test_muharram_1446_starts_on_sunday(self):
        grid = build_month(self.year_map, 0, {}.get, REQUIRED, OPTIONAL)
        self.assertEqual(grid.start, date(2024, 7, 7))
        self.assertEqual(grid.leading_blank_count, 0)
        self.assertEqual(grid.days[9].special_label, 'Ashura')

    def test_last_month_without_next_year_start(self):
        grid = build_month(self.year_map, 11, {}.get, REQUIRED, OPTIONAL)
        self.assertEqual(grid.end, self.next_start - timedelta(days=1))

    def test_weekday_initials(self):
        for locale in ('en', 'ar'):
            self.assertEqual(len(WEEKDAY_INITIALS[locale]), 7)


if __name__ == '__main__':
    unittest.main()
