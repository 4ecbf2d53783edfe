"""Recurring Hijri occasions and day ranges used to highlight calendar days."""
from collections import namedtuple

Classification = namedtuple('Classification', ['label', 'range_tags'])

RAMADAN = 9
SHAWWAL = 10
DHU_AL_HIJJAH = 12

WHITE_DAY = 'white_day'
DHUL_HIJJAH_TEN = 'dhul_hijjah_ten'
RAMADAN_LAST_TEN = 'ramadan_last_ten'

# Static Islamic occasions keyed by (hijri month, hijri day)
SPECIAL_DAYS = {
    (1, 1): {
        'en': 'Islamic New Year',
        'ar': 'رأس السنة الهجرية',
    },
    (1, 10): {
        'en': 'Ashura',
        'ar': 'يوم عاشوراء',
    },
    (RAMADAN, 1): {
        'en': 'First day of Ramadan',
        'ar': 'أول أيام رمضان',
    },
    (SHAWWAL, 1): {
        'en': 'Eid al-Fitr',
        'ar': 'عيد الفطر',
    },
    (DHU_AL_HIJJAH, 9): {
        'en': 'Day of Arafah',
        'ar': 'يوم عرفة',
    },
    (DHU_AL_HIJJAH, 10): {
        'en': 'Eid al-Adha',
        'ar': 'عيد الأضحى',
    },
}


def special_label(hijri_month, hijri_day, locale='en'):
    labels = SPECIAL_DAYS.get((hijri_month, hijri_day))
    if not labels:
        return None
    return labels.get(locale) or labels['en']


def is_white_day(hijri_month, hijri_day):
    # 13th-15th of every month, except Ramadan
    return hijri_month != RAMADAN and hijri_day in (13, 14, 15)


def range_tags(hijri_month, hijri_day):
    tags = set()
    if is_white_day(hijri_month, hijri_day):
        tags.add(WHITE_DAY)
    if hijri_month == DHU_AL_HIJJAH and 1 <= hijri_day <= 10:
        tags.add(DHUL_HIJJAH_TEN)
    if hijri_month == RAMADAN and hijri_day >= 21:
        tags.add(RAMADAN_LAST_TEN)
    return frozenset(tags)


def classify(hijri_month, hijri_day, locale='en'):
    """Return the single-day label (or None) and the set of range tags.

    The two are independent: a day may carry a label, range tags, both or
    neither.
    """
    return Classification(
        label=special_label(hijri_month, hijri_day, locale),
        range_tags=range_tags(hijri_month, hijri_day),
    )


def fasting_reasons(gregorian_date, hijri_month, hijri_day):
    """Why voluntary fasting is suggested on this day, if at all."""
    reasons = []
    if is_white_day(hijri_month, hijri_day):
        reasons.append('white_days')
    if gregorian_date.weekday() in (0, 3): # Monday, Thursday
        reasons.append('monday_thursday')
    return reasons


def is_kahf_day(gregorian_date):
    """Surah al-Kahf is read on Fridays."""
    return gregorian_date.weekday() == 4
