import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-please-change'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')
    if SQLALCHEMY_DATABASE_URI:
        if SQLALCHEMY_DATABASE_URI.startswith("postgres://"):
            SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI.replace("postgres://", "postgresql://", 1)
    else:
        SQLALCHEMY_DATABASE_URI = 'sqlite:///habits.sqlite3'

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DEFAULT_LOCALE = os.environ.get('HABIT_LOCALE') or 'en'
    # Fixed offset used for "today" (Makkah time by default)
    UTC_OFFSET_HOURS = int(os.environ.get('UTC_OFFSET_HOURS', 3))

    # Upper bound on day-by-day oracle steps in any single boundary scan
    HIJRI_MAX_SCAN_STEPS = int(os.environ.get('HIJRI_MAX_SCAN_STEPS', 400))
    TODAY_CHECK_INTERVAL = int(os.environ.get('TODAY_CHECK_INTERVAL', 60)) # seconds

    REQUIRED_HABITS = [
        'fajr',
        'dhuhr',
        'asr',
        'maghrib',
        'isha',
        'quran',
        'morningDhikr',
        'eveningDhikr',
        'sleepDhikr',
        'dailyDuaa',
    ]

    OPTIONAL_HABITS = [
        'fajrSunnah',
        'dhuhrSunnahBefore',
        'dhuhrSunnahAfter',
        'maghribSunnahAfter',
        'ishaSunnahAfter',
        'quranReflection',
        'quranMemorization',
        'quranRecitation',
        'duhaPrayer',
        'tahajjudPrayer',
        'witrPrayer',
        'sadaqah',
        'islamicStudies',
        'exercise',
        'silatRahim',
        'ummahNews',
        'voluntaryFasting',
    ]
