from flask import Flask, request, jsonify, session
import os
from datetime import datetime, timedelta
from functools import lru_cache

from config import Config
from models import db, DayRecord
from hijri import ScanLimitExceeded, month_starts, month_title, normalize_locale, to_hijri
from calendar_grid import WEEKDAY_INITIALS, build_month, progress, sunday_weekday
from special_days import classify, fasting_reasons, is_kahf_day
from navigation import NavigationCursor, TodayWatcher

app = Flask(__name__)
app.config.from_object(Config)

db.init_app(app)

ALL_HABITS = Config.REQUIRED_HABITS + Config.OPTIONAL_HABITS
DEFAULT_HABITS = {name: False for name in ALL_HABITS}

# Helper for Local Time (fixed offset from UTC)
def get_local_now():
    """Returns the current time at the configured UTC offset."""
    return datetime.utcnow() + timedelta(hours=app.config['UTC_OFFSET_HOURS'])

def get_today():
    """Returns today's local date."""
    return get_local_now().date()

watcher = TodayWatcher(get_today, interval=Config.TODAY_CHECK_INTERVAL)

def current_today():
    return watcher.today

def current_locale():
    return normalize_locale(request.args.get('locale') or app.config['DEFAULT_LOCALE'])

# --- Habit records (day lookup) ---
def get_habits_for_date(target_date):
    """
    Returns the stored habits for a date merged over the defaults,
    or None if nothing was ever recorded that day.
    """
    record = DayRecord.query.filter_by(date=target_date).first()
    if not record:
        return None
    return {**DEFAULT_HABITS, **(record.habits or {})}

def save_habits(target_date, habits):
    record = DayRecord.query.filter_by(date=target_date).first()
    if not record:
        record = DayRecord(date=target_date)
        db.session.add(record)
    # JSON columns are not mutation-tracked; always assign a new dict
    record.habits = dict(habits)
    db.session.commit()
    return record

def day_progress(habits):
    if habits is None:
        return None, None
    return (progress(habits, app.config['REQUIRED_HABITS']),
            progress(habits, app.config['OPTIONAL_HABITS']))

# --- Hijri year maps ---
@lru_cache(maxsize=32)
def get_year_map(year, locale):
    # Keyed by (year, locale); the anchor only picks where the scan starts
    return month_starts(year, current_today(), locale=locale,
                        max_steps=app.config['HIJRI_MAX_SCAN_STEPS'])

def _clear_year_maps(_today):
    get_year_map.cache_clear()

watcher.subscribe(_clear_year_maps)

def load_cursor():
    return NavigationCursor.restore(current_today(),
                                    session.get('cal_year'),
                                    session.get('cal_month'))

def store_cursor(cursor):
    session['cal_year'] = cursor.selected_year
    session['cal_month'] = cursor.selected_month

def serialize_day(day):
    return {
        'date': day.gregorian_date.isoformat(),
        'weekday': sunday_weekday(day.gregorian_date),
        'hijri_day': day.hijri_day,
        'hijri_month': day.hijri_month,
        'required_progress': day.required_progress,
        'optional_progress': day.optional_progress,
        'special_label': day.special_label,
        'range_tags': sorted(day.range_tags),
        'is_today': day.is_today,
    }

# --- Main Routes ---
@app.route('/ping')
def ping():
    return "PONG", 200

@app.route('/init_db')
def init_db():
    db.create_all()
    return "Database Initialized!"

@app.route('/api/today')
def today_api():
    today = current_today()
    locale = current_locale()
    parts = to_hijri(today)
    marks = classify(parts.month, parts.day, locale)
    required_value, optional_value = day_progress(get_habits_for_date(today))

    return jsonify({
        'date': today.isoformat(),
        'hijri': {'day': parts.day, 'month': parts.month, 'year': parts.year},
        'hijri_title': month_title(today, locale),
        'required_progress': required_value,
        'optional_progress': optional_value,
        'special_label': marks.label,
        'range_tags': sorted(marks.range_tags),
        'fasting_reasons': fasting_reasons(today, parts.month, parts.day),
        'kahf_reminder': is_kahf_day(today),
    })

# --- Habit Routes ---
@app.route('/api/habits')
def habits_api():
    date_str = request.args.get('date')
    if date_str:
        try:
            target_date = datetime.strptime(date_str, '%Y-%m-%d').date()
        except ValueError:
            return jsonify({'error': 'Invalid date format'}), 400
    else:
        target_date = current_today()

    habits = get_habits_for_date(target_date)
    if habits is None:
        return jsonify({'error': 'No record for this date', 'date': target_date.isoformat()}), 404

    required_value, optional_value = day_progress(habits)
    return jsonify({
        'date': target_date.isoformat(),
        'habits': habits,
        'required_progress': required_value,
        'optional_progress': optional_value,
    })

@app.route('/habit/toggle/<name>', methods=['POST'])
def toggle_habit(name):
    if name not in DEFAULT_HABITS:
        return jsonify({'success': False, 'error': 'Unknown habit'}), 404

    today = current_today()
    habits = get_habits_for_date(today) or dict(DEFAULT_HABITS)
    habits[name] = not habits.get(name, False)
    save_habits(today, habits)

    required_value, optional_value = day_progress(habits)
    return jsonify({
        'success': True,
        'habit': name,
        'new_status': habits[name],
        'required_progress': required_value,
        'optional_progress': optional_value,
    })

# --- Calendar Routes ---
@app.route('/api/calendar')
def calendar_api():
    locale = current_locale()
    cursor = load_cursor()
    store_cursor(cursor)

    try:
        year_map = get_year_map(cursor.selected_year, locale)
        grid = build_month(
            year_map,
            cursor.selected_month,
            get_habits_for_date,
            app.config['REQUIRED_HABITS'],
            app.config['OPTIONAL_HABITS'],
            today=cursor.today,
            locale=locale,
            max_steps=app.config['HIJRI_MAX_SCAN_STEPS'],
        )
    except ScanLimitExceeded as e:
        print(f"Hijri scan error: {e}")
        return jsonify({'error': 'Could not resolve the Hijri calendar for this year.'}), 500

    return jsonify({
        'year': cursor.selected_year,
        'month': cursor.selected_month,
        'floor_year': cursor.floor_year,
        'can_go_back': cursor.can_go_back,
        'title': month_title(year_map.start_of(cursor.selected_month), locale),
        'month_labels': list(year_map.month_labels),
        'weekday_initials': list(WEEKDAY_INITIALS[locale]),
        'leading_blank_count': grid.leading_blank_count,
        'days': [serialize_day(d) for d in grid.days],
    })

@app.route('/api/calendar/nav', methods=['POST'])
def calendar_nav():
    data = request.get_json(silent=True) or {}
    action = data.get('action')
    cursor = load_cursor()

    if action == 'prev_year':
        cursor.prev_year()
    elif action == 'next_year':
        cursor.next_year()
    elif action == 'prev_month':
        cursor.prev_month()
    elif action == 'next_month':
        cursor.next_month()
    elif action == 'today':
        cursor.go_to_today()
    elif action == 'select_month':
        try:
            cursor.select_month(int(data.get('month')))
        except (TypeError, ValueError):
            return jsonify({'success': False, 'error': 'Month must be 0-11'}), 400
    else:
        return jsonify({'success': False, 'error': f'Unknown action: {action}'}), 400

    store_cursor(cursor)
    return jsonify({
        'success': True,
        'year': cursor.selected_year,
        'month': cursor.selected_month,
        'can_go_back': cursor.can_go_back,
    })

# Start the day-rollover watcher
if not os.environ.get('DISABLE_TODAY_WATCHER'):
    watcher.start()

if __name__ == '__main__':
    with app.app_context():
        db.create_all()
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1')
