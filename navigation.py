"""Selected Hijri year/month and the periodic "today" refresh."""
import threading

from hijri import to_hijri


class NavigationCursor:
    """Currently selected Hijri year and month (0-11).

    The selected year never drops below the Hijri year containing `today`.
    """

    def __init__(self, today, oracle=to_hijri):
        self._oracle = oracle
        self.today = today
        parts = oracle(today)
        self.floor_year = parts.year
        self.selected_year = parts.year
        self.selected_month = parts.month - 1

    @classmethod
    def restore(cls, today, year, month, oracle=to_hijri):
        cursor = cls(today, oracle=oracle)
        if year is not None:
            cursor.selected_year = max(cursor.floor_year, int(year))
        if month is not None:
            cursor.select_month(int(month))
        return cursor

    @property
    def can_go_back(self):
        return self.selected_year > self.floor_year

    def prev_year(self):
        if self.selected_year > self.floor_year:
            self.selected_year -= 1

    def next_year(self):
        self.selected_year += 1

    def select_month(self, index):
        if not 0 <= index <= 11:
            raise ValueError(f"month index must be 0-11, got {index}")
        self.selected_month = index

    def prev_month(self):
        if self.selected_month > 0:
            self.selected_month -= 1
        elif self.selected_year > self.floor_year:
            self.selected_year -= 1
            self.selected_month = 11

    def next_month(self):
        if self.selected_month < 11:
            self.selected_month += 1
        else:
            self.selected_year += 1
            self.selected_month = 0

    def go_to_today(self):
        parts = self._oracle(self.today)
        self.selected_year = parts.year
        self.selected_month = parts.month - 1

    def refresh_today(self, today):
        """Move the reference day; the floor follows and may clamp the year."""
        self.today = today
        self.floor_year = self._oracle(today).year
        if self.selected_year < self.floor_year:
            self.selected_year = self.floor_year


class TodayWatcher:
    """
    Re-reads the wall clock every `interval` seconds and notifies listeners
    only when the calendar day has actually changed.
    """

    def __init__(self, clock, interval=60):
        self.clock = clock
        self.interval = interval
        self.today = clock()
        self._listeners = []
        self._stop = threading.Event()
        self._thread = None

    def subscribe(self, callback):
        self._listeners.append(callback)

    def check(self):
        current = self.clock()
        if current == self.today:
            return False
        previous, self.today = self.today, current
        print(f"Today watcher: day changed {previous} -> {current}")
        for callback in list(self._listeners):
            try:
                callback(current)
            except Exception as e:
                print(f"Today watcher: listener failed: {e}")
        return True

    def _run(self):
        while not self._stop.wait(self.interval):
            self.check()

    def start(self):
        if self._thread and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout=None):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None
