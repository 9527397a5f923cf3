"""Daily food log aggregation, streaks and rolling windows."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from uuid import UUID

from pydantic import TypeAdapter

from calorie_tracker.domain.logs import DailyLog, FoodEntry
from calorie_tracker.services.clock import (
    Clock,
    local_day,
    to_local_day,
    today,
    window_start,
)
from calorie_tracker.services.storage import JsonBlob, KeyValueStore, StorageError

DAILY_LOGS_KEY = "daily_logs"

_logger = logging.getLogger(__name__)


@dataclass
class DailyLogService:
    """Owns every daily log and persists the whole collection on each change.

    Day identity is the local calendar day of a log's timestamp in the clock's
    timezone, never exact timestamp equality.
    """

    store: KeyValueStore
    clock: Clock
    logs: list[DailyLog] = field(init=False)
    last_save_error: StorageError | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._blob = JsonBlob(self.store, DAILY_LOGS_KEY, TypeAdapter(list[DailyLog]))
        self._lock = threading.RLock()
        self.logs = self._blob.load() or []

    def save(self) -> StorageError | None:
        """Persist every log."""
        with self._lock:
            self.last_save_error = self._blob.save(self.logs)
            return self.last_save_error

    def today_log(self) -> DailyLog:
        """Return today's log, creating and persisting an empty one if needed."""
        with self._lock:
            existing = self._find(today(self.clock))
            if existing is not None:
                return existing
            log = DailyLog(date=self.clock.now())
            self.logs.insert(0, log)
            self.save()
            return log

    def log_for_date(self, day: date | datetime) -> DailyLog | None:
        """Return the log for a calendar day without creating one."""
        with self._lock:
            return self._find(to_local_day(day, self.clock.tz))

    def add_entry(self, entry: FoodEntry) -> DailyLog:
        """Append an entry to today's log."""
        with self._lock:
            log = self._find(today(self.clock))
            if log is None:
                log = DailyLog(date=self.clock.now(), entries=[entry])
                self.logs.insert(0, log)
            else:
                log.entries.append(entry)
            self.save()
            _logger.info(
                "Logged entry: id=%s calories=%s day_total=%s",
                entry.id,
                entry.calories,
                log.total_calories,
            )
            return log

    def remove_entry(
        self, entry_id: UUID, day: date | datetime | None = None
    ) -> DailyLog | None:
        """Remove an entry from a day's log (today by default).

        Removing an entry that is not in the log is a no-op.
        """
        if day is None:
            target_day = today(self.clock)
        else:
            target_day = to_local_day(day, self.clock.tz)
        with self._lock:
            log = self._find(target_day)
            if log is None:
                return None
            log.entries = [entry for entry in log.entries if entry.id != entry_id]
            self.save()
            return log

    def current_streak(self) -> int:
        """Count consecutive days with entries, ending today."""
        with self._lock:
            logged_days = {
                local_day(log.date, self.clock.tz) for log in self.logs if log.entries
            }
        streak = 0
        check_day = today(self.clock)
        while check_day in logged_days:
            streak += 1
            check_day -= timedelta(days=1)
        return streak

    def logs_for_last_days(self, days: int) -> list[DailyLog]:
        """Return logs from the last ``days`` calendar days, oldest first."""
        start = window_start(self.clock, days)
        with self._lock:
            recent = [log for log in self.logs if log.date >= start]
        return sorted(recent, key=lambda log: log.date)

    def _find(self, day: date) -> DailyLog | None:
        for log in self.logs:
            if local_day(log.date, self.clock.tz) == day:
                return log
        return None
