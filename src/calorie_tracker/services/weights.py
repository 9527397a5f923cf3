"""Body weight log."""

import threading
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import TypeAdapter

from calorie_tracker.domain.logs import WeightEntry
from calorie_tracker.services.clock import Clock, local_day, today, window_start
from calorie_tracker.services.storage import JsonBlob, KeyValueStore, StorageError

WEIGHT_LOG_KEY = "weight_log"


@dataclass
class WeightLogService:
    """Keeps at most one weight entry per calendar day, oldest first."""

    store: KeyValueStore
    clock: Clock
    entries: list[WeightEntry] = field(init=False)
    last_save_error: StorageError | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._blob = JsonBlob(
            self.store, WEIGHT_LOG_KEY, TypeAdapter(list[WeightEntry])
        )
        self._lock = threading.RLock()
        self.entries = sorted(self._blob.load() or [], key=lambda entry: entry.date)

    def save(self) -> StorageError | None:
        """Persist every weight entry."""
        with self._lock:
            self.last_save_error = self._blob.save(self.entries)
            return self.last_save_error

    def log_weight(
        self, weight_kg: float, when: datetime | None = None
    ) -> WeightEntry:
        """Record a weight, replacing any entry on the same calendar day."""
        moment = when or self.clock.now()
        day = local_day(moment, self.clock.tz)
        entry = WeightEntry(date=moment, weight_kg=weight_kg)
        with self._lock:
            self.entries = [
                existing
                for existing in self.entries
                if local_day(existing.date, self.clock.tz) != day
            ]
            self.entries.append(entry)
            self.entries.sort(key=lambda item: item.date)
            self.save()
        return entry

    def entry_for_today(self) -> WeightEntry | None:
        """Return today's weight entry, if any."""
        current_day = today(self.clock)
        with self._lock:
            for entry in self.entries:
                if local_day(entry.date, self.clock.tz) == current_day:
                    return entry
        return None

    def entries_for_last_days(self, days: int) -> list[WeightEntry]:
        """Return entries from the last ``days`` calendar days, oldest first."""
        start = window_start(self.clock, days)
        with self._lock:
            return [entry for entry in self.entries if entry.date >= start]
