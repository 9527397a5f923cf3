"""Single-flight guard for user-triggered analyses."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from calorie_tracker.domain.errors import AnalysisInProgressError


@dataclass
class SingleFlightGuard:
    """Allows one in-flight analysis per key and rejects the rest.

    Keys identify a session and screen (for example ``"abc:food"``), so two
    sessions never block each other. Must be used from a single event loop.
    """

    _in_flight: set[str] = field(default_factory=set)

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        """Hold the key for the duration of the block."""
        if key in self._in_flight:
            raise AnalysisInProgressError()
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)

    def is_running(self, key: str) -> bool:
        """Return whether an analysis holds the key."""
        return key in self._in_flight
