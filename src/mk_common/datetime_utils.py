"""Time utilities. Persisted timestamps are epoch milliseconds."""

import threading
import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def now_ms() -> int:
    return int(time.time() * 1000)


class MonotonicMillisClock:
    """Epoch-ms clock that never hands out the same value twice.

    Two records created within one millisecond still get distinct, ordered
    createdAt values, so sorting by timestamp alone is deterministic.
    """

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def tick(self) -> int:
        with self._lock:
            self._last = max(now_ms(), self._last + 1)
            return self._last


_default_clock = MonotonicMillisClock()


def next_timestamp_ms() -> int:
    return _default_clock.tick()
