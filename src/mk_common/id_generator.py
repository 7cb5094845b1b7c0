"""Snowflake-style ID generator for listings, reviews, messages and users.

IDs are decimal strings that sort by creation time and embed the creation
millisecond, so an id alone tells you roughly when the record was made.
"""

import threading
import time

_EPOCH_MS = 1_700_000_000_000  # 2023-11-14 approx
_MACHINE_BITS = 10
_SEQUENCE_BITS = 12


class SnowflakeIdGenerator:
    """Layout (63 bits): 41 bits ms since epoch | 10 bits machine | 12 bits sequence."""

    _MAX_SEQUENCE = (1 << _SEQUENCE_BITS) - 1

    def __init__(self, machine_id: int = 0) -> None:
        if not (0 <= machine_id < (1 << _MACHINE_BITS)):
            raise ValueError(f"machine_id must be 0-{(1 << _MACHINE_BITS) - 1}")
        self._machine_id = machine_id
        self._sequence = 0
        self._last_ms = -1
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            ms = max(self._now_ms(), self._last_ms)
            if ms == self._last_ms:
                self._sequence = (self._sequence + 1) & self._MAX_SEQUENCE
                if self._sequence == 0:
                    # sequence exhausted for this ms, borrow the next one
                    ms += 1
            else:
                self._sequence = 0
            self._last_ms = ms
            value = (
                ((ms - _EPOCH_MS) << (_MACHINE_BITS + _SEQUENCE_BITS))
                | (self._machine_id << _SEQUENCE_BITS)
                | self._sequence
            )
            return str(value)

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)


def id_timestamp_ms(value: str) -> int:
    """Recover the creation millisecond embedded in a generated id."""
    return (int(value) >> (_MACHINE_BITS + _SEQUENCE_BITS)) + _EPOCH_MS


_default_generator = SnowflakeIdGenerator()


def generate_id() -> str:
    """Generate a unique id using the module-level default generator."""
    return _default_generator.next_id()
