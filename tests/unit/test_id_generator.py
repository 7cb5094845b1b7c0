"""Tests for id generation and the monotonic millisecond clock."""

from unittest.mock import patch

import pytest

from src.mk_common.datetime_utils import MonotonicMillisClock, now_ms, utc_now
from src.mk_common.id_generator import SnowflakeIdGenerator, generate_id, id_timestamp_ms


class TestSnowflakeIdGenerator:
    def test_ids_are_unique(self) -> None:
        gen = SnowflakeIdGenerator()
        ids = [gen.next_id() for _ in range(5000)]
        assert len(set(ids)) == 5000

    def test_ids_increase(self) -> None:
        gen = SnowflakeIdGenerator()
        ids = [int(gen.next_id()) for _ in range(100)]
        assert ids == sorted(ids)

    def test_ids_are_decimal_strings(self) -> None:
        assert generate_id().isdigit()

    def test_embeds_creation_time(self) -> None:
        with patch.object(SnowflakeIdGenerator, "_now_ms", return_value=1_750_000_000_123):
            value = SnowflakeIdGenerator(machine_id=7).next_id()
        assert id_timestamp_ms(value) == 1_750_000_000_123

    def test_sequence_overflow_borrows_next_ms(self) -> None:
        gen = SnowflakeIdGenerator()
        with patch.object(SnowflakeIdGenerator, "_now_ms", return_value=1_750_000_000_000):
            ids = [gen.next_id() for _ in range(4097)]
        assert len(set(ids)) == 4097
        assert id_timestamp_ms(ids[-1]) == 1_750_000_000_001

    def test_invalid_machine_id(self) -> None:
        with pytest.raises(ValueError):
            SnowflakeIdGenerator(machine_id=1024)


class TestMonotonicMillisClock:
    def test_strictly_increasing(self) -> None:
        clock = MonotonicMillisClock()
        ticks = [clock.tick() for _ in range(1000)]
        assert all(b > a for a, b in zip(ticks, ticks[1:]))

    def test_tracks_wall_clock(self) -> None:
        before = now_ms()
        tick = MonotonicMillisClock().tick()
        assert tick >= before

    def test_same_ms_gets_distinct_values(self) -> None:
        clock = MonotonicMillisClock()
        with patch("src.mk_common.datetime_utils.now_ms", return_value=1000):
            assert [clock.tick(), clock.tick(), clock.tick()] == [1000, 1001, 1002]

    def test_utc_now_is_aware(self) -> None:
        assert utc_now().tzinfo is not None
