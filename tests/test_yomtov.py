"""Tests for pairing candle lighting with havdalah around a reference time."""
from datetime import datetime, timedelta, timezone

import pytest

from minyan.errors import PairingError
from minyan.yomtov import (
    EventKind,
    LiturgicalEvent,
    current_or_upcoming,
    find_pair,
    is_yom_tov,
    sort_events,
)

T0 = datetime(2025, 4, 12, 19, 0, tzinfo=timezone.utc)


def cl(hours):
    return LiturgicalEvent(T0 + timedelta(hours=hours), EventKind.CANDLE_LIGHTING)


def hv(hours):
    return LiturgicalEvent(T0 + timedelta(hours=hours), EventKind.HAVDALAH)


def ref(hours):
    return T0 + timedelta(hours=hours)


class TestOrdering:

    def test_havdalah_sorts_first_at_equal_time(self):
        assert sort_events([cl(24), hv(24)]) == [hv(24), cl(24)]

    def test_time_dominates_kind(self):
        assert sort_events([hv(30), cl(24)]) == [cl(24), hv(30)]

    def test_dataclass_ordering_matches(self):
        assert sorted([cl(24), hv(24), cl(0)]) == [cl(0), hv(24), cl(24)]


class TestFindPair:

    def test_inside_period(self):
        found = find_pair([cl(0), hv(48)], ref(10))
        assert (found.candle_lighting, found.havdalah) == (ref(0), ref(48))
        assert found.open_in_past is True
        assert found.active

    def test_before_period(self):
        found = find_pair([cl(0), hv(48)], ref(-5))
        assert found.candle_lighting == ref(0)
        assert found.open_in_past is False
        assert not found.active

    def test_reference_exactly_at_candle_lighting_counts_as_inside(self):
        assert find_pair([cl(0), hv(48)], ref(0)).active

    def test_elapsed_period_is_skipped(self):
        found = find_pair([cl(-48), hv(-24), cl(24), hv(48)], ref(0))
        assert (found.candle_lighting, found.havdalah) == (ref(24), ref(48))
        assert found.open_in_past is False

    def test_boundary_closes_before_reopening(self):
        # first period ends at 24, the next starts at 24
        events = sort_events([cl(0), cl(24), hv(24), hv(48)])
        found = find_pair(events, ref(24))
        assert (found.candle_lighting, found.havdalah) == (ref(24), ref(48))
        assert found.active

    def test_boundary_just_before_returns_first_period(self):
        events = sort_events([cl(0), cl(24), hv(24), hv(48)])
        found = find_pair(events, ref(23))
        assert (found.candle_lighting, found.havdalah) == (ref(0), ref(24))

    def test_orphan_havdalah_is_ignored(self):
        found = find_pair([hv(-10), cl(0), hv(24)], ref(5))
        assert (found.candle_lighting, found.havdalah) == (ref(0), ref(24))

    def test_candle_lightings_do_not_nest(self):
        # two-day Yom Tov: second candle lighting while the first is still open
        found = find_pair([cl(0), cl(24), hv(48)], ref(30))
        assert (found.candle_lighting, found.havdalah) == (ref(0), ref(48))
        assert found.active

    def test_nothing_after_reference(self):
        with pytest.raises(PairingError):
            find_pair([cl(0), hv(24)], ref(30))

    def test_empty(self):
        with pytest.raises(PairingError):
            find_pair([], ref(0))

    def test_open_without_close(self):
        with pytest.raises(PairingError):
            find_pair([cl(0)], ref(-1))

    def test_input_not_mutated(self):
        events = [cl(0), hv(24)]
        snapshot = list(events)
        find_pair(events, ref(1))
        assert events == snapshot


class FakeSource:
    def __init__(self, events, min_days=0):
        self.events = events
        self.min_days = min_days
        self.calls = []

    def list(self, start, end):
        self.calls.append((start, end))
        if (end - start) < timedelta(days=2 * self.min_days):
            return []
        return [e for e in self.events if start <= e.time <= end]


class TestWideningRetry:

    def test_first_window_is_enough(self):
        source = FakeSource([cl(0), hv(24)])
        found = current_or_upcoming(source, ref(1))
        assert found.active
        assert len(source.calls) == 1
        start, end = source.calls[0]
        assert end - start == timedelta(days=20)

    def test_widens_once(self):
        source = FakeSource([cl(24 * 20), hv(24 * 21)], min_days=30)
        found = current_or_upcoming(source, ref(0), window_days=10, wide_window_days=30)
        assert found.candle_lighting == ref(24 * 20)
        assert [end - start for start, end in source.calls] == [timedelta(days=20), timedelta(days=60)]

    def test_gives_up_after_wide_window(self):
        source = FakeSource([])
        with pytest.raises(PairingError):
            current_or_upcoming(source, ref(0))
        assert len(source.calls) == 2

    def test_unsorted_source_is_sorted(self):
        source = FakeSource([hv(24), cl(0)])
        assert current_or_upcoming(source, ref(1)).candle_lighting == ref(0)

    def test_is_yom_tov(self):
        source = FakeSource([cl(0), hv(24)])
        assert is_yom_tov(source, ref(1)) is True
        assert is_yom_tov(source, ref(-1)) is False
