# minyan/yomtov.py
"""
Find the Yom Tov period (candle lighting → havdalah) that encloses or follows
a reference instant.

Events must already be sorted with `sort_events`: by time, and at equal times
havdalah before candle lighting, so a boundary moment is already closed and is
never reopened at the same instant.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Iterable, List, Optional, Protocol, Sequence

from .errors import PairingError
from .log import get_logger

log = get_logger(__name__)

class EventKind(IntEnum):
    # value is the tie-break rank at equal instants
    HAVDALAH = 0
    CANDLE_LIGHTING = 1

@dataclass(frozen=True, order=True)
class LiturgicalEvent:
    time: datetime
    kind: EventKind

def sort_events(events: Iterable[LiturgicalEvent]) -> List[LiturgicalEvent]:
    return sorted(events, key=lambda e: (e.time, e.kind))

@dataclass(frozen=True)
class YomTovTimes:
    candle_lighting: datetime
    havdalah: datetime
    # True when candle lighting was not after the reference, i.e. the
    # reference sits inside the period rather than before it
    open_in_past: bool

    @property
    def active(self) -> bool:
        return self.open_in_past

class LiturgicalEventSource(Protocol):
    def list(self, start: datetime, end: datetime) -> Sequence[LiturgicalEvent]:
        ...

def find_pair(events: Iterable[LiturgicalEvent], reference: datetime) -> YomTovTimes:
    """
    Return the first candle-lighting/havdalah pair whose havdalah is after `reference`.

    Candle lightings never nest: a second one while a period is open is ignored.
    A havdalah with no open period is skipped.
    """
    in_past = True
    active: Optional[LiturgicalEvent] = None
    active_in_past = True

    for e in events:
        if e.time > reference:
            in_past = False

        if e.kind is EventKind.CANDLE_LIGHTING:
            if active is not None:
                continue
            active, active_in_past = e, in_past
        else:
            if active is None:
                continue
            if not in_past:
                return YomTovTimes(active.time, e.time, active_in_past)
            # that period is over; keep looking
            active = None

    raise PairingError(f"did not find havdalah after {reference.isoformat()}")

def current_or_upcoming(source: LiturgicalEventSource, reference: datetime,
                        window_days: int = 10, wide_window_days: int = 30) -> YomTovTimes:
    """Ask `source` for events around `reference`; widen the window once before giving up."""
    for days in (window_days, wide_window_days):
        span = timedelta(days=days)
        events = sort_events(source.list(reference - span, reference + span))
        try:
            return find_pair(events, reference)
        except PairingError:
            if days >= wide_window_days:
                raise
            log.debug("no Yom Tov within %d days of %s, widening to %d", days, reference, wide_window_days)
    raise PairingError(f"did not find havdalah after {reference.isoformat()}")

def is_yom_tov(source: LiturgicalEventSource, reference: datetime,
               window_days: int = 10, wide_window_days: int = 30) -> bool:
    return current_or_upcoming(source, reference, window_days, wide_window_days).active
