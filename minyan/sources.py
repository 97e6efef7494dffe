# minyan/sources.py
"""
YAML-backed event sources.

Minyan events file:
  events:
    - name: Shacharis
      start: 2025-01-21 06:45
      calendar: main        # optional
    - name: Mincha
      start: 2025-01-21T16:30:00-05:00

Yom Tov file:
  events:
    - kind: candle_lighting
      time: 2025-04-12 19:21
    - kind: havdalah
      time: 2025-04-14 20:27

Times without an offset are taken in the source's timezone.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

import yaml

from .errors import SourceError
from .log import get_logger
from .yomtov import EventKind, LiturgicalEvent, sort_events

log = get_logger(__name__)

@dataclass(frozen=True)
class MinyanEvent:
    name: str
    start: datetime

class EventSource(Protocol):
    def list(self, start: datetime, end: datetime, calendar_id: Optional[str] = None) -> Sequence[MinyanEvent]:
        ...

_KINDS = {
    "candle_lighting": EventKind.CANDLE_LIGHTING,
    "candles": EventKind.CANDLE_LIGHTING,
    "havdalah": EventKind.HAVDALAH,
}

def _load_entries(path: Path) -> List[Dict[str, Any]]:
    try:
        data = yaml.safe_load(Path(path).read_text())
    except (OSError, yaml.YAMLError) as e:
        raise SourceError(f"cannot read {path}: {e}") from e
    if isinstance(data, dict):
        data = data.get("events")
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(x, dict) for x in data):
        raise SourceError(f"{path}: expected a list of event mappings")
    return data

def _as_datetime(value: Any, tz: Optional[tzinfo], where: str) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        s = value.strip()
        if " " in s and "T" not in s:
            s = s.replace(" ", "T")
        try:
            dt = datetime.fromisoformat(s)
        except ValueError as e:
            raise SourceError(f"{where}: bad time {value!r}") from e
    else:
        raise SourceError(f"{where}: bad time {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt.astimezone(tz) if tz is not None else dt

class YamlEventSource:
    def __init__(self, path: Path, tz: Optional[tzinfo] = None):
        self.path = Path(path)
        self.tz = tz

    def list(self, start: datetime, end: datetime, calendar_id: Optional[str] = None) -> List[MinyanEvent]:
        out: List[MinyanEvent] = []
        for i, entry in enumerate(_load_entries(self.path)):
            where = f"{self.path}[{i}]"
            if calendar_id and entry.get("calendar", calendar_id) != calendar_id:
                continue
            name = entry.get("name")
            if not isinstance(name, str) or "start" not in entry:
                raise SourceError(f"{where}: event needs a name and a start")
            when = _as_datetime(entry["start"], self.tz, where)
            if start <= when <= end:
                out.append(MinyanEvent(name.strip(), when))
        out.sort(key=lambda e: e.start)
        log.debug("%d minyan events in %s between %s and %s", len(out), self.path, start, end)
        return out

class YamlLiturgicalEventSource:
    def __init__(self, path: Path, tz: Optional[tzinfo] = None):
        self.path = Path(path)
        self.tz = tz

    def list(self, start: datetime, end: datetime) -> List[LiturgicalEvent]:
        out: List[LiturgicalEvent] = []
        for i, entry in enumerate(_load_entries(self.path)):
            where = f"{self.path}[{i}]"
            kind = _KINDS.get(str(entry.get("kind", "")).strip().lower())
            if kind is None or "time" not in entry:
                raise SourceError(f"{where}: expected kind candle_lighting|havdalah and a time")
            when = _as_datetime(entry["time"], self.tz, where)
            if start <= when <= end:
                out.append(LiturgicalEvent(when, kind))
        return sort_events(out)
