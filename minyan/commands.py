# minyan/commands.py
from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from .dates import DateKind, resolve
from .errors import CommandParseError, ResolutionError
from .grammar import GRAMMAR, ExpressionKind, ExpressionMatch
from .log import get_logger
from .timeparse import add_elapsed, end_of_day, now_local, on_date, plus_one_week, start_of_day, start_of_week
from .tokens import WEEKDAY_NAMES

log = get_logger(__name__)

COMMAND_PREFIX = "!times"
UPCOMING_HOURS = 25

_SPACES = re.compile(r"\s+")
# sephardic, sefardi, sfaradi, sephardi, ...
_SEPHARDIC = re.compile(r"\bse?(?:f|ph)ara?dic?\b", re.IGNORECASE)

@dataclass(frozen=True)
class TimesCommand:
    start: datetime
    end: datetime
    header: str
    use_alternate_locale: bool = False
    include_elapsed: bool = False

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"window end {self.end} is before start {self.start}")

    @property
    def single_day(self) -> bool:
        return self.start.date() == self.end.date()

def normalize(text: str) -> str:
    """Lowercase, trim, collapse whitespace runs to one space."""
    return _SPACES.sub(" ", (text or "").strip().lower())

def strip_locale_marker(text: str) -> Tuple[str, bool]:
    stripped, n = _SEPHARDIC.subn("", text)
    if not n:
        return text, False
    return _SPACES.sub(" ", stripped).strip(), True

def _header_single(d: date, kind: DateKind) -> str:
    if kind is DateKind.TODAY:
        return "today"
    if kind is DateKind.TOMORROW:
        return "tomorrow"
    if kind is DateKind.WEEKDAY:
        return WEEKDAY_NAMES[d.weekday()]
    return "date:"

def _header_multiple(d: date) -> str:
    return f"{d.month}/{d.day}/{d.year % 100:02d}"

def upcoming_command(now: datetime, use_alternate_locale: bool = False,
                     hours: int = UPCOMING_HOURS) -> TimesCommand:
    return TimesCommand(
        start=now,
        end=add_elapsed(now, timedelta(hours=hours)),
        header="Upcoming minyan times",
        use_alternate_locale=use_alternate_locale,
        include_elapsed=False,
    )

def build(match: ExpressionMatch, now: datetime, use_alternate_locale: bool = False,
          upcoming_hours: int = UPCOMING_HOURS) -> TimesCommand:
    """Turn a grammar match into a concrete time window around `now`."""
    tz = now.tzinfo
    kind = match.kind

    if kind is ExpressionKind.UPCOMING:
        return upcoming_command(now, use_alternate_locale, upcoming_hours)

    if kind is ExpressionKind.UPCOMING_WEEK:
        start = start_of_day(now)
        return TimesCommand(start, plus_one_week(start), "Minyan times for the upcoming week",
                            use_alternate_locale, include_elapsed=False)

    if kind is ExpressionKind.DATE:
        d, dkind = resolve(match.dates[0], now)
        start = on_date(d, tz)
        return TimesCommand(start, end_of_day(start), "Minyan times for " + _header_single(d, dkind),
                            use_alternate_locale, include_elapsed=True)

    if kind is ExpressionKind.WEEK_OF:
        d, _ = resolve(match.dates[0], now)
        try:
            start = start_of_week(on_date(d, tz))
            end = plus_one_week(start)
        except OverflowError:
            raise ResolutionError(f"week of {d} falls outside the supported years") from None
        return TimesCommand(start, end, "Minyan times for the week of " + _header_multiple(d),
                            use_alternate_locale, include_elapsed=True)

    if kind is ExpressionKind.RANGE:
        d1, _ = resolve(match.dates[0], now)
        # the second date counts forward from the first, not from now
        d2, _ = resolve(match.dates[1], d1)
        start, end = on_date(d1, tz), end_of_day(on_date(d2, tz))
        if end < start:
            raise ResolutionError(f"range ends before it starts: {_header_multiple(d1)} to {_header_multiple(d2)}")
        return TimesCommand(start, end,
                            f"Minyan times from {_header_multiple(d1)} to {_header_multiple(d2)}",
                            use_alternate_locale, include_elapsed=True)

    raise CommandParseError(f"unsupported expression kind {kind!r}")

def parse_times_command(text: str, now: Optional[datetime] = None,
                        upcoming_hours: int = UPCOMING_HOURS) -> TimesCommand:
    """
    Parse a full chat command such as "!times sephardic friday to monday".

    Raises CommandParseError when the text is not a `!times` command or the
    expression does not match; ResolutionError when it names an impossible date.
    """
    now = now or now_local()
    text = normalize(text)
    # "!timesfriday" is accepted as "!times friday"
    if not text.startswith(COMMAND_PREFIX):
        raise CommandParseError(f"text does not start with {COMMAND_PREFIX!r}")
    expr, alternate = strip_locale_marker(text[len(COMMAND_PREFIX):].strip())

    match = GRAMMAR.match(expr)
    if match is None:
        raise CommandParseError(f"date did not match: {expr!r}")
    log.debug("parsed %r as %s", expr, match)
    return build(match, now, alternate, upcoming_hours)
