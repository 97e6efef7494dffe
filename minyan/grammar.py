# minyan/grammar.py
"""
Grammar for the `!times` date expressions.

One anchored, case-insensitive regular expression. The top-level alternatives
are tried in this order and the first that matches the whole text wins:

  1. upcoming         ""  or "upcoming"
  2. upcoming week    "week"
  3. week of DATE     "week of tuesday"
  4. DATE             "1/21", "jan 21st, 2026", "shabbos", "today"
  5. DATE to DATE     "friday to monday"

and inside every DATE:

  relative keyword > weekday name > long form (Month D[th][, Y]) > short form (M/D[/Y])

The DATE template is instantiated once per position with its own group-name
prefix, so "DATE to DATE" carries two independent sets of captures.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from .tokens import MONTHS, WEEKDAYS

class ExpressionKind(str, Enum):
    UPCOMING = "upcoming"
    UPCOMING_WEEK = "upcoming_week"
    WEEK_OF = "week_of"
    DATE = "date"
    RANGE = "range"

@dataclass(frozen=True)
class RelativeDate:
    keyword: str

@dataclass(frozen=True)
class WeekdayDate:
    name: str

@dataclass(frozen=True)
class LongFormDate:
    month_name: str
    day: str
    year: Optional[str] = None

@dataclass(frozen=True)
class ShortFormDate:
    month: str
    day: str
    year: Optional[str] = None

DateExpression = Union[RelativeDate, WeekdayDate, LongFormDate, ShortFormDate]

@dataclass(frozen=True)
class ExpressionMatch:
    kind: ExpressionKind
    dates: Tuple[DateExpression, ...] = ()

def _one_of(options: Iterable[str]) -> str:
    return "(?:" + "|".join(f"(?:{o})" for o in options) + ")"

def _names(table) -> str:
    # longest first so "tues" is tried before "tue"
    return _one_of(sorted(table, key=lambda k: (-len(k), k)))

# 1-2 digit day with an optional, correct ordinal suffix
_ORDINAL_SUFFIX = _one_of([
    r"(?<=1)(?<!11)st",
    r"(?<=2)(?<!12)nd",
    r"(?<=3)(?<!13)rd",
    r"(?<=[04-9])th",
    r"(?<=1\d)th",
])

_SINGLE_DATE = _one_of([
    r"(?P<{p}rel>today|tomorrow)",
    r"(?P<{p}weekday>" + _names(WEEKDAYS) + r")",
    r"(?P<{p}long>(?P<{p}long_M>" + _names(MONTHS) + r")\s+(?P<{p}long_D>\d{{1,2}})"
    r"(?:" + _ORDINAL_SUFFIX + r")?(?:\s*,?\s+(?P<{p}long_Y>(?:\d{{2}})?\d{{2}}))?)",
    r"(?P<{p}short>(?P<{p}short_M>\d{{1,2}})/(?P<{p}short_D>\d{{1,2}})(?:/(?P<{p}short_Y>(?:\d{{2}})?\d{{2}}))?)",
])

def single_date_pattern(prefix: str) -> str:
    return _SINGLE_DATE.format(p=prefix)

# (group name, kind, date-group prefixes)
_ALTERNATIVES = (
    ("upcoming", ExpressionKind.UPCOMING, r"(?:upcoming)?", ()),
    ("upcomingweek", ExpressionKind.UPCOMING_WEEK, r"week", ()),
    ("weekof", ExpressionKind.WEEK_OF, r"week\s+of\s+" + single_date_pattern("weekof_"), ("weekof_",)),
    ("date", ExpressionKind.DATE, single_date_pattern("date_"), ("date_",)),
    ("to", ExpressionKind.RANGE,
     single_date_pattern("to1_") + r"\s+to\s+" + single_date_pattern("to2_"), ("to1_", "to2_")),
)

class Grammar:
    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex = re.compile(pattern, re.IGNORECASE)

    def match(self, text: str) -> Optional[ExpressionMatch]:
        """Match the whole text; None when no alternative fits."""
        m = self._regex.match(text)
        if m is None:
            return None
        for group, kind, _, prefixes in _ALTERNATIVES:
            # `upcoming` can match the empty string, so test participation, not truthiness
            if m.group(group) is not None:
                return ExpressionMatch(kind, tuple(_date_from_match(m, p) for p in prefixes))
        return None

def _date_from_match(m: re.Match, prefix: str) -> DateExpression:
    def g(name: str) -> Optional[str]:
        return m.group(prefix + name)

    if g("rel") is not None:
        return RelativeDate(g("rel").lower())
    if g("weekday") is not None:
        return WeekdayDate(g("weekday").lower())
    if g("long") is not None:
        return LongFormDate(g("long_M").lower(), g("long_D"), g("long_Y"))
    if g("short") is not None:
        return ShortFormDate(g("short_M"), g("short_D"), g("short_Y"))
    raise AssertionError(f"date group {prefix!r} participated without a branch")

def compile_grammar() -> Grammar:
    body = _one_of(f"(?P<{name}>{pattern})" for name, _, pattern, _ in _ALTERNATIVES)
    return Grammar(r"^\s*" + body + r"\s*$")

GRAMMAR = compile_grammar()
