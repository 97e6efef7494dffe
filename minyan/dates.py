# minyan/dates.py
"""
Resolve one parsed date expression into a calendar date.

`basedate` anchors everything relative: today/tomorrow, weekday names and the
year of dates written without one. Year handling differs between the two
numeric forms and that difference is kept on purpose:

  - short form  1/21/25   two-digit year → basedate's century (2025)
  - long form   Jan 21 25 year taken literally (year 25)
"""
from __future__ import annotations
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Tuple, Union

from .errors import ResolutionError
from .grammar import DateExpression, LongFormDate, RelativeDate, ShortFormDate, WeekdayDate
from .timeparse import is_date_valid, next_occurrence_year
from .tokens import lookup_month, lookup_weekday

class DateKind(str, Enum):
    EXPLICIT = "explicit"
    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEKDAY = "weekday"

def make_date(year: int, month: int, day: int) -> date:
    if not is_date_valid(year, month, day):
        raise ResolutionError(f"invalid date: {month}/{day}/{year}")
    return date(year, month, day)

def _shift(basedate: date, days: int) -> date:
    try:
        return basedate + timedelta(days=days)
    except OverflowError:
        raise ResolutionError(f"date out of range: {days:+d} days from {basedate}") from None

def resolve(expr: DateExpression, basedate: Union[date, datetime]) -> Tuple[date, DateKind]:
    if isinstance(basedate, datetime):
        basedate = basedate.date()

    if isinstance(expr, RelativeDate):
        if expr.keyword == "today":
            return basedate, DateKind.TODAY
        if expr.keyword == "tomorrow":
            return _shift(basedate, 1), DateKind.TOMORROW
        raise ResolutionError(f"unknown relative date {expr.keyword!r}")

    if isinstance(expr, WeekdayDate):
        offset = lookup_weekday(expr.name) - basedate.weekday()
        if offset <= 0:
            # same weekday means next week, never today
            offset += 7
        return _shift(basedate, offset), DateKind.WEEKDAY

    if isinstance(expr, ShortFormDate):
        month, day = int(expr.month), int(expr.day)
        if expr.year is None:
            year = next_occurrence_year(basedate, month, day)
        else:
            year = int(expr.year)
            if len(expr.year) == 2:
                year += (basedate.year // 100) * 100
        return make_date(year, month, day), DateKind.EXPLICIT

    if isinstance(expr, LongFormDate):
        month, day = lookup_month(expr.month_name), int(expr.day)
        if expr.year is None:
            year = next_occurrence_year(basedate, month, day)
        else:
            year = int(expr.year)
        return make_date(year, month, day), DateKind.EXPLICIT

    raise ResolutionError(f"unsupported date expression {expr!r}")
