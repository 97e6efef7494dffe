# minyan/tokens.py
from __future__ import annotations
from typing import Dict, Tuple

from .errors import DateLookupError

# Python weekday numbers: Monday == 0 ... Sunday == 6
WEEKDAYS: Dict[str, int] = {
    "sun": 6,
    "sunday": 6,
    "mon": 0,
    "monday": 0,
    "tue": 1,
    "tues": 1,
    "tuesday": 1,
    "wed": 2,
    "wednesday": 2,
    "thu": 3,
    "thurs": 3,
    "thursday": 3,
    "fri": 4,
    "friday": 4,
    "sat": 5,
    "saturday": 5,
    "shab": 5,
    "shabbat": 5,
    "shabbos": 5,
}

MONTHS: Dict[str, int] = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

# Display names, indexed like date.weekday() / date.month (independent of the C locale)
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
MONTH_NAMES: Tuple[str, ...] = (
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def lookup_weekday(token: str) -> int:
    try:
        return WEEKDAYS[token.strip().lower()]
    except KeyError:
        raise DateLookupError(f"unknown weekday {token!r}") from None


def lookup_month(token: str) -> int:
    try:
        return MONTHS[token.strip().lower()]
    except KeyError:
        raise DateLookupError(f"unknown month {token!r}") from None
