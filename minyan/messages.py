# minyan/messages.py
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from .commands import TimesCommand
from .sources import MinyanEvent
from .tokens import MONTH_NAMES, WEEKDAY_NAMES

# narrow no-break space + small-caps AM/PM
AM = "\u202f\u1d00\u1d0d"
PM = "\u202f\u1d18\u1d0d"

SEPHARDIC_NAMES = (
    ("Shacharis", "Shaharit"),
    ("shacharis", "shaharit"),
    ("Mincha", "Minha"),
    ("mincha", "minha"),
    ("Maariv", "Arbit"),
    ("maariv", "arbit"),
    ("Slichot", "Selihot"),
    ("slichot", "selihot"),
)

USAGE = "\n".join([
    "*Usage:*",
    "",
    "`!times` or `!times upcoming`",
    "- Displays minyan times for the next 25 hours",
    "",
    "`!times week`",
    "- Displays minyan times for the next 7 days",
    "",
    "`!times DATE`",
    "- Displays minyan times for `DATE`",
    "",
    "`!times week of DATE`",
    "- Displays minyan times for the week of `DATE`",
    "",
    "`!times DATE to DATE`",
    "- Displays minyan times between the first `DATE` and the second `DATE`",
    "",
    "The `DATE` can be in any of the following formats (capitalization doesn't matter):",
    "- `today` or `tomorrow`",
    "- A day of the week like `Mon`, `Tuesday`, `Shabbat`, etc.",
    "- A date in the format `M[M]/D[D][/[YY]YY]`, e.g. `1/21`, `08/15/25`, `11/07/2026`",
    "- A date in the format `Month DD[th][[,] YYYY]`, e.g. `Jan 21st`, `August 15 2025`, `November 7th, 2000`",
])

def ordinal_suffix(n: int) -> str:
    n = abs(n) % 100
    if 11 <= n <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")

def format_date(d: date, current_year: int) -> str:
    """Monday, January 2nd  (year appended only when it is not the current one)"""
    s = f"{WEEKDAY_NAMES[d.weekday()]}, {MONTH_NAMES[d.month]} {d.day}{ordinal_suffix(d.day)}"
    if d.year != current_year:
        s += f" {d.year}"
    return s

def format_time(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d}{AM if dt.hour < 12 else PM}"

def filter_elapsed(events: Iterable[MinyanEvent], now: datetime, grace_minutes: int = 5) -> List[MinyanEvent]:
    cutoff = now - timedelta(minutes=grace_minutes)
    return [e for e in events if e.start > cutoff]

def sephardic(text: str) -> str:
    for ashkenazi, sephardi in SEPHARDIC_NAMES:
        text = text.replace(ashkenazi, sephardi)
    return text

def format_message(command: TimesCommand, events: Sequence[MinyanEvent],
                   now: Optional[datetime] = None) -> str:
    """Render events (sorted by start) as the chat reply for `command`."""
    tz = command.start.tzinfo
    now = now or datetime.now(tz)
    current_year = now.astimezone(tz).year if tz else now.year
    lines: List[str] = [f"*{command.header}:*"]

    if not events:
        if command.single_day:
            # a single requested day still shows which day it was
            lines.append(format_date(command.start.date(), current_year))
        lines.append("(no times to show)")
    else:
        local = [(e, e.start.astimezone(tz) if tz else e.start) for e in events]
        single_day_returned = local[0][1].date() == local[-1][1].date()
        prev: Optional[date] = None
        for event, when in local:
            day = when.date()
            if day != prev:
                # blank line between days, and before the first when several come back
                if not single_day_returned or prev is not None:
                    lines.append("")
                lines.append(format_date(day, current_year))
                prev = day
            lines.append(f"- *{event.name}*: {format_time(when)}")

    message = "\n".join(lines)
    if command.use_alternate_locale:
        message = sephardic(message)
    return message
