# minyan/chat.py
"""
Chat-facing entry points: answer `!times` / `!help` messages and build the
scheduled daily message (skipped while Yom Tov is in effect).

Both return the reply text, or None when nothing should be sent.
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional

from . import messages
from .commands import COMMAND_PREFIX, UPCOMING_HOURS, TimesCommand, normalize, parse_times_command, upcoming_command
from .errors import UNDERSTANDING_ERRORS, SourceError
from .log import get_logger
from .sources import EventSource
from .yomtov import LiturgicalEventSource, is_yom_tov

log = get_logger(__name__)

HELP_PREFIX = "!help"
PARSE_FAILURE = "```Could not parse the command```"
SOURCE_FAILURE = "```There was an error retrieving the minyan times```"

def times_message(command: TimesCommand, source: EventSource, now: datetime,
                  calendar_id: Optional[str] = None, grace_minutes: int = 5) -> str:
    events = source.list(command.start, command.end, calendar_id)
    if not command.include_elapsed:
        events = messages.filter_elapsed(events, now, grace_minutes)
    return messages.format_message(command, events, now)

def handle_message(text: str, source: EventSource, now: datetime,
                   calendar_id: Optional[str] = None, grace_minutes: int = 5,
                   upcoming_hours: int = UPCOMING_HOURS) -> Optional[str]:
    text = normalize(text)
    if text.startswith(COMMAND_PREFIX):
        try:
            command = parse_times_command(text, now, upcoming_hours)
        except UNDERSTANDING_ERRORS as e:
            log.warning("could not parse %r: %s", text, e)
            return PARSE_FAILURE
        try:
            return times_message(command, source, now, calendar_id, grace_minutes)
        except SourceError:
            log.exception("retrieving minyan times for %r", text)
            return SOURCE_FAILURE
    if text.startswith(HELP_PREFIX):
        return messages.USAGE
    return None

def daily_message(source: EventSource, yomtov: LiturgicalEventSource, now: datetime,
                  calendar_id: Optional[str] = None, window_days: int = 10,
                  wide_window_days: int = 30, grace_minutes: int = 5,
                  upcoming_hours: int = UPCOMING_HOURS) -> Optional[str]:
    """Upcoming times for the scheduled post; None while Yom Tov is in effect."""
    if is_yom_tov(yomtov, now, window_days, wide_window_days):
        log.info("scheduled message skipped, Yom Tov in effect at %s", now)
        return None
    return times_message(upcoming_command(now, hours=upcoming_hours), source, now, calendar_id, grace_minutes)
