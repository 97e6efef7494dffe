"""Tests for rendering minyan events as the chat reply."""
from datetime import date, datetime, timedelta, timezone

import pytest

from minyan import messages
from minyan.commands import parse_times_command
from minyan.messages import filter_elapsed, format_date, format_message, format_time, ordinal_suffix
from minyan.sources import MinyanEvent

UTC = timezone.utc
NOW = datetime(2025, 1, 14, 10, 0, tzinfo=UTC)
AM = "\u202f\u1d00\u1d0d"
PM = "\u202f\u1d18\u1d0d"


def ev(name, d, hh, mm):
    return MinyanEvent(name, datetime(2025, 1, d, hh, mm, tzinfo=UTC))


class TestPieces:

    @pytest.mark.parametrize("n,suffix", [
        (1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (11, "th"), (12, "th"),
        (13, "th"), (21, "st"), (22, "nd"), (23, "rd"), (101, "st"), (111, "th"),
    ])
    def test_ordinal_suffix(self, n, suffix):
        assert ordinal_suffix(n) == suffix

    def test_format_date_current_year(self):
        assert format_date(date(2025, 1, 21), 2025) == "Tuesday, January 21st"

    def test_format_date_other_year(self):
        assert format_date(date(2025, 1, 21), 2024) == "Tuesday, January 21st 2025"

    @pytest.mark.parametrize("hh,mm,text", [
        (6, 45, "6:45" + AM),
        (0, 5, "12:05" + AM),
        (12, 0, "12:00" + PM),
        (19, 5, "7:05" + PM),
    ])
    def test_format_time(self, hh, mm, text):
        assert format_time(datetime(2025, 1, 1, hh, mm)) == text


class TestElapsed:

    def test_grace_period(self):
        events = [ev("a", 14, 9, 50), ev("b", 14, 9, 55), ev("c", 14, 9, 56), ev("d", 14, 10, 30)]
        assert [e.name for e in filter_elapsed(events, NOW)] == ["c", "d"]

    def test_custom_grace(self):
        events = [ev("a", 14, 9, 50)]
        assert filter_elapsed(events, NOW, grace_minutes=15) == events


class TestFormatMessage:

    def test_single_day(self):
        cmd = parse_times_command("!times 1/21", NOW)
        text = format_message(cmd, [ev("Shacharis", 21, 6, 45), ev("Mincha", 21, 16, 30)], NOW)
        assert text == "\n".join([
            "*Minyan times for date::*",
            "Tuesday, January 21st",
            "- *Shacharis*: 6:45" + AM,
            "- *Mincha*: 4:30" + PM,
        ])

    def test_several_days_get_blank_lines(self):
        cmd = parse_times_command("!times week", NOW)
        text = format_message(cmd, [ev("Mincha", 14, 16, 30), ev("Maariv", 14, 17, 30), ev("Shacharis", 15, 6, 45)], NOW)
        assert text == "\n".join([
            "*Minyan times for the upcoming week:*",
            "",
            "Tuesday, January 14th",
            "- *Mincha*: 4:30" + PM,
            "- *Maariv*: 5:30" + PM,
            "",
            "Wednesday, January 15th",
            "- *Shacharis*: 6:45" + AM,
        ])

    def test_empty_single_day_shows_date(self):
        cmd = parse_times_command("!times today", NOW)
        assert format_message(cmd, [], NOW) == "*Minyan times for today:*\nTuesday, January 14th\n(no times to show)"

    def test_empty_range(self):
        cmd = parse_times_command("!times week", NOW)
        assert format_message(cmd, [], NOW) == "*Minyan times for the upcoming week:*\n(no times to show)"

    def test_year_shown_when_not_current(self):
        cmd = parse_times_command("!times 1/2/26", NOW)
        text = format_message(cmd, [], NOW)
        assert "Friday, January 2nd 2026" in text

    def test_sephardic_names(self):
        cmd = parse_times_command("!times sephardic week", NOW)
        events = [ev("Shacharis", 15, 6, 45), ev("Mincha", 15, 16, 30), ev("Maariv", 15, 17, 30), ev("Slichot", 15, 5, 0)]
        text = format_message(cmd, events, NOW)
        for name in ("Shaharit", "Minha", "Arbit", "Selihot"):
            assert name in text
        assert "Shacharis" not in text

    def test_events_shown_in_command_timezone(self):
        est = timezone(timedelta(hours=-5))
        now = datetime(2025, 1, 14, 8, 0, tzinfo=est)
        cmd = parse_times_command("!times today", now)
        # 11:45 UTC is 6:45 in UTC-5
        text = format_message(cmd, [MinyanEvent("Shacharis", datetime(2025, 1, 14, 11, 45, tzinfo=UTC))], now)
        assert "6:45" + AM in text


def test_usage_lists_every_form():
    for form in ("`!times week`", "`!times DATE`", "`!times week of DATE`", "`!times DATE to DATE`"):
        assert form in messages.USAGE
