# minyan/errors.py
"""
Exceptions raised by the parser, the resolver and the Yom Tov pairer.

Callers catch these at the command boundary:
  - CommandParseError / ResolutionError / DateLookupError → "could not understand"
  - SourceError → operator diagnostic + generic failure notice
  - PairingError → retry with a wider window, then give up
"""
from __future__ import annotations


class MinyanError(Exception):
    """Base class for everything this package raises on purpose."""


class CommandParseError(MinyanError, ValueError):
    """The text did not match any accepted command form."""


class ResolutionError(MinyanError, ValueError):
    """Captured values do not form a real calendar date (e.g. 2/30)."""


class DateLookupError(MinyanError, KeyError):
    """A weekday or month token has no table entry."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class SourceError(MinyanError):
    """An event source failed or returned malformed data."""


class PairingError(MinyanError):
    """No candle-lighting/havdalah pair encloses or follows the reference."""


UNDERSTANDING_ERRORS = (CommandParseError, ResolutionError, DateLookupError)
