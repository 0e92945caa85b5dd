# luachcal/exceptions.py
"""Errors raised by the calendar calculations."""

from __future__ import annotations


class LuachError(Exception):
    """Base class for every luachcal error."""


class DateOutOfRange(LuachError, ValueError):
    """A date cannot be expressed in the Hebrew calendar (or back in the civil one)."""


class InvalidLunisolarDate(LuachError, ValueError):
    """A Hebrew year/month/day combination that does not exist."""


class InvalidNumeral(LuachError, ValueError):
    """A number outside the range Hebrew numerals are rendered for (1-9999)."""


class ComputationFailure(LuachError):
    """An unexpected error inside the molad or holiday calculations.

    Never raised across the public fail-closed boundaries; it is carried
    inside a failed ``CalcResult`` instead.
    """

    def __init__(self, component: str, message: str) -> None:
        super().__init__(f"{component}: {message}")
        self.component = component
        self.message = message


class InvalidConfiguration(LuachError, ValueError):
    """A configuration mapping with a value that cannot be used."""
