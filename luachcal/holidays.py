# luachcal/holidays.py
"""
Fixed yearly observances (festivals and fasts) and the next one after a date.

Months in the table use the plain-year index (1=Tishrei … 6=Adar … 12=Elul).
In a leap year Adar and every month after it move one index later, so Adar
rules land on Adar II; Purim Katan is the only Adar I rule.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Optional

from .const import NO_UPCOMING_HOLIDAY, NO_UPCOMING_HOLIDAY_HEBREW, SENTINEL_HOLIDAY_ERROR
from .exceptions import ComputationFailure
from .luach_lib.helper import (
    civil_to_lunisolar,
    days_between,
    is_leap_year,
    lunisolar_to_civil,
)
from .result import CalcResult

if TYPE_CHECKING:
    from .config import LuachConfig

_LOGGER = logging.getLogger(__name__)

# Fast kinds
NOT_FAST = 0
MINOR_FAST = 1      # dawn to nightfall
FULL_FAST = 2       # sunset to nightfall of the next day

# What happens when the date falls on Shabbat
STAYS = 0
TO_SUNDAY = 1
TO_THURSDAY = 2

# Which communities observe the day
EVERYWHERE = 0
DIASPORA_ONLY = 1
ISRAEL_ONLY = 2

_SHABBAT = 5  # Python weekday()


@dataclass(frozen=True)
class ObservanceRule:
    name: str
    name_hebrew: str
    month: int
    day: int
    fast: int = NOT_FAST
    on_shabbat: int = STAYS
    where: int = EVERYWHERE
    leap_only: bool = False


@dataclass(frozen=True)
class Observance:
    name: str
    name_hebrew: str
    date: date
    hebrew_month: int
    hebrew_day: int
    is_fast_day: bool
    is_full_day_fast: bool


@dataclass(frozen=True)
class UpcomingObservance:
    observance: Optional[Observance]
    name: str
    name_hebrew: str
    date: date
    days_until: int

    @property
    def found(self) -> bool:
        return self.observance is not None


OBSERVANCES: tuple[ObservanceRule, ...] = (
    # Tishrei
    ObservanceRule("Rosh Hashanah", "ראש השנה", 1, 1),
    ObservanceRule("Rosh Hashanah (Day 2)", "ראש השנה יום ב׳", 1, 2),
    ObservanceRule("Fast of Gedaliah", "צום גדליה", 1, 3, MINOR_FAST, TO_SUNDAY),
    ObservanceRule("Erev Yom Kippur", "ערב יום כיפור", 1, 9),
    ObservanceRule("Yom Kippur", "יום כיפור", 1, 10, FULL_FAST),
    ObservanceRule("Sukkot", "סוכות", 1, 15),
    ObservanceRule("Sukkot (Day 2)", "סוכות יום ב׳", 1, 16, where=DIASPORA_ONLY),
    ObservanceRule("Hoshana Rabbah", "הושענא רבה", 1, 21),
    ObservanceRule("Shemini Atzeret", "שמיני עצרת", 1, 22),
    ObservanceRule("Simchat Torah", "שמחת תורה", 1, 22, where=ISRAEL_ONLY),
    ObservanceRule("Simchat Torah", "שמחת תורה", 1, 23, where=DIASPORA_ONLY),
    # Kislev / Tevet
    ObservanceRule("Chanukah (Day 1)", "חנוכה", 3, 25),
    ObservanceRule("Fast of Tevet (10th)", "צום עשרה בטבת", 4, 10, MINOR_FAST),
    # Shevat
    ObservanceRule("Tu B'Shevat", "ט״ו בשבט", 5, 15),
    # Adar I (leap years only) / Adar
    ObservanceRule("Purim Katan", "פורים קטן", 6, 14, leap_only=True),
    ObservanceRule("Fast of Esther", "תענית אסתר", 6, 13, MINOR_FAST, TO_THURSDAY),
    ObservanceRule("Purim", "פורים", 6, 14),
    ObservanceRule("Shushan Purim", "שושן פורים", 6, 15),
    # Nisan
    ObservanceRule("Fast of the Firstborn", "תענית בכורות", 7, 14, MINOR_FAST, TO_THURSDAY),
    ObservanceRule("Passover (1st day)", "פסח", 7, 15),
    ObservanceRule("Passover (2nd day)", "פסח יום ב׳", 7, 16, where=DIASPORA_ONLY),
    ObservanceRule("Passover (7th day)", "פסח יום ז׳", 7, 21),
    ObservanceRule("Passover (8th day)", "פסח יום ח׳", 7, 22, where=DIASPORA_ONLY),
    ObservanceRule("Yom HaShoah", "יום השואה", 7, 27),
    # Iyar
    ObservanceRule("Yom HaZikaron", "יום הזיכרון", 8, 4),
    ObservanceRule("Yom HaAtzmaut", "יום העצמאות", 8, 5),
    ObservanceRule("Pesach Sheni", "פסח שני", 8, 14),
    ObservanceRule("Lag BaOmer", "ל״ג בעומר", 8, 18),
    ObservanceRule("Yom Yerushalayim", "יום ירושלים", 8, 28),
    # Sivan
    ObservanceRule("Shavuot (1st day)", "שבועות", 9, 6),
    ObservanceRule("Shavuot (2nd day)", "שבועות יום ב׳", 9, 7, where=DIASPORA_ONLY),
    # Tammuz / Av
    ObservanceRule("Fast of Tammuz (17th)", "צום שבעה עשר בתמוז", 10, 17, MINOR_FAST, TO_SUNDAY),
    ObservanceRule("Tisha B'Av", "תשעה באב", 11, 9, FULL_FAST, TO_SUNDAY),
    ObservanceRule("Tu B'Av", "ט״ו באב", 11, 15),
    # Elul
    ObservanceRule("Erev Rosh Hashanah", "ערב ראש השנה", 12, 29),
)

# Chanukah's last day is counted from its first, since Kislev has 29 or 30 days.
_CHANUKAH_LAST = ("Chanukah (8th day)", "חנוכה יום ח׳")


def _month_for_year(rule: ObservanceRule, leap: bool) -> int:
    if leap and rule.month >= 6 and not rule.leap_only:
        return rule.month + 1
    return rule.month


def _applies(rule: ObservanceRule, leap: bool, diaspora: bool) -> bool:
    if rule.leap_only and not leap:
        return False
    if rule.where == DIASPORA_ONLY:
        return diaspora
    if rule.where == ISRAEL_ONLY:
        return not diaspora
    return True


def _observed_date(rule: ObservanceRule, gdate: date) -> date:
    if gdate.weekday() != _SHABBAT:
        return gdate
    if rule.on_shabbat == TO_SUNDAY:
        return gdate + timedelta(days=1)
    if rule.on_shabbat == TO_THURSDAY:
        return gdate - timedelta(days=2)
    return gdate


def observances_for_year(
    year: int, leap: bool | None = None, diaspora: bool = True
) -> list[Observance]:
    """All observances of a Hebrew year, ordered by civil date."""
    if leap is None:
        leap = is_leap_year(year)
    result: list[Observance] = []

    for rule in OBSERVANCES:
        if not _applies(rule, leap, diaspora):
            continue
        month = _month_for_year(rule, leap)
        gdate = _observed_date(rule, lunisolar_to_civil(year, month, rule.day))
        result.append(
            Observance(
                name=rule.name,
                name_hebrew=rule.name_hebrew,
                date=gdate,
                hebrew_month=month,
                hebrew_day=rule.day,
                is_fast_day=rule.fast != NOT_FAST,
                is_full_day_fast=rule.fast == FULL_FAST,
            )
        )
        if rule.name == "Chanukah (Day 1)":
            last = gdate + timedelta(days=7)
            hd_last = civil_to_lunisolar(last)
            result.append(
                Observance(
                    name=_CHANUKAH_LAST[0],
                    name_hebrew=_CHANUKAH_LAST[1],
                    date=last,
                    hebrew_month=hd_last.month,
                    hebrew_day=hd_last.day,
                    is_fast_day=False,
                    is_full_day_fast=False,
                )
            )

    result.sort(key=lambda o: o.date)
    return result


def next_observance(today: date | datetime, diaspora: bool = True) -> UpcomingObservance:
    """
    The first observance strictly after ``today`` across this Hebrew year and
    the next. ``days_until`` counts whole civil days.
    """
    query = today.date() if isinstance(today, datetime) else today
    year = civil_to_lunisolar(query).year

    candidates = [
        o
        for o in observances_for_year(year, diaspora=diaspora)
        + observances_for_year(year + 1, diaspora=diaspora)
        if o.date > query
    ]
    candidates.sort(key=lambda o: o.date)

    if not candidates:
        _LOGGER.warning("No upcoming observance found after %s", query)
        return UpcomingObservance(
            observance=None,
            name=NO_UPCOMING_HOLIDAY,
            name_hebrew=NO_UPCOMING_HOLIDAY_HEBREW,
            date=query,
            days_until=0,
        )

    nxt = candidates[0]
    return UpcomingObservance(
        observance=nxt,
        name=nxt.name,
        name_hebrew=nxt.name_hebrew,
        date=nxt.date,
        days_until=days_between(query, nxt.date),
    )


class HolidayIndex:
    """Fail-closed front end for periodic callers."""

    def __init__(self, config: LuachConfig | None = None) -> None:
        self._diaspora = config.diaspora if config is not None else True

    def observances(self, year: int) -> list[Observance]:
        return observances_for_year(year, diaspora=self._diaspora)

    def upcoming(self, today: date | datetime) -> CalcResult[UpcomingObservance]:
        try:
            return CalcResult.success(next_observance(today, diaspora=self._diaspora))
        except Exception as err:
            _LOGGER.exception("Holiday calculation failed for %s", today)
            return CalcResult.failure(
                ComputationFailure("holidays", f"{type(err).__name__}: {err}"),
                SENTINEL_HOLIDAY_ERROR,
            )
