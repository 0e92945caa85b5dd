# luachcal/molad.py
"""
Molad (mean lunar conjunction) and Rosh Chodesh.

The molad is counted in chalakim (1/1080 of an hour) from the molad of
creation (BaHaRaD: Monday, 5 hours, 204 chalakim). Traditional reckoning
days begin at 6 PM, so the hour count is shifted back to civil midnight
before the result is placed on a calendar date.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from .const import MOLAD_TZ, SENTINEL_MOLAD_ERROR
from .exceptions import ComputationFailure
from .luach_lib.helper import (
    LEAP_CYCLE,
    civil_to_lunisolar,
    get_day_of_week,
    get_day_of_week_hebrew,
    lunisolar_to_civil,
    month_length,
    month_name,
    is_leap_year,
    next_month,
)
from .result import CalcResult

if TYPE_CHECKING:
    from .config import LuachConfig

_LOGGER = logging.getLogger(__name__)

CHALAKIM_PER_MINUTE = 18
CHALAKIM_PER_HOUR = 1080
CHALAKIM_PER_DAY = 24 * CHALAKIM_PER_HOUR            # 25,920
CHALAKIM_PER_WEEK = 7 * CHALAKIM_PER_DAY             # 181,440

# Mean lunation: 29 days, 12 hours, 793 chalakim
LUNATION_CHALAKIM = 29 * CHALAKIM_PER_DAY + 12 * CHALAKIM_PER_HOUR + 793   # 765,433
MONTHS_PER_CYCLE = 235

# Latest a molad can fall after the first civil day of its month.
_MAX_DAYS_AFTER_FIRST = 2


@dataclass(frozen=True)
class MoladAnchor:
    """
    Epoch molad plus the day-start convention it is expressed in.

    ``weekday`` is 1=Sunday … 7=Shabbos in reckoning days that begin
    ``day_start_hours`` before civil midnight; ``hours`` count from that start.
    """

    weekday: int = 2
    hours: int = 5
    chalakim: int = 204
    day_start_hours: int = 6

    @property
    def epoch_chalakim(self) -> int:
        return (
            (self.weekday - 1) * CHALAKIM_PER_DAY
            + self.hours * CHALAKIM_PER_HOUR
            + self.chalakim
        )


TRADITIONAL_ANCHOR = MoladAnchor()


@dataclass(frozen=True)
class Molad:
    year: int
    month: int
    weekday: int                # reckoning weekday, 1=Sunday … 7=Shabbos
    hours: int                  # 0-23, from the start of the reckoning day
    chalakim: int               # 0-1079
    date: date                  # civil date of the announcement
    hour: int                   # 0-23, from civil midnight
    minutes: int
    parts: int                  # chalakim left after whole minutes, 0-17
    day: str
    day_hebrew: str
    am_or_pm: str
    friendly: str
    dt: datetime
    total_chalakim: int             # exact ordering key

    @property
    def hours12(self) -> int:
        return self.hour % 12 or 12


@dataclass(frozen=True)
class RoshChodesh:
    month: str                  # English month name, e.g. "Av"
    month_hebrew: str
    text: str                   # e.g. "Shabbos" or "Shabbos & Sunday"
    days: tuple[str, ...]
    gdays: tuple[date, ...]
    civil_month_text: str       # "December" or "December/January"


@dataclass(frozen=True)
class MoladDetails:
    molad: Molad
    rosh_chodesh: RoshChodesh
    current_month_length: int


def elapsed_months(year: int, month: int) -> int:
    """Months from the molad of creation to the molad of (year, month)."""
    cycles, position = divmod(year - 1, 19)
    months = cycles * MONTHS_PER_CYCLE
    months += sum(13 if LEAP_CYCLE[i] else 12 for i in range(position))
    return months + (month - 1)


def molad_chalakim(year: int, month: int, anchor: MoladAnchor = TRADITIONAL_ANCHOR) -> int:
    return anchor.epoch_chalakim + elapsed_months(year, month) * LUNATION_CHALAKIM


def _place_on_calendar(first_of_month: date, weekday_py: int) -> date:
    """
    Date of ``weekday_py`` in the week of the molad: start from its first
    occurrence on/after the month's first day and step back whole weeks
    until it is at most two days after that day.
    """
    candidate = first_of_month + timedelta(days=(weekday_py - first_of_month.weekday()) % 7)
    while candidate > first_of_month + timedelta(days=_MAX_DAYS_AFTER_FIRST):
        candidate -= timedelta(days=7)
    return candidate


def molad_for_month(year: int, month: int, anchor: MoladAnchor = TRADITIONAL_ANCHOR) -> Molad:
    """Compute the molad of a Hebrew month (Tishrei-based index)."""
    total = molad_chalakim(year, month, anchor)
    in_week = total % CHALAKIM_PER_WEEK
    day_index, in_day = divmod(in_week, CHALAKIM_PER_DAY)
    hours, chalakim = divmod(in_day, CHALAKIM_PER_HOUR)
    weekday = day_index + 1

    # Reckoning day → civil day: the first ``day_start_hours`` belong to the
    # previous civil evening.
    reckoning_py = (weekday + 5) % 7     # 1=Sunday … → Python Mon=0 … Sun=6
    hour = hours - anchor.day_start_hours
    evening = hour < 0
    if evening:
        hour += 24

    first = lunisolar_to_civil(year, month, 1)
    molad_date = _place_on_calendar(first, reckoning_py)
    if evening:
        molad_date -= timedelta(days=1)

    minutes, parts = divmod(chalakim, CHALAKIM_PER_MINUTE)
    dt = datetime(
        molad_date.year, molad_date.month, molad_date.day, hour, minutes, tzinfo=MOLAD_TZ
    ) + timedelta(seconds=parts * 10 / 3)

    ampm = "am" if hour < 12 else "pm"
    dayname = get_day_of_week(molad_date)
    friendly = f"{dayname}, {hour % 12 or 12}:{minutes:02d} {ampm} and {parts} chalakim"

    _LOGGER.debug("Molad %s/%s: %s (%s chalakim)", month, year, friendly, total)
    return Molad(
        year=year,
        month=month,
        weekday=weekday,
        hours=hours,
        chalakim=chalakim,
        date=molad_date,
        hour=hour,
        minutes=minutes,
        parts=parts,
        day=dayname,
        day_hebrew=get_day_of_week_hebrew(molad_date),
        am_or_pm=ampm,
        friendly=friendly,
        dt=dt,
        total_chalakim=total,
    )


def get_actual_molad(today: date, anchor: MoladAnchor = TRADITIONAL_ANCHOR) -> Molad:
    """Molad of the Hebrew month *after* the one containing ``today``."""
    hd = civil_to_lunisolar(today)
    year, month = next_month(hd.year, hd.month)
    return molad_for_month(year, month, anchor)


def _civil_month_text(gdays: list[date]) -> str:
    names: list[str] = []
    for g in gdays:
        name = g.strftime("%B")
        if name not in names:
            names.append(name)
    return "/".join(names)


def get_rosh_chodesh_days(today: date) -> RoshChodesh:
    """
    Rosh Chodesh for the month following the one containing ``today``:
      - the 30th of the current month, if it has one;
      - always the 1st of the next month;
      - none for Tishrei, which opens with Rosh Hashanah instead.
    """
    hd = civil_to_lunisolar(today)
    days: list[str] = []
    gdays: list[date] = []

    if month_length(hd.year, hd.month) == 30:
        g30 = lunisolar_to_civil(hd.year, hd.month, 30)
        days.append(get_day_of_week(g30))
        gdays.append(g30)

    ny, nm = next_month(hd.year, hd.month)
    leap = is_leap_year(ny)
    if nm == 1:
        return RoshChodesh(
            month=month_name(nm, leap),
            month_hebrew=month_name(nm, leap, hebrew=True),
            text="",
            days=(),
            gdays=(),
            civil_month_text="",
        )

    g1 = lunisolar_to_civil(ny, nm, 1)
    days.append(get_day_of_week(g1))
    gdays.append(g1)

    return RoshChodesh(
        month=month_name(nm, leap),
        month_hebrew=month_name(nm, leap, hebrew=True),
        text=" & ".join(days),
        days=tuple(days),
        gdays=tuple(gdays),
        civil_month_text=_civil_month_text(gdays),
    )


def get_molad(today: date, anchor: MoladAnchor = TRADITIONAL_ANCHOR) -> MoladDetails:
    """
    Package up the next molad with its Rosh Chodesh days.
    """
    hd = civil_to_lunisolar(today)
    return MoladDetails(
        molad=get_actual_molad(today, anchor),
        rosh_chodesh=get_rosh_chodesh_days(today),
        current_month_length=month_length(hd.year, hd.month),
    )


class MoladCalculator:
    """Fail-closed front end for periodic callers."""

    def __init__(self, config: LuachConfig | None = None) -> None:
        self._anchor = config.molad_anchor if config is not None else TRADITIONAL_ANCHOR

    def next_molad(self, today: date | datetime) -> CalcResult[MoladDetails]:
        try:
            return CalcResult.success(get_molad(today, self._anchor))
        except Exception as err:
            _LOGGER.exception("Molad calculation failed for %s", today)
            return CalcResult.failure(
                ComputationFailure("molad", f"{type(err).__name__}: {err}"),
                SENTINEL_MOLAD_ERROR,
            )
