# luachcal/luach_lib/helper.py

"""
Civil <-> Hebrew calendar conversion on top of pyluach.

pyluach numbers months from Nisan (1=Nisan … 6=Elul, 7=Tishrei … 12=Adar/Adar I,
13=Adar II). Everything in luachcal counts months from Tishrei instead
(1=Tishrei … 6=Adar/Adar I, 7=Adar II in a leap year), so the helpers below
translate at the boundary.

Requires:
    pip install pyluach
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from pyluach.hebrewcal import HebrewDate as PHebrewDate

from ..exceptions import DateOutOfRange, InvalidLunisolarDate, InvalidNumeral

_LOGGER = logging.getLogger(__name__)

# Years 3, 6, 8, 11, 14, 17 and 19 of each 19-year cycle are leap years.
LEAP_CYCLE: tuple[bool, ...] = (
    False, False, True, False, False, True, False, True, False, False,
    True, False, False, True, False, False, True, False, True,
)

DEFICIENT = "deficient"
REGULAR = "regular"
COMPLETE = "complete"

# (month, is_leap_year) -> (English, Hebrew)
_MONTH_NAMES: dict[tuple[int, bool], tuple[str, str]] = {
    (1, False): ("Tishrei", "תשרי"),
    (2, False): ("Cheshvan", "חשוון"),
    (3, False): ("Kislev", "כסלו"),
    (4, False): ("Tevet", "טבת"),
    (5, False): ("Shevat", "שבט"),
    (6, False): ("Adar", "אדר"),
    (7, False): ("Nisan", "ניסן"),
    (8, False): ("Iyar", "אייר"),
    (9, False): ("Sivan", "סיוון"),
    (10, False): ("Tammuz", "תמוז"),
    (11, False): ("Av", "אב"),
    (12, False): ("Elul", "אלול"),
    (1, True): ("Tishrei", "תשרי"),
    (2, True): ("Cheshvan", "חשוון"),
    (3, True): ("Kislev", "כסלו"),
    (4, True): ("Tevet", "טבת"),
    (5, True): ("Shevat", "שבט"),
    (6, True): ("Adar I", "אדר א׳"),
    (7, True): ("Adar II", "אדר ב׳"),
    (8, True): ("Nisan", "ניסן"),
    (9, True): ("Iyar", "אייר"),
    (10, True): ("Sivan", "סיוון"),
    (11, True): ("Tammuz", "תמוז"),
    (12, True): ("Av", "אב"),
    (13, True): ("Elul", "אלול"),
}

_DAY_NAMES_HEBREW = ("שני", "שלישי", "רביעי", "חמישי", "ששי", "שבת", "ראשון")  # Python Monday=0

_ONES = ("", "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט")
_TENS = ("", "י", "כ", "ל", "מ", "נ", "ס", "ע", "פ", "צ")
_HUNDREDS = ("", "ק", "ר", "ש", "ת", "תק", "תר", "תש", "תת", "תתק")

GERESH = "׳"
GERSHAYIM = "״"


@dataclass(frozen=True)
class LunisolarDate:
    year: int
    month: int
    day: int
    is_leap_year: bool

    @property
    def month_name(self) -> str:
        return month_name(self.month, self.is_leap_year)

    @property
    def month_name_hebrew(self) -> str:
        return month_name(self.month, self.is_leap_year, hebrew=True)


def is_leap_year(year: int) -> bool:
    return ((7 * year + 1) % 19) < 7


def months_in_year(year: int) -> int:
    return 13 if is_leap_year(year) else 12


def _to_pyluach_month(month: int, leap: bool) -> int:
    if month <= 5:                      # Tishrei … Shevat
        return month + 6
    if month == 6:                      # Adar / Adar I
        return 12
    if leap:
        return 13 if month == 7 else month - 7
    return month - 6


def _from_pyluach_month(pmonth: int, leap: bool) -> int:
    if 7 <= pmonth <= 11:
        return pmonth - 6
    if pmonth == 12:
        return 6
    if pmonth == 13:
        return 7
    return pmonth + (7 if leap else 6)  # Nisan … Elul


def year_length(year: int) -> int:
    """Number of days in a Hebrew year (353-355, or 383-385 when leap)."""
    if year < 1:
        raise DateOutOfRange(f"Hebrew year {year} is before the calendar epoch")
    return int(round(PHebrewDate(year + 1, 7, 1).jd - PHebrewDate(year, 7, 1).jd))


def year_class(year: int) -> str:
    """Deficient, regular or complete, from the year's length in days."""
    return {3: DEFICIENT, 4: REGULAR, 5: COMPLETE}[year_length(year) % 10]


def month_length(year: int, month: int) -> int:
    """
    Length of a month (Tishrei-based index) in the given year.

    Cheshvan gains its 30th day only in complete years and Kislev loses its
    30th only in deficient years; Adar I always has 30; every other month
    alternates 30/29 starting with Tishrei.
    """
    leap = is_leap_year(year)
    if not 1 <= month <= (13 if leap else 12):
        raise InvalidLunisolarDate(f"Year {year} has no month {month}")
    if month == 2:
        return 30 if year_class(year) == COMPLETE else 29
    if month == 3:
        return 29 if year_class(year) == DEFICIENT else 30
    if leap and month == 6:
        return 30
    if leap and month >= 7:
        month -= 1                      # Adar II onward mirrors the plain year
    return 30 if month % 2 == 1 else 29


def next_month(year: int, month: int) -> tuple[int, int]:
    """The month after (year, month), rolling Elul over into next Tishrei."""
    if month >= months_in_year(year):
        return year + 1, 1
    return year, month + 1


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def civil_to_lunisolar(gdate: date | datetime) -> LunisolarDate:
    """
    Given a Python date, return the Hebrew date it falls on (daytime reckoning).
    Example: 2024-10-03 -> LunisolarDate(5785, 1, 1, False).
    """
    try:
        hd = PHebrewDate.from_pydate(_as_date(gdate))
    except (ValueError, OverflowError) as err:
        raise DateOutOfRange(f"{gdate!r} cannot be expressed in the Hebrew calendar") from err
    if hd.year < 1:
        raise DateOutOfRange(f"{gdate!r} is before the calendar epoch")
    leap = is_leap_year(hd.year)
    return LunisolarDate(hd.year, _from_pyluach_month(hd.month, leap), hd.day, leap)


def lunisolar_to_civil(year: int, month: int, day: int) -> date:
    """Return the Gregorian date of a Hebrew (year, month, day)."""
    if year < 1:
        raise DateOutOfRange(f"Hebrew year {year} is before the calendar epoch")
    length = month_length(year, month)
    if not 1 <= day <= length:
        raise InvalidLunisolarDate(
            f"{month_name(month, is_leap_year(year))} {year} has {length} days, not {day}"
        )
    hd = PHebrewDate(year, _to_pyluach_month(month, is_leap_year(year)), day)
    try:
        return hd.to_pydate()
    except (ValueError, OverflowError) as err:
        raise DateOutOfRange(f"{day}/{month}/{year} is outside the civil date range") from err


def month_name(month: int, is_leap_year: bool, hebrew: bool = False) -> str:
    """
    Month name for a Tishrei-based index. The caller must pass the index for
    the right year class: 6/7 are Adar I/Adar II in a leap year, Adar/Nisan otherwise.
    """
    names = _MONTH_NAMES.get((month, bool(is_leap_year)))
    if names is None:
        return f"חודש {month}" if hebrew else f"Month {month}"
    return names[1] if hebrew else names[0]


def is_shabbat(gdate: date) -> bool:
    """Return True if the given Gregorian date is Saturday (Shabbat)."""
    return gdate.weekday() == 5  # Python: Monday=0 … Saturday=5


def get_day_of_week(gdate: date) -> str:
    """
    Return the English weekday for gdate, but substitute "Shabbos" for Saturday.
    """
    if gdate.weekday() == 5:
        return "Shabbos"
    return gdate.strftime("%A")


def get_day_of_week_hebrew(gdate: date) -> str:
    return _DAY_NAMES_HEBREW[gdate.weekday()]


def _with_geresh(letters: str) -> str:
    # geresh after a single letter, gershayim before the last of several
    if len(letters) == 1:
        return letters + GERESH
    return f"{letters[:-1]}{GERSHAYIM}{letters[-1]}"


def int_to_hebrew(num: int) -> str:
    """
    Convert an integer (1–9999) into Hebrew letters with geresh/gershayim.
    E.g. 5 → 'ה׳', 15 → 'ט״ו', 115 → 'קט״ו', 5785 → 'ה׳תשפ״ה'
    """
    if isinstance(num, bool) or not isinstance(num, int) or not 0 < num < 10000:
        raise InvalidNumeral(f"Hebrew numerals are rendered for 1-9999, got {num!r}")

    thousands, rest = divmod(num, 1000)
    hundreds, rest = divmod(rest, 100)
    tens, ones = divmod(rest, 10)

    # 15 and 16 are written 9+6 and 9+7 so they do not spell a divine name
    if tens == 1 and ones in (5, 6):
        letters = _HUNDREDS[hundreds] + ("טו" if ones == 5 else "טז")
    else:
        letters = _HUNDREDS[hundreds] + _TENS[tens] + _ONES[ones]

    prefix = _ONES[thousands] + GERESH if thousands else ""
    if not letters:
        return f"{prefix} {'אלף' if thousands == 1 else 'אלפים'}"
    return prefix + _with_geresh(letters)


def format_hebrew_date(year: int, month: int, day: int) -> tuple[str, str]:
    """('15 Nisan 5784', 'ט״ו ניסן ה׳תשפ״ד')"""
    leap = is_leap_year(year)
    english = f"{day} {month_name(month, leap)} {year}"
    hebrew = f"{int_to_hebrew(day)} {month_name(month, leap, hebrew=True)} {int_to_hebrew(year)}"
    return english, hebrew


def _anniversary_month(month: int, source_leap: bool, target_year: int) -> int:
    """Carry a month index from a year of one class into ``target_year``."""
    pmonth = _to_pyluach_month(month, source_leap)
    target_leap = is_leap_year(target_year)
    if pmonth == 13 and not target_leap:
        pmonth = 12                     # Adar II → Adar
    return _from_pyluach_month(pmonth, target_leap)


def next_hebrew_anniversary(year: int, month: int, day: int, today: date | None = None) -> date | None:
    """
    Next civil date (on or after ``today``) on which Hebrew (month, day) of
    ``year`` recurs. Tries this Hebrew year, then the next; None when the day
    does not exist in either (e.g. 30 Cheshvan twice in a row).
    """
    today = _as_date(today or date.today())
    source_leap = is_leap_year(year)
    current = civil_to_lunisolar(today).year

    for target in (current, current + 1):
        tmonth = _anniversary_month(month, source_leap, target)
        try:
            gdate = lunisolar_to_civil(target, tmonth, day)
        except InvalidLunisolarDate:
            _LOGGER.debug("%s/%s does not occur in %s", day, tmonth, target)
            continue
        if gdate >= today:
            return gdate
    return None


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole civil days from start to end, time of day stripped."""
    return (_as_date(end) - _as_date(start)).days