# luachcal/__init__.py
"""Hebrew calendar, molad, holiday, zmanim, Daf Yomi and moon-phase calculations."""

from __future__ import annotations

from .config import DEFAULT_CONFIG, LuachConfig, get_tzname
from .daf_hayomi import ReadingPosition, compute_daf_yomi, format_daf
from .exceptions import (
    ComputationFailure,
    DateOutOfRange,
    InvalidConfiguration,
    InvalidLunisolarDate,
    InvalidNumeral,
    LuachError,
)
from .holidays import HolidayIndex, Observance, UpcomingObservance, next_observance, observances_for_year
from .luach_lib.helper import (
    LunisolarDate,
    civil_to_lunisolar,
    int_to_hebrew,
    is_leap_year,
    lunisolar_to_civil,
    month_length,
    month_name,
)
from .molad import Molad, MoladAnchor, MoladCalculator, MoladDetails, RoshChodesh, get_molad, molad_for_month
from .moon_phase import MoonPhaseReading, get_detailed_moon_phase, get_moon_phase
from .result import CalcResult
from .zmanim_hours import ProportionalHour, halachic_times, proportional_hour, proportional_hour_at

__version__ = "0.1.0"

__all__ = [
    "CalcResult",
    "ComputationFailure",
    "DEFAULT_CONFIG",
    "DateOutOfRange",
    "HolidayIndex",
    "InvalidConfiguration",
    "InvalidLunisolarDate",
    "InvalidNumeral",
    "LuachConfig",
    "LuachError",
    "LunisolarDate",
    "Molad",
    "MoladAnchor",
    "MoladCalculator",
    "MoladDetails",
    "MoonPhaseReading",
    "Observance",
    "ProportionalHour",
    "ReadingPosition",
    "RoshChodesh",
    "UpcomingObservance",
    "civil_to_lunisolar",
    "compute_daf_yomi",
    "format_daf",
    "get_detailed_moon_phase",
    "get_molad",
    "get_moon_phase",
    "get_tzname",
    "halachic_times",
    "int_to_hebrew",
    "is_leap_year",
    "lunisolar_to_civil",
    "molad_for_month",
    "month_length",
    "month_name",
    "next_observance",
    "observances_for_year",
    "proportional_hour",
    "proportional_hour_at",
]
