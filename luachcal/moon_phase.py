# luachcal/moon_phase.py
"""
Moon phase from the mean synodic month.

Counts mean lunations from a known new moon, so readings can be off from the
true moon by several hours. Good enough for an emoji and a percentage.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone

from .const import MOON_REFERENCE_NEW_MOON, SYNODIC_MONTH_DAYS

NEW_MOON = "New Moon"
WAXING_CRESCENT = "Waxing Crescent"
FIRST_QUARTER = "First Quarter"
WAXING_GIBBOUS = "Waxing Gibbous"
FULL_MOON = "Full Moon"
WANING_GIBBOUS = "Waning Gibbous"
LAST_QUARTER = "Last Quarter"
WANING_CRESCENT = "Waning Crescent"

# (upper bound of the cycle fraction, emoji, name)
_PHASE_BANDS: tuple[tuple[float, str, str], ...] = (
    (0.0625, "🌑", NEW_MOON),
    (0.1875, "🌒", WAXING_CRESCENT),
    (0.3125, "🌓", FIRST_QUARTER),
    (0.4375, "🌔", WAXING_GIBBOUS),
    (0.5625, "🌕", FULL_MOON),
    (0.6875, "🌖", WANING_GIBBOUS),
    (0.8125, "🌗", LAST_QUARTER),
    (0.9375, "🌘", WANING_CRESCENT),
)

_EMOJI = {name: emoji for _, emoji, name in _PHASE_BANDS}


@dataclass(frozen=True)
class MoonPhaseReading:
    emoji: str
    name: str
    illumination_percent: float     # 0-100
    age_days: float                 # days since the mean new moon
    phase_fraction: float           # 0 ≤ f < 1


def phase_fraction(instant: datetime) -> float:
    """Fraction of the synodic month elapsed at ``instant`` (naive = UTC)."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    days = (instant - MOON_REFERENCE_NEW_MOON).total_seconds() / 86400
    return (days % SYNODIC_MONTH_DAYS) / SYNODIC_MONTH_DAYS


def _reading(fraction: float, emoji: str, name: str) -> MoonPhaseReading:
    return MoonPhaseReading(
        emoji=emoji,
        name=name,
        illumination_percent=50 * (1 - math.cos(2 * math.pi * fraction)),
        age_days=fraction * SYNODIC_MONTH_DAYS,
        phase_fraction=fraction,
    )


def get_moon_phase(instant: datetime) -> MoonPhaseReading:
    """Eight equal bands, each centred on its phase."""
    f = phase_fraction(instant)
    for upper, emoji, name in _PHASE_BANDS:
        if f < upper:
            return _reading(f, emoji, name)
    return _reading(f, "🌑", NEW_MOON)


def get_detailed_moon_phase(instant: datetime) -> MoonPhaseReading:
    """
    Named by illumination instead of cycle position:
    <2% new, <40% crescent, <60% quarter, <98% gibbous, else full.
    The first half of the cycle is waxing, the second waning.
    """
    f = phase_fraction(instant)
    illumination = 50 * (1 - math.cos(2 * math.pi * f))
    waxing = f < 0.5

    if illumination < 2:
        name = NEW_MOON
    elif illumination < 40:
        name = WAXING_CRESCENT if waxing else WANING_CRESCENT
    elif illumination < 60:
        name = FIRST_QUARTER if waxing else LAST_QUARTER
    elif illumination < 98:
        name = WAXING_GIBBOUS if waxing else WANING_GIBBOUS
    else:
        name = FULL_MOON
    return _reading(f, _EMOJI[name], name)
