# luachcal/zmanim_hours.py
"""
Proportional (halachic) hours and the zmanim built on them.

``proportional_hour`` is pure: it only needs the sunrise/sunset instants.
The other helpers ask the zmanim library for those instants at the
configured location.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from zmanim.zmanim_calendar import ZmanimCalendar

from .config import DEFAULT_CONFIG, LuachConfig, make_geo
from .holidays import Observance

_LOGGER = logging.getLogger(__name__)

PRAYER_SHACHARIT = "Time for Shacharit"
PRAYER_MINCHA = "Time for Mincha"
PRAYER_MAARIV = "Time for Maariv"
PRAYER_BETWEEN = "Between prayers"
PRAYER_TWILIGHT = "Twilight - Wait for Maariv"


@dataclass(frozen=True)
class ProportionalHour:
    hour_index: int             # 1-12
    minute_fraction: float      # 0-60
    is_daytime: bool
    hour_length: timedelta


@dataclass(frozen=True)
class HalachicTimes:
    alos: datetime
    sunrise: datetime
    sof_zman_shma: datetime
    chatzos: datetime
    mincha_gedola: datetime
    plag_hamincha: datetime
    sunset: datetime
    tzeis: datetime

    @property
    def shaah_zmanis(self) -> timedelta:
        return (self.sunset - self.sunrise) / 12


@dataclass(frozen=True)
class ShabbatTimes:
    candle_lighting: datetime
    havdalah: datetime
    shabbat_date: date


def _round_half_up(dt: datetime) -> datetime:
    """Round to nearest minute: <30s → floor, ≥30s → ceil."""
    if dt.second >= 30:
        dt += timedelta(minutes=1)
    return dt.replace(second=0, microsecond=0)


def format_simple_time(dt_local: datetime, fmt: str = "12") -> str:
    """'7:05 PM' (or '19:05' with fmt='24')."""
    if fmt == "24":
        return dt_local.strftime("%H:%M")
    hour = dt_local.hour % 12 or 12
    ampm = "AM" if dt_local.hour < 12 else "PM"
    return f"{hour}:{dt_local.minute:02d} {ampm}"


def proportional_hour(
    instant: datetime,
    sunrise: datetime,
    sunset: datetime,
    *,
    previous_sunset: Optional[datetime] = None,
    next_sunrise: Optional[datetime] = None,
) -> ProportionalHour:
    """
    Which proportional hour ``instant`` falls in.

    Daytime (sunrise → sunset) and nighttime (sunset → next sunrise, or
    previous sunset → sunrise before dawn) are each split into 12 equal hours.
    A missing neighbouring sunset/sunrise is taken as the given one shifted
    by a day.
    """
    if sunrise >= sunset:
        raise ValueError(f"sunrise {sunrise} is not before sunset {sunset}")

    if sunrise <= instant < sunset:
        start, end, daytime = sunrise, sunset, True
    elif instant >= sunset:
        start, end, daytime = sunset, next_sunrise or sunrise + timedelta(days=1), False
    else:
        start, end, daytime = previous_sunset or sunset - timedelta(days=1), sunrise, False

    span = end - start
    fraction = (instant - start) / span
    if not 0 <= fraction < 1:
        raise ValueError(f"{instant} is outside the night from {start} to {end}")

    scaled = fraction * 12
    return ProportionalHour(
        hour_index=1 + math.floor(scaled),
        minute_fraction=(scaled % 1) * 60,
        is_daytime=daytime,
        hour_length=span / 12,
    )


def sun_times(day: date, config: LuachConfig = DEFAULT_CONFIG) -> tuple[datetime, datetime]:
    """Sunrise and sunset for a civil day at the configured location (local tz)."""
    cal = ZmanimCalendar(geo_location=make_geo(config), date=day)
    sunrise, sunset = cal.sunrise(), cal.sunset()
    if sunrise is None or sunset is None:
        raise ValueError(f"No sunrise/sunset on {day} at {config.latitude}, {config.longitude}")
    tz = config.tz
    return sunrise.astimezone(tz), sunset.astimezone(tz)


def proportional_hour_at(instant: datetime, config: LuachConfig = DEFAULT_CONFIG) -> ProportionalHour:
    """``proportional_hour`` with sunrise/sunset looked up for the instant's local day."""
    tz = config.tz
    local = instant.replace(tzinfo=tz) if instant.tzinfo is None else instant.astimezone(tz)
    today = local.date()
    sunrise, sunset = sun_times(today, config)

    next_sunrise = previous_sunset = None
    if local >= sunset:
        next_sunrise, _ = sun_times(today + timedelta(days=1), config)
    elif local < sunrise:
        _, previous_sunset = sun_times(today - timedelta(days=1), config)

    return proportional_hour(
        local, sunrise, sunset, previous_sunset=previous_sunset, next_sunrise=next_sunrise
    )


def halachic_times(day: date, config: LuachConfig = DEFAULT_CONFIG) -> HalachicTimes:
    """
    The day's zmanim, counted in GRA proportional hours from sunrise:
    shma at 3, chatzos at 6, mincha gedola at 6½, plag at 10¾.
    """
    sunrise, sunset = sun_times(day, config)
    hour = (sunset - sunrise) / 12
    times = HalachicTimes(
        alos=sunrise - timedelta(minutes=config.alos_offset),
        sunrise=sunrise,
        sof_zman_shma=sunrise + hour * 3,
        chatzos=sunrise + hour * 6,
        mincha_gedola=sunrise + hour * 6.5,
        plag_hamincha=sunrise + hour * 10.75,
        sunset=sunset,
        tzeis=sunset + timedelta(minutes=config.havdalah_offset),
    )
    _LOGGER.debug("Zmanim for %s: sunrise %s, sunset %s", day, sunrise, sunset)
    return times


def current_prayer(now: datetime, times: HalachicTimes) -> str:
    """Which prayer's window ``now`` is in."""
    if times.alos <= now < times.chatzos:
        return PRAYER_SHACHARIT
    if times.mincha_gedola <= now < times.sunset:
        return PRAYER_MINCHA
    if now >= times.tzeis or now < times.alos:
        return PRAYER_MAARIV
    if times.chatzos <= now < times.mincha_gedola:
        return PRAYER_BETWEEN
    return PRAYER_TWILIGHT


def shabbat_times(now: datetime, config: LuachConfig = DEFAULT_CONFIG) -> ShabbatTimes:
    """
    Candle lighting and havdalah for the coming Shabbat. On Friday after
    candle lighting this moves on to next week.
    """
    tz = config.tz
    local = now.replace(tzinfo=tz) if now.tzinfo is None else now.astimezone(tz)
    days_to_fri = (4 - local.weekday()) % 7
    friday = local.date() + timedelta(days=days_to_fri)

    _, fri_sunset = sun_times(friday, config)
    candle = fri_sunset - timedelta(minutes=config.candle_offset)
    if days_to_fri == 0 and local >= candle:
        friday += timedelta(days=7)
        _, fri_sunset = sun_times(friday, config)
        candle = fri_sunset - timedelta(minutes=config.candle_offset)

    saturday = friday + timedelta(days=1)
    _, sat_sunset = sun_times(saturday, config)
    return ShabbatTimes(
        candle_lighting=_round_half_up(candle),
        havdalah=_round_half_up(sat_sunset + timedelta(minutes=config.havdalah_offset)),
        shabbat_date=saturday,
    )


def fast_times(observance: Observance, config: LuachConfig = DEFAULT_CONFIG) -> tuple[datetime, datetime]:
    """
    Start and end of a fast: minor fasts run from dawn, full-day fasts from the
    previous sunset; both end at nightfall.
    """
    if not observance.is_fast_day:
        raise ValueError(f"{observance.name} is not a fast day")

    sunrise, sunset = sun_times(observance.date, config)
    if observance.is_full_day_fast:
        _, start = sun_times(observance.date - timedelta(days=1), config)
    else:
        start = sunrise - timedelta(minutes=config.alos_offset)
    end = sunset + timedelta(minutes=config.havdalah_offset)
    return _round_half_up(start), _round_half_up(end)

