from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from luachcal.config import LuachConfig
from luachcal.holidays import Observance
from luachcal.zmanim_hours import (
    PRAYER_BETWEEN,
    PRAYER_MAARIV,
    PRAYER_MINCHA,
    PRAYER_SHACHARIT,
    PRAYER_TWILIGHT,
    HalachicTimes,
    current_prayer,
    fast_times,
    format_simple_time,
    halachic_times,
    proportional_hour,
    proportional_hour_at,
    shabbat_times,
    sun_times,
)

NY = ZoneInfo("America/New_York")
CONFIG = LuachConfig()   # New York


def _at(h, m=0, day=20):
    return datetime(2024, 6, day, h, m, tzinfo=NY)


SUNRISE = _at(6)
SUNSET = _at(18)


@pytest.mark.parametrize("instant", [_at(12), _at(0), _at(18), _at(6)])
def test_hour_at_noon_midnight_and_edges(instant):
    # noon and midnight open hour 7; sunset and sunrise open hour 1
    hour = proportional_hour(instant, SUNRISE, SUNSET)
    expected = 1 if instant in (SUNRISE, SUNSET) else 7
    assert hour.hour_index == expected
    assert hour.minute_fraction == pytest.approx(0)


def test_daytime_hour():
    hour = proportional_hour(_at(9, 30), SUNRISE, SUNSET)
    assert hour.is_daytime
    assert hour.hour_index == 4
    assert hour.minute_fraction == pytest.approx(30)
    assert hour.hour_length == timedelta(hours=1)


def test_uneven_day():
    sunrise, sunset = _at(5), _at(20)        # 75-minute hours
    hour = proportional_hour(_at(12, 30), sunrise, sunset)
    assert hour.hour_index == 7
    assert hour.minute_fraction == pytest.approx(0)
    assert hour.hour_length == timedelta(minutes=75)


def test_night_uses_neighbours():
    hour = proportional_hour(
        _at(22), SUNRISE, SUNSET, next_sunrise=_at(4, day=21)
    )
    assert not hour.is_daytime
    assert hour.hour_index == 5
    assert hour.hour_length == timedelta(minutes=50)

    hour = proportional_hour(
        _at(1), SUNRISE, SUNSET, previous_sunset=_at(20, day=19)
    )
    assert not hour.is_daytime
    assert hour.hour_index == 7


def test_rejects_sunrise_after_sunset():
    with pytest.raises(ValueError):
        proportional_hour(_at(12), SUNSET, SUNRISE)


def test_sun_times_new_york_midsummer():
    sunrise, sunset = sun_times(date(2024, 6, 20), CONFIG)
    assert sunrise < sunset
    assert sunrise.hour == 5
    assert sunset.hour == 20
    assert sunrise.utcoffset() == timedelta(hours=-4)


def test_proportional_hour_at_noon():
    sunrise, sunset = sun_times(date(2024, 6, 20), CONFIG)
    noon = sunrise + (sunset - sunrise) / 2
    hour = proportional_hour_at(noon, CONFIG)
    assert hour.is_daytime
    assert hour.hour_index == 7


def test_proportional_hour_at_night():
    hour = proportional_hour_at(_at(23), CONFIG)
    assert not hour.is_daytime
    hour = proportional_hour_at(_at(3), CONFIG)
    assert not hour.is_daytime
    assert 1 <= hour.hour_index <= 12


def test_halachic_times_in_order():
    t = halachic_times(date(2024, 6, 20), CONFIG)
    order = [t.alos, t.sunrise, t.sof_zman_shma, t.chatzos, t.mincha_gedola, t.plag_hamincha, t.sunset, t.tzeis]
    assert order == sorted(order)
    assert t.sunrise - t.alos == timedelta(minutes=72)
    assert t.tzeis - t.sunset == timedelta(minutes=42)
    assert t.chatzos - t.sunrise == t.shaah_zmanis * 6


def test_current_prayer():
    t = HalachicTimes(
        alos=_at(4, 48),
        sunrise=SUNRISE,
        sof_zman_shma=_at(9),
        chatzos=_at(12),
        mincha_gedola=_at(12, 30),
        plag_hamincha=_at(16, 45),
        sunset=SUNSET,
        tzeis=_at(18, 42),
    )
    assert current_prayer(_at(7), t) == PRAYER_SHACHARIT
    assert current_prayer(_at(12, 15), t) == PRAYER_BETWEEN
    assert current_prayer(_at(15), t) == PRAYER_MINCHA
    assert current_prayer(_at(18, 20), t) == PRAYER_TWILIGHT
    assert current_prayer(_at(21), t) == PRAYER_MAARIV
    assert current_prayer(_at(3), t) == PRAYER_MAARIV


def test_shabbat_times_midweek():
    times = shabbat_times(datetime(2024, 6, 19, 12, 0, tzinfo=NY), CONFIG)
    assert times.shabbat_date == date(2024, 6, 22)
    assert times.candle_lighting.date() == date(2024, 6, 21)
    assert times.havdalah.date() == date(2024, 6, 22)
    assert times.candle_lighting.second == 0
    _, sunset = sun_times(date(2024, 6, 21), CONFIG)
    assert abs(sunset - timedelta(minutes=18) - times.candle_lighting) <= timedelta(seconds=30)


def test_shabbat_times_roll_over_after_candle_lighting():
    times = shabbat_times(datetime(2024, 6, 21, 23, 0, tzinfo=NY), CONFIG)
    assert times.shabbat_date == date(2024, 6, 29)
    times = shabbat_times(datetime(2024, 6, 21, 9, 0, tzinfo=NY), CONFIG)
    assert times.shabbat_date == date(2024, 6, 22)


def _fast(name, day, full):
    return Observance(name, name, day, 11, 9, True, full)


def test_fast_times():
    start, end = fast_times(_fast("Tisha B'Av", date(2024, 8, 13), True), CONFIG)
    assert start.date() == date(2024, 8, 12)
    assert end.date() == date(2024, 8, 13)

    start, end = fast_times(_fast("Fast of Tammuz (17th)", date(2024, 7, 23), False), CONFIG)
    assert start.date() == end.date() == date(2024, 7, 23)
    assert start.hour < 6
    assert end.hour >= 20


def test_fast_times_rejects_feast():
    feast = Observance("Purim", "פורים", date(2025, 3, 14), 6, 14, False, False)
    with pytest.raises(ValueError):
        fast_times(feast, CONFIG)


def test_format_simple_time():
    assert format_simple_time(_at(19, 5)) == "7:05 PM"
    assert format_simple_time(_at(0, 30)) == "12:30 AM"
    assert format_simple_time(_at(19, 5), fmt="24") == "19:05"
