from __future__ import annotations

import pytest

from luachcal import config as config_mod
from luachcal.config import LuachConfig, get_tzname, make_geo
from luachcal.const import DEFAULT_LATITUDE, DEFAULT_LONGITUDE
from luachcal.exceptions import InvalidConfiguration
from luachcal.molad import TRADITIONAL_ANCHOR


def test_defaults():
    cfg = LuachConfig()
    assert (cfg.latitude, cfg.longitude) == (DEFAULT_LATITUDE, DEFAULT_LONGITUDE)
    assert cfg.time_zone == "America/New_York"
    assert (cfg.candle_offset, cfg.havdalah_offset, cfg.alos_offset) == (18, 42, 72)
    assert cfg.diaspora
    assert cfg.molad_anchor == TRADITIONAL_ANCHOR
    assert cfg.tz.key == "America/New_York"


def test_get_tzname():
    assert get_tzname(40.7128, -74.0060) == "America/New_York"
    assert get_tzname(31.7683, 35.2137) == "Asia/Jerusalem"


def test_from_mapping():
    cfg = LuachConfig.from_mapping(
        {
            "latitude": 31.7683,
            "longitude": 35.2137,
            "tzname": "Asia/Jerusalem",
            "city": "Town of Jerusalem",
            "diaspora": False,
            "candlelighting_offset": 40,
            "havdalah_offset": 50,
        }
    )
    assert cfg.latitude == pytest.approx(31.7683)
    assert cfg.city == "Jerusalem"
    assert not cfg.diaspora
    assert (cfg.candle_offset, cfg.havdalah_offset) == (40, 50)


def test_from_mapping_resolves_time_zone():
    cfg = LuachConfig.from_mapping({"latitude": 31.7683, "longitude": 35.2137})
    assert cfg.time_zone == "Asia/Jerusalem"


def test_invalid_coordinates_fall_back(caplog):
    cfg = LuachConfig.from_mapping({"latitude": "north", "longitude": 200, "tzname": "UTC"})
    assert (cfg.latitude, cfg.longitude) == (DEFAULT_LATITUDE, DEFAULT_LONGITUDE)
    assert cfg.city == "New York"
    assert "falling back" in caplog.text


def test_out_of_range_and_nan_coordinates_fall_back():
    for lat, lon in [(95, 10), (10, -181), (float("nan"), 10)]:
        cfg = LuachConfig.from_mapping({"latitude": lat, "longitude": lon, "tzname": "UTC"})
        assert (cfg.latitude, cfg.longitude) == (DEFAULT_LATITUDE, DEFAULT_LONGITUDE)


def test_string_coordinates_are_coerced():
    cfg = LuachConfig.from_mapping({"latitude": "31.7683", "longitude": "35.2137", "tzname": "Asia/Jerusalem"})
    assert cfg.latitude == pytest.approx(31.7683)
    assert cfg.longitude == pytest.approx(35.2137)


def test_time_zone_lookup_failure_falls_back_to_utc(monkeypatch, caplog):
    def boom(lat, lon):
        raise RuntimeError("no data")

    monkeypatch.setattr(config_mod, "get_tzname", boom)
    cfg = LuachConfig.from_mapping({"latitude": 40.7, "longitude": -74.0})
    assert cfg.time_zone == "UTC"
    assert "falling back to UTC" in caplog.text


def test_make_geo():
    geo = make_geo(LuachConfig())
    assert geo.latitude == pytest.approx(DEFAULT_LATITUDE)
    assert geo.longitude == pytest.approx(DEFAULT_LONGITUDE)


JERUSALEM = {"latitude": 31.7683, "longitude": 35.2137, "tzname": "Asia/Jerusalem"}


@pytest.mark.parametrize(
    "value, expected",
    [("false", False), ("no", False), ("0", False), ("true", True), ("yes", True), (False, False)],
)
def test_diaspora_flag_is_parsed(value, expected):
    cfg = LuachConfig.from_mapping({**JERUSALEM, "diaspora": value})
    assert cfg.diaspora is expected


def test_none_values_take_defaults():
    cfg = LuachConfig.from_mapping(
        {**JERUSALEM, "candlelighting_offset": None, "havdalah_offset": None, "diaspora": None, "city": None}
    )
    assert (cfg.candle_offset, cfg.havdalah_offset, cfg.alos_offset) == (18, 42, 72)
    assert cfg.diaspora
    assert cfg.city == ""


def test_offsets_are_coerced():
    cfg = LuachConfig.from_mapping({**JERUSALEM, "candlelighting_offset": "40", "alos_offset": "90"})
    assert (cfg.candle_offset, cfg.alos_offset) == (40, 90)


@pytest.mark.parametrize(
    "override",
    [
        {"tzname": "Not/AZone"},
        {"candlelighting_offset": "soon"},
        {"diaspora": "perhaps"},
        {"elevation": "high"},
    ],
)
def test_unusable_values_are_rejected(override):
    with pytest.raises(InvalidConfiguration):
        LuachConfig.from_mapping({**JERUSALEM, **override})


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        LuachConfig.from_mapping({**JERUSALEM, "tzname": "Not/AZone"})
