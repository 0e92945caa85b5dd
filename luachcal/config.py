# luachcal/config.py
"""Runtime configuration: where we are, which time zone, which offsets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import voluptuous as vol
from timezonefinder import TimezoneFinder
from zmanim.util.geo_location import GeoLocation

from .const import (
    CONF_ALOS_OFFSET,
    CONF_CANDLELIGHT_OFFSET,
    CONF_CITY,
    CONF_DIASPORA,
    CONF_ELEVATION,
    CONF_HAVDALAH_OFFSET,
    CONF_LATITUDE,
    CONF_LONGITUDE,
    CONF_TZNAME,
    DEFAULT_ALOS_OFFSET,
    DEFAULT_CANDLELIGHT_OFFSET,
    DEFAULT_CITY,
    DEFAULT_HAVDALAH_OFFSET,
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_TIME_ZONE,
)
from .exceptions import InvalidConfiguration
from .molad import TRADITIONAL_ANCHOR, MoladAnchor

_LOGGER = logging.getLogger(__name__)


def get_tzname(lat: float, lon: float) -> str:
    """Look up the IANA zone for a coordinate pair ("UTC" if nothing matches)."""
    return TimezoneFinder().timezone_at(lng=lon, lat=lat) or "UTC"


def _time_zone(value: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise vol.Invalid(f"unknown time zone {value!r}") from err
    return value


# Coordinates are checked on their own so a bad pair can fall back to New York.
COORDINATES_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_LATITUDE): vol.All(vol.Coerce(float), vol.Range(min=-90.0, max=90.0)),
        vol.Required(CONF_LONGITUDE): vol.All(vol.Coerce(float), vol.Range(min=-180.0, max=180.0)),
    },
    extra=vol.ALLOW_EXTRA,
)

OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_TZNAME): vol.All(str, _time_zone),
        vol.Optional(CONF_CITY, default=""): str,
        vol.Optional(CONF_ELEVATION, default=0.0): vol.Coerce(float),
        vol.Optional(CONF_DIASPORA, default=True): vol.Boolean(),
        vol.Optional(CONF_CANDLELIGHT_OFFSET, default=DEFAULT_CANDLELIGHT_OFFSET): vol.Coerce(int),
        vol.Optional(CONF_HAVDALAH_OFFSET, default=DEFAULT_HAVDALAH_OFFSET): vol.Coerce(int),
        vol.Optional(CONF_ALOS_OFFSET, default=DEFAULT_ALOS_OFFSET): vol.Coerce(int),
    },
    extra=vol.ALLOW_EXTRA,
)


@dataclass(frozen=True)
class LuachConfig:
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    time_zone: str = DEFAULT_TIME_ZONE
    elevation: float = 0.0
    city: str = DEFAULT_CITY
    diaspora: bool = True
    candle_offset: int = DEFAULT_CANDLELIGHT_OFFSET
    havdalah_offset: int = DEFAULT_HAVDALAH_OFFSET
    alos_offset: int = DEFAULT_ALOS_OFFSET
    molad_anchor: MoladAnchor = field(default=TRADITIONAL_ANCHOR)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any] | None) -> "LuachConfig":
        """
        Build a config from a plain mapping using the integration's keys.

        - Keys set to None count as missing and take their defaults.
        - Missing/garbled coordinates fall back to New York.
        - A missing ``tzname`` is resolved from the coordinates.
        - Any other unusable value raises InvalidConfiguration.
        """
        cfg = {key: value for key, value in (cfg or {}).items() if value is not None}

        try:
            coords = COORDINATES_SCHEMA(cfg)
            lat, lon = coords[CONF_LATITUDE], coords[CONF_LONGITUDE]
            fallback = False
        except vol.Invalid as err:
            if CONF_LATITUDE in cfg or CONF_LONGITUDE in cfg:
                _LOGGER.warning(
                    "Unusable coordinates (%s, %s), falling back to %s: %s",
                    cfg.get(CONF_LATITUDE), cfg.get(CONF_LONGITUDE), DEFAULT_CITY, err,
                )
            lat, lon = DEFAULT_LATITUDE, DEFAULT_LONGITUDE
            fallback = True

        try:
            opts = OPTIONS_SCHEMA(cfg)
        except vol.Invalid as err:
            raise InvalidConfiguration(f"Invalid configuration: {err}") from err

        tzname = opts.get(CONF_TZNAME)
        if not tzname:
            try:
                tzname = get_tzname(lat, lon)
            except Exception:
                _LOGGER.warning("Timezone lookup failed, falling back to UTC")
                tzname = "UTC"

        return cls(
            latitude=lat,
            longitude=lon,
            time_zone=tzname,
            elevation=opts[CONF_ELEVATION],
            city=DEFAULT_CITY if fallback else opts[CONF_CITY].replace("Town of ", ""),
            diaspora=opts[CONF_DIASPORA],
            candle_offset=opts[CONF_CANDLELIGHT_OFFSET],
            havdalah_offset=opts[CONF_HAVDALAH_OFFSET],
            alos_offset=opts[CONF_ALOS_OFFSET],
        )


DEFAULT_CONFIG = LuachConfig()


def make_geo(config: LuachConfig) -> GeoLocation:
    return GeoLocation(
        name=config.city or "luachcal",
        latitude=config.latitude,
        longitude=config.longitude,
        time_zone=config.time_zone,
        elevation=config.elevation,
    )
