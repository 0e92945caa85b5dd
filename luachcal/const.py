# luachcal/const.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

# Fallback location when none (or an unusable one) is configured: New York, NY
DEFAULT_CITY = "New York"
DEFAULT_LATITUDE = 40.7128
DEFAULT_LONGITUDE = -74.0060
DEFAULT_TIME_ZONE = "America/New_York"

DEFAULT_CANDLELIGHT_OFFSET = 18
DEFAULT_HAVDALAH_OFFSET = 42
DEFAULT_ALOS_OFFSET = 72

# Config keys (same names the integration's config entry always used)
CONF_LATITUDE = "latitude"
CONF_LONGITUDE = "longitude"
CONF_ELEVATION = "elevation"
CONF_TZNAME = "tzname"
CONF_CITY = "city"
CONF_DIASPORA = "diaspora"
CONF_CANDLELIGHT_OFFSET = "candlelighting_offset"
CONF_HAVDALAH_OFFSET = "havdalah_offset"
CONF_ALOS_OFFSET = "alos_offset"

# Molad times are announced in Jerusalem; instants are built at Israel Standard Time.
MOLAD_TZ = timezone(timedelta(hours=2), "IST")

# The 14th Daf Yomi cycle began on 7 Teves 5780 = January 5, 2020.
DAF_YOMI_EPOCH = date(2020, 1, 5)
DAF_YOMI_EPOCH_CYCLE = 14

# Reference new moon and mean synodic month for the phase estimate.
MOON_REFERENCE_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)
SYNODIC_MONTH_DAYS = 29.53058867

SENTINEL_MOLAD_ERROR = "Error calculating molad"
SENTINEL_HOLIDAY_ERROR = "Error calculating holidays"
NO_UPCOMING_HOLIDAY = "No upcoming holidays"
NO_UPCOMING_HOLIDAY_HEBREW = "אין חגים קרובים"
