"""Approximate solar position (NOAA / Meeus low-precision formulas)."""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Tuple

_J2000 = 2451545.0
_UNIX_EPOCH_JD = 2440587.5


def julian_day(day: date, utc_hour: float) -> float:
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc).timestamp()
    return (midnight + utc_hour * 3600.0) / 86400.0 + _UNIX_EPOCH_JD


def solar_position(lat: float, lng: float, day: date, hour: int) -> Tuple[float, float]:
    """Return ``(elevation, azimuth)`` in degrees at the middle of local ``hour``.

    Local time is approximated as solar time, i.e. UTC offset = lng/15.
    Azimuth is measured clockwise from north.
    """
    n = julian_day(day, hour + 0.5 - lng / 15.0) - _J2000

    L = (280.46 + 0.9856474 * n) % 360.0
    g = math.radians((357.528 + 0.9856003 * n) % 360.0)
    lam = math.radians(L + 1.915 * math.sin(g) + 0.02 * math.sin(2.0 * g))

    eps = math.radians(23.439 - 0.0000004 * n)
    dec = math.asin(math.sin(eps) * math.sin(lam))
    ra = math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam))

    gmst = (280.46061837 + 360.98564736629 * n) % 360.0
    ha = (gmst + lng - math.degrees(ra)) % 360.0
    if ha > 180.0:
        ha -= 360.0
    ha = math.radians(ha)

    phi = math.radians(lat)
    sin_el = math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(ha)
    el = math.asin(sin_el)

    cos_az = (math.sin(dec) - math.sin(phi) * sin_el) / (math.cos(phi) * math.cos(el))
    az = math.degrees(math.acos(max(-1.0, min(1.0, cos_az))))
    if math.sin(ha) > 0.0:
        az = 360.0 - az
    return math.degrees(el), az
