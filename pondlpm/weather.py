"""
Hourly weather input.

The engine never fetches weather; it is handed a :class:`WeatherSource`
holding whole days of 24 hourly :class:`WeatherSample` records, either a
single repeating day or a multi-day sequence.  Runs longer than the
sequence wrap around to its first day.

``load_season_weather`` reads the season cache files produced by the
weather download script (camelCase hourly records grouped by date plus an
averaged ``profile`` day).
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple

import numpy as np

from .constants import HOURS_PER_DAY
from .errors import WeatherUnavailableError

__all__ = [
    "WeatherSample",
    "WeatherSource",
    "sample_from_dict",
    "resolve_weather",
    "typical_day",
    "load_season_weather",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherSample:
    temperature: float          # °C, air at 2 m
    relative_humidity: float    # %
    dew_point: float            # °C
    cloud_cover: float          # %
    wind_speed: float           # m/s at 10 m
    precipitation: float        # mm over the hour
    direct_radiation: float     # W/m², beam on horizontal
    diffuse_radiation: float    # W/m²
    soil_temperature: float     # °C
    solar_elevation: float      # deg above horizon
    solar_azimuth: float = 180.0         # deg from north
    shortwave_radiation: float | None = None  # W/m², GHI
    wind_speed_2m: float | None = None   # m/s; derived from 10 m when None
    wind_direction: float = 0.0          # deg
    hour: int = 0

    @property
    def global_radiation(self) -> float:
        if self.shortwave_radiation is not None:
            return self.shortwave_radiation
        return self.direct_radiation + self.diffuse_radiation


# camelCase keys used by the cache files
_CAMEL = {
    "temperature": "temperature",
    "relativeHumidity": "relative_humidity",
    "dewPoint": "dew_point",
    "cloudCover": "cloud_cover",
    "windSpeed": "wind_speed",
    "windSpeed2m": "wind_speed_2m",
    "windDirection": "wind_direction",
    "precipitation": "precipitation",
    "directRadiation": "direct_radiation",
    "diffuseRadiation": "diffuse_radiation",
    "shortwaveRadiation": "shortwave_radiation",
    "soilTemperature": "soil_temperature",
    "solarElevation": "solar_elevation",
    "solarAzimuth": "solar_azimuth",
    "hour": "hour",
}
_FIELDS = {f.name for f in fields(WeatherSample)}


def sample_from_dict(record: Mapping[str, Any]) -> WeatherSample:
    """Build a sample from a snake_case or camelCase mapping; unknown keys are ignored."""
    kwargs: Dict[str, Any] = {}
    for key, value in record.items():
        name = _CAMEL.get(key, key)
        if name in _FIELDS and value is not None:
            kwargs[name] = int(value) if name == "hour" else float(value)
    try:
        return WeatherSample(**kwargs)
    except TypeError as exc:
        raise WeatherUnavailableError(f"incomplete weather record: {exc}") from exc


class WeatherSource:
    """Whole days of hourly weather, indexed modulo the number of days."""

    def __init__(self, days: Iterable[Sequence[WeatherSample]]) -> None:
        resolved = []
        for i, day in enumerate(days):
            hours = [h if isinstance(h, WeatherSample) else sample_from_dict(h) for h in day]
            if len(hours) != HOURS_PER_DAY:
                raise WeatherUnavailableError(
                    f"weather day {i} has {len(hours)} hourly samples, expected {HOURS_PER_DAY}")
            resolved.append(tuple(sorted(hours, key=lambda h: h.hour)))
        if not resolved:
            raise WeatherUnavailableError("weather source holds no days")
        self._days: Tuple[Tuple[WeatherSample, ...], ...] = tuple(resolved)

    @classmethod
    def from_profile(cls, hours: Sequence[WeatherSample]) -> "WeatherSource":
        """A single typical day repeated for the whole run."""
        return cls([hours])

    @classmethod
    def from_days(cls, days: Sequence[Sequence[WeatherSample]]) -> "WeatherSource":
        return cls(days)

    def __len__(self) -> int:
        return len(self._days)

    @property
    def days(self) -> Tuple[Tuple[WeatherSample, ...], ...]:
        return self._days

    def sample(self, day_index: int, hour: int) -> WeatherSample:
        return self._days[day_index % len(self._days)][hour % HOURS_PER_DAY]


def resolve_weather(weather: Any) -> WeatherSource:
    """Accept a WeatherSource, a list of days, or a single 24-hour day."""
    if isinstance(weather, WeatherSource):
        return weather
    if weather is None:
        raise WeatherUnavailableError("no weather supplied")
    items = list(weather)
    if not items:
        raise WeatherUnavailableError("no weather supplied")
    if isinstance(items[0], (WeatherSample, Mapping)):
        return WeatherSource.from_profile(items)
    return WeatherSource.from_days(items)


def _circular_mean(degrees: np.ndarray) -> float:
    rad = np.radians(degrees)
    return float(np.degrees(np.arctan2(np.sin(rad).mean(), np.cos(rad).mean())) % 360.0)


def typical_day(days: Sequence[Sequence[WeatherSample]]) -> Tuple[WeatherSample, ...]:
    """Average several days hour by hour into one typical day.

    Directions (wind, solar azimuth) use circular means.
    """
    source = WeatherSource(days)
    profile = []
    for hour in range(HOURS_PER_DAY):
        samples = [day[hour] for day in source.days]

        def mean(name: str) -> float:
            return float(np.mean([getattr(s, name) for s in samples]))

        u2 = [s.wind_speed_2m for s in samples]
        sw = [s.shortwave_radiation for s in samples]
        profile.append(replace(
            samples[0],
            temperature=mean("temperature"),
            relative_humidity=mean("relative_humidity"),
            dew_point=mean("dew_point"),
            cloud_cover=mean("cloud_cover"),
            wind_speed=mean("wind_speed"),
            precipitation=mean("precipitation"),
            direct_radiation=mean("direct_radiation"),
            diffuse_radiation=mean("diffuse_radiation"),
            soil_temperature=mean("soil_temperature"),
            solar_elevation=mean("solar_elevation"),
            solar_azimuth=_circular_mean(np.array([s.solar_azimuth for s in samples])),
            wind_direction=_circular_mean(np.array([s.wind_direction for s in samples])),
            wind_speed_2m=None if None in u2 else float(np.mean(u2)),
            shortwave_radiation=None if None in sw else float(np.mean(sw)),
            hour=hour,
        ))
    return tuple(profile)


def load_season_weather(path: str | Path, use_profile: bool = False) -> WeatherSource:
    """Read a season cache file.

    By default the raw day sequence drives the run; ``use_profile`` selects
    the averaged typical day instead.
    """
    path = Path(path)
    if not path.exists():
        raise WeatherUnavailableError(f"weather file '{path}' not found")
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    if use_profile:
        hours = (data.get("profile") or {}).get("hours")
        if not hours:
            raise WeatherUnavailableError(f"'{path}' has no profile day")
        return WeatherSource.from_profile([sample_from_dict(h) for h in hours])

    raw = data.get("raw")
    if not raw:
        raise WeatherUnavailableError(f"'{path}' has no raw day records")
    logger.info("loaded %d weather days from %s (%s)", len(raw), path, data.get("location", "?"))
    return WeatherSource.from_days([[sample_from_dict(h) for h in day["hours"]] for day in raw])
