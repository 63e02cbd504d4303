from __future__ import annotations
import math
from datetime import date
from typing import Callable, Dict, Tuple

from .heat import saturation_vapor_pressure
from .parameters import CultureParams, HarvestParams, PondConfig, PondParams
from .solar import solar_position
from .weather import WeatherSample


def spirulina_default() -> PondConfig:
    """250 m × 17 m racetrack (~1 acre), 200 mm deep, no harvest."""
    return PondConfig()


def semi_continuous() -> PondConfig:
    """Hourly skimming back to 0.5 g/L whenever it is exceeded."""
    return PondConfig(
        culture=CultureParams(initial_density=0.3),
        harvest=HarvestParams(mode="semi-continuous", threshold=0.5),
    )


def batch() -> PondConfig:
    """Grow from 0.4 g/L, harvest down to 0.5 g/L whenever 1.0 g/L is reached."""
    return PondConfig(
        culture=CultureParams(initial_density=0.4),
        harvest=HarvestParams(mode="batch", threshold=1.0, target=0.5),
    )


def shallow_hot() -> PondConfig:
    """Thin culture in a warm climate; larger temperature swings."""
    return PondConfig(pond=PondParams(depth=0.1, initial_temperature=None))


SCENARIOS: Dict[str, Callable[[], PondConfig]] = {
    "default": spirulina_default,
    "semi-continuous": semi_continuous,
    "batch": batch,
    "shallow-hot": shallow_hot,
}


# ---------------------------------------------------------------
# Deterministic weather days
# ---------------------------------------------------------------
def _relative_humidity(T: float, T_dew: float) -> float:
    return min(100.0, 100.0 * saturation_vapor_pressure(T_dew) / saturation_vapor_pressure(T))


def clear_sky_day(lat: float = 33.4, lng: float = -112.0, day: date = date(2024, 6, 21),
                  T_mean: float = 27.0, T_amp: float = 6.0, T_dew: float = 12.0,
                  wind: float = 3.0, peak_ghi: float = 1000.0) -> Tuple[WeatherSample, ...]:
    """A cloudless day: sun from :func:`solar_position`, sinusoidal air temperature
    peaking at 15:00, 80 % of global radiation as direct beam."""
    hours = []
    for hour in range(24):
        elevation, azimuth = solar_position(lat, lng, day, hour)
        ghi = peak_ghi * math.sin(math.radians(elevation)) if elevation > 0.0 else 0.0
        T_air = T_mean + T_amp * math.cos(2.0 * math.pi * (hour - 15) / 24.0)
        hours.append(WeatherSample(
            temperature=T_air,
            relative_humidity=_relative_humidity(T_air, T_dew),
            dew_point=T_dew,
            cloud_cover=0.0,
            wind_speed=wind,
            precipitation=0.0,
            direct_radiation=0.8 * ghi,
            diffuse_radiation=0.2 * ghi,
            shortwave_radiation=ghi,
            soil_temperature=T_mean,
            solar_elevation=elevation,
            solar_azimuth=azimuth,
            hour=hour,
        ))
    return tuple(hours)


def constant_day(**overrides: float) -> Tuple[WeatherSample, ...]:
    """24 identical hours (steady lamp-like light, fixed air); for controlled runs."""
    values = dict(
        temperature=25.0, relative_humidity=55.0, dew_point=15.3, cloud_cover=0.0,
        wind_speed=2.0, precipitation=0.0, direct_radiation=300.0, diffuse_radiation=100.0,
        soil_temperature=25.0, solar_elevation=60.0,
    )
    values.update(overrides)
    return tuple(WeatherSample(hour=h, **values) for h in range(24))
