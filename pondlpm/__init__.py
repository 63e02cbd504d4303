"""Open-pond algae cultivation lumped-parameter model."""
from .errors import ConfigurationError, NumericalError, PondError, WeatherUnavailableError
from .parameters import PondParams, CultureParams, HarvestParams, HarvestMode, PondConfig
from .model import PondModel, Timestep, simulate
from .weather import WeatherSample, WeatherSource

__all__ = [
    "PondParams",
    "CultureParams",
    "HarvestParams",
    "HarvestMode",
    "PondConfig",
    "PondModel",
    "Timestep",
    "simulate",
    "WeatherSample",
    "WeatherSource",
    "PondError",
    "ConfigurationError",
    "NumericalError",
    "WeatherUnavailableError",
]
__version__ = "0.1.0"
