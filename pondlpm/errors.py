"""Exception types raised by :mod:`pondlpm`."""
from __future__ import annotations


class PondError(Exception):
    """Base class for every error raised by the pond engine."""


class ConfigurationError(PondError, ValueError):
    """Out-of-range or mutually inconsistent run parameters.

    Raised while building parameter objects or on entry to a run, never
    once stepping has started.
    """


class NumericalError(PondError, ArithmeticError):
    """A computed quantity became non-finite during a run.

    The run is aborted; ``day``/``hour`` locate the failing step and
    ``quantity`` names the offending value.
    """

    def __init__(self, quantity: str, value: float,
                 day: int | None = None, hour: int | None = None) -> None:
        self.quantity = quantity
        self.value = value
        self.day = day
        self.hour = hour
        where = ""
        if day is not None:
            where = f" on day {day}, hour {hour}"
        super().__init__(f"{quantity} became non-finite ({value!r}){where}")

    def at(self, day: int, hour: int) -> "NumericalError":
        """Return a copy of this error located at ``day``/``hour``."""
        return NumericalError(self.quantity, self.value, day=day, hour=hour)


class WeatherUnavailableError(PondError, LookupError):
    """No usable weather could be resolved for the requested run."""


__all__ = [
    "PondError",
    "ConfigurationError",
    "NumericalError",
    "WeatherUnavailableError",
]
