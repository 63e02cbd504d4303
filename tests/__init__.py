"""Open-pond lumped-parameter model test-suite."""
from . import (
    test_pondlpm_parameters,
    test_pondlpm_kinetics,
    test_pondlpm_optics,
    test_pondlpm_heat,
    test_pondlpm_water,
    test_pondlpm_weather,
    test_pondlpm_model,
)

__all__ = [
    "test_pondlpm_parameters",
    "test_pondlpm_kinetics",
    "test_pondlpm_optics",
    "test_pondlpm_heat",
    "test_pondlpm_water",
    "test_pondlpm_weather",
    "test_pondlpm_model",
]

__version__ = "0.0.1"
