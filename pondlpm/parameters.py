"""
Dataclass containers for all physical and operational inputs.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, get_args

from .errors import ConfigurationError
from .kinetics import (
    GaussianSymmetric,
    LightModel,
    NutrientModel,
    NutrientReplete,
    Steele,
    TemperatureModel,
    light_model_from_dict,
    nutrient_model_from_dict,
    temperature_model_from_dict,
)
from .optics import AttenuationModel, TwoComponentAttenuation, attenuation_model_from_dict


def _positive(obj: Any, *names: str) -> None:
    for name in names:
        value = getattr(obj, name)
        if not value > 0.0:
            raise ConfigurationError(f"{name} must be positive, got {value!r}")


# accepted variant classes per culture slot
_VARIANTS = {
    "light": get_args(LightModel),
    "temperature": get_args(TemperatureModel),
    "nutrient": get_args(NutrientModel),
    "attenuation": get_args(AttenuationModel),
}


# ---------------------------------------------------------------
# Pond construction
# ---------------------------------------------------------------
@dataclass(frozen=True)
class PondParams:
    area_ha:      float = 0.425         # ha, reference W×L area
    aspect_ratio: float = 250.0 / 17.0  # L / W
    depth:        float = 0.2           # m
    berm_width:   float = 0.8           # m, centre divider
    initial_temperature: float | None = 25.0  # °C; None → first hour's air temperature

    def __post_init__(self):  # type: ignore[override]
        _positive(self, "area_ha", "aspect_ratio", "depth")
        if self.berm_width < 0.0:
            raise ConfigurationError("berm_width cannot be negative")


# ---------------------------------------------------------------
# Culture: kinetics and optics
# ---------------------------------------------------------------
@dataclass(frozen=True)
class CultureParams:
    mu_max:          float = 4.0    # day⁻¹
    death_rate:      float = 0.05   # day⁻¹
    initial_density: float = 0.3    # g/L
    light:       Any = field(default_factory=lambda: Steele(Iopt=200.0))
    temperature: Any = field(default_factory=lambda: GaussianSymmetric(Topt=30.0, alpha=0.03))
    nutrient:    Any = field(default_factory=NutrientReplete)
    attenuation: Any = field(default_factory=lambda: TwoComponentAttenuation(epsilon=0.15, kb=0.2))

    def __post_init__(self):  # type: ignore[override]
        _positive(self, "mu_max", "initial_density")
        if self.death_rate < 0.0:
            raise ConfigurationError("death_rate cannot be negative")
        for name, family in _VARIANTS.items():
            model = getattr(self, name)
            if not isinstance(model, family):
                raise ConfigurationError(
                    f"{name} must be one of {[cls.tag for cls in family]}, got {model!r}")

    # convenience accessors for the common single-optimum setup
    @property
    def Iopt(self) -> float | None:
        return getattr(self.light, "Iopt", None)

    @property
    def Topt(self) -> float | None:
        return getattr(self.temperature, "Topt", None)

    @property
    def alpha(self) -> float | None:
        return getattr(self.temperature, "alpha", None)

    @property
    def epsilon(self) -> float:
        return self.attenuation.epsilon

    @property
    def kb(self) -> float:
        return getattr(self.attenuation, "kb", 0.0)


# ---------------------------------------------------------------
# Harvest policy
# ---------------------------------------------------------------
class HarvestMode(str, Enum):
    NONE = "none"
    SEMI_CONTINUOUS = "semi-continuous"
    BATCH = "batch"


@dataclass(frozen=True)
class HarvestParams:
    mode:      HarvestMode = HarvestMode.NONE
    threshold: float = 2.0    # g/L; semi-continuous ceiling / batch trigger
    target:    float = 0.3    # g/L; batch restart density
    return_fraction: float = 0.8  # share of harvested water recycled

    def __post_init__(self):  # type: ignore[override]
        try:
            object.__setattr__(self, "mode", HarvestMode(self.mode))
        except ValueError:
            raise ConfigurationError(
                f"harvest mode must be one of {[m.value for m in HarvestMode]}, got {self.mode!r}"
            ) from None
        if not (0.0 <= self.return_fraction < 1.0):
            raise ConfigurationError("return_fraction must be in [0, 1)")
        if self.mode is HarvestMode.NONE:
            return
        _positive(self, "threshold")
        if self.mode is HarvestMode.BATCH:
            _positive(self, "target")
            if self.target >= self.threshold:
                raise ConfigurationError(
                    f"batch harvest target ({self.target}) must be below threshold ({self.threshold})"
                )


# ---------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------
@dataclass(frozen=True)
class PondConfig:
    pond:    PondParams = field(default_factory=PondParams)
    culture: CultureParams = field(default_factory=CultureParams)
    harvest: HarvestParams = field(default_factory=HarvestParams)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PondConfig":
        """Build from ``{"pond": {...}, "culture": {...}, "harvest": {...}}``.

        Model variants inside ``culture`` are given as ``{"model": tag, ...}``.
        """
        unknown = set(data) - {"pond", "culture", "harvest"}
        if unknown:
            raise ConfigurationError(f"unknown configuration sections {sorted(unknown)}")
        culture = dict(data.get("culture", {}))
        builders = {
            "light": light_model_from_dict,
            "temperature": temperature_model_from_dict,
            "nutrient": nutrient_model_from_dict,
            "attenuation": attenuation_model_from_dict,
        }
        for key, build in builders.items():
            if isinstance(culture.get(key), Mapping):
                culture[key] = build(culture[key])
        try:
            return cls(
                pond=PondParams(**data.get("pond", {})),
                culture=CultureParams(**culture),
                harvest=HarvestParams(**data.get("harvest", {})),
            )
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc
