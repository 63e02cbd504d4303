"""
Surface optics and light transport through the culture.

Direct and diffuse radiation follow separate paths: Fresnel loss at the
air/water interface (angle dependent for the beam, a fixed 60° equivalent
for sky diffuse), conversion to PAR, then a Beer–Lambert average over the
refracted optical path.  The two averages are summed into the PAR the
culture actually sees.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Union

from scipy.special import exprel

from .constants import (
    I_MIN_PAR,
    LITERS_PER_M3,
    N_AIR,
    N_WATER,
    PAR_COMBINED,
    THETA_DIFFUSE_DEG,
    T_NORMAL,
)
from .errors import ConfigurationError, NumericalError

__all__ = [
    "TwoComponentAttenuation",
    "BiomassAttenuation",
    "ParResult",
    "fresnel_transmission",
    "refracted_angle",
    "effective_depth",
    "attenuation_coefficient",
    "beer_lambert_average",
    "lighted_depth_fraction",
    "compute_par",
    "attenuation_model_from_dict",
]


# ---------------------------------------------------------------
# Attenuation variants
# ---------------------------------------------------------------
@dataclass(frozen=True)
class TwoComponentAttenuation:
    """K = ε·X + k_b: biomass plus background (water, dissolved matter)."""
    tag: ClassVar[str] = "two-component"
    epsilon: float = 0.15   # m² g⁻¹
    kb: float = 0.2         # m⁻¹

    def __post_init__(self):  # type: ignore[override]
        if not self.epsilon > 0.0:
            raise ConfigurationError("epsilon must be positive")
        if not self.kb >= 0.0:
            raise ConfigurationError("kb cannot be negative")


@dataclass(frozen=True)
class BiomassAttenuation:
    """K = ε·X: clear water, biomass-only absorption."""
    tag: ClassVar[str] = "beer-lambert"
    epsilon: float = 0.15

    def __post_init__(self):  # type: ignore[override]
        if not self.epsilon > 0.0:
            raise ConfigurationError("epsilon must be positive")


AttenuationModel = Union[TwoComponentAttenuation, BiomassAttenuation]


def attenuation_model_from_dict(record: Mapping[str, Any]) -> AttenuationModel:
    params = dict(record)
    tag = params.pop("model", None)
    for cls in (TwoComponentAttenuation, BiomassAttenuation):
        if cls.tag == tag:
            try:
                return cls(**params)
            except TypeError as exc:
                raise ConfigurationError(f"bad parameters for attenuation model {tag!r}: {exc}") from exc
    raise ConfigurationError(f"unknown attenuation model {tag!r}")


def attenuation_coefficient(X: float, model: AttenuationModel) -> float:
    """Bulk attenuation K (m⁻¹) for biomass ``X`` in g/L (= ε·X·1000 [+ k_b])."""
    if isinstance(model, TwoComponentAttenuation):
        K = model.epsilon * (X * LITERS_PER_M3) + model.kb
    elif isinstance(model, BiomassAttenuation):
        K = model.epsilon * (X * LITERS_PER_M3)
    else:
        raise TypeError(f"unsupported attenuation model {model!r}")
    if not math.isfinite(K):
        raise NumericalError("attenuation_coefficient", K)
    return K


# ---------------------------------------------------------------
# Interface
# ---------------------------------------------------------------
def fresnel_transmission(theta_i_deg: float) -> float:
    """Transmitted fraction of unpolarised light, incidence from the normal (deg)."""
    if theta_i_deg <= 0.0:
        return T_NORMAL
    if theta_i_deg >= 90.0:
        return 0.0
    theta_i = math.radians(theta_i_deg)
    sin_r = (N_AIR / N_WATER) * math.sin(theta_i)
    cos_i = math.cos(theta_i)
    cos_r = math.sqrt(1.0 - sin_r * sin_r)
    Rs = ((N_AIR * cos_i - N_WATER * cos_r) / (N_AIR * cos_i + N_WATER * cos_r)) ** 2
    Rp = ((N_AIR * cos_r - N_WATER * cos_i) / (N_AIR * cos_r + N_WATER * cos_i)) ** 2
    return 1.0 - 0.5 * (Rs + Rp)


def refracted_angle(theta_i_deg: float) -> float:
    """Snell's law, air → water (deg)."""
    if theta_i_deg <= 0.0:
        return 0.0
    if theta_i_deg >= 90.0:
        theta_i_deg = 90.0
    return math.degrees(math.asin((N_AIR / N_WATER) * math.sin(math.radians(theta_i_deg))))


def effective_depth(depth: float, theta_i_deg: float) -> float:
    """Slant path through a column of ``depth`` after refraction."""
    return depth / math.cos(math.radians(refracted_angle(theta_i_deg)))


def beer_lambert_average(I0: float, K: float, path: float) -> float:
    """Mean intensity over ``path``: I0·(1 − e^{−KL})/(KL), → I0 as KL → 0."""
    if I0 <= 0.0:
        return 0.0
    # exprel(-x) = (1 - e^{-x})/x, evaluated without cancellation near 0
    return I0 * float(exprel(-K * path))


def lighted_depth_fraction(I_surface: float, K: float, depth: float) -> float:
    """Fraction of the column above the compensation depth (reporting only)."""
    if I_surface <= I_MIN_PAR:
        return 0.0
    if K <= 0.0:
        return 1.0
    return min(1.0, math.log(I_surface / I_MIN_PAR) / K / depth)


# Sky diffuse treated as a single 60° beam
_T_DIFFUSE = fresnel_transmission(THETA_DIFFUSE_DEG)


@dataclass(frozen=True)
class ParResult:
    par_direct_surface: float    # µmol m⁻² s⁻¹ after Fresnel loss
    par_diffuse_surface: float
    par_avg_culture: float       # depth-averaged direct + diffuse
    fresnel_direct: float
    lighted_fraction: float
    K: float                     # m⁻¹

    @property
    def par_surface(self) -> float:
        return self.par_direct_surface + self.par_diffuse_surface


def compute_par(direct_radiation: float, diffuse_radiation: float, solar_elevation: float,
                X: float, depth: float, attenuation: AttenuationModel) -> ParResult:
    """PAR at the surface and averaged over the culture for one hour."""
    theta = max(0.0, 90.0 - solar_elevation)
    T_direct = fresnel_transmission(theta) if solar_elevation > 0.0 else 0.0
    K = attenuation_coefficient(X, attenuation)

    I_direct = max(0.0, direct_radiation) * PAR_COMBINED * T_direct
    I_diffuse = max(0.0, diffuse_radiation) * PAR_COMBINED * _T_DIFFUSE
    avg = (beer_lambert_average(I_direct, K, effective_depth(depth, theta))
           + beer_lambert_average(I_diffuse, K, effective_depth(depth, THETA_DIFFUSE_DEG)))
    if not math.isfinite(avg):
        raise NumericalError("par_avg_culture", avg)

    return ParResult(
        par_direct_surface=I_direct,
        par_diffuse_surface=I_diffuse,
        par_avg_culture=avg,
        fresnel_direct=T_direct,
        lighted_fraction=lighted_depth_fraction(I_direct + I_diffuse, K, depth),
        K=K,
    )
