"""
Lumped thermal energy balance of the pond.

All fluxes are W m⁻² of pond surface, positive in the direction named
(``q_evap`` is a loss, ``q_solar`` a gain).  The pond is one well-mixed
thermal mass, so

    dT/dt = q_net / (ρ·Cp·depth)

with q_net = q_solar + q_longwave_in − q_longwave_out − q_evap
             − q_convection − q_conduction − q_biomass.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Dict

from .constants import (
    A_WIND,
    B_WIND,
    BOWEN_CONSTANT,
    CP_WATER,
    D_GROUND,
    EPSILON_WATER,
    H_COMBUSTION,
    H_EVAP,
    K_GROUND,
    KELVIN,
    MCADAMS_A,
    MCADAMS_B,
    RHO_WATER,
    SECONDS_PER_DAY,
    SIGMA,
    THETA_DIFFUSE_DEG,
    WIND_10_TO_2,
)
from .errors import NumericalError
from .optics import fresnel_transmission

__all__ = [
    "HeatFluxes",
    "wind_speed_2m",
    "saturation_vapor_pressure",
    "vapor_pressure",
    "q_solar",
    "q_longwave_in",
    "q_longwave_out",
    "q_evaporation",
    "q_convection",
    "q_conduction",
    "q_biomass",
    "compute_heat_balance",
]

_T_DIFFUSE = fresnel_transmission(THETA_DIFFUSE_DEG)
_MJ_PER_DAY_TO_W = 1.0e6 / SECONDS_PER_DAY


def wind_speed_2m(u10: float) -> float:
    """Log-profile reduction of 10 m wind to 2 m over open water."""
    return u10 * WIND_10_TO_2


def saturation_vapor_pressure(T: float) -> float:
    """Magnus formula, kPa."""
    return 0.6108 * math.exp(17.27 * T / (T + 237.3))


def vapor_pressure(T_dew: float) -> float:
    """Actual vapour pressure from dew point, kPa."""
    return saturation_vapor_pressure(T_dew)


# ---------------------------------------------------------------
# Individual terms
# ---------------------------------------------------------------
def q_solar(direct: float, diffuse: float, solar_elevation: float) -> float:
    """Shortwave absorbed after Fresnel reflection at the surface."""
    theta = max(0.0, 90.0 - solar_elevation)
    T_direct = fresnel_transmission(theta) if solar_elevation > 0.0 else 0.0
    return max(0.0, direct) * T_direct + max(0.0, diffuse) * _T_DIFFUSE


def q_longwave_in(T_air: float, T_dew: float, cloud_fraction: float) -> float:
    """Atmospheric downwelling, Brutsaert (1975) emissivity with cloud correction."""
    T_K = T_air + KELVIN
    # 1.24·(e_a[hPa]/T)^(1/7) rewritten for e_a in kPa
    eps_atm = 1.768 * (vapor_pressure(T_dew) / T_K) ** (1.0 / 7.0)
    C = min(1.0, max(0.0, cloud_fraction))
    return eps_atm * SIGMA * T_K ** 4 * (1.0 + 0.2 * C * C)


def q_longwave_out(T_pond: float) -> float:
    return EPSILON_WATER * SIGMA * (T_pond + KELVIN) ** 4


def q_evaporation(T_pond: float, e_a: float, u2: float) -> float:
    """Penman-type evaporative loss driven by the vapour-pressure deficit."""
    vpd = max(0.0, saturation_vapor_pressure(T_pond) - e_a)
    return H_EVAP * vpd * (A_WIND + B_WIND * u2) * _MJ_PER_DAY_TO_W


def q_convection(T_pond: float, T_air: float, e_s_pond: float, e_a: float,
                 q_evap: float, u2: float) -> float:
    """Sensible exchange with the air via the Bowen ratio.

    Falls back to a McAdams wind function when the vapour-pressure
    difference is too small for the ratio to be defined.
    """
    vpd = e_s_pond - e_a
    if abs(vpd) < 1.0e-3:
        return (MCADAMS_A + MCADAMS_B * u2) * (T_pond - T_air)
    return BOWEN_CONSTANT * (T_pond - T_air) / (vpd * 1000.0) * q_evap


def q_conduction(T_pond: float, T_soil: float, area_surface: float, area_soil: float) -> float:
    """Conduction into the ground through the floor and side walls."""
    return K_GROUND * (T_pond - T_soil) / D_GROUND * (area_soil / area_surface)


def q_biomass(X: float, mu_net: float, depth: float) -> float:
    """Energy stored in (or released from) biomass, signed with ``mu_net``.

    X in g/L (= kg m⁻³), mu_net in day⁻¹, depth in m.
    """
    return H_COMBUSTION * 1.0e6 * X * depth * mu_net / SECONDS_PER_DAY


# ---------------------------------------------------------------
# Combined balance
# ---------------------------------------------------------------
@dataclass(frozen=True)
class HeatFluxes:
    q_solar: float
    q_longwave_in: float
    q_longwave_out: float
    q_evap: float
    q_convection: float
    q_conduction: float
    q_biomass: float
    u2: float

    @property
    def q_net(self) -> float:
        return (self.q_solar + self.q_longwave_in - self.q_longwave_out - self.q_evap
                - self.q_convection - self.q_conduction - self.q_biomass)

    def components(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name.startswith("q_")}

    def dT(self, depth: float, dt: float) -> float:
        """Temperature change (°C) over ``dt`` seconds for a column of ``depth``."""
        return self.q_net * dt / (RHO_WATER * CP_WATER * depth)


def compute_heat_balance(*, T_pond: float, T_air: float, T_dew: float, T_soil: float,
                         cloud_cover: float, u10: float, direct: float, diffuse: float,
                         solar_elevation: float, X: float, mu_net: float, depth: float,
                         area_surface: float, area_soil: float,
                         u2: float | None = None) -> HeatFluxes:
    """Evaluate every flux term for one hour.

    ``cloud_cover`` is in percent.  Raises NumericalError if any term is
    non-finite.
    """
    if u2 is None:
        u2 = wind_speed_2m(u10)
    e_a = vapor_pressure(T_dew)
    e_s = saturation_vapor_pressure(T_pond)
    evap = q_evaporation(T_pond, e_a, u2)

    flux = HeatFluxes(
        q_solar=q_solar(direct, diffuse, solar_elevation),
        q_longwave_in=q_longwave_in(T_air, T_dew, cloud_cover / 100.0),
        q_longwave_out=q_longwave_out(T_pond),
        q_evap=evap,
        q_convection=q_convection(T_pond, T_air, e_s, e_a, evap, u2),
        q_conduction=q_conduction(T_pond, T_soil, area_surface, area_soil),
        q_biomass=q_biomass(X, mu_net, depth),
        u2=u2,
    )
    for name, value in flux.components().items():
        if not math.isfinite(value):
            raise NumericalError(name, value)
    return flux
