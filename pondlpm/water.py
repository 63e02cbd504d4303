"""
Hourly water balance of the culture.

Evaporation is tied to the latent-heat term of the thermal balance, so
energy and water stay consistent: every watt leaving as ``q_evap`` carries
``1/L_vap`` kilograms (= liters) of water with it.  Makeup water tops the
pond back up to its operating volume, covering evaporation net of rain
plus the share of harvested water that is not recycled.
"""
from __future__ import annotations

from dataclasses import dataclass

from .constants import LAMBDA_WATER, LITERS_PER_M3, SECONDS_PER_HOUR

__all__ = [
    "WaterFlows",
    "evaporation_liters",
    "rainfall_liters",
    "makeup_allowed",
    "makeup_liters",
    "shortfall_liters",
    "settle_volume",
]

# relative slack on the operating volume so round-off in the settlement
# does not switch makeup off
_VOLUME_RTOL = 1.0e-9


@dataclass(frozen=True)
class WaterFlows:
    """Water moved during one hour, liters."""
    evap_L: float = 0.0
    rainfall_L: float = 0.0
    makeup_L: float = 0.0
    harvest_removed_L: float = 0.0
    harvest_returned_L: float = 0.0

    @property
    def net_L(self) -> float:
        return (self.rainfall_L + self.makeup_L + self.harvest_returned_L
                - self.evap_L - self.harvest_removed_L)


def evaporation_liters(q_evap: float, area: float, dt: float = SECONDS_PER_HOUR) -> float:
    """Water evaporated over ``dt`` seconds from ``area`` m² at ``q_evap`` W m⁻²."""
    return q_evap * area * dt / (LAMBDA_WATER * 1.0e6)


def rainfall_liters(precipitation_mm: float, area: float) -> float:
    """1 mm over 1 m² is 1 L."""
    return max(0.0, precipitation_mm) * area


def makeup_allowed(volume_m3: float, full_volume_m3: float) -> bool:
    """Makeup water is only added while the pond is at or below its operating level."""
    return volume_m3 <= full_volume_m3 * (1.0 + _VOLUME_RTOL)


def shortfall_liters(volume_m3: float, full_volume_m3: float) -> float:
    """Liters the pond sits below its operating level at the start of the hour."""
    return max(0.0, (full_volume_m3 - volume_m3) * LITERS_PER_M3)


def makeup_liters(evap_L: float, rainfall_L: float, unreturned_L: float, allowed: bool,
                  shortfall_L: float = 0.0) -> float:
    """Fresh water needed to bring the pond back to its operating level.

    ``unreturned_L`` is the harvested water that was not recycled
    (removed × (1 − return fraction)); ``shortfall_L`` is what was already
    missing before this hour, e.g. after rain-raised water evaporated back
    down.
    """
    if not allowed:
        return 0.0
    return max(0.0, evap_L - rainfall_L + unreturned_L + shortfall_L)


def settle_volume(volume_m3: float, flows: WaterFlows) -> float:
    """Culture volume (m³) at the end of the hour."""
    return volume_m3 + flows.net_L / LITERS_PER_M3
