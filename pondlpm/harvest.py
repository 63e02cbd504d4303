"""
Harvest control policy.

The controller sees the culture after the hour's growth, evaporation and
rainfall, and decides how much culture to pull.  Removed culture leaves at
the current concentration; ``return_fraction`` of its water is filtered
and returned clear, the remainder is replaced by makeup water in the same
hour when the pond is at or below its operating level.  The removal is
sized in closed form so that the concentration after that settlement
lands exactly on the set point:

* makeup restores the operating volume V₀:  V_r = (M − C·V₀) / X
* otherwise only the unreturned water is lost:
  V_r = (M − C·V₁) / (X − (1 − f)·C)

with M the biomass (g), V₁ the volume after evaporation and rain,
X = M/V₁ the concentration, C the set point.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .parameters import HarvestMode, HarvestParams

__all__ = ["HarvestState", "HarvestEvent", "HarvestController", "NO_HARVEST"]

logger = logging.getLogger(__name__)


class HarvestState(Enum):
    """Whether the controller is armed.

    Fixed by the mode for the whole run; a harvest is an event within
    ACCUMULATING, not a state of its own.
    """
    IDLE = "idle"                  # harvesting disabled
    ACCUMULATING = "accumulating"  # growing towards the trigger


@dataclass(frozen=True)
class HarvestEvent:
    removed_L: float = 0.0
    returned_L: float = 0.0
    mass_kg: float = 0.0

    @property
    def occurred(self) -> bool:
        return self.removed_L > 0.0

    @property
    def unreturned_L(self) -> float:
        return self.removed_L - self.returned_L


NO_HARVEST = HarvestEvent()


class HarvestController:
    """Per-run harvest state machine; one instance per run, never shared."""

    def __init__(self, params: HarvestParams) -> None:
        self.params = params
        self.state = HarvestState.IDLE if params.mode is HarvestMode.NONE else HarvestState.ACCUMULATING
        self.count = 0
        self.total_kg = 0.0

    def set_point(self, X: float) -> float | None:
        """Concentration to harvest down to, or None if no harvest is due."""
        p = self.params
        if self.state is HarvestState.IDLE:
            return None
        if p.mode is HarvestMode.SEMI_CONTINUOUS and X > p.threshold:
            return p.threshold
        if p.mode is HarvestMode.BATCH and X >= p.threshold:
            return p.target
        return None

    def step(self, mass_g: float, volume_L: float, deficit_L: float, makeup_allowed: bool) -> HarvestEvent:
        """Decide this hour's harvest.

        ``volume_L`` is the culture volume after evaporation and rain,
        ``deficit_L`` what makeup water would add without a harvest
        (evaporation net of rain plus any shortfall below the operating
        level).
        """
        settled_L = volume_L + max(0.0, deficit_L) if makeup_allowed else volume_L
        C = self.set_point(mass_g / settled_L)
        if C is None:
            return NO_HARVEST

        X = mass_g / volume_L
        f = self.params.return_fraction
        removed = None
        if makeup_allowed:
            # volume returns to the operating level V₀ = V₁ + deficit
            candidate = (mass_g - C * (volume_L + deficit_L)) / X
            if deficit_L + (1.0 - f) * candidate >= 0.0:
                removed = candidate
        if removed is None:
            removed = (mass_g - C * volume_L) / (X - (1.0 - f) * C)
        removed = min(max(removed, 0.0), volume_L)
        if removed == 0.0:
            return NO_HARVEST

        event = HarvestEvent(removed_L=removed, returned_L=f * removed, mass_kg=X * removed / 1000.0)
        self.count += 1
        self.total_kg += event.mass_kg
        logger.debug("harvest %d: %.1f L at %.3f g/L (%.2f kg) down to %.3f g/L",
                     self.count, removed, X, event.mass_kg, C)
        return event
