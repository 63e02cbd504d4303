"""Racetrack (slot-shaped) raceway pond geometry."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import LITERS_PER_M3
from .errors import ConfigurationError
from .parameters import PondParams

__all__ = ["PondGeometry", "compute_geometry", "geometry_for"]


@dataclass(frozen=True)
class PondGeometry:
    width: float         # m, outer channel pair width
    length: float        # m, overall length
    area_surface: float  # m², culture surface (berm excluded)
    perimeter: float     # m
    area_soil: float     # m², floor plus side walls
    depth: float         # m

    @property
    def volume(self) -> float:
        """Culture volume at operating depth, m³."""
        return self.area_surface * self.depth

    @property
    def liters(self) -> float:
        return self.volume * LITERS_PER_M3

    def depth_of(self, volume: float) -> float:
        """Water depth for a culture ``volume`` in m³."""
        return volume / self.area_surface


def compute_geometry(area_ha: float, aspect_ratio: float, depth: float,
                     berm_width: float = 0.0) -> PondGeometry:
    """Two straight channels joined by semicircular ends around a centre berm.

    The reference area W×L sets the outer width and length; the slot area
    is (L − W)·W + π(W/2)², less the berm along the straight sections.
    """
    for name, value in (("area_ha", area_ha), ("aspect_ratio", aspect_ratio), ("depth", depth)):
        if not value > 0.0:
            raise ConfigurationError(f"{name} must be positive, got {value!r}")
    if berm_width < 0.0:
        raise ConfigurationError("berm_width cannot be negative")

    A = area_ha * 1.0e4
    W = math.sqrt(A / aspect_ratio)
    L = A / W
    L_straight = max(0.0, L - W)
    area_surface = L_straight * W + math.pi * (W / 2.0) ** 2 - L_straight * berm_width
    if area_surface <= 0.0:
        raise ConfigurationError("berm leaves no culture surface")
    perimeter = 2.0 * L_straight + math.pi * W

    return PondGeometry(
        width=W,
        length=L,
        area_surface=area_surface,
        perimeter=perimeter,
        area_soil=area_surface + perimeter * depth,
        depth=depth,
    )


def geometry_for(pond: PondParams) -> PondGeometry:
    return compute_geometry(pond.area_ha, pond.aspect_ratio, pond.depth, pond.berm_width)
