from __future__ import annotations
from dataclasses import astuple, dataclass, fields
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .model import Timestep

COLUMNS: Tuple[str, ...] = tuple(f.name for f in fields(Timestep))


def as_rows(timesteps: Sequence[Timestep]) -> List[tuple]:
    """One tuple per hour, values in ``COLUMNS`` order."""
    return [astuple(ts) for ts in timesteps]


def as_columns(timesteps: Sequence[Timestep]) -> Dict[str, np.ndarray]:
    """Column arrays keyed (and ordered) by ``COLUMNS``."""
    rows = as_rows(timesteps)
    out: Dict[str, np.ndarray] = {}
    for i, name in enumerate(COLUMNS):
        values = [row[i] for row in rows]
        if name in ("day", "hour"):
            out[name] = np.asarray(values, dtype=int)
        elif name == "harvest_occurred":
            out[name] = np.asarray(values, dtype=bool)
        else:
            out[name] = np.asarray(values, dtype=float)
    return out


@dataclass(frozen=True)
class RunSummary:
    total_days: int
    total_harvested_kg: float
    harvest_count: int
    avg_productivity_areal: float        # g m⁻² day⁻¹, productive hours only
    avg_productivity_volumetric: float   # g L⁻¹ day⁻¹, productive hours only
    avg_temperature: float
    min_temperature: float
    max_temperature: float
    final_density: float                 # g/L


def summarize(timesteps: Sequence[Timestep]) -> RunSummary:
    """
    Headline numbers for a finished run.  Productivity means are taken over
    hours with positive areal productivity, so nights do not dilute them.
    """
    if not timesteps:
        raise ValueError("cannot summarise an empty trajectory")
    cols = as_columns(timesteps)
    productive = cols["productivity_areal"] > 0.0
    T = cols["pond_temperature"]

    return RunSummary(
        total_days=int(cols["day"].max()),
        total_harvested_kg=float(cols["harvest_mass_kg"].sum()),
        harvest_count=int(cols["harvest_occurred"].sum()),
        avg_productivity_areal=float(cols["productivity_areal"][productive].mean()) if productive.any() else 0.0,
        avg_productivity_volumetric=float(cols["productivity_volumetric"][productive].mean()) if productive.any() else 0.0,
        avg_temperature=float(T.mean()),
        min_temperature=float(T.min()),
        max_temperature=float(T.max()),
        final_density=float(cols["biomass_concentration"][-1]),
    )
