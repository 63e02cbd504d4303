from __future__ import annotations
import math

from .constants import HOURS_PER_DAY, SECONDS_PER_HOUR
from .errors import NumericalError
from .heat import HeatFluxes

# ------------------------------
# Finite-value guard
# ------------------------------
def ensure_finite(quantity: str, value: float) -> float:
    if not math.isfinite(value):
        raise NumericalError(quantity, value)
    return value

# ------------------------------
# Biomass:  dX/dt = μ_net X  over one hour
# ------------------------------
def grow_exponential(X: float, mu_net: float, dt_days: float = 1.0 / HOURS_PER_DAY) -> float:
    """Exact solution of dX/dt = μ X with μ held for the step: X·e^{μ·dt}.

    Stays positive and stable for any rate, unlike forward Euler.
    """
    try:
        X_new = X * math.exp(mu_net * dt_days)
    except OverflowError as e:
        raise NumericalError("biomass_concentration", math.inf) from e
    return ensure_finite("biomass_concentration", X_new)

# ------------------------------
# Temperature:  dT/dt = q_net / (ρ Cp h)  explicit single step
# ------------------------------
def step_temperature(T: float, flux: HeatFluxes, depth: float, dt: float = SECONDS_PER_HOUR) -> float:
    return ensure_finite("pond_temperature", T + flux.dT(depth, dt))
