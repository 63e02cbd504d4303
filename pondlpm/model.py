"""
Hourly open-pond stepper.

Each simulated hour runs the same fixed sequence on the state left by the
previous hour:

1. weather lookup (day index wraps modulo the weather source);
2. light transport with the previous hour's biomass;
3. growth factors and net specific growth rate;
4. biomass growth, ``X·exp(μ_net/24)`` (exact for a rate held over the hour,
   positive and stable for large rates);
5. thermal balance, one explicit hourly step of the pond temperature;
6. evaporation and rainfall, then harvest on the post-growth culture, then
   makeup water back to the operating level and the settled volume;
7. productivity, and a frozen :class:`Timestep` appended to the trajectory.

A run is a pure function of its configuration and weather: no I/O and no
state outside the call, so identical inputs give identical trajectories.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Tuple

from .constants import HOURS_PER_DAY, LITERS_PER_M3
from .errors import ConfigurationError, NumericalError
from .geometry import PondGeometry, geometry_for
from .harvest import HarvestController
from .heat import compute_heat_balance
from .kinetics import evaluate_growth
from .optics import compute_par
from .parameters import CultureParams, HarvestParams, PondConfig, PondParams
from .solvers import ensure_finite, grow_exponential, step_temperature
from .water import (
    WaterFlows,
    evaporation_liters,
    makeup_allowed,
    makeup_liters,
    rainfall_liters,
    settle_volume,
    shortfall_liters,
)
from .weather import WeatherSample, resolve_weather

__all__ = ["Timestep", "PondModel", "simulate"]

logger = logging.getLogger(__name__)

DEFAULT_START_HOUR = 7


@dataclass(frozen=True)
class Timestep:
    """One simulated hour.  Field order is the flat-export column order."""

    day: int                              # 1-based
    hour: int                             # 0–23, local
    biomass_concentration: float          # g/L
    pond_temperature: float               # °C
    culture_volume: float                 # m³
    net_growth_rate: float                # day⁻¹
    light_factor: float
    temperature_factor: float
    nutrient_factor: float
    lighted_depth_fraction: float
    par_direct_surface: float             # µmol m⁻² s⁻¹
    par_diffuse_surface: float
    par_avg_culture: float
    fresnel_transmission_direct: float
    productivity_volumetric: float        # g L⁻¹ day⁻¹
    productivity_areal: float             # g m⁻² day⁻¹
    q_solar: float                        # W m⁻²
    q_longwave_in: float
    q_longwave_out: float
    q_evap: float
    q_convection: float
    q_conduction: float
    q_biomass: float
    q_net: float
    air_temperature: float                # °C
    dew_point: float
    relative_humidity: float              # %
    cloud_cover: float                    # %
    wind_speed_10m: float                 # m/s
    wind_speed_2m: float
    direct_radiation: float               # W m⁻²
    diffuse_radiation: float
    solar_elevation: float                # deg
    soil_temperature: float               # °C
    precipitation: float                  # mm
    evap_L: float
    rainfall_L: float
    makeup_L: float
    harvest_water_removed_L: float
    harvest_water_returned_L: float
    harvest_occurred: bool
    harvest_mass_kg: float


@dataclass
class _RunState:
    X: float   # g/L
    T: float   # °C
    V: float   # m³


class PondModel:
    """Well-mixed raceway pond driven by hourly weather.

    Parameters are validated when the parameter objects are built; the
    geometry is derived once here and reused for every run.
    """

    def __init__(
        self,
        pond: PondParams | None = None,
        culture: CultureParams | None = None,
        harvest: HarvestParams | None = None,
    ) -> None:
        self.pond = pond or PondParams()
        self.culture = culture or CultureParams()
        self.harvest = harvest or HarvestParams()
        self.geometry: PondGeometry = geometry_for(self.pond)

    @classmethod
    def from_config(cls, config: PondConfig) -> "PondModel":
        return cls(config.pond, config.culture, config.harvest)

    @property
    def config(self) -> PondConfig:
        return PondConfig(self.pond, self.culture, self.harvest)

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    def run(self, weather: Any, total_days: int, start_hour: int = DEFAULT_START_HOUR) -> Tuple[Timestep, ...]:
        """Simulate ``total_days`` days hour by hour.

        ``weather`` is a WeatherSource, a list of 24-sample days or one
        24-sample day.  Returns ``total_days * 24`` timesteps.
        """
        if isinstance(total_days, bool) or not isinstance(total_days, int) or total_days <= 0:
            raise ConfigurationError(f"total_days must be a positive integer, got {total_days!r}")
        if not 0 <= start_hour < HOURS_PER_DAY:
            raise ConfigurationError(f"start_hour must be in [0, 23], got {start_hour!r}")
        source = resolve_weather(weather)
        if total_days > len(source):
            logger.debug("weather covers %d days; wrapping for a %d-day run", len(source), total_days)

        T0 = self.pond.initial_temperature
        if T0 is None:
            T0 = source.sample(0, start_hour).temperature
        state = _RunState(X=self.culture.initial_density, T=T0, V=self.geometry.volume)
        controller = HarvestController(self.harvest)

        logger.info("pond run: %d days, %.0f m² at %.2f m, harvest=%s",
                    total_days, self.geometry.area_surface, self.pond.depth, self.harvest.mode.value)

        trajectory = []
        for step in range(total_days * HOURS_PER_DAY):
            abs_hour = step + start_hour
            day = step // HOURS_PER_DAY + 1
            hour = abs_hour % HOURS_PER_DAY
            weather_now = source.sample(abs_hour // HOURS_PER_DAY, hour)
            try:
                trajectory.append(self._step(state, weather_now, controller, day, hour))
            except NumericalError as exc:
                logger.error("run aborted on day %d hour %d: %s", day, hour, exc)
                raise exc.at(day, hour) from exc
            except (OverflowError, ZeroDivisionError) as exc:
                logger.error("run aborted on day %d hour %d: %s", day, hour, exc)
                raise NumericalError(type(exc).__name__, float("nan"), day=day, hour=hour) from exc

        logger.info("pond run done: final %.3f g/L, %d harvests, %.1f kg harvested",
                    state.X, controller.count, controller.total_kg)
        return tuple(trajectory)

    # ------------------------------------------------------------------
    # one hour
    # ------------------------------------------------------------------
    def _step(self, state: _RunState, w: WeatherSample, controller: HarvestController,
              day: int, hour: int) -> Timestep:
        geo, cult = self.geometry, self.culture
        depth = geo.depth_of(state.V)
        X, T, V = state.X, state.T, state.V

        par = compute_par(w.direct_radiation, w.diffuse_radiation, w.solar_elevation,
                          X, depth, cult.attenuation)
        growth = evaluate_growth(par.par_avg_culture, T, cult.light, cult.temperature,
                                 cult.nutrient, cult.mu_max, cult.death_rate)
        mu = growth.net_rate
        X_grown = grow_exponential(X, mu)

        heat = compute_heat_balance(
            T_pond=T, T_air=w.temperature, T_dew=w.dew_point, T_soil=w.soil_temperature,
            cloud_cover=w.cloud_cover, u10=w.wind_speed, u2=w.wind_speed_2m,
            direct=w.direct_radiation, diffuse=w.diffuse_radiation,
            solar_elevation=w.solar_elevation, X=X, mu_net=mu, depth=depth,
            area_surface=geo.area_surface, area_soil=geo.area_soil,
        )
        T_new = step_temperature(T, heat, depth)

        # water in and out, harvest on the post-growth culture, then makeup
        evap_L = evaporation_liters(heat.q_evap, geo.area_surface)
        rain_L = rainfall_liters(w.precipitation, geo.area_surface)
        allowed = makeup_allowed(V, geo.volume)
        shortfall_L = shortfall_liters(V, geo.volume) if allowed else 0.0
        V_L = V * LITERS_PER_M3
        after_weather_L = V_L - evap_L + rain_L
        if after_weather_L <= 0.0:
            raise NumericalError("culture_volume", after_weather_L / LITERS_PER_M3)
        mass_g = X_grown * V_L
        event = controller.step(mass_g, after_weather_L, evap_L - rain_L + shortfall_L, allowed)

        flows = WaterFlows(
            evap_L=evap_L,
            rainfall_L=rain_L,
            makeup_L=makeup_liters(evap_L, rain_L, event.unreturned_L, allowed, shortfall_L),
            harvest_removed_L=event.removed_L,
            harvest_returned_L=event.returned_L,
        )
        V_new = ensure_finite("culture_volume", settle_volume(V, flows))
        # round-off can leave a tiny negative remainder after a full drain
        X_new = max(0.0, (mass_g - event.mass_kg * 1000.0) / (V_new * LITERS_PER_M3))

        prod_vol = mu * X if mu > 0.0 else 0.0
        prod_areal = prod_vol * depth * LITERS_PER_M3

        state.X, state.T, state.V = X_new, T_new, V_new

        return Timestep(
            day=day,
            hour=hour,
            biomass_concentration=X_new,
            pond_temperature=T_new,
            culture_volume=V_new,
            net_growth_rate=mu,
            light_factor=growth.light,
            temperature_factor=growth.temperature,
            nutrient_factor=growth.nutrient,
            lighted_depth_fraction=par.lighted_fraction,
            par_direct_surface=par.par_direct_surface,
            par_diffuse_surface=par.par_diffuse_surface,
            par_avg_culture=par.par_avg_culture,
            fresnel_transmission_direct=par.fresnel_direct,
            productivity_volumetric=prod_vol,
            productivity_areal=prod_areal,
            q_solar=heat.q_solar,
            q_longwave_in=heat.q_longwave_in,
            q_longwave_out=heat.q_longwave_out,
            q_evap=heat.q_evap,
            q_convection=heat.q_convection,
            q_conduction=heat.q_conduction,
            q_biomass=heat.q_biomass,
            q_net=heat.q_net,
            air_temperature=w.temperature,
            dew_point=w.dew_point,
            relative_humidity=w.relative_humidity,
            cloud_cover=w.cloud_cover,
            wind_speed_10m=w.wind_speed,
            wind_speed_2m=heat.u2,
            direct_radiation=w.direct_radiation,
            diffuse_radiation=w.diffuse_radiation,
            solar_elevation=w.solar_elevation,
            soil_temperature=w.soil_temperature,
            precipitation=w.precipitation,
            evap_L=flows.evap_L,
            rainfall_L=flows.rainfall_L,
            makeup_L=flows.makeup_L,
            harvest_water_removed_L=flows.harvest_removed_L,
            harvest_water_returned_L=flows.harvest_returned_L,
            harvest_occurred=event.occurred,
            harvest_mass_kg=event.mass_kg,
        )


def simulate(weather: Any, config: PondConfig | None = None, total_days: int = 14,
             start_hour: int = DEFAULT_START_HOUR) -> Tuple[Timestep, ...]:
    """Functional entry point: ``(weather, config, total_days) → timesteps``."""
    return PondModel.from_config(config or PondConfig()).run(weather, total_days, start_hour)
