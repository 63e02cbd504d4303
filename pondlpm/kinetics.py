"""
Growth kinetics: light, temperature and nutrient limitation factors.

Each response family is a closed set of model variants.  A variant is a
frozen dataclass holding its own parameters plus a ``tag`` naming the
equation; one pure function per family dispatches on the variant type:

    f_L = light_factor(I_avg, Steele(Iopt=200.0))
    f_T = temperature_factor(T_pond, GaussianSymmetric(Topt=30.0, alpha=0.03))
    f_N = nutrient_factor(NutrientReplete())

All factors are bounded to [0, 1].  That bound is part of the model (the
piecewise forms can overshoot by round-off and the cardinal quadratic
peaks above one when Topt is off-centre); a non-finite factor is not
bounded but raises :class:`~pondlpm.errors.NumericalError`.

Parameter checks run in ``__post_init__`` so a bad half-saturation
constant fails when the configuration is built, not mid-run.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Mapping, Type, Union

from .errors import ConfigurationError, NumericalError

__all__ = [
    "Monod", "Haldane", "Webb", "Steele", "BetaLight",
    "GaussianSymmetric", "GaussianAsymmetric", "QuadraticExponential",
    "BetaTemperature", "CardinalTemperature",
    "NutrientReplete", "NutrientMonod", "NutrientHaldane", "NutrientHill",
    "GrowthFactors",
    "light_factor", "temperature_factor", "nutrient_factor",
    "net_growth_rate", "evaluate_growth",
    "light_model_from_dict", "temperature_model_from_dict",
    "nutrient_model_from_dict", "model_as_dict",
]


def _require_positive(model: Any, *names: str) -> None:
    for name in names:
        value = getattr(model, name)
        if not (math.isfinite(value) and value > 0.0):
            raise ConfigurationError(f"{model.tag}: {name} must be positive, got {value!r}")


def _require_ordered(model: Any, *names: str) -> None:
    values = [getattr(model, n) for n in names]
    for lo, hi, a, b in zip(values, values[1:], names, names[1:]):
        if not lo < hi:
            raise ConfigurationError(f"{model.tag}: require {a} < {b}, got {lo!r} >= {hi!r}")


def _bounded(quantity: str, value: float) -> float:
    if not math.isfinite(value):
        raise NumericalError(quantity, value)
    # modeling bound, not error recovery
    return min(1.0, max(0.0, value))


# ---------------------------------------------------------------
# Light response
# ---------------------------------------------------------------
@dataclass(frozen=True)
class Monod:
    """Hyperbolic saturation, no inhibition."""
    tag: ClassVar[str] = "monod"
    Ks: float = 20.0   # µmol m⁻² s⁻¹

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "Ks")


@dataclass(frozen=True)
class Haldane:
    """Saturation with quadratic photoinhibition in the denominator."""
    tag: ClassVar[str] = "haldane"
    Ks: float = 50.0
    Ki: float = 1000.0

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "Ks", "Ki")


@dataclass(frozen=True)
class Webb:
    """Exponential saturation, no inhibition."""
    tag: ClassVar[str] = "webb"
    Iopt: float = 100.0
    alpha: float = 2.0

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "Iopt", "alpha")


@dataclass(frozen=True)
class Steele:
    """Single optimum: rises to 1 at Iopt, then decays."""
    tag: ClassVar[str] = "steele"
    Iopt: float = 200.0

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "Iopt")


@dataclass(frozen=True)
class BetaLight:
    """Piecewise beta function, exactly zero outside (Imin, Imax)."""
    tag: ClassVar[str] = "beta-function"
    Iopt: float = 200.0
    Imin: float = 1.0
    Imax: float = 1500.0
    alpha: float = 1.0
    beta: float = 5.0

    def __post_init__(self):  # type: ignore[override]
        if self.Imin < 0.0:
            raise ConfigurationError(f"{self.tag}: Imin cannot be negative")
        _require_ordered(self, "Imin", "Iopt", "Imax")
        _require_positive(self, "alpha", "beta")


LightModel = Union[Monod, Haldane, Webb, Steele, BetaLight]


def light_factor(I: float, model: LightModel) -> float:
    """Light limitation f_L(I) ∈ [0, 1] for PAR ``I`` (µmol m⁻² s⁻¹)."""
    if I <= 0.0:
        return 0.0
    if isinstance(model, Steele):
        ratio = I / model.Iopt
        f = ratio * math.exp(1.0 - ratio)
    elif isinstance(model, Monod):
        f = I / (model.Ks + I)
    elif isinstance(model, Haldane):
        f = I / (model.Ks + I + I * I / model.Ki)
    elif isinstance(model, Webb):
        f = 1.0 - math.exp(-model.alpha * I / model.Iopt)
    elif isinstance(model, BetaLight):
        f = _beta_piecewise(I, model.Imin, model.Iopt, model.Imax, model.alpha, model.beta)
    else:
        raise TypeError(f"unsupported light model {model!r}")
    return _bounded("light_factor", f)


# ---------------------------------------------------------------
# Temperature response
# ---------------------------------------------------------------
@dataclass(frozen=True)
class GaussianSymmetric:
    tag: ClassVar[str] = "gaussian-symmetric"
    Topt: float = 30.0   # °C
    alpha: float = 0.03  # °C⁻²

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "alpha")


@dataclass(frozen=True)
class GaussianAsymmetric:
    """Independent widths below (alpha) and above (beta) the optimum."""
    tag: ClassVar[str] = "gaussian-asymmetric"
    Topt: float = 30.0
    alpha: float = 0.008
    beta: float = 0.02

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "alpha", "beta")


@dataclass(frozen=True)
class QuadraticExponential:
    """Gaussian normalised by the distance to each cardinal temperature."""
    tag: ClassVar[str] = "quadratic-exponential"
    Topt: float = 30.0
    Tmin: float = 10.0
    Tmax: float = 50.0
    alpha: float = 4.0
    beta: float = 5.0

    def __post_init__(self):  # type: ignore[override]
        _require_ordered(self, "Tmin", "Topt", "Tmax")
        _require_positive(self, "alpha", "beta")


@dataclass(frozen=True)
class BetaTemperature:
    """Hard-bounded: 0 at Tmin and Tmax, 1 at Topt."""
    tag: ClassVar[str] = "beta-function"
    Topt: float = 30.0
    Tmin: float = 10.0
    Tmax: float = 50.0
    alpha: float = 1.0
    beta: float = 2.0

    def __post_init__(self):  # type: ignore[override]
        _require_ordered(self, "Tmin", "Topt", "Tmax")
        _require_positive(self, "alpha", "beta")


@dataclass(frozen=True)
class CardinalTemperature:
    """Cardinal quadratic, zero outside (Tmin, Tmax)."""
    tag: ClassVar[str] = "cardinal"
    Topt: float = 30.0
    Tmin: float = 10.0
    Tmax: float = 50.0

    def __post_init__(self):  # type: ignore[override]
        _require_ordered(self, "Tmin", "Topt", "Tmax")


TemperatureModel = Union[GaussianSymmetric, GaussianAsymmetric, QuadraticExponential,
                         BetaTemperature, CardinalTemperature]


def temperature_factor(T: float, model: TemperatureModel) -> float:
    """Temperature limitation f_T(T) ∈ [0, 1] for culture temperature ``T`` (°C)."""
    if isinstance(model, GaussianSymmetric):
        d = T - model.Topt
        f = math.exp(-model.alpha * d * d)
    elif isinstance(model, GaussianAsymmetric):
        d = T - model.Topt
        shape = model.alpha if T < model.Topt else model.beta
        f = math.exp(-shape * d * d)
    elif isinstance(model, QuadraticExponential):
        if T < model.Topt:
            x = (T - model.Topt) / (model.Topt - model.Tmin)
            f = math.exp(-x * x * model.alpha)
        else:
            x = (T - model.Topt) / (model.Tmax - model.Topt)
            f = math.exp(-x * x * model.beta)
    elif isinstance(model, BetaTemperature):
        f = _beta_piecewise(T, model.Tmin, model.Topt, model.Tmax, model.alpha, model.beta)
    elif isinstance(model, CardinalTemperature):
        if T <= model.Tmin or T >= model.Tmax:
            f = 0.0
        else:
            f = ((T - model.Tmin) * (T - model.Tmax)
                 / ((model.Topt - model.Tmin) * (model.Topt - model.Tmax)))
    else:
        raise TypeError(f"unsupported temperature model {model!r}")
    return _bounded("temperature_factor", f)


def _beta_piecewise(x: float, lo: float, opt: float, hi: float, a: float, b: float) -> float:
    if x <= lo or x >= hi:
        return 0.0
    if x < opt:
        t = (x - lo) / (opt - lo)
        return t ** a * math.exp(-a * (t - 1.0))
    t = (hi - x) / (hi - opt)
    return t ** b * math.exp(-b * (t - 1.0))


# ---------------------------------------------------------------
# Nutrient response
# ---------------------------------------------------------------
@dataclass(frozen=True)
class NutrientReplete:
    """Nutrients never limit growth: f_N = 1."""
    tag: ClassVar[str] = "replete"


@dataclass(frozen=True)
class NutrientMonod:
    tag: ClassVar[str] = "monod"
    Ks: float = 0.5   # mM
    S: float = 5.0    # mM, medium concentration

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "Ks")
        if self.S < 0.0:
            raise ConfigurationError(f"{self.tag}: S cannot be negative")


@dataclass(frozen=True)
class NutrientHaldane:
    tag: ClassVar[str] = "haldane"
    Ks: float = 0.5
    Ki: float = 50.0
    S: float = 5.0

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "Ks", "Ki")
        if self.S < 0.0:
            raise ConfigurationError(f"{self.tag}: S cannot be negative")


@dataclass(frozen=True)
class NutrientHill:
    tag: ClassVar[str] = "hill"
    Ks: float = 0.5
    n: float = 2.0
    S: float = 5.0

    def __post_init__(self):  # type: ignore[override]
        _require_positive(self, "Ks", "n")
        if self.S < 0.0:
            raise ConfigurationError(f"{self.tag}: S cannot be negative")


NutrientModel = Union[NutrientReplete, NutrientMonod, NutrientHaldane, NutrientHill]


def nutrient_factor(model: NutrientModel) -> float:
    """Nutrient limitation f_N ∈ [0, 1]."""
    if isinstance(model, NutrientReplete):
        return 1.0
    S = model.S
    if S <= 0.0:
        return 0.0
    if isinstance(model, NutrientMonod):
        f = S / (model.Ks + S)
    elif isinstance(model, NutrientHaldane):
        f = S / (model.Ks + S + S * S / model.Ki)
    elif isinstance(model, NutrientHill):
        Sn = S ** model.n
        f = Sn / (model.Ks ** model.n + Sn)
    else:
        raise TypeError(f"unsupported nutrient model {model!r}")
    return _bounded("nutrient_factor", f)


# ---------------------------------------------------------------
# Combined rate
# ---------------------------------------------------------------
@dataclass(frozen=True)
class GrowthFactors:
    light: float
    temperature: float
    nutrient: float
    net_rate: float   # day⁻¹


def net_growth_rate(mu_max: float, fL: float, fT: float, fN: float, death_rate: float) -> float:
    """μ_net = μ_max·f_L·f_T·f_N − death rate (day⁻¹)."""
    return mu_max * fL * fT * fN - death_rate


def evaluate_growth(I_avg: float, T: float, light: LightModel, temperature: TemperatureModel,
                    nutrient: NutrientModel, mu_max: float, death_rate: float) -> GrowthFactors:
    fL = light_factor(I_avg, light)
    fT = temperature_factor(T, temperature)
    fN = nutrient_factor(nutrient)
    return GrowthFactors(fL, fT, fN, net_growth_rate(mu_max, fL, fT, fN, death_rate))


# ---------------------------------------------------------------
# Construction from plain mappings
# ---------------------------------------------------------------
_LIGHT_MODELS: Dict[str, Type[Any]] = {
    cls.tag: cls for cls in (Monod, Haldane, Webb, Steele, BetaLight)
}
_TEMPERATURE_MODELS: Dict[str, Type[Any]] = {
    cls.tag: cls for cls in (GaussianSymmetric, GaussianAsymmetric, QuadraticExponential,
                             BetaTemperature, CardinalTemperature)
}
_NUTRIENT_MODELS: Dict[str, Type[Any]] = {
    cls.tag: cls for cls in (NutrientReplete, NutrientMonod, NutrientHaldane, NutrientHill)
}


def _from_dict(registry: Dict[str, Type[Any]], family: str, record: Mapping[str, Any]) -> Any:
    params = dict(record)
    tag = params.pop("model", None)
    cls = registry.get(tag)
    if cls is None:
        raise ConfigurationError(
            f"unknown {family} model {tag!r}; expected one of {sorted(registry)}")
    try:
        return cls(**params)
    except TypeError as exc:
        raise ConfigurationError(f"bad parameters for {family} model {tag!r}: {exc}") from exc


def light_model_from_dict(record: Mapping[str, Any]) -> LightModel:
    """Build a light variant from ``{"model": "<tag>", **params}``."""
    return _from_dict(_LIGHT_MODELS, "light", record)


def temperature_model_from_dict(record: Mapping[str, Any]) -> TemperatureModel:
    return _from_dict(_TEMPERATURE_MODELS, "temperature", record)


def nutrient_model_from_dict(record: Mapping[str, Any]) -> NutrientModel:
    return _from_dict(_NUTRIENT_MODELS, "nutrient", record)


def model_as_dict(model: Any) -> Dict[str, Any]:
    """Inverse of the ``*_from_dict`` helpers."""
    return {"model": model.tag, **asdict(model)}
