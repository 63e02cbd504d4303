import math
import numpy as np
import pytest
import os,sys
try:
    from pondlpm.kinetics import *
except ImportError:
    # Add the next directory up to the path if pondlpm not in it
    sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
    from pondlpm.kinetics import *
from pondlpm.errors import ConfigurationError, NumericalError

LIGHT_MODELS = [Monod(), Haldane(), Webb(), Steele(), BetaLight()]
TEMPERATURE_MODELS = [GaussianSymmetric(), GaussianAsymmetric(), QuadraticExponential(),
                      BetaTemperature(), CardinalTemperature()]
NUTRIENT_MODELS = [NutrientReplete(), NutrientMonod(), NutrientHaldane(), NutrientHill(),
                   NutrientMonod(S=0.0)]


def test_steele_optimum():
    m = Steele(Iopt=300.0)
    assert light_factor(300.0, m) == 1.0
    assert light_factor(150.0, m) == pytest.approx(0.5 * math.exp(0.5))
    assert light_factor(600.0, m) == pytest.approx(2.0 * math.exp(-1.0))
    assert light_factor(0.0, m) == 0.0
    assert light_factor(-5.0, m) == 0.0


def test_gaussian_temperature():
    m = GaussianSymmetric(Topt=30.0, alpha=0.01)
    assert temperature_factor(30.0, m) == 1.0
    assert temperature_factor(40.0, m) == pytest.approx(math.exp(-1.0))
    assert temperature_factor(20.0, m) == pytest.approx(temperature_factor(40.0, m))

    a = GaussianAsymmetric(Topt=30.0, alpha=0.01, beta=0.04)
    assert temperature_factor(25.0, a) == pytest.approx(math.exp(-0.25))
    assert temperature_factor(35.0, a) == pytest.approx(math.exp(-1.0))


def test_hard_bounded_forms():
    b = BetaTemperature(Topt=30.0, Tmin=10.0, Tmax=50.0)
    assert temperature_factor(10.0, b) == 0.0
    assert temperature_factor(50.0, b) == 0.0
    assert temperature_factor(-5.0, b) == 0.0
    assert temperature_factor(30.0, b) == pytest.approx(1.0)

    c = CardinalTemperature(Topt=30.0, Tmin=10.0, Tmax=50.0)
    assert temperature_factor(30.0, c) == pytest.approx(1.0)
    assert temperature_factor(20.0, c) == pytest.approx(0.75)
    assert temperature_factor(55.0, c) == 0.0

    # off-centre optimum peaks above one and is bounded
    skew = CardinalTemperature(Topt=15.0, Tmin=10.0, Tmax=50.0)
    assert temperature_factor(25.0, skew) == 1.0

    bl = BetaLight(Iopt=200.0, Imin=10.0, Imax=1000.0)
    assert light_factor(5.0, bl) == 0.0
    assert light_factor(1000.0, bl) == 0.0
    assert light_factor(200.0, bl) == pytest.approx(1.0)


def test_factors_bounded():
    for I in np.linspace(0.0, 3000.0, 61):
        for m in LIGHT_MODELS:
            assert 0.0 <= light_factor(float(I), m) <= 1.0
    for T in np.linspace(-10.0, 60.0, 71):
        for m in TEMPERATURE_MODELS:
            assert 0.0 <= temperature_factor(float(T), m) <= 1.0
    for m in NUTRIENT_MODELS:
        assert 0.0 <= nutrient_factor(m) <= 1.0
    assert nutrient_factor(NutrientReplete()) == 1.0
    assert nutrient_factor(NutrientMonod(S=0.0)) == 0.0
    assert nutrient_factor(NutrientHill(Ks=0.5, n=2.0, S=0.5)) == pytest.approx(0.5)


def test_non_finite_factor_raises():
    with pytest.raises(NumericalError):
        light_factor(float("inf"), Steele())
    with pytest.raises(NumericalError):
        temperature_factor(float("nan"), GaussianSymmetric())


def test_invalid_parameters():
    with pytest.raises(ConfigurationError):
        Monod(Ks=0.0)
    with pytest.raises(ConfigurationError):
        Haldane(Ks=50.0, Ki=-1.0)
    with pytest.raises(ConfigurationError):
        Steele(Iopt=float("nan"))
    with pytest.raises(ConfigurationError):
        BetaLight(Iopt=2000.0, Imax=1500.0)
    with pytest.raises(ConfigurationError):
        CardinalTemperature(Topt=5.0, Tmin=10.0, Tmax=50.0)
    with pytest.raises(ConfigurationError):
        NutrientMonod(S=-1.0)
    with pytest.raises(TypeError):
        light_factor(100.0, GaussianSymmetric())


def test_growth_rate():
    g = evaluate_growth(300.0, 30.0, Steele(Iopt=300.0), GaussianSymmetric(Topt=30.0),
                        NutrientReplete(), mu_max=2.0, death_rate=0.1)
    assert (g.light, g.temperature, g.nutrient) == (1.0, 1.0, 1.0)
    assert g.net_rate == pytest.approx(1.9)
    # darkness leaves only the death term
    dark = evaluate_growth(0.0, 30.0, Steele(), GaussianSymmetric(), NutrientReplete(), 2.0, 0.1)
    assert dark.net_rate == pytest.approx(-0.1)
    assert net_growth_rate(4.0, 0.5, 0.5, 1.0, 0.05) == pytest.approx(0.95)


def test_from_dict():
    m = light_model_from_dict({"model": "haldane", "Ks": 40.0, "Ki": 800.0})
    assert m == Haldane(Ks=40.0, Ki=800.0)
    assert light_model_from_dict(model_as_dict(m)) == m
    assert temperature_model_from_dict({"model": "cardinal"}) == CardinalTemperature()
    assert nutrient_model_from_dict({"model": "replete"}) == NutrientReplete()
    assert model_as_dict(NutrientHill()) == {"model": "hill", "Ks": 0.5, "n": 2.0, "S": 5.0}
    with pytest.raises(ConfigurationError):
        light_model_from_dict({"model": "sigmoid"})
    with pytest.raises(ConfigurationError):
        light_model_from_dict({"Iopt": 200.0})
    with pytest.raises(ConfigurationError):
        temperature_model_from_dict({"model": "gaussian-symmetric", "Tmin": 5.0})


def test_all():
    test_steele_optimum()
    test_gaussian_temperature()
    test_hard_bounded_forms()
    test_factors_bounded()
    test_non_finite_factor_raises()
    test_invalid_parameters()
    test_growth_rate()
    test_from_dict()
    print("test_pondlpm_kinetics passed all tests")

if __name__=="__main__":
    test_all()
