import pytest
import os,sys
try:
    from pondlpm.parameters import *
except ImportError:
    # Add the next directory up to the path if pondlpm not in it
    sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
    from pondlpm.parameters import *
from pondlpm.geometry import compute_geometry, geometry_for
from pondlpm.kinetics import (BetaLight, GaussianAsymmetric, GaussianSymmetric, Haldane, Monod,
                              NutrientMonod, NutrientReplete, Steele)
from pondlpm.optics import BiomassAttenuation


def test_pond_defaults():
    p = PondParams()
    assert p.depth == pytest.approx(0.2)
    assert p.initial_temperature == pytest.approx(25.0)
    with pytest.raises(ValueError):
        PondParams(depth=0.0)  # illegal
    with pytest.raises(ConfigurationError):
        PondParams(area_ha=-1.0)
    with pytest.raises(ConfigurationError):
        PondParams(berm_width=-0.1)


def test_culture_convenience_accessors():
    c = CultureParams()
    assert c.Iopt == pytest.approx(200.0)
    assert c.Topt == pytest.approx(30.0)
    assert c.alpha == pytest.approx(0.03)
    assert c.epsilon == pytest.approx(0.15)
    assert c.kb == pytest.approx(0.2)
    assert CultureParams(attenuation=BiomassAttenuation(epsilon=0.1)).kb == 0.0
    assert CultureParams(light=Haldane()).Iopt is None
    with pytest.raises(ConfigurationError):
        CultureParams(mu_max=0.0)
    with pytest.raises(ConfigurationError):
        CultureParams(death_rate=-0.1)
    with pytest.raises(ConfigurationError):
        CultureParams(light="steele")  # a tag alone is not a model
    with pytest.raises(ConfigurationError):
        CultureParams(temperature=Monod(Ks=10.0))  # light model in the temperature slot
    with pytest.raises(ConfigurationError):
        CultureParams(light=GaussianSymmetric())
    with pytest.raises(ConfigurationError):
        CultureParams(nutrient=Monod())
    with pytest.raises(ConfigurationError):
        CultureParams(attenuation=NutrientReplete())
    CultureParams(nutrient=NutrientMonod(), attenuation=BiomassAttenuation())


def test_harvest_validation():
    h = HarvestParams(mode="batch", threshold=1.0, target=0.5)
    assert h.mode is HarvestMode.BATCH
    assert HarvestParams().mode is HarvestMode.NONE
    with pytest.raises(ConfigurationError):
        HarvestParams(mode="batch", threshold=1.0, target=1.0)
    with pytest.raises(ConfigurationError):
        HarvestParams(mode="batch", threshold=1.0, target=1.5)
    with pytest.raises(ConfigurationError):
        HarvestParams(mode="continuous")
    with pytest.raises(ConfigurationError):
        HarvestParams(mode="semi-continuous", threshold=0.0)
    with pytest.raises(ConfigurationError):
        HarvestParams(return_fraction=1.0)
    # target is irrelevant outside batch mode
    HarvestParams(mode="semi-continuous", threshold=0.5, target=2.0)


def test_config_from_dict():
    cfg = PondConfig.from_dict({
        "pond": {"depth": 0.15},
        "culture": {
            "mu_max": 2.0,
            "light": {"model": "beta-function", "Iopt": 250.0},
            "temperature": {"model": "gaussian-asymmetric", "Topt": 28.0},
            "attenuation": {"model": "beer-lambert", "epsilon": 0.2},
        },
        "harvest": {"mode": "semi-continuous", "threshold": 0.8},
    })
    assert cfg.pond.depth == pytest.approx(0.15)
    assert isinstance(cfg.culture.light, BetaLight)
    assert isinstance(cfg.culture.temperature, GaussianAsymmetric)
    assert cfg.culture.epsilon == pytest.approx(0.2)
    assert cfg.harvest.mode is HarvestMode.SEMI_CONTINUOUS
    with pytest.raises(ConfigurationError):
        PondConfig.from_dict({"culture": {"light": {"model": "sigmoid"}}})
    with pytest.raises(ConfigurationError):
        PondConfig.from_dict({"pond": {"volume": 3.0}})
    with pytest.raises(ConfigurationError):
        PondConfig.from_dict({"weather": {}})


def test_racetrack_geometry():
    g = compute_geometry(0.425, 250.0 / 17.0, 0.2, 0.8)
    assert g.width == pytest.approx(17.0)
    assert g.length == pytest.approx(250.0)
    slot = 233.0 * 17.0 + 3.141592653589793 * 8.5 ** 2
    assert g.area_surface == pytest.approx(slot - 233.0 * 0.8)
    assert g.perimeter == pytest.approx(2 * 233.0 + 3.141592653589793 * 17.0)
    assert g.area_soil == pytest.approx(g.area_surface + g.perimeter * 0.2)
    assert g.volume == pytest.approx(g.area_surface * 0.2)
    assert g.liters == pytest.approx(g.volume * 1000.0)
    assert geometry_for(PondParams()) == g
    with pytest.raises(ConfigurationError):
        compute_geometry(0.425, 250.0 / 17.0, 0.0)
    with pytest.raises(ConfigurationError):
        compute_geometry(0.425, 250.0 / 17.0, 0.2, berm_width=20.0)


def test_all():
    test_pond_defaults()
    test_culture_convenience_accessors()
    test_harvest_validation()
    test_config_from_dict()
    test_racetrack_geometry()
    print("test_pondlpm_parameters passed all tests")

if __name__=="__main__":
    test_all()
