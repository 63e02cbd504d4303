import math
import pytest
import os,sys
try:
    from pondlpm.optics import *
except ImportError:
    # Add the next directory up to the path if pondlpm not in it
    sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
    from pondlpm.optics import *
from pondlpm.constants import PAR_COMBINED
from pondlpm.errors import ConfigurationError


def test_fresnel_transmission():
    assert fresnel_transmission(0.0) == pytest.approx(0.98)
    assert fresnel_transmission(90.0) == 0.0
    # normal-incidence reflectance ((n1-n2)/(n1+n2))² for air/water
    assert fresnel_transmission(1.0e-6) == pytest.approx(1.0 - (0.333 / 2.333) ** 2)
    angles = [5.0, 20.0, 40.0, 60.0, 75.0, 85.0, 89.0]
    values = [fresnel_transmission(a) for a in angles]
    assert all(a > b for a, b in zip(values, values[1:]))
    assert all(0.0 < v < 1.0 for v in values)


def test_refraction():
    assert refracted_angle(0.0) == 0.0
    # critical angle for light leaving water
    assert refracted_angle(90.0) == pytest.approx(math.degrees(math.asin(1.0 / 1.333)))
    assert effective_depth(0.2, 0.0) == pytest.approx(0.2)
    assert effective_depth(0.2, 60.0) > 0.2


def test_beer_lambert_average():
    assert beer_lambert_average(100.0, 10.0, 0.2) == pytest.approx(100.0 * (1.0 - math.exp(-2.0)) / 2.0)
    assert beer_lambert_average(100.0, 1.0e-12, 0.2) == pytest.approx(100.0)
    assert beer_lambert_average(100.0, 0.0, 0.2) == pytest.approx(100.0)
    assert beer_lambert_average(0.0, 10.0, 0.2) == 0.0
    # thicker culture, dimmer average
    assert beer_lambert_average(100.0, 50.0, 0.2) < beer_lambert_average(100.0, 5.0, 0.2)


def test_attenuation():
    assert attenuation_coefficient(0.5, TwoComponentAttenuation(epsilon=0.15, kb=0.2)) == pytest.approx(75.2)
    assert attenuation_coefficient(0.5, BiomassAttenuation(epsilon=0.15)) == pytest.approx(75.0)
    assert attenuation_model_from_dict({"model": "beer-lambert", "epsilon": 0.1}) == BiomassAttenuation(0.1)
    with pytest.raises(ConfigurationError):
        attenuation_model_from_dict({"model": "two-component", "ka": 1.0})
    with pytest.raises(ConfigurationError):
        attenuation_model_from_dict({"model": "mie"})
    with pytest.raises(ConfigurationError):
        TwoComponentAttenuation(epsilon=0.0)
    with pytest.raises(ConfigurationError):
        TwoComponentAttenuation(kb=-0.1)


def test_clear_culture_passes_surface_light():
    clear = TwoComponentAttenuation(epsilon=0.15, kb=0.0)
    r = compute_par(500.0, 100.0, 45.0, 0.0, 0.2, clear)
    assert r.K == 0.0
    assert r.par_avg_culture == pytest.approx(r.par_surface)
    assert r.lighted_fraction == 1.0


def test_compute_par():
    r = compute_par(800.0, 100.0, 90.0, 0.5, 0.2, TwoComponentAttenuation())
    assert r.fresnel_direct == pytest.approx(0.98)
    assert r.par_direct_surface == pytest.approx(800.0 * PAR_COMBINED * 0.98)
    assert r.par_diffuse_surface == pytest.approx(100.0 * PAR_COMBINED * fresnel_transmission(60.0))
    assert 0.0 < r.par_avg_culture < r.par_surface
    assert r.lighted_fraction == pytest.approx(math.log(r.par_surface) / r.K / 0.2)

    low = compute_par(800.0, 100.0, 10.0, 0.5, 0.2, TwoComponentAttenuation())
    assert low.fresnel_direct < r.fresnel_direct

    night = compute_par(0.0, 0.0, -20.0, 0.5, 0.2, TwoComponentAttenuation())
    assert night.fresnel_direct == 0.0
    assert night.par_avg_culture == 0.0
    assert night.lighted_fraction == 0.0


def test_all():
    test_fresnel_transmission()
    test_refraction()
    test_beer_lambert_average()
    test_attenuation()
    test_clear_culture_passes_surface_light()
    test_compute_par()
    print("test_pondlpm_optics passed all tests")

if __name__=="__main__":
    test_all()
