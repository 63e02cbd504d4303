import math
import pytest
import os,sys
try:
    from pondlpm.heat import *
except ImportError:
    # Add the next directory up to the path if pondlpm not in it
    sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
    from pondlpm.heat import *
from pondlpm.errors import NumericalError
from pondlpm.solvers import ensure_finite, grow_exponential, step_temperature

BALANCE = dict(T_pond=28.0, T_air=24.0, T_dew=12.0, T_soil=22.0, cloud_cover=40.0, u10=4.0,
               direct=600.0, diffuse=150.0, solar_elevation=55.0, X=0.6, mu_net=1.2,
               depth=0.2, area_surface=4000.0, area_soil=4100.0)


def test_vapour_pressure_and_wind():
    assert saturation_vapor_pressure(20.0) == pytest.approx(2.338, rel=1e-3)
    assert vapor_pressure(12.0) == saturation_vapor_pressure(12.0)
    assert wind_speed_2m(10.0) == pytest.approx(10.0 * math.log(2000.0) / math.log(10000.0))
    assert wind_speed_2m(0.0) == 0.0


def test_individual_terms():
    # saturated air at pond temperature: no evaporation
    assert q_evaporation(20.0, saturation_vapor_pressure(20.0), 3.0) == 0.0
    assert q_evaporation(30.0, 1.0, 3.0) > q_evaporation(30.0, 1.0, 1.0) > 0.0
    # Bowen ratio form
    assert q_convection(30.0, 20.0, 4.0, 2.0, 100.0, 1.0) == pytest.approx(61.3 * 10.0 / 2000.0 * 100.0)
    # McAdams fallback when the vapour-pressure difference vanishes
    assert q_convection(20.0, 25.0, 2.0, 2.0, 0.0, 1.0) == pytest.approx((3.0 + 4.2) * -5.0)
    assert q_conduction(25.0, 25.0, 4000.0, 4100.0) == 0.0
    assert q_conduction(30.0, 20.0, 4000.0, 4000.0) == pytest.approx(1.5 * 10.0 / 0.5)
    assert q_longwave_out(30.0) > q_longwave_out(20.0)
    assert q_longwave_in(20.0, 10.0, 1.0) == pytest.approx(1.2 * q_longwave_in(20.0, 10.0, 0.0))
    assert q_solar(0.0, 0.0, -10.0) == 0.0
    assert q_solar(500.0, 0.0, -1.0) == 0.0


def test_biomass_term_is_signed():
    assert q_biomass(1.0, 1.0, 0.2) == pytest.approx(20.0e6 * 0.2 / 86400.0)
    assert q_biomass(1.0, -0.05, 0.2) < 0.0
    assert q_biomass(0.0, 2.0, 0.2) == 0.0


def test_net_flux_is_signed_sum():
    h = compute_heat_balance(**BALANCE)
    c = h.components()
    assert set(c) == {"q_solar", "q_longwave_in", "q_longwave_out", "q_evap",
                      "q_convection", "q_conduction", "q_biomass"}
    expected = (c["q_solar"] + c["q_longwave_in"] - c["q_longwave_out"] - c["q_evap"]
                - c["q_convection"] - c["q_conduction"] - c["q_biomass"])
    assert h.q_net == pytest.approx(expected)
    assert h.u2 == pytest.approx(wind_speed_2m(4.0))
    assert compute_heat_balance(**dict(BALANCE, u2=1.5)).u2 == 1.5
    assert h.dT(0.2, 3600.0) == pytest.approx(h.q_net * 3600.0 / (1000.0 * 4186.0 * 0.2))


def test_non_finite_flux_raises():
    with pytest.raises(NumericalError) as e:
        compute_heat_balance(**dict(BALANCE, T_air=float("nan")))
    assert e.value.quantity == "q_longwave_in"
    assert e.value.day is None


def test_solvers():
    assert grow_exponential(1.0, 24.0 * math.log(2.0)) == pytest.approx(2.0)
    assert grow_exponential(0.5, 0.0) == 0.5
    assert 0.0 < grow_exponential(0.5, -100.0) < 0.5
    with pytest.raises(NumericalError):
        grow_exponential(1.0, 1.0e6)
    with pytest.raises(NumericalError):
        ensure_finite("x", float("-inf"))

    h = compute_heat_balance(**BALANCE)
    assert step_temperature(28.0, h, 0.2) == pytest.approx(28.0 + h.dT(0.2, 3600.0))
    hot = HeatFluxes(q_solar=float("inf"), q_longwave_in=0.0, q_longwave_out=0.0, q_evap=0.0,
                     q_convection=0.0, q_conduction=0.0, q_biomass=0.0, u2=1.0)
    with pytest.raises(NumericalError):
        step_temperature(28.0, hot, 0.2)


def test_all():
    test_vapour_pressure_and_wind()
    test_individual_terms()
    test_biomass_term_is_signed()
    test_net_flux_is_signed_sum()
    test_non_finite_flux_raises()
    test_solvers()
    print("test_pondlpm_heat passed all tests")

if __name__=="__main__":
    test_all()
