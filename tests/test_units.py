import math
import pytest
from cbgen.physics.constants import AU_M, JUPITER_MASS_KG, SOLAR_CONSTANT_1AU_W_M2, SOLAR_LUMINOSITY_W, irradiance_from_luminosity_w_m2
from cbgen.physics.thermal import (
	equilibrium_temperature_K, planet_equilibrium_temperature_K, surface_temperature_K, tidal_heating_W, volcanism_heat_ratio,
)


def test_solar_constant_positive():
	assert SOLAR_CONSTANT_1AU_W_M2 > 1000


def test_irradiance_matches_solar_constant():
	assert irradiance_from_luminosity_w_m2(SOLAR_LUMINOSITY_W, AU_M) == pytest.approx(SOLAR_CONSTANT_1AU_W_M2, rel=1e-3)
	assert irradiance_from_luminosity_w_m2(SOLAR_LUMINOSITY_W, 0.0) == 0.0


def test_equilibrium_temperature_scaling():
	T1 = equilibrium_temperature_K(alpha=1.0, epsilon=1.0, irradiance_w_m2=1000.0)
	T2 = equilibrium_temperature_K(alpha=1.0, epsilon=1.0, irradiance_w_m2=2000.0)
	assert T2 > T1
	assert math.isclose(T2 / T1, (2.0) ** 0.25, rel_tol=1e-6)


def test_equilibrium_temperature_rejects_zero_emissivity():
	with pytest.raises(ValueError):
		equilibrium_temperature_K(alpha=1.0, epsilon=0.0, irradiance_w_m2=1000.0)


def test_earth_equilibrium_temperature():
	# Bond albedo 0.3 at 1 AU gives the textbook ~255 K
	assert planet_equilibrium_temperature_K(SOLAR_LUMINOSITY_W, AU_M, 0.3) == pytest.approx(255.0, abs=2.0)


def test_surface_temperature_adds_internal_heat():
	base = surface_temperature_K(100.0, 1.0, 0.0, 1.0e6)
	assert base == pytest.approx(100.0)
	assert surface_temperature_K(100.0, 1.0, 1.0e16, 1.0e6) > base
	assert surface_temperature_K(100.0, 1.5, 0.0, 1.0e6) == pytest.approx(150.0)


def test_io_tidal_heating_order_of_magnitude():
	heat = tidal_heating_W(JUPITER_MASS_KG, 1.8216e6, 4.217e8, 0.0041)
	assert 1.0e13 < heat < 1.0e15
	assert tidal_heating_W(JUPITER_MASS_KG, 1.8216e6, 4.217e8, 0.0) == 0.0


def test_volcanism_ratio_saturates():
	assert volcanism_heat_ratio(0.0, 0.0) == 0.0
	assert volcanism_heat_ratio(5.0e13, 0.0) == pytest.approx(0.5)
	assert volcanism_heat_ratio(1.0e15, 1.0e15) == 1.0
