import math
import pytest
from cbgen.bodies.bodies_schema import AtmosphereProps, PhysicalProps
from cbgen.generation.atmosphere import (
	AtmosphereRegime, MAX_GREENHOUSE_FACTOR, composition_regime, generate_atmosphere, greenhouse_factor,
	sample_composition, should_have_atmosphere,
)
from cbgen.generation.physical import radiogenic_heat_W, rotational_oblateness
from cbgen.generation.rings import generate_rings
from cbgen.generation.specs import BodyOverrides
from cbgen.generation.surface import (
	MAX_ELEVATION_RANGE_M, MIN_ELEVATION_RANGE_M, boiling_point_K, elevation_range_m, generate_cryosphere,
	generate_hydrosphere, has_subsurface_ocean, volcanism_level,
)
from cbgen.physics.constants import EARTH_MASS_KG, EARTH_RADIUS_M, JUPITER_MASS_KG, JUPITER_RADIUS_M
from cbgen.physics.gravity import can_retain_atmosphere, jeans_escape_parameter
from cbgen.rng import DeterministicRng

EARTH = PhysicalProps(mass_kg=EARTH_MASS_KG, radius_m=EARTH_RADIUS_M)
PEBBLE = PhysicalProps(mass_kg=1.0e15, radius_m=5.0e3)


def test_jeans_gate():
	assert can_retain_atmosphere(EARTH.mass_kg, EARTH.radius_m, 288.0)
	assert not can_retain_atmosphere(PEBBLE.mass_kg, PEBBLE.radius_m, 288.0)
	assert math.isinf(jeans_escape_parameter(EARTH.mass_kg, EARTH.radius_m, 0.0))


def test_atmosphere_gate_respects_override_and_jeans():
	rng = DeterministicRng(1)
	assert should_have_atmosphere(PEBBLE, 300.0, 1.0, True, rng)
	assert not should_have_atmosphere(EARTH, 288.0, 1.0, False, rng)
	assert not should_have_atmosphere(PEBBLE, 300.0, 1.0, None, rng)
	assert should_have_atmosphere(EARTH, 288.0, 1.0, None, rng)
	assert not should_have_atmosphere(EARTH, 288.0, 0.0, None, rng)


def test_composition_regimes():
	assert composition_regime(1000.0, giant=True) is AtmosphereRegime.HYDROGEN
	assert composition_regime(100.0) is AtmosphereRegime.NITROGEN_METHANE
	assert composition_regime(180.0) is AtmosphereRegime.THIN_CO2
	assert composition_regime(180.0, nitrogen_methane=True) is AtmosphereRegime.NITROGEN_METHANE
	assert composition_regime(290.0) is AtmosphereRegime.TEMPERATE_NITROGEN
	assert composition_regime(700.0) is AtmosphereRegime.THICK_CO2


def test_sampled_compositions_sum_to_one():
	rng = DeterministicRng(5)
	for regime in AtmosphereRegime:
		for _ in range(20):
			comp = sample_composition(regime, rng)
			assert sum(comp.values()) == pytest.approx(1.0, abs=1e-9)
			assert all(0.0 <= v <= 1.0 for v in comp.values())


def test_greenhouse_factor():
	assert greenhouse_factor(0.0, {"CO2": 1.0}) == 1.0
	assert 1.0 < greenhouse_factor(1.0e5, {"N2": 0.78, "O2": 0.21, "Ar": 0.01}) < 1.3
	assert greenhouse_factor(9.0e6, {"CO2": 0.96, "N2": 0.04}) == MAX_GREENHOUSE_FACTOR


def test_atmosphere_overrides():
	o = BodyOverrides(surface_pressure_pa=1.0e5, atmosphere_composition={"N2": 4.0, "O2": 1.0})
	atm = generate_atmosphere(EARTH, 255.0, AtmosphereRegime.TEMPERATE_NITROGEN, o, DeterministicRng(2))
	assert atm.surface_pressure_pa == 1.0e5
	assert atm.composition == pytest.approx({"N2": 0.8, "O2": 0.2})
	assert 5.0e3 < atm.scale_height_m < 1.5e4


def test_elevation_range_clamped():
	rng = DeterministicRng(3)
	assert elevation_range_m(0.0, rng) == MAX_ELEVATION_RANGE_M
	assert elevation_range_m(0.01, rng) == MAX_ELEVATION_RANGE_M
	assert elevation_range_m(1.0e4, rng) == MIN_ELEVATION_RANGE_M
	assert MIN_ELEVATION_RANGE_M < elevation_range_m(9.81, rng) < MAX_ELEVATION_RANGE_M


def test_volcanism_follows_heat():
	rng = DeterministicRng(4)
	assert volcanism_level(0.0, 0.0, None, rng) == 0.0
	assert 0.8 <= volcanism_level(1.0e16, 0.0, None, rng) <= 1.0
	assert volcanism_level(0.0, 0.0, 0.4, rng) == 0.4


def test_subsurface_ocean_heat_bands():
	rng = DeterministicRng(6)
	assert not any(has_subsurface_ocean(1.0e9, None, rng) for _ in range(50))
	assert has_subsurface_ocean(0.0, True, rng)
	high = sum(has_subsurface_ocean(1.0e13, None, rng) for _ in range(400))
	moderate = sum(has_subsurface_ocean(1.0e11, None, rng) for _ in range(400))
	assert high > moderate > 0


def test_hydrosphere_needs_liquid_water():
	rng = DeterministicRng(7)
	air = AtmosphereProps(surface_pressure_pa=1.0e5, scale_height_m=8.5e3, composition={"N2": 1.0})
	assert generate_hydrosphere(288.0, None, BodyOverrides(), rng) is None
	assert generate_hydrosphere(150.0, air, BodyOverrides(), rng) is None
	hydro = generate_hydrosphere(288.0, air, BodyOverrides(), rng)
	assert hydro is not None and 0.0 < hydro.ocean_coverage < 1.0
	assert hydro.ocean_coverage + hydro.ice_coverage <= 1.0
	assert boiling_point_K(101325.0) == pytest.approx(373.15)


def test_cold_icy_body_has_full_polar_caps():
	cryo = generate_cryosphere(100.0, 0.0, True, None, BodyOverrides(), DeterministicRng(8))
	assert cryo.polar_cap_coverage == 1.0
	assert not cryo.has_subsurface_ocean
	assert generate_cryosphere(320.0, 0.0, False, None, BodyOverrides(), DeterministicRng(8)) is None


def test_rings_ordered_and_outside_parent():
	giant = PhysicalProps(mass_kg=JUPITER_MASS_KG, radius_m=JUPITER_RADIUS_M)
	for seed in range(20):
		rings = generate_rings(giant, 90.0, DeterministicRng(seed))
		assert 1 <= len(rings.bands) <= 5
		assert rings.total_mass_kg > 0
		assert rings.bands[0].inner_radius_m >= 1.1 * giant.radius_m
		assert rings.bands[-1].outer_radius_m <= 3.0 * giant.radius_m
		for inner, outer in zip(rings.bands, rings.bands[1:]):
			assert inner.outer_radius_m <= outer.inner_radius_m
		assert "water_ice" in rings.bands[0].composition


def test_physical_helpers():
	assert radiogenic_heat_W(EARTH_MASS_KG, 4.6e9) == pytest.approx(4.4e13, rel=0.05)
	assert rotational_oblateness(EARTH_MASS_KG, EARTH_RADIUS_M, None) == 0.0
	assert 0.0 < rotational_oblateness(EARTH_MASS_KG, EARTH_RADIUS_M, 86164.0) < 0.01
	assert rotational_oblateness(EARTH_MASS_KG, EARTH_RADIUS_M, 600.0) == 0.5
