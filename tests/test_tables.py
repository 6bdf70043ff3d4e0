import math
import pytest
from cbgen.physics.tables import (
	MAX_SUB_RANK, OrbitZone, Range, SizeCategory, StellarClass, StellarProperty, STELLAR_TABLE,
	classify_orbit_zone, classify_size_by_mass, classify_star_by_mass, classify_star_by_temperature,
	get_distance_range, interpolate_stellar, luminosity_from_mass, radius_from_luminosity_temperature, radius_from_mass,
	radius_from_mass_density, temperature_from_luminosity_radius,
)
from cbgen.physics.materials import MaterialsRegistry, SURFACE_MATERIALS, normalized


def test_range_helpers():
	r = Range(2.0, 4.0)
	assert r.lerp(0.25) == 2.5
	assert r.clamp(9.0) == 4.0
	assert r.clamp(-1.0) == 2.0
	assert r.contains(3.0)
	assert r.mid == 3.0


def test_interpolation_spans_class_range():
	g = STELLAR_TABLE[StellarClass.G]
	assert interpolate_stellar(StellarClass.G, 0, StellarProperty.MASS) == pytest.approx(g.mass.max)
	assert interpolate_stellar(StellarClass.G, MAX_SUB_RANK, StellarProperty.MASS) == pytest.approx(g.mass.min)
	# out-of-range sub-ranks clamp to the class edges
	assert interpolate_stellar(StellarClass.G, -3, StellarProperty.TEMPERATURE) == pytest.approx(g.temperature.max)
	assert interpolate_stellar(StellarClass.G, 40, StellarProperty.TEMPERATURE) == pytest.approx(g.temperature.min)


def test_lifetime_grows_toward_cooler_subranks():
	hot = interpolate_stellar(StellarClass.K, 0, StellarProperty.LIFETIME)
	cool = interpolate_stellar(StellarClass.K, 9, StellarProperty.LIFETIME)
	assert hot < cool


def test_stellar_classification():
	assert classify_star_by_temperature(5772.0) is StellarClass.G
	assert classify_star_by_temperature(40000.0) is StellarClass.O
	assert classify_star_by_temperature(1000.0) is StellarClass.M
	assert classify_star_by_mass(1.0) is StellarClass.G
	assert classify_star_by_mass(0.1) is StellarClass.M


def test_size_classification():
	assert classify_size_by_mass(1.0) is SizeCategory.TERRESTRIAL
	assert classify_size_by_mass(317.8) is SizeCategory.GAS_GIANT
	assert classify_size_by_mass(1.0e5) is SizeCategory.SUPER_JUPITER


def test_distance_ranges_scale_with_luminosity():
	sun = get_distance_range(OrbitZone.TEMPERATE, 1.0)
	bright = get_distance_range(OrbitZone.TEMPERATE, 4.0)
	assert bright.min == pytest.approx(2.0 * sun.min)
	assert bright.max == pytest.approx(2.0 * sun.max)
	assert classify_orbit_zone(1.0) is OrbitZone.TEMPERATE
	assert classify_orbit_zone(2.0, 4.0) is OrbitZone.TEMPERATE
	assert classify_orbit_zone(100.0) is OrbitZone.OUTER


def test_stellar_relations_at_solar_values():
	assert luminosity_from_mass(1.0) == 1.0
	assert radius_from_mass(1.0) == 1.0
	assert radius_from_mass(0.0) == 0.0
	assert temperature_from_luminosity_radius(1.0, 1.0) == pytest.approx(5772.0)
	assert radius_from_luminosity_temperature(1.0, 5772.0) == pytest.approx(1.0)
	assert radius_from_mass_density(5.9722e24, 5514.0) == pytest.approx(6.371e6, rel=1e-3)
	assert radius_from_mass_density(1.0, 0.0) == 0.0


def test_surface_materials_are_normalised():
	for name, composition in SURFACE_MATERIALS.items():
		assert math.isclose(sum(composition.values()), 1.0, abs_tol=1e-9), name


def test_materials_registry():
	reg = MaterialsRegistry()
	icy = reg.get("icy")
	icy["water_ice"] = 0.0
	assert reg.get("icy") != icy
	assert reg.get("no-such-surface") == reg.get("rocky")
	assert sum(normalized({"a": 2.0, "b": 2.0}).values()) == pytest.approx(1.0)
