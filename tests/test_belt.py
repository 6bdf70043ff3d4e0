import math
import pytest
from cbgen.generation.belt import (
	generate_field, radial_density, sample_longitude, sample_power_law_radius, sample_radial_position,
)
from cbgen.generation.specs import BeltFieldSpec, BeltGap, MajorBodySpec
from cbgen.physics.orbits import orbital_radius
from cbgen.rng import DeterministicRng

CERES = MajorBodySpec(
	name="Ceres", semi_major_axis_au=2.77, eccentricity=0.076, inclination_deg=10.6,
	longitude_of_ascending_node_deg=80.3, argument_of_periapsis_deg=73.6, mean_anomaly_deg=95.99, radius_m=4.7e5,
)


def _spec(**kw):
	base = dict(seed=2024, asteroid_count=500, gaps=[BeltGap(center_au=2.5, half_width_au=0.05), BeltGap(center_au=2.82, half_width_au=0.04)])
	base.update(kw)
	return BeltFieldSpec(**base)


def test_background_asteroids_inside_belt_and_outside_gaps():
	spec = _spec()
	field = generate_field(spec)
	assert len(field.background()) == spec.asteroid_count
	for a in field.background():
		assert spec.inner_radius_au <= a.semi_major_axis_au <= spec.outer_radius_au
		assert not spec.in_gap(a.semi_major_axis_au)
		assert 0.0 <= a.eccentricity <= spec.max_eccentricity
		assert 0.0 <= a.inclination_deg <= spec.max_inclination_deg
		assert spec.min_radius_m <= a.radius_m <= spec.max_radius_m


def test_field_is_deterministic():
	spec = _spec(cluster_count=2, cluster_fraction=0.5, majors=[CERES])
	assert generate_field(spec) == generate_field(spec)
	assert generate_field(spec) != generate_field(_spec(seed=2025, cluster_count=2, cluster_fraction=0.5, majors=[CERES]))


def test_majors_follow_background_and_keep_elements():
	field = generate_field(_spec(asteroid_count=50, majors=[CERES]))
	assert not any(a.is_major for a in field.asteroids[:50])
	(ceres,) = field.majors()
	assert field.asteroids[-1] == ceres
	assert ceres.name == "Ceres"
	assert ceres.semi_major_axis_au == 2.77
	assert ceres.radius_m == 4.7e5
	r = math.sqrt(sum(c * c for c in ceres.position_au))
	assert r == pytest.approx(orbital_radius(2.77, 0.076, math.radians(ceres.true_anomaly_deg)))


def test_major_placement_ignores_seed():
	a = generate_field(_spec(seed=1, asteroid_count=10, majors=[CERES])).majors()[0]
	b = generate_field(_spec(seed=2, asteroid_count=10, majors=[CERES])).majors()[0]
	assert a == b


def test_positions_match_elements():
	for a in generate_field(_spec(asteroid_count=100)).asteroids:
		r = math.sqrt(sum(c * c for c in a.position_au))
		assert r == pytest.approx(orbital_radius(a.semi_major_axis_au, a.eccentricity, math.radians(a.true_anomaly_deg)))
		assert abs(a.position_au[2]) <= r * math.sin(math.radians(a.inclination_deg)) + 1e-12


def test_radial_concentration_favours_mid_belt():
	assert radial_density(0.5, 2.0) > radial_density(0.1, 2.0)
	assert radial_density(0.3, 0.0) == radial_density(0.7, 0.0) == 1.0
	spec = BeltFieldSpec(seed=3, radial_concentration=4.0)
	rng = DeterministicRng(3)
	draws = [sample_radial_position(spec, rng) for _ in range(400)]
	mid = 0.5 * (spec.inner_radius_au + spec.outer_radius_au)
	near = sum(abs(r - mid) < 0.25 * (spec.outer_radius_au - spec.inner_radius_au) for r in draws)
	assert near > 0.7 * len(draws)


def test_radial_sampling_falls_back_to_midpoint(caplog):
	spec = BeltFieldSpec(inner_radius_au=2.0, outer_radius_au=2.2, gaps=[BeltGap(center_au=2.1, half_width_au=0.5)])
	assert sample_radial_position(spec, DeterministicRng(0)) == pytest.approx(2.1)
	assert "exhausted" in caplog.text


def test_power_law_bounds_and_slope():
	rng = DeterministicRng(11)
	small = [sample_power_law_radius(2.5, 100.0, 1.0e5, rng) for _ in range(2000)]
	assert all(100.0 <= r <= 1.0e5 for r in small)
	# steep size distribution: most bodies are near the lower bound
	assert sum(r < 1000.0 for r in small) > 0.9 * len(small)
	flat = [sample_power_law_radius(1.0, 100.0, 1.0e5, rng) for _ in range(500)]
	assert all(100.0 <= r <= 1.0e5 for r in flat)
	assert sample_power_law_radius(2.5, 10.0, 10.0, rng) == 10.0


def test_clustered_longitudes_concentrate():
	spec = BeltFieldSpec(cluster_count=1, cluster_fraction=1.0, cluster_concentration=25.0)
	rng = DeterministicRng(5)
	center = 1.0
	draws = [sample_longitude(spec, [center], rng) for _ in range(500)]
	close = sum(abs(math.remainder(d - center, 2.0 * math.pi)) < 0.6 for d in draws)
	assert close > 0.95 * len(draws)
	assert all(0.0 <= d < 2.0 * math.pi for d in draws)


def test_empty_belt():
	field = generate_field(BeltFieldSpec(asteroid_count=0))
	assert field.asteroids == []
	assert field.generation_seed == 0
