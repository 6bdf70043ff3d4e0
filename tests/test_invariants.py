from cbgen.generation.asteroid import generate_asteroid
from cbgen.generation.moon import generate_moon
from cbgen.generation.planet import generate_planet
from cbgen.generation.specs import AsteroidSpec, MoonArchetype, MoonSpec, PlanetSpec
from cbgen.physics.tables import OrbitZone, SizeCategory


def _check(body):
	p = body.physical
	assert p.mass_kg > 0 and p.radius_m > 0
	assert 0.0 <= p.oblateness < 1.0
	assert p.internal_heat_watts >= 0
	if body.atmosphere is not None and body.atmosphere.composition:
		assert 0.99 <= sum(body.atmosphere.composition.values()) <= 1.01
		assert body.atmosphere.surface_pressure_pa >= 0
	if body.surface is not None:
		s = body.surface
		assert 0.0 <= s.albedo <= 1.0
		assert 0.0 <= s.volcanism_level <= 1.0
		assert s.temperature_k >= 0
		if s.terrain is not None:
			assert s.terrain.max_elevation_m > s.terrain.min_elevation_m
	if body.rings is not None:
		for band in body.rings.bands:
			assert band.inner_radius_m < band.outer_radius_m
			assert band.inner_radius_m >= p.radius_m
	if body.orbital is not None:
		assert body.orbital.semi_major_axis_m > 0
		assert 0.0 <= body.orbital.eccentricity < 1.0
		assert 0.0 <= body.orbital.inclination_deg <= 180.0


def test_planet_invariants_across_seeds(stamp):
	for size in SizeCategory:
		for zone in OrbitZone:
			for seed in range(3):
				_check(generate_planet(PlanetSpec(seed=seed, size_category=size, orbit_zone=zone), created_at=stamp))


def test_moon_and_asteroid_invariants_across_seeds(stamp, jovian):
	for archetype in MoonArchetype:
		for seed in range(10):
			_check(generate_moon(MoonSpec(seed=seed, archetype=archetype), jovian, created_at=stamp))
	for seed in range(30):
		_check(generate_asteroid(AsteroidSpec(seed=seed), created_at=stamp))
