from __future__ import annotations
from ..bodies.bodies_schema import OrbitalProps, PhysicalProps
from ..physics.constants import AU_M, JUPITER_MASS_KG, JUPITER_RADIUS_M
from ..physics.gravity import hill_radius_m, roche_limit_m, bulk_density_kg_m3
from ..physics.orbits import orbital_period_s
from ..physics.tables import (
	Range, OrbitZone, ORBIT_ZONE_TABLE, get_distance_range, classify_orbit_zone, tidal_locking_timescale_years,
)
from ..rng import DeterministicRng
from .context import ParentContext
from .specs import BodyOverrides


def _angles(rng: DeterministicRng) -> tuple[float, float, float]:
	return rng.uniform(0.0, 360.0), rng.uniform(0.0, 360.0), rng.uniform(0.0, 360.0)


def _biased(max_value: float, rng: DeterministicRng) -> float:
	u = rng.random()
	return max_value * u * u


def is_tidally_locked(semi_major_axis_m: float, host_mass_kg: float, physical: PhysicalProps, system_age_years: float) -> bool:
	t_lock = tidal_locking_timescale_years(semi_major_axis_m, host_mass_kg, physical.mass_kg, physical.radius_m)
	return t_lock < system_age_years


def generate_planet_orbit(zone: OrbitZone, overrides: BodyOverrides, context: ParentContext, rng: DeterministicRng, physical: PhysicalProps) -> OrbitalProps:
	zone = OrbitZone(zone)
	zone_data = ORBIT_ZONE_TABLE[zone]
	if overrides.semi_major_axis_au is not None:
		a_au = overrides.semi_major_axis_au
	else:
		bounds = get_distance_range(zone, context.luminosity_solar)
		a_au = rng.uniform(bounds.min, bounds.max)
	e = overrides.eccentricity if overrides.eccentricity is not None else _biased(zone_data.max_eccentricity, rng)
	if overrides.inclination_deg is not None:
		inc = overrides.inclination_deg
	else:
		inc = min(zone_data.max_inclination_deg, abs(rng.normal(0.0, zone_data.max_inclination_deg / 3.0)))
	node, peri, mean_anomaly = _angles(rng)
	a_m = a_au * AU_M
	return OrbitalProps(
		semi_major_axis_m=a_m,
		eccentricity=e,
		inclination_deg=inc,
		longitude_of_ascending_node_deg=node,
		argument_of_periapsis_deg=peri,
		mean_anomaly_deg=mean_anomaly,
		orbital_period_s=orbital_period_s(a_m, context.star_mass_kg, physical.mass_kg),
		tidally_locked=is_tidally_locked(a_m, context.star_mass_kg, physical, context.star_age_years),
		zone=classify_orbit_zone(a_au, context.luminosity_solar).value,
	)


def generate_moon_orbit(
	distance_radii: Range,
	eccentricity: Range,
	overrides: BodyOverrides,
	context: ParentContext,
	rng: DeterministicRng,
	physical: PhysicalProps,
	*,
	retrograde_allowed: bool = False,
) -> OrbitalProps:
	"""Orbit around the context planet, kept outside the Roche limit and inside half the Hill radius."""
	planet_mass = context.planet_mass_kg or JUPITER_MASS_KG
	planet_radius = context.planet_radius_m or JUPITER_RADIUS_M
	planet_distance = context.planet_distance_m or 5.2 * AU_M

	if overrides.semi_major_axis_au is not None:
		a_m = overrides.semi_major_axis_au * AU_M
	else:
		a_m = planet_radius * rng.log_uniform(distance_radii.min, distance_radii.max)
		roche = roche_limit_m(planet_radius, bulk_density_kg_m3(planet_mass, planet_radius), physical.density_kg_m3)
		hill = hill_radius_m(planet_distance, 0.0, planet_mass, context.star_mass_kg)
		lower = max(roche, planet_radius) * 1.05
		if hill > 2.0 * lower:
			a_m = min(a_m, 0.5 * hill)
		a_m = max(a_m, lower)
	e = overrides.eccentricity if overrides.eccentricity is not None else rng.uniform(eccentricity.min, eccentricity.max)
	if overrides.inclination_deg is not None:
		inc = overrides.inclination_deg
	elif retrograde_allowed:
		inc = rng.uniform(0.0, 180.0)
	else:
		inc = min(180.0, abs(rng.normal(0.0, 1.0)))
	node, peri, mean_anomaly = _angles(rng)
	return OrbitalProps(
		semi_major_axis_m=a_m,
		eccentricity=e,
		inclination_deg=inc,
		longitude_of_ascending_node_deg=node,
		argument_of_periapsis_deg=peri,
		mean_anomaly_deg=mean_anomaly,
		orbital_period_s=orbital_period_s(a_m, planet_mass, physical.mass_kg),
		tidally_locked=is_tidally_locked(a_m, planet_mass, physical, context.star_age_years),
	)


def generate_heliocentric_orbit(a_range_au: Range, max_eccentricity: float, max_inclination_deg: float, overrides: BodyOverrides, context: ParentContext, rng: DeterministicRng, physical: PhysicalProps) -> OrbitalProps:
	"""Small-body orbit around the context star."""
	a_au = overrides.semi_major_axis_au if overrides.semi_major_axis_au is not None else rng.uniform(a_range_au.min, a_range_au.max)
	e = overrides.eccentricity if overrides.eccentricity is not None else _biased(max_eccentricity, rng)
	inc = overrides.inclination_deg if overrides.inclination_deg is not None else _biased(max_inclination_deg, rng)
	node, peri, mean_anomaly = _angles(rng)
	a_m = a_au * AU_M
	return OrbitalProps(
		semi_major_axis_m=a_m,
		eccentricity=e,
		inclination_deg=inc,
		longitude_of_ascending_node_deg=node,
		argument_of_periapsis_deg=peri,
		mean_anomaly_deg=mean_anomaly,
		orbital_period_s=orbital_period_s(a_m, context.star_mass_kg, physical.mass_kg),
		tidally_locked=False,
		zone=classify_orbit_zone(a_au, context.luminosity_solar).value,
	)
