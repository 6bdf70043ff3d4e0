from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional
from ..bodies.bodies_schema import BodyType, CelestialBody
from ..bodies.provenance import make_provenance
from ..physics.tables import Range
from ..physics.thermal import planet_equilibrium_temperature_K
from ..rng import DeterministicRng
from .atmosphere import composition_regime, generate_atmosphere, should_have_atmosphere
from .context import ParentContext
from .naming import make_body_id, make_name
from .orbital import generate_heliocentric_orbit
from .physical import MassBounds, generate_physical
from .specs import AsteroidClass, AsteroidSpec
from .surface import generate_surface

logger = logging.getLogger(__name__)

MAX_ASTEROID_ECCENTRICITY = 0.3
MAX_ASTEROID_INCLINATION_DEG = 20.0


@dataclass(frozen=True)
class AsteroidClassData:
	density: Range
	albedo: Range
	surface_type: str
	icy: bool = False


ASTEROID_CLASSES: Mapping[AsteroidClass, AsteroidClassData] = MappingProxyType({
	AsteroidClass.CARBONACEOUS: AsteroidClassData(Range(1200.0, 2200.0), Range(0.03, 0.1), "carbonaceous", icy=True),
	AsteroidClass.SILICACEOUS: AsteroidClassData(Range(2200.0, 3500.0), Range(0.1, 0.3), "regolith"),
	AsteroidClass.METALLIC: AsteroidClassData(Range(4500.0, 7500.0), Range(0.1, 0.25), "metallic"),
})


def _sphere_volume(radius_m: float) -> float:
	return 4.0 / 3.0 * math.pi * radius_m ** 3


def generate_asteroid(spec: AsteroidSpec, context: Optional[ParentContext] = None, rng: Optional[DeterministicRng] = None, created_at: Optional[str] = None) -> CelestialBody:
	context = context if context is not None else ParentContext.sun_like()
	rng = rng if rng is not None else DeterministicRng(spec.seed)
	o = spec.overrides
	cls = ASTEROID_CLASSES[AsteroidClass(spec.asteroid_class)]

	body_id = make_body_id(rng, BodyType.ASTEROID)
	name = spec.name or make_name(rng, "asteroid")
	# mass bounds follow from the radius range at the class density extremes
	bounds = MassBounds(
		mass_kg=Range(_sphere_volume(spec.min_radius_m) * cls.density.min, _sphere_volume(spec.max_radius_m) * cls.density.max),
		density=cls.density,
		radius_m=Range(spec.min_radius_m, spec.max_radius_m),
	)
	physical = generate_physical(bounds, o, rng, age_years=context.star_age_years, irregular=True, rotation_hours=Range(2.0, 30.0))
	a_lo, a_hi = spec.semi_major_axis_range_au
	orbital = generate_heliocentric_orbit(Range(a_lo, a_hi), MAX_ASTEROID_ECCENTRICITY, MAX_ASTEROID_INCLINATION_DEG, o, context, rng, physical)

	albedo = o.albedo if o.albedo is not None else rng.uniform(cls.albedo.min, cls.albedo.max)
	t_eq = planet_equilibrium_temperature_K(context.star_luminosity_watts, orbital.semi_major_axis_m, albedo)
	atmosphere = None
	if should_have_atmosphere(physical, t_eq, 0.0, o.has_atmosphere, rng):
		atmosphere = generate_atmosphere(physical, t_eq, composition_regime(t_eq), o, rng)
	surface = generate_surface(physical, t_eq, atmosphere, 0.0, o, rng, albedo=albedo, icy=cls.icy, default_type=cls.surface_type)

	logger.debug("generated %s-type asteroid %s (%s), r=%.0f m", cls.surface_type, name, body_id, physical.radius_m)
	return CelestialBody(
		id=body_id,
		name=name,
		type=BodyType.ASTEROID,
		parent_id=context.star_id,
		physical=physical,
		orbital=orbital,
		surface=surface,
		atmosphere=atmosphere,
		provenance=make_provenance(rng.seed, spec, created_at),
	)
