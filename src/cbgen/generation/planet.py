from __future__ import annotations
import logging
from typing import Optional
from ..bodies.bodies_schema import BodyType, CelestialBody
from ..bodies.provenance import make_provenance
from ..physics.tables import SizeCategory, OrbitZone, SIZE_TABLE
from ..physics.thermal import planet_equilibrium_temperature_K
from ..rng import DeterministicRng
from .atmosphere import composition_regime, generate_atmosphere, should_have_atmosphere
from .context import ParentContext
from .naming import make_body_id, make_name
from .orbital import generate_planet_orbit
from .physical import bounds_for_size, generate_physical, with_rotation
from .rings import generate_rings, should_have_rings
from .specs import PlanetSpec
from .surface import draw_albedo, generate_surface

logger = logging.getLogger(__name__)

_ICY_ZONES = (OrbitZone.COLD, OrbitZone.OUTER)


def generate_planet(spec: PlanetSpec, context: Optional[ParentContext] = None, rng: Optional[DeterministicRng] = None, created_at: Optional[str] = None) -> CelestialBody:
	"""Planet around the context star.

	Order of derivation: bulk properties, orbit (and spin lock), albedo and
	equilibrium temperature, atmosphere, then the solid surface for non-giants
	and finally rings.
	"""
	context = context if context is not None else ParentContext.sun_like()
	rng = rng if rng is not None else DeterministicRng(spec.seed)
	o = spec.overrides
	category = SizeCategory(spec.size_category)
	size = SIZE_TABLE[category]
	body_type = BodyType.DWARF_PLANET if category is SizeCategory.DWARF else BodyType.PLANET

	body_id = make_body_id(rng, body_type)
	name = spec.name or make_name(rng, "planet")
	physical = generate_physical(bounds_for_size(category), o, rng, age_years=context.star_age_years, giant=size.giant)
	orbital = generate_planet_orbit(spec.orbit_zone, o, context, rng, physical)
	if orbital.tidally_locked and o.rotation_period_s is None:
		physical = with_rotation(physical, orbital.orbital_period_s)

	icy = OrbitZone(spec.orbit_zone) in _ICY_ZONES
	albedo = o.albedo if o.albedo is not None else draw_albedo(rng, icy=icy, giant=size.giant)
	t_eq = planet_equilibrium_temperature_K(context.star_luminosity_watts, orbital.semi_major_axis_m, albedo)

	atmosphere = None
	if should_have_atmosphere(physical, t_eq, size.atmosphere_probability, o.has_atmosphere, rng):
		atmosphere = generate_atmosphere(physical, t_eq, composition_regime(t_eq, giant=size.giant), o, rng)

	surface = None
	if not size.giant:
		surface = generate_surface(physical, t_eq, atmosphere, 0.0, o, rng, albedo=albedo, icy=icy)

	rings = None
	if should_have_rings(size.ring_probability, o.has_rings, rng):
		rings = generate_rings(physical, t_eq, rng)

	logger.debug("generated %s %s (%s) at %.3g m, T_eq=%.0f K", category.value, name, body_id, orbital.semi_major_axis_m, t_eq)
	return CelestialBody(
		id=body_id,
		name=name,
		type=body_type,
		parent_id=context.star_id,
		physical=physical,
		orbital=orbital,
		surface=surface,
		atmosphere=atmosphere,
		rings=rings,
		provenance=make_provenance(rng.seed, spec, created_at),
	)
