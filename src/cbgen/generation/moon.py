from __future__ import annotations
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional
from ..bodies.bodies_schema import BodyType, CelestialBody
from ..bodies.provenance import make_provenance
from ..physics.tables import Range
from ..physics.thermal import planet_equilibrium_temperature_K, tidal_heating_W
from ..rng import DeterministicRng
from .atmosphere import composition_regime, generate_atmosphere, should_have_atmosphere
from .context import ParentContext
from .naming import make_body_id, make_name
from .orbital import generate_moon_orbit
from .physical import MassBounds, generate_physical, with_rotation
from .rings import generate_rings
from .specs import MoonArchetype, MoonSpec
from .surface import generate_surface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoonArchetypeData:
	mass_kg: Range
	density: Range
	distance_radii: Range  # semi-major axis in host planet radii
	eccentricity: Range
	albedo: Range
	atmosphere_probability: float
	surface_type: str
	icy: bool = False
	nitrogen_methane: bool = False
	irregular: bool = False


MOON_ARCHETYPES: Mapping[MoonArchetype, MoonArchetypeData] = MappingProxyType({
	# Luna, Callisto-class rock
	MoonArchetype.REGULAR_ROCKY: MoonArchetypeData(Range(1.0e21, 1.0e23), Range(3000.0, 3600.0), Range(5.0, 60.0), Range(0.0, 0.06), Range(0.07, 0.2), 0.02, "regolith"),
	# Europa, Ganymede, Enceladus
	MoonArchetype.ICY: MoonArchetypeData(Range(1.0e20, 1.5e23), Range(1000.0, 2000.0), Range(3.0, 30.0), Range(0.001, 0.01), Range(0.4, 0.9), 0.02, "icy", icy=True),
	# Io: close, forced eccentricity, strong tides
	MoonArchetype.VOLCANIC: MoonArchetypeData(Range(5.0e22, 1.2e23), Range(3000.0, 3600.0), Range(4.0, 8.0), Range(0.003, 0.01), Range(0.5, 0.65), 0.1, "volcanic"),
	# Titan: thick nitrogen-methane envelope
	MoonArchetype.TITAN_LIKE: MoonArchetypeData(Range(0.8e23, 1.6e23), Range(1700.0, 2000.0), Range(10.0, 30.0), Range(0.0, 0.03), Range(0.15, 0.3), 1.0, "hazy", icy=True, nitrogen_methane=True),
	# Phobos-like captured rubble
	MoonArchetype.CAPTURED: MoonArchetypeData(Range(1.0e15, 1.0e19), Range(1500.0, 2500.0), Range(2.5, 300.0), Range(0.0, 0.4), Range(0.03, 0.1), 0.0, "carbonaceous", irregular=True),
})


def generate_moon(spec: MoonSpec, context: Optional[ParentContext] = None, rng: Optional[DeterministicRng] = None, created_at: Optional[str] = None) -> CelestialBody:
	"""Moon of the context planet, heated by the context star and by planetary tides."""
	context = context if context is not None else ParentContext.jupiter_like()
	if not context.has_planet:
		logger.warning("moon %s generated without a host planet; assuming a Jupiter-like host", spec.name or spec.seed)
		jupiter = ParentContext.jupiter_like()
		context = context.model_copy(update={
			"planet_mass_kg": jupiter.planet_mass_kg,
			"planet_radius_m": jupiter.planet_radius_m,
			"planet_distance_m": context.planet_distance_m or jupiter.planet_distance_m,
		})
	elif context.planet_distance_m is None:
		logger.debug("host planet of moon %s has no orbit; placing it at a Jupiter-like distance", spec.name or spec.seed)
		context = context.model_copy(update={"planet_distance_m": ParentContext.jupiter_like().planet_distance_m})
	rng = rng if rng is not None else DeterministicRng(spec.seed)
	o = spec.overrides
	arch = MOON_ARCHETYPES[MoonArchetype(spec.archetype)]

	body_id = make_body_id(rng, BodyType.MOON)
	name = spec.name or make_name(rng, "moon")
	bounds = MassBounds(mass_kg=arch.mass_kg, density=arch.density)
	physical = generate_physical(
		bounds, o, rng,
		age_years=context.star_age_years,
		irregular=arch.irregular,
		rotation_hours=Range(5.0, 100.0),
		max_tilt_deg=6.0,
	)
	orbital = generate_moon_orbit(arch.distance_radii, arch.eccentricity, o, context, rng, physical, retrograde_allowed=arch.irregular)
	if orbital.tidally_locked and o.rotation_period_s is None and not arch.irregular:
		physical = with_rotation(physical, orbital.orbital_period_s)

	tidal = tidal_heating_W(context.planet_mass_kg, physical.radius_m, orbital.semi_major_axis_m, orbital.eccentricity)

	albedo = o.albedo if o.albedo is not None else rng.uniform(arch.albedo.min, arch.albedo.max)
	t_eq = planet_equilibrium_temperature_K(context.star_luminosity_watts, context.planet_distance_m, albedo)

	atmosphere = None
	if should_have_atmosphere(physical, t_eq, arch.atmosphere_probability, o.has_atmosphere, rng):
		regime = composition_regime(t_eq, nitrogen_methane=arch.nitrogen_methane)
		atmosphere = generate_atmosphere(physical, t_eq, regime, o, rng)

	surface = generate_surface(physical, t_eq, atmosphere, tidal, o, rng, albedo=albedo, icy=arch.icy, default_type=arch.surface_type)
	rings = generate_rings(physical, t_eq, rng) if o.has_rings else None

	logger.debug("generated %s moon %s (%s): tidal heating %.3g W", spec.archetype, name, body_id, tidal)
	return CelestialBody(
		id=body_id,
		name=name,
		type=BodyType.MOON,
		parent_id=context.planet_id,
		physical=physical,
		orbital=orbital,
		surface=surface,
		atmosphere=atmosphere,
		rings=rings,
		provenance=make_provenance(rng.seed, spec, created_at),
	)
