from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict
from ..bodies.bodies_schema import CelestialBody
from ..physics.constants import (
	SOLAR_LUMINOSITY_W, SOLAR_MASS_KG, SOLAR_TEMPERATURE_K, RADIUS_SUN_M,
	JUPITER_MASS_KG, JUPITER_RADIUS_M, AU_M,
)


class ParentContext(BaseModel):
	"""Read-only snapshot of the ancestors a child body is generated against.

	Star fields are always present (defaults describe the Sun). Planet fields are
	set only when generating a moon.
	"""
	model_config = ConfigDict(frozen=True, extra="forbid")

	star_id: Optional[str] = None
	star_luminosity_watts: float = SOLAR_LUMINOSITY_W
	star_mass_kg: float = SOLAR_MASS_KG
	star_temperature_k: float = SOLAR_TEMPERATURE_K
	star_radius_m: float = RADIUS_SUN_M
	star_age_years: float = 4.6e9
	planet_id: Optional[str] = None
	planet_mass_kg: Optional[float] = None
	planet_radius_m: Optional[float] = None
	planet_distance_m: Optional[float] = None

	@property
	def luminosity_solar(self) -> float:
		return self.star_luminosity_watts / SOLAR_LUMINOSITY_W

	@property
	def has_planet(self) -> bool:
		return self.planet_mass_kg is not None and self.planet_radius_m is not None

	@classmethod
	def sun_like(cls) -> "ParentContext":
		return cls()

	@classmethod
	def jupiter_like(cls) -> "ParentContext":
		return cls(planet_mass_kg=JUPITER_MASS_KG, planet_radius_m=JUPITER_RADIUS_M, planet_distance_m=5.2 * AU_M)

	@classmethod
	def from_star(cls, star: CelestialBody) -> "ParentContext":
		fields = {"star_id": star.id}
		if star.stellar is not None:
			fields.update(
				star_luminosity_watts=star.stellar.luminosity_watts,
				star_temperature_k=star.stellar.effective_temperature_k,
				star_age_years=star.stellar.age_years,
			)
		if star.physical is not None:
			fields.update(star_mass_kg=star.physical.mass_kg, star_radius_m=star.physical.radius_m)
		return cls(**fields)

	def with_planet(self, planet: CelestialBody) -> "ParentContext":
		"""Context for the moons of ``planet``; the receiver is left untouched."""
		update = {"planet_id": planet.id}
		if planet.physical is not None:
			update.update(planet_mass_kg=planet.physical.mass_kg, planet_radius_m=planet.physical.radius_m)
		if planet.orbital is not None:
			update["planet_distance_m"] = planet.orbital.semi_major_axis_m
		return self.model_copy(update=update)
