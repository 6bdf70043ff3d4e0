from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from ..physics.gravity import surface_gravity_m_s2, escape_velocity_m_s, bulk_density_kg_m3


class BodyType(str, Enum):
	STAR = "star"
	PLANET = "planet"
	MOON = "moon"
	ASTEROID = "asteroid"
	DWARF_PLANET = "dwarf_planet"


class Component(BaseModel):
	# Frozen so assembled bodies cannot be edited; no range constraints, the validator judges plausibility
	model_config = ConfigDict(frozen=True)


class PhysicalProps(Component):
	mass_kg: float
	radius_m: float
	axial_tilt_deg: float = 0.0
	oblateness: float = 0.0
	internal_heat_watts: float = 0.0
	rotation_period_s: Optional[float] = None

	@property
	def density_kg_m3(self) -> float:
		return bulk_density_kg_m3(self.mass_kg, self.radius_m)

	@property
	def surface_gravity_m_s2(self) -> float:
		return surface_gravity_m_s2(self.mass_kg, self.radius_m)

	@property
	def escape_velocity_m_s(self) -> float:
		return escape_velocity_m_s(self.mass_kg, self.radius_m)


class StellarProps(Component):
	luminosity_watts: float
	effective_temperature_k: float
	metallicity: float
	age_years: float
	spectral_class: str = "G"
	spectral_subtype: int = 2
	lifetime_years: Optional[float] = None


class OrbitalProps(Component):
	semi_major_axis_m: float
	eccentricity: float = 0.0
	inclination_deg: float = 0.0
	longitude_of_ascending_node_deg: float = 0.0
	argument_of_periapsis_deg: float = 0.0
	mean_anomaly_deg: float = 0.0
	orbital_period_s: Optional[float] = None
	tidally_locked: bool = False
	zone: Optional[str] = None


class TerrainProps(Component):
	min_elevation_m: float
	max_elevation_m: float
	roughness: float
	crater_density: float
	tectonic_activity: float
	erosion_level: float

	@property
	def elevation_range_m(self) -> float:
		return self.max_elevation_m - self.min_elevation_m


class HydrosphereProps(Component):
	ocean_coverage: float
	ice_coverage: float
	mean_depth_m: float
	salinity_ppt: float


class CryosphereProps(Component):
	polar_cap_coverage: float
	permafrost_depth_m: float
	has_subsurface_ocean: bool = False
	subsurface_ocean_depth_m: float = 0.0
	cryovolcanism_level: float = 0.0
	ice_type: str = "water"


class SurfaceProps(Component):
	temperature_k: float
	albedo: float
	volcanism_level: float
	surface_type: str
	materials: Dict[str, float] = Field(default_factory=dict)
	terrain: Optional[TerrainProps] = None
	hydrosphere: Optional[HydrosphereProps] = None
	cryosphere: Optional[CryosphereProps] = None

	def has_terrain(self) -> bool:
		return self.terrain is not None

	def has_hydrosphere(self) -> bool:
		return self.hydrosphere is not None

	def has_cryosphere(self) -> bool:
		return self.cryosphere is not None


class AtmosphereProps(Component):
	surface_pressure_pa: float
	scale_height_m: float
	composition: Dict[str, float] = Field(default_factory=dict)
	greenhouse_factor: float = 1.0

	def dominant_gas(self) -> Optional[str]:
		if not self.composition:
			return None
		return max(self.composition, key=self.composition.get)


class RingBand(Component):
	inner_radius_m: float
	outer_radius_m: float
	optical_depth: float
	particle_size_m: float
	composition: Dict[str, float] = Field(default_factory=dict)


class RingSystemProps(Component):
	total_mass_kg: float
	bands: List[RingBand] = Field(default_factory=list)


class Provenance(Component):
	generation_seed: int
	generator_version: str
	schema_version: int
	created_at: str
	spec_snapshot: Optional[Dict[str, Any]] = None


class CelestialBody(Component):
	id: str
	name: str
	type: BodyType
	parent_id: Optional[str] = None
	physical: Optional[PhysicalProps] = None
	stellar: Optional[StellarProps] = None
	orbital: Optional[OrbitalProps] = None
	surface: Optional[SurfaceProps] = None
	atmosphere: Optional[AtmosphereProps] = None
	rings: Optional[RingSystemProps] = None
	provenance: Optional[Provenance] = None

	def has_physical(self) -> bool:
		return self.physical is not None

	def has_stellar(self) -> bool:
		return self.stellar is not None

	def has_orbital(self) -> bool:
		return self.orbital is not None

	def has_surface(self) -> bool:
		return self.surface is not None

	def has_atmosphere(self) -> bool:
		return self.atmosphere is not None

	def has_rings(self) -> bool:
		return self.rings is not None


class BeltAsteroidData(Component):
	is_major: bool
	semi_major_axis_au: float
	eccentricity: float
	inclination_deg: float
	longitude_of_ascending_node_deg: float
	argument_of_periapsis_deg: float
	true_anomaly_deg: float
	position_au: Tuple[float, float, float]
	radius_m: float
	body_id: Optional[str] = None
	body_type: Optional[BodyType] = None
	name: Optional[str] = None
