"""Generation requests.

Specs are plain, frozen pydantic models: malformed input (negative counts,
inverted ranges, fractions outside [0, 1]) fails here with a
``pydantic.ValidationError`` instead of deep inside a generator. Overrides are
typed per body kind and are read directly by the generators; any field left as
``None`` is sampled.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from ..bodies.bodies_schema import BodyType
from ..physics.tables import StellarClass, SizeCategory, OrbitZone, MAX_SUB_RANK

MAX_BELT_GAPS = 8


class SpecModel(BaseModel):
	model_config = ConfigDict(frozen=True, extra="forbid")


def _check_fraction(v: Optional[float]) -> Optional[float]:
	if v is not None and not 0.0 <= v <= 1.0:
		raise ValueError("must be within [0, 1]")
	return v


def _check_composition(v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
	if v is None:
		return v
	if any(frac < 0 for frac in v.values()):
		raise ValueError("composition fractions must be non-negative")
	if v and sum(v.values()) <= 0:
		raise ValueError("composition must have a positive total")
	return v


class StarOverrides(SpecModel):
	mass_solar: Optional[float] = Field(None, gt=0)
	radius_solar: Optional[float] = Field(None, gt=0)
	luminosity_solar: Optional[float] = Field(None, gt=0)
	temperature_k: Optional[float] = Field(None, gt=0)
	age_years: Optional[float] = Field(None, ge=0)
	metallicity: Optional[float] = Field(None, ge=0)
	axial_tilt_deg: Optional[float] = Field(None, ge=0, le=180)


class BodyOverrides(SpecModel):
	mass_kg: Optional[float] = Field(None, gt=0)
	radius_m: Optional[float] = Field(None, gt=0)
	axial_tilt_deg: Optional[float] = Field(None, ge=0, le=180)
	rotation_period_s: Optional[float] = Field(None, gt=0)
	internal_heat_watts: Optional[float] = Field(None, ge=0)
	semi_major_axis_au: Optional[float] = Field(None, gt=0)
	eccentricity: Optional[float] = Field(None, ge=0, lt=1)
	inclination_deg: Optional[float] = Field(None, ge=0, le=180)
	albedo: Optional[float] = None
	surface_type: Optional[str] = None
	surface_temperature_k: Optional[float] = Field(None, ge=0)
	volcanism_level: Optional[float] = None
	has_atmosphere: Optional[bool] = None
	surface_pressure_pa: Optional[float] = Field(None, ge=0)
	atmosphere_composition: Optional[Dict[str, float]] = None
	has_rings: Optional[bool] = None
	has_subsurface_ocean: Optional[bool] = None
	ocean_coverage: Optional[float] = None

	@field_validator("albedo", "volcanism_level", "ocean_coverage")
	@classmethod
	def _fraction(cls, v: Optional[float]) -> Optional[float]:
		return _check_fraction(v)

	@field_validator("atmosphere_composition")
	@classmethod
	def _composition(cls, v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
		return _check_composition(v)


class StarSpec(SpecModel):
	seed: int = 0
	stellar_class: StellarClass = StellarClass.G
	sub_rank: Optional[int] = Field(None, ge=0, le=MAX_SUB_RANK)
	name: Optional[str] = None
	overrides: StarOverrides = Field(default_factory=StarOverrides)


class PlanetSpec(SpecModel):
	seed: int = 0
	size_category: SizeCategory = SizeCategory.TERRESTRIAL
	orbit_zone: OrbitZone = OrbitZone.TEMPERATE
	name: Optional[str] = None
	overrides: BodyOverrides = Field(default_factory=BodyOverrides)


class MoonArchetype(str, Enum):
	REGULAR_ROCKY = "regular_rocky"
	ICY = "icy"
	VOLCANIC = "volcanic"
	TITAN_LIKE = "titan_like"
	CAPTURED = "captured"


class MoonSpec(SpecModel):
	seed: int = 0
	archetype: MoonArchetype = MoonArchetype.REGULAR_ROCKY
	name: Optional[str] = None
	overrides: BodyOverrides = Field(default_factory=BodyOverrides)


class AsteroidClass(str, Enum):
	CARBONACEOUS = "C"
	SILICACEOUS = "S"
	METALLIC = "M"


class AsteroidSpec(SpecModel):
	seed: int = 0
	asteroid_class: AsteroidClass = AsteroidClass.CARBONACEOUS
	min_radius_m: float = Field(500.0, gt=0)
	max_radius_m: float = Field(50000.0, gt=0)
	semi_major_axis_range_au: Tuple[float, float] = (2.1, 3.3)
	name: Optional[str] = None
	overrides: BodyOverrides = Field(default_factory=BodyOverrides)

	@model_validator(mode="after")
	def _ranges(self) -> "AsteroidSpec":
		if self.min_radius_m >= self.max_radius_m:
			raise ValueError("min_radius_m must be below max_radius_m")
		lo, hi = self.semi_major_axis_range_au
		if lo <= 0 or lo >= hi:
			raise ValueError("semi_major_axis_range_au must be an increasing positive pair")
		return self


class BeltGap(SpecModel):
	center_au: float = Field(..., gt=0)
	half_width_au: float = Field(..., gt=0)

	def contains(self, r_au: float) -> bool:
		return abs(r_au - self.center_au) < self.half_width_au


class MajorBodySpec(SpecModel):
	name: str
	body_id: Optional[str] = None
	body_type: BodyType = BodyType.ASTEROID
	semi_major_axis_au: float = Field(..., gt=0)
	eccentricity: float = Field(0.0, ge=0, lt=1)
	inclination_deg: float = Field(0.0, ge=0, le=180)
	longitude_of_ascending_node_deg: float = 0.0
	argument_of_periapsis_deg: float = 0.0
	mean_anomaly_deg: float = 0.0
	radius_m: float = Field(..., gt=0)


class BeltFieldSpec(SpecModel):
	seed: int = 0
	name: str = "belt"
	inner_radius_au: float = Field(2.1, gt=0)
	outer_radius_au: float = Field(3.3, gt=0)
	asteroid_count: int = Field(1000, ge=0)
	max_inclination_deg: float = Field(20.0, ge=0, le=180)
	max_eccentricity: float = Field(0.3, ge=0, lt=1)
	size_power_law_alpha: float = 2.5
	min_radius_m: float = Field(100.0, gt=0)
	max_radius_m: float = Field(100000.0, gt=0)
	radial_concentration: float = Field(1.0, ge=0)
	gaps: List[BeltGap] = Field(default_factory=list, max_length=MAX_BELT_GAPS)
	cluster_count: int = Field(0, ge=0)
	cluster_fraction: float = Field(0.0, ge=0, le=1)
	cluster_concentration: float = Field(4.0, gt=0)
	majors: List[MajorBodySpec] = Field(default_factory=list)

	@model_validator(mode="after")
	def _ranges(self) -> "BeltFieldSpec":
		if self.inner_radius_au >= self.outer_radius_au:
			raise ValueError("inner_radius_au must be below outer_radius_au")
		if self.min_radius_m >= self.max_radius_m:
			raise ValueError("min_radius_m must be below max_radius_m")
		if self.cluster_fraction > 0 and self.cluster_count == 0:
			raise ValueError("cluster_fraction > 0 requires cluster_count >= 1")
		return self

	def in_gap(self, r_au: float) -> bool:
		return any(gap.contains(r_au) for gap in self.gaps)
