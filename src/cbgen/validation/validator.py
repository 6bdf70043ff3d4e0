"""Post-hoc physical consistency checks.

The validator walks a body's component tree and reports issues; it never
raises and never mutates the body. ERRORs mark values that are physically
invalid, WARNINGs mark combinations that are merely implausible.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping
from ..bodies.bodies_schema import (
	BodyType, CelestialBody, PhysicalProps, StellarProps, OrbitalProps, SurfaceProps, AtmosphereProps, RingSystemProps,
)
from ..generation.belt import BeltFieldData

COMPOSITION_TOLERANCE = 0.01


class Severity(str, Enum):
	ERROR = "error"
	WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
	field: str
	message: str
	severity: Severity


@dataclass
class ValidationResult:
	issues: List[ValidationIssue] = field(default_factory=list)

	def add_error(self, field_name: str, message: str) -> None:
		self.issues.append(ValidationIssue(field_name, message, Severity.ERROR))

	def add_warning(self, field_name: str, message: str) -> None:
		self.issues.append(ValidationIssue(field_name, message, Severity.WARNING))

	def errors(self) -> List[ValidationIssue]:
		return [i for i in self.issues if i.severity is Severity.ERROR]

	def warnings(self) -> List[ValidationIssue]:
		return [i for i in self.issues if i.severity is Severity.WARNING]

	def is_valid(self) -> bool:
		return not self.errors()

	def for_field(self, field_name: str) -> List[ValidationIssue]:
		return [i for i in self.issues if i.field == field_name]


def _fraction(result: ValidationResult, name: str, value: float) -> None:
	if not 0.0 <= value <= 1.0:
		result.add_error(name, f"{value} outside [0, 1]")


def _non_negative(result: ValidationResult, name: str, value: float) -> None:
	if value < 0:
		result.add_error(name, f"{value} must be non-negative")


def _composition(result: ValidationResult, name: str, composition: Mapping[str, float]) -> None:
	if not composition:
		return
	for key, frac in composition.items():
		if not 0.0 <= frac <= 1.0:
			result.add_error(f"{name}.{key}", f"fraction {frac} outside [0, 1]")
	total = sum(composition.values())
	if abs(total - 1.0) > COMPOSITION_TOLERANCE:
		result.add_warning(name, f"fractions sum to {total:.4f}, expected 1.0")


def _check_physical(result: ValidationResult, p: PhysicalProps) -> None:
	if p.mass_kg <= 0:
		result.add_error("physical.mass_kg", f"mass must be positive, got {p.mass_kg}")
	if p.radius_m <= 0:
		result.add_error("physical.radius_m", f"radius must be positive, got {p.radius_m}")
	if not 0.0 <= p.oblateness < 1.0:
		result.add_error("physical.oblateness", f"{p.oblateness} outside [0, 1)")
	_non_negative(result, "physical.internal_heat_watts", p.internal_heat_watts)
	if not 0.0 <= p.axial_tilt_deg <= 180.0:
		result.add_warning("physical.axial_tilt_deg", f"{p.axial_tilt_deg} outside [0, 180]")
	if p.rotation_period_s is not None and p.rotation_period_s <= 0:
		result.add_error("physical.rotation_period_s", "rotation period must be positive")


def _check_stellar(result: ValidationResult, s: StellarProps) -> None:
	_non_negative(result, "stellar.luminosity_watts", s.luminosity_watts)
	_non_negative(result, "stellar.effective_temperature_k", s.effective_temperature_k)
	_non_negative(result, "stellar.metallicity", s.metallicity)
	_non_negative(result, "stellar.age_years", s.age_years)
	if s.lifetime_years is not None and s.age_years > s.lifetime_years:
		result.add_warning("stellar.age_years", "star is older than its main-sequence lifetime")


def _check_orbital(result: ValidationResult, o: OrbitalProps) -> None:
	if o.semi_major_axis_m <= 0:
		result.add_error("orbital.semi_major_axis_m", f"semi-major axis must be positive, got {o.semi_major_axis_m}")
	if o.eccentricity < 0:
		result.add_error("orbital.eccentricity", f"eccentricity {o.eccentricity} is negative")
	elif o.eccentricity >= 1.0:
		result.add_warning("orbital.eccentricity", f"eccentricity {o.eccentricity} describes an unbound orbit")
	if not 0.0 <= o.inclination_deg <= 180.0:
		result.add_error("orbital.inclination_deg", f"{o.inclination_deg} outside [0, 180]")


def _check_surface(result: ValidationResult, s: SurfaceProps) -> None:
	_non_negative(result, "surface.temperature_k", s.temperature_k)
	_fraction(result, "surface.albedo", s.albedo)
	_fraction(result, "surface.volcanism_level", s.volcanism_level)
	_composition(result, "surface.materials", s.materials)
	if s.terrain is not None:
		t = s.terrain
		if t.max_elevation_m < t.min_elevation_m:
			result.add_error("surface.terrain.max_elevation_m", "maximum elevation below minimum elevation")
		_fraction(result, "surface.terrain.roughness", t.roughness)
		_fraction(result, "surface.terrain.crater_density", t.crater_density)
		_fraction(result, "surface.terrain.tectonic_activity", t.tectonic_activity)
		_fraction(result, "surface.terrain.erosion_level", t.erosion_level)
	if s.hydrosphere is not None:
		h = s.hydrosphere
		_fraction(result, "surface.hydrosphere.ocean_coverage", h.ocean_coverage)
		_fraction(result, "surface.hydrosphere.ice_coverage", h.ice_coverage)
		_non_negative(result, "surface.hydrosphere.mean_depth_m", h.mean_depth_m)
		_non_negative(result, "surface.hydrosphere.salinity_ppt", h.salinity_ppt)
		if h.ocean_coverage + h.ice_coverage > 1.0 + COMPOSITION_TOLERANCE:
			result.add_warning("surface.hydrosphere", "ocean and ice coverage exceed the whole surface")
		if h.ocean_coverage > 0 and not 200.0 <= s.temperature_k <= 400.0:
			result.add_warning("surface.hydrosphere", f"liquid ocean at {s.temperature_k:.0f} K")
	if s.cryosphere is not None:
		c = s.cryosphere
		_fraction(result, "surface.cryosphere.polar_cap_coverage", c.polar_cap_coverage)
		_fraction(result, "surface.cryosphere.cryovolcanism_level", c.cryovolcanism_level)
		_non_negative(result, "surface.cryosphere.permafrost_depth_m", c.permafrost_depth_m)
		_non_negative(result, "surface.cryosphere.subsurface_ocean_depth_m", c.subsurface_ocean_depth_m)
		if c.has_subsurface_ocean and c.subsurface_ocean_depth_m <= 0:
			result.add_warning("surface.cryosphere", "subsurface ocean flagged without a depth")


def _check_atmosphere(result: ValidationResult, a: AtmosphereProps) -> None:
	_non_negative(result, "atmosphere.surface_pressure_pa", a.surface_pressure_pa)
	_non_negative(result, "atmosphere.scale_height_m", a.scale_height_m)
	_non_negative(result, "atmosphere.greenhouse_factor", a.greenhouse_factor)
	_composition(result, "atmosphere.composition", a.composition)


def _check_rings(result: ValidationResult, r: RingSystemProps, parent_radius_m: float) -> None:
	_non_negative(result, "rings.total_mass_kg", r.total_mass_kg)
	previous_outer = None
	for i, band in enumerate(r.bands):
		name = f"rings.bands[{i}]"
		if band.inner_radius_m <= 0 or band.outer_radius_m <= 0:
			result.add_error(name, "band radii must be positive")
		if band.inner_radius_m >= band.outer_radius_m:
			result.add_error(name, "inner radius must be below outer radius")
		if parent_radius_m > 0 and band.inner_radius_m < parent_radius_m:
			result.add_error(name, "band lies inside the parent body")
		_non_negative(result, f"{name}.optical_depth", band.optical_depth)
		if band.particle_size_m <= 0:
			result.add_error(f"{name}.particle_size_m", "particle size must be positive")
		_composition(result, f"{name}.composition", band.composition)
		if previous_outer is not None and band.inner_radius_m < previous_outer:
			result.add_warning(name, "band overlaps the previous band")
		previous_outer = band.outer_radius_m if previous_outer is None else max(previous_outer, band.outer_radius_m)


def validate_body(body: CelestialBody) -> ValidationResult:
	result = ValidationResult()
	if not body.id:
		result.add_error("id", "body id must be non-empty")
	is_star = body.type is BodyType.STAR

	if body.physical is None:
		result.add_error("physical", "physical properties are missing")
	else:
		_check_physical(result, body.physical)

	if body.stellar is not None:
		if not is_star:
			result.add_warning("stellar", f"stellar properties on a {body.type.value}")
		_check_stellar(result, body.stellar)
	elif is_star:
		result.add_warning("stellar", "star without stellar properties")

	if body.orbital is not None:
		_check_orbital(result, body.orbital)
	if body.surface is not None:
		if is_star:
			result.add_warning("surface", "stars do not have solid surfaces")
		_check_surface(result, body.surface)
	if body.atmosphere is not None:
		_check_atmosphere(result, body.atmosphere)
	if body.rings is not None:
		parent_radius = body.physical.radius_m if body.physical is not None else 0.0
		_check_rings(result, body.rings, parent_radius)
	if body.provenance is None:
		result.add_warning("provenance", "body carries no provenance")
	return result


def validate_belt_field(data: BeltFieldData) -> ValidationResult:
	result = ValidationResult()
	spec = data.spec
	for i, asteroid in enumerate(data.asteroids):
		name = f"asteroids[{i}]"
		if asteroid.radius_m <= 0:
			result.add_error(f"{name}.radius_m", "radius must be positive")
		if asteroid.semi_major_axis_au <= 0:
			result.add_error(f"{name}.semi_major_axis_au", "semi-major axis must be positive")
		if not 0.0 <= asteroid.eccentricity < 1.0:
			result.add_error(f"{name}.eccentricity", f"{asteroid.eccentricity} outside [0, 1)")
		if asteroid.is_major:
			continue
		if not spec.inner_radius_au <= asteroid.semi_major_axis_au <= spec.outer_radius_au:
			result.add_warning(f"{name}.semi_major_axis_au", "background asteroid outside the belt")
		elif spec.in_gap(asteroid.semi_major_axis_au):
			result.add_warning(f"{name}.semi_major_axis_au", "background asteroid inside a gap")
	return result
