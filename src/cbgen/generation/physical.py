from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple
from ..bodies.bodies_schema import PhysicalProps
from ..physics.constants import G, SECONDS_PER_HOUR, TWO_PI
from ..physics.tables import Range, SizeCategory, SIZE_TABLE, radius_from_mass_density, earth_to_kg, earth_radius_to_m
from ..rng import DeterministicRng
from .specs import BodyOverrides

# Present-day bulk Earth radiogenic output (~44 TW) per kg
RADIOGENIC_W_PER_KG = 7.4e-12
RADIOGENIC_DECAY_YEARS = 3.0e9
REFERENCE_AGE_YEARS = 4.6e9
# Jupiter's excess emission per kg at 4.6 Gyr
CONTRACTION_W_PER_KG = 1.76e-10
MAX_OBLATENESS = 0.5


@dataclass(frozen=True)
class MassBounds:
	mass_kg: Range
	density: Range
	radius_m: Optional[Range] = None


def bounds_for_size(category: SizeCategory) -> MassBounds:
	data = SIZE_TABLE[SizeCategory(category)]
	return MassBounds(
		mass_kg=Range(earth_to_kg(data.mass.min), earth_to_kg(data.mass.max)),
		density=data.density,
		radius_m=Range(earth_radius_to_m(data.radius.min), earth_radius_to_m(data.radius.max)),
	)


def radiogenic_heat_W(mass_kg: float, age_years: float) -> float:
	if mass_kg <= 0:
		return 0.0
	age = max(0.0, age_years)
	return mass_kg * RADIOGENIC_W_PER_KG * math.exp((REFERENCE_AGE_YEARS - age) / RADIOGENIC_DECAY_YEARS)


def contraction_heat_W(mass_kg: float, age_years: float) -> float:
	if mass_kg <= 0:
		return 0.0
	age = max(1.0e8, age_years)
	return mass_kg * CONTRACTION_W_PER_KG * (REFERENCE_AGE_YEARS / age)


def rotational_oblateness(mass_kg: float, radius_m: float, rotation_period_s: Optional[float]) -> float:
	"""Flattening from the centrifugal parameter q = w^2 R^3 / GM (f ~ 5q/4)."""
	if mass_kg <= 0 or radius_m <= 0 or not rotation_period_s or rotation_period_s <= 0:
		return 0.0
	omega = TWO_PI / rotation_period_s
	q = omega ** 2 * radius_m ** 3 / (G * mass_kg)
	return min(MAX_OBLATENESS, 1.25 * q)


def draw_mass_radius(bounds: MassBounds, overrides: BodyOverrides, rng: DeterministicRng) -> Tuple[float, float]:
	if overrides.mass_kg is not None:
		mass = overrides.mass_kg
	else:
		mass = rng.log_uniform(bounds.mass_kg.min, bounds.mass_kg.max)
	if overrides.radius_m is not None:
		return mass, overrides.radius_m
	density = rng.uniform(bounds.density.min, bounds.density.max)
	radius = radius_from_mass_density(mass, density)
	if bounds.radius_m is not None:
		radius = bounds.radius_m.clamp(radius)
	return mass, radius


def generate_physical(
	bounds: MassBounds,
	overrides: BodyOverrides,
	rng: DeterministicRng,
	*,
	age_years: float,
	giant: bool = False,
	irregular: bool = False,
	rotation_hours: Range = Range(8.0, 60.0),
	max_tilt_deg: float = 40.0,
) -> PhysicalProps:
	mass, radius = draw_mass_radius(bounds, overrides, rng)
	if overrides.axial_tilt_deg is not None:
		tilt = overrides.axial_tilt_deg
	elif irregular:
		tilt = rng.uniform(0.0, 180.0)
	else:
		tilt = min(180.0, abs(rng.normal(0.0, max_tilt_deg / 2.0)))
	if overrides.rotation_period_s is not None:
		rotation = overrides.rotation_period_s
	else:
		rotation = rng.log_uniform(rotation_hours.min, rotation_hours.max) * SECONDS_PER_HOUR
	if irregular:
		oblateness = rng.uniform(0.05, 0.4)
	else:
		oblateness = rotational_oblateness(mass, radius, rotation)
	if overrides.internal_heat_watts is not None:
		heat = overrides.internal_heat_watts
	else:
		heat = radiogenic_heat_W(mass, age_years)
		if giant:
			heat += contraction_heat_W(mass, age_years)
		heat *= rng.uniform(0.7, 1.3)
	return PhysicalProps(
		mass_kg=mass,
		radius_m=radius,
		axial_tilt_deg=tilt,
		oblateness=oblateness,
		internal_heat_watts=heat,
		rotation_period_s=rotation,
	)


def with_rotation(physical: PhysicalProps, rotation_period_s: Optional[float]) -> PhysicalProps:
	"""Spin-synchronised copy used once an orbit turns out to be tidally locked."""
	if not rotation_period_s or rotation_period_s <= 0:
		return physical
	return physical.model_copy(update={
		"rotation_period_s": rotation_period_s,
		"oblateness": rotational_oblateness(physical.mass_kg, physical.radius_m, rotation_period_s),
	})
