"""Static physical lookup tables and the analytic relations that tie them together.

Stellar quantities are in solar units, planetary mass/radius in Earth units,
orbit zones in AU for a 1 L_sun star. Everything here is immutable data plus
pure functions.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping
from .constants import (
	SOLAR_TEMPERATURE_K, SOLAR_MASS_KG, EARTH_MASS_KG, EARTH_RADIUS_M, RADIUS_SUN_M,
	G, SECONDS_PER_YEAR, TWO_PI,
)

MAX_SUB_RANK = 9


@dataclass(frozen=True)
class Range:
	min: float
	max: float

	def lerp(self, t: float) -> float:
		return self.min + (self.max - self.min) * t

	def clamp(self, value: float) -> float:
		return min(self.max, max(self.min, value))

	def contains(self, value: float) -> bool:
		return self.min <= value <= self.max

	@property
	def mid(self) -> float:
		return 0.5 * (self.min + self.max)


class StellarClass(str, Enum):
	O = "O"
	B = "B"
	A = "A"
	F = "F"
	G = "G"
	K = "K"
	M = "M"


class StellarProperty(str, Enum):
	MASS = "mass"
	RADIUS = "radius"
	TEMPERATURE = "temperature"
	LUMINOSITY = "luminosity"
	LIFETIME = "lifetime"


@dataclass(frozen=True)
class StellarClassData:
	mass: Range  # M_sun
	radius: Range  # R_sun
	temperature: Range  # K
	luminosity: Range  # L_sun
	lifetime: Range  # years


STELLAR_TABLE: Mapping[StellarClass, StellarClassData] = MappingProxyType({
	StellarClass.O: StellarClassData(Range(16.0, 90.0), Range(6.6, 15.0), Range(30000.0, 50000.0), Range(30000.0, 1.0e6), Range(1.0e6, 1.0e7)),
	StellarClass.B: StellarClassData(Range(2.1, 16.0), Range(1.8, 6.6), Range(10000.0, 30000.0), Range(25.0, 30000.0), Range(1.0e7, 4.0e8)),
	StellarClass.A: StellarClassData(Range(1.4, 2.1), Range(1.4, 1.8), Range(7500.0, 10000.0), Range(5.0, 25.0), Range(4.0e8, 2.0e9)),
	StellarClass.F: StellarClassData(Range(1.04, 1.4), Range(1.15, 1.4), Range(6000.0, 7500.0), Range(1.5, 5.0), Range(2.0e9, 7.0e9)),
	StellarClass.G: StellarClassData(Range(0.8, 1.04), Range(0.96, 1.15), Range(5200.0, 6000.0), Range(0.6, 1.5), Range(7.0e9, 1.5e10)),
	StellarClass.K: StellarClassData(Range(0.45, 0.8), Range(0.7, 0.96), Range(3700.0, 5200.0), Range(0.08, 0.6), Range(1.5e10, 4.5e10)),
	StellarClass.M: StellarClassData(Range(0.08, 0.45), Range(0.1, 0.7), Range(2400.0, 3700.0), Range(1.0e-4, 0.08), Range(4.5e10, 1.0e12)),
})


class SizeCategory(str, Enum):
	DWARF = "dwarf"
	SUB_TERRESTRIAL = "sub_terrestrial"
	TERRESTRIAL = "terrestrial"
	SUPER_EARTH = "super_earth"
	MINI_NEPTUNE = "mini_neptune"
	NEPTUNIAN = "neptunian"
	GAS_GIANT = "gas_giant"
	SUPER_JUPITER = "super_jupiter"


@dataclass(frozen=True)
class SizeCategoryData:
	mass: Range  # M_earth
	radius: Range  # R_earth
	density: Range  # kg/m^3
	atmosphere_probability: float
	ring_probability: float
	giant: bool = False


SIZE_TABLE: Mapping[SizeCategory, SizeCategoryData] = MappingProxyType({
	SizeCategory.DWARF: SizeCategoryData(Range(1.0e-4, 0.01), Range(0.03, 0.2), Range(1500.0, 3500.0), 0.05, 0.02),
	SizeCategory.SUB_TERRESTRIAL: SizeCategoryData(Range(0.01, 0.5), Range(0.2, 0.85), Range(3000.0, 5000.0), 0.3, 0.02),
	SizeCategory.TERRESTRIAL: SizeCategoryData(Range(0.5, 2.0), Range(0.75, 1.3), Range(4000.0, 6000.0), 0.85, 0.02),
	SizeCategory.SUPER_EARTH: SizeCategoryData(Range(2.0, 10.0), Range(1.2, 2.0), Range(4500.0, 8000.0), 0.95, 0.05),
	SizeCategory.MINI_NEPTUNE: SizeCategoryData(Range(10.0, 20.0), Range(2.0, 4.0), Range(1500.0, 4000.0), 1.0, 0.15, giant=True),
	SizeCategory.NEPTUNIAN: SizeCategoryData(Range(20.0, 50.0), Range(3.5, 6.0), Range(1000.0, 2000.0), 1.0, 0.4, giant=True),
	SizeCategory.GAS_GIANT: SizeCategoryData(Range(50.0, 1000.0), Range(6.0, 13.0), Range(500.0, 1800.0), 1.0, 0.6, giant=True),
	SizeCategory.SUPER_JUPITER: SizeCategoryData(Range(1000.0, 4000.0), Range(10.0, 14.0), Range(1500.0, 15000.0), 1.0, 0.5, giant=True),
})


class OrbitZone(str, Enum):
	HOT = "hot"
	TEMPERATE = "temperate"
	COLD = "cold"
	OUTER = "outer"


@dataclass(frozen=True)
class OrbitZoneData:
	distance_au: Range  # for a 1 L_sun star
	max_eccentricity: float
	max_inclination_deg: float


ORBIT_ZONE_TABLE: Mapping[OrbitZone, OrbitZoneData] = MappingProxyType({
	OrbitZone.HOT: OrbitZoneData(Range(0.02, 0.8), 0.1, 3.0),
	OrbitZone.TEMPERATE: OrbitZoneData(Range(0.8, 1.6), 0.2, 5.0),
	OrbitZone.COLD: OrbitZoneData(Range(1.6, 5.0), 0.3, 8.0),
	OrbitZone.OUTER: OrbitZoneData(Range(5.0, 40.0), 0.4, 10.0),
})


def stellar_range(cls: StellarClass, prop: StellarProperty) -> Range:
	return getattr(STELLAR_TABLE[StellarClass(cls)], StellarProperty(prop).value)


def interpolate_stellar(cls: StellarClass, sub_rank: float, prop: StellarProperty) -> float:
	"""Value within a class for spectral sub-rank 0 (hottest/brightest) to 9 (coolest/dimmest)."""
	bounds = stellar_range(cls, prop)
	t = min(max(sub_rank, 0.0), float(MAX_SUB_RANK)) / MAX_SUB_RANK
	if StellarProperty(prop) is StellarProperty.LIFETIME:
		# hotter stars burn out faster
		return bounds.lerp(t)
	return bounds.max - (bounds.max - bounds.min) * t


def classify_star_by_temperature(temperature_K: float) -> StellarClass:
	for cls in StellarClass:
		if temperature_K >= STELLAR_TABLE[cls].temperature.min:
			return cls
	return StellarClass.M


def classify_star_by_mass(mass_solar: float) -> StellarClass:
	for cls in StellarClass:
		if mass_solar >= STELLAR_TABLE[cls].mass.min:
			return cls
	return StellarClass.M


def classify_size_by_mass(mass_earth: float) -> SizeCategory:
	for cat in SizeCategory:
		if mass_earth < SIZE_TABLE[cat].mass.max:
			return cat
	return SizeCategory.SUPER_JUPITER


def get_distance_range(zone: OrbitZone, luminosity_solar: float = 1.0) -> Range:
	"""Zone boundaries in AU, scaled by sqrt(L) so that insolation is preserved."""
	base = ORBIT_ZONE_TABLE[OrbitZone(zone)].distance_au
	scale = math.sqrt(luminosity_solar) if luminosity_solar > 0 else 1.0
	return Range(base.min * scale, base.max * scale)


def classify_orbit_zone(distance_au: float, luminosity_solar: float = 1.0) -> OrbitZone:
	for zone in OrbitZone:
		if distance_au < get_distance_range(zone, luminosity_solar).max:
			return zone
	return OrbitZone.OUTER


def luminosity_from_mass(mass_solar: float) -> float:
	if mass_solar <= 0:
		return 0.0
	return mass_solar ** 3.5


def radius_from_mass(mass_solar: float) -> float:
	if mass_solar <= 0:
		return 0.0
	return mass_solar ** 0.8


def temperature_from_luminosity_radius(luminosity_solar: float, radius_solar: float) -> float:
	"""Stefan-Boltzmann relative to the Sun: T = T_sun L^0.25 / R^0.5."""
	if luminosity_solar <= 0 or radius_solar <= 0:
		return SOLAR_TEMPERATURE_K
	return SOLAR_TEMPERATURE_K * luminosity_solar ** 0.25 / radius_solar ** 0.5


def radius_from_luminosity_temperature(luminosity_solar: float, temperature_K: float) -> float:
	if luminosity_solar <= 0 or temperature_K <= 0:
		return 0.0
	return math.sqrt(luminosity_solar) * (SOLAR_TEMPERATURE_K / temperature_K) ** 2


def radius_from_mass_density(mass_kg: float, density_kg_m3: float) -> float:
	if mass_kg <= 0 or density_kg_m3 <= 0:
		return 0.0
	return (3.0 * mass_kg / (4.0 * math.pi * density_kg_m3)) ** (1.0 / 3.0)


def tidal_locking_timescale_years(semi_major_axis_m: float, host_mass_kg: float, body_mass_kg: float, body_radius_m: float, initial_spin_period_s: float = 12.0 * 3600.0, q_factor: float = 100.0, k2: float = 0.3) -> float:
	"""t = w a^6 I Q / (3 G M^2 k2 R^5) with I = 0.4 m R^2 (Gladman et al. 1996)."""
	if semi_major_axis_m <= 0 or host_mass_kg <= 0 or body_mass_kg <= 0 or body_radius_m <= 0 or initial_spin_period_s <= 0:
		return math.inf
	omega = TWO_PI / initial_spin_period_s
	inertia = 0.4 * body_mass_kg * body_radius_m ** 2
	t_s = omega * semi_major_axis_m ** 6 * inertia * q_factor / (3.0 * G * host_mass_kg ** 2 * k2 * body_radius_m ** 5)
	return t_s / SECONDS_PER_YEAR


def solar_to_kg(mass_solar: float) -> float:
	return mass_solar * SOLAR_MASS_KG


def solar_radius_to_m(radius_solar: float) -> float:
	return radius_solar * RADIUS_SUN_M


def earth_to_kg(mass_earth: float) -> float:
	return mass_earth * EARTH_MASS_KG


def earth_radius_to_m(radius_earth: float) -> float:
	return radius_earth * EARTH_RADIUS_M
