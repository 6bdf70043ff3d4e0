from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Dict, Mapping, Optional
from ..bodies.bodies_schema import AtmosphereProps, PhysicalProps
from ..physics.gravity import jeans_escape_parameter, JEANS_RETENTION_THRESHOLD, mean_molar_mass, scale_height_m
from ..physics.materials import normalized
from ..physics.tables import Range
from ..rng import DeterministicRng
from .specs import BodyOverrides

logger = logging.getLogger(__name__)

MAX_GREENHOUSE_FACTOR = 3.5
GREENHOUSE_GASES = ("CO2", "CH4", "H2O", "NH3", "SO2")


class AtmosphereRegime(str, Enum):
	HYDROGEN = "hydrogen"
	NITROGEN_METHANE = "nitrogen_methane"
	THIN_CO2 = "thin_co2"
	TEMPERATE_NITROGEN = "temperate_nitrogen"
	THICK_CO2 = "thick_co2"


PRESSURE_RANGE_PA: Mapping[AtmosphereRegime, Range] = {
	# giants: pressure at the conventional 1 bar reference level
	AtmosphereRegime.HYDROGEN: Range(1.0e5, 1.0e5),
	AtmosphereRegime.NITROGEN_METHANE: Range(5.0e4, 2.0e5),
	AtmosphereRegime.THIN_CO2: Range(300.0, 2.0e4),
	AtmosphereRegime.TEMPERATE_NITROGEN: Range(3.0e4, 3.0e5),
	AtmosphereRegime.THICK_CO2: Range(1.0e6, 1.0e7),
}


def should_have_atmosphere(physical: PhysicalProps, t_eq_K: float, probability: float, override: Optional[bool], rng: DeterministicRng) -> bool:
	"""Jeans gate first, then a size-scaled coin flip among bodies that pass it."""
	if override is not None:
		return override
	jeans = jeans_escape_parameter(physical.mass_kg, physical.radius_m, t_eq_K)
	if jeans <= JEANS_RETENTION_THRESHOLD:
		logger.debug("atmosphere lost: jeans parameter %.2f at %.0f K", jeans, t_eq_K)
		return False
	return rng.chance(probability)


def composition_regime(t_eq_K: float, *, giant: bool = False, nitrogen_methane: bool = False) -> AtmosphereRegime:
	if giant:
		return AtmosphereRegime.HYDROGEN
	if t_eq_K < 150.0 or (nitrogen_methane and t_eq_K < 200.0):
		return AtmosphereRegime.NITROGEN_METHANE
	if t_eq_K < 250.0:
		return AtmosphereRegime.THIN_CO2
	if t_eq_K < 450.0:
		return AtmosphereRegime.TEMPERATE_NITROGEN
	return AtmosphereRegime.THICK_CO2


def sample_composition(regime: AtmosphereRegime, rng: DeterministicRng) -> Dict[str, float]:
	"""Gas mole fractions; the last gas takes the remainder so the total is exactly one."""
	regime = AtmosphereRegime(regime)
	if regime is AtmosphereRegime.HYDROGEN:
		h2 = rng.uniform(0.84, 0.90)
		ch4 = rng.uniform(0.002, 0.02)
		nh3 = rng.uniform(1.0e-4, 1.0e-3)
		return {"H2": h2, "He": 1.0 - h2 - ch4 - nh3, "CH4": ch4, "NH3": nh3}
	if regime is AtmosphereRegime.NITROGEN_METHANE:
		n2 = rng.uniform(0.90, 0.98)
		rest = 1.0 - n2
		ch4 = rest * rng.uniform(0.85, 0.95)
		return {"N2": n2, "CH4": ch4, "H2": rest - ch4}
	if regime is AtmosphereRegime.THIN_CO2:
		co2 = rng.uniform(0.90, 0.96)
		rest = 1.0 - co2
		n2 = rest * rng.uniform(0.4, 0.6)
		return {"CO2": co2, "N2": n2, "Ar": rest - n2}
	if regime is AtmosphereRegime.TEMPERATE_NITROGEN:
		n2 = rng.uniform(0.70, 0.90)
		rest = 1.0 - n2
		ar = rest * rng.uniform(0.3, 0.6)
		h2o = rest * rng.uniform(0.1, 0.3)
		return {"N2": n2, "Ar": ar, "H2O": h2o, "CO2": rest - ar - h2o}
	co2 = rng.uniform(0.90, 0.97)
	rest = 1.0 - co2
	n2 = rest * rng.uniform(0.8, 0.95)
	return {"CO2": co2, "N2": n2, "SO2": rest - n2}


def greenhouse_factor(surface_pressure_pa: float, composition: Mapping[str, float]) -> float:
	"""Multiplier on equilibrium temperature; ~1.13 for an Earth-like 1 bar N2 atmosphere."""
	if surface_pressure_pa <= 0:
		return 1.0
	absorbers = sum(composition.get(gas, 0.0) for gas in GREENHOUSE_GASES)
	factor = 1.0 + 4.0 * math.log10(1.0 + surface_pressure_pa / 1.0e5) * (absorbers + 0.1)
	return min(MAX_GREENHOUSE_FACTOR, factor)


def generate_atmosphere(physical: PhysicalProps, t_eq_K: float, regime: AtmosphereRegime, overrides: BodyOverrides, rng: DeterministicRng) -> AtmosphereProps:
	if overrides.atmosphere_composition is not None:
		composition = normalized(overrides.atmosphere_composition)
	else:
		composition = sample_composition(regime, rng)
	if overrides.surface_pressure_pa is not None:
		pressure = overrides.surface_pressure_pa
	else:
		bounds = PRESSURE_RANGE_PA[AtmosphereRegime(regime)]
		pressure = rng.log_uniform(bounds.min, bounds.max)
	gh = greenhouse_factor(pressure, composition)
	height = scale_height_m(t_eq_K * gh, mean_molar_mass(composition), physical.surface_gravity_m_s2)
	return AtmosphereProps(
		surface_pressure_pa=pressure,
		scale_height_m=height,
		composition=composition,
		greenhouse_factor=gh,
	)
