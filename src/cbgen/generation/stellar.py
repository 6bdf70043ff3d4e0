from __future__ import annotations
import logging
from typing import Tuple
from ..bodies.bodies_schema import PhysicalProps, StellarProps
from ..physics.constants import SOLAR_LUMINOSITY_W, SOLAR_METALLICITY_Z, SECONDS_PER_HOUR
from ..physics.tables import (
	StellarClass, StellarProperty, STELLAR_TABLE, interpolate_stellar,
	luminosity_from_mass, radius_from_luminosity_temperature, radius_from_mass, solar_to_kg, solar_radius_to_m,
	temperature_from_luminosity_radius,
)
from ..rng import DeterministicRng
from .physical import rotational_oblateness
from .specs import StarSpec

logger = logging.getLogger(__name__)

# Nothing older than the universe
MAX_STELLAR_AGE_YEARS = 1.3e10
_FAST_ROTATORS = (StellarClass.O, StellarClass.B, StellarClass.A)


def _jittered(cls: StellarClass, sub_rank: int, prop: StellarProperty, rng: DeterministicRng) -> float:
	return interpolate_stellar(cls, sub_rank + rng.uniform(-0.5, 0.5), prop)


def generate_stellar(spec: StarSpec, rng: DeterministicRng) -> Tuple[PhysicalProps, StellarProps]:
	"""Draw a main-sequence star inside its class envelope.

	Mass, temperature and luminosity are interpolated independently at the
	sub-rank (with half a sub-rank of jitter) so each stays within the class
	range; the radius then follows from Stefan-Boltzmann and is clamped to the
	class radius range. An overridden mass instead drives luminosity, radius and
	temperature through the main-sequence relations.
	"""
	cls = StellarClass(spec.stellar_class)
	data = STELLAR_TABLE[cls]
	o = spec.overrides
	sub_rank = spec.sub_rank if spec.sub_rank is not None else rng.randint(0, 9)

	if o.mass_solar is not None:
		mass_solar = o.mass_solar
		luminosity_solar = o.luminosity_solar if o.luminosity_solar is not None else luminosity_from_mass(mass_solar)
		radius_solar = o.radius_solar if o.radius_solar is not None else radius_from_mass(mass_solar)
		if o.temperature_k is not None:
			temperature = o.temperature_k
		else:
			temperature = temperature_from_luminosity_radius(luminosity_solar, radius_solar)
		if not data.temperature.contains(temperature):
			logger.debug("star %s%d: %.3f Msun implies %.0f K, outside the class range", cls.value, sub_rank, mass_solar, temperature)
	else:
		mass_solar = _jittered(cls, sub_rank, StellarProperty.MASS, rng)
		temperature = o.temperature_k if o.temperature_k is not None else _jittered(cls, sub_rank, StellarProperty.TEMPERATURE, rng)
		luminosity_solar = o.luminosity_solar if o.luminosity_solar is not None else _jittered(cls, sub_rank, StellarProperty.LUMINOSITY, rng)
		if o.radius_solar is not None:
			radius_solar = o.radius_solar
		else:
			radius_solar = data.radius.clamp(radius_from_luminosity_temperature(luminosity_solar, temperature))

	lifetime = interpolate_stellar(cls, sub_rank, StellarProperty.LIFETIME)
	if o.age_years is not None:
		age = o.age_years
	else:
		age = rng.uniform(0.05, 0.9) * min(lifetime, MAX_STELLAR_AGE_YEARS)
	if o.metallicity is not None:
		metallicity = o.metallicity
	else:
		metallicity = SOLAR_METALLICITY_Z * 10.0 ** rng.normal(0.0, 0.2)

	tilt = o.axial_tilt_deg if o.axial_tilt_deg is not None else rng.uniform(0.0, 30.0)
	if cls in _FAST_ROTATORS:
		rotation_days = rng.log_uniform(0.5, 3.0)
	else:
		rotation_days = rng.log_uniform(5.0, 40.0)
	rotation = rotation_days * 24.0 * SECONDS_PER_HOUR

	mass_kg = solar_to_kg(mass_solar)
	radius_m = solar_radius_to_m(radius_solar)
	luminosity_w = luminosity_solar * SOLAR_LUMINOSITY_W
	logger.debug("star %s%d: M=%.3f Msun T=%.0f K L=%.4g Lsun", cls.value, sub_rank, mass_solar, temperature, luminosity_solar)

	physical = PhysicalProps(
		mass_kg=mass_kg,
		radius_m=radius_m,
		axial_tilt_deg=tilt,
		oblateness=rotational_oblateness(mass_kg, radius_m, rotation),
		internal_heat_watts=luminosity_w,
		rotation_period_s=rotation,
	)
	stellar = StellarProps(
		luminosity_watts=luminosity_w,
		effective_temperature_k=temperature,
		metallicity=metallicity,
		age_years=age,
		spectral_class=cls.value,
		spectral_subtype=sub_rank,
		lifetime_years=lifetime,
	)
	return physical, stellar
