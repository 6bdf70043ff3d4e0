"""Asteroid-belt population sampling.

Background bodies are drawn statistically from a ``BeltFieldSpec``; major
bodies are placed deterministically from their orbital elements. Every draw
comes from the RNG passed in, so a (spec, seed) pair always yields the same
field.
"""
from __future__ import annotations
import logging
import math
from typing import List, Optional, Sequence
from pydantic import BaseModel, ConfigDict
from ..bodies.bodies_schema import BeltAsteroidData
from ..physics.constants import TWO_PI
from ..physics.orbits import elements_to_position, mean_to_true_anomaly, wrap_angle
from ..rng import DeterministicRng
from .specs import BeltFieldSpec, MajorBodySpec

logger = logging.getLogger(__name__)

MAX_RADIAL_ATTEMPTS = 1000
# alpha this close to 1 makes the power-law inverse CDF singular
POWER_LAW_UNIT_TOLERANCE = 1e-6


class BeltFieldData(BaseModel):
	model_config = ConfigDict(frozen=True)

	spec: BeltFieldSpec
	generation_seed: int
	asteroids: List[BeltAsteroidData]

	def majors(self) -> List[BeltAsteroidData]:
		return [a for a in self.asteroids if a.is_major]

	def background(self) -> List[BeltAsteroidData]:
		return [a for a in self.asteroids if not a.is_major]


def radial_density(t: float, concentration: float) -> float:
	"""Unnormalised density t^c (1-t)^c on the normalised belt width."""
	if t <= 0.0 or t >= 1.0:
		return 0.0 if concentration > 0 else 1.0
	return (t * (1.0 - t)) ** concentration


def sample_radial_position(spec: BeltFieldSpec, rng: DeterministicRng) -> float:
	"""Rejection-sample a semi-major axis (AU) inside the belt and outside every gap."""
	c = spec.radial_concentration
	envelope = radial_density(0.5, c)
	width = spec.outer_radius_au - spec.inner_radius_au
	for _ in range(MAX_RADIAL_ATTEMPTS):
		t = rng.random()
		if t <= 0.0:
			continue
		if rng.random() * envelope > radial_density(t, c):
			continue
		r = spec.inner_radius_au + t * width
		if spec.in_gap(r):
			continue
		return r
	logger.warning("radial sampling exhausted %d attempts for belt %s; using the midpoint", MAX_RADIAL_ATTEMPTS, spec.name)
	return spec.inner_radius_au + 0.5 * width


def biased_fraction(rng: DeterministicRng) -> float:
	"""u^2 for uniform u: concentrates values near zero."""
	u = rng.random()
	return u * u


def sample_longitude(spec: BeltFieldSpec, cluster_centers: Sequence[float], rng: DeterministicRng) -> float:
	"""Effective longitude, optionally clustered.

	Clustered draws use a wrapped normal with std 1/sqrt(kappa) around a
	randomly chosen center as a stand-in for a von Mises distribution.
	"""
	if cluster_centers and rng.random() < spec.cluster_fraction:
		center = rng.choice(cluster_centers)
		return wrap_angle(rng.normal(center, 1.0 / math.sqrt(spec.cluster_concentration)))
	return rng.uniform(0.0, TWO_PI)


def sample_power_law_radius(alpha: float, r_min: float, r_max: float, rng: DeterministicRng) -> float:
	"""Inverse-CDF draw from dN/dr ~ r^-alpha on [r_min, r_max]."""
	u = rng.random()
	if r_min <= 0 or r_max <= r_min:
		return r_min
	if abs(alpha - 1.0) < POWER_LAW_UNIT_TOLERANCE:
		return r_min * (r_max / r_min) ** u
	k = 1.0 - alpha
	lo = r_min ** k
	hi = r_max ** k
	return (lo + u * (hi - lo)) ** (1.0 / k)


def sample_background_asteroid(spec: BeltFieldSpec, cluster_centers: Sequence[float], rng: DeterministicRng) -> BeltAsteroidData:
	a = sample_radial_position(spec, rng)
	e = spec.max_eccentricity * biased_fraction(rng)
	inc = spec.max_inclination_deg * biased_fraction(rng)
	node = rng.uniform(0.0, TWO_PI)
	peri = rng.uniform(0.0, TWO_PI)
	longitude = sample_longitude(spec, cluster_centers, rng)
	nu = wrap_angle(longitude - peri)
	radius = sample_power_law_radius(spec.size_power_law_alpha, spec.min_radius_m, spec.max_radius_m, rng)
	return BeltAsteroidData(
		is_major=False,
		semi_major_axis_au=a,
		eccentricity=e,
		inclination_deg=inc,
		longitude_of_ascending_node_deg=math.degrees(node),
		argument_of_periapsis_deg=math.degrees(peri),
		true_anomaly_deg=math.degrees(nu),
		position_au=elements_to_position(a, e, math.radians(inc), node, peri, nu),
		radius_m=radius,
	)


def place_major_body(major: MajorBodySpec) -> BeltAsteroidData:
	node = math.radians(major.longitude_of_ascending_node_deg)
	peri = math.radians(major.argument_of_periapsis_deg)
	nu = mean_to_true_anomaly(math.radians(major.mean_anomaly_deg), major.eccentricity)
	return BeltAsteroidData(
		is_major=True,
		body_id=major.body_id,
		body_type=major.body_type,
		name=major.name,
		semi_major_axis_au=major.semi_major_axis_au,
		eccentricity=major.eccentricity,
		inclination_deg=major.inclination_deg,
		longitude_of_ascending_node_deg=major.longitude_of_ascending_node_deg,
		argument_of_periapsis_deg=major.argument_of_periapsis_deg,
		true_anomaly_deg=math.degrees(nu),
		position_au=elements_to_position(major.semi_major_axis_au, major.eccentricity, math.radians(major.inclination_deg), node, peri, nu),
		radius_m=major.radius_m,
	)


def generate_field(spec: BeltFieldSpec, rng: Optional[DeterministicRng] = None) -> BeltFieldData:
	rng = rng if rng is not None else DeterministicRng(spec.seed)
	centers = [rng.uniform(0.0, TWO_PI) for _ in range(spec.cluster_count)]
	asteroids = [sample_background_asteroid(spec, centers, rng) for _ in range(spec.asteroid_count)]
	asteroids.extend(place_major_body(major) for major in spec.majors)
	logger.debug("belt %s: %d background, %d major", spec.name, spec.asteroid_count, len(spec.majors))
	return BeltFieldData(spec=spec, generation_seed=rng.seed, asteroids=asteroids)
