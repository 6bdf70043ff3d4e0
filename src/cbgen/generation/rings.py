from __future__ import annotations
import math
from typing import List, Optional
from ..bodies.bodies_schema import PhysicalProps, RingBand, RingSystemProps
from ..physics.materials import RING_MATERIALS, MATERIAL_DENSITY_KG_M3
from ..rng import DeterministicRng

MAX_RING_BANDS = 5
# Rings start at least this many parent radii out
MIN_INNER_RADII = 1.1
ICY_RING_MAX_TEMPERATURE_K = 150.0


def should_have_rings(probability: float, override: Optional[bool], rng: DeterministicRng) -> bool:
	if override is not None:
		return override
	return rng.chance(probability)


def band_mass_kg(band: RingBand, particle_density: float) -> float:
	"""Surface density ~ (4/3) rho s tau for a monolayer-equivalent of particles of radius s."""
	sigma = 4.0 / 3.0 * particle_density * band.particle_size_m * band.optical_depth
	return sigma * math.pi * (band.outer_radius_m ** 2 - band.inner_radius_m ** 2)


def generate_rings(physical: PhysicalProps, t_eq_K: float, rng: DeterministicRng) -> RingSystemProps:
	"""Ordered, non-overlapping bands between ~1.1 and ~3 parent radii."""
	radius = physical.radius_m
	inner = radius * rng.uniform(MIN_INNER_RADII, 1.6)
	outer = radius * rng.uniform(2.0, 3.0)
	n_bands = rng.randint(1, MAX_RING_BANDS)
	cuts = sorted(rng.uniform(inner, outer) for _ in range(n_bands - 1))
	edges = [inner] + cuts + [outer]
	regime = "icy" if t_eq_K < ICY_RING_MAX_TEMPERATURE_K else "rocky"
	composition = RING_MATERIALS[regime]
	particle_density = MATERIAL_DENSITY_KG_M3["water_ice" if regime == "icy" else "silicates"]

	bands: List[RingBand] = []
	for lo, hi in zip(edges[:-1], edges[1:]):
		width = hi - lo
		if width <= 1e-6 * radius:
			continue
		gap = width * rng.uniform(0.0, 0.05)
		bands.append(RingBand(
			inner_radius_m=lo,
			outer_radius_m=hi - gap,
			optical_depth=rng.log_uniform(0.01, 2.0),
			particle_size_m=rng.log_uniform(0.01, 10.0),
			composition=dict(composition),
		))
	total = sum(band_mass_kg(b, particle_density) for b in bands)
	return RingSystemProps(total_mass_kg=total, bands=bands)
