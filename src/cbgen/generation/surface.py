"""Surface component generators.

Surface temperature combines the equilibrium temperature, the atmosphere's
greenhouse factor and internal plus tidal heat. Everything downstream
(volcanism, liquid water, ice, terrain relief, surface type) is gated on
those physical quantities rather than drawn independently.
"""
from __future__ import annotations
import logging
import math
from typing import Optional
from ..bodies.bodies_schema import (
	AtmosphereProps, CryosphereProps, HydrosphereProps, PhysicalProps, SurfaceProps, TerrainProps,
)
from ..physics.constants import EARTH_MASS_KG
from ..physics.materials import MaterialsRegistry
from ..physics.thermal import surface_temperature_K, volcanism_heat_ratio
from ..rng import DeterministicRng
from .specs import BodyOverrides

logger = logging.getLogger(__name__)

MIN_ELEVATION_RANGE_M = 200.0
MAX_ELEVATION_RANGE_M = 40000.0
# Earth: ~20 km of relief at 9.81 m/s^2
REFERENCE_RELIEF_M_G = 2.0e5

HIGH_OCEAN_HEAT_W = 1.0e12
MODERATE_OCEAN_HEAT_W = 1.0e10
HIGH_OCEAN_PROBABILITY = 0.8
MODERATE_OCEAN_PROBABILITY = 0.35

WATER_TRIPLE_POINT_PA = 611.657
WATER_FREEZING_K = 273.15

_materials = MaterialsRegistry()


def _clamp01(value: float) -> float:
	return min(1.0, max(0.0, value))


def volcanism_level(internal_heat_w: float, tidal_heat_w: float, override: Optional[float], rng: DeterministicRng) -> float:
	if override is not None:
		return override
	ratio = volcanism_heat_ratio(internal_heat_w, tidal_heat_w)
	return _clamp01(ratio * rng.uniform(0.8, 1.2))


def elevation_range_m(gravity_m_s2: float, rng: DeterministicRng) -> float:
	"""Total relief; weaker gravity supports taller mountains and deeper basins."""
	if gravity_m_s2 <= 0:
		return MAX_ELEVATION_RANGE_M
	span = REFERENCE_RELIEF_M_G / gravity_m_s2 * rng.uniform(0.6, 1.4)
	return min(MAX_ELEVATION_RANGE_M, max(MIN_ELEVATION_RANGE_M, span))


def generate_terrain(physical: PhysicalProps, volcanism: float, atmosphere: Optional[AtmosphereProps], ocean_coverage: float, rng: DeterministicRng) -> TerrainProps:
	span = elevation_range_m(physical.surface_gravity_m_s2, rng)
	min_elevation = -span * rng.uniform(0.3, 0.5)
	if physical.mass_kg > 0.1 * EARTH_MASS_KG:
		tectonic = _clamp01(volcanism * rng.uniform(0.6, 1.2))
	else:
		tectonic = _clamp01(volcanism * 0.3)
	pressure_bar = atmosphere.surface_pressure_pa / 1.0e5 if atmosphere is not None else 0.0
	erosion = _clamp01(0.3 * math.log10(1.0 + pressure_bar) + 0.5 * ocean_coverage + rng.uniform(0.0, 0.1))
	craters = _clamp01(1.0 - erosion - 0.6 * tectonic - 0.5 * volcanism + rng.uniform(-0.1, 0.1))
	roughness = _clamp01(0.3 + 0.4 * tectonic + 0.3 * craters - 0.3 * erosion + rng.uniform(-0.1, 0.1))
	return TerrainProps(
		min_elevation_m=min_elevation,
		max_elevation_m=span + min_elevation,
		roughness=roughness,
		crater_density=craters,
		tectonic_activity=tectonic,
		erosion_level=erosion,
	)


def boiling_point_K(pressure_pa: float) -> float:
	"""Clausius-Clapeyron estimate of water's boiling point."""
	if pressure_pa <= WATER_TRIPLE_POINT_PA:
		return WATER_FREEZING_K
	inv = 1.0 / 373.15 - (8.314 / 40660.0) * math.log(pressure_pa / 101325.0)
	return 1.0 / inv if inv > 0 else 647.0


def liquid_water_possible(temperature_K: float, atmosphere: Optional[AtmosphereProps]) -> bool:
	if atmosphere is None or atmosphere.surface_pressure_pa <= WATER_TRIPLE_POINT_PA:
		return False
	return WATER_FREEZING_K < temperature_K < boiling_point_K(atmosphere.surface_pressure_pa)


def generate_hydrosphere(temperature_K: float, atmosphere: Optional[AtmosphereProps], overrides: BodyOverrides, rng: DeterministicRng) -> Optional[HydrosphereProps]:
	if overrides.ocean_coverage is not None:
		coverage = overrides.ocean_coverage
		if coverage <= 0:
			return None
	elif liquid_water_possible(temperature_K, atmosphere):
		coverage = rng.uniform(0.05, 0.95)
	else:
		return None
	ice = min(1.0 - coverage, _clamp01((300.0 - temperature_K) / 100.0 * rng.uniform(0.5, 1.0)))
	return HydrosphereProps(
		ocean_coverage=coverage,
		ice_coverage=max(0.0, ice),
		mean_depth_m=rng.uniform(500.0, 6000.0),
		salinity_ppt=rng.uniform(5.0, 45.0),
	)


def has_subsurface_ocean(total_heat_w: float, override: Optional[bool], rng: DeterministicRng) -> bool:
	if override is not None:
		return override
	if total_heat_w > HIGH_OCEAN_HEAT_W:
		probability = HIGH_OCEAN_PROBABILITY
	elif total_heat_w > MODERATE_OCEAN_HEAT_W:
		probability = MODERATE_OCEAN_PROBABILITY
	else:
		return False
	return rng.chance(probability)


def ice_type_for(temperature_K: float, atmosphere: Optional[AtmosphereProps]) -> str:
	if temperature_K <= 60.0:
		return "nitrogen"
	if atmosphere is not None and temperature_K <= 195.0 and atmosphere.composition.get("CO2", 0.0) > 0.5:
		return "co2"
	return "water"


def generate_cryosphere(temperature_K: float, total_heat_w: float, icy: bool, atmosphere: Optional[AtmosphereProps], overrides: BodyOverrides, rng: DeterministicRng) -> Optional[CryosphereProps]:
	if temperature_K > 290.0 and not icy and not overrides.has_subsurface_ocean:
		return None
	if icy and temperature_K < 150.0:
		polar = 1.0
	else:
		polar = _clamp01((290.0 - temperature_K) / 150.0 * rng.uniform(0.7, 1.3))
	permafrost = max(0.0, WATER_FREEZING_K - temperature_K) * rng.uniform(2.0, 20.0)
	ocean = has_subsurface_ocean(total_heat_w, overrides.has_subsurface_ocean, rng)
	if ocean:
		depth = rng.uniform(10.0e3, 150.0e3)
		cryovolcanism = _clamp01(total_heat_w / HIGH_OCEAN_HEAT_W * rng.uniform(0.05, 0.3)) if icy else 0.0
	else:
		depth = 0.0
		cryovolcanism = 0.0
	return CryosphereProps(
		polar_cap_coverage=polar,
		permafrost_depth_m=permafrost,
		has_subsurface_ocean=ocean,
		subsurface_ocean_depth_m=depth,
		cryovolcanism_level=cryovolcanism,
		ice_type=ice_type_for(temperature_K, atmosphere),
	)


def choose_surface_type(temperature_K: float, volcanism: float, hydrosphere: Optional[HydrosphereProps], atmosphere: Optional[AtmosphereProps], default_type: Optional[str]) -> str:
	if temperature_K > 1000.0:
		return "molten"
	if volcanism > 0.7:
		return "volcanic"
	if hydrosphere is not None and hydrosphere.ocean_coverage > 0.5:
		return "oceanic"
	if default_type is not None:
		return default_type
	if temperature_K < 200.0:
		return "icy"
	if atmosphere is not None and temperature_K > 300.0:
		return "desert"
	return "rocky"


def draw_albedo(rng: DeterministicRng, *, icy: bool = False, giant: bool = False) -> float:
	if giant:
		return rng.uniform(0.3, 0.55)
	if icy:
		return rng.uniform(0.35, 0.8)
	return rng.uniform(0.1, 0.35)


def generate_surface(
	physical: PhysicalProps,
	t_eq_K: float,
	atmosphere: Optional[AtmosphereProps],
	tidal_heat_w: float,
	overrides: BodyOverrides,
	rng: DeterministicRng,
	*,
	albedo: float,
	icy: bool = False,
	default_type: Optional[str] = None,
) -> SurfaceProps:
	total_heat = physical.internal_heat_watts + tidal_heat_w
	if overrides.surface_temperature_k is not None:
		temperature = overrides.surface_temperature_k
	else:
		gh = atmosphere.greenhouse_factor if atmosphere is not None else 1.0
		temperature = surface_temperature_K(t_eq_K, gh, total_heat, physical.radius_m)
	volcanism = volcanism_level(physical.internal_heat_watts, tidal_heat_w, overrides.volcanism_level, rng)
	hydrosphere = generate_hydrosphere(temperature, atmosphere, overrides, rng)
	cryosphere = generate_cryosphere(temperature, total_heat, icy, atmosphere, overrides, rng)
	ocean = hydrosphere.ocean_coverage if hydrosphere is not None else 0.0
	terrain = generate_terrain(physical, volcanism, atmosphere, ocean, rng)
	surface_type = overrides.surface_type or choose_surface_type(temperature, volcanism, hydrosphere, atmosphere, default_type)
	logger.debug("surface %s at %.0f K, volcanism %.2f", surface_type, temperature, volcanism)
	return SurfaceProps(
		temperature_k=temperature,
		albedo=albedo,
		volcanism_level=volcanism,
		surface_type=surface_type,
		materials=_materials.get(surface_type),
		terrain=terrain,
		hydrosphere=hydrosphere,
		cryosphere=cryosphere,
	)
