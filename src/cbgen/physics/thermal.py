from __future__ import annotations
import math
from .constants import SIGMA_SB, G, irradiance_from_luminosity_w_m2

# Reference heat flow above which a body is treated as maximally volcanic (Io ~ 1e14 W)
HIGH_VOLCANISM_HEAT_W = 1.0e14


def equilibrium_temperature_K(alpha: float, epsilon: float, irradiance_w_m2: float, view_factor: float = 1.0) -> float:
	q_abs = alpha * irradiance_w_m2 * view_factor
	if epsilon <= 0:
		raise ValueError("Emissivity must be > 0")
	if q_abs <= 0:
		return 0.0
	T4 = q_abs / (epsilon * SIGMA_SB)
	return T4 ** 0.25


def planet_equilibrium_temperature_K(luminosity_w: float, distance_m: float, albedo: float, epsilon: float = 1.0) -> float:
	"""Equilibrium temperature of a fast rotator: absorbs over pi R^2, radiates over 4 pi R^2."""
	irr = irradiance_from_luminosity_w_m2(luminosity_w, distance_m)
	alpha = min(1.0, max(0.0, 1.0 - albedo))
	return equilibrium_temperature_K(alpha, epsilon, irr, view_factor=0.25)


def internal_heat_temperature_K(internal_heat_w: float, radius_m: float) -> float:
	"""Blackbody temperature supported by internal heat flux alone."""
	if internal_heat_w <= 0 or radius_m <= 0:
		return 0.0
	flux = internal_heat_w / (4.0 * math.pi * radius_m ** 2)
	return (flux / SIGMA_SB) ** 0.25


def surface_temperature_K(t_eq_K: float, greenhouse_factor: float, internal_heat_w: float, radius_m: float) -> float:
	t_irr = max(0.0, t_eq_K) * max(0.0, greenhouse_factor)
	t_int = internal_heat_temperature_K(internal_heat_w, radius_m)
	return (t_irr ** 4 + t_int ** 4) ** 0.25


def tidal_heating_W(host_mass_kg: float, body_radius_m: float, semi_major_axis_m: float, eccentricity: float, k2_over_q: float = 0.015) -> float:
	"""Eccentricity tide dissipation, E = 21/2 (k2/Q) G M^2 R^5 n e^2 / a^6."""
	if host_mass_kg <= 0 or body_radius_m <= 0 or semi_major_axis_m <= 0:
		return 0.0
	n = math.sqrt(G * host_mass_kg / semi_major_axis_m ** 3)
	return 10.5 * k2_over_q * G * host_mass_kg ** 2 * body_radius_m ** 5 * n * eccentricity ** 2 / semi_major_axis_m ** 6


def volcanism_heat_ratio(internal_heat_w: float, tidal_heat_w: float) -> float:
	total = max(0.0, internal_heat_w) + max(0.0, tidal_heat_w)
	return min(1.0, total / HIGH_VOLCANISM_HEAT_W)
