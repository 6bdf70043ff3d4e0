from __future__ import annotations
import math
from typing import Mapping
from .constants import G, K_BOLTZMANN, AMU_KG, GAS_MOLAR_MASS

# Atmospheres are retained when v_esc / v_thermal exceeds this
JEANS_RETENTION_THRESHOLD = 6.0
REFERENCE_GAS = "N2"


def surface_gravity_m_s2(mass_kg: float, radius_m: float) -> float:
	if mass_kg <= 0 or radius_m <= 0:
		return 0.0
	return G * mass_kg / radius_m ** 2


def escape_velocity_m_s(mass_kg: float, radius_m: float) -> float:
	if mass_kg <= 0 or radius_m <= 0:
		return 0.0
	return math.sqrt(2.0 * G * mass_kg / radius_m)


def bulk_density_kg_m3(mass_kg: float, radius_m: float) -> float:
	if radius_m <= 0:
		return 0.0
	return mass_kg / (4.0 / 3.0 * math.pi * radius_m ** 3)


def thermal_velocity_m_s(temperature_K: float, molar_mass_g_mol: float) -> float:
	"""Most probable molecular speed sqrt(2kT/m)."""
	if temperature_K <= 0 or molar_mass_g_mol <= 0:
		return 0.0
	return math.sqrt(2.0 * K_BOLTZMANN * temperature_K / (molar_mass_g_mol * AMU_KG))


def jeans_escape_parameter(mass_kg: float, radius_m: float, temperature_K: float, gas: str = REFERENCE_GAS) -> float:
	v_esc = escape_velocity_m_s(mass_kg, radius_m)
	v_th = thermal_velocity_m_s(temperature_K, GAS_MOLAR_MASS.get(gas, GAS_MOLAR_MASS[REFERENCE_GAS]))
	if v_th <= 0:
		return math.inf if v_esc > 0 else 0.0
	return v_esc / v_th


def can_retain_atmosphere(mass_kg: float, radius_m: float, temperature_K: float, gas: str = REFERENCE_GAS, threshold: float = JEANS_RETENTION_THRESHOLD) -> bool:
	return jeans_escape_parameter(mass_kg, radius_m, temperature_K, gas) > threshold


def mean_molar_mass(composition: Mapping[str, float]) -> float:
	total = sum(composition.values())
	if total <= 0:
		return GAS_MOLAR_MASS[REFERENCE_GAS]
	return sum(GAS_MOLAR_MASS.get(gas, GAS_MOLAR_MASS[REFERENCE_GAS]) * frac for gas, frac in composition.items()) / total


def scale_height_m(temperature_K: float, molar_mass_g_mol: float, gravity_m_s2: float) -> float:
	"""H = kT / (mu m_u g)."""
	if temperature_K <= 0 or molar_mass_g_mol <= 0 or gravity_m_s2 <= 0:
		return 0.0
	return K_BOLTZMANN * temperature_K / (molar_mass_g_mol * AMU_KG * gravity_m_s2)


def hill_radius_m(semi_major_axis_m: float, eccentricity: float, body_mass_kg: float, host_mass_kg: float) -> float:
	if host_mass_kg <= 0 or body_mass_kg <= 0:
		return 0.0
	return semi_major_axis_m * (1.0 - eccentricity) * (body_mass_kg / (3.0 * host_mass_kg)) ** (1.0 / 3.0)


def roche_limit_m(primary_radius_m: float, primary_density: float, satellite_density: float) -> float:
	"""Fluid Roche limit, d = 2.44 R (rho_M / rho_m)^(1/3)."""
	if satellite_density <= 0 or primary_density <= 0:
		return primary_radius_m
	return 2.44 * primary_radius_m * (primary_density / satellite_density) ** (1.0 / 3.0)
