from __future__ import annotations
import math
from typing import Tuple
import numpy as np
from .constants import G, TWO_PI

KEPLER_TOLERANCE = 1e-10
KEPLER_MAX_ITERATIONS = 50


def wrap_angle(angle_rad: float) -> float:
	"""Wrap an angle into [0, 2pi)."""
	wrapped = math.fmod(angle_rad, TWO_PI)
	if wrapped < 0:
		wrapped += TWO_PI
	# fmod of a tiny negative value can round back up to exactly 2pi
	return 0.0 if wrapped >= TWO_PI else wrapped


def orbital_period_s(semi_major_axis_m: float, primary_mass_kg: float, secondary_mass_kg: float = 0.0) -> float:
	mu = G * (primary_mass_kg + secondary_mass_kg)
	if mu <= 0 or semi_major_axis_m <= 0:
		return 0.0
	return TWO_PI * math.sqrt(semi_major_axis_m ** 3 / mu)


def solve_kepler_equation(mean_anomaly: float, eccentricity: float, tolerance: float = KEPLER_TOLERANCE, max_iterations: int = KEPLER_MAX_ITERATIONS) -> float:
	"""Solve M = E - e sin E for the eccentric anomaly E (radians) by Newton-Raphson."""
	if eccentricity < 1e-10:
		return mean_anomaly
	E = mean_anomaly if eccentricity < 0.8 else math.pi
	for _ in range(max_iterations):
		f = E - eccentricity * math.sin(E) - mean_anomaly
		fp = 1.0 - eccentricity * math.cos(E)
		if fp == 0.0:
			return E
		dE = f / fp
		E -= dE
		if abs(dE) < tolerance:
			break
	return E


def true_anomaly_from_eccentric(eccentric_anomaly: float, eccentricity: float) -> float:
	if eccentricity >= 1.0:
		return eccentric_anomaly
	half = 0.5 * eccentric_anomaly
	nu = 2.0 * math.atan2(math.sqrt(1.0 + eccentricity) * math.sin(half), math.sqrt(1.0 - eccentricity) * math.cos(half))
	return wrap_angle(nu)


def mean_to_true_anomaly(mean_anomaly: float, eccentricity: float) -> float:
	M = wrap_angle(mean_anomaly)
	E = solve_kepler_equation(M, eccentricity)
	return true_anomaly_from_eccentric(E, eccentricity)


def orbital_radius(semi_major_axis: float, eccentricity: float, true_anomaly: float) -> float:
	"""r = a (1 - e^2) / (1 + e cos nu), in the units of a."""
	denom = 1.0 + eccentricity * math.cos(true_anomaly)
	if denom <= 0:
		return semi_major_axis
	return semi_major_axis * (1.0 - eccentricity ** 2) / denom


def perifocal_to_inertial_matrix(inclination: float, ascending_node: float, arg_periapsis: float) -> np.ndarray:
	"""Rotation R3(-Omega) R1(-i) R3(-omega) from perifocal to reference frame."""
	cO, sO = math.cos(ascending_node), math.sin(ascending_node)
	ci, si = math.cos(inclination), math.sin(inclination)
	cw, sw = math.cos(arg_periapsis), math.sin(arg_periapsis)
	return np.array([
		[cO * cw - sO * sw * ci, -cO * sw - sO * cw * ci, sO * si],
		[sO * cw + cO * sw * ci, -sO * sw + cO * cw * ci, -cO * si],
		[sw * si, cw * si, ci],
	])


def elements_to_position(semi_major_axis: float, eccentricity: float, inclination: float, ascending_node: float, arg_periapsis: float, true_anomaly: float) -> Tuple[float, float, float]:
	"""Cartesian position from classical elements (angles in radians, length in units of a)."""
	r = orbital_radius(semi_major_axis, eccentricity, true_anomaly)
	perifocal = np.array([r * math.cos(true_anomaly), r * math.sin(true_anomaly), 0.0])
	x, y, z = perifocal_to_inertial_matrix(inclination, ascending_node, arg_periapsis) @ perifocal
	return float(x), float(y), float(z)
