from __future__ import annotations
import math

AU_M = 1.495978707e11
SIGMA_SB = 5.670374419e-8  # W m^-2 K^-4
G = 6.67430e-11  # m^3 kg^-1 s^-2
K_BOLTZMANN = 1.380649e-23  # J/K
AMU_KG = 1.66053906660e-27

SOLAR_LUMINOSITY_W = 3.828e26
SOLAR_MASS_KG = 1.98847e30
RADIUS_SUN_M = 6.9634e8
SOLAR_TEMPERATURE_K = 5772.0
SOLAR_CONSTANT_1AU_W_M2 = 1361.0
SOLAR_METALLICITY_Z = 0.0134
GM_SUN = 1.32712440018e20  # m^3/s^2

EARTH_MASS_KG = 5.9722e24
EARTH_RADIUS_M = 6.371e6
GM_EARTH = 3.986004418e14
JUPITER_MASS_KG = 1.89813e27
JUPITER_RADIUS_M = 6.9911e7

SECONDS_PER_YEAR = 3.15576e7
SECONDS_PER_HOUR = 3600.0
TWO_PI = 2.0 * math.pi

# Molar masses in g/mol
GAS_MOLAR_MASS = {
	"H2": 2.016,
	"He": 4.003,
	"CH4": 16.04,
	"NH3": 17.03,
	"H2O": 18.015,
	"N2": 28.014,
	"CO": 28.01,
	"O2": 31.998,
	"Ar": 39.948,
	"CO2": 44.01,
	"SO2": 64.066,
}


def irradiance_from_luminosity_w_m2(luminosity_w: float, distance_m: float) -> float:
	if distance_m <= 0:
		return 0.0
	return luminosity_w / (4.0 * math.pi * distance_m ** 2)
