from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional
import numpy as np
import pandas as pd
from tqdm import tqdm
from ..bodies.bodies_schema import CelestialBody
from ..bodies.provenance import utc_timestamp
from ..generation.asteroid import generate_asteroid
from ..generation.belt import BeltFieldData, generate_field
from ..generation.context import ParentContext
from ..generation.moon import generate_moon
from ..generation.naming import satellite_name
from ..generation.planet import generate_planet
from ..generation.star import generate_star
from ..physics.constants import AU_M, EARTH_MASS_KG, EARTH_RADIUS_M
from ..validation.validator import ValidationResult, validate_belt_field, validate_body
from .scenarios import SystemScenario

logger = logging.getLogger(__name__)


def _issue_rows(subject: str, result: ValidationResult) -> List[Dict[str, Any]]:
	return [
		{"subject": subject, "field": i.field, "severity": i.severity.value, "message": i.message}
		for i in result.issues
	]


def body_row(body: CelestialBody) -> Dict[str, Any]:
	"""Flatten the headline numbers of a body into one table row."""
	row: Dict[str, Any] = {"id": body.id, "name": body.name, "type": body.type.value, "parent_id": body.parent_id}
	if body.physical is not None:
		p = body.physical
		row.update({
			"mass_earth": p.mass_kg / EARTH_MASS_KG,
			"radius_earth": p.radius_m / EARTH_RADIUS_M,
			"density_kg_m3": p.density_kg_m3,
			"gravity_m_s2": p.surface_gravity_m_s2,
			"internal_heat_W": p.internal_heat_watts,
		})
	if body.stellar is not None:
		row.update({
			"spectral_type": f"{body.stellar.spectral_class}{body.stellar.spectral_subtype}",
			"teff_K": body.stellar.effective_temperature_k,
		})
	if body.orbital is not None:
		row.update({
			"a_AU": body.orbital.semi_major_axis_m / AU_M,
			"eccentricity": body.orbital.eccentricity,
			"inclination_deg": body.orbital.inclination_deg,
			"tidally_locked": body.orbital.tidally_locked,
		})
	if body.surface is not None:
		row.update({
			"surface_type": body.surface.surface_type,
			"surface_T_K": body.surface.temperature_k,
			"albedo": body.surface.albedo,
		})
	if body.atmosphere is not None:
		row.update({
			"pressure_Pa": body.atmosphere.surface_pressure_pa,
			"dominant_gas": body.atmosphere.dominant_gas(),
		})
	row["ring_bands"] = len(body.rings.bands) if body.rings is not None else 0
	return row


def belt_frame(data: BeltFieldData) -> pd.DataFrame:
	rows = []
	for a in data.asteroids:
		x, y, z = a.position_au
		rows.append({
			"name": a.name,
			"is_major": a.is_major,
			"a_AU": a.semi_major_axis_au,
			"eccentricity": a.eccentricity,
			"inclination_deg": a.inclination_deg,
			"node_deg": a.longitude_of_ascending_node_deg,
			"peri_deg": a.argument_of_periapsis_deg,
			"true_anomaly_deg": a.true_anomaly_deg,
			"x_AU": x,
			"y_AU": y,
			"z_AU": z,
			"radius_m": a.radius_m,
		})
	return pd.DataFrame(rows)


def run_generation(scenario: SystemScenario, created_at: Optional[str] = None) -> Dict[str, Any]:
	"""Generate every body of a scenario, validate it and summarize the system."""
	stamp = created_at or scenario.created_at or utc_timestamp()
	bodies: List[CelestialBody] = []
	issues: List[Dict[str, Any]] = []

	star = generate_star(scenario.star, created_at=stamp)
	bodies.append(star)
	star_ctx = ParentContext.from_star(star)
	logger.info("Generated star %s (%s)", star.name, star.id)

	for plan in tqdm(scenario.planets, desc=f"Planets {scenario.name}", disable=not scenario.planets):
		planet = generate_planet(plan.spec, star_ctx, created_at=stamp)
		bodies.append(planet)
		moon_ctx = star_ctx.with_planet(planet)
		for j, moon_spec in enumerate(plan.moons):
			if moon_spec.name is None:
				moon_spec = moon_spec.model_copy(update={"name": satellite_name(planet.name, j)})
			bodies.append(generate_moon(moon_spec, moon_ctx, created_at=stamp))
	for a_spec in scenario.asteroids:
		bodies.append(generate_asteroid(a_spec, star_ctx, created_at=stamp))

	belts: List[BeltFieldData] = []
	for b_spec in scenario.belts:
		field = generate_field(b_spec)
		belts.append(field)
		issues.extend(_issue_rows(f"belt:{b_spec.name}", validate_belt_field(field)))

	for body in bodies:
		result = validate_body(body)
		if not result.is_valid():
			logger.warning("Body %s failed validation with %d error(s)", body.id, len(result.errors()))
		issues.extend(_issue_rows(body.id, result))

	table = pd.DataFrame([body_row(b) for b in bodies])
	counts = table["type"].value_counts().to_dict() if not table.empty else {}
	planet_a = table.loc[table["type"].isin(["planet", "dwarf_planet"]), "a_AU"] if "a_AU" in table.columns else pd.Series(dtype=float)
	belt_counts = {b.spec.name: len(b.asteroids) for b in belts}
	summary = {
		"name": scenario.name,
		"seed": scenario.seed,
		"created_at": stamp,
		"star": {
			"id": star.id,
			"name": star.name,
			"spectral_type": f"{star.stellar.spectral_class}{star.stellar.spectral_subtype}" if star.stellar else None,
			"luminosity_solar": star_ctx.luminosity_solar,
		},
		"body_counts": {str(k): int(v) for k, v in counts.items()},
		"belt_asteroid_counts": belt_counts,
		"planet_a_AU": {
			"min": float(np.min(planet_a)) if len(planet_a) else None,
			"max": float(np.max(planet_a)) if len(planet_a) else None,
		},
		"validation": {
			"errors": sum(1 for i in issues if i["severity"] == "error"),
			"warnings": sum(1 for i in issues if i["severity"] == "warning"),
		},
	}
	return {"bodies": bodies, "belts": belts, "table": table, "issues": issues, "summary": summary}
