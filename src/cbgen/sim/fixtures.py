"""Regression fixture corpus.

Every case is a fixed (spec, context) pair generated with a pinned timestamp,
so regenerating the corpus with an unchanged generator reproduces the stored
documents byte for byte.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from tqdm import tqdm
from ..bodies.loaders import belt_to_dict, body_to_dict, load_json
from ..bodies.provenance import GENERATOR_VERSION, SCHEMA_VERSION
from ..generation.asteroid import generate_asteroid
from ..generation.belt import generate_field
from ..generation.context import ParentContext
from ..generation.moon import generate_moon
from ..generation.planet import generate_planet
from ..generation.specs import (
	AsteroidClass, AsteroidSpec, BeltFieldSpec, BeltGap, MajorBodySpec, MoonArchetype, MoonSpec, PlanetSpec, StarSpec,
)
from ..generation.star import generate_star
from ..physics.tables import OrbitZone, SizeCategory, StellarClass

logger = logging.getLogger(__name__)

FIXTURE_TIMESTAMP = "2000-01-01T00:00:00+00:00"
FIXTURE_BASE_SEED = 1000
INDEX_FILE = "index.json"


@dataclass(frozen=True)
class FixtureCase:
	name: str
	kind: str
	spec: BaseModel
	context: Optional[ParentContext] = None


def build_fixture_cases() -> List[FixtureCase]:
	cases: List[FixtureCase] = []

	def seed() -> int:
		return FIXTURE_BASE_SEED + len(cases)

	for cls in StellarClass:
		cases.append(FixtureCase(f"star_{cls.value.lower()}", "star", StarSpec(seed=seed(), stellar_class=cls, sub_rank=5)))
	for size in SizeCategory:
		cases.append(FixtureCase(f"planet_{size.value}", "planet", PlanetSpec(seed=seed(), size_category=size)))
	for zone in OrbitZone:
		if zone is OrbitZone.TEMPERATE:
			continue
		cases.append(FixtureCase(f"planet_terrestrial_{zone.value}", "planet", PlanetSpec(seed=seed(), orbit_zone=zone)))
	jovian = ParentContext.jupiter_like()
	for archetype in MoonArchetype:
		cases.append(FixtureCase(f"moon_{archetype.value}", "moon", MoonSpec(seed=seed(), archetype=archetype), jovian))
	for a_cls in AsteroidClass:
		cases.append(FixtureCase(f"asteroid_{a_cls.value.lower()}", "asteroid", AsteroidSpec(seed=seed(), asteroid_class=a_cls)))
	cases.append(FixtureCase("belt_main", "belt", BeltFieldSpec(
		seed=seed(),
		name="main",
		asteroid_count=200,
		gaps=[BeltGap(center_au=2.5, half_width_au=0.03), BeltGap(center_au=2.82, half_width_au=0.03)],
		majors=[MajorBodySpec(name="Ceres", semi_major_axis_au=2.77, eccentricity=0.076, inclination_deg=10.6,
			longitude_of_ascending_node_deg=80.3, argument_of_periapsis_deg=73.6, mean_anomaly_deg=95.99, radius_m=4.7e5)],
	)))
	cases.append(FixtureCase("belt_clustered", "belt", BeltFieldSpec(
		seed=seed(),
		name="trojans",
		inner_radius_au=5.05,
		outer_radius_au=5.35,
		asteroid_count=150,
		cluster_count=2,
		cluster_fraction=0.9,
		radial_concentration=3.0,
	)))
	return cases


def generate_case(case: FixtureCase) -> Dict[str, Any]:
	if case.kind == "star":
		return body_to_dict(generate_star(case.spec, created_at=FIXTURE_TIMESTAMP))
	if case.kind == "planet":
		return body_to_dict(generate_planet(case.spec, case.context, created_at=FIXTURE_TIMESTAMP))
	if case.kind == "moon":
		return body_to_dict(generate_moon(case.spec, case.context, created_at=FIXTURE_TIMESTAMP))
	if case.kind == "asteroid":
		return body_to_dict(generate_asteroid(case.spec, case.context, created_at=FIXTURE_TIMESTAMP))
	if case.kind == "belt":
		return belt_to_dict(generate_field(case.spec))
	raise ValueError(f"unknown fixture kind: {case.kind}")


def describe_case(case: FixtureCase) -> Dict[str, Any]:
	"""Inputs of a case as stored beside its output in the corpus index."""
	return {
		"kind": case.kind,
		"spec": case.spec.model_dump(mode="json"),
		"context": case.context.model_dump(mode="json") if case.context is not None else None,
	}


def build_fixture_corpus(cases: Optional[List[FixtureCase]] = None) -> Dict[str, Dict[str, Any]]:
	cases = cases if cases is not None else build_fixture_cases()
	return {case.name: generate_case(case) for case in tqdm(cases, desc="Fixtures")}


def _encode(document: Dict[str, Any]) -> str:
	return json.dumps(document, indent=2)


def write_fixture_corpus(out_dir: Path, corpus: Optional[Dict[str, Dict[str, Any]]] = None, cases: Optional[List[FixtureCase]] = None) -> List[Path]:
	cases = cases if cases is not None else build_fixture_cases()
	corpus = corpus if corpus is not None else build_fixture_corpus(cases)
	out_dir.mkdir(parents=True, exist_ok=True)
	paths = []
	for name, document in corpus.items():
		path = out_dir / f"{name}.json"
		path.write_text(_encode(document), encoding="utf-8")
		paths.append(path)
	index = {
		"generator_version": GENERATOR_VERSION,
		"schema_version": SCHEMA_VERSION,
		"fixtures": sorted(corpus),
		"cases": {c.name: describe_case(c) for c in cases if c.name in corpus},
	}
	(out_dir / INDEX_FILE).write_text(_encode(index), encoding="utf-8")
	logger.info("Wrote %d fixtures to %s", len(paths), out_dir)
	return paths


def compare_fixture_corpus(fixture_dir: Path, corpus: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[str, str]:
	"""Regenerate the corpus and diff it against stored fixtures.

	Returns a mapping of fixture name to ``missing``, ``changed`` or
	``unexpected``; an empty mapping means the generator still reproduces
	every stored document exactly.
	"""
	corpus = corpus if corpus is not None else build_fixture_corpus()
	index_path = fixture_dir / INDEX_FILE
	stored = set(load_json(index_path)["fixtures"]) if index_path.exists() else {p.stem for p in fixture_dir.glob("*.json")}
	stored.discard(Path(INDEX_FILE).stem)
	diffs: Dict[str, str] = {}
	for name, document in corpus.items():
		path = fixture_dir / f"{name}.json"
		if not path.exists():
			diffs[name] = "missing"
		elif path.read_text(encoding="utf-8") != _encode(document):
			diffs[name] = "changed"
	for name in sorted(stored - set(corpus)):
		diffs[name] = "unexpected"
	if diffs:
		logger.warning("%d fixture(s) differ from the stored corpus", len(diffs))
	return diffs
