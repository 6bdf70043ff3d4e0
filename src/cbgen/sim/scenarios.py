from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from ..config import load_yaml_config
from ..generation.specs import AsteroidSpec, BeltFieldSpec, MoonSpec, PlanetSpec, StarSpec

# Seed offsets keep every body on its own RNG stream derived from the scenario seed
PLANET_SEED_STRIDE = 100
ASTEROID_SEED_BASE = 10000
BELT_SEED_BASE = 20000


@dataclass
class PlanetPlan:
	spec: PlanetSpec
	moons: List[MoonSpec] = field(default_factory=list)


@dataclass
class SystemScenario:
	name: str
	seed: int
	star: StarSpec
	planets: List[PlanetPlan] = field(default_factory=list)
	asteroids: List[AsteroidSpec] = field(default_factory=list)
	belts: List[BeltFieldSpec] = field(default_factory=list)
	created_at: Optional[str] = None

	def body_count(self) -> int:
		return 1 + len(self.planets) + sum(len(p.moons) for p in self.planets) + len(self.asteroids)


def _seed(entry: Dict[str, Any], default: int) -> int:
	return int(entry.get("seed", default))


def build_scenario(cfg: Dict[str, Any]) -> SystemScenario:
	"""Turn a scenario mapping (usually parsed from YAML) into validated specs."""
	base = int(cfg.get("seed", 0))
	star_cfg = cfg.get("star", {}) or {}
	star = StarSpec(
		seed=_seed(star_cfg, base),
		stellar_class=star_cfg.get("class", "G"),
		sub_rank=star_cfg.get("sub_rank"),
		name=star_cfg.get("name"),
		overrides=star_cfg.get("overrides", {}),
	)
	planets: List[PlanetPlan] = []
	for i, p_cfg in enumerate(cfg.get("planets", []) or []):
		p_seed = _seed(p_cfg, base + PLANET_SEED_STRIDE * (i + 1))
		spec = PlanetSpec(
			seed=p_seed,
			size_category=p_cfg.get("size", "terrestrial"),
			orbit_zone=p_cfg.get("zone", "temperate"),
			name=p_cfg.get("name"),
			overrides=p_cfg.get("overrides", {}),
		)
		moons = [
			MoonSpec(
				seed=_seed(m_cfg, p_seed + j + 1),
				archetype=m_cfg.get("archetype", "regular_rocky"),
				name=m_cfg.get("name"),
				overrides=m_cfg.get("overrides", {}),
			)
			for j, m_cfg in enumerate(p_cfg.get("moons", []) or [])
		]
		planets.append(PlanetPlan(spec=spec, moons=moons))
	asteroids = []
	for k, a_cfg in enumerate(cfg.get("asteroids", []) or []):
		a_cfg = dict(a_cfg)
		a_cfg.setdefault("seed", base + ASTEROID_SEED_BASE + k)
		if "class" in a_cfg:
			a_cfg["asteroid_class"] = a_cfg.pop("class")
		asteroids.append(AsteroidSpec(**a_cfg))
	belts = []
	for b, b_cfg in enumerate(cfg.get("belts", []) or []):
		b_cfg = dict(b_cfg)
		b_cfg.setdefault("seed", base + BELT_SEED_BASE + b)
		belts.append(BeltFieldSpec(**b_cfg))
	return SystemScenario(
		name=str(cfg.get("name", "scenario")),
		seed=base,
		star=star,
		planets=planets,
		asteroids=asteroids,
		belts=belts,
		created_at=cfg.get("created_at"),
	)


def load_scenario(path: str | Path) -> SystemScenario:
	return build_scenario(load_yaml_config(path))
