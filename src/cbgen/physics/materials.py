from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Mapping, Optional

# Bulk surface compositions (mass fractions) keyed by surface type
SURFACE_MATERIALS: Mapping[str, Mapping[str, float]] = MappingProxyType({
	"rocky": {"silicates": 0.62, "iron_oxides": 0.18, "feldspar": 0.12, "carbonates": 0.08},
	"desert": {"silicates": 0.55, "iron_oxides": 0.3, "sulfates": 0.1, "carbonates": 0.05},
	"oceanic": {"silicates": 0.45, "water": 0.35, "carbonates": 0.12, "clays": 0.08},
	"volcanic": {"basalt": 0.55, "sulfur": 0.2, "silicates": 0.18, "iron_oxides": 0.07},
	"molten": {"silicate_melt": 0.7, "iron": 0.2, "sulfur": 0.1},
	"icy": {"water_ice": 0.7, "silicates": 0.2, "ammonia_ice": 0.05, "organics": 0.05},
	"hazy": {"water_ice": 0.5, "organics": 0.3, "methane_ice": 0.12, "silicates": 0.08},
	"regolith": {"silicates": 0.72, "iron": 0.08, "glass": 0.12, "feldspar": 0.08},
	"carbonaceous": {"silicates": 0.45, "organics": 0.25, "clays": 0.2, "water_ice": 0.1},
	"metallic": {"iron": 0.75, "nickel": 0.2, "silicates": 0.05},
})

# Ring particle compositions keyed by thermal regime
RING_MATERIALS: Mapping[str, Mapping[str, float]] = MappingProxyType({
	"icy": {"water_ice": 0.95, "silicates": 0.04, "organics": 0.01},
	"rocky": {"silicates": 0.8, "iron_oxides": 0.15, "carbon": 0.05},
})

MATERIAL_DENSITY_KG_M3: Mapping[str, float] = MappingProxyType({
	"water_ice": 917.0,
	"silicates": 3000.0,
})


class MaterialsRegistry:
	def __init__(self, data: Optional[Mapping[str, Mapping[str, float]]] = None) -> None:
		self._data = data if data is not None else SURFACE_MATERIALS

	def get(self, name: str) -> Dict[str, float]:
		"""Fresh copy of a composition; unknown names fall back to rocky."""
		return dict(self._data.get(name, self._data["rocky"]))


def normalized(composition: Mapping[str, float]) -> Dict[str, float]:
	total = sum(v for v in composition.values() if v > 0)
	if total <= 0:
		return {}
	return {k: v / total for k, v in composition.items() if v > 0}
