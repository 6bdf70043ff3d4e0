from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from .bodies_schema import CelestialBody
from ..generation.belt import BeltFieldData

# Compact encoding: no whitespace between tokens
_COMPACT_SEPARATORS = (",", ":")


def load_json(path: str | Path) -> Any:
	p = Path(path)
	with p.open("r", encoding="utf-8") as f:
		return json.load(f)


def body_to_dict(body: CelestialBody) -> Dict[str, Any]:
	"""Nested mapping mirroring the model tree; absent components are omitted."""
	return body.model_dump(mode="json", exclude_none=True)


def body_from_dict(data: Dict[str, Any]) -> CelestialBody:
	return CelestialBody.model_validate(data)


def _encode(data: Any, indent: Optional[int]) -> str:
	if indent is None:
		return json.dumps(data, separators=_COMPACT_SEPARATORS)
	return json.dumps(data, indent=indent)


def body_to_json(body: CelestialBody, indent: Optional[int] = 2) -> str:
	"""Indented (human-readable) by default; ``indent=None`` gives the compact form."""
	return _encode(body_to_dict(body), indent)


def body_from_json(text: str) -> CelestialBody:
	return body_from_dict(json.loads(text))


def belt_to_dict(field: BeltFieldData) -> Dict[str, Any]:
	return field.model_dump(mode="json", exclude_none=True)


def belt_from_dict(data: Dict[str, Any]) -> BeltFieldData:
	return BeltFieldData.model_validate(data)


def belt_to_json(field: BeltFieldData, indent: Optional[int] = 2) -> str:
	return _encode(belt_to_dict(field), indent)


def belt_from_json(text: str) -> BeltFieldData:
	return belt_from_dict(json.loads(text))


def load_bodies(path: str | Path) -> List[CelestialBody]:
	"""Read a document holding either a single body or ``{"bodies": [...]}``."""
	data = load_json(path)
	if isinstance(data, dict) and "bodies" in data:
		return [body_from_dict(item) for item in data["bodies"]]
	if isinstance(data, list):
		return [body_from_dict(item) for item in data]
	return [body_from_dict(data)]


def write_bodies(bodies: List[CelestialBody], path: str | Path, indent: Optional[int] = 2) -> None:
	p = Path(path)
	p.parent.mkdir(parents=True, exist_ok=True)
	with p.open("w", encoding="utf-8") as f:
		f.write(_encode({"bodies": [body_to_dict(b) for b in bodies]}, indent))
