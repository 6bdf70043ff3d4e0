from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel
from .bodies_schema import CelestialBody, Provenance

# Bump the minor/patch version for changes that alter generated values,
# the major version when field meaning changes. SCHEMA_VERSION tracks the document layout.
GENERATOR_VERSION = "1.2.0"
SCHEMA_VERSION = 3


class Compatibility(str, Enum):
	COMPATIBLE = "compatible"
	GENERATOR_CHANGED = "generator_changed"
	SCHEMA_MISMATCH = "schema_mismatch"
	UNKNOWN = "unknown"


def utc_timestamp() -> str:
	return datetime.now(timezone.utc).isoformat(timespec="seconds")


def make_provenance(seed: int, spec: Optional[BaseModel] = None, created_at: Optional[str] = None) -> Provenance:
	snapshot: Optional[Dict[str, Any]] = spec.model_dump(mode="json", exclude_none=True) if spec is not None else None
	return Provenance(
		generation_seed=int(seed),
		generator_version=GENERATOR_VERSION,
		schema_version=SCHEMA_VERSION,
		created_at=created_at or utc_timestamp(),
		spec_snapshot=snapshot,
	)


def check_compatibility(provenance: Optional[Provenance], generator_version: str = GENERATOR_VERSION, schema_version: int = SCHEMA_VERSION) -> Compatibility:
	"""Compare a persisted body's provenance with the running generator.

	A schema mismatch means the document needs migrating before use; a generator
	change means regenerating from the same seed would not reproduce the body.
	"""
	if provenance is None:
		return Compatibility.UNKNOWN
	if provenance.schema_version != schema_version:
		return Compatibility.SCHEMA_MISMATCH
	if provenance.generator_version != generator_version:
		return Compatibility.GENERATOR_CHANGED
	return Compatibility.COMPATIBLE


def needs_migration(body: CelestialBody) -> bool:
	return check_compatibility(body.provenance) in (Compatibility.SCHEMA_MISMATCH, Compatibility.UNKNOWN)
