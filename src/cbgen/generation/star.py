from __future__ import annotations
import logging
from typing import Optional
from ..bodies.bodies_schema import BodyType, CelestialBody
from ..bodies.provenance import make_provenance
from ..rng import DeterministicRng
from .naming import make_body_id, make_name
from .specs import StarSpec
from .stellar import generate_stellar

logger = logging.getLogger(__name__)


def generate_star(spec: StarSpec, rng: Optional[DeterministicRng] = None, created_at: Optional[str] = None) -> CelestialBody:
	rng = rng if rng is not None else DeterministicRng(spec.seed)
	body_id = make_body_id(rng, BodyType.STAR)
	name = spec.name or make_name(rng, "star")
	physical, stellar = generate_stellar(spec, rng)
	logger.debug("generated star %s (%s)", name, body_id)
	return CelestialBody(
		id=body_id,
		name=name,
		type=BodyType.STAR,
		physical=physical,
		stellar=stellar,
		provenance=make_provenance(rng.seed, spec, created_at),
	)
