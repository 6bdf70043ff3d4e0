from __future__ import annotations
from ..bodies.bodies_schema import BodyType
from ..rng import DeterministicRng

_STAR_PREFIX = ("Al", "Bel", "Cor", "Dra", "Eri", "Fal", "Gan", "Hel", "Ith", "Kor", "Lyr", "Mir", "Nor", "Ori", "Pol", "Sar", "Tau", "Vel", "Zan")
_STAR_SUFFIX = ("aris", "ion", "ara", "eth", "ox", "ulon", "ira", "es", "anth", "or")
_BODY_PREFIX = ("Ae", "Bra", "Cal", "Dun", "Ery", "Fen", "Gor", "Hal", "Ix", "Jor", "Kel", "Lum", "Mor", "Nys", "Oth", "Pra", "Quo", "Ryn", "Sol", "Tyr", "Ul", "Vor", "Wen", "Xa", "Yr")
_BODY_SUFFIX = ("a", "on", "is", "ar", "eus", "ia", "os", "um", "ea", "ix", "ane", "oth")

_ROMAN = ("I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X", "XI", "XII")


def make_name(rng: DeterministicRng, kind: str) -> str:
	if kind == "star":
		return rng.choice(_STAR_PREFIX) + rng.choice(_STAR_SUFFIX)
	name = rng.choice(_BODY_PREFIX) + rng.choice(_BODY_SUFFIX)
	if kind == "asteroid":
		return f"{rng.randint(1000, 99999)} {name}"
	return name


def make_body_id(rng: DeterministicRng, body_type: BodyType) -> str:
	return f"{body_type.value}-{rng.randint(0, 0xFFFFFFFF):08x}"


def satellite_name(parent_name: str, index: int) -> str:
	numeral = _ROMAN[index] if 0 <= index < len(_ROMAN) else str(index + 1)
	return f"{parent_name} {numeral}"
