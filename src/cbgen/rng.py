"""Seeded random source threaded explicitly through every generator.

Nothing in the package touches ``random`` or ``np.random``'s global state; each
generation call owns a ``DeterministicRng`` so that two generations never
interleave draws.
"""
from __future__ import annotations
import math
from typing import Sequence, TypeVar
import numpy as np

T = TypeVar("T")

_SEED_MASK = (1 << 64) - 1


class DeterministicRng:
	def __init__(self, seed: int) -> None:
		self.seed = int(seed)
		self._gen = np.random.Generator(np.random.PCG64(self.seed & _SEED_MASK))

	def __repr__(self) -> str:
		return f"DeterministicRng(seed={self.seed})"

	def random(self) -> float:
		"""Uniform float in [0, 1)."""
		return float(self._gen.random())

	def uniform(self, low: float, high: float) -> float:
		return low + (high - low) * self.random()

	def log_uniform(self, low: float, high: float) -> float:
		if low <= 0 or high <= 0:
			return self.uniform(low, high)
		return math.exp(self.uniform(math.log(low), math.log(high)))

	def randint(self, low: int, high: int) -> int:
		"""Uniform integer in [low, high], both inclusive."""
		if high < low:
			low, high = high, low
		return int(self._gen.integers(low, high, endpoint=True))

	def normal(self, mean: float = 0.0, std: float = 1.0) -> float:
		if std <= 0:
			return float(mean)
		return float(self._gen.normal(mean, std))

	def chance(self, probability: float) -> bool:
		return self.random() < probability

	def choice(self, items: Sequence[T]) -> T:
		if not items:
			raise ValueError("choice() from an empty sequence")
		return items[self.randint(0, len(items) - 1)]

	def child(self, offset: int) -> "DeterministicRng":
		"""Independent stream for a sub-generation, derived from this seed."""
		return DeterministicRng(self.seed + int(offset))
