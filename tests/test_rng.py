import pytest
from cbgen.rng import DeterministicRng


def _draws(rng):
	return [rng.random(), rng.uniform(-3.0, 7.0), rng.randint(0, 100), rng.normal(5.0, 2.0), rng.log_uniform(1.0, 1e6)]


def test_same_seed_same_sequence():
	assert _draws(DeterministicRng(42)) == _draws(DeterministicRng(42))


def test_different_seeds_diverge():
	assert _draws(DeterministicRng(1)) != _draws(DeterministicRng(2))


def test_instances_do_not_share_state():
	a = DeterministicRng(7)
	b = DeterministicRng(7)
	a.random()
	a.random()
	assert b.random() == DeterministicRng(7).random()


def test_randint_is_inclusive():
	rng = DeterministicRng(3)
	values = {rng.randint(0, 2) for _ in range(200)}
	assert values == {0, 1, 2}
	assert rng.randint(5, 5) == 5


def test_ranges_respected():
	rng = DeterministicRng(11)
	for _ in range(500):
		assert 0.0 <= rng.random() < 1.0
		assert 2.0 <= rng.uniform(2.0, 3.0) < 3.0
		assert 10.0 <= rng.log_uniform(10.0, 1000.0) <= 1000.0


def test_normal_with_zero_std_returns_mean():
	assert DeterministicRng(0).normal(3.5, 0.0) == 3.5


def test_choice():
	rng = DeterministicRng(9)
	assert rng.choice(["a", "b", "c"]) in ("a", "b", "c")
	with pytest.raises(ValueError):
		rng.choice([])


def test_child_streams():
	parent = DeterministicRng(100)
	assert parent.child(1).random() == DeterministicRng(100).child(1).random()
	assert parent.child(1).random() != parent.child(2).random()


def test_large_and_negative_seeds():
	assert DeterministicRng(-1).random() == DeterministicRng(-1).random()
	assert DeterministicRng(2 ** 70).random() == DeterministicRng(2 ** 70).random()
