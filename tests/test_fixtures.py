import json
from pathlib import Path
import pytest
from cbgen.bodies.loaders import body_from_dict
from cbgen.physics.tables import OrbitZone, SizeCategory, StellarClass
from cbgen.generation.specs import AsteroidClass, MoonArchetype
from cbgen.sim.fixtures import (
	FIXTURE_TIMESTAMP, INDEX_FILE, build_fixture_cases, build_fixture_corpus, compare_fixture_corpus, write_fixture_corpus,
)

STORED_CORPUS = Path(__file__).parent / "fixtures"


def test_cases_cover_every_category():
	cases = build_fixture_cases()
	names = [c.name for c in cases]
	assert len(names) == len(set(names))
	assert len({c.spec.seed for c in cases}) == len(cases)
	by_kind = {}
	for case in cases:
		by_kind.setdefault(case.kind, []).append(case.spec)
	assert {s.stellar_class for s in by_kind["star"]} == set(StellarClass)
	assert {s.size_category for s in by_kind["planet"]} == set(SizeCategory)
	assert {s.orbit_zone for s in by_kind["planet"]} == set(OrbitZone)
	assert {s.archetype for s in by_kind["moon"]} == set(MoonArchetype)
	assert {s.asteroid_class for s in by_kind["asteroid"]} == set(AsteroidClass)
	assert len(by_kind["belt"]) == 2


def test_corpus_is_deterministic():
	cases = build_fixture_cases()[:6]
	assert build_fixture_corpus(cases) == build_fixture_corpus(cases)


def test_corpus_documents_parse_back():
	cases = [c for c in build_fixture_cases() if c.kind != "belt"][:8]
	for doc in build_fixture_corpus(cases).values():
		body = body_from_dict(doc)
		assert body.provenance.created_at == FIXTURE_TIMESTAMP


def test_write_then_compare(tmp_path):
	corpus = build_fixture_corpus()
	paths = write_fixture_corpus(tmp_path, corpus)
	assert len(paths) == len(corpus)
	index = json.loads((tmp_path / "index.json").read_text())
	assert index["fixtures"] == sorted(corpus)
	assert index["cases"]["moon_icy"]["context"]["planet_mass_kg"] > 0
	assert index["cases"]["star_g"]["context"] is None
	assert index["cases"]["belt_main"]["spec"]["asteroid_count"] == 200
	assert compare_fixture_corpus(tmp_path, corpus) == {}


def test_compare_reports_drift(tmp_path):
	corpus = build_fixture_corpus(build_fixture_cases()[:4])
	write_fixture_corpus(tmp_path, corpus)
	names = sorted(corpus)
	(tmp_path / f"{names[0]}.json").write_text("{}", encoding="utf-8")
	(tmp_path / f"{names[1]}.json").unlink()
	smaller = {k: v for k, v in corpus.items() if k != names[2]}
	diffs = compare_fixture_corpus(tmp_path, smaller)
	assert diffs == {names[0]: "changed", names[1]: "missing", names[2]: "unexpected"}


def test_generator_reproduces_stored_corpus():
	if not (STORED_CORPUS / INDEX_FILE).exists():
		write_fixture_corpus(STORED_CORPUS)
		pytest.skip(f"recorded the fixture corpus in {STORED_CORPUS}; commit it")
	assert compare_fixture_corpus(STORED_CORPUS) == {}
