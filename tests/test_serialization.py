import json
from cbgen.bodies.loaders import (
	belt_from_json, belt_to_json, body_from_dict, body_from_json, body_to_dict, body_to_json, load_bodies, write_bodies,
)
from cbgen.bodies.provenance import (
	GENERATOR_VERSION, SCHEMA_VERSION, Compatibility, check_compatibility, make_provenance, needs_migration,
)
from cbgen.generation.asteroid import generate_asteroid
from cbgen.generation.belt import generate_field
from cbgen.generation.moon import generate_moon
from cbgen.generation.planet import generate_planet
from cbgen.generation.specs import AsteroidSpec, BeltFieldSpec, BodyOverrides, MajorBodySpec, MoonSpec, PlanetSpec, StarSpec
from cbgen.generation.star import generate_star


def _bodies(stamp, jovian):
	return [
		generate_star(StarSpec(seed=1, stellar_class="K"), created_at=stamp),
		generate_planet(PlanetSpec(seed=2, overrides=BodyOverrides(has_rings=True)), created_at=stamp),
		generate_planet(PlanetSpec(seed=3, size_category="neptunian", orbit_zone="cold"), created_at=stamp),
		generate_moon(MoonSpec(seed=4, archetype="icy"), jovian, created_at=stamp),
		generate_asteroid(AsteroidSpec(seed=5), created_at=stamp),
	]


def test_round_trip_equality(stamp, jovian):
	for body in _bodies(stamp, jovian):
		assert body_from_json(body_to_json(body)) == body
		assert body_from_json(body_to_json(body, indent=None)) == body
		assert body_from_dict(body_to_dict(body)) == body


def test_serialization_is_byte_identical(stamp, jovian):
	for a, b in zip(_bodies(stamp, jovian), _bodies(stamp, jovian)):
		assert body_to_json(a) == body_to_json(b)
		assert body_to_json(body_from_json(body_to_json(a))) == body_to_json(a)


def test_compact_form_has_no_whitespace(stamp, jovian):
	body = _bodies(stamp, jovian)[0]
	compact = body_to_json(body, indent=None)
	assert ": " not in compact and ", " not in compact
	assert json.loads(compact) == json.loads(body_to_json(body))
	assert len(compact) < len(body_to_json(body))


def test_absent_components_are_omitted(stamp, jovian):
	star = body_to_dict(_bodies(stamp, jovian)[0])
	assert "stellar" in star and "physical" in star
	for key in ("orbital", "surface", "atmosphere", "rings", "parent_id"):
		assert key not in star
	asteroid = body_to_dict(generate_asteroid(AsteroidSpec(seed=5), created_at=stamp))
	assert "atmosphere" not in asteroid
	assert asteroid["type"] == "asteroid"


def test_write_and_load_bodies(tmp_path, stamp, jovian):
	bodies = _bodies(stamp, jovian)
	path = tmp_path / "out" / "bodies.json"
	write_bodies(bodies, path)
	assert load_bodies(path) == bodies
	single = tmp_path / "one.json"
	single.write_text(body_to_json(bodies[1]), encoding="utf-8")
	assert load_bodies(single) == [bodies[1]]


def test_belt_round_trip():
	spec = BeltFieldSpec(seed=8, asteroid_count=50, majors=[MajorBodySpec(name="Vesta", semi_major_axis_au=2.36, radius_m=2.6e5)])
	field = generate_field(spec)
	text = belt_to_json(field)
	assert belt_from_json(text) == field
	assert belt_to_json(belt_from_json(text)) == text


def test_provenance_compatibility(stamp):
	prov = make_provenance(7, created_at=stamp)
	assert prov.generator_version == GENERATOR_VERSION
	assert prov.schema_version == SCHEMA_VERSION
	assert prov.spec_snapshot is None
	assert check_compatibility(prov) is Compatibility.COMPATIBLE
	assert check_compatibility(prov, generator_version="0.0.1") is Compatibility.GENERATOR_CHANGED
	assert check_compatibility(prov, schema_version=SCHEMA_VERSION + 1) is Compatibility.SCHEMA_MISMATCH
	assert check_compatibility(None) is Compatibility.UNKNOWN


def test_needs_migration(stamp):
	body = generate_asteroid(AsteroidSpec(seed=1), created_at=stamp)
	assert not needs_migration(body)
	old = body.model_copy(update={"provenance": body.provenance.model_copy(update={"schema_version": 1})})
	assert needs_migration(old)
	assert needs_migration(body.model_copy(update={"provenance": None}))
	newer_generator = body.model_copy(update={"provenance": body.provenance.model_copy(update={"generator_version": "9.0.0"})})
	assert not needs_migration(newer_generator)


def test_provenance_timestamp_defaults_to_now():
	prov = make_provenance(1)
	assert prov.created_at.endswith("+00:00")
