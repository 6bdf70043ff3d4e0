import json
from pathlib import Path
from cbgen.cli import main
from cbgen.bodies.loaders import write_bodies
from cbgen.bodies.bodies_schema import BodyType, CelestialBody, PhysicalProps
from cbgen.generation.asteroid import generate_asteroid
from cbgen.generation.specs import AsteroidSpec

SCENARIO = Path(__file__).resolve().parents[1] / "scenarios" / "red_dwarf.yaml"


def test_run_command(tmp_path, capsys, stamp):
	assert main(["run", "--scenario", str(SCENARIO), "--out", str(tmp_path), "--created-at", stamp]) == 0
	summary = json.loads(capsys.readouterr().out)
	assert summary["name"] == "red_dwarf"
	assert (tmp_path / "bodies.json").exists()


def test_validate_command(tmp_path, capsys, stamp):
	good = tmp_path / "good.json"
	write_bodies([generate_asteroid(AsteroidSpec(seed=1), created_at=stamp)], good)
	assert main(["validate", "--input", str(good)]) == 0
	report = json.loads(capsys.readouterr().out)
	assert report["bodies"][0]["compatibility"] == "compatible"

	bad = tmp_path / "bad.json"
	write_bodies([CelestialBody(id="x", name="x", type=BodyType.PLANET, physical=PhysicalProps(mass_kg=-1.0, radius_m=1.0))], bad)
	assert main(["validate", "--input", str(bad)]) == 1
	report = json.loads(capsys.readouterr().out)
	assert report["errors"] == 1
	assert report["bodies"][0]["compatibility"] == "unknown"


def test_fixtures_command(tmp_path, capsys):
	assert main(["fixtures", "--out", str(tmp_path), "--check", str(tmp_path)]) == 0
	assert json.loads(capsys.readouterr().out)["differences"] == {}
	(tmp_path / "star_g.json").write_text("{}", encoding="utf-8")
	assert main(["fixtures", "--check", str(tmp_path)]) == 1
