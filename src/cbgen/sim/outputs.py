from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from ..bodies.loaders import belt_to_json, write_bodies
from .engine import belt_frame
plt.style.use("seaborn-v0_8-darkgrid")

_TYPE_MARKERS = {"planet": "o", "dwarf_planet": "s", "moon": ".", "asteroid": "x"}


def _belt_slug(name: str) -> str:
	return "".join(c if c.isalnum() else "_" for c in name.lower())


def write_outputs(results: Dict[str, Any], out_dir: Path) -> None:
	out_dir.mkdir(parents=True, exist_ok=True)
	fig_dir = out_dir / "figs"
	fig_dir.mkdir(parents=True, exist_ok=True)
	write_bodies(results["bodies"], out_dir / "bodies.json", indent=2)
	write_bodies(results["bodies"], out_dir / "bodies.min.json", indent=None)
	table: pd.DataFrame = results["table"]
	table.to_csv(out_dir / "bodies.csv", index=False)
	issues_df = pd.DataFrame(results["issues"]) if results.get("issues") else pd.DataFrame(columns=["subject", "field", "severity", "message"])
	issues_df.to_csv(out_dir / "issues.csv", index=False)
	with (out_dir / "summary.json").open("w", encoding="utf-8") as f:
		json.dump(results["summary"], f, indent=2)

	for field in results.get("belts", []):
		slug = _belt_slug(field.spec.name)
		(out_dir / f"belt_{slug}.json").write_text(belt_to_json(field), encoding="utf-8")
		df = belt_frame(field)
		df.to_csv(out_dir / f"belt_{slug}.csv", index=False)
		if not df.empty:
			_plot_belt(df, field.spec.name, fig_dir / f"belt_{slug}_topdown.png", fig_dir / f"belt_{slug}_radial.png")

	if not table.empty and "a_AU" in table.columns:
		_plot_architecture(table, fig_dir / "system_architecture.png")


def _plot_belt(df: pd.DataFrame, name: str, topdown_path: Path, radial_path: Path) -> None:
	background = df[~df["is_major"]]
	majors = df[df["is_major"]]
	plt.figure(figsize=(6.4, 6.4))
	plt.scatter(background["x_AU"], background["y_AU"], s=1.5, alpha=0.6)
	if not majors.empty:
		plt.scatter(majors["x_AU"], majors["y_AU"], s=30, c="tab:red", label="major bodies")
		plt.legend(loc="upper right", fontsize=8)
	plt.scatter([0.0], [0.0], s=60, c="gold", marker="*")
	plt.gca().set_aspect("equal")
	plt.xlabel("x (AU)")
	plt.ylabel("y (AU)")
	plt.title(f"{name}: top-down")
	plt.tight_layout()
	plt.savefig(topdown_path, dpi=150)
	plt.close()

	plt.figure(figsize=(9, 4.8))
	plt.hist(background["a_AU"], bins=80)
	plt.xlabel("Semi-major axis (AU)")
	plt.ylabel("Count")
	plt.title(f"{name}: radial distribution")
	plt.grid(True)
	plt.tight_layout()
	plt.savefig(radial_path, dpi=150)
	plt.close()


def _plot_architecture(table: pd.DataFrame, path: Path) -> None:
	orbiting = table[table["type"].isin(list(_TYPE_MARKERS)) & table["a_AU"].notna()]
	# moons share their planet's heliocentric distance
	parent_a = table.set_index("id")["a_AU"] if "a_AU" in table.columns else pd.Series(dtype=float)
	plt.figure(figsize=(9, 4.8))
	for kind, marker in _TYPE_MARKERS.items():
		rows = orbiting[orbiting["type"] == kind]
		if rows.empty:
			continue
		x = rows["a_AU"]
		if kind == "moon":
			x = rows["parent_id"].map(parent_a)
		sizes = np.clip(rows["radius_earth"].to_numpy() * 40.0, 4.0, 400.0)
		plt.scatter(x, rows["mass_earth"], s=sizes, marker=marker, label=kind, alpha=0.8)
	plt.xscale("log")
	plt.yscale("log")
	plt.xlabel("Distance from star (AU)")
	plt.ylabel("Mass (Earth masses)")
	plt.legend(loc="best", fontsize=8)
	plt.grid(True)
	plt.tight_layout()
	plt.savefig(path, dpi=150)
	plt.close()


def plot_run(out_dir: Path) -> None:
	for csv in sorted(out_dir.glob("belt_*.csv")):
		df = pd.read_csv(csv)
		plt.figure(figsize=(6, 6))
		plt.scatter(df["x_AU"], df["y_AU"], s=1.0)
		plt.gca().set_aspect("equal")
		plt.xlabel("x (AU)")
		plt.ylabel("y (AU)")
		plt.title(csv.stem)
		plt.tight_layout()
	table = pd.read_csv(out_dir / "bodies.csv")
	if "a_AU" in table.columns:
		plt.figure(figsize=(8, 4))
		planets = table[table["type"].isin(["planet", "dwarf_planet"])]
		plt.scatter(planets["a_AU"], planets["mass_earth"])
		plt.xscale("log")
		plt.yscale("log")
		plt.xlabel("Distance from star (AU)")
		plt.ylabel("Mass (Earth masses)")
		plt.grid(True)
		plt.tight_layout()
	plt.show()
