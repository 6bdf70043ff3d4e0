from __future__ import annotations
import logging
import yaml
from pathlib import Path
from typing import Any, Dict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_yaml_config(path: str | Path) -> Dict[str, Any]:
	p = Path(path)
	with p.open("r", encoding="utf-8") as f:
		cfg = yaml.safe_load(f)
	if cfg is None:
		return {}
	if not isinstance(cfg, dict):
		raise ValueError(f"{p}: scenario must be a mapping, got {type(cfg).__name__}")
	return cfg


def configure_logging(level: str | int = "INFO") -> None:
	if isinstance(level, str):
		level = getattr(logging, level.upper(), logging.INFO)
	logging.basicConfig(level=level, format=LOG_FORMAT)
