"""Run configuration loaded from a YAML or JSON file.

Example (YAML)::

    input: data/steps.txt
    universe: alphabet      # "alphabet" (A-Z), "edges", or e.g. "ABCDEF"
    workers: 5
    duration_base: 60
    sweep_workers: [1, 2, 3, 4, 5]
    charts:
      dir: charts
      enabled: true
    log_level: INFO
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable

import yaml

from stepsched.exceptions import ConfigurationError
from stepsched.graph import letter_universe, universe_from_edges
from stepsched.models import Dependency

UNIVERSE_ALPHABET = "alphabet"
UNIVERSE_EDGES = "edges"


@dataclass(frozen=True)
class RunConfig:
    """Settings for one ``run_solve`` invocation.

    ``universe`` is either one of the policy names ``"alphabet"`` /
    ``"edges"`` or an explicit tuple of identifiers.
    """

    input: str
    universe: Any = UNIVERSE_ALPHABET
    workers: int = 5
    duration_base: int = 60
    sweep_workers: tuple[int, ...] = ()
    charts_dir: str = "charts"
    charts_enabled: bool = True
    log_level: str = "INFO"

    def resolve_universe(self, edges: Iterable[Dependency]) -> set:
        """Turn the configured universe policy into a concrete identifier set."""
        if self.universe == UNIVERSE_ALPHABET:
            return letter_universe("A", "Z")
        if self.universe == UNIVERSE_EDGES:
            return universe_from_edges(edges)
        return set(self.universe)


def _int_at_least(cfg: Dict[str, Any], key: str, default: int, minimum: int) -> int:
    value = cfg.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(f"'{key}' must be an integer >= {minimum}, got {value!r}")
    return value


def config_from_dict(cfg: Dict[str, Any]) -> RunConfig:
    """Validate a raw mapping and build a ``RunConfig``.

    Raises:
        ConfigurationError: On a missing ``input`` key or an invalid value.
    """
    input_path = cfg.get("input")
    if not input_path:
        raise ConfigurationError("Missing 'input' key in config")

    universe = cfg.get("universe", UNIVERSE_ALPHABET)
    if universe not in (UNIVERSE_ALPHABET, UNIVERSE_EDGES):
        if isinstance(universe, (str, list)):
            universe = tuple(universe)
        else:
            raise ConfigurationError(f"Unsupported universe value: {universe!r}")
        if not universe:
            raise ConfigurationError("Explicit universe must not be empty")

    sweep = cfg.get("sweep_workers") or []
    if not isinstance(sweep, list):
        raise ConfigurationError("'sweep_workers' must be a list of worker counts")
    for count in sweep:
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ConfigurationError(f"Invalid worker count in sweep_workers: {count!r}")

    charts_cfg = cfg.get("charts", {}) if isinstance(cfg.get("charts"), dict) else {}

    return RunConfig(
        input=str(input_path),
        universe=universe,
        workers=_int_at_least(cfg, "workers", 5, 1),
        duration_base=_int_at_least(cfg, "duration_base", 60, 0),
        sweep_workers=tuple(sweep),
        charts_dir=str(charts_cfg.get("dir", "charts")),
        charts_enabled=bool(charts_cfg.get("enabled", True)),
        log_level=str(cfg.get("log_level", "INFO")),
    )


def load_config(config_file: str) -> RunConfig:
    """Load configuration from a YAML (``.yml``/``.yaml``) or JSON file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith((".yml", ".yaml")):
        cfg = yaml.safe_load(text) or {}
    else:
        cfg = json.loads(text)
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"Config root must be a mapping: {config_file}")
    return config_from_dict(cfg)
