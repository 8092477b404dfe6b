"""Tests for YAML/JSON run configuration loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stepsched.config import RunConfig, config_from_dict, load_config
from stepsched.exceptions import ConfigurationError
from stepsched.models import Dependency


def test_load_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text(
        "input: data/steps.txt\n"
        "universe: ABCDEF\n"
        "workers: 2\n"
        "duration_base: 0\n"
        "sweep_workers: [1, 2, 3]\n"
        "charts:\n"
        "  dir: out\n"
        "  enabled: false\n"
        "log_level: debug\n"
    )
    cfg = load_config(str(path))
    assert cfg == RunConfig(
        input="data/steps.txt",
        universe=tuple("ABCDEF"),
        workers=2,
        duration_base=0,
        sweep_workers=(1, 2, 3),
        charts_dir="out",
        charts_enabled=False,
        log_level="debug",
    )


def test_load_json_config_defaults(tmp_path: Path) -> None:
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"input": "steps.txt"}))
    cfg = load_config(str(path))
    assert cfg.workers == 5
    assert cfg.duration_base == 60
    assert cfg.universe == "alphabet"
    assert cfg.sweep_workers == ()
    assert cfg.charts_dir == "charts"
    assert cfg.charts_enabled is True


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_non_mapping_root(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"input": "x", "workers": 0},
        {"input": "x", "workers": "5"},
        {"input": "x", "duration_base": -1},
        {"input": "x", "sweep_workers": [1, 0]},
        {"input": "x", "sweep_workers": 3},
        {"input": "x", "universe": ""},
        {"input": "x", "universe": 42},
    ],
)
def test_invalid_values(raw: dict) -> None:
    with pytest.raises(ConfigurationError):
        config_from_dict(raw)


def test_resolve_universe_policies() -> None:
    edges = [Dependency("B", "Q")]
    assert len(config_from_dict({"input": "x"}).resolve_universe(edges)) == 26
    assert config_from_dict({"input": "x", "universe": "edges"}).resolve_universe(edges) == {"B", "Q"}
    assert config_from_dict({"input": "x", "universe": ["B", "Q", "Z"]}).resolve_universe(edges) == {
        "B",
        "Q",
        "Z",
    }
