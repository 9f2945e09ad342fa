from pathlib import Path

import pytest

from phasespace_modules.config import RunConfig
from phasespace_modules.io import load_points
from phasespace_modules.points import midpoint_grid


def test_run_yaml_missing_modules(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text("modules: []\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid run config"):
        RunConfig.from_yaml(path)


def test_run_yaml_duplicate_module_names(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text(
        """
modules:
  - type: BreitWignerGenerator
    name: bw
    parameters: { mass: 10.0, width: 1.0, ps_point: "cuba::ps_points/0" }
  - type: BreitWignerGenerator
    name: bw
    parameters: { mass: 20.0, width: 1.0, ps_point: "cuba::ps_points/1" }
""".lstrip(),
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="duplicate module name: bw"):
        RunConfig.from_yaml(path)


def test_run_yaml_reserved_sampler_name(tmp_path: Path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text(
        """
modules:
  - type: BreitWignerGenerator
    name: cuba
""".lstrip(),
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="reserved for the sampler"):
        RunConfig.from_yaml(path)


def test_run_yaml_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        RunConfig.from_yaml(tmp_path / "missing.yaml")


def test_points_json_and_yaml(tmp_path: Path) -> None:
    as_json = tmp_path / "points.json"
    as_json.write_text('{"points": [[0.0, 1.0], [0.5, 0.5]]}', encoding="utf-8")
    as_yaml = tmp_path / "points.yaml"
    as_yaml.write_text("- [0.0, 1.0]\n- [0.5, 0.5]\n", encoding="utf-8")

    assert load_points(as_json).points == load_points(as_yaml).points
    assert load_points(as_json).dimensions == 2


def test_points_outside_unit_interval_rejected(tmp_path: Path) -> None:
    path = tmp_path / "points.json"
    path.write_text('{"points": [[0.5], [1.5]]}', encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid points file"):
        load_points(path)


def test_points_ragged_rejected(tmp_path: Path) -> None:
    path = tmp_path / "points.json"
    path.write_text('{"points": [[0.5], [0.1, 0.2]]}', encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid points file"):
        load_points(path)


def test_points_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "points.csv"
    path.write_text("0.5\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported points format"):
        load_points(path)


def test_midpoint_grid() -> None:
    grid = midpoint_grid(4, 1)
    assert grid.points == [[0.125], [0.375], [0.625], [0.875]]
    assert len(midpoint_grid(3, 2).points) == 9
    with pytest.raises(ValueError, match="grid size"):
        midpoint_grid(0, 1)


def test_points_nan_rejected(tmp_path: Path) -> None:
    path = tmp_path / "points.json"
    path.write_text('{"points": [[NaN]]}', encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid points file"):
        load_points(path)
