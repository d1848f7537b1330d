"""CLI and configuration tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from core.logging_setup import configure_logging
from core.policy_runtime import load_effective_config, load_yaml, merge_dicts
from ui.cli.cli import app

runner = CliRunner()


@pytest.fixture()
def quiet_config(tmp_path: Path) -> Path:
    path = tmp_path / "quiet.yaml"
    path.write_text("logging:\n  level: WARNING\n", encoding="utf-8")
    return path


@pytest.fixture()
def diamond_file(tmp_path: Path) -> Path:
    path = tmp_path / "graph.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "tasks": ["A", "B", "C", "D"],
                "relations": [
                    {"from": "A", "to": "B"},
                    {"from": "B", "to": "D"},
                    {"from": "A", "to": "C"},
                    {"from": "C", "to": "D"},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_merge_dicts_is_recursive() -> None:
    merged = merge_dicts({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}, "c": 4})
    assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}


def test_load_yaml_missing_and_invalid(tmp_path: Path) -> None:
    assert load_yaml(tmp_path / "missing.yaml") == {}
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml(bad)


def test_effective_config_layers(tmp_path: Path) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "default.yaml").write_text(
        "analysis:\n  max_chains: 3\n", encoding="utf-8"
    )
    override = tmp_path / "override.yaml"
    override.write_text("generator:\n  max_tasks: 7\n", encoding="utf-8")

    config = load_effective_config(tmp_path, override_path=override)
    assert config["analysis"]["max_chains"] == 3
    assert config["generator"] == {"min_tasks": 5, "max_tasks": 7}
    assert config["logging"]["level"] == "INFO"

    with pytest.raises(FileNotFoundError):
        load_effective_config(tmp_path, override_path=tmp_path / "nope.yaml")


def test_configure_logging_level() -> None:
    logger = configure_logging({"logging": {"level": "debug"}})
    assert logger.level == logging.DEBUG
    configure_logging({"logging": {"level": "WARNING"}})
    with pytest.raises(ValueError):
        configure_logging({"logging": {"level": "LOUD"}})


def test_cli_analyze_text(diamond_file: Path, quiet_config: Path) -> None:
    result = runner.invoke(app, ["analyze", str(diamond_file), "--config", str(quiet_config)])
    assert result.exit_code == 0, result.output
    assert "Relation: {(A, B), (B, D), (A, C), (C, D)}" in result.output
    assert "Topological order: A -> B -> C -> D" in result.output
    assert "- [3] A -> B -> D" in result.output


def test_cli_analyze_json(diamond_file: Path, quiet_config: Path) -> None:
    result = runner.invoke(
        app, ["analyze", str(diamond_file), "--json", "--config", str(quiet_config)]
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["minimal"] == ["A"]
    assert payload["maximal"] == ["D"]
    assert payload["chains"] == [["A", "B", "D"], ["A", "C", "D"]]


def test_cli_chain_size(diamond_file: Path, quiet_config: Path) -> None:
    found = runner.invoke(app, ["chain-size", str(diamond_file), "3", "--config", str(quiet_config)])
    assert found.exit_code == 0
    assert "exists" in found.output

    missing = runner.invoke(app, ["chain-size", str(diamond_file), "4", "--config", str(quiet_config)])
    assert missing.exit_code == 1


def test_cli_missing_file(tmp_path: Path, quiet_config: Path) -> None:
    result = runner.invoke(app, ["analyze", str(tmp_path / "nope.yaml"), "--config", str(quiet_config)])
    assert result.exit_code == 2


def test_cli_random_writes_loadable_graph(tmp_path: Path, quiet_config: Path) -> None:
    out = tmp_path / "random.yaml"
    result = runner.invoke(
        app, ["random", "--seed", "3", "--output", str(out), "--config", str(quiet_config)]
    )
    assert result.exit_code == 0, result.output
    data = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert 5 <= len(data["tasks"]) <= 10

    analyzed = runner.invoke(app, ["analyze", str(out), "--json", "--config", str(quiet_config)])
    assert analyzed.exit_code == 0, analyzed.output
    assert sorted(json.loads(analyzed.output)["topological_order"]) == sorted(data["tasks"])


def test_cli_undecodable_graph_file(tmp_path: Path, quiet_config: Path) -> None:
    bad = tmp_path / "binary.yaml"
    bad.write_bytes(b"tasks: [\xff\xfe]\n")
    result = runner.invoke(app, ["analyze", str(bad), "--config", str(quiet_config)])
    assert result.exit_code == 2
    assert not isinstance(result.exception, UnicodeDecodeError)


def test_cli_directory_as_graph_file(tmp_path: Path, quiet_config: Path) -> None:
    result = runner.invoke(app, ["analyze", str(tmp_path), "--config", str(quiet_config)])
    assert result.exit_code == 2
    assert not isinstance(result.exception, OSError)


def test_cli_rejects_non_positive_max_chains(tmp_path: Path, diamond_file: Path) -> None:
    config = tmp_path / "zero.yaml"
    config.write_text("analysis:\n  max_chains: 0\nlogging:\n  level: WARNING\n", encoding="utf-8")
    for args in (["analyze", str(diamond_file)], ["chain-size", str(diamond_file), "3"]):
        result = runner.invoke(app, [*args, "--config", str(config)])
        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)


def test_cli_rejects_non_mapping_config(tmp_path: Path, diamond_file: Path) -> None:
    config = tmp_path / "list.yaml"
    config.write_text("- not\n- a mapping\n", encoding="utf-8")
    result = runner.invoke(app, ["analyze", str(diamond_file), "--config", str(config)])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)


def test_configured_logger_does_not_propagate() -> None:
    logger = configure_logging({"logging": {"level": "WARNING"}})
    assert logger.propagate is False
    assert len(logger.handlers) == 1
