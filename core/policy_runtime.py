"""Configuration loading for the task-order runtime."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "analysis": {"max_chains": 5},
    "generator": {"min_tasks": 5, "max_tasks": 10},
    "logging": {"level": "INFO"},
}


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_root() -> Path:
    return Path(__file__).resolve().parents[1]


def load_effective_config(root: Path | None = None, override_path: Path | None = None) -> dict[str, Any]:
    """Built-in defaults, then ``config/default.yaml`` under ``root``, then an optional override file."""
    config_dir = (root or default_root()) / "config"
    merged = merge_dicts(DEFAULT_CONFIG, load_yaml(config_dir / "default.yaml"))
    if override_path is not None:
        if not override_path.exists():
            raise FileNotFoundError(f"Config override not found: {override_path}")
        merged = merge_dicts(merged, load_yaml(override_path))
    return merged
