"""Typer command handlers."""

from __future__ import annotations

import json
import random
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from core.logging_setup import configure_logging
from core.policy_runtime import load_effective_config
from core.session import GraphSession
from planner.models import GraphSnapshot


def _config(config_path: Path | None = None) -> dict:
    """Load and apply config, exiting on an unreadable or invalid file."""
    try:
        config = load_effective_config(override_path=config_path)
        configure_logging(config)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    return config


def _new_session(config_path: Path | None) -> GraphSession:
    config = _config(config_path)
    try:
        return GraphSession(config=config)
    except ValueError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def _load_snapshot(path: Path) -> GraphSnapshot:
    """Read a graph file (YAML or JSON) into a snapshot, exiting on bad input."""
    if not path.exists():
        typer.echo(f"Graph file not found: {path}", err=True)
        raise typer.Exit(code=2)
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return GraphSnapshot.model_validate(data)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as exc:
        typer.echo(f"Invalid graph file {path}: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def _session(path: Path, config_path: Path | None) -> GraphSession:
    session = _new_session(config_path)
    snapshot = _load_snapshot(path)
    outcomes = session.load(snapshot)
    for relation, outcome in zip(snapshot.relations, outcomes):
        if not outcome.applied:
            typer.echo(
                f"Skipped relation ({relation.source}, {relation.target}): {outcome.value}",
                err=True,
            )
    session.recompute()
    return session


def analyze(path: Path, as_json: bool = False, config_path: Path | None = None) -> None:
    """Print the partial-order analysis of a graph file."""
    session = _session(path, config_path)
    result = session.result
    if as_json:
        typer.echo(json.dumps(result.model_dump(), indent=2))
        return

    typer.echo(f"Tasks: {', '.join(session.tasks) or '-'}")
    typer.echo(f"Relation: {result.notation}")
    typer.echo(f"Minimal: {', '.join(result.minimal) or '-'}")
    typer.echo(f"Maximal: {', '.join(result.maximal) or '-'}")
    typer.echo(f"Topological order: {' -> '.join(result.topological_order) or '-'}")
    typer.echo(f"Chains: {len(result.chains)}")
    for chain in result.chains:
        typer.echo(f"- [{len(chain)}] {' -> '.join(chain)}")


def chain_size(path: Path, size: int, config_path: Path | None = None) -> None:
    """Report whether a chain with exactly ``size`` tasks exists."""
    session = _session(path, config_path)
    if session.has_chain_of_size(size):
        typer.echo(f"A chain of size {size} exists.")
        return
    typer.echo(f"No chain of size {size}.")
    raise typer.Exit(code=1)


def generate(seed: int | None, output: Path | None, config_path: Path | None = None) -> None:
    """Generate a random graph and print or save it."""
    session = _new_session(config_path)
    try:
        session.generate_random(rng=random.Random(seed))
    except ValueError as exc:
        typer.echo(f"Invalid generator configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    payload = session.snapshot().to_payload()
    text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    if output is None:
        typer.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {len(session.tasks)} tasks and {len(session.relations)} relations to {output}")


def config_show(config_path: Path | None = None) -> None:
    """Show effective runtime config."""
    typer.echo(json.dumps(_config(config_path), indent=2))
