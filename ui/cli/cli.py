"""CLI entrypoint for task-order."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Partial-order analysis of task dependencies")
config_app = typer.Typer(help="Configuration commands")

@app.command("analyze")
def analyze_cmd(
    path: Path = typer.Argument(..., help="Graph file (YAML or JSON) with tasks and relations"),
    as_json: bool = typer.Option(False, "--json", help="Emit the analysis as JSON"),
    config: Path | None = typer.Option(None, "--config", help="Extra YAML config merged over the defaults"),
) -> None:
    """Show minimal/maximal tasks, topological order and longest chains."""
    commands.analyze(path=path, as_json=as_json, config_path=config)


@app.command("chain-size")
def chain_size_cmd(
    path: Path = typer.Argument(..., help="Graph file (YAML or JSON)"),
    size: int = typer.Argument(..., min=1, help="Number of tasks in the chain"),
    config: Path | None = typer.Option(None, "--config", help="Extra YAML config merged over the defaults"),
) -> None:
    """Check whether a longest chain of the given size exists."""
    commands.chain_size(path=path, size=size, config_path=config)


@app.command("random")
def random_cmd(
    seed: int | None = typer.Option(None, help="Seed for reproducible output"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write YAML here instead of stdout"),
    config: Path | None = typer.Option(None, "--config", help="Extra YAML config merged over the defaults"),
) -> None:
    """Generate a random acyclic task graph."""
    commands.generate(seed=seed, output=output, config_path=config)


@config_app.command("show")
def config_show_cmd(
    config: Path | None = typer.Option(None, "--config", help="Extra YAML config merged over the defaults"),
) -> None:
    """Show effective configuration."""
    commands.config_show(config_path=config)


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
