"""CLI entrypoint for the psyche engine."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Memory, virtue and well-being engine for narrative games")
config_app = typer.Typer(help="Configuration commands")


@app.callback()
def main_callback(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, ...)"),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("run")
def run_cmd(
    scenario: Path = typer.Argument(..., help="Scenario YAML file"),
    root: Path | None = typer.Option(None, "--root", help="Directory holding config/"),
    steps: bool = typer.Option(False, "--steps", help="Include per-step outcomes"),
) -> None:
    """Replay a scenario and print a JSON summary."""
    commands.run(scenario=scenario, root=root, steps=steps)


@app.command("report")
def report_cmd(
    scenario: Path = typer.Argument(..., help="Scenario YAML file"),
    root: Path | None = typer.Option(None, "--root", help="Directory holding config/"),
) -> None:
    """Replay a scenario and print the virtue report."""
    commands.report(scenario=scenario, root=root)


@config_app.command("show")
def config_show_cmd(
    root: Path | None = typer.Option(None, "--root", help="Directory holding config/"),
) -> None:
    """Show effective configuration."""
    commands.config_show(root=root)


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
