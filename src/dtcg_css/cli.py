"""
dtcg-css command line interface.

Commands:
- build: Build CSS for one tier or all tiers
- tiers: List configured tiers
- index: Regenerate index.css for an existing tier directory
- validate: Check tokens.yaml against the project files
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from dtcg_css._version import get_version
from dtcg_css.core.errors import ConfigError
from dtcg_css.core.ir.config import BuildConfig, LogLevel

app = typer.Typer(
    help="Build CSS custom properties from DTCG design tokens.",
    no_args_is_help=True,
)

console = Console()

_LOG_LEVELS = {
    LogLevel.SILENT: logging.ERROR,
    LogLevel.DEFAULT: logging.WARNING,
    LogLevel.VERBOSE: logging.INFO,
}


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"dtcg-css {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """dtcg-css main callback for global options."""
    pass


def _configure_logging(config: BuildConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else _LOG_LEVELS[config.build.log_level]
    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger("dtcg_css").setLevel(level)


def _load_config(project_dir: Path, config_path: Path | None) -> BuildConfig:
    from dtcg_css.core.config_loader import load_build_config

    try:
        return load_build_config(project_dir, config_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("build")
def build_command(
    tier: str = typer.Argument("all", help="Tier to build, or 'all'"),
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
    sequential: bool = typer.Option(False, "--sequential", help="Build tiers one at a time"),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging"),
) -> None:
    """Build CSS for one tier or every configured tier."""
    from dtcg_css.build.builder import build_all_tiers

    project_dir = project_dir.resolve()
    config = _load_config(project_dir, config_path)
    _configure_logging(config, verbose)

    if tier == "all":
        tiers = config.tier_names
    elif config.get_tier(tier) is None:
        typer.echo(f"Unknown tier: {tier}", err=True)
        typer.echo(f"Available tiers: {', '.join(config.tier_names)}", err=True)
        raise typer.Exit(1)
    else:
        tiers = [tier]

    parallel = False if sequential else None
    results = build_all_tiers(config, project_dir, tiers, parallel=parallel)

    console.print()
    console.print("[bold]Build summary[/bold]")
    for result in results:
        if result.success:
            console.print(
                f"  [green]✓[/green] {result.tier} "
                f"({len(result.files)} files, {result.duration * 1000:.0f}ms)"
            )
        else:
            console.print(f"  [red]✗[/red] {result.tier}: {result.error}")

    failed = [r for r in results if not r.success]
    if failed:
        console.print(f"\n[red]{len(failed)} of {len(results)} tier(s) failed[/red]")
        raise typer.Exit(1)


@app.command("tiers")
def tiers_command(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List configured tiers."""
    config = _load_config(project_dir.resolve(), config_path)

    table = Table(title="Tiers")
    table.add_column("Tier", style="cyan")
    table.add_column("Description")
    table.add_column("Sources", justify="right")
    table.add_column("Mode categories")

    for tier in config.tiers.values():
        table.add_row(
            tier.name,
            tier.description or "-",
            str(len(tier.source)),
            ", ".join(tier.modes) or "-",
        )

    console.print(table)


@app.command("index")
def index_command(
    tier_dir: Path = typer.Argument(..., help="Built tier directory, e.g. dist/css/sites"),
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Regenerate index.css for an existing tier directory."""
    from dtcg_css.css.index import write_index

    config = _load_config(project_dir.resolve(), config_path)
    path = write_index(tier_dir, breakpoints=config.css.breakpoints)
    if path is None:
        typer.echo(f"No CSS files found in {tier_dir}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Generated {path}")


@app.command("validate")
def validate_command(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Validate tokens.yaml against the project's token files."""
    from dtcg_css.core.config_loader import validate_build_config

    project_dir = project_dir.resolve()
    config = _load_config(project_dir, config_path)
    result = validate_build_config(config, project_dir)

    if result.errors:
        typer.echo(f"Errors ({len(result.errors)}):")
        for err in result.errors:
            typer.echo(f"  ✗ {err}")
    if result.warnings:
        typer.echo(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            typer.echo(f"  ⚠ {warning}")

    if not result.is_valid:
        raise typer.Exit(1)
    typer.echo("Configuration is valid.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
