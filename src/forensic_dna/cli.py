"""Command-line interface for the forensic-dna profile database."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .config import AnalysisConfig, load_config, load_default_config
from .exceptions import ForensicDNAError
from .loader import build_store
from .logging_config import setup_logging
from .reporting import summary, write_report
from .tree import ProfileStore


@dataclass(slots=True)
class CLIContext:
    """Shared CLI configuration."""

    config: AnalysisConfig


def _load_cli_config(config_option: Optional[Path]) -> AnalysisConfig:
    """Load the given configuration, falling back to the packaged default."""
    if config_option is None:
        return load_default_config()
    if not config_option.exists():
        raise click.ClickException(f"Configuration file not found: {config_option}")
    try:
        return load_config(config_option)
    except ForensicDNAError as exc:
        raise click.ClickException(str(exc)) from exc


def _flagged_store(ctx: CLIContext, database: Path) -> ProfileStore:
    """Load ``database`` and run the interest scan over it."""
    try:
        store = build_store(database, duplicate_policy=ctx.config.policy)
    except ForensicDNAError as exc:
        raise click.ClickException(str(exc)) from exc
    store.flag_profiles_of_interest()
    return store


database_argument = click.argument(
    "database",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to an analysis configuration file. Defaults to the packaged config.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the configured log level.",
)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], log_level: Optional[str]) -> None:
    """Forensic DNA: match STR profiles against unknown evidence sequences."""
    config = _load_cli_config(config_path)
    if log_level:
        config.logging.level = log_level.upper()
    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    setup_logging(level=config.logging.level, log_file=log_file)
    ctx.obj = CLIContext(config=config)


@main.command("analyze")
@database_argument
@click.pass_obj
def analyze_cmd(ctx: CLIContext, database: Path) -> None:
    """Flag profiles of interest and print a summary."""
    store = _flagged_store(ctx, database)
    click.echo(
        json.dumps(
            {
                "stage": "analyze",
                "run_id": ctx.config.run_id,
                "config_hash": ctx.config.config_hash(),
                "database": str(database),
                **summary(store),
            },
            indent=2,
        )
    )


@main.command("unmarked")
@database_argument
@click.pass_obj
def unmarked_cmd(ctx: CLIContext, database: Path) -> None:
    """Print the names not flagged of interest, in level order."""
    store = _flagged_store(ctx, database)
    for name in store.list_unmarked():
        click.echo(name)


@main.command("prune")
@database_argument
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write summary.json (and profiles.csv) here. Defaults to the configured report.output_dir.",
)
@click.pass_obj
def prune_cmd(ctx: CLIContext, database: Path, out_dir: Optional[Path]) -> None:
    """Flag profiles, remove every unflagged one and report what is left."""
    store = _flagged_store(ctx, database)
    removed = store.prune_unmarked()

    payload = {
        "stage": "prune",
        "run_id": ctx.config.run_id,
        "config_hash": ctx.config.config_hash(),
        "removed": removed,
        "remaining": store.in_order(),
        **summary(store),
    }
    if out_dir is None:
        out_dir = Path(ctx.config.report.output_dir)
    artifacts = write_report(store, out_dir, write_csv=ctx.config.report.write_csv)
    payload["artifacts"] = {key: str(path) for key, path in artifacts.items()}

    click.echo(json.dumps(payload, indent=2))


def cli() -> None:  # pragma: no cover - convenience shim
    """Entry point for console_scripts."""
    main(standalone_mode=True)


if __name__ == "__main__":  # pragma: no cover
    cli()
