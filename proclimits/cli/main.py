"""CLI tool for inspecting process limits and system load."""

import json
import sys
from dataclasses import asdict
from pathlib import Path

import click
import structlog

from proclimits.config.loader import load_config
from proclimits.config.models import ProcLimitsConfig
from proclimits.errors import ParseError
from proclimits.loadavg import loadavg as read_loadavg
from proclimits.logs import configure_logging
from proclimits.pid.limits import format_limits, limits, limits_self

logger = structlog.get_logger()


def _load(config_path: Path | None) -> ProcLimitsConfig:
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    configure_logging(config.logging)
    return config


@click.group()
def cli() -> None:
    """Read resource limits and load averages from procfs."""
    pass


@cli.command(name="limits")
@click.argument("pid", type=int, required=False)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print limits as JSON",
)
def limits_command(pid: int | None, config: Path | None, as_json: bool) -> None:
    """Show resource limits of a process.

    PID: Process ID (defaults to the current process)
    """
    settings = _load(config)
    log = logger.bind(
        pid=pid if pid is not None else "self", proc_root=str(settings.proc_root)
    )
    log.debug("reading_limits")

    try:
        result = limits(pid, settings) if pid is not None else limits_self(settings)
    except (ParseError, OSError) as e:
        click.echo(f"Error reading limits: {e}", err=True)
        sys.exit(1)

    log.debug("limits_read")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(format_limits(result), nl=False)


@cli.command(name="loadavg")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print load averages as JSON",
)
def loadavg_command(config: Path | None, as_json: bool) -> None:
    """Show system load averages."""
    settings = _load(config)
    logger.debug("reading_loadavg", proc_root=str(settings.proc_root))

    try:
        load = read_loadavg(settings)
    except (ParseError, OSError) as e:
        click.echo(f"Error reading load averages: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(asdict(load), indent=2))
    else:
        click.echo(f"Load: {load.one:.2f} {load.five:.2f} {load.fifteen:.2f}")
        click.echo(f"Tasks: {load.tasks_runnable} runnable, {load.tasks_total} total")
        click.echo(f"Last PID: {load.last_pid}")


if __name__ == "__main__":
    cli()
