"""
Argument Resolver

Turns the loader's raw argument list into a validated RunConfiguration.

The command line is declared as a typer command. Grammar:
    - Every option has a short and a long form. Value options take the next
      token or an "=" joined value (--loc=db, -l=db). The last occurrence wins.
    - "--" ends option parsing; everything after it is a data file.
    - The first token that does not start with "-" also ends option parsing;
      it and every later token are data files.
    - Any other token starting with "-" is rejected. A data file whose name
      starts with "-" therefore needs a preceding "--".
    - -h/--help prints usage and stops without checking --loc.

Usage errors are reported as ConfigurationError (exit code 1).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import List, Optional

import click
import typer
from pydantic import ValidationError

from tdb_loader.errors import ConfigurationError
from tdb_loader.types.run import Phase, RunConfiguration

__all__ = ["HelpRequested", "app", "build_run_configuration", "resolve_arguments"]

logger = logging.getLogger(__name__)

PROG_NAME = "tdb-loader"

app = typer.Typer(
    name=PROG_NAME,
    help="Bulk loader for a triple-store database",
    add_completion=False,
)


class HelpRequested(Exception):
    """Raised after -h/--help printed usage; the caller exits 0."""


def _joined_value(value: Optional[str]) -> Optional[str]:
    # -l=db reaches the option as "=db"
    if value is not None and value.startswith("="):
        return value[1:]
    return value


def build_run_configuration(
    location: Optional[str],
    phase: str = Phase.ALL.value,
    debug: bool = False,
    trace: bool = False,
    keep_work: bool = False,
    jvm_args: Optional[str] = None,
    sort_args: Optional[str] = None,
    data_files: Sequence[str] = (),
) -> RunConfiguration:
    """
    Validate parsed option values.

    Raises:
        ConfigurationError: Missing or blank --loc, unrecognized phase,
            or no data files for a Data phase run
    """
    if not location or not location.strip():
        raise ConfigurationError("No location specified (--loc is required)")

    run_phase = Phase.parse(phase)
    files = tuple(data_files)

    if run_phase.includes_data and not files:
        raise ConfigurationError(f"No data files given for the {run_phase.value} phase")
    if run_phase is Phase.INDEX and files:
        logger.warning("Ignoring %d data file(s) for the index phase", len(files))
        files = ()

    try:
        return RunConfiguration(
            location=location,
            phase=run_phase,
            debug=debug,
            trace=trace,
            keep_work=keep_work,
            jvm_args=jvm_args,
            sort_args=sort_args,
            data_files=files,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid arguments: {e}") from e


@app.command(
    context_settings={
        "allow_interspersed_args": False,
        "help_option_names": ["-h", "--help"],
    },
)
def load(
    data_files: Optional[List[str]] = typer.Argument(
        None,
        help="Data files (required for the all and data phases); "
        'put "--" before a name starting with "-"',
        show_default=False,
    ),
    location: Optional[str] = typer.Option(
        None,
        "--loc", "-l",
        help="Target database directory (required; created if absent)",
        callback=_joined_value,
    ),
    phase: str = typer.Option(
        Phase.ALL.value,
        "--phase", "-p",
        help="all, data or index",
        callback=_joined_value,
    ),
    keep_work: bool = typer.Option(
        False,
        "--keep-work", "-k",
        help="Keep intermediate work files",
    ),
    debug: bool = typer.Option(
        False,
        "--debug", "-d",
        help="Enable debug output in the phase tools",
    ),
    trace: bool = typer.Option(
        False,
        "--trace", "-t",
        help="Enable trace output in the phase tools",
    ),
    jvm_args: Optional[str] = typer.Option(
        None,
        "--jvm-args", "-j",
        help="Runtime arguments forwarded to both phase tools",
        callback=_joined_value,
    ),
    sort_args: Optional[str] = typer.Option(
        None,
        "--sort-args", "-s",
        help="Sort arguments forwarded to the Index phase only",
        callback=_joined_value,
    ),
) -> RunConfiguration:
    """Build a database by running the Data phase and then the Index phase."""
    return build_run_configuration(
        location,
        phase=phase,
        debug=debug,
        trace=trace,
        keep_work=keep_work,
        jvm_args=jvm_args,
        sort_args=sort_args,
        data_files=data_files or (),
    )


def resolve_arguments(argv: Sequence[str]) -> RunConfiguration:
    """
    Parse the loader command line.

    Args:
        argv: Arguments without the program name

    Returns:
        Validated RunConfiguration

    Raises:
        HelpRequested: -h/--help was given; usage has been printed
        ConfigurationError: Unknown option, missing value, missing --loc,
            unrecognized phase, or no data files for a Data phase run
    """
    argv = list(argv)
    command = typer.main.get_command(app)
    try:
        result = command.main(
            args=argv,
            prog_name=PROG_NAME,
            standalone_mode=False,
        )
    except click.exceptions.UsageError as e:
        if e.ctx is not None and _asks_for_help(argv, e.ctx.help_option_names):
            click.echo(e.ctx.get_help())
            raise HelpRequested() from e
        raise _configuration_error(e) from e

    if not isinstance(result, RunConfiguration):
        # Help exits through click with status 0 instead of returning
        raise HelpRequested()
    return result


def _asks_for_help(argv: Sequence[str], help_names: Sequence[str]) -> bool:
    # Help wins over any other usage error in front of "--"
    for token in argv:
        if token == "--":
            return False
        if token in help_names:
            return True
    return False


def _configuration_error(e: click.exceptions.UsageError) -> ConfigurationError:
    if isinstance(e, click.exceptions.NoSuchOption):
        return ConfigurationError(f"Unrecognized option: {e.option_name}")
    return ConfigurationError(e.format_message())
