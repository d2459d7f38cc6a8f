"""
Command-Line Interface

Entry point for the bulk loader.

Usage:
    # Build a database from two files
    tdb-loader --loc ./db data1.nt data2.nt

    # Run only the Data phase
    tdb-loader --loc ./db --phase data data.nq

    # Resume with the Index phase, sorting in a different temp dir
    tdb-loader --loc ./db --phase index --sort-args "-T /var/tmp"

Exit codes:
    0  every requested phase succeeded
    1  configuration error (nothing was run)
    N  exit code of the phase tool that failed
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from tdb_loader.config.settings import LoaderConfig
from tdb_loader.errors import ConfigurationError, LoaderError, PhaseFailure
from tdb_loader.pipeline.arguments import HelpRequested, app, resolve_arguments
from tdb_loader.pipeline.sequencer import PipelineSequencer
from tdb_loader.pipeline.workspace import Workspace
from tdb_loader.types.run import PipelineResult

__all__ = ["main", "app", "run"]

logger = logging.getLogger("tdb_loader")

console = Console()
err_console = Console(stderr=True)


def configure_logging(fmt: str = LoaderConfig.log_format, level: int = logging.INFO) -> None:
    """Send tdb_loader log records to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False)
    handler.setFormatter(logging.Formatter(fmt, datefmt="[%X]"))
    logger.handlers[:] = [handler]
    logger.setLevel(level)


def load_config() -> LoaderConfig:
    """Build the loader configuration from .env, TDB_LOADER_CONFIG_FILE and the environment."""
    load_dotenv()
    try:
        if path := os.getenv("TDB_LOADER_CONFIG_FILE"):
            return LoaderConfig.from_file(path)
        return LoaderConfig()
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Invalid loader configuration: {e}") from e


def _print_summary(result: PipelineResult) -> None:
    lines = [
        f"[green]Load complete[/]: {result.location}",
        "",
        f"  Phases: {', '.join(p.value for p in result.phases_run)}",
    ]
    for outcome in result.outcomes:
        lines.append(f"  {outcome.phase.value.capitalize()} phase: {outcome.elapsed_seconds}s")
    lines.append(f"  Total: {result.elapsed_seconds}s")
    if result.work_files:
        lines.append(f"  Work files kept: {', '.join(result.work_files)}")
    console.print(Panel("\n".join(lines), title="Bulk Load"))


def main(
    argv: Sequence[str] | None = None,
    *,
    config: LoaderConfig | None = None,
    sequencer: PipelineSequencer | None = None,
) -> int:
    """
    Run the loader and return the process exit code.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])
        config: Loader configuration (default: loaded from the environment)
        sequencer: Pipeline sequencer (default: built from config)
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    configure_logging()

    try:
        run_config = resolve_arguments(argv)
        config = config or load_config()
    except HelpRequested:
        return 0
    except ConfigurationError as e:
        logger.error("%s (exit code %d)", e, e.exit_code)
        return e.exit_code

    verbose = run_config.debug or run_config.trace
    configure_logging(config.log_format, logging.DEBUG if verbose else logging.INFO)

    sequencer = sequencer or PipelineSequencer(config)
    try:
        result = sequencer.run(run_config)
    except LoaderError as e:
        logger.error("%s (exit code %d)", e, e.exit_code)
        if isinstance(e, PhaseFailure):
            kept = Workspace(run_config.location).work_files()
            logger.info(
                "Partial output kept in %s%s",
                run_config.location,
                f" ({', '.join(kept)})" if kept else "",
            )
        return e.exit_code

    _print_summary(result)
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
