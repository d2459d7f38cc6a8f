"""
Phase Argument Builder

Derives the argument lists for the phase tools from a RunConfiguration.

Command lines:
    Data:   <tool> <common flags> --loc <dir> -- <data files...>
    Index:  <tool> <common flags> <index flags> --loc <dir>
"""

from __future__ import annotations

from tdb_loader.types.run import PhaseArguments, RunConfiguration

__all__ = ["build_phase_arguments", "data_phase_command", "index_phase_command"]


def build_phase_arguments(run: RunConfiguration) -> PhaseArguments:
    """Split the run's options into common and Index-only flags."""
    common: list[str] = []
    if run.keep_work:
        common.append("--keep-work")
    if run.debug:
        common.append("--debug")
    if run.trace:
        common.append("--trace")
    if run.jvm_args is not None:
        common.extend(["--jvm-args", run.jvm_args])

    index_flags: list[str] = []
    if run.sort_args is not None:
        index_flags.extend(["--sort-args", run.sort_args])

    return PhaseArguments(common_flags=tuple(common), index_flags=tuple(index_flags))


def data_phase_command(run: RunConfiguration, arguments: PhaseArguments) -> tuple[str, ...]:
    """Arguments for the Data phase tool (tool name excluded)."""
    return (
        *arguments.common_flags,
        "--loc",
        str(run.location),
        "--",
        *run.data_files,
    )


def index_phase_command(run: RunConfiguration, arguments: PhaseArguments) -> tuple[str, ...]:
    """Arguments for the Index phase tool (tool name excluded)."""
    return (
        *arguments.common_flags,
        *arguments.index_flags,
        "--loc",
        str(run.location),
    )
