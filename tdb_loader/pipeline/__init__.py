"""
Load Pipeline

Components, leaf-first:
    arguments: command line -> RunConfiguration
    phase_args: RunConfiguration -> phase tool arguments
    executor: runs one phase tool as a subprocess
    workspace: prepares and inspects the database location
    sequencer: runs the requested phases in order
"""

from tdb_loader.pipeline.arguments import HelpRequested, build_run_configuration, resolve_arguments
from tdb_loader.pipeline.executor import PhaseExecutor
from tdb_loader.pipeline.phase_args import (
    build_phase_arguments,
    data_phase_command,
    index_phase_command,
)
from tdb_loader.pipeline.sequencer import PipelineSequencer
from tdb_loader.pipeline.workspace import Workspace

__all__ = [
    "HelpRequested",
    "PhaseExecutor",
    "PipelineSequencer",
    "Workspace",
    "build_phase_arguments",
    "build_run_configuration",
    "data_phase_command",
    "index_phase_command",
    "resolve_arguments",
]
