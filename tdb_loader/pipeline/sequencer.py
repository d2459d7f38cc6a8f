"""
Pipeline Sequencer

Runs the phases a RunConfiguration asks for, strictly in order:

    all   -> Data, then Index
    data  -> Data
    index -> Index

The first phase that exits nonzero aborts the load with a PhaseFailure
carrying that phase's exit code; later phases never start. The Index phase
is started without checking for Data phase output; that precondition
belongs to the Index tool.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from tdb_loader.config.settings import LoaderConfig
from tdb_loader.errors import PhaseFailure
from tdb_loader.pipeline.executor import PhaseExecutor
from tdb_loader.pipeline.phase_args import (
    build_phase_arguments,
    data_phase_command,
    index_phase_command,
)
from tdb_loader.pipeline.workspace import Workspace
from tdb_loader.types.run import Phase, PhaseOutcome, PipelineResult, RunConfiguration

__all__ = ["PipelineSequencer"]

logger = logging.getLogger(__name__)


class PipelineSequencer:
    """
    Top-level controller for one load.

    Args:
        config: Loader configuration (tool names, installation root)
        executor: Runs the phase tools; built from config when omitted
        clock: Monotonic clock in seconds
    """

    def __init__(
        self,
        config: LoaderConfig | None = None,
        executor: PhaseExecutor | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or LoaderConfig()
        self.executor = executor or PhaseExecutor(self.config)
        self._clock = clock

    def run(self, run: RunConfiguration) -> PipelineResult:
        """
        Execute the requested phases.

        Args:
            run: Validated invocation

        Returns:
            PipelineResult when every phase succeeded

        Raises:
            ConfigurationError: The location cannot be used
            PhaseFailure: A phase tool exited nonzero
        """
        start = self._clock()
        logger.info("Loading into %s (phase: %s)", run.location, run.phase.value)

        workspace = Workspace(run.location)
        workspace.prepare(run.phase)

        arguments = build_phase_arguments(run)
        outcomes: list[PhaseOutcome] = []

        for step in run.phase.steps:
            if step is Phase.DATA:
                outcome = self.executor.run(
                    Phase.DATA, self.config.data_tool, data_phase_command(run, arguments)
                )
            else:
                outcome = self.executor.run(
                    Phase.INDEX, self.config.index_tool, index_phase_command(run, arguments)
                )
            outcomes.append(outcome)

            if not outcome.succeeded:
                raise PhaseFailure(step, outcome.exit_code)

        elapsed = int(self._clock() - start)
        logger.info("Total elapsed time: %ds", elapsed)

        return PipelineResult(
            location=run.location,
            phase=run.phase,
            outcomes=outcomes,
            elapsed_seconds=elapsed,
            work_files=workspace.report(run.keep_work),
        )
