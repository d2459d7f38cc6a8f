"""
Phase Executor

Runs one phase tool as a child process and reports its exit status.

The call blocks until the child terminates; there is no timeout and no
retry. Output streams are inherited from the loader, never captured.
Exit codes are reported verbatim, except that a child killed by signal N
is reported as 128 + N.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from collections.abc import Callable, Sequence
from typing import Any

from tdb_loader.config.settings import LoaderConfig
from tdb_loader.types.run import Phase, PhaseOutcome

__all__ = ["PhaseExecutor", "EXIT_NOT_EXECUTABLE", "EXIT_NOT_FOUND"]

logger = logging.getLogger(__name__)

EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]


def _normalize_returncode(returncode: int) -> int:
    if returncode < 0:
        return 128 - returncode
    return returncode


class PhaseExecutor:
    """
    Invokes phase tools as subprocesses.

    Args:
        config: Loader configuration used to locate tools and build the
            child environment
        runner: subprocess.run compatible callable (replaceable in tests)
        clock: Monotonic clock in seconds
    """

    def __init__(
        self,
        config: LoaderConfig | None = None,
        runner: Runner | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or LoaderConfig()
        self._runner = runner or subprocess.run
        self._clock = clock

    def run(self, phase: Phase, tool: str, arguments: Sequence[str]) -> PhaseOutcome:
        """
        Run a phase tool and wait for it to finish.

        Args:
            phase: Phase being run (for reporting)
            tool: Tool name, resolved through LoaderConfig.tool_path
            arguments: Arguments after the tool name

        Returns:
            PhaseOutcome with the tool's exit code and elapsed seconds
        """
        executable = self.config.tool_path(tool)
        command = (executable, *arguments)

        logger.info("%s phase: %s", phase.value.capitalize(), tool)
        logger.debug("Running: %s", shlex.join(command))

        start = self._clock()
        try:
            completed = self._runner(
                list(command),
                env=self.config.child_environment(),
                check=False,
            )
            exit_code = _normalize_returncode(completed.returncode)
        except FileNotFoundError:
            logger.error("Phase tool not found: %s", executable)
            exit_code = EXIT_NOT_FOUND
        except PermissionError:
            logger.error("Phase tool is not executable: %s", executable)
            exit_code = EXIT_NOT_EXECUTABLE
        except OSError as e:
            logger.error("Cannot start phase tool %s: %s", executable, e)
            exit_code = EXIT_NOT_EXECUTABLE
        elapsed = int(self._clock() - start)

        if exit_code == 0:
            logger.info("%s phase completed in %ds", phase.value.capitalize(), elapsed)
        else:
            logger.debug("%s exited with code %d after %ds", tool, exit_code, elapsed)

        return PhaseOutcome(
            phase=phase,
            tool=tool,
            command=command,
            exit_code=exit_code,
            elapsed_seconds=elapsed,
        )
