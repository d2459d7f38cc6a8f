"""
Loader Errors

Every failure the controller reports maps to a process exit code.

Taxonomy:
    - ConfigurationError: bad command line, unknown phase, unusable location.
      Detected before any phase tool runs. Always exit code 1.
    - PhaseFailure: a phase tool exited nonzero. The tool's own exit code
      is propagated unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tdb_loader.types.run import Phase


class LoaderError(Exception):
    """Base class for errors that abort a load."""

    exit_code: int = 1


class ConfigurationError(LoaderError):
    """Malformed or unusable invocation, found before any subprocess runs."""


class PhaseFailure(LoaderError):
    """A phase tool terminated with a nonzero status."""

    def __init__(self, phase: "Phase", exit_code: int, message: str | None = None) -> None:
        self.phase = phase
        self.exit_code = exit_code
        super().__init__(message or f"Failed during {phase.value} phase")
