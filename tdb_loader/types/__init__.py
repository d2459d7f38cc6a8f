"""
Type Definitions

Pydantic models for the records that live for one loader invocation.

    - Phase: which build phase(s) to run
    - RunConfiguration: validated command line
    - PhaseArguments: flags derived for the phase tools
    - PhaseOutcome: exit status of one phase tool run
    - PipelineResult: summary of a successful load
"""

from tdb_loader.types.run import (
    Phase,
    PhaseArguments,
    PhaseOutcome,
    PipelineResult,
    RunConfiguration,
)

__all__ = [
    "Phase",
    "PhaseArguments",
    "PhaseOutcome",
    "PipelineResult",
    "RunConfiguration",
]
