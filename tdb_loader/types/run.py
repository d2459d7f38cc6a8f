"""
Run Types

Transient records for one loader invocation. Nothing here is persisted.

Configuration:
    - Phase: closed set of phase modes (all, data, index)
    - RunConfiguration: immutable, validated command line

Derived:
    - PhaseArguments: common and Index-only flags for the phase tools

Outcomes:
    - PhaseOutcome: exit status and timing of one phase tool
    - PipelineResult: summary of a completed load
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tdb_loader.errors import ConfigurationError


class Phase(str, Enum):
    """Phase mode requested on the command line."""

    ALL = "all"
    DATA = "data"
    INDEX = "index"

    @classmethod
    def parse(cls, value: str) -> "Phase":
        """Map a command-line value to a Phase, rejecting anything else."""
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(f"Unrecognized phase {value}") from None

    @property
    def steps(self) -> tuple["Phase", ...]:
        """Concrete phases to run, in execution order."""
        if self is Phase.ALL:
            return (Phase.DATA, Phase.INDEX)
        return (self,)

    @property
    def includes_data(self) -> bool:
        return Phase.DATA in self.steps


class RunConfiguration(BaseModel):
    """
    Validated loader invocation.

    Built once by the argument resolver and never mutated afterwards.

    Attributes:
        location: Target database directory
        phase: Phase mode, defaults to all
        debug: Forward --debug to the phase tools
        trace: Forward --trace to the phase tools
        keep_work: Forward --keep-work; the tools keep intermediate files
        jvm_args: Runtime tuning forwarded verbatim to both tools
        sort_args: Sort tuning forwarded verbatim to the Index tool only
        data_files: Input files for the Data phase, in command-line order
    """

    model_config = ConfigDict(frozen=True)

    location: Path
    phase: Phase = Phase.ALL
    debug: bool = False
    trace: bool = False
    keep_work: bool = False
    jvm_args: str | None = None
    sort_args: str | None = None
    data_files: tuple[str, ...] = ()

    @field_validator("location", mode="before")
    @classmethod
    def _location_not_empty(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            raise ValueError("location must not be empty")
        return value

    @model_validator(mode="after")
    def _check_invariants(self) -> "RunConfiguration":
        if self.phase.includes_data and not self.data_files:
            raise ValueError(f"phase '{self.phase.value}' requires at least one data file")
        return self


class PhaseArguments(BaseModel):
    """Flags derived from a RunConfiguration for the phase tools."""

    model_config = ConfigDict(frozen=True)

    common_flags: tuple[str, ...] = Field(
        default=(), description="Flags forwarded to both phase tools"
    )
    index_flags: tuple[str, ...] = Field(
        default=(), description="Flags forwarded to the Index tool only"
    )


class PhaseOutcome(BaseModel):
    """Exit status of one phase tool invocation."""

    model_config = ConfigDict(frozen=True)

    phase: Phase
    tool: str
    command: tuple[str, ...] = ()
    exit_code: int
    elapsed_seconds: int = 0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class PipelineResult(BaseModel):
    """Summary of a load in which every requested phase succeeded."""

    location: Path
    phase: Phase
    outcomes: list[PhaseOutcome] = Field(default_factory=list)
    elapsed_seconds: int = 0
    work_files: list[str] = Field(
        default_factory=list, description="Work artifacts left at the location"
    )

    @property
    def phases_run(self) -> list[Phase]:
        return [outcome.phase for outcome in self.outcomes]
