"""
tdb-loader - Bulk Load Controller for Triple-Store Databases

Builds a database by running two external phase tools in sequence: the
Data phase (raw files -> node table and primary triple storage) and the
Index phase (external sort -> secondary indexes).

Example:
    >>> from tdb_loader import PipelineSequencer, resolve_arguments
    >>> run = resolve_arguments(["--loc", "./db", "data.nt"])
    >>> result = PipelineSequencer().run(run)
    >>> print(result.elapsed_seconds)

Main Classes:
    PipelineSequencer: Runs the requested phases in order
    PhaseExecutor: Runs one phase tool as a subprocess
    LoaderConfig: Installation and tuning configuration
"""

__version__ = "0.1.0"

# Public API - lazy imports keep `import tdb_loader` cheap for the CLI
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "PipelineSequencer":
        from tdb_loader.pipeline.sequencer import PipelineSequencer
        return PipelineSequencer

    if name == "PhaseExecutor":
        from tdb_loader.pipeline.executor import PhaseExecutor
        return PhaseExecutor

    if name == "LoaderConfig":
        from tdb_loader.config.settings import LoaderConfig
        return LoaderConfig

    if name in ("resolve_arguments", "build_phase_arguments", "HelpRequested"):
        from tdb_loader import pipeline
        return getattr(pipeline, name)

    if name in ("ConfigurationError", "LoaderError", "PhaseFailure"):
        from tdb_loader import errors
        return getattr(errors, name)

    # Types
    if name in ("Phase", "RunConfiguration", "PhaseArguments", "PhaseOutcome", "PipelineResult"):
        from tdb_loader import types
        return getattr(types, name)

    raise AttributeError(f"module 'tdb_loader' has no attribute {name!r}")


__all__ = [
    # Main classes
    "PipelineSequencer",
    "PhaseExecutor",
    "LoaderConfig",

    # Functions
    "resolve_arguments",
    "build_phase_arguments",

    # Errors
    "HelpRequested",
    "ConfigurationError",
    "LoaderError",
    "PhaseFailure",

    # Types
    "Phase",
    "RunConfiguration",
    "PhaseArguments",
    "PhaseOutcome",
    "PipelineResult",

    # Version
    "__version__",
]
