"""Shared fixtures for loader tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from tdb_loader.config.settings import LoaderConfig
from tdb_loader.types.run import Phase, PhaseOutcome


class FakeExecutor:
    """Records phase tool invocations instead of starting processes."""

    def __init__(self, exit_codes: dict[Phase, int] | None = None) -> None:
        self.exit_codes = exit_codes or {}
        self.calls: list[tuple[Phase, str, tuple[str, ...]]] = []

    def run(self, phase: Phase, tool: str, arguments: Sequence[str]) -> PhaseOutcome:
        self.calls.append((phase, tool, tuple(arguments)))
        return PhaseOutcome(
            phase=phase,
            tool=tool,
            command=(tool, *arguments),
            exit_code=self.exit_codes.get(phase, 0),
            elapsed_seconds=1,
        )

    @property
    def phases(self) -> list[Phase]:
        return [phase for phase, _, _ in self.calls]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep loader environment variables out of every test."""
    for name in (
        "TDB_LOADER_HOME",
        "TDB_LOADER_DATA_TOOL",
        "TDB_LOADER_INDEX_TOOL",
        "TDB_LOADER_LOG_FORMAT",
        "TDB_LOADER_CONFIG_FILE",
        "JVM_ARGS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> LoaderConfig:
    """Loader configuration with plain tool names."""
    return LoaderConfig(data_tool="tdbloader2data", index_tool="tdbloader2index")
