"""
Workspace

Lifecycle of the database location shared by the two phases.

The Data phase needs a fresh location: it is created when missing and
must be empty when it already exists. The Index phase reads what the Data
phase left, so its location is used as found. Nothing is ever deleted;
after a failure whatever the tool wrote stays in place for a rerun.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tdb_loader.errors import ConfigurationError
from tdb_loader.types.run import Phase

__all__ = ["Workspace", "WORK_DIR_NAME", "WORK_FILE_PATTERN"]

logger = logging.getLogger(__name__)

WORK_FILE_PATTERN = "*.tmp"
WORK_DIR_NAME = "work"


class Workspace:
    """The on-disk location a load writes to."""

    def __init__(self, location: Path) -> None:
        self.location = Path(location)

    def prepare(self, phase: Phase) -> None:
        """
        Make the location ready for the requested phase.

        Raises:
            ConfigurationError: The location is a file, or is a non-empty
                directory and the phase includes the Data phase
        """
        if self.location.exists() and not self.location.is_dir():
            raise ConfigurationError(f"Location is not a directory: {self.location}")

        if not phase.includes_data:
            return

        if self.location.exists():
            if any(self.location.iterdir()):
                raise ConfigurationError(f"Location is not empty: {self.location}")
            return

        try:
            self.location.mkdir(parents=True)
        except OSError as e:
            raise ConfigurationError(f"Cannot create location {self.location}: {e}") from e
        logger.debug("Created location %s", self.location)

    def work_files(self) -> list[str]:
        """Intermediate artifacts left at the location, relative and sorted."""
        if not self.location.is_dir():
            return []
        found = [p for p in self.location.glob(WORK_FILE_PATTERN) if p.is_file()]
        work_dir = self.location / WORK_DIR_NAME
        if work_dir.is_dir():
            found.append(work_dir)
        return sorted(str(p.relative_to(self.location)) for p in found)

    def report(self, keep_work: bool) -> list[str]:
        """Log the work artifacts still present and return them."""
        files = self.work_files()
        if keep_work and files:
            logger.info("Keeping work files in %s: %s", self.location, ", ".join(files))
        elif files:
            logger.debug("Work files remaining in %s: %s", self.location, ", ".join(files))
        return files
