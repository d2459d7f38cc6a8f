"""
LoaderConfig - Configuration Management

Installation and tuning settings shared by every phase tool invocation.
Constructed once at startup and handed to the pipeline explicitly.

Example:
    >>> # Use defaults (reads from environment)
    >>> config = LoaderConfig()

    >>> # Explicit configuration
    >>> config = LoaderConfig(home="/opt/tdb", default_jvm_args="-Xmx4G")

    >>> # From config file
    >>> config = LoaderConfig.from_file("./loader.toml")

Environment Variables:
    TDB_LOADER_HOME - Installation root; phase tools live in <home>/bin
    TDB_LOADER_DATA_TOOL - Data phase executable name
    TDB_LOADER_INDEX_TOOL - Index phase executable name
    TDB_LOADER_LOG_FORMAT - Log record format for the console handler
    TDB_LOADER_CONFIG_FILE - TOML file loaded by the CLI
    JVM_ARGS - Default runtime settings exported to the phase tools
"""

from __future__ import annotations

import os
import shutil
import tomllib
from pathlib import Path
from typing import Any


class LoaderConfig:
    """Configuration for the bulk loader."""

    # === Installation ===

    home: Path | None = None
    """Installation root (symbolic links resolved)"""

    data_tool: str = "tdbloader2data"
    """Executable for the Data phase"""

    index_tool: str = "tdbloader2index"
    """Executable for the Index phase"""

    # === Tuning ===

    default_jvm_args: str | None = None
    """Exported to phase tools as JVM_ARGS; --jvm-args on the command line still wins"""

    # === Logging ===

    log_format: str = "%(message)s"
    """Format string for console log records"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        if self.home is not None:
            self.home = Path(self.home).expanduser().resolve()

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        if home := os.getenv("TDB_LOADER_HOME"):
            self.home = Path(home)
        if tool := os.getenv("TDB_LOADER_DATA_TOOL"):
            self.data_tool = tool
        if tool := os.getenv("TDB_LOADER_INDEX_TOOL"):
            self.index_tool = tool
        if fmt := os.getenv("TDB_LOADER_LOG_FORMAT"):
            self.log_format = fmt
        if jvm_args := os.getenv("JVM_ARGS"):
            self.default_jvm_args = jvm_args

    @classmethod
    def from_file(cls, path: str | Path) -> "LoaderConfig":
        """
        Load configuration from TOML file.

        Example TOML:
            [install]
            home = "/opt/tdb"

            [tools]
            data = "tdbloader2data"
            index = "tdbloader2index"

            [tuning]
            jvm_args = "-Xmx4G"

        Args:
            path: Path to TOML configuration file

        Returns:
            LoaderConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If the file contains an unknown option
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        # Map section.key onto attribute names
        key_mapping = {
            ("install", "home"): "home",
            ("tools", "data"): "data_tool",
            ("tools", "index"): "index_tool",
            ("tuning", "jvm_args"): "default_jvm_args",
            ("logging", "format"): "log_format",
        }

        flat_config: dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(value, dict):
                # Flat top-level keys use attribute names; unknown ones fail in __init__
                flat_config[key] = value
                continue
            for sub_key, sub_value in value.items():
                attribute = key_mapping.get((key, sub_key))
                if attribute is None:
                    raise ValueError(f"Unknown configuration option: {key}.{sub_key}")
                flat_config[attribute] = sub_value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        """Load configuration from environment variables only."""
        return cls()

    def with_overrides(self, **kwargs: Any) -> "LoaderConfig":
        """Return new config with specified overrides."""
        new_config = LoaderConfig.__new__(LoaderConfig)
        for key in dir(self):
            if not key.startswith("_") and not callable(getattr(self, key)):
                setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        if new_config.home is not None:
            new_config.home = Path(new_config.home).expanduser().resolve()
        return new_config

    def tool_path(self, name: str) -> str:
        """
        Resolve a phase tool executable.

        <home>/bin/<name> when an installation root is configured, otherwise
        the PATH lookup. Falls back to the bare name so the failure surfaces
        when the tool is started.
        """
        if self.home is not None:
            return str(self.home / "bin" / name)
        return shutil.which(name) or name

    def child_environment(self) -> dict[str, str]:
        """Environment for phase tool subprocesses."""
        env = dict(os.environ)
        if self.default_jvm_args:
            env["JVM_ARGS"] = self.default_jvm_args
        return env
