"""
Configuration System

Configuration Priority (highest to lowest):
    1. Programmatic (passed to LoaderConfig())
    2. Config file (TDB_LOADER_CONFIG_FILE, loaded by the CLI)
    3. Environment variables (TDB_LOADER_* prefix, JVM_ARGS)
    4. Built-in defaults
"""

from tdb_loader.config.settings import LoaderConfig

__all__ = ["LoaderConfig"]
