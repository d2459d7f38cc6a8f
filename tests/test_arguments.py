"""Tests for the argument resolver."""

import logging
from pathlib import Path

import pytest

from tdb_loader.errors import ConfigurationError
from typer.testing import CliRunner

from tdb_loader.pipeline.arguments import HelpRequested, app, resolve_arguments
from tdb_loader.types.run import Phase


class TestOptions:
    """Recognition of short, long and joined options."""

    def test_defaults(self):
        """Only --loc and a file gives phase all and no tuning."""
        run = resolve_arguments(["--loc", "/tmp/db", "file1.nt"])
        assert run.location == Path("/tmp/db")
        assert run.phase is Phase.ALL
        assert not run.debug and not run.trace and not run.keep_work
        assert run.jvm_args is None
        assert run.sort_args is None
        assert run.data_files == ("file1.nt",)

    def test_short_forms(self):
        """Every short option maps onto the same setting as its long form."""
        run = resolve_arguments(
            ["-l", "db", "-p", "data", "-d", "-t", "-k", "-j", "-Xmx2G", "-s", "-S 1G", "a.nt"]
        )
        assert run.location == Path("db")
        assert run.phase is Phase.DATA
        assert run.debug and run.trace and run.keep_work
        assert run.jvm_args == "-Xmx2G"
        assert run.sort_args == "-S 1G"

    def test_long_forms(self):
        """Long options are recognized."""
        run = resolve_arguments(
            [
                "--loc", "db", "--phase", "index", "--debug", "--trace",
                "--keep-work", "--jvm-args", "-Xmx2G", "--sort-args", "-T /var/tmp",
            ]
        )
        assert run.phase is Phase.INDEX
        assert run.debug and run.trace and run.keep_work
        assert run.jvm_args == "-Xmx2G"
        assert run.sort_args == "-T /var/tmp"

    def test_joined_values(self):
        """Long value options accept --opt=value."""
        run = resolve_arguments(["--loc=db", "--phase=data", "--jvm-args=-Xmx1G", "x.nt"])
        assert run.location == Path("db")
        assert run.phase is Phase.DATA
        assert run.jvm_args == "-Xmx1G"

    def test_joined_short_values(self):
        """Short value options accept -o=value as well."""
        run = resolve_arguments(["-l=db", "-p=data", "-s=-T /var/tmp", "x.nt"])
        assert run.location == Path("db")
        assert run.phase is Phase.DATA
        assert run.sort_args == "-T /var/tmp"

    def test_last_location_wins(self):
        """Repeated --loc keeps the last value."""
        run = resolve_arguments(["--loc", "first", "-l", "second", "--loc=third", "x.nt"])
        assert run.location == Path("third")

    def test_missing_value(self):
        """A value option at the end of the line is rejected."""
        with pytest.raises(ConfigurationError, match="requires an argument"):
            resolve_arguments(["--loc"])


class TestDataFiles:
    """Where option parsing stops and data files begin."""

    def test_first_positional_ends_options(self):
        """Tokens after the first data file are data files, even option-like ones."""
        run = resolve_arguments(["--loc", "db", "a.nt", "--debug", "b.nt"])
        assert run.data_files == ("a.nt", "--debug", "b.nt")
        assert run.debug is False

    def test_separator(self):
        """Tokens after -- are data files regardless of a leading dash."""
        run = resolve_arguments(["--loc", "db", "--", "-odd.nt", "b.nt"])
        assert run.data_files == ("-odd.nt", "b.nt")

    def test_dash_filename_without_separator(self):
        """A dash-prefixed filename without -- is an unrecognized option."""
        with pytest.raises(ConfigurationError, match="Unrecognized option"):
            resolve_arguments(["--loc", "db", "-odd.nt"])

    def test_data_files_required_for_all(self):
        """The default phase needs data files."""
        with pytest.raises(ConfigurationError, match="No data files"):
            resolve_arguments(["--loc", "db"])

    def test_data_files_required_for_data(self):
        """The data phase needs data files."""
        with pytest.raises(ConfigurationError, match="No data files"):
            resolve_arguments(["--loc", "db", "--phase", "data"])

    def test_index_needs_no_data_files(self):
        """The index phase runs without data files."""
        run = resolve_arguments(["--loc", "db", "--phase", "index"])
        assert run.phase is Phase.INDEX
        assert run.data_files == ()

    def test_index_ignores_data_files(self, caplog):
        """Data files given to the index phase are dropped with a warning."""
        with caplog.at_level(logging.WARNING, logger="tdb_loader"):
            run = resolve_arguments(["--loc", "db", "--phase", "index", "a.nt"])
        assert run.data_files == ()
        assert "Ignoring 1 data file" in caplog.text


class TestValidation:
    """Errors raised after parsing."""

    def test_unknown_flag(self):
        """--bogus is rejected."""
        with pytest.raises(ConfigurationError, match="Unrecognized option: --bogus"):
            resolve_arguments(["--loc", "db", "--bogus", "a.nt"])

    def test_location_required(self):
        """A missing --loc is an error."""
        with pytest.raises(ConfigurationError, match="--loc is required"):
            resolve_arguments(["a.nt"])

    def test_empty_location(self):
        """An empty --loc value is an error."""
        with pytest.raises(ConfigurationError):
            resolve_arguments(["--loc=", "a.nt"])

    def test_blank_location(self):
        """A whitespace-only --loc value is a configuration error."""
        with pytest.raises(ConfigurationError, match="--loc is required"):
            resolve_arguments(["--loc", "   ", "a.nt"])

    def test_unrecognized_phase(self):
        """Phases outside all/data/index are rejected with exit code 1."""
        with pytest.raises(ConfigurationError, match="Unrecognized phase sort") as exc_info:
            resolve_arguments(["--loc", "db", "--phase", "sort", "a.nt"])
        assert exc_info.value.exit_code == 1


class TestHelp:
    """Help short-circuits everything else."""

    def test_help_alone(self):
        """--help needs no --loc."""
        with pytest.raises(HelpRequested):
            resolve_arguments(["--help"])

    def test_help_short(self, capsys):
        """-h prints usage and skips --loc and data file checks."""
        with pytest.raises(HelpRequested):
            resolve_arguments(["-h"])
        assert "Usage:" in capsys.readouterr().out

    def test_help_with_unknown_option(self, capsys):
        """Help wins over an unknown option on the same command line."""
        with pytest.raises(HelpRequested):
            resolve_arguments(["-h", "--bogus"])
        assert "Usage:" in capsys.readouterr().out

    def test_help_after_separator_is_a_file(self):
        """-h after "--" is a data file name, not a help request."""
        run = resolve_arguments(["--loc", "db", "--", "-h"])
        assert run.data_files == ("-h",)

    def test_help_lists_options(self):
        """Help text documents every option."""
        runner = CliRunner()
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for option in ("--loc", "--phase", "--keep-work", "--debug", "--trace",
                       "--jvm-args", "--sort-args", "--help"):
            assert option in result.stdout
