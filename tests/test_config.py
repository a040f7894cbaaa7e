"""Tests for output configuration."""

import pytest

from buildtrace.config import (
    TRACE_DIR_ENV,
    TRACE_FILE_ENV,
    OutputSettings,
    load_output_settings,
    parse_plugin_args,
    resolve_output_destination,
    select_output_settings,
)
from buildtrace.errors import ConfigError


class TestParsePluginArgs:
    """Tests for parse_plugin_args()."""

    def test_no_arguments(self):
        """Test that no argument selects the default."""
        assert parse_plugin_args([]) == OutputSettings()

    def test_trace_file(self):
        """Test the explicit file flag."""
        assert parse_plugin_args([("trace", "/tmp/out.json")]) == OutputSettings(
            trace_file="/tmp/out.json"
        )

    def test_trace_dir(self):
        """Test the directory flag."""
        assert parse_plugin_args([("trace-dir", "/tmp")]) == OutputSettings(
            trace_dir="/tmp"
        )

    @pytest.mark.parametrize(
        "pairs",
        [
            [("output", "x.json")],
            [("trace", "a.json"), ("trace-dir", "/tmp")],
        ],
    )
    def test_invalid_arguments(self, pairs):
        """Test that unknown or repeated flags are rejected."""
        with pytest.raises(ConfigError, match="trace=FILENAME"):
            parse_plugin_args(pairs)


class TestResolveOutputDestination:
    """Tests for resolve_output_destination()."""

    def test_explicit_file(self, tmp_path):
        """Test that an explicit file is used as given."""
        target = tmp_path / "out.json"
        assert resolve_output_destination(trace_file=target) == target

    def test_directory_creates_unique_file(self, tmp_path):
        """Test that a directory selection creates a unique trace file."""
        first = resolve_output_destination(trace_dir=tmp_path)
        second = resolve_output_destination(trace_dir=tmp_path)

        assert first != second
        for path in (first, second):
            assert path.parent == tmp_path
            assert path.name.startswith("trace_")
            assert path.suffix == ".json"
            assert path.exists()

    def test_default_uses_temp_dir(self, tmp_path, monkeypatch):
        """Test that the default lands in the temp directory."""
        monkeypatch.setattr("tempfile.tempdir", str(tmp_path))
        path = resolve_output_destination()
        assert path.parent == tmp_path
        assert path.exists()

    def test_both_selected(self, tmp_path):
        """Test that conflicting selections fail."""
        with pytest.raises(ConfigError):
            resolve_output_destination(trace_file=tmp_path / "a.json", trace_dir=tmp_path)

    def test_missing_directory(self, tmp_path):
        """Test that a missing directory fails at startup."""
        with pytest.raises(ConfigError):
            resolve_output_destination(trace_dir=tmp_path / "missing")


class TestLoadOutputSettings:
    """Tests for load_output_settings()."""

    def test_reads_environment(self, monkeypatch):
        """Test that the environment selects the destination."""
        monkeypatch.setenv(TRACE_FILE_ENV, "/tmp/t.json")
        monkeypatch.delenv(TRACE_DIR_ENV, raising=False)
        assert load_output_settings() == OutputSettings(trace_file="/tmp/t.json")

    def test_empty_values_ignored(self, monkeypatch):
        """Test that empty variables count as unset."""
        monkeypatch.setenv(TRACE_FILE_ENV, "")
        monkeypatch.setenv(TRACE_DIR_ENV, "")
        assert load_output_settings() == OutputSettings()


class TestSelectOutputSettings:
    """Tests for select_output_settings()."""

    def test_arguments_override_environment(self, monkeypatch):
        """Test that command-line arguments win over the environment."""
        monkeypatch.setenv(TRACE_FILE_ENV, "/tmp/env.json")
        assert select_output_settings(["trace-dir=/var/traces"]) == OutputSettings(
            trace_dir="/var/traces"
        )

    def test_no_arguments_uses_environment(self, monkeypatch):
        """Test that the environment applies without arguments."""
        monkeypatch.setenv(TRACE_FILE_ENV, "/tmp/env.json")
        monkeypatch.delenv(TRACE_DIR_ENV, raising=False)
        assert select_output_settings([]) == OutputSettings(trace_file="/tmp/env.json")

    @pytest.mark.parametrize(
        "argv",
        [
            ["out.json"],
            ["trace="],
            ["trace=a.json", "trace-dir=/tmp"],
            ["output=a.json"],
        ],
    )
    def test_malformed_arguments(self, argv):
        """Test that malformed arguments fail at startup."""
        with pytest.raises(ConfigError, match="trace=FILENAME"):
            select_output_settings(argv)
