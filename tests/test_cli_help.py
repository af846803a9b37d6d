# ==============================================================================
# Tests for CLI Help Commands
# ==============================================================================
"""
Tests that all CLI help commands generate the expected output.

These tests use the real app from searchsink.app to ensure the full command
tree is wired up and that Typer can introspect every command signature.
"""

from typer.testing import CliRunner

from searchsink.app import app

runner = CliRunner()


class TestRootHelp:
    """Tests for the root `searchsink --help` output."""

    def test_exit_code(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0

    def test_description(self):
        result = runner.invoke(app, ["--help"])
        assert "Bulk-write sink for OpenSearch" in result.output

    def test_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        for command in ("load", "check", "config"):
            assert command in result.output


class TestLoadHelp:
    def test_options(self):
        result = runner.invoke(app, ["load", "--help"])
        assert result.exit_code == 0
        assert "--index" in result.output
        assert "--id-field" in result.output
        assert "--workers" in result.output

    def test_missing_file(self):
        result = runner.invoke(app, ["load", "does-not-exist.jsonl", "--index", "docs"])
        assert result.exit_code != 0


class TestCheckHelp:
    def test_description(self):
        result = runner.invoke(app, ["check", "--help"])
        assert result.exit_code == 0
        assert "Check that OpenSearch is reachable" in result.output


class TestConfigHelp:
    def test_show(self):
        result = runner.invoke(app, ["config", "show", "--help"])
        assert result.exit_code == 0
        assert "--json" in result.output

    def test_show_json(self):
        result = runner.invoke(app, ["config", "show", "--json"])
        assert result.exit_code == 0
        assert '"opensearch"' in result.output
        assert '"parallelism"' in result.output
