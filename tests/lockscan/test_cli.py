"""Tests for the lockscan CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from lockscan.cli import main

REQUIREMENTS = "requests==2.28.0\nflask\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup():
    # dictConfig would bind a handler to the runner's temporary stderr
    with patch("lockscan.cli.setup_logging") as mock_setup:
        yield mock_setup


class TestScanCommand:
    def test_text_output(self, runner, write_lockfile, tmp_path):
        write_lockfile("requirements.txt", REQUIREMENTS)

        result = runner.invoke(main, ["scan", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Found 2 dependencies in 1 lockfile(s)" in result.output
        assert "requirements.txt  (PyPI, 2 packages)" in result.output
        assert "    requests 2.28.0" in result.output
        assert "    flask *" in result.output

    def test_json_output(self, runner, write_lockfile, tmp_path):
        write_lockfile("requirements.txt", REQUIREMENTS)
        write_lockfile("go.sum", "github.com/pkg/errors v0.9.1 h1:abc=\n")

        result = runner.invoke(main, ["scan", str(tmp_path), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ecosystems"] == ["PyPI", "Go"]
        assert data["total_packages"] == 3
        assert data["files"] == 2
        assert data["failed"] == 0
        assert data["diagnostics"] == []
        assert data["results"][1] == {
            "ecosystem": "Go",
            "source_file": str(tmp_path / "go.sum"),
            "dependencies": [
                {"name": "github.com/pkg/errors", "version": "v0.9.1", "ecosystem": "Go"}
            ],
        }

    def test_partial_failure_warns_and_succeeds(self, runner, write_lockfile, tmp_path):
        write_lockfile("package-lock.json", "{broken")
        write_lockfile("requirements.txt", REQUIREMENTS)

        result = runner.invoke(main, ["scan", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Warning: skipped package-lock.json: invalid JSON" in result.output
        assert "Found 2 dependencies in 1 lockfile(s)" in result.output

    def test_empty_directory_exits_1(self, runner, tmp_path):
        result = runner.invoke(main, ["scan", str(tmp_path)])
        assert result.exit_code == 1
        assert "Error: No dependency files found" in result.output

    def test_all_failed_lists_reasons(self, runner, write_lockfile, tmp_path):
        write_lockfile("package-lock.json", "{broken")

        result = runner.invoke(main, ["scan", str(tmp_path)])

        assert result.exit_code == 1
        assert "could not be parsed" in result.output
        assert "package-lock.json: invalid JSON" in result.output

    def test_missing_directory_exits_1(self, runner, tmp_path):
        result = runner.invoke(main, ["scan", str(tmp_path / "nope")])
        assert result.exit_code == 1

    def test_workers_must_be_positive(self, runner, tmp_path):
        result = runner.invoke(main, ["scan", str(tmp_path), "--workers", "0"])
        assert result.exit_code == 2

    def test_workers_option(self, runner, write_lockfile, tmp_path):
        write_lockfile("requirements.txt", REQUIREMENTS)
        write_lockfile("go.sum", "github.com/pkg/errors v0.9.1 h1:abc=\n")

        result = runner.invoke(main, ["scan", str(tmp_path), "--workers", "4", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["total_packages"] == 3


class TestOsvQueriesCommand:
    def test_batches(self, runner, write_lockfile, tmp_path):
        write_lockfile("requirements.txt", REQUIREMENTS)

        result = runner.invoke(main, ["osv-queries", str(tmp_path), "--batch-size", "1"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {
                "queries": [
                    {"package": {"name": "requests", "ecosystem": "PyPI"}, "version": "2.28.0"}
                ]
            },
            {"queries": [{"package": {"name": "flask", "ecosystem": "PyPI"}}]},
        ]

    def test_empty_directory_exits_1(self, runner, tmp_path):
        result = runner.invoke(main, ["osv-queries", str(tmp_path)])
        assert result.exit_code == 1


class TestLoggingFlag:
    def test_verbose_sets_debug(self, runner, write_lockfile, tmp_path, _no_logging_setup):
        write_lockfile("requirements.txt", REQUIREMENTS)
        runner.invoke(main, ["-v", "scan", str(tmp_path)])
        _no_logging_setup.assert_called_once_with("DEBUG")

    def test_default_uses_environment(self, runner, write_lockfile, tmp_path, _no_logging_setup):
        write_lockfile("requirements.txt", REQUIREMENTS)
        runner.invoke(main, ["scan", str(tmp_path)])
        _no_logging_setup.assert_called_once_with(None)


class TestScriptWrapper:
    def test_scan_deps_exposes_cli(self):
        import scan_deps

        assert scan_deps.main is main
