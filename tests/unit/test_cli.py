"""
Unit tests for the command-line interface.

Runs the typer app in-process with CliRunner against a temporary tree.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from filesearch import __version__
from filesearch.cli import app


runner = CliRunner()


def touch(path: Path, modified: datetime) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("content")
    os.utime(path, (modified.timestamp(), modified.timestamp()))


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A scan tree plus an isolated working directory and home."""
    tree = tmp_path / "tree"
    touch(tree / "a.go", datetime(2024, 1, 15, 10, 0, 0))
    touch(tree / "b.py", datetime(2023, 6, 1, 10, 0, 0))
    touch(tree / "sub" / "c.go", datetime(2024, 1, 15, 18, 0, 0))

    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("COLUMNS", "200")

    with patch("filesearch.cli.configure_logging"):
        yield tree, work


class TestCli:
    """Test cases for the filesearch command."""

    def test_version(self, workspace):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_tabular_flat_scan(self, workspace):
        tree, _ = workspace

        result = runner.invoke(app, ["--dir", str(tree), "--ext", "go"])

        assert result.exit_code == 0
        assert "Mode: Flat Scan" in result.output
        assert "Files Scanned: 2" in result.output
        assert "Matches Found: 1" in result.output
        assert "a.go" in result.output
        assert "c.go" not in result.output

    def test_tabular_deep_scan(self, workspace):
        tree, _ = workspace

        result = runner.invoke(app, ["-d", str(tree), "-e", "go", "-r", "--year", "2024"])

        assert result.exit_code == 0
        assert "Mode: Deep Scan" in result.output
        assert "Date Filter: Year=2024" in result.output
        assert "Matches Found: 2" in result.output
        assert "c.go" in result.output

    def test_json_output(self, workspace):
        tree, work = workspace

        result = runner.invoke(app, ["-d", str(tree), "-e", "go,py", "-r", "-o", "json"])

        assert result.exit_code == 0
        report = work / "output_go_py.json"
        assert report.exists()
        assert "JSON saved to" in result.output
        names = sorted(entry['name'] for entry in json.loads(report.read_text()))
        assert names == ["a.go", "b.py", "c.go"]

    def test_markdown_output(self, workspace):
        tree, work = workspace

        result = runner.invoke(app, ["-d", str(tree), "-r", "-o", "md", "--date", "15/1/2024"])

        assert result.exit_code == 0
        report = work / "output_all.md"
        assert report.exists()
        assert "**Total Files Found:** 2" in report.read_text()
        assert "Markdown saved to" in result.output

    def test_no_matches_exits_zero(self, workspace):
        tree, work = workspace

        result = runner.invoke(app, ["-d", str(tree), "-r", "-o", "json", "--date", "16/1/2024"])

        assert result.exit_code == 0
        assert "No files found matching your criteria." in result.output
        assert not (work / "output_all.json").exists()

    def test_missing_directory(self, workspace):
        tree, _ = workspace

        result = runner.invoke(app, ["-d", str(tree / "missing")])

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_invalid_output_format(self, workspace):
        tree, _ = workspace

        result = runner.invoke(app, ["-d", str(tree), "-o", "xml"])

        assert result.exit_code == 2

    def test_output_failure_still_succeeds(self, workspace):
        """A report that cannot be written is reported but does not fail the run."""
        tree, work = workspace
        settings = work / "settings.yaml"
        settings.write_text(f"output:\n  directory: {work / 'no-such-dir'}\n")

        result = runner.invoke(app, ["-d", str(tree), "-o", "json", "-c", str(settings)])

        assert result.exit_code == 0
        assert "Error creating file" in result.output

    def test_settings_file_defaults(self, workspace):
        """Defaults come from the settings file, flags override them."""
        tree, work = workspace
        (work / ".filesearch.yaml").write_text(
            f"defaults:\n  directory: {tree}\n  recursive: true\n  extensions: go\n"
        )

        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "Matches Found: 2" in result.output

        result = runner.invoke(app, ["--flat"])
        assert result.exit_code == 0
        assert "Matches Found: 1" in result.output

    def test_invalid_settings_file(self, workspace):
        _, work = workspace
        settings = work / "bad.yaml"
        settings.write_text("progress:\n  throttle: 0\n")

        result = runner.invoke(app, ["-c", str(settings)])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output

    def test_unknown_settings_section_warns(self, workspace):
        tree, work = workspace
        settings = work / "extra.yaml"
        settings.write_text("defaults:\n  extensions: go\nroots: ['.']\n")

        result = runner.invoke(app, ["-d", str(tree), "-c", str(settings)])

        assert result.exit_code == 0
        assert "Unknown configuration section ignored: roots" in result.output
        assert "Matches Found: 1" in result.output

    def test_strict_config_rejects_unknown_section(self, workspace):
        tree, work = workspace
        settings = work / "extra.yaml"
        settings.write_text("roots: ['.']\n")

        result = runner.invoke(app, ["-d", str(tree), "-c", str(settings), "--strict-config"])

        assert result.exit_code == 1
        assert "strict mode" in result.output

    def test_strict_config_without_settings_file(self, workspace):
        tree, _ = workspace

        result = runner.invoke(app, ["-d", str(tree), "--strict-config"])

        assert result.exit_code == 0
        assert "Files Scanned: 2" in result.output

    def test_init_config_writes_template(self, workspace):
        """The generated template is a valid settings file."""
        tree, work = workspace
        template = work / "conf" / "filesearch.yaml"

        result = runner.invoke(app, ["--init-config", str(template)])

        assert result.exit_code == 0
        assert "Settings template written to" in result.output
        assert template.exists()
        assert "Files Scanned" not in result.output

        result = runner.invoke(app, ["-d", str(tree), "-c", str(template), "--strict-config"])
        assert result.exit_code == 0

    def test_settings_output_directory(self, workspace):
        tree, work = workspace
        reports = work / "reports"
        reports.mkdir()
        settings = work / "settings.yaml"
        settings.write_text(f"output:\n  directory: {reports}\n  prefix: found\n")

        result = runner.invoke(app, ["-d", str(tree), "-e", "go", "-o", "json", "-c", str(settings)])

        assert result.exit_code == 0
        assert (reports / "found_go.json").exists()
