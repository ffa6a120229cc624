"""Integration tests for CLI commands."""

import json
from pathlib import Path

from conftest import SAMPLE_SUMMARY
from typer.testing import CliRunner

from newman_junit_full import __version__
from newman_junit_full.cli import app

runner = CliRunner()


def _write_summary(tmp_path: Path, summary: dict = SAMPLE_SUMMARY) -> Path:
    path = tmp_path / "summary.json"
    path.write_text(json.dumps(summary))
    return path


class TestConvert:
    def test_writes_default_file(self, tmp_path: Path) -> None:
        summary = _write_summary(tmp_path)
        result = runner.invoke(app, ["convert", str(summary), "--dir", str(tmp_path)])
        assert result.exit_code == 0
        report = tmp_path / "newman-run-report-full.xml"
        assert report.exists()
        assert "<testsuites" in report.read_text(encoding="utf-8")

    def test_export_override(self, tmp_path: Path) -> None:
        summary = _write_summary(tmp_path)
        result = runner.invoke(
            app, ["convert", str(summary), "--export", "out/junit.xml", "--dir", str(tmp_path)]
        )
        assert result.exit_code == 0
        assert (tmp_path / "out" / "junit.xml").exists()
        assert not (tmp_path / "newman-run-report-full.xml").exists()

    def test_options_file(self, tmp_path: Path) -> None:
        summary = _write_summary(tmp_path)
        options = tmp_path / "options.yaml"
        options.write_text("export: from-options.xml\n")
        result = runner.invoke(
            app, ["convert", str(summary), "--options", str(options), "--dir", str(tmp_path)]
        )
        assert result.exit_code == 0
        assert (tmp_path / "from-options.xml").exists()

    def test_invalid_options_exit_1(self, tmp_path: Path) -> None:
        summary = _write_summary(tmp_path)
        options = tmp_path / "options.json"
        options.write_text(json.dumps({"bogus": True}))
        result = runner.invoke(
            app, ["convert", str(summary), "--options", str(options), "--dir", str(tmp_path)]
        )
        assert result.exit_code == 1

    def test_missing_summary_exit_1(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["convert", str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_no_executions_writes_nothing(self, tmp_path: Path) -> None:
        summary = _write_summary(tmp_path, {"collection": {"name": "Empty"}, "run": {}})
        result = runner.invoke(app, ["convert", str(summary), "--dir", str(tmp_path)])
        assert result.exit_code == 0
        assert not (tmp_path / "newman-run-report-full.xml").exists()


class TestInspect:
    def test_lists_suites(self, tmp_path: Path) -> None:
        summary = _write_summary(tmp_path)
        result = runner.invoke(app, ["inspect", str(summary)])
        assert result.exit_code == 0
        assert "Echo API" in result.output
        assert "Health" in result.output

    def test_empty(self, tmp_path: Path) -> None:
        summary = _write_summary(tmp_path, {"run": {}})
        result = runner.invoke(app, ["inspect", str(summary)])
        assert result.exit_code == 0
        assert "No executions" in result.output


class TestVersion:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
