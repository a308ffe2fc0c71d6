"""
Tests for the rta command line interface.
"""

import json

from click.testing import CliRunner

from rta.cli import cli
from rta.config import settings


def test_analyze_writes_json_report(project_dir):
    runner = CliRunner()
    report_path = project_dir / "report.json"
    result = runner.invoke(cli, ["analyze", str(project_dir), "-f", "json", "-o", str(report_path)])

    assert result.exit_code == 0, result.output
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["healthScore"] == 7.0
    assert report["metadata"]["projectName"] == "demo-app"
    assert "Health Score: 7.0/10" in result.output


def test_analyze_table_output(project_dir):
    result = CliRunner().invoke(cli, ["analyze", str(project_dir)])
    assert result.exit_code == 0, result.output
    assert "RTA Analysis Results" in result.output
    assert "react-missing-key" in result.output
    assert "Run with --ai for AI-powered insights" in result.output


def test_analyze_with_rule_allow_list(project_dir):
    report_path = project_dir / "report.json"
    result = CliRunner().invoke(
        cli,
        ["analyze", str(project_dir), "--rules", "typescript-any-usage", "-f", "json", "-o", str(report_path)],
    )
    assert result.exit_code == 0, result.output
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert [f["ruleId"] for f in report["findings"]] == ["typescript-any-usage"]


def test_analyze_missing_project_exits_nonzero(tmp_path):
    result = CliRunner().invoke(cli, ["analyze", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_fail_on_errors(project_dir):
    runner = CliRunner()
    assert runner.invoke(cli, ["analyze", str(project_dir)]).exit_code == 0
    assert runner.invoke(cli, ["analyze", str(project_dir), "--fail-on-errors"]).exit_code == 1

    clean = runner.invoke(
        cli, ["analyze", str(project_dir), "--rules", "typescript-any-usage", "--fail-on-errors"]
    )
    assert clean.exit_code == 0


def test_analyze_ai_without_key_degrades(project_dir, monkeypatch):
    monkeypatch.setattr(settings, "groq_api_key", "")
    report_path = project_dir / "report.json"
    result = CliRunner().invoke(cli, ["analyze", str(project_dir), "--ai", "-f", "json", "-o", str(report_path)])

    assert result.exit_code == 0, result.output
    assert "GROQ_API_KEY is not set" in result.output
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["aiEnhanced"] is False
    assert "Authentication" in report["aiError"]
    assert report["healthScore"] == 7.0


def test_list_rules_and_categories():
    runner = CliRunner()
    rules = runner.invoke(cli, ["analyze", "--list-rules"])
    assert rules.exit_code == 0
    assert "react-missing-key" in rules.output

    categories = runner.invoke(cli, ["analyze", "--list-categories"])
    assert categories.exit_code == 0
    assert "accessibility" in categories.output


def test_info():
    runner = CliRunner()
    result = runner.invoke(cli, ["info"])
    assert result.exit_code == 0
    assert "Available Presets:" in result.output
    assert "recommended" in result.output

    detailed = runner.invoke(cli, ["info", "--rules"])
    assert detailed.exit_code == 0
    assert "Detailed Rules" in detailed.output


def test_init_writes_config_once():
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["init", "--preset", "strict"])
        assert result.exit_code == 0
        assert "Created .rta.json with strict preset" in result.output
        with open(".rta.json", encoding="utf-8") as fh:
            assert json.load(fh)["preset"] == "strict"

        again = runner.invoke(cli, ["init"])
        assert again.exit_code == 0
        assert "Configuration file already exists" in again.output


def test_models():
    result = CliRunner().invoke(cli, ["models"])
    assert result.exit_code == 0
    assert "llama-3.1-8b-instant" in result.output
