"""Tests for lint configuration and the lint report."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from agentdocs.errors import ConfigError
from agentdocs.lint import LintConfig, load_lint_config
from agentdocs.lint.report import Diagnostic, LintReport


class TestLintConfig:
    """Test LintConfig validation and helpers."""

    def test_defaults(self) -> None:
        config = LintConfig()
        assert config.is_enabled("dangling-reference")
        assert config.severity_for("missing-heading", "warning") == "warning"
        assert config.language_map() == {"rust": ["rust"], "java": ["java"]}
        assert config.strict is False

    def test_unknown_rule_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown lint rule"):
            LintConfig(disable=["no-such-rule"])

    def test_invalid_severity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LintConfig(severity={"missing-heading": "fatal"})

    def test_extra_languages_merge(self) -> None:
        """Test that extra languages add prefixes and extend existing ones."""
        config = LintConfig(extra_languages={"Kotlin": ["Kotlin"], "java": ["kotlin", "java"]})
        assert config.language_map() == {
            "rust": ["rust"],
            "java": ["java", "kotlin"],
            "kotlin": ["kotlin"],
        }


class TestLoadLintConfig:
    """Test loading configuration from disk."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_lint_config(tmp_path / "lint.json") == LintConfig()
        assert load_lint_config(None) == LintConfig()

    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "lint.json"
        path.write_text(
            json.dumps({"disable": ["unused-skill"], "strict": True}), encoding="utf-8"
        )
        config = load_lint_config(path)
        assert not config.is_enabled("unused-skill")
        assert config.strict

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "lint.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Failed to load lint config"):
            load_lint_config(path)

    def test_unknown_rule_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "lint.json"
        path.write_text(json.dumps({"severity": {"bogus": "error"}}), encoding="utf-8")
        with pytest.raises(ConfigError, match="bogus"):
            load_lint_config(path)


class TestLintReport:
    """Test LintReport aggregation."""

    @pytest.fixture
    def report(self) -> LintReport:
        return LintReport(
            diagnostics=[
                Diagnostic("missing-heading", "warning", Path("b.md"), 3, "no heading"),
                Diagnostic("empty-file", "error", Path("a.md"), 1, "File is empty"),
                Diagnostic("unused-skill", "info", Path("b.md"), None, "unused"),
            ],
            documents_checked=2,
        )

    def test_sorted(self, report: LintReport) -> None:
        assert [d.location for d in report.diagnostics] == ["a.md:1", "b.md", "b.md:3"]

    def test_counts(self, report: LintReport) -> None:
        assert (report.error_count, report.warning_count, report.info_count) == (1, 1, 1)
        assert not report.ok

    def test_strict(self) -> None:
        warning = Diagnostic("missing-heading", "warning", Path("a.md"), 1, "no heading")
        assert LintReport([warning]).ok
        assert not LintReport([warning], strict=True).ok

    def test_by_path(self, report: LintReport) -> None:
        grouped = report.by_path()
        assert list(grouped) == [Path("a.md"), Path("b.md")]
        assert len(grouped[Path("b.md")]) == 2

    def test_to_dict(self, report: LintReport) -> None:
        data = report.to_dict()
        assert data["ok"] is False
        assert data["documents_checked"] == 2
        assert data["summary"] == {"error": 1, "warning": 1, "info": 1}
        assert data["diagnostics"][0] == {
            "rule": "empty-file",
            "severity": "error",
            "path": "a.md",
            "line": 1,
            "location": "a.md:1",
            "message": "File is empty",
        }
        json.dumps(data)
