"""Diagnostics and the aggregated lint report."""

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from agentdocs.lint.rules import Severity


@dataclass(frozen=True)
class Diagnostic:
    """A single problem found by a rule."""

    rule: str
    severity: Severity
    path: Path
    line: int | None
    message: str

    @property
    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def sort_key(self) -> tuple[str, int, str]:
        return str(self.path), self.line or 0, self.rule

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "severity": self.severity,
            "path": str(self.path),
            "line": self.line,
            "location": self.location,
            "message": self.message,
        }


@dataclass
class LintReport:
    """Result of linting a registry.

    Attributes:
        diagnostics: Problems found, sorted by path, line and rule
        documents_checked: Number of documents inspected
        strict: Treat warnings as failures
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)
    documents_checked: int = 0
    strict: bool = False

    def __post_init__(self) -> None:
        self.diagnostics.sort(key=Diagnostic.sort_key)

    def _count(self, severity: Severity) -> int:
        return sum(1 for d in self.diagnostics if d.severity == severity)

    @property
    def error_count(self) -> int:
        return self._count("error")

    @property
    def warning_count(self) -> int:
        return self._count("warning")

    @property
    def info_count(self) -> int:
        return self._count("info")

    @property
    def ok(self) -> bool:
        """True when there are no errors (and no warnings in strict mode)."""
        if self.error_count:
            return False
        return not (self.strict and self.warning_count)

    def by_path(self) -> dict[Path, list[Diagnostic]]:
        grouped: dict[Path, list[Diagnostic]] = defaultdict(list)
        for diagnostic in self.diagnostics:
            grouped[diagnostic.path].append(diagnostic)
        return dict(grouped)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "strict": self.strict,
            "documents_checked": self.documents_checked,
            "summary": {
                "error": self.error_count,
                "warning": self.warning_count,
                "info": self.info_count,
            },
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
