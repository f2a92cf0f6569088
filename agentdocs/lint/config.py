"""Lint configuration.

Configuration is read from <project>/.agentdocs/lint.json (or a path given on
the command line) in the following format:

{
  "disable": ["missing-heading"],
  "severity": {"frontmatter-unknown-key": "error"},
  "strict": false,
  "extra_languages": {"kotlin": ["kotlin"]}
}
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from agentdocs.errors import ConfigError
from agentdocs.lint.rules import RULE_IDS, Severity
from agentdocs.models import DEFAULT_LANGUAGES


class LintConfig(BaseModel):
    """Which rules run and how loudly."""

    disable: list[str] = Field(default_factory=list)
    severity: dict[str, Severity] = Field(default_factory=dict)
    strict: bool = False
    extra_languages: dict[str, list[str]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_rule_ids(self) -> "LintConfig":
        """Reject rule ids that do not exist."""
        unknown = sorted(
            (set(self.disable) | set(self.severity)) - RULE_IDS
        )
        if unknown:
            msg = f"Unknown lint rule(s): {', '.join(unknown)}"
            raise ValueError(msg)
        return self

    def is_enabled(self, rule_id: str) -> bool:
        return rule_id not in self.disable

    def severity_for(self, rule_id: str, default: Severity) -> Severity:
        return self.severity.get(rule_id, default)

    def language_map(self) -> dict[str, list[str]]:
        """Identifier prefix -> accepted code-block languages."""
        merged = {prefix: list(langs) for prefix, langs in DEFAULT_LANGUAGES.items()}
        for prefix, languages in self.extra_languages.items():
            merged.setdefault(prefix.lower(), [])
            for language in languages:
                if language.lower() not in merged[prefix.lower()]:
                    merged[prefix.lower()].append(language.lower())
        return merged


def load_lint_config(path: Path | None) -> LintConfig:
    """Load lint configuration from disk.

    Args:
        path: Path to a JSON config file. Missing files yield defaults.

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file is not valid JSON or fails validation
    """
    if path is None or not path.exists():
        return LintConfig()

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        return LintConfig.model_validate(data)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        msg = f"Failed to load lint config from {path}: {e}"
        raise ConfigError(msg) from e
