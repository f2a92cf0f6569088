"""Documentation-integrity checks for the corpus."""

import logging

from agentdocs.lint.config import LintConfig, load_lint_config
from agentdocs.lint.report import Diagnostic, LintReport
from agentdocs.lint.rules import RULE_IDS, RULES, LintContext, Rule
from agentdocs.loader import Registry
from agentdocs.models import Scope

logger = logging.getLogger(__name__)


def lint(
    registry: Registry,
    config: LintConfig | None = None,
    *,
    scopes: set[Scope] | None = None,
    strict: bool | None = None,
) -> LintReport:
    """Run all enabled rules over a registry.

    Args:
        registry: Documents to check. References resolve against all of it.
        config: Rule selection and severity overrides.
        scopes: Only report on documents from these scopes (default: all).
        strict: Override ``config.strict``.

    Returns:
        The lint report.
    """
    config = config or LintConfig()
    ctx = LintContext(registry=registry, languages=config.language_map())
    documents = [
        doc for doc in registry.all_documents() if scopes is None or doc.scope in scopes
    ]
    paths = {doc.path for doc in documents}

    diagnostics: list[Diagnostic] = []
    for rule in RULES:
        if not config.is_enabled(rule.id):
            logger.debug("Rule %s disabled", rule.id)
            continue
        severity = config.severity_for(rule.id, rule.severity)

        if rule.per_document:
            for document in documents:
                for line, message in rule.check(document, ctx):
                    diagnostics.append(
                        Diagnostic(rule.id, severity, document.path, line, message)
                    )
        else:
            for path, line, message in rule.check(ctx):
                if scopes is None or path in paths:
                    diagnostics.append(Diagnostic(rule.id, severity, path, line, message))

    return LintReport(
        diagnostics=diagnostics,
        documents_checked=len(documents),
        strict=config.strict if strict is None else strict,
    )


__all__ = [
    "Diagnostic",
    "LintConfig",
    "LintContext",
    "LintReport",
    "RULES",
    "RULE_IDS",
    "Rule",
    "lint",
    "load_lint_config",
]
