"""CLI command for linting the corpus.

Registered with the CLI via main.py:
- agentdocs lint [--root DIR ...] [--format text|json] [--strict] [--config FILE]
"""

import argparse
import json
from itertools import chain
from pathlib import Path
from typing import Any

from rich.markup import escape

from agentdocs.commands import load_settings
from agentdocs.config import COLORS, SEVERITY_STYLES, builtin_corpus_dir, console
from agentdocs.lint import LintReport, lint, load_lint_config
from agentdocs.lint.rules import RULES
from agentdocs.loader import Registry, build_registry, discover
from agentdocs.models import Scope


def _registry_for_roots(roots: list[Path], include_builtin: bool) -> Registry:
    """Registry of explicit roots, optionally layered over the builtin corpus."""
    registry = Registry()
    if include_builtin:
        registry.add_layer(discover(builtin_corpus_dir(), Scope.BUILTIN))
    registry.add_layer(chain.from_iterable(discover(root, Scope.PROJECT) for root in roots))
    return registry


def print_report(report: LintReport) -> None:
    """Print diagnostics grouped by file, then a summary line."""
    for path, diagnostics in report.by_path().items():
        console.print(f"\n[bold]{escape(str(path))}[/bold]")
        for diagnostic in diagnostics:
            color = SEVERITY_STYLES[diagnostic.severity]
            line = str(diagnostic.line) if diagnostic.line is not None else "-"
            console.print(
                f"  [dim]{line:>4}[/dim]  [{color}]{diagnostic.severity:<7}[/{color}] "
                f"[dim]{diagnostic.rule:<24}[/dim] {escape(diagnostic.message)}",
                highlight=False,
            )

    summary = (
        f"{report.documents_checked} document(s) checked: "
        f"{report.error_count} error(s), {report.warning_count} warning(s), "
        f"{report.info_count} info"
    )
    if report.ok:
        console.print(f"\n✓ {summary}", style=COLORS["primary"])
    else:
        console.print(f"\n[bold red]✗[/bold red] {summary}")


def _list_rules() -> int:
    for rule in RULES:
        color = SEVERITY_STYLES[rule.severity]
        console.print(
            f"  [bold]{rule.id:<24}[/bold] [{color}]{rule.severity:<7}[/{color}] "
            f"[dim]{rule.description}[/dim]"
        )
    return 0


def setup_lint_parser(subparsers: Any) -> argparse.ArgumentParser:
    """Setup the lint subcommand parser."""
    lint_parser = subparsers.add_parser(
        "lint",
        help="Check documents for integrity problems",
        description=(
            "Check front-matter, cross-references, code blocks and empty files. "
            "Exits with status 1 when errors are found."
        ),
    )
    lint_parser.add_argument(
        "--root",
        action="append",
        dest="roots",
        metavar="DIR",
        help="Lint this corpus directory instead of the detected ones (repeatable)",
    )
    lint_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    lint_parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat warnings as errors",
    )
    lint_parser.add_argument(
        "--config",
        metavar="FILE",
        help="Lint configuration file (default: <project>/.agentdocs/lint.json)",
    )
    lint_parser.add_argument(
        "--scope",
        action="append",
        dest="scopes",
        choices=[scope.value for scope in Scope],
        help="Only report on documents from this scope (repeatable)",
    )
    lint_parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List available rules and exit",
    )
    return lint_parser


def execute_lint_command(args: argparse.Namespace) -> int:
    """Run the linter and print the report.

    Returns:
        0 when the report is ok, 1 otherwise
    """
    if args.list_rules:
        return _list_rules()

    settings = load_settings(args)
    if args.config:
        config_path = Path(args.config).expanduser()
        if not config_path.is_file():
            raise FileNotFoundError(2, "No such file", str(config_path))
    else:
        config_path = settings.get_lint_config_path()
    config = load_lint_config(config_path)

    scopes = {Scope(value) for value in args.scopes} if args.scopes else None
    if args.roots:
        roots = [Path(root).expanduser() for root in args.roots]
        missing = [root for root in roots if not root.is_dir()]
        if missing:
            raise FileNotFoundError(2, "No such directory", str(missing[0]))
        registry = _registry_for_roots(roots, settings.include_builtin)
        scopes = scopes or {Scope.PROJECT}
    else:
        registry = build_registry(settings)

    report = lint(registry, config, scopes=scopes, strict=args.strict)

    if args.format == "json":
        console.print_json(json.dumps(report.to_dict()))
    else:
        print_report(report)
    return 0 if report.ok else 1


__all__ = ["execute_lint_command", "print_report", "setup_lint_parser"]
