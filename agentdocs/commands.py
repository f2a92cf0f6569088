"""CLI commands for browsing and installing corpus documents.

These commands are registered with the CLI via main.py:
- agentdocs list [--kind KIND] [--scope SCOPE]
- agentdocs info <name>
- agentdocs show <name> [args...] [--context]
- agentdocs install [--target DIR] [--kind KIND] [--force] [--yes]
"""

import argparse
from pathlib import Path
from typing import Any

from prompt_toolkit import prompt
from rich.markup import escape
from rich.table import Table

from agentdocs.config import COLORS, Settings, console
from agentdocs.errors import InstallError
from agentdocs.install import install, plan_install
from agentdocs.loader import Registry, build_registry
from agentdocs.models import Document, DocumentKind, Scope
from agentdocs.render import render_command, resolve_context

SCOPE_BADGES = {
    Scope.BUILTIN: ("builtin", COLORS["dim"]),
    Scope.USER: ("user", COLORS["accent"]),
    Scope.PROJECT: ("project", COLORS["success"]),
}


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment and global CLI flags."""
    start = Path(args.project) if getattr(args, "project", None) else None
    settings = Settings.from_environment(start_path=start)
    if getattr(args, "no_builtin", False):
        settings.include_builtin = False
    return settings


def load_registry(args: argparse.Namespace) -> tuple[Settings, Registry]:
    settings = load_settings(args)
    return settings, build_registry(settings)


def _scope_label(scope: Scope) -> str:
    label, color = SCOPE_BADGES[scope]
    return f"[{color}]{label}[/{color}]"


def _list(
    registry: Registry, kind: DocumentKind | None = None, scope: Scope | None = None
) -> int:
    """List documents as a table."""
    documents = registry.list_documents(kind, scope)
    if not documents:
        console.print("[yellow]No documents found.[/yellow]")
        console.print(
            "[dim]Add commands/, agents/ or skills/ under .claude/ or ~/.agentdocs/.[/dim]",
            style=COLORS["dim"],
        )
        return 0

    table = Table(show_header=True, header_style=f"bold {COLORS['primary']}")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Scope")
    table.add_column("Description", style=COLORS["dim"])

    for document in documents:
        table.add_row(
            document.display_name,
            document.kind.value,
            _scope_label(document.scope),
            escape(document.description),
        )

    console.print(table)
    console.print(f"[dim]{len(documents)} document(s)[/dim]")
    return 0


def _info(registry: Registry, name: str) -> int:
    """Show metadata, references and code blocks of a document."""
    document = registry.find(name)

    console.print(
        f"\n[bold]{document.display_name}[/bold] "
        f"({document.kind.value}, {_scope_label(document.scope)})\n",
        style=COLORS["primary"],
    )
    if document.description:
        console.print(f"[bold]Description:[/bold] {escape(document.description)}", style=COLORS["dim"])
    console.print(f"[bold]Location:[/bold] {document.path}", style=COLORS["dim"])

    overridden = [doc for doc in registry.shadowed if doc.key == document.key]
    for doc in overridden:
        console.print(f"[bold]Overrides:[/bold] {doc.path}", style=COLORS["dim"])

    if document.frontmatter_error is not None:
        console.print(
            f"[bold red]Front-matter error:[/bold red] {escape(document.frontmatter_error.user_message)}"
        )
    elif document.metadata:
        console.print("\n[bold]Front-matter:[/bold]", style=COLORS["primary"])
        for key, value in document.metadata.items():
            console.print(f"  {key}: {value}", style=COLORS["dim"], markup=False)

    if document.references:
        console.print("\n[bold]References:[/bold]", style=COLORS["primary"])
        for reference in document.references:
            if reference.key in registry:
                mark = f"[{COLORS['success']}]✓[/{COLORS['success']}]"
            else:
                mark = f"[{COLORS['error']}]✗[/{COLORS['error']}]"
            console.print(
                f"  {mark} {reference.kind.value}: {escape(reference.target)} "
                f"[dim](line {reference.line})[/dim]"
            )

    if document.code_blocks:
        languages = ", ".join(block.language or "plain" for block in document.code_blocks)
        console.print(
            f"\n[bold]Code blocks:[/bold] {len(document.code_blocks)} ({languages})",
            style=COLORS["primary"],
        )
    console.print()
    return 0


def _print_document_text(text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _show(registry: Registry, name: str, arguments: list[str], context: bool = False) -> int:
    """Print a rendered command, or the body of an agent or skill."""
    document = registry.find(name)

    if document.kind == DocumentKind.COMMAND:
        _print_document_text(render_command(document, " ".join(arguments)))
    else:
        _print_document_text(document.body.strip("\n"))

    if context:
        for related in resolve_context(registry, document):
            console.rule(f"{related.kind.value}: {related.identifier}", style=COLORS["dim"])
            _print_document_text(related.body.strip("\n"))
    return 0


def _install(
    settings: Settings,
    registry: Registry,
    target: str | None,
    kinds: list[DocumentKind] | None,
    force: bool,
    assume_yes: bool,
) -> int:
    """Copy documents into a project or user directory."""
    target_dir = Path(target).expanduser() if target else settings.get_install_dir()
    if target_dir is None:
        msg = "Not in a project directory"
        raise InstallError(msg, suggestion="Pass --target DIR or run inside a project.")

    if force and not assume_yes:
        existing = [dest for _, dest in plan_install(registry, target_dir, kinds) if dest.exists()]
        if existing:
            console.print(
                f"[yellow]⚠ {len(existing)} file(s) in {target_dir} will be overwritten.[/yellow]"
            )
            confirm = prompt("Continue? [y/N]: ").strip().lower()
            if confirm != "y":
                console.print("Cancelled.", style=COLORS["dim"])
                return 1

    result = install(registry, target_dir, kinds, overwrite=force)

    for path in result.written:
        console.print(f"  ✓ {path}", style=COLORS["primary"])
    for path in result.skipped:
        console.print(f"  - {path} [dim](exists)[/dim]", style=COLORS["dim"])
    console.print(
        f"\nInstalled {len(result.written)} file(s) into {target_dir}"
        + (f", skipped {len(result.skipped)}" if result.skipped else ""),
        style=COLORS["primary"],
    )
    if result.skipped and not force:
        console.print("[dim]Use --force to overwrite existing files.[/dim]")
    return 0


def _kind_arg(value: str) -> DocumentKind:
    try:
        return DocumentKind(value[:-1] if value.endswith("s") else value)
    except ValueError as e:
        msg = f"invalid kind: {value!r} (choose from command, agent, skill)"
        raise argparse.ArgumentTypeError(msg) from e


def setup_document_parsers(subparsers: Any) -> None:
    """Setup the list, info, show and install subcommand parsers."""
    list_parser = subparsers.add_parser(
        "list",
        help="List available commands, agents and skills",
        description="List available commands, agents and skills",
    )
    list_parser.add_argument("--kind", type=_kind_arg, help="Only show one kind")
    list_parser.add_argument(
        "--scope",
        choices=[scope.value for scope in Scope],
        help="Only show documents from one scope",
    )

    info_parser = subparsers.add_parser(
        "info",
        help="Show detailed information about a document",
        description="Show metadata, references and code blocks of a document",
    )
    info_parser.add_argument(
        "name", help="Document name (e.g. /rust-test, rust-reviewer, skill:rust-patterns)"
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print a command rendered with arguments",
        description="Print a command with $ARGUMENTS expanded, or an agent/skill body",
    )
    show_parser.add_argument("name", help="Document name")
    show_parser.add_argument("arguments", nargs=argparse.REMAINDER, help="Command arguments")
    show_parser.add_argument(
        "--context",
        action="store_true",
        help="Also print the agents and skills the document references",
    )

    install_parser = subparsers.add_parser(
        "install",
        help="Copy documents into a project",
        description="Copy documents into <project>/.claude (or --target)",
    )
    install_parser.add_argument("--target", help="Destination directory")
    install_parser.add_argument(
        "--kind",
        type=_kind_arg,
        action="append",
        dest="kinds",
        help="Only install this kind (repeatable)",
    )
    install_parser.add_argument(
        "--force", action="store_true", help="Overwrite existing files"
    )
    install_parser.add_argument(
        "--yes", "-y", action="store_true", help="Do not ask before overwriting"
    )


def execute_document_command(args: argparse.Namespace) -> int:
    """Execute list, info, show or install based on parsed arguments.

    Returns:
        Process exit code
    """
    settings, registry = load_registry(args)

    if args.command == "list":
        scope = Scope(args.scope) if args.scope else None
        return _list(registry, kind=args.kind, scope=scope)
    if args.command == "info":
        return _info(registry, args.name)
    if args.command == "show":
        return _show(registry, args.name, args.arguments, context=args.context)
    if args.command == "install":
        return _install(
            settings,
            registry,
            args.target,
            args.kinds,
            force=args.force,
            assume_yes=args.yes,
        )
    msg = f"Unknown command: {args.command}"
    raise ValueError(msg)


__all__ = [
    "execute_document_command",
    "load_registry",
    "load_settings",
    "setup_document_parsers",
]
