"""Command-line entry point for agentdocs."""

import argparse
import sys

from rich.markup import escape

from agentdocs.commands import execute_document_command, setup_document_parsers
from agentdocs.config import COLORS, VERSION, console, setup_logging
from agentdocs.errors import AgentDocsError, ErrorHandler
from agentdocs.lint.commands import execute_lint_command, setup_lint_parser


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="agentdocs",
        description="Browse, validate and install agent command, agent and skill documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    setup_document_parsers(subparsers)
    setup_lint_parser(subparsers)

    parser.add_argument(
        "--project",
        metavar="DIR",
        help="Detect the project starting from DIR instead of the current directory",
    )
    parser.add_argument(
        "--no-builtin",
        action="store_true",
        help="Do not load the documents shipped with agentdocs",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"agentdocs {VERSION}",
        help="Show the version number and exit",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code instead of exiting."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command is None:
        build_parser().print_help()
        return 0

    try:
        if args.command == "lint":
            return execute_lint_command(args)
        return execute_document_command(args)
    except (AgentDocsError, OSError, UnicodeDecodeError) as e:
        result = ErrorHandler().handle(e)
        console.print(f"[bold red]Error:[/bold red] {escape(result.message)}", highlight=False)
        if result.suggestion:
            console.print(result.suggestion, style=COLORS["dim"], markup=False)
        return result.exit_code


def cli_main() -> None:
    """Entry point for console script."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        # Clean exit on Ctrl+C - suppress ugly traceback
        console.print("\n\n[yellow]Interrupted[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    cli_main()
