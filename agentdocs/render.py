"""Expansion of command templates and their supporting context."""

import re
import shlex

from agentdocs.errors import DocumentKindError
from agentdocs.loader import Registry
from agentdocs.models import Document, DocumentKind

ARGUMENTS_PLACEHOLDER = "$ARGUMENTS"

# $ARGUMENTS or a single-digit positional placeholder
_PLACEHOLDER = re.compile(re.escape(ARGUMENTS_PLACEHOLDER) + r"|\$([1-9])(?!\d)")


def split_arguments(arguments: str) -> list[str]:
    """Split an argument string like a shell would, tolerating bad quoting."""
    try:
        return shlex.split(arguments)
    except ValueError:
        return arguments.split()


def render_command(document: Document, arguments: str = "") -> str:
    """Render a command body for the given argument string.

    ``$ARGUMENTS`` is replaced by the whole argument string and ``$1``..``$9``
    by the individual arguments; missing positions become empty strings.

    Raises:
        DocumentKindError: If the document is not a command.
    """
    if document.kind != DocumentKind.COMMAND:
        msg = f"'{document.identifier}' is a {document.kind.value}, not a command"
        raise DocumentKindError(msg)

    arguments = arguments.strip()
    positional = split_arguments(arguments)

    def _substitute(match: re.Match[str]) -> str:
        if match.group(1) is None:
            return arguments
        index = int(match.group(1)) - 1
        return positional[index] if index < len(positional) else ""

    # Single pass: text inserted from the arguments is never rescanned
    rendered = _PLACEHOLDER.sub(_substitute, document.body)
    return rendered.strip("\n") + "\n"


def resolve_context(registry: Registry, document: Document) -> list[Document]:
    """Collect the agents and skills a document pulls in.

    References are followed depth-first in document order through agents and
    skills. Missing targets are skipped and cycles are cut.
    """
    resolved: list[Document] = []
    visited = {document.key}

    def visit(current: Document) -> None:
        for reference in current.references:
            if reference.kind == DocumentKind.COMMAND or reference.key in visited:
                continue
            visited.add(reference.key)
            target = registry.get(reference.kind, reference.target)
            if target is None:
                continue
            resolved.append(target)
            visit(target)

    visit(document)
    return resolved
