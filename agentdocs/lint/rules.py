"""Integrity rules applied to corpus documents.

Every rule has an id, a default severity and a check function. Document rules
look at one document at a time; registry rules look at the whole registry.
"""

import difflib
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pydantic import ValidationError

from agentdocs.loader import Registry
from agentdocs.models import (
    DEFAULT_LANGUAGES,
    METADATA_SCHEMAS,
    Document,
    DocumentKind,
    known_keys,
)

Severity = Literal["error", "warning", "info"]

# (line, message)
Finding = tuple[int | None, str]


@dataclass
class LintContext:
    """State shared by all rules during one lint run."""

    registry: Registry
    languages: dict[str, list[str]] = field(
        default_factory=lambda: dict(DEFAULT_LANGUAGES)
    )

    def languages_for(self, identifier: str) -> list[str]:
        """Languages a document is expected to show, from its identifier prefix."""
        prefix = identifier.split("-", 1)[0].lower()
        return self.languages.get(prefix, [])


@dataclass(frozen=True)
class Rule:
    id: str
    severity: Severity
    description: str
    check: Callable[..., Iterator]
    per_document: bool = True


def _key_line(document: Document, key: str) -> int:
    """Line of a front-matter key, or 1 if it cannot be located."""
    pattern = re.compile(rf"^{re.escape(key)}\s*:")
    lines = document.text.split("\n")
    for index in range(1, max(document.body_line - 2, 1)):
        if index < len(lines) and pattern.match(lines[index]):
            return index + 1
    return 1


def check_empty_file(document: Document, ctx: LintContext) -> Iterator[Finding]:
    if not document.text.strip():
        yield 1, "File is empty"
    elif document.frontmatter_error is None and document.is_empty:
        yield document.body_line, "Document has front-matter but no body"


def check_encoding(document: Document, ctx: LintContext) -> Iterator[Finding]:
    if document.encoding_error is not None:
        yield document.encoding_error


def check_frontmatter_syntax(document: Document, ctx: LintContext) -> Iterator[Finding]:
    error = document.frontmatter_error
    if error is not None:
        yield error.line, str(error)


def check_frontmatter_missing(document: Document, ctx: LintContext) -> Iterator[Finding]:
    if document.text.strip() and not document.has_frontmatter:
        yield 1, f"{document.kind.value.title()} file has no front-matter block"


def check_frontmatter_schema(document: Document, ctx: LintContext) -> Iterator[Finding]:
    if not document.has_frontmatter or document.frontmatter_error is not None:
        return
    schema = METADATA_SCHEMAS[document.kind]
    try:
        schema.model_validate(document.metadata)
    except ValidationError as e:
        for error in e.errors():
            loc = ".".join(str(part) for part in error["loc"]) or "front-matter"
            key = str(error["loc"][0]) if error["loc"] else ""
            line = _key_line(document, key) if key in document.metadata else 1
            yield line, f"'{loc}': {error['msg']}"


def check_unknown_keys(document: Document, ctx: LintContext) -> Iterator[Finding]:
    allowed = known_keys(document.kind)
    for key in document.metadata:
        if key not in allowed:
            expected = ", ".join(sorted(allowed))
            yield _key_line(document, key), f"Unknown front-matter key '{key}' (expected one of: {expected})"


def check_name_mismatch(document: Document, ctx: LintContext) -> Iterator[Finding]:
    if document.kind == DocumentKind.COMMAND:
        return
    name = document.metadata.get("name")
    if isinstance(name, str) and name and name != document.identifier:
        location = document.relative_path()
        yield _key_line(document, "name"), f"name '{name}' does not match '{location}'"


def check_dangling_references(document: Document, ctx: LintContext) -> Iterator[Finding]:
    for reference in document.references:
        if reference.key in ctx.registry:
            continue
        message = f"Referenced {reference.kind.value} '{reference.target}' does not exist"
        known = [doc.identifier for doc in ctx.registry.list_documents(reference.kind)]
        close = difflib.get_close_matches(reference.target, known, n=1)
        if close:
            message += f" (did you mean '{close[0]}'?)"
        yield reference.line, message


def check_missing_code_block(document: Document, ctx: LintContext) -> Iterator[Finding]:
    if document.kind == DocumentKind.COMMAND and not document.is_empty and not document.code_blocks:
        yield document.body_line, "Command file has no example code block"


def check_language_mismatch(document: Document, ctx: LintContext) -> Iterator[Finding]:
    if document.kind != DocumentKind.COMMAND or not document.code_blocks:
        return
    expected = ctx.languages_for(document.identifier)
    if not expected:
        return
    found = document.languages
    if not any(language in expected for language in found):
        shown = ", ".join(found) if found else "no language"
        yield (
            document.code_blocks[0].line,
            f"Expected a {' or '.join(expected)} code block, found {shown}",
        )


def check_unclosed_code_blocks(document: Document, ctx: LintContext) -> Iterator[Finding]:
    for block in document.code_blocks:
        if block.unclosed:
            yield block.line, "Code fence opened here is never closed"


def check_missing_heading(document: Document, ctx: LintContext) -> Iterator[Finding]:
    if not document.is_empty and not document.headings:
        yield document.body_line, "Document has no markdown heading"


def check_duplicates(ctx: LintContext) -> Iterator[tuple[Path, int | None, str]]:
    for first, second in ctx.registry.duplicates:
        yield (
            second.path,
            1,
            f"Duplicate {second.kind.value} '{second.identifier}' (also defined in {first.path})",
        )


def check_unused_skills(ctx: LintContext) -> Iterator[tuple[Path, int | None, str]]:
    referenced = {
        reference.target
        for document in ctx.registry.list_documents()
        if document.kind != DocumentKind.SKILL
        for reference in document.references
        if reference.kind == DocumentKind.SKILL
    }
    for skill in ctx.registry.list_documents(DocumentKind.SKILL):
        if skill.identifier not in referenced:
            yield skill.path, None, f"Skill '{skill.identifier}' is not referenced by any command or agent"


RULES: tuple[Rule, ...] = (
    Rule("empty-file", "error", "File has no content", check_empty_file),
    Rule("invalid-encoding", "error", "File is not valid UTF-8", check_encoding),
    Rule("frontmatter-syntax", "error", "Front-matter does not parse", check_frontmatter_syntax),
    Rule("frontmatter-missing", "error", "Document has no front-matter", check_frontmatter_missing),
    Rule("frontmatter-schema", "error", "Front-matter fails its schema", check_frontmatter_schema),
    Rule("frontmatter-unknown-key", "warning", "Unrecognised front-matter key", check_unknown_keys),
    Rule("name-mismatch", "error", "name differs from the file identifier", check_name_mismatch),
    Rule("dangling-reference", "error", "Cross-reference target is missing", check_dangling_references),
    Rule("missing-code-block", "error", "Command without example code", check_missing_code_block),
    Rule("language-mismatch", "error", "Command code is not in its language", check_language_mismatch),
    Rule("unclosed-code-block", "error", "Code fence never closed", check_unclosed_code_blocks),
    Rule("missing-heading", "warning", "Body has no heading", check_missing_heading),
    Rule("duplicate-identifier", "error", "Identifier defined twice in one layer", check_duplicates, per_document=False),
    Rule("unused-skill", "info", "Skill never referenced", check_unused_skills, per_document=False),
)

RULE_IDS = frozenset(rule.id for rule in RULES)
