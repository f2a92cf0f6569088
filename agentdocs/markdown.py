"""Scanning helpers for markdown bodies: fences, headings and references."""

import re
from collections.abc import Iterator

from agentdocs.models import CodeBlock, DocumentKind, Heading, Reference

LANGUAGE_ALIASES = {
    "rs": "rust",
    "kt": "kotlin",
    "kts": "kotlin",
    "sh": "bash",
    "shell": "bash",
    "console": "bash",
    "zsh": "bash",
    "yml": "yaml",
}

_FENCE_OPEN = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_HEADING = re.compile(r"^ {0,3}(#{1,6})\s+(.+?)\s*#*\s*$")

# "See skill: `x`", "Agent: `agents/y.md`", "Skills: `a`, `b`"
_LABELLED = re.compile(
    r"\b(?:see\s+)?(?P<label>skill|agent|command)s?:\s*"
    r"(?P<targets>`[^`]+`(?:\s*(?:,|and|or)\s*`[^`]+`)*)",
    re.IGNORECASE,
)
_BACKTICKED = re.compile(r"`([^`]+)`")
_DOC_PATH = re.compile(
    r"(?<![\w./-])(?:\.claude/)?(?:"
    r"(?P<dir>commands|agents)/(?P<name>[A-Za-z0-9_-]+)\.md"
    r"|skills/(?P<skill>[A-Za-z0-9_-]+)/SKILL\.md)"
)
_SLASH_COMMAND = re.compile(r"`/(?P<name>[a-z][a-z0-9_-]*)(?:\s[^`]*)?`")

_LABEL_KINDS = {
    "skill": DocumentKind.SKILL,
    "agent": DocumentKind.AGENT,
    "command": DocumentKind.COMMAND,
}
_DIR_KINDS = {
    "commands": DocumentKind.COMMAND,
    "agents": DocumentKind.AGENT,
}


def normalize_language(info: str) -> str:
    """Map a fence info string to a canonical language name."""
    info = info.strip().lstrip("{").lstrip(".")
    if not info:
        return ""
    word = re.split(r"[\s,{}]", info, maxsplit=1)[0].lower()
    return LANGUAGE_ALIASES.get(word, word)


def extract_code_blocks(body: str, start_line: int = 1) -> list[CodeBlock]:
    """Find fenced code blocks in a markdown body.

    Args:
        body: Markdown text.
        start_line: File line number of the first body line.

    Returns:
        Code blocks in document order. A fence left open at the end of the body
        is returned with ``unclosed=True``.
    """
    blocks: list[CodeBlock] = []
    lines = body.split("\n")
    opened: tuple[str, int, str, int] | None = None
    content: list[str] = []

    for offset, line in enumerate(lines):
        if opened is None:
            match = _FENCE_OPEN.match(line)
            if not match:
                continue
            fence = match.group("fence")
            info = match.group("info").strip()
            # A backtick fence's info string may not contain backticks
            if fence[0] == "`" and "`" in info:
                continue
            opened = (fence[0], len(fence), info, start_line + offset)
            content = []
            continue

        char, length, info, line_no = opened
        stripped = line.strip()
        if (
            len(line) - len(line.lstrip(" ")) <= 3
            and stripped
            and set(stripped) == {char}
            and len(stripped) >= length
        ):
            blocks.append(
                CodeBlock(
                    language=normalize_language(info),
                    content="\n".join(content),
                    line=line_no,
                    info=info,
                    end_line=start_line + offset,
                )
            )
            opened = None
        else:
            content.append(line)

    if opened is not None:
        _, _, info, line_no = opened
        blocks.append(
            CodeBlock(
                language=normalize_language(info),
                content="\n".join(content),
                line=line_no,
                info=info,
                unclosed=True,
                end_line=start_line + len(lines) - 1,
            )
        )
    return blocks


def iter_prose_lines(body: str, start_line: int = 1) -> Iterator[tuple[int, str]]:
    """Yield (line number, text) for body lines outside fenced code blocks."""
    fenced = set()
    for block in extract_code_blocks(body, start_line):
        fenced.update(range(block.line, block.end_line + 1))

    for offset, line in enumerate(body.split("\n")):
        line_no = start_line + offset
        if line_no not in fenced:
            yield line_no, line


def extract_headings(body: str, start_line: int = 1) -> list[Heading]:
    """Return ATX headings found outside code blocks."""
    headings = []
    for line_no, line in iter_prose_lines(body, start_line):
        match = _HEADING.match(line)
        if match:
            headings.append(
                Heading(level=len(match.group(1)), title=match.group(2), line=line_no)
            )
    return headings


def _normalize_target(kind: DocumentKind, target: str) -> str:
    target = target.strip()
    match = _DOC_PATH.search(target)
    if match:
        return match.group("name") or match.group("skill")
    if kind == DocumentKind.COMMAND:
        parts = target.lstrip("/").split()
        return parts[0] if parts else ""
    return target


def extract_references(body: str, start_line: int = 1) -> list[Reference]:
    """Find cross-references to other corpus documents.

    Recognises labelled references (``See skill: `x```, ``Agent: `y```),
    corpus paths (``agents/y.md``, ``skills/x/SKILL.md``) and backticked slash
    commands (`` `/rust-test` ``). Text inside fenced code blocks is ignored.
    """
    references: list[Reference] = []
    seen: set[tuple[int, DocumentKind, str]] = set()

    def add(kind: DocumentKind, target: str, line_no: int, raw: str) -> None:
        if not target:
            return
        marker = (line_no, kind, target)
        if marker in seen:
            return
        seen.add(marker)
        references.append(Reference(kind=kind, target=target, line=line_no, raw=raw))

    for line_no, line in iter_prose_lines(body, start_line):
        for match in _LABELLED.finditer(line):
            kind = _LABEL_KINDS[match.group("label").lower()]
            for target in _BACKTICKED.findall(match.group("targets")):
                add(kind, _normalize_target(kind, target), line_no, match.group(0))

        for match in _DOC_PATH.finditer(line):
            if match.group("skill"):
                add(DocumentKind.SKILL, match.group("skill"), line_no, match.group(0))
            else:
                kind = _DIR_KINDS[match.group("dir")]
                add(kind, match.group("name"), line_no, match.group(0))

        for match in _SLASH_COMMAND.finditer(line):
            add(DocumentKind.COMMAND, match.group("name"), line_no, match.group(0))

    return references


def parse_document_path(value: str) -> tuple[DocumentKind, str] | None:
    """Interpret a corpus-relative path such as ``agents/rust-reviewer.md``.

    Returns:
        (kind, identifier) or None if the value is not a corpus path.
    """
    match = _DOC_PATH.search(value.strip())
    if not match:
        return None
    if match.group("skill"):
        return DocumentKind.SKILL, match.group("skill")
    return _DIR_KINDS[match.group("dir")], match.group("name")
