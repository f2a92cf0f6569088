"""YAML front-matter parsing for corpus documents.

A front-matter block is only recognised when the very first line of the file
is ``---``. The block ends at the next ``---`` (or ``...``) line and is parsed
with ``yaml.safe_load``.
"""

from typing import Any

import yaml

from agentdocs.errors import FrontmatterError

_OPEN = "---"
_CLOSE = ("---", "...")


def normalize_text(text: str) -> str:
    """Strip a UTF-8 BOM and normalise line endings."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_frontmatter(text: str) -> tuple[str | None, str, int]:
    """Split raw text into front-matter block and body.

    Args:
        text: Full file content.

    Returns:
        Tuple of (block, body, body_line). ``block`` is None when the file has
        no front-matter. ``body_line`` is the 1-based line number of the first
        body line in the original file.

    Raises:
        FrontmatterError: If the block is opened but never closed.
    """
    text = normalize_text(text)
    lines = text.split("\n")
    if not lines or lines[0].rstrip() != _OPEN:
        return None, text, 1

    for index in range(1, len(lines)):
        if lines[index].rstrip() in _CLOSE:
            block = "\n".join(lines[1:index])
            body = "\n".join(lines[index + 1 :])
            return block, body, index + 2

    msg = "Unterminated front-matter block (missing closing '---')"
    raise FrontmatterError(msg, line=1)


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Parse front-matter metadata and return it together with the body.

    Args:
        text: Full file content.

    Returns:
        Tuple of (metadata, body). Files without front-matter yield ``{}``.

    Raises:
        FrontmatterError: On unterminated blocks, YAML syntax errors, or
            metadata that is not a mapping with string keys.
    """
    block, body, _ = split_frontmatter(text)
    if block is None:
        return {}, body
    return load_block(block), body


def load_block(block: str) -> dict[str, Any]:
    """Parse the inside of a front-matter block.

    Line numbers in raised errors are relative to the file, assuming the block
    starts on line 2 (right after the opening ``---``).
    """
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 2
        problem = getattr(e, "problem", None) or str(e)
        msg = f"Invalid YAML in front-matter: {problem}"
        raise FrontmatterError(msg, line=line) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Front-matter must be a mapping, got {type(data).__name__}"
        raise FrontmatterError(msg, line=2)

    bad_keys = [key for key in data if not isinstance(key, str)]
    if bad_keys:
        msg = f"Front-matter keys must be strings: {bad_keys!r}"
        raise FrontmatterError(msg, line=2)

    return data


def split_tools(value: Any) -> list[str]:
    """Normalise an agent ``tools`` value to a list of tool names.

    Accepts a YAML list or a comma-separated string.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        msg = f"tools must be a list or a comma-separated string, got {type(value).__name__}"
        raise ValueError(msg)
    return [item.strip() for item in items if item.strip()]
