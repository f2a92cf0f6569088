"""Discovery of corpus documents and the layered document registry."""

import difflib
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from agentdocs.config import Settings
from agentdocs.errors import (
    AmbiguousReferenceError,
    DocumentNotFoundError,
    FrontmatterError,
)
from agentdocs.frontmatter import load_block, normalize_text, split_frontmatter
from agentdocs.markdown import (
    extract_code_blocks,
    extract_headings,
    extract_references,
    parse_document_path,
)
from agentdocs.models import Document, DocumentKind, Scope

logger = logging.getLogger(__name__)

# Glob pattern per kind, relative to a corpus root
KIND_PATTERNS = (
    (DocumentKind.COMMAND, "commands/*.md"),
    (DocumentKind.AGENT, "agents/*.md"),
    (DocumentKind.SKILL, "skills/*/SKILL.md"),
)

_KIND_ORDER = {kind: index for index, (kind, _) in enumerate(KIND_PATTERNS)}

_KIND_PREFIXES = {
    "command": DocumentKind.COMMAND,
    "commands": DocumentKind.COMMAND,
    "agent": DocumentKind.AGENT,
    "agents": DocumentKind.AGENT,
    "skill": DocumentKind.SKILL,
    "skills": DocumentKind.SKILL,
}


def load_document(path: Path, kind: DocumentKind, scope: Scope) -> Document:
    """Read a single document from disk.

    Front-matter errors do not abort loading: the document is returned with
    empty metadata and the error stored on ``frontmatter_error``. Bytes that
    are not UTF-8 are replaced and reported on ``encoding_error``.

    Args:
        path: Path to the markdown file.
        kind: Kind of document.
        scope: Layer the document belongs to.

    Returns:
        The loaded Document.
    """
    raw = path.read_bytes()
    encoding_error: tuple[int, str] | None = None
    try:
        decoded = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        decoded = raw.decode("utf-8", errors="replace")
        line = raw[: e.start].count(b"\n") + 1
        encoding_error = (line, f"File is not valid UTF-8 ({e.reason} at byte {e.start})")
        logger.debug("Undecodable bytes in %s: %s", path, e)
    text = normalize_text(decoded)
    identifier = path.parent.name if kind == DocumentKind.SKILL else path.stem

    metadata: dict = {}
    error: FrontmatterError | None = None
    try:
        block, body, body_line = split_frontmatter(text)
    except FrontmatterError as e:
        error = e
        block, body, body_line = None, text, 1
        has_frontmatter = True
    else:
        has_frontmatter = block is not None
        if block is not None:
            try:
                metadata = load_block(block)
            except FrontmatterError as e:
                error = e

    if error is not None:
        error.path = path
        logger.debug("Front-matter error in %s: %s", path, error)

    return Document(
        kind=kind,
        identifier=identifier,
        path=path,
        scope=scope,
        text=text,
        body=body,
        metadata=metadata,
        has_frontmatter=has_frontmatter,
        body_line=body_line,
        frontmatter_error=error,
        encoding_error=encoding_error,
        code_blocks=extract_code_blocks(body, body_line),
        references=extract_references(body, body_line),
        headings=extract_headings(body, body_line),
    )


def discover(root: Path, scope: Scope) -> Iterator[Document]:
    """Yield every command, agent and skill document under a corpus root.

    Missing roots and missing kind subdirectories are skipped.
    """
    if not root.is_dir():
        logger.debug("Corpus root %s does not exist, skipping", root)
        return

    for kind, pattern in KIND_PATTERNS:
        for path in sorted(root.glob(pattern)):
            if path.is_file():
                yield load_document(path, kind, scope)


class Registry:
    """Documents keyed by (kind, identifier), built from ordered layers.

    A later layer overrides an earlier one; overridden documents are kept in
    ``shadowed``. Two documents with the same key inside one layer are
    recorded in ``duplicates`` and the later one wins.
    """

    def __init__(self) -> None:
        self._documents: dict[tuple[DocumentKind, str], Document] = {}
        self.shadowed: list[Document] = []
        self.duplicates: list[tuple[Document, Document]] = []

    def add_layer(self, documents: Iterable[Document]) -> None:
        """Add a precedence layer of documents."""
        layer: dict[tuple[DocumentKind, str], Document] = {}
        for document in documents:
            if document.key in layer:
                self.duplicates.append((layer[document.key], document))
                logger.debug(
                    "Duplicate %s '%s' in %s and %s",
                    document.kind.value,
                    document.identifier,
                    layer[document.key].path,
                    document.path,
                )
            layer[document.key] = document

        for key, document in layer.items():
            existing = self._documents.get(key)
            if existing is not None:
                self.shadowed.append(existing)
                logger.debug("%s overrides %s", document.path, existing.path)
            self._documents[key] = document

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.list_documents())

    def __contains__(self, key: object) -> bool:
        return key in self._documents

    def get(self, kind: DocumentKind, identifier: str) -> Document | None:
        return self._documents.get((kind, identifier))

    def list_documents(
        self, kind: DocumentKind | None = None, scope: Scope | None = None
    ) -> list[Document]:
        """List documents sorted by kind then identifier, optionally filtered."""
        documents = [
            doc
            for doc in self._documents.values()
            if (kind is None or doc.kind == kind)
            and (scope is None or doc.scope == scope)
        ]
        return sorted(documents, key=lambda d: (_KIND_ORDER[d.kind], d.identifier))

    def all_documents(self) -> list[Document]:
        """Active documents plus the losing copies of in-layer duplicates.

        Documents overridden by a later layer are not included.
        """
        documents = self.list_documents()
        documents.extend(first for first, _ in self.duplicates)
        return documents

    def find(self, name: str) -> Document:
        """Resolve a user-supplied name to a document.

        Accepts ``/rust-test``, ``rust-reviewer``, ``skill:rust-patterns`` and
        corpus paths such as ``agents/rust-reviewer.md``.

        Raises:
            DocumentNotFoundError: If nothing matches.
            AmbiguousReferenceError: If a bare name matches several kinds.
        """
        name = name.strip()

        if name.startswith("/"):
            return self._require(DocumentKind.COMMAND, name[1:], name)

        parsed = parse_document_path(name)
        if parsed is not None:
            return self._require(parsed[0], parsed[1], name)

        prefix, sep, rest = name.partition(":")
        if sep and prefix.lower() in _KIND_PREFIXES:
            return self._require(_KIND_PREFIXES[prefix.lower()], rest.strip(), name)

        matches = [
            doc for kind, _ in KIND_PATTERNS if (doc := self.get(kind, name)) is not None
        ]
        if len(matches) == 1:
            return matches[0]
        if matches:
            raise AmbiguousReferenceError(name, [doc.qualified_name for doc in matches])
        raise DocumentNotFoundError(name, self._suggest(name))

    def _require(self, kind: DocumentKind, identifier: str, name: str) -> Document:
        document = self.get(kind, identifier)
        if document is None:
            raise DocumentNotFoundError(name, self._suggest(identifier, kind))
        return document

    def _suggest(self, name: str, kind: DocumentKind | None = None) -> list[str]:
        candidates = {doc.identifier: doc.display_name for doc in self.list_documents(kind)}
        close = difflib.get_close_matches(name.lstrip("/"), list(candidates), n=3)
        return [candidates[match] for match in close]


def build_registry(
    settings: Settings, extra_roots: Iterable[Path] | None = None
) -> Registry:
    """Load all corpus layers described by the settings.

    Args:
        settings: Environment settings.
        extra_roots: Additional corpus roots loaded with project precedence,
            after the detected project directories.

    Returns:
        Populated registry.
    """
    roots = settings.corpus_roots()
    roots.extend((Path(root), Scope.PROJECT) for root in extra_roots or [])

    registry = Registry()
    for scope in Scope:
        layer: list[Document] = []
        for root, root_scope in roots:
            if root_scope == scope:
                layer.extend(discover(root, scope))
        registry.add_layer(layer)

    logger.debug("Loaded %d documents from %d roots", len(registry), len(roots))
    return registry
