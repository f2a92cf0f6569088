"""Copying corpus documents into a project or user directory."""

import logging
import re
import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from agentdocs.errors import InstallError
from agentdocs.loader import Registry
from agentdocs.models import Document, DocumentKind

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def _validate_name(name: str) -> tuple[bool, str]:
    """Validate an identifier to prevent path traversal.

    Args:
        name: The identifier to validate

    Returns:
        Tuple of (is_valid, error_message). If valid, error_message is empty.
    """
    if not name or not name.strip():
        return False, "cannot be empty"

    if not re.fullmatch(r"[a-zA-Z0-9_-]+", name):
        return False, "name can only contain letters, numbers, hyphens, and underscores"

    return True, ""


def _validate_target_path(path: Path, base_dir: Path) -> tuple[bool, str]:
    """Validate that a destination path resolves inside the base directory."""
    try:
        if not path.resolve().is_relative_to(base_dir.resolve()):
            return False, f"Destination must be within {base_dir}"
        return True, ""
    except (OSError, RuntimeError) as e:
        return False, f"Invalid path: {e}"


def plan_install(
    registry: Registry,
    target_dir: Path,
    kinds: Iterable[DocumentKind] | None = None,
) -> list[tuple[Document, Path]]:
    """Work out where each selected document would be written.

    Raises:
        InstallError: If an identifier or destination is unsafe.
    """
    selected = set(kinds) if kinds else set(DocumentKind)
    plan = []
    for document in registry.list_documents():
        if document.kind not in selected:
            continue
        is_valid, error = _validate_name(document.identifier)
        if not is_valid:
            msg = f"Cannot install {document.qualified_name}: {error}"
            raise InstallError(msg)
        destination = target_dir / document.relative_path()
        is_valid, error = _validate_target_path(destination, target_dir)
        if not is_valid:
            raise InstallError(error)
        plan.append((document, destination))
    return plan


def install(
    registry: Registry,
    target_dir: Path,
    kinds: Iterable[DocumentKind] | None = None,
    overwrite: bool = False,
) -> InstallResult:
    """Copy documents into ``target_dir`` using the corpus layout.

    Existing files are left alone unless ``overwrite`` is set. A document that
    already lives at its destination is skipped.

    Args:
        registry: Source documents.
        target_dir: Directory receiving commands/, agents/ and skills/.
        kinds: Restrict to these document kinds (default: all).
        overwrite: Replace existing files.

    Returns:
        Paths written and skipped.
    """
    result = InstallResult()
    for document, destination in plan_install(registry, target_dir, kinds):
        if destination.exists() and (
            not overwrite or destination.resolve() == document.path.resolve()
        ):
            result.skipped.append(destination)
            continue
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(document.path, destination)
        logger.debug("Installed %s -> %s", document.path, destination)
        result.written.append(destination)
    return result
