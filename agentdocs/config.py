"""Configuration, constants and environment detection for agentdocs."""

import logging
import os
import sys
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

import dotenv
from rich.console import Console
from rich.logging import RichHandler

from agentdocs.models import Scope

dotenv.load_dotenv()

VERSION = "0.1.0"

# Color scheme
COLORS = {
    "primary": "#10b981",
    "dim": "#6b7280",
    "accent": "#38bdf8",
    "success": "#22c55e",
    "warning": "#fbbf24",
    "error": "#ef4444",
}

SEVERITY_STYLES = {
    "error": COLORS["error"],
    "warning": COLORS["warning"],
    "info": COLORS["accent"],
}

# Project-level corpus directories, lowest precedence first
PROJECT_CORPUS_DIRS = (".claude", ".agentdocs")

# Rich console instance
# Force UTF-8 encoding on Windows so box-drawing characters render
if sys.platform == "win32":
    import io

    console = Console(
        highlight=False, file=io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")
    )
else:
    console = Console(highlight=False)

logger = logging.getLogger("agentdocs")


def setup_logging(verbose: bool = False) -> None:
    """Route the ``agentdocs`` logger through rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True, highlight=False),
            show_time=False,
            show_path=verbose,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def _find_project_root(start_path: Path | None = None) -> Path | None:
    """Find the project root by looking for project markers.

    Walks up the directory tree from start_path (or cwd) looking for a .git
    directory, a .claude/ directory or a .agentdocs/ directory.

    Args:
        start_path: Directory to start searching from. Defaults to current working directory.

    Returns:
        Path to the project root if found, None otherwise.
    """
    current = Path(start_path or Path.cwd()).resolve()

    for parent in [current, *list(current.parents)]:
        if (parent / ".git").exists():
            return parent
        for name in PROJECT_CORPUS_DIRS:
            if (parent / name).is_dir():
                return parent

    return None


def builtin_corpus_dir() -> Path:
    """Return the directory of the corpus shipped with the package."""
    return Path(str(resources.files("agentdocs") / "corpus"))


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Environment detection for agentdocs.

    Attributes:
        home_dir: User-level corpus directory (``AGENTDOCS_HOME``, default ~/.agentdocs)
        project_root: Current project root directory (if any)
        include_builtin: Whether the packaged corpus is loaded
    """

    home_dir: Path
    project_root: Path | None
    include_builtin: bool = True

    @classmethod
    def from_environment(cls, *, start_path: Path | None = None) -> "Settings":
        """Create settings by detecting the current environment.

        Args:
            start_path: Directory to start project detection from (defaults to cwd)

        Returns:
            Settings instance with detected configuration
        """
        home = os.environ.get("AGENTDOCS_HOME")
        home_dir = Path(home).expanduser() if home else Path.home() / ".agentdocs"

        return cls(
            home_dir=home_dir,
            project_root=_find_project_root(start_path),
            include_builtin=not _env_flag("AGENTDOCS_NO_BUILTIN"),
        )

    @property
    def has_project(self) -> bool:
        """Check if currently in a project."""
        return self.project_root is not None

    def get_project_corpus_dirs(self) -> list[Path]:
        """Get existing project-level corpus directories (.claude/, .agentdocs/).

        Returns:
            List of existing directories, lowest precedence first
        """
        if not self.project_root:
            return []
        dirs = []
        for name in PROJECT_CORPUS_DIRS:
            candidate = self.project_root / name
            if candidate.is_dir():
                dirs.append(candidate)
        return dirs

    def get_lint_config_path(self) -> Path | None:
        """Get the project lint configuration path, if a project is detected."""
        if not self.project_root:
            return None
        return self.project_root / ".agentdocs" / "lint.json"

    def get_install_dir(self) -> Path | None:
        """Default installation target: <project>/.claude"""
        if not self.project_root:
            return None
        return self.project_root / ".claude"

    def corpus_roots(self) -> list[tuple[Path, Scope]]:
        """Corpus roots to load, lowest precedence first.

        Returns:
            List of (directory, scope) pairs. Directories may not exist.
        """
        roots: list[tuple[Path, Scope]] = []
        if self.include_builtin:
            roots.append((builtin_corpus_dir(), Scope.BUILTIN))
        roots.append((self.home_dir, Scope.USER))
        roots.extend((path, Scope.PROJECT) for path in self.get_project_corpus_dirs())
        return roots
