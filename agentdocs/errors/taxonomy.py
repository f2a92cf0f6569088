"""Error taxonomy and exception hierarchy for agentdocs."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ErrorCategory(Enum):
    """Classification of errors for user-facing reporting."""

    USER_ERROR = "user_error"  # Bad CLI input
    FILE_NOT_FOUND = "file_not_found"  # Missing files or directories
    PERMISSION_DENIED = "permission_denied"  # Filesystem permission issues
    SYNTAX_ERROR = "syntax_error"  # Malformed front-matter
    NOT_FOUND = "not_found"  # Unknown document identifier
    CONFIG_ERROR = "config_error"  # Invalid lint configuration
    SYSTEM_ERROR = "system_error"  # Internal errors


class AgentDocsError(Exception):
    """Base class for all errors raised by agentdocs."""

    category = ErrorCategory.SYSTEM_ERROR

    def __init__(self, message: str, *, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.suggestion = suggestion

    @property
    def user_message(self) -> str:
        """Message suitable for printing to the terminal."""
        return str(self)


class FrontmatterError(AgentDocsError):
    """Raised when a front-matter block cannot be parsed."""

    category = ErrorCategory.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.path = path

    @property
    def user_message(self) -> str:
        location = str(self.path) if self.path else "<text>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"{location}: {self}"


class DocumentNotFoundError(AgentDocsError):
    """Raised when a name does not resolve to any document."""

    category = ErrorCategory.NOT_FOUND

    def __init__(self, name: str, suggestions: list[str] | None = None) -> None:
        self.name = name
        self.suggestions = suggestions or []
        hint = None
        if self.suggestions:
            hint = "Did you mean: " + ", ".join(self.suggestions) + "?"
        super().__init__(f"No document named '{name}'", suggestion=hint)


class AmbiguousReferenceError(AgentDocsError):
    """Raised when a bare name matches documents of several kinds."""

    category = ErrorCategory.USER_ERROR

    def __init__(self, name: str, candidates: list[str]) -> None:
        self.name = name
        self.candidates = candidates
        super().__init__(
            f"'{name}' is ambiguous",
            suggestion="Qualify it as one of: " + ", ".join(candidates),
        )


class DocumentKindError(AgentDocsError):
    """Raised when an operation is applied to the wrong kind of document."""

    category = ErrorCategory.USER_ERROR


class ConfigError(AgentDocsError):
    """Raised when lint configuration is malformed."""

    category = ErrorCategory.CONFIG_ERROR


class InstallError(AgentDocsError):
    """Raised when documents cannot be installed into a target directory."""

    category = ErrorCategory.USER_ERROR


@dataclass
class ClassifiedError:
    """An error annotated for presentation.

    Attributes:
        category: The error category
        original_error: The exception that was raised
        user_message: User-friendly error message
        suggestion: Optional hint on how to fix it
        context: Additional context about the error (file paths, etc.)
    """

    category: ErrorCategory
    original_error: Exception
    user_message: str
    suggestion: str | None = None
    context: dict = field(default_factory=dict)
