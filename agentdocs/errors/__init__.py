"""Error handling for agentdocs."""

from agentdocs.errors.handlers import ErrorHandler, RecoveryResult
from agentdocs.errors.taxonomy import (
    AgentDocsError,
    AmbiguousReferenceError,
    ClassifiedError,
    ConfigError,
    DocumentKindError,
    DocumentNotFoundError,
    ErrorCategory,
    FrontmatterError,
    InstallError,
)

__all__ = [
    "AgentDocsError",
    "AmbiguousReferenceError",
    "ClassifiedError",
    "ConfigError",
    "DocumentKindError",
    "DocumentNotFoundError",
    "ErrorCategory",
    "ErrorHandler",
    "FrontmatterError",
    "InstallError",
    "RecoveryResult",
]
