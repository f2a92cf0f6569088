"""Error classification and presentation for the agentdocs CLI."""

from dataclasses import dataclass
from typing import Protocol

from agentdocs.errors.taxonomy import AgentDocsError, ClassifiedError, ErrorCategory


@dataclass
class RecoveryResult:
    """What the CLI should tell the user about a failure.

    Attributes:
        message: Human-readable description of the failure
        suggestion: Optional suggestion for user action
        exit_code: Process exit code to use
    """

    message: str
    suggestion: str | None = None
    exit_code: int = 1


class ErrorRecoveryStrategy(Protocol):
    """Protocol for error presentation strategies."""

    def can_handle(self, error: ClassifiedError) -> bool:
        """Check if this strategy can handle the error."""
        ...

    def recover(self, error: ClassifiedError) -> RecoveryResult:
        """Build the result shown to the user."""
        ...


class FileNotFoundRecovery:
    """Point the user at the missing path."""

    def can_handle(self, error: ClassifiedError) -> bool:
        return error.category == ErrorCategory.FILE_NOT_FOUND

    def recover(self, error: ClassifiedError) -> RecoveryResult:
        file_name = error.context.get("file_name") or getattr(
            error.original_error, "filename", None
        )
        if not file_name:
            return RecoveryResult(
                message=error.user_message,
                suggestion="Please check the path and try again.",
            )
        return RecoveryResult(
            message=f"File not found: {file_name}",
            suggestion="Check the --root / --project arguments or run from the project root.",
        )


class PermissionDeniedRecovery:
    """Suggest checking permissions on the offending path."""

    def can_handle(self, error: ClassifiedError) -> bool:
        return error.category == ErrorCategory.PERMISSION_DENIED

    def recover(self, error: ClassifiedError) -> RecoveryResult:
        file_path = getattr(error.original_error, "filename", None) or ""
        return RecoveryResult(
            message=f"Permission denied: {file_path}",
            suggestion=f"Check file permissions: `ls -la {file_path}`",
        )


class NotFoundRecovery:
    """Offer close matches for unknown document names."""

    def can_handle(self, error: ClassifiedError) -> bool:
        return error.category == ErrorCategory.NOT_FOUND

    def recover(self, error: ClassifiedError) -> RecoveryResult:
        suggestion = error.suggestion or "Run 'agentdocs list' to see available documents."
        return RecoveryResult(message=error.user_message, suggestion=suggestion)


class ErrorHandler:
    """Central error handler used by the CLI entry point.

    Library code raises; this turns an exception into a message, an
    optional suggestion and an exit code.
    """

    def __init__(self) -> None:
        self.strategies: list[ErrorRecoveryStrategy] = [
            FileNotFoundRecovery(),
            PermissionDeniedRecovery(),
            NotFoundRecovery(),
        ]

    def classify_error(
        self, error: Exception, context: dict | None = None
    ) -> ClassifiedError:
        """Classify an error into a category.

        Args:
            error: The exception to classify
            context: Optional additional context about the error

        Returns:
            ClassifiedError with category and presentation info
        """
        context = context or {}

        if isinstance(error, AgentDocsError):
            return ClassifiedError(
                category=error.category,
                original_error=error,
                user_message=error.user_message,
                suggestion=error.suggestion,
                context=context,
            )

        if isinstance(error, FileNotFoundError):
            return ClassifiedError(
                category=ErrorCategory.FILE_NOT_FOUND,
                original_error=error,
                user_message=f"File not found: {error.filename or error}",
                context=context,
            )

        if isinstance(error, PermissionError):
            return ClassifiedError(
                category=ErrorCategory.PERMISSION_DENIED,
                original_error=error,
                user_message="Permission denied.",
                context=context,
            )

        if isinstance(error, UnicodeDecodeError):
            return ClassifiedError(
                category=ErrorCategory.SYNTAX_ERROR,
                original_error=error,
                user_message=f"File is not valid UTF-8: {error.reason}",
                suggestion="Documents must be saved as UTF-8 text.",
                context=context,
            )

        return ClassifiedError(
            category=ErrorCategory.SYSTEM_ERROR,
            original_error=error,
            user_message=f"Unexpected error: {error}",
            context=context,
        )

    def handle(self, error: Exception, context: dict | None = None) -> RecoveryResult:
        """Pick the presentation for an error.

        Args:
            error: The exception to handle
            context: Optional additional context about the error

        Returns:
            Result describing what to show and which exit code to use
        """
        classified = self.classify_error(error, context)

        for strategy in self.strategies:
            if strategy.can_handle(classified):
                return strategy.recover(classified)

        return RecoveryResult(
            message=classified.user_message,
            suggestion=classified.suggestion,
        )
