"""Tests for error classification and presentation."""

from pathlib import Path

from agentdocs.errors import (
    AmbiguousReferenceError,
    ConfigError,
    DocumentNotFoundError,
    ErrorCategory,
    ErrorHandler,
    FrontmatterError,
)


class TestExceptions:
    """Test the exception hierarchy."""

    def test_frontmatter_user_message(self) -> None:
        error = FrontmatterError("Invalid YAML", line=3, path=Path("agents/x.md"))
        assert error.user_message == "agents/x.md:3: Invalid YAML"
        assert error.category == ErrorCategory.SYNTAX_ERROR

    def test_frontmatter_without_location(self) -> None:
        assert FrontmatterError("Bad").user_message == "<text>: Bad"

    def test_not_found_suggestion(self) -> None:
        error = DocumentNotFoundError("/rust-tset", ["/rust-test"])
        assert str(error) == "No document named '/rust-tset'"
        assert error.suggestion == "Did you mean: /rust-test?"

    def test_not_found_without_suggestions(self) -> None:
        assert DocumentNotFoundError("zzz").suggestion is None

    def test_ambiguous(self) -> None:
        error = AmbiguousReferenceError("x", ["agent:x", "skill:x"])
        assert error.category == ErrorCategory.USER_ERROR
        assert error.suggestion == "Qualify it as one of: agent:x, skill:x"


class TestErrorHandler:
    """Test ErrorHandler classification and strategies."""

    def test_classify_library_error(self) -> None:
        classified = ErrorHandler().classify_error(ConfigError("bad config"))
        assert classified.category == ErrorCategory.CONFIG_ERROR
        assert classified.user_message == "bad config"

    def test_classify_builtin_errors(self) -> None:
        handler = ErrorHandler()
        assert (
            handler.classify_error(FileNotFoundError(2, "No such file", "x")).category
            == ErrorCategory.FILE_NOT_FOUND
        )
        assert (
            handler.classify_error(PermissionError(13, "Denied", "x")).category
            == ErrorCategory.PERMISSION_DENIED
        )
        decode = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        assert handler.classify_error(decode).category == ErrorCategory.SYNTAX_ERROR
        assert handler.classify_error(RuntimeError("boom")).category == ErrorCategory.SYSTEM_ERROR

    def test_handle_file_not_found(self) -> None:
        result = ErrorHandler().handle(FileNotFoundError(2, "No such directory", "/nope"))
        assert result.message == "File not found: /nope"
        assert result.exit_code == 1
        assert result.suggestion

    def test_handle_permission_denied(self) -> None:
        result = ErrorHandler().handle(PermissionError(13, "Denied", "/etc/x"))
        assert result.message == "Permission denied: /etc/x"
        assert "ls -la /etc/x" in result.suggestion

    def test_handle_not_found_default_hint(self) -> None:
        result = ErrorHandler().handle(DocumentNotFoundError("zzz"))
        assert result.message == "No document named 'zzz'"
        assert result.suggestion == "Run 'agentdocs list' to see available documents."

    def test_handle_passes_suggestion_through(self) -> None:
        result = ErrorHandler().handle(ConfigError("bad", suggestion="fix it"))
        assert (result.message, result.suggestion) == ("bad", "fix it")
