"""Tests for front-matter parsing."""

import pytest

from agentdocs.errors import FrontmatterError
from agentdocs.frontmatter import parse_frontmatter, split_frontmatter, split_tools


class TestParseFrontmatter:
    """Test parse_frontmatter."""

    def test_parses_mapping_and_body(self) -> None:
        """Test that metadata and body are separated."""
        text = "---\nname: rust-reviewer\nmodel: sonnet\n---\n\n# Body\n"
        metadata, body = parse_frontmatter(text)
        assert metadata == {"name": "rust-reviewer", "model": "sonnet"}
        assert body == "\n# Body\n"

    def test_no_frontmatter(self) -> None:
        """Test that text without a leading --- is returned unchanged."""
        text = "# Title\n\nname: not metadata\n"
        metadata, body = parse_frontmatter(text)
        assert metadata == {}
        assert body == text

    def test_block_must_start_on_first_line(self) -> None:
        """Test that --- further down the file is not front-matter."""
        text = "\n---\nname: x\n---\n"
        metadata, body = parse_frontmatter(text)
        assert metadata == {}
        assert body == text

    def test_empty_block(self) -> None:
        """Test that an empty block yields an empty mapping."""
        metadata, body = parse_frontmatter("---\n---\nbody")
        assert metadata == {}
        assert body == "body"

    def test_dots_close_block(self) -> None:
        """Test that '...' also terminates the block."""
        metadata, body = parse_frontmatter("---\ndescription: x\n...\nbody")
        assert metadata == {"description": "x"}
        assert body == "body"

    def test_crlf_and_bom(self) -> None:
        """Test that BOM and Windows line endings are tolerated."""
        text = "\ufeff---\r\nname: x\r\n---\r\nbody\r\n"
        metadata, body = parse_frontmatter(text)
        assert metadata == {"name": "x"}
        assert body == "body\n"

    def test_list_values(self) -> None:
        """Test that YAML lists are preserved."""
        metadata, _ = parse_frontmatter('---\ntools: ["Read", "Bash"]\n---\n')
        assert metadata["tools"] == ["Read", "Bash"]

    def test_unterminated_block(self) -> None:
        """Test that a block without closing --- raises."""
        with pytest.raises(FrontmatterError) as exc_info:
            parse_frontmatter("---\nname: x\n\n# Body\n")
        assert "Unterminated" in str(exc_info.value)
        assert exc_info.value.line == 1

    def test_invalid_yaml_reports_line(self) -> None:
        """Test that YAML errors carry a file line number."""
        text = "---\nname: x\ntools: [Read, Bash\n---\nbody"
        with pytest.raises(FrontmatterError) as exc_info:
            parse_frontmatter(text)
        assert "Invalid YAML" in str(exc_info.value)
        assert exc_info.value.line is not None
        assert exc_info.value.line >= 2

    def test_scalar_is_not_a_mapping(self) -> None:
        """Test that a plain string block is rejected."""
        with pytest.raises(FrontmatterError) as exc_info:
            parse_frontmatter("---\njust a sentence\n---\n")
        assert "mapping" in str(exc_info.value)

    def test_non_string_keys(self) -> None:
        """Test that numeric keys are rejected."""
        with pytest.raises(FrontmatterError) as exc_info:
            parse_frontmatter("---\n1: one\n---\n")
        assert "keys must be strings" in str(exc_info.value)


class TestSplitFrontmatter:
    """Test split_frontmatter line bookkeeping."""

    def test_body_line(self) -> None:
        """Test that body_line points at the first line after the block."""
        block, body, body_line = split_frontmatter("---\na: 1\nb: 2\n---\nfirst body line")
        assert block == "a: 1\nb: 2"
        assert body == "first body line"
        assert body_line == 5

    def test_body_line_without_block(self) -> None:
        """Test that documents without front-matter start at line 1."""
        block, _, body_line = split_frontmatter("# Title")
        assert block is None
        assert body_line == 1


class TestSplitTools:
    """Test split_tools normalisation."""

    def test_comma_string(self) -> None:
        assert split_tools("Read, Grep,  Bash ,") == ["Read", "Grep", "Bash"]

    def test_list(self) -> None:
        assert split_tools(["Read", " Edit "]) == ["Read", "Edit"]

    def test_none(self) -> None:
        assert split_tools(None) == []

    def test_invalid_type(self) -> None:
        with pytest.raises(ValueError):
            split_tools(42)
