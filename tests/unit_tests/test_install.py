"""Tests for installing documents into a target directory."""

from collections.abc import Callable
from pathlib import Path

import pytest

from agentdocs.errors import InstallError
from agentdocs.install import _validate_name, install, plan_install
from agentdocs.loader import Registry, discover
from agentdocs.models import DocumentKind, Scope


class TestValidateName:
    """Test identifier validation."""

    @pytest.mark.parametrize("name", ["rust-build", "java_test", "A1"])
    def test_valid(self, name: str) -> None:
        assert _validate_name(name) == (True, "")

    @pytest.mark.parametrize(
        ("name", "reason"),
        [
            ("", "cannot be empty"),
            ("..", "letters, numbers"),
            ("a/b", "letters, numbers"),
            ("has space", "letters, numbers"),
            ("trailing\n", "letters, numbers"),
        ],
    )
    def test_invalid(self, name: str, reason: str) -> None:
        is_valid, error = _validate_name(name)
        assert not is_valid
        assert reason in error


class TestInstall:
    """Test install and plan_install."""

    def test_copies_layout(self, tmp_path: Path, corpus_root: Path, registry_for) -> None:
        target = tmp_path / "target"
        result = install(registry_for(corpus_root), target)

        assert sorted(p.relative_to(target).as_posix() for p in result.written) == [
            "agents/helper.md",
            "commands/rust-thing.md",
            "skills/helper-skill/SKILL.md",
        ]
        assert result.skipped == []
        assert (target / "agents" / "helper.md").read_text(encoding="utf-8") == (
            corpus_root / "agents" / "helper.md"
        ).read_text(encoding="utf-8")

    def test_kind_filter(self, tmp_path: Path, corpus_root: Path, registry_for) -> None:
        target = tmp_path / "target"
        result = install(registry_for(corpus_root), target, kinds=[DocumentKind.SKILL])
        assert result.written == [target / "skills" / "helper-skill" / "SKILL.md"]
        assert not (target / "commands").exists()

    def test_existing_files_skipped(
        self, tmp_path: Path, corpus_root: Path, registry_for
    ) -> None:
        """Test that existing files survive unless overwrite is set."""
        target = tmp_path / "target"
        existing = target / "agents" / "helper.md"
        existing.parent.mkdir(parents=True)
        existing.write_text("local edits", encoding="utf-8")
        registry = registry_for(corpus_root)

        result = install(registry, target)
        assert existing in result.skipped
        assert existing.read_text(encoding="utf-8") == "local edits"

        result = install(registry, target, overwrite=True)
        assert existing in result.written
        assert existing.read_text(encoding="utf-8").startswith("---\nname: helper")

    def test_install_onto_itself_is_skipped(self, corpus_root: Path, registry_for) -> None:
        result = install(registry_for(corpus_root), corpus_root, overwrite=True)
        assert result.written == []
        assert len(result.skipped) == 3

    def test_unsafe_identifier(self, tmp_path: Path, make_doc: Callable[..., Path]) -> None:
        make_doc("agents/bad name.md", "---\nname: bad name\ndescription: x\n---\n# Bad\n")
        registry = Registry()
        registry.add_layer(discover(tmp_path / "corpus", Scope.PROJECT))

        with pytest.raises(InstallError, match="agent:bad name"):
            plan_install(registry, tmp_path / "target")
        assert not (tmp_path / "target").exists()
