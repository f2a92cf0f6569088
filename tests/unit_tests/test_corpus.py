"""Integrity tests for the documents shipped with the package."""

import pytest

from agentdocs.config import builtin_corpus_dir
from agentdocs.lint import lint
from agentdocs.loader import Registry, discover
from agentdocs.models import DocumentKind, Scope

REQUIRED = {
    DocumentKind.COMMAND: [
        "rust-build",
        "rust-review",
        "rust-test",
        "java-build",
        "java-review",
        "java-test",
    ],
    DocumentKind.AGENT: [
        "rust-reviewer",
        "rust-build-resolver",
        "java-reviewer",
        "java-build-resolver",
        "tdd-guide",
    ],
    DocumentKind.SKILL: ["rust-patterns", "rust-testing", "java-patterns", "java-testing"],
}


@pytest.fixture(scope="module")
def builtin() -> Registry:
    registry = Registry()
    registry.add_layer(discover(builtin_corpus_dir(), Scope.BUILTIN))
    return registry


@pytest.mark.parametrize(
    ("kind", "identifier"),
    [(kind, identifier) for kind, identifiers in REQUIRED.items() for identifier in identifiers],
)
def test_required_document_present(builtin: Registry, kind: DocumentKind, identifier: str) -> None:
    assert (kind, identifier) in builtin


def test_lints_clean_in_strict_mode(builtin: Registry) -> None:
    """Test that the shipped corpus has no errors or warnings."""
    report = lint(builtin, strict=True)
    assert [d.to_dict() for d in report.diagnostics] == []
    assert report.ok


def test_commands_show_their_language(builtin: Registry) -> None:
    for command in builtin.list_documents(DocumentKind.COMMAND):
        assert command.language in command.languages, command.identifier


def test_commands_delegate_to_an_agent(builtin: Registry) -> None:
    for command in builtin.list_documents(DocumentKind.COMMAND):
        kinds = {reference.kind for reference in command.references}
        assert DocumentKind.AGENT in kinds, command.identifier
        assert DocumentKind.SKILL in kinds, command.identifier


def test_agents_declare_model_and_tools(builtin: Registry) -> None:
    for agent in builtin.list_documents(DocumentKind.AGENT):
        assert agent.metadata["model"] in {"opus", "sonnet", "haiku", "inherit"}
        assert agent.metadata["tools"], agent.identifier
