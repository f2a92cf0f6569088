"""Data model for corpus documents and their metadata schemas."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agentdocs.errors import FrontmatterError
from agentdocs.frontmatter import split_tools

# Maximum description length for display
MAX_DESCRIPTION_LENGTH = 150

# Identifier prefix -> languages a command or skill is expected to show
DEFAULT_LANGUAGES: dict[str, list[str]] = {
    "rust": ["rust"],
    "java": ["java"],
}


class DocumentKind(str, Enum):
    """The three kinds of corpus document."""

    COMMAND = "command"
    AGENT = "agent"
    SKILL = "skill"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


class Scope(str, Enum):
    """Where a document was loaded from, lowest precedence first."""

    BUILTIN = "builtin"
    USER = "user"
    PROJECT = "project"


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block found in a document body."""

    language: str
    content: str
    line: int
    info: str = ""
    unclosed: bool = False
    end_line: int = 0


@dataclass(frozen=True)
class Reference:
    """A cross-reference from one document to another."""

    kind: DocumentKind
    target: str
    line: int
    raw: str

    @property
    def key(self) -> tuple[DocumentKind, str]:
        return self.kind, self.target


@dataclass(frozen=True)
class Heading:
    level: int
    title: str
    line: int


class CommandMetadata(BaseModel):
    """Front-matter schema for command files."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    description: str = Field(min_length=1)
    argument_hint: str | None = Field(default=None, alias="argument-hint")
    allowed_tools: list[str] = Field(default_factory=list, alias="allowed-tools")
    model: str | None = None

    @field_validator("allowed_tools", mode="before")
    @classmethod
    def _split_allowed_tools(cls, value: Any) -> list[str]:
        return split_tools(value)


class AgentMetadata(BaseModel):
    """Front-matter schema for agent files."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    tools: list[str] = Field(default_factory=list)
    model: Literal["opus", "sonnet", "haiku", "inherit"] = "inherit"

    @field_validator("tools", mode="before")
    @classmethod
    def _split_tools(cls, value: Any) -> list[str]:
        return split_tools(value)


class SkillMetadata(BaseModel):
    """Front-matter schema for skill files."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    version: str | None = None
    license: str | None = None
    allowed_tools: list[str] = Field(default_factory=list, alias="allowed-tools")

    @field_validator("version", mode="before")
    @classmethod
    def _coerce_version(cls, value: Any) -> Any:
        # YAML reads `version: 1.0` as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("allowed_tools", mode="before")
    @classmethod
    def _split_allowed_tools(cls, value: Any) -> list[str]:
        return split_tools(value)


METADATA_SCHEMAS: dict[DocumentKind, type[BaseModel]] = {
    DocumentKind.COMMAND: CommandMetadata,
    DocumentKind.AGENT: AgentMetadata,
    DocumentKind.SKILL: SkillMetadata,
}


def known_keys(kind: DocumentKind) -> set[str]:
    """Return the front-matter keys understood for a document kind."""
    schema = METADATA_SCHEMAS[kind]
    keys = set()
    for name, info in schema.model_fields.items():
        keys.add(info.alias or name)
    return keys


def _extract_description(body: str) -> str:
    """Pick the first substantial prose line of a body as its description."""
    for line in body.strip().split("\n")[:10]:
        line = line.strip()
        if line and not line.startswith(("#", "```", "~~~", "|", "-", ">")) and len(line) > 30:
            if len(line) > MAX_DESCRIPTION_LENGTH:
                return line[: MAX_DESCRIPTION_LENGTH - 3] + "..."
            return line
    return ""


@dataclass
class Document:
    """A single command, agent or skill file loaded from disk.

    Documents with broken front-matter still load; the parse error is kept on
    ``frontmatter_error`` so the linter can report it.
    """

    kind: DocumentKind
    identifier: str
    path: Path
    scope: Scope
    text: str
    body: str
    metadata: dict[str, Any] = field(default_factory=dict)
    has_frontmatter: bool = False
    body_line: int = 1
    frontmatter_error: FrontmatterError | None = None
    # (line, message) when the file is not valid UTF-8
    encoding_error: tuple[int, str] | None = None
    code_blocks: list[CodeBlock] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)
    headings: list[Heading] = field(default_factory=list)

    @property
    def key(self) -> tuple[DocumentKind, str]:
        return self.kind, self.identifier

    @property
    def display_name(self) -> str:
        if self.kind == DocumentKind.COMMAND:
            return f"/{self.identifier}"
        return self.identifier

    @property
    def qualified_name(self) -> str:
        return f"{self.kind.value}:{self.identifier}"

    @property
    def description(self) -> str:
        value = self.metadata.get("description")
        if isinstance(value, str) and value.strip():
            value = " ".join(value.split())
            if len(value) > MAX_DESCRIPTION_LENGTH:
                return value[: MAX_DESCRIPTION_LENGTH - 3] + "..."
            return value
        return _extract_description(self.body)

    @property
    def language(self) -> str | None:
        """Source language implied by the identifier prefix, if any."""
        if self.kind == DocumentKind.AGENT:
            return None
        prefix = self.identifier.split("-", 1)[0].lower()
        return prefix if prefix in DEFAULT_LANGUAGES else None

    @property
    def languages(self) -> list[str]:
        """Distinct code-block languages, in order of first appearance."""
        seen: list[str] = []
        for block in self.code_blocks:
            if block.language and block.language not in seen:
                seen.append(block.language)
        return seen

    @property
    def is_empty(self) -> bool:
        return not self.body.strip()

    def relative_path(self) -> str:
        """Path of the document relative to its corpus root."""
        if self.kind == DocumentKind.SKILL:
            return f"skills/{self.identifier}/SKILL.md"
        return f"{self.kind.plural}/{self.identifier}.md"
