"""Shared fixtures for agentdocs unit tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from agentdocs.loader import Registry, discover
from agentdocs.models import Scope

COMMAND = """---
description: Run the thing
---

# Thing

Agent: `agents/helper.md`

See skill: `helper-skill`

```rust
fn main() {}
```
"""

AGENT = """---
name: helper
description: Helps with things
tools: Read, Grep
model: sonnet
---

# Helper

See skill: `helper-skill`
"""

SKILL = """---
name: helper-skill
description: Knows about things
---

# Helper Skill

Some reference text.
"""


@pytest.fixture
def make_doc(tmp_path: Path) -> Callable[..., Path]:
    """Write a document under a corpus root and return its path."""

    def _make(relative: str, text: str, root: Path | None = None) -> Path:
        path = (root or tmp_path / "corpus") / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def corpus_root(tmp_path: Path, make_doc: Callable[..., Path]) -> Path:
    """A small, valid corpus: one command, one agent, one skill."""
    make_doc("commands/rust-thing.md", COMMAND)
    make_doc("agents/helper.md", AGENT)
    make_doc("skills/helper-skill/SKILL.md", SKILL)
    return tmp_path / "corpus"


@pytest.fixture
def registry_for() -> Callable[[Path], Registry]:
    """Build a registry from a single root, without the builtin corpus."""

    def _build(root: Path, scope: Scope = Scope.PROJECT) -> Registry:
        registry = Registry()
        registry.add_layer(discover(root, scope))
        return registry

    return _build


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point AGENTDOCS_HOME at an empty directory and cwd outside any project."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("AGENTDOCS_HOME", str(home))
    monkeypatch.delenv("AGENTDOCS_NO_BUILTIN", raising=False)
    monkeypatch.chdir(work)
    return work
