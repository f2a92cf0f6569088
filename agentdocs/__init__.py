"""agentdocs - command, agent and skill documents for coding agents."""

from agentdocs.config import VERSION
from agentdocs.loader import Registry, build_registry
from agentdocs.main import cli_main

__version__ = VERSION

__all__ = ["Registry", "__version__", "build_registry", "cli_main"]
