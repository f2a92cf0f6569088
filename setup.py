"""Setup script for agentdocs."""
from setuptools import setup, find_packages

dependencies = [
    "rich>=13.0.0",
    "prompt-toolkit>=3.0.52",
    "python-dotenv",
    "pydantic>=2.0",
    "PyYAML>=6.0",
]

setup(
    name="agentdocs",
    version="0.1.0",
    description="Command, agent and skill documents for coding agents, with a linter and installer",
    license="MIT",
    python_requires=">=3.11,<4.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=dependencies,
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "agentdocs=agentdocs:cli_main",
        ],
    },
    package_data={
        "agentdocs": [
            "py.typed",
            "corpus/commands/*.md",
            "corpus/agents/*.md",
            "corpus/skills/*/SKILL.md",
        ],
    },
)
