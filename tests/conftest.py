"""Shared pytest fixtures for the easy-cfhighlander test suite.

Provides reusable fixtures for:
- Temporary output roots
- A scripted prompter standing in for the terminal
- The canonical nine-answer parameter set
- A small on-disk template catalogue
- Generator configuration bound to ``tmp_path``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from easy_cfhighlander.config import GeneratorConfig
from easy_cfhighlander.files.descriptors import Catalogue
from easy_cfhighlander.params.cache import ParameterCache


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Replays canned answers in order and records what was asked.

    An empty string answer behaves like pressing enter: the default is
    returned when there is one.
    """

    def __init__(self, answers: list[Any] | None = None) -> None:
        self.answers = list(answers or [])
        self.questions: list[str] = []
        self.defaults: list[str | None] = []
        self.rejections: list[str] = []

    def ask(self, question: str, default: str | None) -> str | None:
        self.questions.append(question)
        self.defaults.append(default)
        if not self.answers:
            raise EOFError(f"No scripted answer left for {question!r}")
        answer = self.answers.pop(0)
        if answer == "":
            return default if default is not None else ""
        return answer

    def reject(self, message: str) -> None:
        self.rejections.append(message)


@pytest.fixture
def prompter_factory():
    """Build a ``ScriptedPrompter`` from a list of answers."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    """Empty output root for a generation run."""
    root = tmp_path / "acme-infra"
    root.mkdir()
    yield root


@pytest.fixture
def cache(tmp_path: Path) -> ParameterCache:
    """Parameter cache inside a temporary ``.easy`` directory."""
    return ParameterCache(tmp_path / ".easy" / "easy-cfhighlander-params.yaml")


@pytest.fixture
def config(output_root: Path) -> GeneratorConfig:
    """Non-interactive configuration writing into ``output_root``."""
    return GeneratorConfig(cwd=output_root, interactive=False)


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


@pytest.fixture
def code_answers() -> dict[str, Any]:
    """The nine answers the ``code`` command needs."""
    return {
        "project": "acme",
        "db_name": "acme",
        "db_username": "acme",
        "dns_domain": "acme.com",
        "dev_account": "111",
        "ops_account": "222",
        "prod_account": "333",
        "redis_enabled": False,
        "elasticsearch_enabled": False,
    }


@pytest.fixture
def cloudformation_answers(code_answers: dict[str, Any]) -> dict[str, Any]:
    """Answers for the ``cloudformation`` command (defaults for the rest)."""
    return {**code_answers, "cli_enabled": True}


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A minimal template tree under ``<tmp>/templates/demo``."""
    root = tmp_path / "templates"
    demo = root / "demo"
    demo.mkdir(parents=True)
    (demo / "project.config.yaml.j2").write_text(
        "project: {{ project }}\ndomain: {{ dns_domain }}\n", encoding="utf-8"
    )
    (demo / "Jenkinsfile.j2").write_text(
        "pipeline { stage('{{ project }}') }\n", encoding="utf-8"
    )
    (demo / "redis.config.yaml.j2").write_text(
        "cluster: {{ project }}-redis\n", encoding="utf-8"
    )
    (demo / "broken.txt.j2").write_text("{{ missing_param }}\n", encoding="utf-8")
    yield root


@pytest.fixture
def demo_catalogue() -> Catalogue:
    """Catalogue matching the ``template_dir`` fixture."""
    return Catalogue(
        template_prefix="demo",
        project_files=("project.config.yaml",),
        simple_files=("Jenkinsfile",),
    )
