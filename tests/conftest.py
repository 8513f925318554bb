from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from gowright.config import WizardOptions  # noqa: E402
from gowright.metadata import ProjectMetadata  # noqa: E402
from gowright.scaffold import ProjectScaffolder  # noqa: E402
from gowright.tags import resolve_new  # noqa: E402
from gowright.template import TemplateRenderer  # noqa: E402

YEAR = 2010


class FakeRunner:
    """Stand-in for ``<vcs> init`` that records the commands it receives."""

    def __init__(self, output: str = "Initialized empty repository\n") -> None:
        self.output = output
        self.calls: list[list[str]] = []

    def __call__(self, command: Sequence[str]) -> str:
        self.calls.append(list(command))
        return self.output


@pytest.fixture()
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def scaffolder(renderer: TemplateRenderer, runner: FakeRunner) -> ProjectScaffolder:
    return ProjectScaffolder(renderer, runner=runner)


@pytest.fixture()
def metadata() -> ProjectMetadata:
    return ProjectMetadata(
        project_type="pkg",
        project_name="Acme-Runner",
        package_name="runner",
        license="bsd-2",
        vcs="git",
        author="Jane Doe",
        author_email="jane@example.com",
        version="0.1",
        summary="Runs things",
        download_url="https://example.com/runner.tar.gz",
        homepage="https://example.com",
        keywords="go, runner",
    )


@pytest.fixture()
def create_project(tmp_path: Path, scaffolder: ProjectScaffolder):
    """Return a factory creating a project under ``tmp_path``."""

    def factory(**values) -> Path:
        values.setdefault("project_name", "Acme-Runner")
        values.setdefault("author", "Jane Doe")
        values.setdefault("author_email", "jane@example.com")
        resolution = resolve_new(WizardOptions(**values), year=YEAR)
        return scaffolder.create(resolution, tmp_path).project_dir

    return factory
