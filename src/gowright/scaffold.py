"""Project scaffolding helpers."""

from __future__ import annotations

import datetime
import logging
import os
import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from .errors import ExternalToolError, FileOperationError, ProjectValidationError
from .fileops import write_file
from .licenses import add_license
from .metadata import METADATA_FILENAME, ProjectMetadata, load_metadata, save_metadata
from .sync import split_header
from .tags import Resolution, build_tags
from .template import TemplateRenderer, extract_year, header_template_for, replace_year
from .templates import HG_IGNORE_SYNTAX, IGNORE_PATTERNS

__all__ = ["GenerationResult", "ProjectScaffolder", "ignore_filename", "run_command"]

LOGGER = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str]], str]

GO_COMMENT = "//"
MAKE_COMMENT = "#"
GO_SUFFIX = ".go"
CGO_IMPORT = '\nimport "C"'

_PACKAGE_CLAUSE = re.compile(r"^package[ \t]+(?P<name>\w+)", re.MULTILINE)


def run_command(command: Sequence[str]) -> str:
    """Run ``command`` and return its combined stdout and stderr."""

    try:
        result = subprocess.run(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise ExternalToolError(command, exc.strerror or str(exc)) from exc
    if result.returncode != 0:
        raise ExternalToolError(command, f"exit status {result.returncode}", result.stdout or "")
    return result.stdout or ""


def ignore_filename(vcs: str) -> str:
    return f".{vcs}ignore"


@dataclass(slots=True)
class GenerationResult:
    project_dir: Path
    files: list[Path] = field(default_factory=list)
    vcs_output: str = ""


@dataclass(slots=True)
class ProjectScaffolder:
    """Create the tree of a new Go project."""

    renderer: TemplateRenderer
    runner: CommandRunner

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.runner = runner or run_command

    def create(
        self,
        resolution: Resolution,
        target_dir: str | Path,
        *,
        force: bool = False,
        init_vcs: bool = True,
    ) -> GenerationResult:
        """Create the project described by ``resolution`` inside ``target_dir``."""

        tags = resolution.tags
        metadata = resolution.metadata
        project_dir = Path(target_dir).expanduser().resolve() / tags["project_dir"]
        package_dir = project_dir / metadata.package_name
        header = header_template_for(metadata.license)

        source = "cmd_main" if metadata.project_type == "cmd" else "pkg_main"
        files: list[tuple[Path, str, str | None]] = [
            (package_dir / f"{metadata.package_name}.go", source, GO_COMMENT),
        ]
        if metadata.project_type != "cmd":
            files.append((package_dir / f"{metadata.package_name}_test.go", "test", GO_COMMENT))
        files.append((package_dir / "Makefile", "makefile", MAKE_COMMENT))

        files.append((project_dir / "README.md", "readme", None))
        files.append((project_dir / "NEWS.md", "news", None))
        # AUTHORS lists the copyright holders; under CC0 nobody holds it.
        if metadata.license == "cc0":
            files.append((project_dir / "AUTHORS.md", "authors_cc0", None))
        else:
            files.append((project_dir / "AUTHORS.md", "authors", None))
            files.append((project_dir / "CONTRIBUTORS.md", "contributors", None))
        if metadata.vcs == "none":
            files.append((project_dir / "CHANGES.md", "changes", None))

        result = GenerationResult(project_dir=project_dir)
        for destination, template, comment in files:
            if destination.exists() and not force:
                raise FileOperationError(destination, "already exists")
            if comment is None:
                rendered = self.renderer.render(template, tags)
            else:
                rendered = self.renderer.render_nested(template, header, tags, comment=comment)
            result.files.append(write_file(destination, rendered))

        if metadata.vcs != "none":
            ignore = IGNORE_PATTERNS
            if metadata.vcs == "hg":
                ignore = HG_IGNORE_SYNTAX + ignore
            result.files.append(write_file(project_dir / ignore_filename(metadata.vcs), ignore))

        result.files.extend(add_license(project_dir, metadata.license, tags, self.renderer))
        result.files.append(save_metadata(metadata, project_dir))
        LOGGER.debug("created %d files in %s", len(result.files), project_dir)

        if metadata.vcs != "none" and init_vcs:
            result.vcs_output = self.runner([metadata.vcs, "init", str(project_dir)])

        return result

    def add_file(
        self,
        directory: str | Path,
        name: str,
        *,
        cgo: bool = False,
        test: bool = False,
        force: bool = False,
        year: int | None = None,
    ) -> list[Path]:
        """Add ``<name>.go`` to the package in ``directory``.

        With ``test`` a ``<name>_test.go`` stub is added too. The header is
        rendered from the project metadata found in ``directory`` or its
        parent; without metadata the header of an existing Go file is reused
        with its year set to ``year`` (the current year by default). The
        package clause follows the Go files already in ``directory``.
        """

        directory = Path(directory).expanduser().resolve()
        if not directory.is_dir():
            raise FileOperationError(directory, "not a directory")
        name = _check_file_name(name)
        year = year if year is not None else datetime.date.today().year
        metadata = _find_metadata(directory)
        sources = sorted(path for path in directory.glob(f"*{GO_SUFFIX}") if path.is_file())

        package = _package_clause(sources)
        if package is None:
            package = "main" if metadata is None or metadata.project_type == "cmd" else metadata.package_name
        if metadata is not None:
            tags = build_tags(metadata, year=year)
            header = self.renderer.render_header(
                header_template_for(metadata.license), tags, comment=GO_COMMENT, year=year
            )
        else:
            header = replace_year(_existing_header(directory, sources), year)

        files = [(directory / f"{name}{GO_SUFFIX}", "pkg_main")]
        if test:
            files.append((directory / f"{name}_test{GO_SUFFIX}", "test"))
        for destination, _ in files:
            if destination.exists() and not force:
                raise FileOperationError(destination, "already exists")

        context = {
            "header": header,
            "package_name": package,
            "cgo_import": CGO_IMPORT if cgo else "",
        }
        written = [write_file(destination, self.renderer.render(template, context)) for destination, template in files]
        LOGGER.debug("added %s to package %r", ", ".join(path.name for path in written), package)
        return written


def _check_file_name(name: str) -> str:
    name = name.strip()
    if name.endswith(GO_SUFFIX):
        name = name[: -len(GO_SUFFIX)]
    if not name or "/" in name or os.sep in name or name.startswith("."):
        raise ProjectValidationError(f"invalid file name '{name}'")
    return name


def _find_metadata(directory: Path) -> ProjectMetadata | None:
    for candidate in (directory, directory.parent):
        stored = candidate / METADATA_FILENAME
        if stored.is_file():
            return load_metadata(stored)
    return None


def _read_source(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        LOGGER.debug("skipping %s: not a UTF-8 text file", path)
        return None
    except OSError as exc:
        raise FileOperationError(path, exc.strerror or str(exc)) from exc


def _package_clause(sources: list[Path]) -> str | None:
    for path in sources:
        if path.stem.endswith("_test"):
            continue
        text = _read_source(path)
        match = _PACKAGE_CLAUSE.search(text or "")
        if match is not None:
            return match.group("name")
    return None


def _existing_header(directory: Path, sources: list[Path]) -> str:
    for path in sources:
        header, _ = split_header(_read_source(path) or "", GO_COMMENT)
        if extract_year(header) is not None:
            return header
    raise FileOperationError(directory, "no project metadata nor Go file with a copyright header found")
