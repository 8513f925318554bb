"""Propagation of identity changes through the files of an existing project.

Source files live under the package directory: Go files get their package
clause, import paths and copyright header rewritten, and the ``Makefile``
its ``TARG`` line and header. Markdown documents anywhere in the project get
the old project name, license name, author and ``go get`` path replaced; the
``AUTHORS.md`` and ``CONTRIBUTORS.md`` lists get the author line swapped, or
appended when no author was stored.

Every file goes through :func:`gowright.fileops.scoped_edit`, so a backup
sits next to it before anything is modified. A failure on one file is
recorded in the :class:`SyncReport` and the next file is processed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .catalog import LICENSES
from .errors import WizardError
from .fileops import BACKUP_SUFFIX, scoped_edit
from .metadata import ProjectMetadata
from .tags import Attribute, ChangeSet, TagSet, author_line, build_tags
from .template import TemplateRenderer, extract_year, header_template_for

__all__ = [
    "FileFailure",
    "FileSynchronizer",
    "SyncReport",
    "find_documents",
    "find_source_files",
    "refresh_header",
    "replace_install_path",
    "replace_package_name",
    "split_header",
]

LOGGER = logging.getLogger(__name__)

SOURCE_SUFFIX = ".go"
DOCUMENT_SUFFIX = ".md"
MAKEFILE = "Makefile"
AUTHORS_FILENAME = "AUTHORS.md"
CONTRIBUTORS_FILENAME = "CONTRIBUTORS.md"
PEOPLE_FILENAMES = (AUTHORS_FILENAME, CONTRIBUTORS_FILENAME)
GO_COMMENT = "//"
MAKE_COMMENT = "#"

_IMPORT_BLOCK = re.compile(r"^import[ \t]*\(.*?^\)", re.MULTILINE | re.DOTALL)
_IMPORT_LINE = re.compile(r'^import[ \t]+(?:[\w.]+[ \t]+)?"[^"\n]*"', re.MULTILINE)


@dataclass(frozen=True, slots=True)
class FileFailure:
    path: Path
    reason: str


@dataclass(slots=True)
class SyncReport:
    """Files rewritten, left as they were, and failed during one run."""

    updated: list[Path] = field(default_factory=list)
    unchanged: list[Path] = field(default_factory=list)
    failed: list[FileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def find_source_files(package_dir: Path) -> list[Path]:
    """Return the Go files under ``package_dir`` followed by its ``Makefile``."""

    if not package_dir.is_dir():
        return []
    files = sorted(path for path in package_dir.rglob(f"*{SOURCE_SUFFIX}") if path.is_file())
    makefile = package_dir / MAKEFILE
    if makefile.is_file():
        files.append(makefile)
    return files


def find_documents(root: Path) -> list[Path]:
    """Return the Markdown files under ``root``, skipping hidden directories."""

    documents = []
    for path in sorted(root.rglob(f"*{DOCUMENT_SUFFIX}")):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts[:-1]):
            continue
        if path.is_file():
            documents.append(path)
    return documents


def replace_package_name(text: str, old: str, new: str, *, makefile: bool = False) -> str:
    """Replace the package name ``old`` by ``new`` where it names the package.

    In Go sources that is the ``package`` clause (``_test`` packages
    included) and any import path, in an ``import`` line or block, whose
    last element is ``old``. Other string literals are left alone. In a
    Makefile it is the last element of the ``TARG`` line.
    """

    name = re.escape(old)
    if makefile:
        pattern = re.compile(rf"^(TARG=(?:\S*/)?){name}(?=[ \t]*\r?$)", re.MULTILINE)
        return pattern.sub(lambda match: match.group(1) + new, text)

    clause = re.compile(rf"^(package[ \t]+){name}(?=(?:_test)?\b)", re.MULTILINE)
    text = clause.sub(lambda match: match.group(1) + new, text)

    import_path = re.compile(rf'("(?:[^"\n]*/)?){name}(?=")')

    def rewrite_imports(match: re.Match[str]) -> str:
        return import_path.sub(lambda path: path.group(1) + new, match.group(0))

    text = _IMPORT_BLOCK.sub(rewrite_imports, text)
    return _IMPORT_LINE.sub(rewrite_imports, text)


def replace_install_path(text: str, old: str, new: str) -> str:
    """Replace ``old`` as the last element of ``go get`` paths in a document."""

    pattern = re.compile(rf"(\bgo get[ \t]+(?:\S*/)?){re.escape(old)}(?![\w./-])")
    return pattern.sub(lambda match: match.group(1) + new, text)


def split_header(text: str, comment: str) -> tuple[str, str]:
    """Split ``text`` into its leading comment block and the rest."""

    lines = text.splitlines(keepends=True)
    count = 0
    for line in lines:
        if not line.startswith(comment):
            break
        count += 1
    return "".join(lines[:count]), "".join(lines[count:])


def refresh_header(
    text: str,
    tags: TagSet,
    renderer: TemplateRenderer,
    *,
    comment: str,
    previous: TagSet | None = None,
) -> str:
    """Replace the copyright header of ``text`` with one rendered from ``tags``.

    The year of the existing header is kept. ``previous`` are the tags the
    existing header was rendered from: when the file still starts with that
    exact header only it is replaced, so a doc comment written right below
    it survives. Otherwise the whole leading comment block is the header. A
    file without a copyright header gets one prepended.
    """

    current, body = split_header(text, comment)
    year = extract_year(current) if current else None
    header = renderer.render_header(header_template_for(tags["license"]), tags, comment=comment, year=year)
    if year is None:
        return header + "\n" + text
    if previous is not None:
        known = renderer.render_header(
            header_template_for(previous["license"]), previous, comment=comment, year=year
        )
        if text.startswith(known):
            body = text[len(known):]
    return header + body


def _replace_words(text: str, old: str, new: str) -> str:
    if not old or old == new:
        return text
    pattern = re.compile(rf"(?<!\w){re.escape(old)}(?!\w)")
    return pattern.sub(lambda match: new, text)


def _replace_author_line(text: str, old_line: str, new_line: str) -> str | None:
    """Swap the listed author line, or append it when none was stored.

    Returns ``None`` when the old line is not listed as such.
    """

    if not new_line or old_line == new_line:
        return text
    if not old_line:
        if re.search(rf"^{re.escape(new_line)}[ \t]*\r?$", text, re.MULTILINE):
            return text
        return text.rstrip("\r\n") + "\n\n" + new_line + "\n"

    pattern = re.compile(rf"^{re.escape(old_line)}(?=[ \t]*\r?$)", re.MULTILINE)
    if not pattern.search(text):
        return None
    return pattern.sub(lambda match: new_line, text)


@dataclass(slots=True)
class FileSynchronizer:
    """Apply a :class:`ChangeSet` to the files of a project."""

    renderer: TemplateRenderer

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def apply(
        self,
        root: str | Path,
        changes: ChangeSet,
        tags: TagSet,
        old: ProjectMetadata,
    ) -> SyncReport:
        """Rewrite the files of the project at ``root`` affected by ``changes``.

        ``old`` is the stored metadata; the package directory is looked up
        under its old name since directories are renamed afterwards.
        """

        root = Path(root)
        report = SyncReport()
        previous = build_tags(old)

        if changes.changed(Attribute.PACKAGE_IN_CODE, Attribute.PROJECT_NAME):
            for path in find_source_files(root / old.package_name):
                self._edit(
                    path,
                    report,
                    lambda text, path=path: self._rewrite_source(path, text, changes, tags, previous),
                )

        if changes.changed(
            Attribute.PROJECT_NAME,
            Attribute.PACKAGE_NAME,
            Attribute.LICENSE,
            Attribute.AUTHOR,
            Attribute.AUTHOR_EMAIL,
        ):
            for path in find_documents(root):
                people = path.name if path.parent == root and path.name in PEOPLE_FILENAMES else None
                self._edit(
                    path,
                    report,
                    lambda text, people=people: self._rewrite_document(people, text, changes, tags, old),
                )

        return report

    def _edit(self, path: Path, report: SyncReport, rewrite: Callable[[str], str]) -> None:
        try:
            with scoped_edit(path) as buffer:
                buffer.text = rewrite(buffer.text)
        except (WizardError, OSError) as exc:
            LOGGER.debug("%s not updated: %s", path, exc)
            report.failed.append(FileFailure(path, str(exc)))
            return

        if buffer.changed:
            report.updated.append(path)
            LOGGER.debug("updated %s (backup %s%s)", path, path.name, BACKUP_SUFFIX)
        else:
            report.unchanged.append(path)

    def _rewrite_source(
        self,
        path: Path,
        text: str,
        changes: ChangeSet,
        tags: TagSet,
        previous: TagSet,
    ) -> str:
        makefile = path.name == MAKEFILE
        if changes.changed(Attribute.PACKAGE_NAME):
            package = changes[Attribute.PACKAGE_NAME]
            text = replace_package_name(text, package.old, package.new, makefile=makefile)
        if changes.changed(Attribute.LICENSE, Attribute.PROJECT_NAME):
            comment = MAKE_COMMENT if makefile else GO_COMMENT
            text = refresh_header(text, tags, self.renderer, comment=comment, previous=previous)
        return text

    def _rewrite_document(
        self,
        people: str | None,
        text: str,
        changes: ChangeSet,
        tags: TagSet,
        old: ProjectMetadata,
    ) -> str:
        if people == AUTHORS_FILENAME and changes.changed(Attribute.LICENSE):
            license_change = changes[Attribute.LICENSE]
            # Under CC0 the AUTHORS file lists dedicators instead of copyright holders.
            if (license_change.old == "cc0") != (license_change.new == "cc0"):
                template = "authors_cc0" if license_change.new == "cc0" else "authors"
                return self.renderer.render(template, tags)

        if changes.changed(Attribute.PROJECT_NAME):
            text = _replace_words(text, old.project_name, tags["project_name"])
        if changes.changed(Attribute.PACKAGE_NAME):
            text = replace_install_path(text, old.package_name, tags["package_name"])
        if changes.changed(Attribute.LICENSE):
            text = _replace_words(text, LICENSES[old.license].name, tags["license_name"])

        if not changes.changed(Attribute.AUTHOR, Attribute.AUTHOR_EMAIL):
            return text
        if people is not None:
            listed = tags["contributors"] if people == CONTRIBUTORS_FILENAME else tags["author_line"]
            updated = _replace_author_line(text, author_line(old.author, old.author_email), listed)
            if updated is not None:
                return updated
        if changes.changed(Attribute.AUTHOR):
            text = _replace_words(text, old.author, tags["author"])
        if changes.changed(Attribute.AUTHOR_EMAIL):
            text = _replace_words(text, old.author_email, tags["author_email"])
        return text
