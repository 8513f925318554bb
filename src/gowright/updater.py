"""Synchronization of an existing project with newly requested values."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .catalog import LICENSES
from .config import WizardOptions
from .errors import FileOperationError, WizardError
from .fileops import backup_file, write_file
from .licenses import LICENSE_FILENAME, add_license
from .metadata import ProjectMetadata, load_metadata, metadata_path, save_metadata
from .rename import rename_package_dir, rename_project_dir
from .sync import CONTRIBUTORS_FILENAME, FileFailure, FileSynchronizer, SyncReport
from .tags import Attribute, ChangeSet, Resolution, resolve_update
from .template import TemplateRenderer, extract_year

__all__ = ["ProjectUpdater", "UpdateResult"]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateResult:
    """What an update did to the project.

    Paths point to where files were when they were touched, under ``root``.
    ``project_dir`` is where the project lives once the update finished.
    """

    root: Path
    project_dir: Path
    changes: ChangeSet
    metadata: ProjectMetadata
    report: SyncReport = field(default_factory=SyncReport)
    written: list[Path] = field(default_factory=list)
    renamed: list[tuple[Path, Path]] = field(default_factory=list)


@dataclass(slots=True)
class ProjectUpdater:
    """Bring the files, directories and metadata of a project in line with new values."""

    renderer: TemplateRenderer
    synchronizer: FileSynchronizer

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        synchronizer: FileSynchronizer | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.synchronizer = synchronizer or FileSynchronizer(self.renderer)

    def resolve(self, root: str | Path, options: WizardOptions) -> tuple[ProjectMetadata, Resolution]:
        """Load the stored metadata of ``root`` and resolve ``options`` against it."""

        old = load_metadata(metadata_path(Path(root)))
        return old, resolve_update(old, options)

    def update(self, root: str | Path, options: WizardOptions) -> UpdateResult:
        """Apply ``options`` to the project at ``root``.

        Nothing is written when no attribute changed. Failures on single files
        are collected in the report; failures to rename a directory or to save
        the metadata are raised.
        """

        root = Path(root).resolve()
        old, resolution = self.resolve(root, options)
        changes = resolution.changes
        result = UpdateResult(root=root, project_dir=root, changes=changes, metadata=resolution.metadata)
        if not changes:
            LOGGER.info("nothing to update in %s", root)
            return result

        self._check_destinations(root, resolution)
        result.report = self.synchronizer.apply(root, changes, resolution.tags, old)
        self._update_license(root, old, resolution, result)
        self._add_contributors(root, resolution, result)

        if changes.changed(Attribute.PACKAGE_NAME):
            package = changes[Attribute.PACKAGE_NAME]
            destination = rename_package_dir(root, package.old, package.new)
            result.renamed.append((root / package.old, destination))

        if changes.changed(Attribute.PROJECT_NAME) and root.name != resolution.tags["project_dir"]:
            destination = rename_project_dir(root, resolution.tags["project_dir"])
            result.renamed.append((root, destination))
            root = result.project_dir = destination

        stored = metadata_path(root)
        if stored.exists():
            backup_file(stored)
        save_metadata(resolution.metadata, stored)
        return result

    def _check_destinations(self, root: Path, resolution: Resolution) -> None:
        """Refuse an update whose directory renames would collide, before any file is touched."""

        changes = resolution.changes
        if changes.changed(Attribute.PACKAGE_NAME):
            package = changes[Attribute.PACKAGE_NAME]
            if not (root / package.old).is_dir():
                raise FileOperationError(root / package.old, "package directory not found")
            destination = root / package.new
            if destination.exists():
                raise FileOperationError(destination, "destination already exists")
        if changes.changed(Attribute.PROJECT_NAME) and root.name != resolution.tags["project_dir"]:
            destination = root.parent / resolution.tags["project_dir"]
            if destination.exists():
                raise FileOperationError(destination, "destination already exists")

    def _update_license(
        self,
        root: Path,
        old: ProjectMetadata,
        resolution: Resolution,
        result: UpdateResult,
    ) -> None:
        changes = resolution.changes
        license_id = resolution.metadata.license
        templated = LICENSES[license_id].templated
        if not (changes.changed(Attribute.LICENSE) or (templated and changes.changed(Attribute.PROJECT_NAME))):
            return

        destination = root / LICENSE_FILENAME
        if license_id == "none":
            if destination.exists():
                LOGGER.warning("license removed from the metadata; %s left in place", destination)
            return

        try:
            year = None
            if destination.exists():
                if LICENSES[old.license].templated:
                    year = extract_year(destination.read_text(encoding="utf-8", errors="replace"))
                backup_file(destination)
            result.written.extend(add_license(root, license_id, resolution.tags, self.renderer, year=year))
        except (WizardError, OSError) as exc:
            result.report.failed.append(FileFailure(destination, str(exc)))

    def _add_contributors(self, root: Path, resolution: Resolution, result: UpdateResult) -> None:
        change = resolution.changes[Attribute.LICENSE]
        if not (change.changed and change.old == "cc0"):
            return
        destination = root / CONTRIBUTORS_FILENAME
        if destination.exists():
            return
        try:
            write_file(destination, self.renderer.render("contributors", resolution.tags))
        except (WizardError, OSError) as exc:
            result.report.failed.append(FileFailure(destination, str(exc)))
        else:
            result.written.append(destination)
