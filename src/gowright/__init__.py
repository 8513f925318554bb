"""Create Go projects and keep their identity in sync.

The package generates the base tree of a Go project (sources, Makefile,
documentation, license, VCS ignore file) and records the project identity in
a ``Metadata`` file. When the project name, package name, license or author
later change, the stored record is compared with the requested values and the
difference is propagated to the source headers, the build file, the
documents and the directory names.
"""

from __future__ import annotations

from .config import WizardOptions
from .metadata import ProjectMetadata, load_metadata, save_metadata
from .naming import derive_package_name
from .scaffold import ProjectScaffolder
from .sync import FileSynchronizer, SyncReport
from .tags import Attribute, ChangeSet, Resolution, resolve_new, resolve_update
from .template import TemplateRenderer, TemplateRenderingError
from .updater import ProjectUpdater

__all__ = [
    "Attribute",
    "ChangeSet",
    "FileSynchronizer",
    "ProjectMetadata",
    "ProjectScaffolder",
    "ProjectUpdater",
    "Resolution",
    "SyncReport",
    "TemplateRenderer",
    "TemplateRenderingError",
    "WizardOptions",
    "derive_package_name",
    "load_metadata",
    "resolve_new",
    "resolve_update",
    "save_metadata",
]

__version__ = "0.1.0"
