"""Run configuration shared by the resolver, generator, synchronizer and CLI."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

__all__ = ["DEFAULT_LICENSE", "DEFAULT_PROJECT_TYPE", "DEFAULT_VCS", "WizardOptions"]

DEFAULT_PROJECT_TYPE = "cmd"
DEFAULT_LICENSE = "bsd-2"
DEFAULT_VCS = "git"


@dataclass(frozen=True, slots=True)
class WizardOptions:
    """Values requested for a single run.

    The object is built once from the parsed command line and handed to every
    component that needs it.

    Attributes
    ----------
    project_name, package_name, license, vcs, project_type, author, author_email:
        Requested identity values. ``None`` means "not given": the create
        path falls back to defaults, the update path keeps the stored value.
    author_is_org:
        The author is an organization rather than a person.
    debug:
        Resolve and show the tags, then stop without touching the disk.
    verbose:
        Report every file updated and directory renamed.
    update:
        Synchronize an existing project instead of creating a new one.
    directory:
        For a new project the parent directory it is created in, for an
        update the root of the existing project.
    init_vcs:
        Run ``<vcs> init`` after generating a new project.
    add_file, cgo, add_test:
        Add the Go file ``add_file`` to the package in ``directory``,
        importing ``"C"`` with ``cgo`` and with a test stub with ``add_test``.
    """

    project_name: str | None = None
    package_name: str | None = None
    license: str | None = None
    vcs: str | None = None
    project_type: str | None = None
    author: str | None = None
    author_email: str | None = None
    author_is_org: bool = False
    debug: bool = False
    verbose: bool = False
    update: bool = False
    directory: Path = Path(".")
    init_vcs: bool = True
    add_file: str | None = None
    cgo: bool = False
    add_test: bool = False

    def with_defaults(self, defaults: Mapping[str, str]) -> "WizardOptions":
        """Return a copy where unset identity values are taken from ``defaults``.

        ``defaults`` uses the keys of the user configuration file
        (``author``, ``email``, ``license``, ``vcs``, ``type``). Values given
        explicitly always win.
        """

        keys = {
            "author": "author",
            "author_email": "email",
            "license": "license",
            "vcs": "vcs",
            "project_type": "type",
        }
        changes = {
            attribute: defaults[key]
            for attribute, key in keys.items()
            if getattr(self, attribute) is None and defaults.get(key)
        }
        return replace(self, **changes)
