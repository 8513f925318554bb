"""Resolution of the requested values into template tags and a change set."""

from __future__ import annotations

import datetime
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from pydantic import ValidationError

from .catalog import LICENSES, PROJECT_TYPES, VCS_SYSTEMS, check_license, check_project_type, check_vcs
from .config import DEFAULT_LICENSE, DEFAULT_PROJECT_TYPE, DEFAULT_VCS, WizardOptions
from .errors import InvalidPackageNameError, MissingProjectNameError, ProjectValidationError
from .metadata import ProjectMetadata
from .naming import derive_package_name, is_valid_package_name, project_dir_name

__all__ = [
    "Attribute",
    "Change",
    "ChangeSet",
    "Resolution",
    "TagSet",
    "author_line",
    "build_tags",
    "resolve_new",
    "resolve_update",
]

LOGGER = logging.getLogger(__name__)

TagSet = Mapping[str, str]

_GNU_EXTRA = {"lgpl": "Lesser "}
_DEFAULT_SUMMARY = "TODO: Describe your project."


class Attribute(str, Enum):
    """Identity attributes tracked between the stored and the requested values."""

    PROJECT_NAME = "ProjectName"
    PACKAGE_NAME = "PackageName"
    LICENSE = "License"
    PACKAGE_IN_CODE = "PackageInCode"
    AUTHOR = "Author"
    AUTHOR_EMAIL = "AuthorEmail"


@dataclass(frozen=True, slots=True)
class Change:
    changed: bool
    old: str
    new: str


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Attributes whose requested value differs from the stored one."""

    changes: Mapping[Attribute, Change] = field(default_factory=dict)

    def __getitem__(self, attribute: Attribute) -> Change:
        return self.changes[attribute]

    def __bool__(self) -> bool:
        return any(change.changed for change in self.changes.values())

    def __iter__(self) -> Iterator[Attribute]:
        return (attribute for attribute, change in self.changes.items() if change.changed)

    def changed(self, *attributes: Attribute) -> bool:
        """Return whether any of ``attributes`` changed."""

        return any(
            attribute in self.changes and self.changes[attribute].changed for attribute in attributes
        )


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one run: tags, change set and the resulting record."""

    tags: TagSet
    changes: ChangeSet
    metadata: ProjectMetadata


def author_line(author: str, email: str) -> str:
    """Return the ``Name <email>`` line listing an author."""

    if not email:
        return author
    return f"{author} <{email}>".strip()


def build_tags(
    metadata: ProjectMetadata,
    *,
    author_is_org: bool = False,
    year: int | None = None,
) -> TagSet:
    """Return the template tags describing ``metadata``."""

    line = author_line(metadata.author, metadata.author_email)

    tags = {
        "project_name": metadata.project_name,
        "project_dir": project_dir_name(metadata.project_name),
        "package_name": metadata.package_name,
        "project_type": metadata.project_type,
        "project_type_name": PROJECT_TYPES[metadata.project_type],
        "license": metadata.license,
        "license_name": LICENSES[metadata.license].name,
        "vcs": metadata.vcs,
        "vcs_name": VCS_SYSTEMS[metadata.vcs],
        "author": metadata.author,
        "author_email": metadata.author_email,
        "author_line": line,
        "author_is_org": "yes" if author_is_org else "",
        "contributors": "" if author_is_org else line,
        "summary": metadata.summary or _DEFAULT_SUMMARY,
        "year": str(year if year is not None else datetime.date.today().year),
        "gnu_extra": _GNU_EXTRA.get(metadata.license, ""),
        "make_kind": "cmd" if metadata.project_type == "cmd" else "pkg",
        "cgo_import": '\nimport "C"' if metadata.project_type == "cgo" else "",
    }
    return MappingProxyType(tags)


def _check_project_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise MissingProjectNameError()
    if "/" in name or os.sep in name:
        raise ProjectValidationError(f"project name '{name}' must not contain path separators")
    return name


def _check_package_name(name: str) -> str:
    name = name.strip().lower()
    if not is_valid_package_name(name):
        raise InvalidPackageNameError(name)
    return name


def resolve_new(options: WizardOptions, *, year: int | None = None) -> Resolution:
    """Resolve the values of a project that is about to be created.

    Unset values fall back to the defaults; the package name is derived
    from the project name when it is not given.
    """

    project_name = _check_project_name(options.project_name)
    if options.package_name:
        package_name = _check_package_name(options.package_name)
    else:
        package_name = _check_package_name(derive_package_name(project_name))

    license_id = options.license or DEFAULT_LICENSE
    check_license(license_id)
    vcs = options.vcs or DEFAULT_VCS
    check_vcs(vcs)
    project_type = options.project_type or DEFAULT_PROJECT_TYPE
    check_project_type(project_type)

    try:
        metadata = ProjectMetadata(
            project_type=project_type,
            project_name=project_name,
            package_name=package_name,
            license=license_id,
            vcs=vcs,
            author=options.author or "",
            author_email=options.author_email or "",
        )
    except ValidationError as exc:
        raise ProjectValidationError(str(exc)) from exc

    tags = build_tags(metadata, author_is_org=options.author_is_org, year=year)
    return Resolution(tags=tags, changes=ChangeSet(), metadata=metadata)


def _compare(old: str, requested: str | None) -> Change:
    if requested is None or requested == old:
        return Change(False, old, old)
    return Change(True, old, requested)


def resolve_update(old: ProjectMetadata, options: WizardOptions, *, year: int | None = None) -> Resolution:
    """Compare ``old`` with the values requested in ``options``.

    Values that are not given keep their stored value. The package name is
    never derived here: only an explicit new package name renames it.
    """

    if options.vcs is not None and options.vcs != old.vcs:
        raise ProjectValidationError("the version control system cannot be changed on update")
    if options.project_type is not None and options.project_type != old.project_type:
        raise ProjectValidationError("the project type cannot be changed on update")

    project_name = None
    if options.project_name is not None:
        project_name = _check_project_name(options.project_name)
    package_name = None
    if options.package_name is not None:
        package_name = _check_package_name(options.package_name)
    if options.license is not None:
        check_license(options.license)

    changes = {
        Attribute.PROJECT_NAME: _compare(old.project_name, project_name),
        Attribute.PACKAGE_NAME: _compare(old.package_name, package_name),
        Attribute.LICENSE: _compare(old.license, options.license),
        Attribute.AUTHOR: _compare(old.author, options.author.strip() if options.author is not None else None),
        Attribute.AUTHOR_EMAIL: _compare(
            old.author_email,
            options.author_email.strip() if options.author_email is not None else None,
        ),
    }
    package = changes[Attribute.PACKAGE_NAME]
    changes[Attribute.PACKAGE_IN_CODE] = Change(
        changes[Attribute.LICENSE].changed or package.changed,
        package.old,
        package.new,
    )
    change_set = ChangeSet(MappingProxyType(changes))

    fields = {
        Attribute.PROJECT_NAME: "project_name",
        Attribute.PACKAGE_NAME: "package_name",
        Attribute.LICENSE: "license",
        Attribute.AUTHOR: "author",
        Attribute.AUTHOR_EMAIL: "author_email",
    }
    update = {name: changes[attribute].new for attribute, name in fields.items() if changes[attribute].changed}
    try:
        metadata = ProjectMetadata.model_validate({**old.model_dump(), **update})
    except ValidationError as exc:
        raise ProjectValidationError(str(exc)) from exc

    if change_set:
        LOGGER.debug("changed attributes: %s", ", ".join(attribute.value for attribute in change_set))
    else:
        LOGGER.debug("no attribute changed")

    tags = build_tags(metadata, author_is_org=options.author_is_org, year=year)
    return Resolution(tags=tags, changes=change_set, metadata=metadata)
