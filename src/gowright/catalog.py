"""Lookup tables for the supported project types, licenses and VCS."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .errors import UnsupportedLicenseError, UnsupportedProjectTypeError, UnsupportedVCSError

__all__ = [
    "LICENSES",
    "License",
    "PROJECT_TYPES",
    "VCS_SYSTEMS",
    "check_license",
    "check_project_type",
    "check_vcs",
    "license_family",
]


@dataclass(frozen=True, slots=True)
class License:
    """A supported license.

    ``templated`` licenses embed the year and the project name, so their text
    is rendered instead of copied verbatim.
    """

    name: str
    filename: str | None = None
    templated: bool = False


PROJECT_TYPES: Mapping[str, str] = {
    "cmd": "command line program",
    "pkg": "package",
    "cgo": "package that calls C code",
}

LICENSES: Mapping[str, License] = {
    "apache": License("Apache License, version 2.0", "apache.txt"),
    "bsd-2": License("BSD 2-Clause License", "bsd-2.txt", templated=True),
    "bsd-3": License("BSD 3-Clause License", "bsd-3.txt", templated=True),
    "cc0": License("Creative Commons CC0, version 1.0 Universal", "cc0.txt"),
    "gpl": License("GNU General Public License, version 3 or later", "gpl.txt"),
    "lgpl": License("GNU Lesser General Public License, version 3 or later", "lgpl.txt"),
    "mpl": License("Mozilla Public License, version 2.0", "mpl.txt"),
    "none": License("proprietary license"),
}

VCS_SYSTEMS: Mapping[str, str] = {
    "bzr": "Bazaar",
    "git": "Git",
    "hg": "Mercurial",
    "none": "none",
}


def check_license(license_id: str) -> License:
    try:
        return LICENSES[license_id]
    except KeyError:
        raise UnsupportedLicenseError(license_id) from None


def check_vcs(vcs: str) -> str:
    try:
        return VCS_SYSTEMS[vcs]
    except KeyError:
        raise UnsupportedVCSError(vcs) from None


def check_project_type(project_type: str) -> str:
    try:
        return PROJECT_TYPES[project_type]
    except KeyError:
        raise UnsupportedProjectTypeError(project_type) from None


def license_family(license_id: str) -> str:
    """Return the family of ``license_id``: ``bsd-2`` and ``bsd-3`` are both ``bsd``."""

    return license_id.split("-", 1)[0]
