"""Persisted project identity stored in the ``Metadata`` INI file.

The record is loosely based on the metadata for Python software packages
(PEP 314): ``Name`` is split into ``project-name`` and ``package-name`` and
the ``project-type`` and ``vcs`` fields are added.
"""

from __future__ import annotations

import configparser
import logging
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .catalog import LICENSES, PROJECT_TYPES, VCS_SYSTEMS
from .errors import (
    FileOperationError,
    MalformedMetadataError,
    MetadataNotFoundError,
    MissingFieldError,
)
from .naming import is_valid_package_name

__all__ = [
    "FORMAT_VERSION",
    "METADATA_FILENAME",
    "ProjectMetadata",
    "load_metadata",
    "metadata_path",
    "save_metadata",
]

LOGGER = logging.getLogger(__name__)

METADATA_FILENAME = "Metadata"
FORMAT_VERSION = "1.1"
FILE_MODE = 0o644

_HEADER = "# Generated by gowright\n\n"
_VERSION_KEY = "metadata-version"

# (attribute, key) pairs for every section, in the order they are written.
CORE_FIELDS = (
    ("project_type", "project-type"),
    ("project_name", "project-name"),
    ("package_name", "package-name"),
    ("license", "license"),
    ("vcs", "vcs"),
)
MAIN_FIELDS = (
    ("version", "version"),
    ("summary", "summary"),
    ("download_url", "download-url"),
    ("author", "author"),
    ("author_email", "author-email"),
)
OPTIONAL_FIELDS = (
    ("homepage", "home-page"),
    ("keywords", "keywords"),
)

SECTIONS = (
    ("CORE", CORE_FIELDS),
    ("Main", MAIN_FIELDS),
    ("Optional", OPTIONAL_FIELDS),
)


class ProjectMetadata(BaseModel):
    """Identity of a generated project."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    project_type: str = Field(..., description="Kind of project: cmd, pkg or cgo.")
    project_name: str = Field(..., description="Display name of the project, e.g. 'My-Tool'.")
    package_name: str = Field(..., description="Lower case name of the package directory.")
    license: str = Field(..., description="License identifier from the license catalog.")
    vcs: str = Field(..., description="Version control system identifier.")
    author: str = Field(default="", description="Name of the author or organization.")
    author_email: str = Field(default="", description="Email of the author.")
    version: str = Field(default="", description="Version number of the package.")
    summary: str = Field(default="", description="One-line summary of what the package does.")
    download_url: str = Field(default="", description="URL the package can be downloaded from.")
    homepage: str = Field(default="", description="URL of the project home page.")
    keywords: str = Field(default="", description="Keywords to help searching for the package.")

    @field_validator("*")
    @classmethod
    def _single_line(cls, value: str) -> str:
        if "\n" in value or "\r" in value:
            raise ValueError("value must fit on a single line")
        return value

    @field_validator("project_type")
    @classmethod
    def _known_project_type(cls, value: str) -> str:
        if value not in PROJECT_TYPES:
            raise ValueError(f"unsupported project type '{value}'")
        return value

    @field_validator("project_name")
    @classmethod
    def _non_empty_name(cls, value: str) -> str:
        if not value:
            raise ValueError("project name must not be empty")
        return value

    @field_validator("package_name")
    @classmethod
    def _valid_package_name(cls, value: str) -> str:
        if not is_valid_package_name(value):
            raise ValueError(f"invalid package name '{value}'")
        return value

    @field_validator("license")
    @classmethod
    def _known_license(cls, value: str) -> str:
        if value not in LICENSES:
            raise ValueError(f"unsupported license '{value}'")
        return value

    @field_validator("vcs")
    @classmethod
    def _known_vcs(cls, value: str) -> str:
        if value not in VCS_SYSTEMS:
            raise ValueError(f"unsupported version control system '{value}'")
        return value


def metadata_path(path: str | Path) -> Path:
    """Return the metadata file for ``path``, a project root or the file itself."""

    path = Path(path)
    if path.is_dir():
        return path / METADATA_FILENAME
    return path


def load_metadata(path: str | Path) -> ProjectMetadata:
    """Read the metadata record stored at ``path``."""

    file_path = metadata_path(path)
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with file_path.open(encoding="utf-8") as handle:
            parser.read_file(handle)
    except FileNotFoundError:
        raise MetadataNotFoundError(file_path) from None
    except OSError as exc:
        raise FileOperationError(file_path, exc.strerror or str(exc)) from exc
    except (configparser.Error, UnicodeDecodeError) as exc:
        raise MalformedMetadataError(file_path, str(exc)) from exc

    for section, _ in SECTIONS:
        if not parser.has_section(section):
            raise MalformedMetadataError(file_path, f"missing section [{section}]")

    version = parser.get("CORE", _VERSION_KEY, fallback=FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise MalformedMetadataError(file_path, f"unsupported metadata version '{version}'")

    values: dict[str, str] = {}
    for attribute, key in CORE_FIELDS:
        if not parser.has_option("CORE", key):
            raise MissingFieldError(key)
        values[attribute] = parser.get("CORE", key)
    for section, fields in SECTIONS[1:]:
        for attribute, key in fields:
            values[attribute] = parser.get(section, key, fallback="")

    try:
        metadata = ProjectMetadata.model_validate(values)
    except ValidationError as exc:
        raise MalformedMetadataError(file_path, str(exc)) from exc

    LOGGER.debug("loaded metadata for %r from %s", metadata.project_name, file_path)
    return metadata


def save_metadata(metadata: ProjectMetadata, path: str | Path) -> Path:
    """Write ``metadata`` to ``path``, replacing any previous record.

    The file is written to a temporary sibling and moved into place, so a
    failure never leaves a truncated record behind.
    """

    file_path = metadata_path(path)
    parser = configparser.ConfigParser(interpolation=None)
    for section, fields in SECTIONS:
        parser.add_section(section)
        if section == "CORE":
            parser.set(section, _VERSION_KEY, FORMAT_VERSION)
        for attribute, key in fields:
            parser.set(section, key, getattr(metadata, attribute))

    try:
        fd, temporary = tempfile.mkstemp(prefix=f".{METADATA_FILENAME}-", dir=file_path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(_HEADER)
                parser.write(handle)
            os.chmod(temporary, FILE_MODE)
            os.replace(temporary, file_path)
        except BaseException:
            Path(temporary).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise FileOperationError(file_path, exc.strerror or str(exc)) from exc

    LOGGER.debug("saved metadata for %r to %s", metadata.project_name, file_path)
    return file_path
