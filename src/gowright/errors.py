"""Exception hierarchy shared by the gowright components."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class WizardError(RuntimeError):
    """Base class for every error raised by gowright."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(WizardError):
    """The stored metadata is missing or cannot be used."""


class MetadataNotFoundError(ConfigError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"metadata file not found: {self.path}")


class MalformedMetadataError(ConfigError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"malformed metadata file {self.path}: {reason}")


class MissingFieldError(ConfigError):
    """A required field is absent from the ``CORE`` section."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"metadata: section CORE has no field '{field}'")


class ProjectValidationError(WizardError):
    """A requested value is not acceptable."""


class UnsupportedLicenseError(ProjectValidationError):
    def __init__(self, license_id: str) -> None:
        self.license_id = license_id
        super().__init__(f"unsupported license '{license_id}'")


class UnsupportedVCSError(ProjectValidationError):
    def __init__(self, vcs: str) -> None:
        self.vcs = vcs
        super().__init__(f"unsupported version control system '{vcs}'")


class UnsupportedProjectTypeError(ProjectValidationError):
    def __init__(self, project_type: str) -> None:
        self.project_type = project_type
        super().__init__(f"unsupported project type '{project_type}'")


class MissingProjectNameError(ProjectValidationError):
    def __init__(self) -> None:
        super().__init__("project name must not be empty")


class InvalidPackageNameError(ProjectValidationError):
    def __init__(self, package_name: str) -> None:
        self.package_name = package_name
        super().__init__(
            f"invalid package name '{package_name}': expected a lower case name without path separators"
        )


class FileOperationError(WizardError):
    """A filesystem operation on ``path`` failed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class BackupError(FileOperationError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, f"backup failed: {reason}")


class ExternalToolError(WizardError):
    """An external command could not be run or exited with an error."""

    def __init__(self, command: Sequence[str], reason: str, output: str = "") -> None:
        self.command = tuple(command)
        self.reason = reason
        self.output = output
        super().__init__(f"command '{' '.join(self.command)}' failed: {reason}")


__all__ = [
    "BackupError",
    "ConfigError",
    "ExternalToolError",
    "FileOperationError",
    "InvalidPackageNameError",
    "MalformedMetadataError",
    "MetadataNotFoundError",
    "MissingFieldError",
    "MissingProjectNameError",
    "ProjectValidationError",
    "UnsupportedLicenseError",
    "UnsupportedProjectTypeError",
    "UnsupportedVCSError",
    "WizardError",
]
