"""Renaming of the package and project directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import FileOperationError

__all__ = ["rename_package_dir", "rename_project_dir"]

LOGGER = logging.getLogger(__name__)


def _move(source: Path, destination: Path) -> None:
    if destination.exists():
        raise FileOperationError(destination, "destination already exists")
    try:
        source.rename(destination)
    except OSError as exc:
        raise FileOperationError(source, exc.strerror or str(exc)) from exc
    LOGGER.debug("renamed %s to %s", source, destination)


def rename_package_dir(root: str | Path, old: str, new: str) -> Path:
    """Rename the package directory ``root/old`` to ``root/new``."""

    root = Path(root)
    destination = root / new
    _move(root / old, destination)
    return destination


def rename_project_dir(root: str | Path, new_name: str) -> Path:
    """Rename the project directory ``root`` to ``new_name`` within its parent.

    A directory cannot be renamed while it is the working directory, so when
    the process runs inside ``root`` it first moves to the parent and then
    back into the renamed directory.
    """

    root = Path(root).resolve()
    destination = root.parent / new_name
    if destination == root:
        return root

    cwd = Path.cwd().resolve()
    inside = cwd == root or root in cwd.parents
    if inside:
        os.chdir(root.parent)
    target = root
    try:
        _move(root, destination)
        target = destination
    finally:
        if inside:
            os.chdir(target / cwd.relative_to(root))
    return destination
