"""Filesystem helpers shared by the generator and the synchronizer."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .errors import BackupError, FileOperationError

__all__ = [
    "BACKUP_SUFFIX",
    "DIRECTORY_MODE",
    "EditBuffer",
    "FILE_MODE",
    "backup_file",
    "backup_path",
    "replace_file",
    "scoped_edit",
    "write_file",
]

LOGGER = logging.getLogger(__name__)

FILE_MODE = 0o644
DIRECTORY_MODE = 0o755
BACKUP_SUFFIX = "~"


def backup_path(path: Path) -> Path:
    """Return where the backup of ``path`` is kept: a sibling ending in ``~``."""

    return path.with_name(path.name + BACKUP_SUFFIX)


def backup_file(path: str | Path) -> Path:
    """Copy ``path`` to its backup location, keeping permissions and times."""

    path = Path(path)
    destination = backup_path(path)
    try:
        shutil.copyfile(path, destination)
        shutil.copystat(path, destination)
    except OSError as exc:
        raise BackupError(path, exc.strerror or str(exc)) from exc
    LOGGER.debug("backed up %s to %s", path, destination)
    return destination


def write_file(path: str | Path, content: str, *, mode: int = FILE_MODE) -> Path:
    """Create ``path`` with ``content``, making parent directories as needed."""

    path = Path(path)
    try:
        path.parent.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        os.chmod(path, mode)
    except OSError as exc:
        raise FileOperationError(path, exc.strerror or str(exc)) from exc
    return path


def replace_file(path: str | Path, content: str) -> Path:
    """Replace the content of the existing file ``path``, keeping its permissions.

    The new content goes to a temporary sibling that is moved over ``path``.
    """

    path = Path(path)
    try:
        mode = path.stat().st_mode & 0o7777
        fd, temporary = tempfile.mkstemp(prefix=f".{path.name}-", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            os.chmod(temporary, mode)
            os.replace(temporary, path)
        except BaseException:
            Path(temporary).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise FileOperationError(path, exc.strerror or str(exc)) from exc
    return path


@dataclass(slots=True)
class EditBuffer:
    """Content of a file being edited inside :func:`scoped_edit`."""

    path: Path
    original: str
    text: str

    @property
    def changed(self) -> bool:
        return self.text != self.original


@contextmanager
def scoped_edit(path: str | Path) -> Iterator[EditBuffer]:
    """Edit ``path`` in place after backing it up.

    The backup is written before the file is read; if it cannot be written the
    file is left alone. The edited text is written back when the block exits
    normally and the text changed. On any error the original file is not
    touched and the backup stays in place.
    """

    path = Path(path)
    backup_file(path)
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            original = handle.read()
    except OSError as exc:
        raise FileOperationError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise FileOperationError(path, f"not a UTF-8 text file: {exc.reason}") from exc

    buffer = EditBuffer(path=path, original=original, text=original)
    yield buffer
    if buffer.changed:
        replace_file(path, buffer.text)
        LOGGER.debug("rewrote %s", path)
