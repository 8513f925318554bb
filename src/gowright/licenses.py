"""License files of generated projects."""

from __future__ import annotations

import logging
import os
from importlib import resources
from pathlib import Path

from .catalog import check_license
from .errors import FileOperationError
from .fileops import FILE_MODE, write_file
from .tags import TagSet
from .template import TemplateRenderer

__all__ = ["GPL_COMPANION_FILENAME", "LICENSE_FILENAME", "add_license", "license_text"]

LOGGER = logging.getLogger(__name__)

LICENSE_FILENAME = "LICENSE"
GPL_COMPANION_FILENAME = "LICENSE-GPL"


def _resource(filename: str):
    return resources.files("gowright").joinpath("data", "licenses", filename)


def license_text(license_id: str) -> str:
    """Return the shipped text of ``license_id``, placeholders included."""

    info = check_license(license_id)
    if info.filename is None:
        return ""
    return _resource(info.filename).read_text(encoding="utf-8")


def _copy_resource(filename: str, destination: Path) -> Path:
    try:
        destination.write_bytes(_resource(filename).read_bytes())
        os.chmod(destination, FILE_MODE)
    except OSError as exc:
        raise FileOperationError(destination, exc.strerror or str(exc)) from exc
    return destination


def add_license(
    directory: str | Path,
    license_id: str,
    tags: TagSet,
    renderer: TemplateRenderer,
    *,
    year: int | None = None,
) -> list[Path]:
    """Write the license files of ``license_id`` into ``directory``.

    Existing files are overwritten. ``none`` writes nothing. Licenses that
    embed the project name are rendered with ``tags``; ``year`` replaces the
    ``year`` tag so an update keeps the original year. The LGPL is
    accompanied by the GPL text it builds upon.
    """

    directory = Path(directory)
    info = check_license(license_id)
    if info.filename is None:
        LOGGER.debug("license %r has no license file", license_id)
        return []

    destination = directory / LICENSE_FILENAME
    if info.templated:
        context = dict(tags)
        if year is not None:
            context["year"] = str(year)
        write_file(destination, renderer.render_string(license_text(license_id), context))
    else:
        _copy_resource(info.filename, destination)
    written = [destination]

    if license_id == "lgpl":
        written.append(_copy_resource(check_license("gpl").filename, directory / GPL_COMPANION_FILENAME))

    LOGGER.debug("wrote %s for license %r", ", ".join(str(path) for path in written), license_id)
    return written
