"""Name derivation helpers used when a project is first created."""

from __future__ import annotations

import os
import re

__all__ = ["derive_package_name", "is_valid_package_name", "project_dir_name"]


_GO_PREFIX = re.compile(r"^go(?=.)")
_WHITESPACE = re.compile(r"\s+")


def derive_package_name(project_name: str) -> str:
    """Return the default package name for ``project_name``.

    The last ``-`` separated token is kept, a leading ``go`` is dropped when
    something remains after it, and the result is lower cased::

        >>> derive_package_name("goweb-foo")
        'foo'
        >>> derive_package_name("go-tool")
        'tool'
        >>> derive_package_name("Acme-Runner")
        'runner'
    """

    last = project_name.strip().rsplit("-", 1)[-1]
    last = _WHITESPACE.sub("", last).lower()
    return _GO_PREFIX.sub("", last)


def project_dir_name(project_name: str) -> str:
    """Return the directory holding the project, the lower cased display name."""

    return project_name.strip().lower()


def is_valid_package_name(name: str) -> bool:
    if not name or name != name.lower() or _WHITESPACE.search(name):
        return False
    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    return not any(separator in name for separator in separators)
