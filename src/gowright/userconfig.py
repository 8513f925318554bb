"""Per-user defaults for new projects (``~/.gowright``)."""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path
from typing import Mapping

from .config import WizardOptions
from .errors import ConfigError, FileOperationError

__all__ = ["USER_CONFIG_ENV", "USER_CONFIG_KEYS", "load_user_defaults", "save_user_defaults", "user_config_path"]

LOGGER = logging.getLogger(__name__)

USER_CONFIG_ENV = "GOWRIGHT_CONFIG"
USER_CONFIG_FILENAME = ".gowright"
USER_CONFIG_KEYS = ("author", "email", "license", "vcs", "type")


def user_config_path() -> Path:
    override = os.environ.get(USER_CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / USER_CONFIG_FILENAME


def load_user_defaults(path: str | Path | None = None) -> dict[str, str]:
    """Return the defaults stored in the user configuration file.

    A missing file yields an empty mapping.
    """

    config_path = Path(path) if path is not None else user_config_path()
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with config_path.open(encoding="utf-8") as handle:
            parser.read_file(handle)
    except FileNotFoundError:
        LOGGER.debug("no user configuration at %s", config_path)
        return {}
    except OSError as exc:
        raise FileOperationError(config_path, exc.strerror or str(exc)) from exc
    except configparser.Error as exc:
        raise ConfigError(f"malformed user configuration {config_path}: {exc}") from exc

    defaults = parser.defaults()
    return {key: defaults[key] for key in USER_CONFIG_KEYS if defaults.get(key)}


def save_user_defaults(options: WizardOptions, path: str | Path | None = None) -> Path:
    """Store the author, email, license, VCS and project type of ``options``."""

    config_path = Path(path) if path is not None else user_config_path()
    values: Mapping[str, str | None] = {
        "author": options.author,
        "email": options.author_email,
        "license": options.license,
        "vcs": options.vcs,
        "type": options.project_type,
    }
    parser = configparser.ConfigParser(interpolation=None)
    parser["DEFAULT"] = {key: value for key, value in values.items() if value}
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w", encoding="utf-8") as handle:
            parser.write(handle)
    except OSError as exc:
        raise FileOperationError(config_path, exc.strerror or str(exc)) from exc
    LOGGER.debug("saved user defaults to %s", config_path)
    return config_path
