"""Rendering of the file templates, copyright headers and license texts."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, MutableMapping

from .catalog import license_family
from .errors import WizardError
from .templates import TEMPLATES

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
    "extract_year",
    "header_template_for",
    "replace_year",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")
_YEAR_PATTERN = re.compile(r"(?:Copyright(?:\s+\([cC]\))?|Written in)\s+(?P<year>\d{4})\b")

_DEFAULT_FILTERS: Mapping[str, Callable[[Any], Any]] = {
    "upper": lambda value: str(value).upper(),
    "lower": lambda value: str(value).lower(),
    "title": lambda value: str(value).title(),
    "strip": lambda value: str(value).strip(),
}

_HEADER_BY_FAMILY = {
    "apache": "header_apache",
    "bsd": "header_bsd",
    "cc0": "header_cc0",
    "gpl": "header_gnu",
    "lgpl": "header_gnu",
    "mpl": "header_mpl",
    "none": "header_none",
}


class TemplateRenderingError(WizardError):
    """Raised when the renderer cannot evaluate a placeholder."""


def header_template_for(license_id: str) -> str:
    """Return the name of the header template used for ``license_id``."""

    try:
        return _HEADER_BY_FAMILY[license_family(license_id)]
    except KeyError:
        raise TemplateRenderingError(f"no header template for license '{license_id}'") from None


def extract_year(text: str) -> int | None:
    """Return the year of the first copyright line found in ``text``."""

    match = _YEAR_PATTERN.search(text)
    if match is None:
        return None
    return int(match.group("year"))


def replace_year(text: str, year: int) -> str:
    """Return ``text`` with the year of its first copyright line set to ``year``."""

    match = _YEAR_PATTERN.search(text)
    if match is None:
        return text
    return text[: match.start("year")] + str(year) + text[match.end("year") :]


def _resolve_value(context: Mapping[str, Any], dotted_path: str) -> Any:
    value: Any = context
    for segment in dotted_path.split("."):
        if not isinstance(value, Mapping) or segment not in value:
            raise KeyError(segment)
        value = value[segment]
    return value


def _apply_filter(value: Any, filter_name: str, filters: Mapping[str, Callable[[Any], Any]]) -> Any:
    try:
        filter_func = filters[filter_name]
    except KeyError as exc:
        raise TemplateRenderingError(f"unknown filter '{filter_name}'") from exc

    return filter_func(value)


@dataclass(slots=True)
class TemplateRenderer:
    """Render named templates with ``{{ placeholder|filters }}`` expressions."""

    templates: Mapping[str, str] = field(default_factory=lambda: dict(TEMPLATES))
    filters: MutableMapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name, func in _DEFAULT_FILTERS.items():
            self.filters.setdefault(name, func)

    def render_string(
        self,
        template: str,
        context: Mapping[str, Any],
        *,
        missing: str = "error",
    ) -> str:
        """Substitute every ``{{ key|filter }}`` placeholder of ``template``.

        ``missing`` decides what an unknown key does: ``"error"`` (the
        default) raises :class:`TemplateRenderingError`, ``"keep"`` leaves
        the placeholder in the output.
        """

        if missing not in ("keep", "error"):
            raise ValueError(f"invalid missing policy {missing!r}")

        def evaluate(match: re.Match[str]) -> str:
            key, *filter_names = [part.strip() for part in match.group("expression").split("|")]
            if not key:
                return match.group(0)
            try:
                value = _resolve_value(context, key)
            except KeyError:
                if missing == "error":
                    raise TemplateRenderingError(f"missing value for '{key}'") from None
                return match.group(0)
            for filter_name in filter(None, filter_names):
                value = _apply_filter(value, filter_name, self.filters)
            return str(value)

        return _PLACEHOLDER_PATTERN.sub(evaluate, template)

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Render the template registered as ``name``."""

        try:
            template = self.templates[name]
        except KeyError:
            raise TemplateRenderingError(f"unknown template '{name}'") from None
        return self.render_string(template, context)

    def render_header(
        self,
        header_name: str,
        context: Mapping[str, Any],
        *,
        comment: str,
        year: int | None = None,
    ) -> str:
        """Render the copyright header ``header_name``.

        Every line is prefixed with ``comment``. The year defaults to the
        ``year`` tag, then to the current local year; the update path passes
        the year found in the existing header instead.
        """

        values = dict(context)
        values["comment"] = comment
        if year is not None:
            values["year"] = str(year)
        else:
            values.setdefault("year", str(datetime.date.today().year))
        copyright_name = "copyleft" if header_name == "header_cc0" else "copyright"
        values["copyright"] = self.render(copyright_name, values)
        return self.render(header_name, values)

    def render_nested(
        self,
        template_name: str,
        header_name: str,
        context: Mapping[str, Any],
        *,
        comment: str = "//",
        year: int | None = None,
    ) -> str:
        """Render ``template_name`` with the header ``header_name`` composed into it."""

        header = self.render_header(header_name, context, comment=comment, year=year)
        return self.render(template_name, {**context, "header": header})
