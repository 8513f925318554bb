from __future__ import annotations

import datetime

import pytest

from gowright.template import (
    TemplateRenderer,
    TemplateRenderingError,
    extract_year,
    header_template_for,
    replace_year,
)

TAGS = {
    "project_name": "Acme-Runner",
    "package_name": "runner",
    "license_name": "BSD 2-Clause License",
    "gnu_extra": "",
    "year": "2010",
}


def test_render_string_with_filters(renderer: TemplateRenderer):
    template = "Project {{ name|upper }} uses package {{ package|lower }}"
    context = {"name": "sample app", "package": "Runner"}
    rendered = renderer.render_string(template, context)
    assert rendered == "Project SAMPLE APP uses package runner"


def test_render_string_missing_value_is_an_error(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("Hello {{ missing }}", {})


def test_render_string_missing_policy_keep(renderer: TemplateRenderer):
    template = "Hello {{ missing }}"
    assert renderer.render_string(template, {}, missing="keep") == template


def test_render_string_dotted_lookup(renderer: TemplateRenderer):
    assert renderer.render_string("{{ author.name }}", {"author": {"name": "Jane"}}) == "Jane"


def test_empty_values_are_rendered(renderer: TemplateRenderer):
    assert renderer.render_string("[{{ value }}]", {"value": ""}) == "[]"


def test_unknown_filter_raises(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("{{ name|unknown }}", {"name": "demo"})


def test_unknown_template_raises(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render("nope", TAGS)


@pytest.mark.parametrize(
    "license_id, expected",
    [
        ("bsd-2", "header_bsd"),
        ("bsd-3", "header_bsd"),
        ("apache", "header_apache"),
        ("gpl", "header_gnu"),
        ("lgpl", "header_gnu"),
        ("mpl", "header_mpl"),
        ("cc0", "header_cc0"),
        ("none", "header_none"),
    ],
)
def test_header_template_for(license_id, expected):
    assert header_template_for(license_id) == expected


def test_header_template_for_unknown_license():
    with pytest.raises(TemplateRenderingError):
        header_template_for("wtfpl")


def test_render_header_prefixes_every_line(renderer: TemplateRenderer):
    header = renderer.render_header("header_bsd", TAGS, comment="#")
    lines = header.splitlines()

    assert lines[0] == '# Copyright 2010  The "Acme-Runner" Authors'
    assert "# Use of this source code is governed by the BSD 2-Clause License" in lines
    assert all(line.startswith("#") for line in lines)


def test_render_header_cc0_uses_copyleft_wording(renderer: TemplateRenderer):
    header = renderer.render_header("header_cc0", TAGS, comment="//", year=1999)
    assert header.startswith('// Written in 1999 by the "Acme-Runner" Authors\n')


def test_render_header_lesser_gnu(renderer: TemplateRenderer):
    header = renderer.render_header("header_gnu", {**TAGS, "gnu_extra": "Lesser "}, comment="//")
    assert "GNU Lesser General Public License as published by" in header


def test_render_header_defaults_to_current_year(renderer: TemplateRenderer):
    tags = {key: value for key, value in TAGS.items() if key != "year"}
    header = renderer.render_header("header_none", tags, comment="//")
    assert header == f'// Copyright {datetime.date.today().year}  The "Acme-Runner" Authors\n'


def test_render_nested_composes_header(renderer: TemplateRenderer):
    rendered = renderer.render_nested("test", "header_none", TAGS, comment="//")
    assert rendered.startswith('// Copyright 2010  The "Acme-Runner" Authors\n\npackage runner\n')


@pytest.mark.parametrize(
    "text, expected",
    [
        ('// Copyright 2010  The "X" Authors\n', 2010),
        ('# Written in 2003 by the "X" Authors\n', 2003),
        ("Copyright (c) 1998, The \"X\" Authors\n", 1998),
        ("package main\n", None),
    ],
)
def test_extract_year(text, expected):
    assert extract_year(text) == expected


def test_replace_year():
    header = '// Copyright 2009  The "Acme" Authors\n// Copyright 2001 Other\n'

    assert replace_year(header, 2024) == '// Copyright 2024  The "Acme" Authors\n// Copyright 2001 Other\n'
    assert replace_year("// no year here\n", 2024) == "// no year here\n"
    assert replace_year("// Written in 2010 by the authors\n", 2011) == "// Written in 2011 by the authors\n"
