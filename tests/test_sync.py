from __future__ import annotations

from pathlib import Path

import pytest

from gowright.config import WizardOptions
from gowright.fileops import backup_path
from gowright.metadata import load_metadata
from gowright.sync import (
    FileSynchronizer,
    find_documents,
    find_source_files,
    refresh_header,
    replace_install_path,
    replace_package_name,
    split_header,
)
from gowright.tags import resolve_new, resolve_update
from gowright.template import TemplateRenderer

GO_SOURCE = """// Copyright 2010  The "Acme-Runner" Authors

package runner

import (
	"fmt"
	"example.com/acme/runner"
	"example.com/acme/runner/internal"
	"example.com/acme/runnerx"
)
"""


def test_replace_package_name_in_go_source():
    result = replace_package_name(GO_SOURCE, "runner", "walker")

    assert "package walker\n" in result
    assert '"example.com/acme/walker"' in result
    assert '"example.com/acme/runner/internal"' in result
    assert '"example.com/acme/runnerx"' in result
    assert '"fmt"' in result


def test_replace_package_name_in_test_package():
    assert replace_package_name("package runner_test\n", "runner", "walker") == "package walker_test\n"
    assert replace_package_name("package runners\n", "runner", "walker") == "package runners\n"


def test_replace_package_name_in_makefile():
    makefile = "include $(GOROOT)/src/Make.inc\n\nTARG=example.com/runner\nGOFILES=\\\n\trunner.go\\\n"
    result = replace_package_name(makefile, "runner", "walker", makefile=True)

    assert "TARG=example.com/walker\n" in result
    assert "\trunner.go\\\n" in result


def test_split_header():
    header, body = split_header("// one\n// two\n\npackage main\n", "//")
    assert header == "// one\n// two\n"
    assert body == "\npackage main\n"


def test_refresh_header_keeps_year(renderer: TemplateRenderer):
    tags = {"license": "cc0", "project_name": "Acme-Runner", "year": "2024"}
    result = refresh_header(GO_SOURCE, tags, renderer, comment="//")

    assert result.startswith('// Written in 2010 by the "Acme-Runner" Authors\n//\n// To the extent possible')
    assert result.endswith(GO_SOURCE[GO_SOURCE.index("\npackage"):])


def test_refresh_header_prepends_when_missing(renderer: TemplateRenderer):
    tags = {"license": "none", "project_name": "Acme-Runner", "year": "2024"}
    result = refresh_header("// Package runner runs.\npackage runner\n", tags, renderer, comment="//")

    assert result == (
        '// Copyright 2024  The "Acme-Runner" Authors\n\n// Package runner runs.\npackage runner\n'
    )


def test_find_files(create_project):
    root = create_project(project_type="pkg", license="bsd-3")
    (root / ".git").mkdir()
    (root / ".git" / "notes.md").write_text("hidden", encoding="utf-8")
    (root / "runner" / "internal").mkdir()
    (root / "runner" / "internal" / "util.go").write_text("package internal\n", encoding="utf-8")

    sources = [path.relative_to(root).as_posix() for path in find_source_files(root / "runner")]
    documents = [path.relative_to(root).as_posix() for path in find_documents(root)]

    assert sources == ["runner/internal/util.go", "runner/runner.go", "runner/runner_test.go", "runner/Makefile"]
    assert documents == ["AUTHORS.md", "CONTRIBUTORS.md", "NEWS.md", "README.md"]


def test_apply_renames_package_everywhere(create_project, renderer: TemplateRenderer):
    root = create_project(project_type="pkg")
    old = load_metadata(root)
    resolution = resolve_update(old, WizardOptions(package_name="walker"))

    report = FileSynchronizer(renderer).apply(root, resolution.changes, resolution.tags, old)

    assert report.ok
    assert sorted(path.name for path in report.updated) == ["Makefile", "README.md", "runner.go", "runner_test.go"]
    assert "package walker\n" in (root / "runner" / "runner.go").read_text(encoding="utf-8")
    assert "package walker\n" in (root / "runner" / "runner_test.go").read_text(encoding="utf-8")
    assert "TARG=walker\n" in (root / "runner" / "Makefile").read_text(encoding="utf-8")
    for path in report.updated:
        assert backup_path(path).exists()
    assert "TARG=runner\n" in backup_path(root / "runner" / "Makefile").read_text(encoding="utf-8")
    assert "    go get walker\n" in (root / "README.md").read_text(encoding="utf-8")
    assert root / "AUTHORS.md" in report.unchanged


def test_apply_rewrites_documents_on_project_rename(create_project, renderer: TemplateRenderer):
    root = create_project()
    old = load_metadata(root)
    resolution = resolve_update(old, WizardOptions(project_name="Acme-Walker"))

    report = FileSynchronizer(renderer).apply(root, resolution.changes, resolution.tags, old)

    assert report.ok
    readme = (root / "README.md").read_text(encoding="utf-8")
    assert readme.startswith("# Acme-Walker\n")
    assert "Acme-Runner" not in readme
    header = (root / "runner" / "runner.go").read_text(encoding="utf-8").splitlines()[0]
    assert header == '// Copyright 2010  The "Acme-Walker" Authors'


def test_apply_replaces_author_in_documents(create_project, renderer: TemplateRenderer):
    root = create_project()
    old = load_metadata(root)
    resolution = resolve_update(old, WizardOptions(author="John Roe", author_email="john@example.com"))

    report = FileSynchronizer(renderer).apply(root, resolution.changes, resolution.tags, old)

    assert report.ok
    authors = (root / "AUTHORS.md").read_text(encoding="utf-8")
    assert "John Roe <john@example.com>" in authors
    assert "Jane Doe" not in authors
    # sources are untouched by an author change
    assert not backup_path(root / "runner" / "runner.go").exists()


def test_apply_collects_failures_and_continues(create_project, renderer: TemplateRenderer):
    root = create_project(project_type="pkg")
    old = load_metadata(root)
    resolution = resolve_update(old, WizardOptions(license="mpl"))
    broken = root / "runner" / "runner.go"
    broken.write_bytes(b"\xff\xfe not utf-8")

    report = FileSynchronizer(renderer).apply(root, resolution.changes, resolution.tags, old)

    assert [failure.path for failure in report.failed] == [broken]
    assert broken.read_bytes() == b"\xff\xfe not utf-8"
    assert root / "runner" / "runner_test.go" in report.updated
    assert "http://mozilla.org/MPL/2.0/" in (root / "runner" / "Makefile").read_text(encoding="utf-8")


def test_apply_backup_failure_leaves_file_untouched(create_project, renderer: TemplateRenderer):
    root = create_project()
    old = load_metadata(root)
    resolution = resolve_update(old, WizardOptions(license="apache"))
    source = root / "runner" / "runner.go"
    original = source.read_text(encoding="utf-8")
    backup_path(source).mkdir()

    report = FileSynchronizer(renderer).apply(root, resolution.changes, resolution.tags, old)

    assert [failure.path for failure in report.failed] == [source]
    assert "backup failed" in report.failed[0].reason
    assert source.read_text(encoding="utf-8") == original


@pytest.mark.parametrize("license_id", ["gpl", "lgpl"])
def test_apply_gnu_headers(create_project, renderer: TemplateRenderer, license_id: str):
    root = create_project()
    old = load_metadata(root)
    resolution = resolve_update(old, WizardOptions(license=license_id))

    FileSynchronizer(renderer).apply(root, resolution.changes, resolution.tags, old)

    text = (root / "runner" / "Makefile").read_text(encoding="utf-8")
    assert text.startswith('# Copyright 2010  The "Acme-Runner" Authors\n#\n# This program is free software')
    assert ("GNU Lesser General" in text) is (license_id == "lgpl")
    assert "include $(GOROOT)/src/Make.inc" in text


def test_replace_package_name_leaves_other_literals():
    source = (
        "package runner\n\n"
        'import "example.com/acme/runner"\n\n'
        "func main() {\n"
        '\tfmt.Println("runner")\n'
        '\tp := base + "/runner"\n'
        "}\n"
    )

    result = replace_package_name(source, "runner", "walker")

    assert 'import "example.com/acme/walker"\n' in result
    assert '\tfmt.Println("runner")\n' in result
    assert '\tp := base + "/runner"\n' in result


def test_replace_package_name_in_aliased_import_block():
    source = 'package main\n\nimport (\n\tr "example.com/runner"\n)\n\nvar name = "example.com/runner"\n'

    result = replace_package_name(source, "runner", "walker")

    assert '\tr "example.com/walker"\n' in result
    assert 'var name = "example.com/runner"\n' in result


def test_replace_install_path():
    text = "    go get example.com/runner\n    go get runner\n    go get runnerx\nrunner\n"

    assert replace_install_path(text, "runner", "walker") == (
        "    go get example.com/walker\n    go get walker\n    go get runnerx\nrunner\n"
    )


def test_refresh_header_keeps_doc_comment_below_known_header(renderer: TemplateRenderer):
    previous = {"license": "none", "project_name": "Acme-Runner", "year": "2010"}
    tags = {"license": "mpl", "project_name": "Acme-Runner", "year": "2024"}
    text = (
        '// Copyright 2010  The "Acme-Runner" Authors\n'
        "// Package runner runs things.\n"
        "package runner\n"
    )

    result = refresh_header(text, tags, renderer, comment="//", previous=previous)

    assert result.startswith('// Copyright 2010  The "Acme-Runner" Authors\n//\n// This Source Code Form')
    assert result.endswith("// Package runner runs things.\npackage runner\n")


def test_apply_keeps_doc_comment_on_license_change(create_project, renderer: TemplateRenderer):
    root = create_project(project_type="pkg")
    source = root / "runner" / "runner.go"
    text = source.read_text(encoding="utf-8").replace(
        "\npackage runner\n", "// Package runner runs things.\npackage runner\n", 1
    )
    source.write_text(text, encoding="utf-8")
    old = load_metadata(root)
    resolution = resolve_update(old, WizardOptions(license="apache"))

    FileSynchronizer(renderer).apply(root, resolution.changes, resolution.tags, old)

    result = source.read_text(encoding="utf-8")
    assert "limitations under the License.\n// Package runner runs things.\npackage runner\n" in result
    assert "BSD 2-Clause" not in result


def test_apply_appends_author_when_none_was_stored(tmp_path, scaffolder, renderer: TemplateRenderer):
    resolution = resolve_new(WizardOptions(project_name="Acme-Runner"), year=2010)
    root = scaffolder.create(resolution, tmp_path).project_dir
    old = load_metadata(root)
    update = resolve_update(old, WizardOptions(author="Jane Doe", author_email="jane@example.com"))

    report = FileSynchronizer(renderer).apply(root, update.changes, update.tags, old)

    assert report.ok
    for name in ("AUTHORS.md", "CONTRIBUTORS.md"):
        text = (root / name).read_text(encoding="utf-8")
        assert text.endswith("Please keep the list sorted.\n\nJane Doe <jane@example.com>\n")


def test_apply_swaps_author_line(create_project, renderer: TemplateRenderer):
    root = create_project(author="Jane", author_email="jane@example.com")
    old = load_metadata(root)
    resolution = resolve_update(old, WizardOptions(author="Jane Doe"))

    FileSynchronizer(renderer).apply(root, resolution.changes, resolution.tags, old)

    authors = (root / "AUTHORS.md").read_text(encoding="utf-8")
    assert authors.endswith("\nJane Doe <jane@example.com>\n")
    assert "Jane Doe Doe" not in authors
