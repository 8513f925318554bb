"""Command line interface for gowright."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from .catalog import LICENSES, PROJECT_TYPES, VCS_SYSTEMS
from .config import WizardOptions
from .errors import FileOperationError, WizardError
from .scaffold import ProjectScaffolder
from .tags import TagSet, resolve_new
from .template import TemplateRenderer
from .updater import ProjectUpdater
from .userconfig import load_user_defaults, save_user_defaults

PROG = "gowright"
EXIT_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Create the base of a new Go project, or update the identity of an existing one",
    )
    parser.add_argument("--project-name", help="Display name of the project, e.g. 'My-Tool'")
    parser.add_argument(
        "--package-name",
        help="Name of the package directory (default: derived from the project name)",
    )
    parser.add_argument("--license", choices=sorted(LICENSES), help="License of the project")
    parser.add_argument("--vcs", choices=sorted(VCS_SYSTEMS), help="Version control system")
    parser.add_argument("--type", dest="project_type", choices=sorted(PROJECT_TYPES), help="Kind of project")
    parser.add_argument("--author", help="Name of the author or organization")
    parser.add_argument("--email", dest="author_email", help="Email of the author")
    parser.add_argument("--org", action="store_true", help="The author is an organization")
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Directory where the project is created, or the project root with --update",
    )
    parser.add_argument(
        "-u",
        "--update",
        action="store_true",
        help="Update the project in --directory with the values given",
    )
    parser.add_argument("--debug", action="store_true", help="Show the resolved tags and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Report files updated and directories renamed")
    parser.add_argument("--no-vcs-init", action="store_true", help="Do not initialize the version control repository")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store author, email, license, VCS and type as defaults for new projects",
    )
    parser.add_argument("--list", action="store_true", help="List project types, licenses and VCS, then exit")
    parser.add_argument(
        "--add-file",
        metavar="NAME",
        help="Add NAME.go to the package in --directory, with the header of the project",
    )
    parser.add_argument("--cgo", action="store_true", help='With --add-file, import "C" in the new file')
    parser.add_argument("--test", action="store_true", help="With --add-file, also add NAME_test.go")
    return parser


def _options_from_args(args: argparse.Namespace) -> WizardOptions:
    return WizardOptions(
        project_name=args.project_name,
        package_name=args.package_name,
        license=args.license,
        vcs=args.vcs,
        project_type=args.project_type,
        author=args.author,
        author_email=args.author_email,
        author_is_org=args.org,
        debug=args.debug,
        verbose=args.verbose,
        update=args.update,
        directory=args.directory,
        init_vcs=not args.no_vcs_init,
        add_file=args.add_file,
        cgo=args.cgo,
        add_test=args.test,
    )


def _print_table(title: str, entries: Mapping[str, str]) -> None:
    print(f"  = {title}\n")
    for key in sorted(entries):
        print(f"  {key:<8} {entries[key]}")
    print()


def _print_tags(tags: TagSet) -> None:
    print("  = Debug\n")
    for key in sorted(tags):
        print(f"  {key}: {tags[key]}")


def _print_paths(title: str, paths: Iterable[Path], root: Path) -> None:
    print(f"  = {title}\n")
    for path in paths:
        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        print(f"  * {shown}")
    print()


def _handle_create(options: WizardOptions) -> int:
    options = options.with_defaults(load_user_defaults())
    resolution = resolve_new(options)
    if options.debug:
        _print_tags(resolution.tags)
        return 0

    scaffolder = ProjectScaffolder(TemplateRenderer())
    target = options.directory
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileOperationError(target, exc.strerror or str(exc)) from exc
    result = scaffolder.create(resolution, target, init_vcs=options.init_vcs)
    if result.vcs_output:
        sys.stdout.write(result.vcs_output)
        if not result.vcs_output.endswith("\n"):
            sys.stdout.write("\n")
    if options.verbose:
        _print_paths("Files created", result.files, result.project_dir)

    if options.author_is_org:
        people = "AUTHORS" if resolution.metadata.license == "cc0" else "CONTRIBUTORS"
        print(f"  * The organization has been added as author.\n    Update {people} file to add people.")
    print(f"Project created at {result.project_dir}")
    return 0


def _handle_add_file(options: WizardOptions) -> int:
    scaffolder = ProjectScaffolder(TemplateRenderer())
    written = scaffolder.add_file(
        options.directory,
        options.add_file,
        cgo=options.cgo,
        test=options.add_test,
    )
    for path in written:
        print(f"File created at {path}")
    return 0


def _handle_update(options: WizardOptions) -> int:
    updater = ProjectUpdater(TemplateRenderer())
    if options.debug:
        _, resolution = updater.resolve(options.directory, options)
        _print_tags(resolution.tags)
        return 0

    result = updater.update(options.directory, options)
    for failure in result.report.failed:
        print(f"{PROG}: file '{failure.path}' not updated: {failure.reason}", file=sys.stderr)

    if options.verbose:
        _print_paths("Files updated", [*result.report.updated, *result.written], result.root)
        print("  = Directories renamed\n")
        for source, destination in result.renamed:
            print(f"  * {source.name!r} -> {destination.name!r}")
        print()
    if not result.changes:
        print("Nothing to update")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if args.list:
        _print_table("Project types", PROJECT_TYPES)
        _print_table("Licenses", {key: value.name for key, value in LICENSES.items()})
        _print_table("Version control systems", VCS_SYSTEMS)
        return 0
    if args.update and (args.vcs or args.project_type):
        parser.error("--vcs and --type cannot be changed with --update")
    if args.add_file is not None and args.update:
        parser.error("--add-file cannot be combined with --update")
    if (args.cgo or args.test) and args.add_file is None:
        parser.error("--cgo and --test require --add-file")

    options = _options_from_args(args)
    try:
        if options.add_file is not None:
            status = _handle_add_file(options)
        elif options.update:
            status = _handle_update(options)
        else:
            status = _handle_create(options)
        if args.save_defaults:
            save_user_defaults(options)
    except WizardError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return EXIT_ERROR
    return status


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
