"""Command line interface for unipack.

Usage::

    unipack init-root
    unipack create Widgets --author "Jane Doe" --email jane@example.com --organization Acme
    unipack create --interactive
    unipack delete Widgets --yes
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Sequence

from rich.markup import escape
from rich.prompt import Confirm, Prompt

from unipack.config import CreatorSettings, discover_root
from unipack.scaffolder import PackageConfig, PackagesCreator
from unipack.scaffolder.validator import FIELD_VALIDATORS, validation_errors
from unipack.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

FIELD_LABELS: dict[str, str] = {
    "package_name": "Package Name",
    "package_description": "Package Description",
    "package_author": "Package Author",
    "package_author_email": "Package Author Email",
    "organization": "Organization",
}

TOGGLE_LABELS: dict[str, str] = {
    "create_tests": "Create Tests",
    "create_editor": "Create Editor",
    "create_default_script": "Create Default Script",
    "create_git_repo": "Create Git Repo",
}


# ---------------------------------------------------------------------------
# Host
# ---------------------------------------------------------------------------


class ConsoleHost:
    """Host callbacks backed by the terminal."""

    def refresh(self) -> None:
        console.print("[dim]Files changed on disk; Unity will reimport them on focus.[/dim]")

    def confirm(self, question: str) -> bool:
        return Confirm.ask(question, console=console, default=False)


# ---------------------------------------------------------------------------
# Config producers
# ---------------------------------------------------------------------------


def config_from_args(args: argparse.Namespace, settings: CreatorSettings) -> PackageConfig:
    """Build a ``PackageConfig`` from parsed ``create``/``validate`` arguments."""
    return PackageConfig(
        package_name=args.name or "",
        package_description=args.description,
        package_author=args.author if args.author is not None else settings.default_author,
        package_author_email=(
            args.email if args.email is not None else settings.default_author_email
        ),
        organization=(
            args.organization
            if args.organization is not None
            else settings.default_organization
        ),
        create_tests=args.tests,
        create_editor=args.editor,
        create_default_script=args.default_script,
        create_git_repo=args.git,
    )


def prompt_config(defaults: PackageConfig) -> PackageConfig:
    """Ask for every field, re-asking while a field is invalid."""
    values: dict[str, object] = {}
    for field_name, label in FIELD_LABELS.items():
        validator = FIELD_VALIDATORS[field_name]
        value = getattr(defaults, field_name)
        while True:
            value = Prompt.ask(label, console=console, default=value)
            ok, message = validator(value)
            if ok:
                break
            print_warning(message or "Invalid value.")
        values[field_name] = value

    for field_name, label in TOGGLE_LABELS.items():
        values[field_name] = Confirm.ask(
            label, console=console, default=getattr(defaults, field_name)
        )

    return PackageConfig(**values)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Package name (no spaces)",
    )
    parser.add_argument("--description", default="", help="Package description")
    parser.add_argument("--author", default=None, help="Package author")
    parser.add_argument("--email", default=None, help="Package author email")
    parser.add_argument("--organization", default=None, help="Organization for com.<org>.<name>")
    parser.add_argument(
        "--no-tests", dest="tests", action="store_false", help="Do not create Tests/"
    )
    parser.add_argument(
        "--no-editor", dest="editor", action="store_false", help="Do not create the Editor assembly"
    )
    parser.add_argument(
        "--default-script",
        action="store_true",
        help="Write a sample MonoBehaviour into Runtime/",
    )
    parser.add_argument(
        "--no-git", dest="git", action="store_false", help="Do not initialise a git repository"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unipack",
        description="Create Unity packages with assembly definitions and a package.json",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory holding the packages folder (default: Assets/ of the current Unity project)",
    )
    parser.add_argument(
        "--packages-folder",
        default=None,
        help="Name of the packages folder (default: MyPackages)",
    )
    parser.add_argument("--settings", type=Path, default=None, help="Settings JSON file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-root", help="create the packages folder")
    subparsers.add_parser("open-root", help="open the packages folder in the file browser")

    create_parser = subparsers.add_parser("create", help="create a new package")
    _add_config_arguments(create_parser)
    create_parser.add_argument(
        "-i", "--interactive", action="store_true", help="Prompt for every field"
    )
    create_parser.add_argument(
        "--open", action="store_true", help="Open the new package in the file browser"
    )

    validate_parser = subparsers.add_parser("validate", help="check package fields")
    _add_config_arguments(validate_parser)

    delete_parser = subparsers.add_parser("delete", help="delete a package")
    delete_parser.add_argument("name", help="Package name")
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    exists_parser = subparsers.add_parser("exists", help="check whether a package exists")
    exists_parser.add_argument("name", help="Package name")

    return parser


def load_settings(args: argparse.Namespace) -> CreatorSettings:
    overrides = {"root_dir": args.root, "packages_folder": args.packages_folder}
    if args.settings:
        settings = CreatorSettings.load(args.settings)
        update = {key: value for key, value in overrides.items() if value is not None}
        return settings.model_copy(update=update)

    if args.root is None and not os.environ.get("UNIPACK_ROOT_DIR"):
        overrides["root_dir"] = discover_root()
    return CreatorSettings.from_env(**overrides)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _report_errors(errors: dict[str, str]) -> None:
    for field_name, message in errors.items():
        print_warning(f"{FIELD_LABELS[field_name]}: {message}")


def _handle_create(args: argparse.Namespace, creator: PackagesCreator) -> int:
    if not creator.packages_root_exists():
        print_error(
            f"Packages folder {escape(str(creator.base_path))} does not exist. "
            "Run 'unipack init-root' first."
        )
        return 1

    config = config_from_args(args, creator.settings)
    if args.interactive:
        config = prompt_config(config)

    errors = validation_errors(config)
    if errors:
        _report_errors(errors)
        print_warning("Please correct all the errors on the fields")
        return 1

    if creator.package_exists(config.package_name):
        print_warning(
            f"A package with the name {escape(config.package_name)} already exists. "
            "Please choose a different name."
        )
        return 1

    package_root = asyncio.run(
        creator.create_package(config, interactive=args.interactive and not args.open)
    )
    if args.open:
        asyncio.run(creator.open_path(package_root))
    return 0


def _handle_validate(args: argparse.Namespace, creator: PackagesCreator) -> int:
    config = config_from_args(args, creator.settings)
    errors = validation_errors(config)
    print_summary_table(
        {label: errors.get(field_name, "ok") for field_name, label in FIELD_LABELS.items()},
        title="Package fields",
    )
    return 1 if errors else 0


def _handle_delete(args: argparse.Namespace, creator: PackagesCreator) -> int:
    if not args.yes and not creator.host.confirm(f"Delete package {escape(args.name)}?"):
        print_warning("Aborted.")
        return 1
    asyncio.run(creator.delete_package(args.name))
    print_success(f"Package {escape(args.name)} deleted.")
    return 0


def _handle_exists(args: argparse.Namespace, creator: PackagesCreator) -> int:
    exists = creator.package_exists(args.name)
    console.print("yes" if exists else "no")
    return 0 if exists else 1


def _handle_init_root(args: argparse.Namespace, creator: PackagesCreator) -> int:
    if creator.packages_root_exists():
        console.print(f"Packages folder already exists at {escape(str(creator.base_path))}")
        return 0
    path = creator.create_packages_root()
    print_success(f"Packages folder created at {escape(str(path))}")
    return 0


def _handle_open_root(args: argparse.Namespace, creator: PackagesCreator) -> int:
    asyncio.run(creator.open_packages_root())
    return 0


HANDLERS = {
    "init-root": _handle_init_root,
    "open-root": _handle_open_root,
    "create": _handle_create,
    "validate": _handle_validate,
    "delete": _handle_delete,
    "exists": _handle_exists,
}


def run(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run the selected command and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args)
    creator = PackagesCreator(settings, host=ConsoleHost())

    try:
        return HANDLERS[args.command](args, creator)
    except OSError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1


def main() -> None:
    """CLI entry point for ``unipack`` and ``python -m unipack``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
