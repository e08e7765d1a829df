"""Main package-creation orchestrator.

Takes a ``PackageConfig`` and generates a Unity package directory under the
packages root: assembly definitions, ``package.json``, an optional tests
folder, an optional boilerplate script and an optional git repository.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field
from rich.markup import escape

from unipack.config import CreatorSettings
from unipack.opener import open_github_desktop, open_in_file_browser
from unipack.utils import (
    console,
    normalize_organization,
    normalize_package_name,
    print_info,
    print_success,
    print_warning,
    run_command,
    write_text,
)

from .templates import (
    TemplateRenderer,
    default_script_filename,
    editor_assembly_name,
    render_default_script,
    render_editor_asmdef,
    render_manifest,
    render_runtime_asmdef,
    runtime_assembly_name,
)


PACKAGE_CREATION_MESSAGE = "Creating package {name} at {path}"
DONE_MESSAGE = "Done! Package {name} created at {path}"
OPEN_PACKAGE_QUESTION = "Would you like to open the package in file explorer?"


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class PackageConfig(BaseModel):
    """Immutable description of the package to create.

    The model accepts any strings; use
    :mod:`unipack.scaffolder.validator` to check them before creating a
    package.
    """

    model_config = ConfigDict(frozen=True)

    package_name: str = Field(default="MyCoolPackage", description="Folder and assembly name")
    package_description: str = Field(default="")
    package_author: str = Field(default="")
    package_author_email: str = Field(default="")
    organization: str = Field(default="", description="Middle segment of com.<org>.<name>")

    create_tests: bool = Field(default=True, description="Create an empty Tests/ folder")
    create_editor: bool = Field(default=True, description="Create the Editor assembly")
    create_default_script: bool = Field(default=False, description="Write a sample MonoBehaviour")
    create_git_repo: bool = Field(default=True, description="Run git init in the package")


# ---------------------------------------------------------------------------
# Host integration
# ---------------------------------------------------------------------------


class AssetHost(Protocol):
    """Callbacks into the application hosting the package creator."""

    def refresh(self) -> None:
        """Ask the host to rescan its assets after files changed on disk."""

    def confirm(self, question: str) -> bool:
        """Ask the user a yes/no *question*."""


class NullHost:
    """Host that never refreshes anything and declines every question."""

    def refresh(self) -> None:
        return None

    def confirm(self, question: str) -> bool:
        return False


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class PackagesCreator:
    """Creates, opens and deletes packages below the packages root.

    Given a ``PackageConfig``, :meth:`create_package` writes:
    - ``Runtime/<name>.Runtime.asmdef``
    - ``Editor/<name>.Editor.asmdef`` (optional)
    - ``Tests/`` (optional, empty)
    - ``package.json``
    - ``Runtime/<name>_DefaultScript.cs`` (optional)
    - a git repository (optional)

    No step is rolled back when a later one fails.
    """

    def __init__(
        self,
        settings: CreatorSettings | None = None,
        host: AssetHost | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings or CreatorSettings()
        self.host = host or NullHost()
        self.renderer = renderer or TemplateRenderer()

    @property
    def base_path(self) -> Path:
        return self.settings.packages_root

    # -- Packages root -----------------------------------------------------

    def packages_root_exists(self) -> bool:
        return self.base_path.is_dir()

    def create_packages_root(self) -> Path:
        """Create the packages root and let the host pick it up."""
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.host.refresh()
        return self.base_path

    async def open_packages_root(self, *, platform: str | None = None) -> int:
        return await self.open_path(self.base_path, platform=platform)

    async def open_path(self, path: str | Path, *, platform: str | None = None) -> int:
        """Show *path* in the operating system's file browser."""
        return await open_in_file_browser(
            path, platform=platform, timeout=self.settings.command_timeout
        )

    # -- Single packages ---------------------------------------------------

    def package_exists(self, package_name: str) -> bool:
        return self.settings.package_path(package_name).is_dir()

    async def create_package(
        self, config: PackageConfig, *, interactive: bool = False
    ) -> Path:
        """Generate the package described by *config*.

        Args:
            config: The package to create.  It is not re-validated here.
            interactive: When ``True`` the host is asked whether the new
                package should be opened in the file browser.

        Returns:
            Path to the generated package root.

        Raises:
            OSError: If any directory or file cannot be written, or an
                external tool cannot be started.  Earlier steps are kept.
        """
        package_name = normalize_package_name(config.package_name)
        organization = normalize_organization(config.organization)
        package_root = self.base_path / package_name

        print_info(
            PACKAGE_CREATION_MESSAGE.format(name=escape(package_name), path=escape(str(package_root)))
        )

        # 1. Runtime assembly
        await self._write(
            package_root / "Runtime" / f"{runtime_assembly_name(package_name)}.asmdef",
            render_runtime_asmdef(package_name),
        )

        # 2. Editor assembly
        if config.create_editor:
            await self._write(
                package_root / "Editor" / f"{editor_assembly_name(package_name)}.asmdef",
                render_editor_asmdef(package_name),
            )

        # 3. Tests folder
        if config.create_tests:
            await asyncio.to_thread(
                (package_root / "Tests").mkdir, parents=True, exist_ok=True
            )

        # 4. Manifest
        await self._write(
            package_root / "package.json",
            render_manifest(
                package_name,
                config.package_description,
                organization,
                version=self.settings.initial_version,
                unity=self.settings.unity_version,
            ),
        )

        # 5. Git repository
        if config.create_git_repo:
            await self._init_git_repo(package_root)

        # 6. Boilerplate script
        if config.create_default_script:
            await self._write(
                package_root / "Runtime" / default_script_filename(package_name),
                render_default_script(package_name, self.renderer),
            )

        print_success(
            DONE_MESSAGE.format(name=escape(package_name), path=escape(str(package_root)))
        )

        if interactive and self.host.confirm(OPEN_PACKAGE_QUESTION):
            await self.open_path(package_root)

        return package_root

    async def delete_package(self, package_name: str) -> None:
        """Remove a package tree and its ``.meta`` sidecar.

        Raises:
            FileNotFoundError: If the package directory does not exist.
        """
        package_root = self.settings.package_path(package_name)
        console.print(f"[yellow]Deleting package[/yellow] [bold]{escape(str(package_root))}[/bold]...")

        await asyncio.to_thread(shutil.rmtree, package_root)

        meta_file = package_root.with_name(f"{package_root.name}.meta")
        if meta_file.exists():
            await asyncio.to_thread(meta_file.unlink)

        self.host.refresh()

    # -- Internal helpers --------------------------------------------------

    async def _write(self, path: Path, content: str) -> Path:
        await asyncio.to_thread(write_text, path, content)
        return path

    async def _init_git_repo(self, package_root: Path) -> None:
        """Run ``git init`` in *package_root*, then hand it to GitHub Desktop."""
        returncode, _, stderr = await run_command(
            ["git", "init"], cwd=package_root, timeout=self.settings.command_timeout
        )
        if returncode != 0:
            print_warning(f"  git init failed: {escape(stderr)}")

        if self.settings.open_github_desktop:
            await open_github_desktop(package_root, timeout=self.settings.command_timeout)
