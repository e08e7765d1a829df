"""unipack configuration.

Typed host-level settings for the package creator.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from unipack.utils import is_unity_project, normalize_package_name

DEFAULT_PACKAGES_FOLDER = "MyPackages"


class CreatorSettings(BaseModel):
    """Settings shared by every package-creation call.

    ``root_dir`` plays the role of Unity's ``Application.dataPath``: the
    packages root is created directly underneath it.  Instances are
    typically created once by the CLI entry point and then passed to
    :class:`~unipack.scaffolder.PackagesCreator`.
    """

    root_dir: Path = Field(default=Path("."))
    packages_folder: str = Field(default=DEFAULT_PACKAGES_FOLDER, min_length=1)
    unity_version: str = Field(default="2021.3", description="Minimum Unity version tag")
    initial_version: str = Field(default="0.0.1", description="Version of new packages")
    open_github_desktop: bool = Field(
        default=True, description="Open new git repositories in GitHub Desktop"
    )
    command_timeout: int = Field(
        default=120, ge=1, description="Timeout for external commands in seconds"
    )

    default_author: str = Field(default="")
    default_author_email: str = Field(default="")
    default_organization: str = Field(default="")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def packages_root(self) -> Path:
        """Directory under which every package tree is created."""
        return self.root_dir / self.packages_folder

    def package_path(self, package_name: str) -> Path:
        """Return the directory a package named *package_name* lives in."""
        return self.packages_root / normalize_package_name(package_name)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "CreatorSettings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, **overrides: Any) -> "CreatorSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            UNIPACK_ROOT_DIR, UNIPACK_PACKAGES_FOLDER, UNIPACK_UNITY_VERSION,
            UNIPACK_AUTHOR, UNIPACK_AUTHOR_EMAIL, UNIPACK_ORGANIZATION,
            UNIPACK_COMMAND_TIMEOUT, UNIPACK_GITHUB_DESKTOP.

        Keyword *overrides* win over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("UNIPACK_ROOT_DIR"):
            kwargs["root_dir"] = Path(os.environ["UNIPACK_ROOT_DIR"])
        if os.environ.get("UNIPACK_PACKAGES_FOLDER"):
            kwargs["packages_folder"] = os.environ["UNIPACK_PACKAGES_FOLDER"]
        if os.environ.get("UNIPACK_UNITY_VERSION"):
            kwargs["unity_version"] = os.environ["UNIPACK_UNITY_VERSION"]
        if os.environ.get("UNIPACK_AUTHOR"):
            kwargs["default_author"] = os.environ["UNIPACK_AUTHOR"]
        if os.environ.get("UNIPACK_AUTHOR_EMAIL"):
            kwargs["default_author_email"] = os.environ["UNIPACK_AUTHOR_EMAIL"]
        if os.environ.get("UNIPACK_ORGANIZATION"):
            kwargs["default_organization"] = os.environ["UNIPACK_ORGANIZATION"]
        if os.environ.get("UNIPACK_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["UNIPACK_COMMAND_TIMEOUT"])
        if os.environ.get("UNIPACK_GITHUB_DESKTOP"):
            kwargs["open_github_desktop"] = os.environ["UNIPACK_GITHUB_DESKTOP"].strip().lower() not in {
                "0",
                "false",
                "no",
                "off",
            }

        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**kwargs)


def discover_root(cwd: str | Path | None = None) -> Path:
    """Return the directory packages should be created under.

    Inside a Unity project this is the ``Assets`` folder, matching where the
    editor extension places its packages; anywhere else it is *cwd* itself.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    if is_unity_project(base):
        return base / "Assets"
    return base
