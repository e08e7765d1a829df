"""Hand paths and URIs to desktop applications.

Opens directories in the operating system's file browser and repositories
in GitHub Desktop.  The command shapes are built by pure functions so they
can be checked without launching anything.  On Windows the target is
quoted and run through the shell; elsewhere it is passed as a single
argument, unquoted.
"""

from __future__ import annotations

import sys
from pathlib import Path

from rich.markup import escape

from unipack.utils import is_windows, print_warning, run_command

GITHUB_DESKTOP_URI = "x-github-client://openRepo/{path}"


def _quote(value: str) -> str:
    return f'"{value}"'


def file_browser_command(path: str | Path, platform: str | None = None) -> str | list[str]:
    """Return the command that shows *path* in the file browser.

    A string result is meant for the shell, a list is executed directly.
    """
    platform = platform or sys.platform
    target = str(path)
    if is_windows(platform):
        return f"explorer {_quote(target)}"
    if platform == "darwin":
        return ["open", target]
    return ["xdg-open", target]


def uri_command(uri: str, platform: str | None = None) -> str | list[str]:
    """Return the command that opens *uri* with its registered handler."""
    platform = platform or sys.platform
    if is_windows(platform):
        return f'start "" {_quote(uri)}'
    if platform == "darwin":
        return ["open", uri]
    return ["xdg-open", uri]


def github_desktop_uri(repo_path: str | Path) -> str:
    return GITHUB_DESKTOP_URI.format(path=Path(repo_path).as_posix())


async def open_in_file_browser(
    path: str | Path, *, platform: str | None = None, timeout: int = 120
) -> int:
    """Open *path* in the file browser and return the launcher's exit code.

    A missing launcher raises ``FileNotFoundError``; a non-zero exit code is
    only reported as a warning.  ``explorer`` exits with 1 even on success,
    so its exit code is not reported.
    """
    returncode, _, stderr = await run_command(
        file_browser_command(path, platform), timeout=timeout
    )
    if returncode != 0 and not is_windows(platform):
        print_warning(
            f"Could not open {escape(str(path))} in the file browser: "
            f"{escape(stderr) or returncode}"
        )
    return returncode


async def open_github_desktop(
    repo_path: str | Path, *, platform: str | None = None, timeout: int = 120
) -> int:
    """Ask GitHub Desktop to open the repository at *repo_path*."""
    uri = github_desktop_uri(repo_path)
    returncode, _, stderr = await run_command(uri_command(uri, platform), timeout=timeout)
    if returncode != 0:
        print_warning(f"Could not open {escape(uri)}: {escape(stderr) or returncode}")
    return returncode
