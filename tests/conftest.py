"""Shared pytest fixtures for the unipack test suite.

Provides reusable fixtures for:
- Settings pointing at a temporary packages root
- A recording host that captures refresh/confirm calls
- Mock subprocess helpers
- A ready-made valid ``PackageConfig``
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from unipack.config import CreatorSettings
from unipack.scaffolder import PackageConfig, PackagesCreator


# ---------------------------------------------------------------------------
# Host
# ---------------------------------------------------------------------------


class RecordingHost:
    """Host double that records every callback."""

    def __init__(self, answer: bool = False) -> None:
        self.answer = answer
        self.refreshes = 0
        self.questions: list[str] = []

    def refresh(self) -> None:
        self.refreshes += 1

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


# ---------------------------------------------------------------------------
# Settings & orchestrator
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path: Path) -> CreatorSettings:
    """Settings rooted in a temporary ``Assets`` directory."""
    root = tmp_path / "Assets"
    root.mkdir()
    return CreatorSettings(root_dir=root, open_github_desktop=False, command_timeout=10)


@pytest.fixture
def creator(settings: CreatorSettings, host: RecordingHost) -> PackagesCreator:
    """Creator whose packages root already exists."""
    packages_creator = PackagesCreator(settings, host=host)
    settings.packages_root.mkdir(parents=True, exist_ok=True)
    return packages_creator


@pytest.fixture
def widgets_config() -> PackageConfig:
    """The end-to-end example package: everything but git."""
    return PackageConfig(
        package_name="Widgets",
        package_description="Reusable widgets",
        package_author="Jane Doe",
        package_author_email="jane@example.com",
        organization="Acme",
        create_tests=True,
        create_editor=True,
        create_default_script=True,
        create_git_repo=False,
    )


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
