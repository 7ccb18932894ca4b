"""
pytest configuration and shared fixtures for lintforge tests.

This module provides fixtures and configuration used across all test modules.
Fixtures defined here are automatically available to all tests.

Fixtures
--------
project_dir : Path
    A temporary JavaScript project containing a minimal package.json.

root : ProjectRoot
    ProjectRoot pointing at project_dir.

recorder : CommandRecorder
    Stand-in for the external command runner that records commands.
"""

import json
from pathlib import Path
from typing import Any

import pytest

from lintforge.errors import InstallError
from lintforge.models import ProjectRoot


def write_manifest(project_dir: Path, data: dict[str, Any]) -> Path:
    """Write a package.json into the project directory."""
    path = project_dir / "package.json"
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def read_manifest(project_dir: Path) -> dict[str, Any]:
    """Read the project's package.json."""
    return json.loads((project_dir / "package.json").read_text(encoding="utf-8"))


class CommandRecorder:
    """
    Records commands instead of running them.

    Set ``fail_on`` to a command tuple to simulate a failing process.
    """

    def __init__(self) -> None:
        self.commands: list[list[str]] = []
        self.fail_on: tuple[str, ...] | None = None

    def __call__(self, command: list[str], cwd: Path) -> None:
        self.commands.append(list(command))
        if self.fail_on is not None and tuple(command) == self.fail_on:
            raise InstallError(list(command), 1)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """
    Create a temporary JavaScript project.

    Returns
    -------
    Path
        Directory containing a package.json with a name and version only.
    """
    project = tmp_path / "app"
    project.mkdir()
    write_manifest(project, {"name": "app", "version": "1.0.0"})
    return project


@pytest.fixture
def root(project_dir: Path) -> ProjectRoot:
    """ProjectRoot for the temporary project."""
    return ProjectRoot.from_path(project_dir)


@pytest.fixture
def recorder() -> CommandRecorder:
    """A command runner that records instead of executing."""
    return CommandRecorder()


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """
    Configure pytest with custom markers.

    This function is called by pytest during startup to register
    custom markers used in our test suite.
    """
    config.addinivalue_line(
        "markers", "integration: marks tests that run the full configuration pipeline"
    )
