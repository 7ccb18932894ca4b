"""
lintforge.manifest - package.json Access
========================================

Reads and writes the project's ``package.json`` and answers the question
"is this tool already part of the project?".

The manifest is read fresh for every check and written back after every
merge, so each tool step sees the result of the previous one.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from lintforge.errors import ManifestError
from lintforge.models import DependencySet, ProjectRoot
from lintforge.reconcile import deep_merge


class Manifest:
    """
    A parsed package.json together with the path it came from.

    Attributes
    ----------
    path : Path
        Location of package.json.

    data : dict
        Parsed JSON object. Mutated in place by the merge helpers.

    exists : bool
        Whether the file existed when it was loaded.
    """

    def __init__(self, path: Path, data: dict[str, Any] | None = None, *, exists: bool = False) -> None:
        self.path = path
        self.data: dict[str, Any] = data if data is not None else {}
        self.exists = exists

    @classmethod
    def load(cls, root: ProjectRoot) -> Manifest:
        """
        Load package.json from the project root.

        A missing file yields an empty manifest instead of an error.

        Raises
        ------
        ManifestError
            If the file is not valid JSON or not a JSON object.
        """
        path = root.manifest_path
        if not path.exists():
            return cls(path)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(f"{path} does not contain a JSON object")

        return cls(path, data, exists=True)

    def save(self) -> None:
        """Write the manifest back with two-space indentation."""
        self.path.write_text(
            json.dumps(self.data, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        self.exists = True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def is_module(self) -> bool:
        """True when the package declares ``"type": "module"``."""
        return self.data.get("type") == "module"

    def all_dependencies(self) -> dict[str, Any]:
        return {
            **(self.data.get("dependencies") or {}),
            **(self.data.get("devDependencies") or {}),
        }

    def has_dependency(self, packages: Iterable[str]) -> bool:
        installed = self.all_dependencies()
        return any(name in installed for name in packages)

    def __contains__(self, key: object) -> bool:
        return key in self.data

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def merge_key(self, key: str, value: dict[str, Any] | None) -> None:
        """Reconcile ``value`` into the mapping stored at ``key``."""
        existing = self.data.get(key)
        if not isinstance(existing, dict):
            existing = {}
        self.data[key] = deep_merge(existing, value)

    def merge_dependencies(self, deps: DependencySet) -> None:
        self.data["dependencies"] = {
            **(self.data.get("dependencies") or {}),
            **deps.dependencies,
        }
        self.data["devDependencies"] = {
            **(self.data.get("devDependencies") or {}),
            **deps.dev_dependencies,
        }


# =============================================================================
# Dependency-Presence Checker
# =============================================================================

def is_integrated(root: ProjectRoot, packages: Iterable[str]) -> bool:
    """
    Check whether any of ``packages`` is already a project dependency.

    Both ``dependencies`` and ``devDependencies`` are searched. A project
    without package.json is treated as not integrated.

    Parameters
    ----------
    root : ProjectRoot
        Project to inspect.

    packages : Iterable[str]
        Candidate package names for one tool.

    Returns
    -------
    bool
        True if at least one candidate is present.
    """
    return Manifest.load(root).has_dependency(packages)


def write_dependencies(root: ProjectRoot, deps: DependencySet) -> Manifest:
    """Merge the accumulated dependency set into package.json in one write."""
    manifest = Manifest.load(root)
    manifest.merge_dependencies(deps)
    manifest.save()
    return manifest
