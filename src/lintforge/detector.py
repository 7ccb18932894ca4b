"""
lintforge.detector - Existing Configuration Detection
=====================================================

Every tool accepts its configuration in several places: a handful of dotfile
variants, a ``*.config.*`` file, or a top-level key in package.json. This
module knows those forms and finds the one a project already uses, so the
generator never overwrites a configuration the user wrote.

It also holds the small project sniffers used to pick prompt defaults
(language, package manager) and the ESLint config format (legacy
``.eslintrc`` versus flat ``eslint.config``).

Detection Order
---------------
Candidates are checked as files first, in order, and only then as
package.json keys. The order only affects which form is reported; the
boolean answer is the same for any ordering.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence

from rich.console import Console

from lintforge.manifest import Manifest
from lintforge.models import Language, PackageManager, ProjectRoot


console = Console()


# =============================================================================
# Candidate Forms
# =============================================================================

ESLINT_LEGACY_CONFIGS: tuple[str, ...] = (
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.yaml",
    ".eslintrc.yml",
    ".eslintrc.json",
    "eslintConfig",
)

# ESLint 9 only reads flat config files
ESLINT_FLAT_CONFIGS: tuple[str, ...] = (
    "eslint.config.js",
    "eslint.config.mjs",
    "eslint.config.cjs",
    "eslint.config.ts",
    "eslint.config.mts",
    "eslint.config.cts",
)

PRETTIER_CONFIGS: tuple[str, ...] = (
    ".prettierrc",
    ".prettierrc.js",
    ".prettierrc.mjs",
    ".prettierrc.cjs",
    ".prettierrc.json",
    ".prettierrc.yaml",
    ".prettierrc.yml",
    ".prettierrc.toml",
    "prettier.config.js",
    "prettier.config.cjs",
    "prettier.config.mjs",
    "prettier",
)

COMMITLINT_CONFIGS: tuple[str, ...] = (
    ".commitlintrc",
    ".commitlintrc.json",
    ".commitlintrc.yaml",
    ".commitlintrc.yml",
    ".commitlintrc.js",
    ".commitlintrc.cjs",
    ".commitlintrc.mjs",
    ".commitlintrc.ts",
    ".commitlintrc.cts",
    "commitlint.config.js",
    "commitlint.config.cjs",
    "commitlint.config.mjs",
    "commitlint.config.ts",
    "commitlint.config.cts",
    "commitlint",
)

CZ_GIT_CONFIGS: tuple[str, ...] = (
    "cz.config.js",
    "cz.config.cjs",
    "cz.config.mjs",
    "cz.config.ts",
    ".czrc",
)


# =============================================================================
# Existing-Config Locator
# =============================================================================

def find_existing_config(
    root: ProjectRoot,
    candidates: Sequence[str],
    manifest: Manifest | None = None,
) -> str | None:
    """
    Find the configuration form a project already uses.

    Parameters
    ----------
    root : ProjectRoot
        Project to inspect.

    candidates : Sequence[str]
        Accepted file names or package.json keys for one tool.

    manifest : Manifest | None
        Already loaded package.json. Loaded from ``root`` when omitted.

    Returns
    -------
    str | None
        The first candidate present as a file, else the first candidate
        present as a package.json key, else None.

    Notes
    -----
    Prints a warning naming the match so the operator knows why no new
    file was written. The manifest is only read.
    """
    for form in candidates:
        if (root / form).is_file():
            console.print(f"[bold red]⚠ Existing config file detected:[/] {form}")
            return form

    if manifest is None:
        manifest = Manifest.load(root)

    for form in candidates:
        if form in manifest:
            console.print(f"[bold red]⚠ Existing config detected in package.json:[/] {form}")
            return form

    return None


def has_existing_config(
    root: ProjectRoot,
    candidates: Sequence[str],
    manifest: Manifest | None = None,
) -> bool:
    """Boolean form of :func:`find_existing_config`."""
    return find_existing_config(root, candidates, manifest) is not None


# =============================================================================
# Project Sniffing
# =============================================================================

def _major(version: str | None) -> int | None:
    if not version:
        return None
    match = re.search(r"\d+", str(version))
    return int(match.group()) if match else None


def detect_eslint_major(root: ProjectRoot) -> int | None:
    """
    Detect the major version of the project's ESLint.

    The installed ``node_modules/eslint/package.json`` is trusted first,
    then the version specifier in package.json.

    Returns
    -------
    int | None
        Major version, or None when ESLint is not found.
    """
    installed = root / "node_modules" / "eslint" / "package.json"
    if installed.exists():
        try:
            version = json.loads(installed.read_text(encoding="utf-8")).get("version")
        except (json.JSONDecodeError, AttributeError):
            version = None
        major = _major(version)
        if major is not None:
            return major

    return _major(Manifest.load(root).all_dependencies().get("eslint"))


def detect_package_manager(root: ProjectRoot) -> PackageManager:
    """
    Guess the package manager from the lock file in the project.

    Falls back to pnpm when no lock file is present.
    """
    for manager in (PackageManager.PNPM, PackageManager.YARN, PackageManager.NPM):
        if (root / manager.lock_file).exists():
            return manager
    return PackageManager.PNPM


def detect_language(root: ProjectRoot) -> Language:
    """TypeScript if the project has a tsconfig.json or depends on typescript."""
    if (root / "tsconfig.json").exists():
        return Language.TYPESCRIPT
    if Manifest.load(root).has_dependency(["typescript"]):
        return Language.TYPESCRIPT
    return Language.JAVASCRIPT
