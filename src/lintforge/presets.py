"""
lintforge.presets - Bundled Presets and the Config Materializer
===============================================================

Presets are the default configurations lintforge ships for each tool.
They live in ``lintforge/preset_config`` as package data:

    preset_config/
    ├── javascript/
    │   ├── eslint/       eslintrc.js, package.json
    │   ├── eslint-flat/  eslint.config.mjs, package.json (ESLint 9)
    │   ├── prettier/     prettierrc, package.json
    │   └── commitlint/   commitlintrc, package.json
    ├── typescript/       (same layout as javascript/)
    └── base/
        ├── husky/        package.json
        └── cz-git/       cz.config.js, package.json

Each ``package.json`` lists the tool's dependencies and, where the tool can be
configured from package.json, the embedded form of the same configuration
(``eslintConfig``, ``prettier``, ``commitlint``, ``config``).

File Naming
-----------
Files whose target name starts with a dot are stored without it, so the
package data stays visible to packaging tools:

- ``eslintrc.js`` → ``.eslintrc.js``
- ``prettierrc`` → ``.prettierrc``
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from lintforge.detector import (
    COMMITLINT_CONFIGS,
    CZ_GIT_CONFIGS,
    ESLINT_FLAT_CONFIGS,
    ESLINT_LEGACY_CONFIGS,
    PRETTIER_CONFIGS,
)
from lintforge.errors import PresetNotFoundError
from lintforge.manifest import Manifest
from lintforge.models import Language, PresetPackage, ProjectRoot


console = Console()

PRESET_PACKAGE = "lintforge"
PRESET_DIR = "preset_config"
SHARED_PRESETS = "base"

# Legacy config names that must switch to CommonJS in "type": "module" packages
COMMONJS_NAMES: dict[str, str] = {
    ".eslintrc.js": ".eslintrc.cjs",
}


# =============================================================================
# Tool Registry
# =============================================================================

@dataclass(frozen=True)
class ToolPreset:
    """
    Everything the generator needs to know about one tool.

    Attributes
    ----------
    name : str
        Selection field name (``eslint``, ``cz_git``, ...).

    title : str
        Display name.

    packages : tuple[str, ...]
        Package names that mean the tool is already integrated.

    directory : str
        Preset directory name.

    shared : bool
        True if the preset lives under ``base/`` instead of a language dir.

    config_file : str | None
        File written when no existing configuration is found.

    candidates : tuple[str, ...]
        Accepted configuration forms, see :mod:`lintforge.detector`.

    manifest_key : str | None
        package.json key that holds this tool's configuration. When the
        project is configured through this key, the preset's embedded
        configuration is merged into it.

    merge_keys : tuple[str, ...]
        package.json keys merged from the preset on every run.

    companions : tuple[str, ...]
        Preset packages queued even when the tool is already integrated,
        if the project lacks them.
    """

    name: str
    title: str
    packages: tuple[str, ...]
    directory: str
    shared: bool = False
    config_file: str | None = None
    candidates: tuple[str, ...] = ()
    manifest_key: str | None = None
    merge_keys: tuple[str, ...] = ()
    companions: tuple[str, ...] = ()

    def preset_dir(self, language: Language) -> Traversable:
        """Locate this tool's preset directory for ``language``."""
        group = SHARED_PRESETS if self.shared else language.value
        return files(PRESET_PACKAGE).joinpath(PRESET_DIR).joinpath(group).joinpath(self.directory)


ESLINT = ToolPreset(
    name="eslint",
    title="ESLint",
    packages=("eslint",),
    directory="eslint",
    config_file=".eslintrc.js",
    candidates=ESLINT_LEGACY_CONFIGS,
    manifest_key="eslintConfig",
)

PRETTIER = ToolPreset(
    name="prettier",
    title="Prettier",
    packages=("prettier",),
    directory="prettier",
    config_file=".prettierrc",
    candidates=PRETTIER_CONFIGS,
    manifest_key="prettier",
)

HUSKY = ToolPreset(
    name="husky",
    title="Husky + lint-staged",
    packages=("husky",),
    directory="husky",
    shared=True,
    companions=("lint-staged",),
)

CZ_GIT = ToolPreset(
    name="cz_git",
    title="cz-git",
    packages=("cz-git", "czg"),
    directory="cz-git",
    shared=True,
    config_file="cz.config.js",
    candidates=CZ_GIT_CONFIGS,
    merge_keys=("config",),
)

COMMITLINT = ToolPreset(
    name="commitlint",
    title="Commitlint",
    packages=("@commitlint/cli", "@commitlint/config-conventional"),
    directory="commitlint",
    config_file=".commitlintrc",
    candidates=COMMITLINT_CONFIGS,
    manifest_key="commitlint",
)

# Run order of the configuration steps
TOOL_PRESETS: tuple[ToolPreset, ...] = (ESLINT, PRETTIER, HUSKY, CZ_GIT, COMMITLINT)


def eslint_preset(major: int | None) -> ToolPreset:
    """
    ESLint preset for the detected major version.

    ESLint 9 dropped ``.eslintrc`` support, so projects on 9 or later get a
    flat ``eslint.config.mjs`` with the ESLint 9 dependency list from
    ``eslint-flat/``.
    """
    if major is not None and major >= 9:
        return replace(
            ESLINT,
            directory="eslint-flat",
            config_file="eslint.config.mjs",
            candidates=ESLINT_FLAT_CONFIGS,
            manifest_key=None,
        )
    return ESLINT


# =============================================================================
# Preset Loading
# =============================================================================

def _source_name(file_name: str) -> str:
    return file_name.lstrip(".")


def load_preset_package(preset_dir: Traversable) -> PresetPackage:
    """
    Parse a preset's package.json.

    Raises
    ------
    PresetNotFoundError
        If the preset has no package.json. This means the lintforge
        installation is broken.
    """
    source = preset_dir.joinpath("package.json")
    if not source.is_file():
        raise PresetNotFoundError(str(source))

    try:
        return PresetPackage.model_validate(json.loads(source.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as e:
        raise PresetNotFoundError(f"{source} ({e})") from e


# =============================================================================
# Config Materializer
# =============================================================================

def resolve_target_name(file_name: str, manifest: Manifest) -> str:
    """Swap to the CommonJS file name when the package is an ES module."""
    if manifest.is_module:
        return COMMONJS_NAMES.get(file_name, file_name)
    return file_name


def copy_config_file(
    preset_dir: Traversable,
    file_name: str,
    root: ProjectRoot,
) -> Path:
    """
    Copy a preset config file verbatim into the project.

    Parameters
    ----------
    preset_dir : Traversable
        Preset directory holding the file.

    file_name : str
        Target file name, e.g. ``.eslintrc.js``.

    root : ProjectRoot
        Project to write into.

    Returns
    -------
    Path
        The written file. For ``"type": "module"`` packages ``.eslintrc.js``
        is written as ``.eslintrc.cjs``.

    Raises
    ------
    PresetNotFoundError
        If the preset file is missing.
    """
    source = preset_dir.joinpath(_source_name(file_name))
    if not source.is_file():
        raise PresetNotFoundError(str(source))

    target_name = resolve_target_name(file_name, Manifest.load(root))
    destination = root / target_name
    destination.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")

    console.print(f"[green]✨ {target_name} created[/]")
    return destination


def merge_manifest_config(
    preset_dir: Traversable,
    key: str,
    root: ProjectRoot,
) -> Manifest:
    """
    Reconcile the preset's embedded configuration into package.json.

    The user's keys under ``key`` are kept; the preset's values win where
    both define the same leaf. The manifest is saved immediately.
    """
    preset = load_preset_package(preset_dir)
    manifest = Manifest.load(root)
    manifest.merge_key(key, preset.embedded_config(key))
    manifest.save()

    console.print(f"[green]✨ {key} merged into package.json[/]")
    return manifest
