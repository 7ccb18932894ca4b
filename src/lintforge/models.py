"""
lintforge.models - Pydantic Models for the Run Configuration
============================================================

This module defines the data models shared by every lintforge component.
Pydantic is used for the values that come from outside the program (prompt
answers and bundled preset manifests) so that bad input fails early with a
clear message. Plain dataclasses hold values built internally.

Architecture Notes
------------------
The models are organized as:

    ToolSelection (prompt answers, frozen)
    ├── Language (enum)
    └── PackageManager (enum)

    ProjectRoot (target directory, frozen)
    PresetPackage (a preset's package.json)
    DependencySet (accumulated dependencies for one run)

Usage Example
-------------
>>> from lintforge.models import ToolSelection, Language
>>> selection = ToolSelection(language=Language.TYPESCRIPT, eslint=True)
>>> selection.enabled_tools
['eslint']
>>> selection.language.code_glob
'*.{ts,tsx}'
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enumerations
# =============================================================================

class Language(str, Enum):
    """
    Source language of the target project.

    The language selects which preset directory is used for ESLint,
    Prettier and Commitlint, and which file globs lint-staged targets.

    Examples
    --------
    >>> Language.JAVASCRIPT.code_extensions
    ('js', 'jsx')
    """

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"

    @property
    def title(self) -> str:
        """Display name for prompts."""
        return {
            Language.JAVASCRIPT: "JavaScript",
            Language.TYPESCRIPT: "TypeScript",
        }[self]

    @property
    def code_extensions(self) -> tuple[str, ...]:
        """File extensions that ESLint should check for this language."""
        if self == Language.TYPESCRIPT:
            return ("ts", "tsx")
        return ("js", "jsx")

    @property
    def code_glob(self) -> str:
        """lint-staged glob matching this language's source files."""
        return "*.{" + ",".join(self.code_extensions) + "}"


class PackageManager(str, Enum):
    """
    Package managers lintforge can drive.

    Each member knows how to install dependencies and how to run a locally
    installed binary, which is what the Husky hook scripts need.
    """

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @property
    def install_command(self) -> list[str]:
        """Command that installs everything listed in package.json."""
        return [self.value, "install"]

    @property
    def exec_prefix(self) -> list[str]:
        """
        Prefix used to run a binary from node_modules.

        Returns
        -------
        list[str]
            ``["npx"]`` for npm, ``["yarn"]`` for yarn and
            ``["pnpm", "exec"]`` for pnpm.
        """
        return {
            PackageManager.NPM: ["npx"],
            PackageManager.YARN: ["yarn"],
            PackageManager.PNPM: ["pnpm", "exec"],
        }[self]

    @property
    def lock_file(self) -> str:
        """Lock file written by this package manager."""
        return {
            PackageManager.NPM: "package-lock.json",
            PackageManager.YARN: "yarn.lock",
            PackageManager.PNPM: "pnpm-lock.yaml",
        }[self]


# =============================================================================
# Prompt Answers
# =============================================================================

class ToolSelection(BaseModel):
    """
    The operator's answers for one run.

    Built once from the prompt session and never modified afterwards.

    Attributes
    ----------
    language : Language
        Project language, selects language-specific presets.

    eslint, prettier, husky, commitlint, cz_git : bool
        Whether each tool should be configured.

    package_manager : PackageManager
        Package manager used for the install and the hook scripts.

    Examples
    --------
    >>> ToolSelection.model_validate({"language": "javascript", "husky": True})
    ToolSelection(language=<Language.JAVASCRIPT: 'javascript'>, ...)
    """

    model_config = ConfigDict(frozen=True)

    language: Language = Field(
        default=Language.JAVASCRIPT,
        description="Project language",
    )
    eslint: bool = Field(default=False, description="Configure ESLint")
    prettier: bool = Field(default=False, description="Configure Prettier")
    husky: bool = Field(default=False, description="Configure Husky + lint-staged")
    commitlint: bool = Field(default=False, description="Configure Commitlint")
    cz_git: bool = Field(default=False, description="Configure cz-git")
    package_manager: PackageManager = Field(
        default=PackageManager.PNPM,
        description="Package manager used to install dependencies",
    )

    @field_validator("language", "package_manager", mode="before")
    @classmethod
    def normalize_choice(cls, v: Any) -> Any:
        """Accept enum values in any case."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @property
    def enabled_tools(self) -> list[str]:
        """
        Names of the tools that were selected, in prompt order.

        Returns
        -------
        list[str]
            Field names set to True.
        """
        tools = ("eslint", "prettier", "husky", "commitlint", "cz_git")
        return [name for name in tools if getattr(self, name)]


# =============================================================================
# Project Root
# =============================================================================

@dataclass(frozen=True)
class ProjectRoot:
    """
    Directory of the project being configured.

    Established once at startup and passed to every component, so nothing
    depends on the process working directory after that point.
    """

    path: Path

    @classmethod
    def from_path(cls, path: Path | str) -> ProjectRoot:
        return cls(Path(path).resolve())

    @property
    def manifest_path(self) -> Path:
        return self.path / "package.json"

    def __truediv__(self, other: str | Path) -> Path:
        return self.path / other


# =============================================================================
# Presets and Dependencies
# =============================================================================

class PresetPackage(BaseModel):
    """
    Parsed package.json of a bundled preset.

    Besides the dependency lists, a preset manifest may carry the
    manifest-embedded form of its tool's configuration (``eslintConfig``,
    ``prettier``, ``commitlint``, ``config``). Those keys are kept as extra
    fields.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(
        default_factory=dict,
        alias="devDependencies",
    )

    def embedded_config(self, key: str) -> Any:
        """
        Return a copy of the configuration stored under ``key``.

        A copy is returned because the reconciler updates nested source
        mappings in place.
        """
        extra = self.model_extra or {}
        return copy.deepcopy(extra.get(key))


@dataclass
class DependencySet:
    """
    Runtime and dev dependencies accumulated over one run.

    Attributes
    ----------
    dependencies : dict[str, str]
        Package name to version specifier for ``dependencies``.

    dev_dependencies : dict[str, str]
        Package name to version specifier for ``devDependencies``.
    """

    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    def add(self, package: PresetPackage, only: Iterable[str] | None = None) -> None:
        """
        Merge a preset's dependency lists, later presets winning ties.

        When ``only`` is given, just those package names are taken.
        """
        wanted = None if only is None else set(only)
        for name, version in package.dependencies.items():
            if wanted is None or name in wanted:
                self.dependencies[name] = version
        for name, version in package.dev_dependencies.items():
            if wanted is None or name in wanted:
                self.dev_dependencies[name] = version

    def __bool__(self) -> bool:
        return bool(self.dependencies or self.dev_dependencies)

    def __contains__(self, name: object) -> bool:
        return name in self.dependencies or name in self.dev_dependencies
