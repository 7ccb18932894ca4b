"""
lintforge.generator - Configuration Orchestration
=================================================

This module runs the configuration steps for the tools the operator
selected and then hands over to the package manager.

Architecture
------------
The generator follows a pipeline pattern, one step per selected tool and
strictly in this order:

    1. ESLint
    2. Prettier
    3. Husky + lint-staged
    4. cz-git
    5. Commitlint

Each step:

    a. checks whether the tool is already a dependency
    b. locates the tool's preset directory
    c. looks for an existing configuration (file or package.json key)
    d. writes the preset config file if nothing exists, or merges the
       preset into package.json if the project configures the tool there
    e. queues the preset's dependencies unless the tool was already present,
       in which case only missing companions (lint-staged for Husky) are queued

After the last step the queued dependencies are written to package.json in
one go, the package manager installs them, and the Husky hooks are written.

Nothing is rolled back on failure: files written by earlier steps stay on
disk.

Usage Example
-------------
>>> from pathlib import Path
>>> from lintforge.generator import configure_project
>>> from lintforge.models import ProjectRoot, ToolSelection
>>>
>>> selection = ToolSelection(language="javascript", eslint=True, husky=True)
>>> result = configure_project(ProjectRoot.from_path(Path(".")), selection)
>>> result.files_created
[PosixPath('/work/app/.eslintrc.js')]
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from lintforge.detector import detect_eslint_major, find_existing_config
from lintforge.installer import CommandRunner, install_dependencies, run_command, setup_husky
from lintforge.manifest import Manifest, is_integrated, write_dependencies
from lintforge.models import DependencySet, Language, ProjectRoot, ToolSelection
from lintforge.presets import (
    CZ_GIT,
    ESLINT,
    HUSKY,
    TOOL_PRESETS,
    ToolPreset,
    copy_config_file,
    eslint_preset,
    load_preset_package,
    merge_manifest_config,
)


# =============================================================================
# Module-Level Configuration
# =============================================================================

console = Console()

# File types Prettier formats besides the language's own source files
PRETTIER_EXTENSIONS: tuple[str, ...] = ("json", "css", "scss", "less", "md", "html")

LINT_STAGED_KEY = "lint-staged"
COMMIT_SCRIPT = {"commit": "czg"}


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class SetupResult:
    """
    Result of a configuration run.

    Attributes
    ----------
    success : bool
        Whether every step finished.

    project_path : Path
        The configured project.

    files_created : list[Path]
        Config files copied from presets.

    existing_configs : dict[str, str]
        Tool name to the configuration form that was already present.

    merged_keys : list[str]
        package.json keys that were reconciled with preset values.

    dependencies : DependencySet
        Dependencies queued for installation.

    hooks : list[Path]
        Husky hook scripts that were written.
    """

    success: bool
    project_path: Path
    files_created: list[Path] = field(default_factory=list)
    existing_configs: dict[str, str] = field(default_factory=dict)
    merged_keys: list[str] = field(default_factory=list)
    dependencies: DependencySet = field(default_factory=DependencySet)
    hooks: list[Path] = field(default_factory=list)


# =============================================================================
# lint-staged Rules
# =============================================================================

def build_lint_staged_rules(selection: ToolSelection) -> dict[str, list[str]]:
    """
    Derive lint-staged rules from the selected tools.

    Parameters
    ----------
    selection : ToolSelection
        Operator's answers.

    Returns
    -------
    dict[str, list[str]]
        Glob to commands. Empty when neither ESLint nor Prettier is selected.

    Examples
    --------
    >>> build_lint_staged_rules(ToolSelection(language="typescript", eslint=True))
    {'*.{ts,tsx}': ['eslint --fix']}
    """
    language: Language = selection.language
    code_glob = language.code_glob

    if selection.eslint and selection.prettier:
        return {
            code_glob: ["eslint --fix", "prettier --write"],
            "*.{" + ",".join(PRETTIER_EXTENSIONS) + "}": ["prettier --write"],
        }
    if selection.eslint:
        return {code_glob: ["eslint --fix"]}
    if selection.prettier:
        extensions = (*language.code_extensions, *PRETTIER_EXTENSIONS)
        return {"*.{" + ",".join(extensions) + "}": ["prettier --write"]}
    return {}


# =============================================================================
# Per-Tool Steps
# =============================================================================

def configure_tool(
    root: ProjectRoot,
    preset: ToolPreset,
    language: Language,
    deps: DependencySet,
    result: SetupResult,
) -> None:
    """
    Run the configuration step for one tool.

    Parameters
    ----------
    root : ProjectRoot
        Project being configured.

    preset : ToolPreset
        Registry entry of the tool.

    language : Language
        Selects the preset directory for language-specific tools.

    deps : DependencySet
        Receives the preset's dependencies if the tool is new to the project.

    result : SetupResult
        Updated with created files, detected configs and merged keys.

    Raises
    ------
    PresetNotFoundError
        If a preset file this step needs is missing.
    """
    integrated = is_integrated(root, preset.packages)
    preset_dir = preset.preset_dir(language)

    if preset.config_file is not None:
        existing = find_existing_config(root, preset.candidates, Manifest.load(root))
        if existing is None:
            result.files_created.append(copy_config_file(preset_dir, preset.config_file, root))
        else:
            result.existing_configs[preset.name] = existing
            # Configs embedded in package.json are merged; config files are left alone
            if existing == preset.manifest_key:
                merge_manifest_config(preset_dir, existing, root)
                result.merged_keys.append(existing)

    for key in preset.merge_keys:
        merge_manifest_config(preset_dir, key, root)
        result.merged_keys.append(key)

    if not integrated:
        deps.add(load_preset_package(preset_dir))
    else:
        # Runtime companions are not part of integration detection
        missing = [name for name in preset.companions if not is_integrated(root, [name])]
        if missing:
            deps.add(load_preset_package(preset_dir), only=missing)


def apply_lint_staged(root: ProjectRoot, selection: ToolSelection) -> bool:
    """
    Merge the derived lint-staged rules into package.json.

    Returns
    -------
    bool
        True if package.json was updated.
    """
    rules = build_lint_staged_rules(selection)
    if not rules:
        return False

    manifest = Manifest.load(root)
    manifest.merge_key(LINT_STAGED_KEY, rules)
    manifest.save()
    console.print("[green]✨ lint-staged rules added[/]")
    return True


def apply_commit_script(root: ProjectRoot) -> None:
    """Add the ``commit`` script that launches cz-git."""
    manifest = Manifest.load(root)
    manifest.merge_key("scripts", dict(COMMIT_SCRIPT))
    manifest.save()
    console.print("[green]✨ commit script added[/]")


# =============================================================================
# Main Configuration Function
# =============================================================================

def configure_project(
    root: ProjectRoot,
    selection: ToolSelection,
    *,
    run: CommandRunner = run_command,
    verbose: bool = True,
) -> SetupResult:
    """
    Configure the selected tools in a project and install them.

    This is the main entry point. It runs the per-tool steps, writes the
    queued dependencies to package.json, runs the package manager install,
    and writes the Husky hooks.

    Parameters
    ----------
    root : ProjectRoot
        Project to configure.

    selection : ToolSelection
        Operator's answers.

    run : CommandRunner, default=run_command
        Runs external commands. Replaced in tests.

    verbose : bool, default=True
        If True, show a spinner, a summary table and a closing panel.

    Returns
    -------
    SetupResult
        What the run created, detected and merged.

    Raises
    ------
    LintforgeError
        Any step failure. Remaining steps are skipped.
    """
    result = SetupResult(success=False, project_path=root.path)
    deps = result.dependencies

    status = console.status("[bold]Processing configuration...") if verbose else nullcontext()
    with status as spinner:
        for preset in TOOL_PRESETS:
            if not getattr(selection, preset.name):
                continue

            if spinner is not None:
                spinner.update(f"[bold]Configuring {preset.title}...")

            tool = eslint_preset(detect_eslint_major(root)) if preset is ESLINT else preset
            configure_tool(root, tool, selection.language, deps, result)

            if preset is HUSKY and apply_lint_staged(root, selection):
                result.merged_keys.append(LINT_STAGED_KEY)
            if preset is CZ_GIT:
                apply_commit_script(root)
                result.merged_keys.append("scripts")

        write_dependencies(root, deps)

    if verbose:
        console.print("[green]✓[/] package.json updated")
        console.print()
        console.print("[bold green]🚀 Installing dependencies...[/]")
        console.print()

    install_dependencies(root, selection.package_manager, run)

    if is_integrated(root, HUSKY.packages):
        result.hooks.extend(setup_husky(root, selection, run))

    result.success = True

    if verbose:
        _print_summary(result)

    return result


def _print_summary(result: SetupResult) -> None:
    table = Table(title="Configuration Summary", show_header=True)
    table.add_column("Item", style="cyan")
    table.add_column("Status", style="green")

    for path in result.files_created:
        table.add_row(path.name, "created")
    for tool, form in result.existing_configs.items():
        table.add_row(form, f"[yellow]kept ({tool})[/]")
    for key in result.merged_keys:
        table.add_row(f"package.json → {key}", "merged")
    for hook in result.hooks:
        table.add_row(f".husky/{hook.name}", "written")

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold green]✨ All configuration finished![/]\n\n"
            f"[dim]Location:[/] {result.project_path}",
            title="[bold green]Success[/]",
            border_style="green",
        )
    )
