"""
lintforge.cli - Command Line Interface
======================================

This module provides the command-line interface for lintforge using Typer.
All choices are gathered in one questionary prompt batch up front; the
configuration steps then run without further questions.

Usage Examples
--------------
Run inside a project that has a package.json:
    $ lintforge

Show version:
    $ lintforge --version

Exit Codes
----------
- 0: configuration finished, or the prompt was cancelled
- 1: configuration failed (missing package.json, broken preset, failed install)

See Also
--------
- generator.py: Configuration pipeline
- models.py: ToolSelection model built from the answers
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import questionary
import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel

from lintforge import __version__
from lintforge.detector import detect_language, detect_package_manager
from lintforge.errors import LintforgeError
from lintforge.generator import configure_project
from lintforge.manifest import is_integrated
from lintforge.models import Language, PackageManager, ProjectRoot, ToolSelection
from lintforge.presets import TOOL_PRESETS


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="lintforge",
    help="Set up ESLint, Prettier, Husky, Commitlint and cz-git in a JavaScript project.",
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()

# Prompt help text per tool, shown after the question
TOOL_DESCRIPTIONS: dict[str, str] = {
    "eslint": "ESLint checks code quality",
    "prettier": "Prettier formats code",
    "husky": "Husky manages Git hooks",
    "commitlint": "Commitlint validates commit messages",
    "cz_git": "cz-git writes conventional commit messages interactively",
}


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """
    Display version information and exit.

    Parameters
    ----------
    value : bool
        True if --version was passed.
    """
    if value:
        console.print(Panel(
            f"[bold green]lintforge[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]JavaScript tooling bootstrapper[/]\n"
            f"[dim]ESLint + Prettier + Husky + Commitlint + cz-git[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def build_questions(root: ProjectRoot) -> list[dict[str, Any]]:
    """
    Build the question descriptors for the prompt session.

    Tool questions default to "yes" only for tools the project does not
    have yet. Language and package manager defaults are detected from the
    project files.

    Parameters
    ----------
    root : ProjectRoot
        Project being configured.

    Returns
    -------
    list[dict]
        Questions in the format accepted by ``questionary.prompt``.
    """
    questions: list[dict[str, Any]] = [
        {
            "type": "select",
            "name": "language",
            "message": "Which language does the project use?",
            "choices": [
                questionary.Choice(title=lang.title, value=lang)
                for lang in Language
            ],
            "default": detect_language(root),
        },
    ]

    for preset in TOOL_PRESETS:
        questions.append({
            "type": "confirm",
            "name": preset.name,
            "message": f"Set up {preset.title}? ({TOOL_DESCRIPTIONS[preset.name]})",
            "default": not is_integrated(root, preset.packages),
        })

    questions.append({
        "type": "select",
        "name": "package_manager",
        "message": "Which package manager should install the dependencies?",
        "choices": [
            questionary.Choice(title=pm.value, value=pm)
            for pm in PackageManager
        ],
        "default": detect_package_manager(root),
    })

    return questions


def prompt_selection(root: ProjectRoot) -> ToolSelection | None:
    """
    Ask all questions in one batch.

    Returns
    -------
    ToolSelection | None
        The answers, or None if the operator cancelled.
    """
    questions = build_questions(root)
    answers = questionary.prompt(questions)

    if any(question["name"] not in answers for question in questions):
        return None

    return ToolSelection.model_validate(answers)


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Configure JavaScript tooling in the current project.

    Asks which of [cyan]ESLint[/], [cyan]Prettier[/], [cyan]Husky + lint-staged[/],
    [cyan]Commitlint[/] and [cyan]cz-git[/] to set up, writes or merges their
    configuration, and installs them with npm, yarn or pnpm.

    Existing configuration files are never overwritten.
    """
    root = ProjectRoot.from_path(Path.cwd())

    if not root.manifest_path.exists():
        rprint(f"[red]Error:[/] No package.json found at {root.path}")
        rprint("[dim]Run 'npm init' first, or run lintforge from the project root.[/]")
        raise typer.Exit(1)

    console.print()
    console.print("[bold blue]🚀 Welcome to lintforge![/]")
    console.print()

    try:
        selection = prompt_selection(root)
    except (ValidationError, LintforgeError) as e:
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if selection is None:
        rprint("[red]❌ Operation cancelled[/]")
        raise typer.Exit(0)

    try:
        configure_project(root, selection)
    except Exception as e:
        rprint("[bold red]Configuration failed[/]")
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
