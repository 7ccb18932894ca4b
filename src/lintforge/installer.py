"""
lintforge.installer - Package Manager and Husky Boundary
========================================================

Everything that starts an external process lives here. Commands run
synchronously with the terminal attached, so the operator sees the package
manager's own output. A non-zero exit becomes an :class:`InstallError`.

Hook scripts are rendered from the Jinja2 templates in
``lintforge/templates/husky``.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

from jinja2 import Environment, PackageLoader, select_autoescape
from rich.console import Console

from lintforge.errors import InstallError
from lintforge.models import PackageManager, ProjectRoot, ToolSelection


console = Console()

HUSKY_DIR = ".husky"
HOOK_MODE = 0o755

# Signature shared by run_command and test doubles: (command, cwd) -> None
CommandRunner = Callable[[list[str], Path], None]


def run_command(command: list[str], cwd: Path) -> None:
    """
    Run a command, inheriting stdin/stdout/stderr.

    Raises
    ------
    InstallError
        If the executable is missing or the command exits non-zero.
    """
    try:
        subprocess.run(command, cwd=cwd, check=True)
    except FileNotFoundError as e:
        raise InstallError(command) from e
    except subprocess.CalledProcessError as e:
        raise InstallError(command, e.returncode) from e


def create_jinja_env() -> Environment:
    """Jinja2 environment for the hook templates."""
    return Environment(
        loader=PackageLoader("lintforge", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_hook(name: str, package_manager: PackageManager) -> str:
    """
    Render the script for one Husky hook.

    Parameters
    ----------
    name : str
        Hook name, ``pre-commit`` or ``commit-msg``.

    package_manager : PackageManager
        Decides how local binaries are invoked.
    """
    template = create_jinja_env().get_template(f"husky/{name}.j2")
    return template.render(
        exec_command=" ".join(package_manager.exec_prefix),
        package_manager=package_manager,
    )


def install_dependencies(
    root: ProjectRoot,
    package_manager: PackageManager,
    run: CommandRunner = run_command,
) -> None:
    """Run ``<package manager> install`` in the project."""
    run(package_manager.install_command, root.path)


def write_hook(root: ProjectRoot, name: str, package_manager: PackageManager) -> Path:
    """Write an executable Husky hook script and return its path."""
    hook_path = root / HUSKY_DIR / name
    hook_path.parent.mkdir(parents=True, exist_ok=True)
    hook_path.write_text(render_hook(name, package_manager), encoding="utf-8")
    hook_path.chmod(HOOK_MODE)
    return hook_path


def setup_husky(
    root: ProjectRoot,
    selection: ToolSelection,
    run: CommandRunner = run_command,
) -> list[Path]:
    """
    Initialize Husky and write the hooks the selection asks for.

    ``husky init`` only runs when the project has no ``.husky`` directory
    yet, since it replaces the pre-commit hook with a default one.

    Returns
    -------
    list[Path]
        Hook scripts that were written.
    """
    if not (root / HUSKY_DIR).is_dir():
        run([*selection.package_manager.exec_prefix, "husky", "init"], root.path)

    hooks: list[Path] = []
    if selection.husky:
        hooks.append(write_hook(root, "pre-commit", selection.package_manager))
        console.print("[green]✓[/] pre-commit hook configured")

    if selection.commitlint:
        hooks.append(write_hook(root, "commit-msg", selection.package_manager))
        console.print("[green]✓[/] commit-msg hook configured")

    return hooks
