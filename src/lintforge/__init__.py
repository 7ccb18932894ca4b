"""
lintforge - JavaScript Tooling Bootstrapper
===========================================

A CLI tool that wires ESLint, Prettier, Husky + lint-staged, Commitlint and
cz-git into an existing JavaScript or TypeScript project.

Features
--------
- **One Prompt Batch**: Pick a language, the tools you want, and a package manager
- **Non-destructive**: Existing configuration files are detected and left alone
- **Reconciling Merges**: Configuration embedded in ``package.json`` is merged,
  never replaced wholesale
- **Version Friendly**: Tools that are already installed keep their versions

Quick Start
-----------
```bash
# Install lintforge
pip install lintforge

# Run inside a project that has a package.json
cd my-js-project
lintforge
```

Example
-------
>>> from pathlib import Path
>>> from lintforge import ProjectRoot, ToolSelection, configure_project
>>> selection = ToolSelection(language="typescript", eslint=True)
>>> result = configure_project(ProjectRoot.from_path(Path(".")), selection)

Architecture
------------
The package is organized into these main modules:

- ``cli``: Typer-based command line interface and prompt session
- ``generator``: Orchestrates the per-tool configuration steps
- ``detector``: Existing-config locator and project detection helpers
- ``manifest``: ``package.json`` access and dependency-presence checks
- ``reconcile``: Deep merge used to reconcile configuration objects
- ``presets``: Bundled preset registry and config materializer
- ``installer``: Package manager and Husky process boundary
- ``models``: Pydantic models for the run configuration

License
-------
MIT License - see LICENSE file for details.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "Technical-1"
__email__ = "jacobkanfer8@gmail.com"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================
# These are the main functions/classes users should interact with when using
# lintforge as a library (as opposed to the CLI)

from lintforge.generator import configure_project
from lintforge.models import Language, PackageManager, ProjectRoot, ToolSelection
from lintforge.reconcile import deep_merge


__all__ = [
    # Configuration models
    "Language",
    "PackageManager",
    "ProjectRoot",
    "ToolSelection",
    "__author__",
    # Version info
    "__version__",
    # Core functions
    "configure_project",
    "deep_merge",
]
