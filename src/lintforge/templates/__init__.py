"""
lintforge.templates - Jinja2 Template Files
===========================================

Templates for files lintforge generates rather than copies.

Available Templates
-------------------
Husky hooks:
    - husky/pre-commit.j2: Runs lint-staged
    - husky/commit-msg.j2: Runs commitlint on the commit message

Template Context
----------------
exec_command : str
    Command prefix that runs a locally installed binary with the selected
    package manager (``npx``, ``yarn``, ``pnpm exec``).

package_manager : PackageManager
    The selected package manager.

Usage
-----
>>> from jinja2 import Environment, PackageLoader
>>> env = Environment(loader=PackageLoader("lintforge", "templates"))
>>> env.get_template("husky/pre-commit.j2").render(exec_command="npx")
'npx lint-staged\\n'
"""

# This file intentionally left mostly empty.
# Templates are loaded dynamically by Jinja2's PackageLoader.
