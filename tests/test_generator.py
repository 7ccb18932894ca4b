"""
Tests for lintforge.generator
=============================

This module contains tests for the configuration pipeline.

Test Organization
-----------------
- TestLintStagedRules: Tests for rule derivation from the selection
- TestConfigureTool: Tests for a single tool step
- TestConfigureProject: Tests for complete runs against a temporary project
- TestFailures: Tests for error propagation
"""

from pathlib import Path

import pytest

from lintforge.errors import InstallError, PresetNotFoundError
from lintforge.generator import (
    SetupResult,
    build_lint_staged_rules,
    configure_project,
    configure_tool,
)
from lintforge.models import DependencySet, Language, ProjectRoot, ToolSelection
from lintforge.presets import PRETTIER, ToolPreset
from tests.conftest import read_manifest, write_manifest


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def all_tools() -> ToolSelection:
    """Selection with every tool enabled, installed with npm."""
    return ToolSelection(
        language="javascript",
        eslint=True,
        prettier=True,
        husky=True,
        commitlint=True,
        cz_git=True,
        package_manager="npm",
    )


# =============================================================================
# lint-staged Rule Tests
# =============================================================================

class TestLintStagedRules:
    """Tests for build_lint_staged_rules."""

    def test_eslint_and_prettier(self) -> None:
        """Test rules when both tools are selected."""
        rules = build_lint_staged_rules(ToolSelection(eslint=True, prettier=True))

        assert rules == {
            "*.{js,jsx}": ["eslint --fix", "prettier --write"],
            "*.{json,css,scss,less,md,html}": ["prettier --write"],
        }

    def test_eslint_only_typescript(self) -> None:
        """Test that the glob follows the language."""
        rules = build_lint_staged_rules(ToolSelection(language="typescript", eslint=True))

        assert rules == {"*.{ts,tsx}": ["eslint --fix"]}

    def test_prettier_only(self) -> None:
        """Test that Prettier alone also formats source files."""
        rules = build_lint_staged_rules(ToolSelection(prettier=True))

        assert rules == {
            "*.{js,jsx,json,css,scss,less,md,html}": ["prettier --write"],
        }

    def test_neither(self) -> None:
        """Test that no rules are produced without ESLint or Prettier."""
        assert build_lint_staged_rules(ToolSelection(husky=True, commitlint=True)) == {}


# =============================================================================
# Single Step Tests
# =============================================================================

class TestConfigureTool:
    """Tests for configure_tool."""

    def test_missing_preset_is_fatal(self, root: ProjectRoot) -> None:
        """Test that a broken preset directory raises PresetNotFoundError."""
        broken = ToolPreset(
            name="prettier",
            title="Prettier",
            packages=("prettier",),
            directory="does-not-exist",
            config_file=".prettierrc",
            candidates=(".prettierrc",),
        )
        result = SetupResult(success=False, project_path=root.path)

        with pytest.raises(PresetNotFoundError):
            configure_tool(root, broken, Language.JAVASCRIPT, DependencySet(), result)

    def test_existing_file_still_queues_dependencies(
        self, project_dir: Path, root: ProjectRoot
    ) -> None:
        """Test that a kept config file does not stop the install."""
        (project_dir / ".prettierrc.json").write_text('{"semi": true}', encoding="utf-8")
        deps = DependencySet()
        result = SetupResult(success=False, project_path=root.path)

        configure_tool(root, PRETTIER, Language.JAVASCRIPT, deps, result)

        assert result.existing_configs == {"prettier": ".prettierrc.json"}
        assert result.files_created == []
        assert "prettier" in deps
        assert (project_dir / ".prettierrc.json").read_text(encoding="utf-8") == '{"semi": true}'
        assert not (project_dir / ".prettierrc").exists()


# =============================================================================
# Full Run Tests
# =============================================================================

@pytest.mark.integration
class TestConfigureProject:
    """Tests for configure_project against a temporary project."""

    def test_fresh_project_all_tools(
        self, project_dir: Path, root: ProjectRoot, all_tools: ToolSelection, recorder
    ) -> None:
        """Test a project that has none of the tools yet."""
        result = configure_project(root, all_tools, run=recorder, verbose=False)

        assert result.success is True
        for name in (".eslintrc.js", ".prettierrc", ".commitlintrc", "cz.config.js"):
            assert (project_dir / name).is_file()
        assert [p.name for p in result.files_created] == [
            ".eslintrc.js", ".prettierrc", "cz.config.js", ".commitlintrc",
        ]

        data = read_manifest(project_dir)
        dev = data["devDependencies"]
        for package in ("eslint", "prettier", "husky", "lint-staged", "cz-git", "czg",
                        "@commitlint/cli", "@commitlint/config-conventional"):
            assert package in dev
        assert data["name"] == "app"
        assert data["lint-staged"]["*.{js,jsx}"] == ["eslint --fix", "prettier --write"]
        assert data["scripts"]["commit"] == "czg"
        assert data["config"]["commitizen"]["path"] == "node_modules/cz-git"

        assert recorder.commands == [["npm", "install"], ["npx", "husky", "init"]]
        assert (project_dir / ".husky" / "pre-commit").read_text(encoding="utf-8") == (
            "npx lint-staged\n"
        )
        assert (project_dir / ".husky" / "commit-msg").read_text(encoding="utf-8") == (
            "npx --no-install commitlint --edit $1\n"
        )

    def test_integrated_tool_is_not_reinstalled(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that a tool already in package.json keeps its version."""
        write_manifest(project_dir, {"name": "app", "devDependencies": {"eslint": "^8.0.0"}})

        result = configure_project(
            root, ToolSelection(eslint=True, package_manager="pnpm"),
            run=recorder, verbose=False,
        )

        assert "eslint" not in result.dependencies
        assert read_manifest(project_dir)["devDependencies"] == {"eslint": "^8.0.0"}
        assert (project_dir / ".eslintrc.js").is_file()
        assert recorder.commands == [["pnpm", "install"]]

    def test_eslint_9_gets_flat_config(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that ESLint 9 projects receive eslint.config.mjs."""
        write_manifest(project_dir, {"name": "app", "devDependencies": {"eslint": "^9.8.0"}})

        result = configure_project(root, ToolSelection(eslint=True), run=recorder, verbose=False)

        assert [p.name for p in result.files_created] == ["eslint.config.mjs"]
        assert not (project_dir / ".eslintrc.js").exists()

    def test_installed_eslint_9_queues_flat_dependencies(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that an ESLint 9 found only in node_modules gets matching dependencies."""
        installed = project_dir / "node_modules" / "eslint"
        installed.mkdir(parents=True)
        (installed / "package.json").write_text('{"version": "9.9.0"}', encoding="utf-8")

        configure_project(root, ToolSelection(eslint=True), run=recorder, verbose=False)

        dev = read_manifest(project_dir)["devDependencies"]
        assert dev["eslint"].startswith("^9.")
        assert "@eslint/js" in dev
        assert "eslint-plugin-import" not in dev
        assert (project_dir / "eslint.config.mjs").is_file()

    def test_module_package_gets_cjs_eslintrc(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test the CommonJS rename for "type": "module" packages."""
        write_manifest(project_dir, {"name": "app", "type": "module"})

        configure_project(root, ToolSelection(eslint=True), run=recorder, verbose=False)

        assert (project_dir / ".eslintrc.cjs").is_file()
        assert not (project_dir / ".eslintrc.js").exists()

    def test_embedded_eslint_config_is_merged(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test reconciliation when ESLint is configured in package.json."""
        write_manifest(project_dir, {
            "name": "app",
            "eslintConfig": {
                "extends": ["airbnb"],
                "rules": {"eqeqeq": "error", "no-console": "off"},
            },
        })

        result = configure_project(root, ToolSelection(eslint=True), run=recorder, verbose=False)

        config = read_manifest(project_dir)["eslintConfig"]
        rules = config["rules"]
        assert "airbnb" not in config["extends"]
        assert "prettier" in config["extends"]
        assert rules["eqeqeq"] == "error"
        assert rules["no-console"] == "warn"
        assert result.merged_keys == ["eslintConfig"]
        assert result.existing_configs == {"eslint": "eslintConfig"}
        assert not (project_dir / ".eslintrc.js").exists()

    def test_existing_config_file_is_untouched(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that a user's config file survives a run byte for byte."""
        original = "module.exports = { extends: [] }\n"
        (project_dir / "commitlint.config.js").write_text(original, encoding="utf-8")

        configure_project(root, ToolSelection(commitlint=True), run=recorder, verbose=False)

        assert (project_dir / "commitlint.config.js").read_text(encoding="utf-8") == original
        assert not (project_dir / ".commitlintrc").exists()
        assert "@commitlint/cli" in read_manifest(project_dir)["devDependencies"]

    def test_lint_staged_keeps_user_rules(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that existing lint-staged globs are preserved."""
        write_manifest(project_dir, {
            "name": "app",
            "lint-staged": {"*.css": ["stylelint --fix"]},
        })
        selection = ToolSelection(eslint=True, husky=True, package_manager="yarn")

        configure_project(root, selection, run=recorder, verbose=False)

        assert read_manifest(project_dir)["lint-staged"] == {
            "*.css": ["stylelint --fix"],
            "*.{js,jsx}": ["eslint --fix"],
        }
        assert recorder.commands == [["yarn", "install"], ["yarn", "husky", "init"]]

    def test_husky_without_linters_writes_no_rules(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that lint-staged is left out when there is nothing to run."""
        result = configure_project(root, ToolSelection(husky=True), run=recorder, verbose=False)

        assert "lint-staged" not in read_manifest(project_dir)
        assert "lint-staged" not in result.merged_keys

    def test_cz_git_config_and_script(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test the commitizen adapter and commit script."""
        write_manifest(project_dir, {"name": "app", "scripts": {"test": "vitest"}})

        result = configure_project(root, ToolSelection(cz_git=True), run=recorder, verbose=False)

        data = read_manifest(project_dir)
        assert data["scripts"] == {"test": "vitest", "commit": "czg"}
        assert data["config"] == {"commitizen": {"path": "node_modules/cz-git"}}
        assert result.merged_keys == ["config", "scripts"]
        assert (project_dir / "cz.config.js").is_file()

    def test_existing_husky_gets_lint_staged(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that the pre-commit hook's runner is installed alongside an existing Husky."""
        write_manifest(project_dir, {"name": "app", "devDependencies": {"husky": "^9.0.0"}})
        (project_dir / ".husky").mkdir()
        selection = ToolSelection(eslint=True, husky=True, package_manager="pnpm")

        result = configure_project(root, selection, run=recorder, verbose=False)

        dev = read_manifest(project_dir)["devDependencies"]
        assert dev["husky"] == "^9.0.0"
        assert "lint-staged" in dev
        assert "husky" not in result.dependencies
        assert (project_dir / ".husky" / "pre-commit").read_text(encoding="utf-8") == (
            "pnpm exec lint-staged\n"
        )

    def test_existing_lint_staged_is_kept(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that a present lint-staged keeps its version."""
        write_manifest(project_dir, {
            "name": "app",
            "devDependencies": {"husky": "^9.0.0", "lint-staged": "^13.0.0"},
        })

        result = configure_project(root, ToolSelection(husky=True), run=recorder, verbose=False)

        assert not result.dependencies
        assert read_manifest(project_dir)["devDependencies"]["lint-staged"] == "^13.0.0"

    def test_commitlint_hook_with_existing_husky(
        self, project_dir: Path, root: ProjectRoot, recorder
    ) -> None:
        """Test that Commitlint adds its hook when Husky is already present."""
        write_manifest(project_dir, {"name": "app", "devDependencies": {"husky": "^9.0.0"}})
        (project_dir / ".husky").mkdir()

        result = configure_project(
            root, ToolSelection(commitlint=True, package_manager="npm"),
            run=recorder, verbose=False,
        )

        assert [h.name for h in result.hooks] == ["commit-msg"]
        assert recorder.commands == [["npm", "install"]]

    def test_no_husky_no_hooks(self, project_dir: Path, root: ProjectRoot, recorder) -> None:
        """Test that hooks are skipped when Husky is neither selected nor present."""
        result = configure_project(
            root, ToolSelection(prettier=True, commitlint=True), run=recorder, verbose=False,
        )

        assert result.hooks == []
        assert not (project_dir / ".husky").exists()
        assert recorder.commands == [["pnpm", "install"]]

    def test_quiet_run_skips_progress(self, root: ProjectRoot, recorder, capsys) -> None:
        """Test that verbose=False leaves out the progress lines."""
        configure_project(root, ToolSelection(prettier=True), run=recorder, verbose=False)

        out = capsys.readouterr().out
        assert "package.json updated" not in out
        assert "Installing dependencies" not in out

    def test_verbose_prints_summary(self, root: ProjectRoot, recorder, capsys) -> None:
        """Test the closing summary."""
        configure_project(root, ToolSelection(prettier=True), run=recorder)

        out = capsys.readouterr().out
        assert "Configuration Summary" in out
        assert "All configuration finished" in out


# =============================================================================
# Failure Tests
# =============================================================================

class TestFailures:
    """Tests for error propagation."""

    def test_install_failure_propagates(
        self, project_dir: Path, root: ProjectRoot, all_tools: ToolSelection, recorder
    ) -> None:
        """Test that a failed install aborts before the hooks."""
        recorder.fail_on = ("npm", "install")

        with pytest.raises(InstallError):
            configure_project(root, all_tools, run=recorder, verbose=False)

        # Earlier steps are not rolled back
        assert (project_dir / ".prettierrc").is_file()
        assert "husky" in read_manifest(project_dir)["devDependencies"]
        assert not (project_dir / ".husky").exists()

    def test_husky_init_failure_propagates(
        self, root: ProjectRoot, all_tools: ToolSelection, recorder
    ) -> None:
        """Test that a failing husky init is reported."""
        recorder.fail_on = ("npx", "husky", "init")

        with pytest.raises(InstallError):
            configure_project(root, all_tools, run=recorder, verbose=False)
