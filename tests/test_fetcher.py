"""
Tests for reactstarter.fetcher and reactstarter.finalizer
=========================================================

Test Organization
-----------------
- TestFetchTemplate: Cloning into the project directory
- TestUpdatePackageManifest: package.json rewrite
- TestCleanProject: Removing template leftovers
- TestInitGit: Fresh repository with one commit
"""

import json
import pytest
from pathlib import Path
from unittest.mock import patch

from reactstarter.errors import DirectoryExistsError, FetchError
from reactstarter.fetcher import clone_command, fetch_template, update_package_manifest
from reactstarter.finalizer import (
    clean_project,
    finalize_project,
    init_git_repository,
    stale_lockfiles,
)
from reactstarter.models import DEFAULT_TEMPLATE_URL, PackageManager, ProjectOptions

from tests.conftest import FakeCommands


# =============================================================================
# Fetch Tests
# =============================================================================

class TestFetchTemplate:
    """Tests for clone_command and fetch_template."""

    def test_clone_command(self) -> None:
        """The template is cloned shallowly into a directory named after the project."""
        assert clone_command(DEFAULT_TEMPLATE_URL, "my-app") == [
            "git", "clone", "--depth", "1", DEFAULT_TEMPLATE_URL, "my-app",
        ]

    def test_clones_into_output_dir(self, fake_commands: FakeCommands, output_dir: Path) -> None:
        """git runs in the output directory and the project appears there."""
        options = ProjectOptions(name="my-app", output_dir=output_dir)

        project_dir = fetch_template(options)

        assert project_dir == output_dir / "my-app"
        assert (project_dir / "package.json").is_file()
        assert fake_commands.calls[0][1] == output_dir

    def test_creates_missing_output_dir(self, fake_commands: FakeCommands, tmp_path: Path) -> None:
        """A missing output directory is created."""
        options = ProjectOptions(name="my-app", output_dir=tmp_path / "a" / "b")

        assert fetch_template(options).is_dir()

    def test_existing_directory(self, fake_commands: FakeCommands, output_dir: Path) -> None:
        """An existing target aborts before any subprocess runs."""
        (output_dir / "my-app").mkdir()
        (output_dir / "my-app" / "keep.txt").write_text("mine")

        with pytest.raises(DirectoryExistsError, match="already exists"):
            fetch_template(ProjectOptions(name="my-app", output_dir=output_dir))

        assert fake_commands.calls == []
        assert (output_dir / "my-app" / "keep.txt").read_text() == "mine"

    def test_existing_file(self, fake_commands: FakeCommands, output_dir: Path) -> None:
        """A file with the project's name also blocks the run."""
        (output_dir / "my-app").write_text("")

        with pytest.raises(DirectoryExistsError):
            fetch_template(ProjectOptions(name="my-app", output_dir=output_dir))

    def test_clone_failure(self, fake_commands: FakeCommands, output_dir: Path) -> None:
        """A failed clone raises FetchError."""
        fake_commands.fail_on["git clone"] = 128

        with pytest.raises(FetchError, match="Failed to clone template"):
            fetch_template(ProjectOptions(name="my-app", output_dir=output_dir))

    def test_clone_without_directory(
        self, fake_commands: FakeCommands, output_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A clone that exits 0 without creating the directory is an error."""
        monkeypatch.setattr("reactstarter.fetcher.runner.run_command", lambda *a, **k: None)

        with pytest.raises(FetchError, match="was not created"):
            fetch_template(ProjectOptions(name="my-app", output_dir=output_dir))


class TestUpdatePackageManifest:
    """Tests for update_package_manifest."""

    def test_sets_name_and_version(self, project_dir: Path) -> None:
        """name and version change; everything else stays in place."""
        update_package_manifest(project_dir, "my-app")

        text = (project_dir / "package.json").read_text()
        manifest = json.loads(text)

        assert manifest["name"] == "my-app"
        assert manifest["version"] == "1.0.0"
        assert manifest["scripts"]["dev"] == "vite"
        assert list(manifest)[:4] == ["name", "private", "version", "type"]
        assert text.endswith("}\n")
        assert '\n  "name": "my-app"' in text

    def test_missing_manifest(self, tmp_path: Path) -> None:
        """A template without package.json is a fetch error."""
        with pytest.raises(FetchError):
            update_package_manifest(tmp_path, "my-app")

    def test_invalid_manifest(self, tmp_path: Path) -> None:
        """Malformed JSON is a fetch error."""
        (tmp_path / "package.json").write_text("{ nope")

        with pytest.raises(FetchError):
            update_package_manifest(tmp_path, "my-app")

    def test_non_object_manifest(self, tmp_path: Path) -> None:
        """A JSON array is rejected."""
        (tmp_path / "package.json").write_text("[]")

        with pytest.raises(FetchError, match="not an object"):
            update_package_manifest(tmp_path, "my-app")


# =============================================================================
# Finalizer Tests
# =============================================================================

class TestCleanProject:
    """Tests for stale_lockfiles and clean_project."""

    def test_stale_lockfiles(self) -> None:
        """The selected manager's lockfile is never stale."""
        stale = stale_lockfiles(PackageManager.NPM)

        assert "package-lock.json" not in stale
        assert {"pnpm-lock.yaml", "yarn.lock", "bun.lockb"} <= set(stale)

    def test_removes_leftovers(self, project_dir: Path) -> None:
        """bin/, .git and other managers' lockfiles are removed."""
        removed = clean_project(project_dir, PackageManager.PNPM)

        assert not (project_dir / "bin").exists()
        assert not (project_dir / ".git").exists()
        assert not (project_dir / "package-lock.json").exists()
        assert (project_dir / "pnpm-lock.yaml").exists()
        assert set(removed) == {
            project_dir / "bin",
            project_dir / ".git",
            project_dir / "package-lock.json",
        }

    def test_keeps_selected_lockfile(self, project_dir: Path) -> None:
        """Switching manager drops the template's pnpm lockfile."""
        clean_project(project_dir, PackageManager.NPM)

        assert (project_dir / "package-lock.json").exists()
        assert not (project_dir / "pnpm-lock.yaml").exists()

    def test_nothing_to_remove(self, tmp_path: Path) -> None:
        """A clean tree is left alone."""
        assert clean_project(tmp_path, PackageManager.PNPM) == []


class TestInitGit:
    """Tests for init_git_repository and finalize_project."""

    def test_init_add_commit(self, fake_commands: FakeCommands, project_dir: Path) -> None:
        """git init, add and commit run in the project directory."""
        assert init_git_repository(project_dir) is True

        assert fake_commands.commands == [
            "git init",
            "git add .",
            "git commit -m Initial commit",
        ]
        assert all(cwd == project_dir for _, cwd in fake_commands.calls)

    def test_failure_is_not_fatal(self, fake_commands: FakeCommands, project_dir: Path) -> None:
        """A failing git command returns False instead of raising."""
        fake_commands.fail_on["git commit"] = 128

        assert init_git_repository(project_dir) is False

    def test_handles_missing_git(self, project_dir: Path) -> None:
        """git not being installed is reported as False."""
        with patch("reactstarter.runner.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError()
            result = init_git_repository(project_dir)

        assert result is False

    def test_finalize_without_git(self, fake_commands: FakeCommands, project_dir: Path) -> None:
        """With init_git off no git command runs."""
        options = ProjectOptions(
            name="my-app", output_dir=project_dir.parent, init_git=False
        )

        removed, git_ok = finalize_project(options)

        assert git_ok is None
        assert removed
        assert fake_commands.calls == []

    def test_finalize_with_git(self, fake_commands: FakeCommands, project_dir: Path) -> None:
        """The template history is removed before the new repository is made."""
        options = ProjectOptions(name="my-app", output_dir=project_dir.parent)

        _, git_ok = finalize_project(options)

        assert git_ok is True
        assert not (project_dir / ".git" / "HEAD").exists()
        assert fake_commands.commands[0] == "git init"
