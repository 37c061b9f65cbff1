"""Tests for the git adapter (subprocess is mocked)."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from adapters.git_client import GitClient
from core.config import AppSettings
from core.domain.errors import VcsCommandFailed


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def git(settings: AppSettings) -> GitClient:
    return GitClient(settings)


class TestCommands:
    @pytest.mark.parametrize(
        ("call", "argv"),
        [
            (lambda g, d: g.init(d), ["git", "init"]),
            (lambda g, d: g.add_all(d), ["git", "add", "-A"]),
            (lambda g, d: g.commit(d, "Initial commit"), ["git", "commit", "-m", "Initial commit"]),
            (
                lambda g, d: g.add_remote(d, "git@github.com:octocat/demo.git"),
                ["git", "remote", "add", "origin", "git@github.com:octocat/demo.git"],
            ),
            (lambda g, d: g.rename_branch(d, "main"), ["git", "branch", "-M", "main"]),
            (lambda g, d: g.push(d, "main"), ["git", "push", "-u", "origin", "main"]),
        ],
    )
    @patch("adapters.process.subprocess.run")
    def test_argv_and_cwd(self, mock_run: MagicMock, git: GitClient, tmp_path: Path, call, argv) -> None:
        mock_run.return_value = _completed()

        call(git, tmp_path)

        args, kwargs = mock_run.call_args
        assert args[0] == argv
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["env"] is None

    @patch("adapters.process.subprocess.run")
    def test_push_with_identity_sets_ssh_command(self, mock_run: MagicMock, git: GitClient, tmp_path: Path) -> None:
        mock_run.return_value = _completed()

        git.push(tmp_path, "main", Path("/keys/work"))

        env = mock_run.call_args.kwargs["env"]
        assert env["GIT_SSH_COMMAND"] == "ssh -i /keys/work"
        assert "PATH" in env

    @patch("adapters.process.subprocess.run")
    def test_failure_raises_with_stderr(self, mock_run: MagicMock, git: GitClient, tmp_path: Path) -> None:
        mock_run.return_value = _completed(128, stderr="fatal: not a git repository\n")

        with pytest.raises(VcsCommandFailed) as excinfo:
            git.commit(tmp_path, "Initial commit")

        assert excinfo.value.stderr == "fatal: not a git repository"
        assert excinfo.value.returncode == 128
        assert "not a git repository" in str(excinfo.value)

    @patch("adapters.process.subprocess.run")
    def test_missing_binary_is_a_command_failure(self, mock_run: MagicMock, git: GitClient, tmp_path: Path) -> None:
        mock_run.side_effect = FileNotFoundError("git")

        with pytest.raises(VcsCommandFailed) as excinfo:
            git.init(tmp_path)

        assert excinfo.value.returncode == 127

    @patch("adapters.process.subprocess.run")
    def test_unrunnable_binary_is_a_command_failure(self, mock_run: MagicMock, git: GitClient, tmp_path: Path) -> None:
        mock_run.side_effect = PermissionError(13, "Permission denied", "git")

        with pytest.raises(VcsCommandFailed) as excinfo:
            git.init(tmp_path)

        assert excinfo.value.returncode == 126
        assert "Permission denied" in excinfo.value.stderr


class TestQueries:
    def test_is_repo_checks_metadata_dir(self, git: GitClient, tmp_path: Path) -> None:
        assert not git.is_repo(tmp_path)
        (tmp_path / ".git").mkdir()
        assert git.is_repo(tmp_path)

