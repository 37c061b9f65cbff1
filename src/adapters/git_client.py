"""Version-control adapter: thin wrappers over the `git` CLI.

Each method issues one command scoped to the working directory and raises
`VcsCommandFailed` on a non-zero exit. No retries.
"""

from __future__ import annotations

from pathlib import Path

from adapters.process import CommandResult, run_command
from adapters.ssh_config import ssh_command
from core.config import AppSettings
from core.domain.errors import VcsCommandFailed
from core.interfaces.vcs import VersionControl


class GitClient(VersionControl):
    """`git` bound to the binary configured in `AppSettings`."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def _git(self, directory: Path, *args: str, env: dict[str, str] | None = None) -> CommandResult:
        result = run_command([self._settings.git_binary, *args], cwd=directory, env=env)
        if not result.ok:
            raise VcsCommandFailed(result.argv, result.returncode, result.stderr)
        return result

    def is_repo(self, directory: Path) -> bool:
        return (directory / ".git").exists()

    def init(self, directory: Path) -> None:
        self._git(directory, "init")

    def add_all(self, directory: Path) -> None:
        self._git(directory, "add", "-A")

    def commit(self, directory: Path, message: str) -> None:
        self._git(directory, "commit", "-m", message)

    def add_remote(self, directory: Path, url: str, name: str = "origin") -> None:
        self._git(directory, "remote", "add", name, url)

    def push(self, directory: Path, branch: str = "main", identity_file: Path | None = None) -> None:
        env = None
        if identity_file is not None:
            env = {"GIT_SSH_COMMAND": ssh_command(identity_file)}
        self._git(directory, "push", "-u", "origin", branch, env=env)

    def rename_branch(self, directory: Path, name: str) -> None:
        self._git(directory, "branch", "-M", name)
