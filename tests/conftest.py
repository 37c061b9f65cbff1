"""Shared fixtures: isolated settings and in-memory adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from core.config import AppSettings
from core.domain.errors import ProviderCommandFailed, VcsCommandFailed


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every per-user path at `tmp_path` and run from a clean cwd."""

    home = tmp_path / "home"
    (home / ".ssh").mkdir(parents=True)
    work = tmp_path / "work"
    work.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("REPOKIT_CONFIG_FILE", str(home / ".repokitrc"))
    monkeypatch.setenv("REPOKIT_SSH_CONFIG_FILE", str(home / ".ssh" / "config"))
    monkeypatch.delenv("REPOKIT_LOG_LEVEL", raising=False)
    monkeypatch.chdir(work)
    return tmp_path


@pytest.fixture
def settings(isolated_env: Path) -> AppSettings:
    return AppSettings()


@dataclass
class FakeGit:
    """In-memory `VersionControl` recording every call in `journal`."""

    journal: list[tuple] = field(default_factory=list)
    fail_on: str | None = None

    def _record(self, name: str, *args: object) -> None:
        self.journal.append((name, *args))
        if self.fail_on == name:
            raise VcsCommandFailed(["git", name], 1, f"fatal: {name} exploded")

    def is_repo(self, directory: Path) -> bool:
        return (directory / ".git").exists()

    def init(self, directory: Path) -> None:
        self._record("init", directory)
        (directory / ".git").mkdir()

    def add_all(self, directory: Path) -> None:
        self._record("add_all", directory)

    def commit(self, directory: Path, message: str) -> None:
        self._record("commit", directory, message)

    def add_remote(self, directory: Path, url: str, name: str = "origin") -> None:
        self._record("add_remote", directory, url)

    def push(self, directory: Path, branch: str = "main", identity_file: Path | None = None) -> None:
        self._record("push", directory, branch, identity_file)

    def rename_branch(self, directory: Path, name: str) -> None:
        self._record("rename_branch", directory, name)


@dataclass
class FakeGitHub:
    """In-memory `HostingProvider`; shares the journal with `FakeGit`."""

    journal: list[tuple] = field(default_factory=list)
    installed: bool = True
    authenticated: bool = True
    existing: set[str] = field(default_factory=set)
    login: str = "octocat"
    fail_create: bool = False
    orgs: list[str] = field(default_factory=list)

    def is_installed(self) -> bool:
        return self.installed

    def is_authenticated(self) -> bool:
        return self.authenticated

    def username(self) -> str:
        return self.login

    def repo_exists(self, name: str, org: str | None = None) -> bool:
        return (f"{org}/{name}" if org else name) in self.existing

    def create_repo(self, name: str, is_public: bool = False, org: str | None = None) -> str:
        full_name = f"{org or self.login}/{name}"
        self.journal.append(("create_repo", full_name, is_public))
        if self.fail_create:
            raise ProviderCommandFailed(["gh", "repo", "create", full_name], 1, "name already exists on this account")
        return f"git@github.com:{full_name}.git"

    def list_organizations(self) -> list[str]:
        return list(self.orgs)

    def web_url(self, owner: str, name: str) -> str:
        return f"https://github.com/{owner}/{name}"


@pytest.fixture
def journal() -> list[tuple]:
    return []


@pytest.fixture
def fake_git(journal: list[tuple]) -> FakeGit:
    return FakeGit(journal=journal)


@pytest.fixture
def fake_github(journal: list[tuple]) -> FakeGitHub:
    return FakeGitHub(journal=journal)
