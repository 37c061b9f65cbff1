"""Hosting-provider adapter: the GitHub CLI (`gh`).

Phase 1 of `init` only asks yes/no questions (installed, authenticated,
exists). Those reduce the exit status to a bool. Creating the repository is
an action and raises `ProviderCommandFailed` with gh's stderr.
"""

from __future__ import annotations

import logging
import shutil

from adapters.process import CommandResult, run_command
from core.config import AppSettings
from core.domain.errors import ProviderCommandFailed
from core.interfaces.hosting import HostingProvider

logger = logging.getLogger(__name__)


class GitHubCli(HostingProvider):
    """Thin wrapper over `gh` bound to `AppSettings`."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def _gh(self, *args: str) -> CommandResult:
        return run_command([self._settings.gh_binary, *args])

    def _gh_checked(self, *args: str) -> CommandResult:
        result = self._gh(*args)
        if not result.ok:
            raise ProviderCommandFailed(result.argv, result.returncode, result.stderr)
        return result

    def is_installed(self) -> bool:
        return shutil.which(self._settings.gh_binary) is not None

    def is_authenticated(self) -> bool:
        return self._gh("auth", "status").ok

    def username(self) -> str:
        login = self._gh_checked("api", "user", "--jq", ".login").stdout
        if not login:
            raise ProviderCommandFailed([self._settings.gh_binary, "api", "user"], 0, "empty login in response")
        return login

    def repo_exists(self, name: str, org: str | None = None) -> bool:
        full_name = f"{org}/{name}" if org else name
        return self._gh("repo", "view", full_name).ok

    def create_repo(self, name: str, is_public: bool = False, org: str | None = None) -> str:
        owner = org or self.username()
        full_name = f"{owner}/{name}"
        visibility = "--public" if is_public else "--private"

        # No --source/--push: the caller attaches the remote and pushes itself.
        self._gh_checked("repo", "create", full_name, visibility)
        logger.debug("created %s (%s)", full_name, visibility)
        return f"git@{self._settings.github_host}:{full_name}.git"

    def list_organizations(self) -> list[str]:
        result = self._gh("api", "user/orgs", "--jq", ".[].login")
        if not result.ok:
            logger.warning("Could not list organizations: %s", result.stderr)
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def web_url(self, owner: str, name: str) -> str:
        return f"https://{self._settings.github_host}/{owner}/{name}"
