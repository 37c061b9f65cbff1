"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking them
  into the CLI.
- Lets adapters (git/gh/ssh) read binaries and paths consistently.

User preferences (default org/visibility) are *not* settings: they live in
the preference store (`adapters.preferences_store`).
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_config_file() -> Path:
    return Path.home() / ".repokitrc"


def default_ssh_config_file() -> Path:
    return Path.home() / ".ssh" / "config"


class AppSettings(BaseSettings):
    """Central application configuration.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without dirtying the core.
    - A single configuration contract for CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPOKIT_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    config_file: Path = Field(
        default_factory=default_config_file,
        description="Preference file (default org / visibility).",
    )
    ssh_config_file: Path = Field(
        default_factory=default_ssh_config_file,
        description="SSH client configuration scanned for GitHub identities.",
    )

    git_binary: str = Field(default="git", min_length=1)
    gh_binary: str = Field(default="gh", min_length=1)

    github_host: str = Field(
        default="github.com",
        min_length=1,
        description="Canonical hostname used for remotes and SSH host matching.",
    )
    default_branch: str = Field(
        default="main",
        min_length=1,
        description="Branch the initial commit is pushed to.",
    )
    commit_message: str = Field(default="Initial commit", min_length=1)

    log_level: str = Field(
        default="WARNING",
        description="Logging level for diagnostics on stderr.",
    )

    def resolved_log_level(self) -> int:
        level = logging.getLevelName(self.log_level.strip().upper())
        return level if isinstance(level, int) else logging.WARNING
