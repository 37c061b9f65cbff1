"""Hosting-provider contract.

Check-style methods reduce a command's exit status to a bool and never
raise; action methods raise `ProviderCommandFailed`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HostingProvider(Protocol):
    def is_installed(self) -> bool: ...

    def is_authenticated(self) -> bool: ...

    def username(self) -> str: ...

    def repo_exists(self, name: str, org: str | None = None) -> bool: ...

    def create_repo(self, name: str, is_public: bool = False, org: str | None = None) -> str:
        """Create `<owner>/<name>` without pushing and return its SSH remote URL."""

        ...

    def list_organizations(self) -> list[str]: ...

    def web_url(self, owner: str, name: str) -> str: ...
