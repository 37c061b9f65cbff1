"""Version-control contract.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The provisioning workflow depends on this, not on `git`, so tests can
  drive it with an in-memory fake.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class VersionControl(Protocol):
    """Primitives `init` needs; every action raises `VcsCommandFailed` on failure."""

    def is_repo(self, directory: Path) -> bool: ...

    def init(self, directory: Path) -> None: ...

    def add_all(self, directory: Path) -> None: ...

    def commit(self, directory: Path, message: str) -> None: ...

    def add_remote(self, directory: Path, url: str, name: str = "origin") -> None: ...

    def push(self, directory: Path, branch: str = "main", identity_file: Path | None = None) -> None: ...

    def rename_branch(self, directory: Path, name: str) -> None: ...
