"""Domain errors.

Every error is terminal for the running command: adapters raise, the CLI
catches `RepokitError` once, prints the message and exits with status 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from core.services.provisioning import Step


class RepokitError(Exception):
    """Base class for all expected failures."""


class InvalidName(RepokitError):
    pass


class PreflightFailed(RepokitError):
    """gh missing/unauthenticated, or the repository already exists."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class UnsafeReuse(RepokitError):
    """`--here` on a directory that already has `.git` or `README.md`."""


class FilesystemError(RepokitError):
    pass


class PersistenceError(RepokitError):
    pass


class InvalidVisibilityValue(RepokitError):
    def __init__(self, value: str) -> None:
        super().__init__(f'Visibility must be "public" or "private" (got "{value}")')
        self.value = value


class CommandFailed(RepokitError):
    """An external command exited non-zero (or could not be started)."""

    def __init__(self, argv: Sequence[str], returncode: int | None, stderr: str) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or f"exit status {returncode}"
        super().__init__(f"`{' '.join(self.argv)}` failed: {detail}")


class VcsCommandFailed(CommandFailed):
    pass


class ProviderCommandFailed(CommandFailed):
    pass


class StepFailed(RepokitError):
    """A provisioning step failed; `cause` holds the underlying error."""

    def __init__(self, step: "Step", cause: Exception) -> None:
        super().__init__(f"{step.label} failed: {cause}")
        self.step = step
        self.cause = cause
