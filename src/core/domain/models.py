"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- The preference record round-trips through JSON with the same aliases the
  file has always used (`defaultOrg`, `defaultVisibility`).

Note:
- These models describe *what* the data is, not *how* it is obtained.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Visibility(str, Enum):
    """Repository visibility on the hosting provider."""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def from_bool(cls, public: bool) -> "Visibility":
        return cls.PUBLIC if public else cls.PRIVATE

    @property
    def is_public(self) -> bool:
        return self is Visibility.PUBLIC


class Preferences(BaseModel):
    """Persisted per-user defaults.

    A missing org means the personal account.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    default_org: str | None = Field(
        default=None,
        alias="defaultOrg",
        description="Organization used when `--org` is not given.",
    )
    default_visibility: Visibility = Field(
        default=Visibility.PRIVATE,
        alias="defaultVisibility",
        description="Visibility used when neither `--public` nor `--private` is given.",
    )


class ProvisionRequest(BaseModel):
    """Everything `init` needs, resolved once from flags and preferences."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1, max_length=100)
    is_public: bool = False
    org: str | None = None
    target_dir: Path
    use_current_dir: bool = False
    force: bool = False

    @property
    def visibility(self) -> Visibility:
        return Visibility.from_bool(self.is_public)

    @property
    def display_name(self) -> str:
        return f"{self.org}/{self.project_name}" if self.org else self.project_name


class SshIdentity(BaseModel):
    """A GitHub host block found in the SSH client configuration."""

    name: str = Field(..., min_length=1, description="Friendly account name.")
    host: str = Field(..., min_length=1, description="Raw `Host` alias.")
    identity_file: Path | None = Field(
        default=None,
        description="Private key path with `~` already expanded.",
    )


class ProvisionResult(BaseModel):
    """Output of a successful provisioning run."""

    repo_url: str = Field(..., description="SSH remote attached as origin.")
    web_url: str = Field(..., description="Browser URL of the new repository.")
    local_path: Path
    identity: SshIdentity | None = None
