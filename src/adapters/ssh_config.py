"""SSH client configuration reader.

Finds the `Host` blocks that point at GitHub so `init` can pick which key
pushes the first commit. Advisory only: any problem reading the file yields
an empty list, never an error.
"""

from __future__ import annotations

import logging
import re
import shlex
from dataclasses import dataclass
from pathlib import Path

from core.domain.models import SshIdentity

logger = logging.getLogger(__name__)

_HOST = re.compile(r"^Host\s+(.+)$", re.IGNORECASE)
_HOSTNAME = re.compile(r"^HostName\s+(.+)$", re.IGNORECASE)
_IDENTITY_FILE = re.compile(r"^IdentityFile\s+(.+)$", re.IGNORECASE)


@dataclass
class _HostBlock:
    alias: str
    identity_file: str | None = None
    matches: bool = False


def _expand_home(value: str, home: Path) -> Path:
    if value.startswith("~"):
        return Path(str(home) + value[1:])
    return Path(value)


def friendly_name(alias: str, hostname: str = "github.com") -> str:
    """`github.com-work` -> `work`, `github.com` -> `default`, else the alias."""

    prefix = f"{hostname}-"
    if alias.startswith(prefix) and len(alias) > len(prefix):
        return alias[len(prefix):]
    if alias == hostname:
        return "default"
    return alias


def parse_ssh_config(text: str, *, hostname: str = "github.com", home: Path | None = None) -> list[SshIdentity]:
    home = home or Path.home()
    blocks: list[_HostBlock] = []
    current: _HostBlock | None = None

    for raw_line in text.splitlines():
        line = raw_line.strip()

        match = _HOST.match(line)
        if match:
            if current and current.matches:
                blocks.append(current)
            alias = match.group(1).strip()
            current = _HostBlock(alias=alias, matches=hostname in alias)
            continue

        if current is None:
            continue

        match = _HOSTNAME.match(line)
        if match:
            if match.group(1).strip() == hostname:
                current.matches = True
            continue

        match = _IDENTITY_FILE.match(line)
        if match:
            current.identity_file = match.group(1).strip()

    if current and current.matches:
        blocks.append(current)

    return [
        SshIdentity(
            name=friendly_name(block.alias, hostname),
            host=block.alias,
            identity_file=_expand_home(block.identity_file, home) if block.identity_file else None,
        )
        for block in blocks
    ]


def list_github_identities(
    config_path: Path | None = None,
    *,
    hostname: str = "github.com",
    home: Path | None = None,
) -> list[SshIdentity]:
    """Parse `~/.ssh/config` (or `config_path`) for GitHub host blocks."""

    home = home or Path.home()
    path = config_path or (home / ".ssh" / "config")
    if not path.exists():
        return []
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return []
    return parse_ssh_config(text, hostname=hostname, home=home)


def ssh_command(identity_file: Path) -> str:
    """`GIT_SSH_COMMAND` value forcing a specific key."""

    return f"ssh -i {shlex.quote(str(identity_file))}"
