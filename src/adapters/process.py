"""subprocess wrapper.

Why a wrapper:
- Standardizes argv-only execution (never `shell=True`), text decoding,
  output capture and DEBUG logging for every external tool.
- Makes testing easy: patch `adapters.process.subprocess.run` once.

No timeouts: a hung `git`/`gh` hangs the command, same as a terminal would.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """Run `argv` to completion and capture its output.

    `env` entries are layered over the current environment. A missing binary
    is reported as exit status 127 and any other launch error as 126, like a
    shell would.
    """

    args = [str(a) for a in argv]
    child_env = None
    if env:
        child_env = {**os.environ, **env}

    logger.debug("exec %s (cwd=%s)", " ".join(args), cwd or ".")
    try:
        completed = subprocess.run(
            args,
            cwd=str(cwd) if cwd is not None else None,
            env=child_env,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("exec %s: %s", args[0], exc)
        returncode = 127 if isinstance(exc, FileNotFoundError) else 126
        return CommandResult(argv=args, returncode=returncode, stdout="", stderr=str(exc))

    result = CommandResult(
        argv=args,
        returncode=completed.returncode,
        stdout=(completed.stdout or "").strip(),
        stderr=(completed.stderr or "").strip(),
    )
    if not result.ok:
        logger.debug("exec %s -> %s: %s", args[0], result.returncode, result.stderr)
    return result
