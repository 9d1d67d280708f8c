"""External command interface: run a collaborator (make, docker, gsutil) and report a structured result."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    output: str = ""
    artifact: Path | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    def __call__(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        expected: Path | None = None,
    ) -> CommandResult: ...


def run_command(
    cmd: Sequence[str],
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    expected: Path | None = None,
    tail: int = 5,
) -> CommandResult:
    """Run cmd in cwd with env merged over os.environ; echo the last `tail` output lines.

    artifact is set only when `expected` exists after the command finishes. Raises
    FileNotFoundError if the executable itself is missing.
    """
    merged = dict(os.environ)
    if env:
        merged.update(env)
    log.debug("Running %s in %s (overrides: %s)", " ".join(cmd), cwd, dict(env or {}))
    r = subprocess.run(
        list(cmd),
        cwd=str(cwd),
        env=merged,
        capture_output=True,
        text=True,
        errors="replace",
    )
    output = (r.stdout or "") + (r.stderr or "")
    lines = output.rstrip().splitlines()
    for line in lines[-tail:] if tail > 0 else []:
        print(f"   {line}")
    artifact = expected if expected is not None and expected.exists() else None
    return CommandResult(returncode=r.returncode, output=output, artifact=artifact)
