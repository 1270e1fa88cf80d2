"""Command runners for llpkgstore actions."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """True when the process exited with status 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr text."""
        return self.stdout + self.stderr


class ExecError(RuntimeError):
    """Raised when a command returns non-zero in check mode."""

    def __init__(self, result: ExecResult):
        rendered = " ".join(result.argv)
        detail = (result.stderr or result.stdout).strip()
        super().__init__(f"command failed ({result.returncode}): {rendered}\n{detail}")
        self.result = result


def build_env(overlay: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return a copy of the current environment with ``overlay`` applied on top."""
    env = dict(os.environ)
    if overlay:
        env.update(overlay)
    return env


def run_command(
    argv: list[str],
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    capture: bool = True,
) -> ExecResult:
    """Run command and return structured result.

    ``env`` is an additive overlay; the process environment of the caller is
    never modified. With ``capture=False`` the child inherits stdout/stderr and
    the result carries empty output. Undecodable output bytes are replaced
    rather than raised.
    """
    completed = subprocess.run(
        argv,
        cwd=cwd,
        env=build_env(env),
        capture_output=capture,
        text=True,
        errors="replace",
        check=False,
    )
    result = ExecResult(
        argv=tuple(argv),
        cwd=cwd.resolve(),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    if check and result.returncode != 0:
        raise ExecError(result)
    return result
