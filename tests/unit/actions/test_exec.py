"""Unit tests for subprocess helpers."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from llpkgstore.actions.exec import ExecError, build_env, run_command
from llpkgstore.actions.pc import PKG_CONFIG_PATH_ENV, pkg_config_env


def test_build_env_overlays_without_mutating_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LLPKG_TEST_MARKER", raising=False)
    env = build_env({"LLPKG_TEST_MARKER": "1"})
    assert env["LLPKG_TEST_MARKER"] == "1"
    assert "LLPKG_TEST_MARKER" not in os.environ


def test_run_command_passes_overlay_to_child(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOTOOLCHAIN", raising=False)
    result = run_command(
        [sys.executable, "-c", "import os; print(os.environ['GOTOOLCHAIN'])"],
        cwd=tmp_path,
        env={"GOTOOLCHAIN": "go1.20.14"},
    )
    assert result.ok
    assert result.stdout.strip() == "go1.20.14"
    assert "GOTOOLCHAIN" not in os.environ


def test_run_command_check_raises_on_failure(tmp_path: Path) -> None:
    with pytest.raises(ExecError, match=r"command failed \(3\)"):
        run_command([sys.executable, "-c", "import sys; sys.exit(3)"], cwd=tmp_path)


def test_run_command_without_check_returns_result(tmp_path: Path) -> None:
    result = run_command(
        [sys.executable, "-c", "import sys; sys.stderr.write('warn'); sys.exit(2)"],
        cwd=tmp_path,
        check=False,
    )
    assert result.returncode == 2
    assert result.output == "warn"


def test_pkg_config_env_points_at_resolved_dir(tmp_path: Path) -> None:
    env = pkg_config_env(tmp_path)
    assert env == {PKG_CONFIG_PATH_ENV: str(tmp_path.resolve())}


def test_run_command_replaces_undecodable_output(tmp_path: Path) -> None:
    result = run_command(
        [sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'caf\\xe9\\n')"],
        cwd=tmp_path,
    )
    assert result.stdout == "caf\ufffd\n"
