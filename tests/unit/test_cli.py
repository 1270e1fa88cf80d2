"""CLI tests for llpkgstore generate/verify."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from llpkgstore import __version__
from llpkgstore.actions.generator import GenerateError, Mismatch, VerificationOutcome
from llpkgstore.cli import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_conan(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("llpkgstore.cli.detect_profile", lambda _cwd: None)


def test_version() -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_generate_each_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[Path] = []
    monkeypatch.setattr("llpkgstore.cli.run_generate", lambda d, _s: seen.append(d))
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.mkdir()
    b.mkdir()

    result = runner.invoke(cli, ["generate", str(a), str(b)])

    assert result.exit_code == 0, result.output
    assert seen == [a.resolve(), b.resolve()]


def test_generate_defaults_to_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[Path] = []
    monkeypatch.setattr("llpkgstore.cli.run_generate", lambda d, _s: seen.append(d))
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli, ["generate"])

    assert result.exit_code == 0, result.output
    assert seen == [Path.cwd()]


def test_generate_failure_continues_and_exits_nonzero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[Path] = []

    def fake(d: Path, _s: object) -> None:
        seen.append(d)
        if d.name == "bad":
            raise GenerateError("llcppg exited with status 1")

    monkeypatch.setattr("llpkgstore.cli.run_generate", fake)

    result = runner.invoke(cli, ["generate", str(tmp_path / "bad"), str(tmp_path / "good")])

    assert result.exit_code == 1
    assert [d.name for d in seen] == ["bad", "good"]


def test_verify_equal(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("llpkgstore.cli.run_verify", lambda _d, _s: VerificationOutcome())

    result = runner.invoke(cli, ["verify", str(tmp_path)])

    assert result.exit_code == 0, result.output


def test_verify_reports_violations(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    outcome = VerificationOutcome(
        mismatched=(Mismatch(path="foo.go", diff="-A\n+B\n"),),
        missing=("bar.go",),
    )
    monkeypatch.setattr("llpkgstore.cli.run_verify", lambda _d, _s: outcome)

    result = runner.invoke(cli, ["verify", str(tmp_path)])

    assert result.exit_code == 1
    assert "file not equal: foo.go" in result.output
    assert "missing file: bar.go" in result.output


def test_generate_filesystem_error_continues(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[str] = []

    def fake(d: Path, _s: object) -> None:
        seen.append(d.name)
        if d.name == "bad":
            raise NotADirectoryError(20, "Not a directory", str(d))

    monkeypatch.setattr("llpkgstore.cli.run_generate", fake)

    result = runner.invoke(cli, ["generate", str(tmp_path / "bad"), str(tmp_path / "good")])

    assert result.exit_code == 1
    assert not isinstance(result.exception, NotADirectoryError)
    assert seen == ["bad", "good"]


def test_verify_filesystem_error_continues(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[str] = []

    def fake(d: Path, _s: object) -> VerificationOutcome:
        seen.append(d.name)
        if d.name == "bad":
            raise PermissionError(13, "Permission denied", str(d))
        return VerificationOutcome()

    monkeypatch.setattr("llpkgstore.cli.run_verify", fake)

    result = runner.invoke(cli, ["verify", str(tmp_path / "bad"), str(tmp_path / "good")])

    assert result.exit_code == 1
    assert seen == ["bad", "good"]
