"""llcppg-backed generator: produce llpkg trees and verify submitted ones."""

from __future__ import annotations

import difflib
import logging
import shutil
import tempfile
from pathlib import Path

from llpkgstore.actions.exec import run_command
from llpkgstore.actions.file import CollisionError, copy_file, copy_tree
from llpkgstore.actions.generator.types import (
    CheckError,
    GenerateError,
    Mismatch,
    VerificationOutcome,
)
from llpkgstore.actions.hashutils import hash_dir
from llpkgstore.actions.pc import pkg_config_env
from llpkgstore.settings import ToolSettings

logger = logging.getLogger(__name__)

PUB_FILE = "llcppg.pub"
HASHABLE_FILES = frozenset({PUB_FILE, "go.mod", "go.sum"})
SYMB_JSON_PATTERN = "*.symb.json"


def can_hash(path: str) -> bool:
    """Return True when ``path`` takes part in verification.

    Hashable: anything containing ``.go`` plus llcppg.pub, go.mod and go.sum.
    """
    if ".go" in path:
        return True
    return path in HASHABLE_FILES


def diff_two_files(a: Path, b: Path) -> str:
    """Best-effort textual diff between two files."""
    try:
        result = run_command(
            ["git", "diff", "--no-index", "--", str(a), str(b)],
            cwd=a.parent,
            check=False,
        )
        text = result.output
    except OSError as exc:
        logger.debug("git diff unavailable: %s", exc)
        text = ""
    if text.strip():
        return text
    try:
        left = a.read_text(encoding="utf-8", errors="replace").splitlines(keepends=True)
        right = b.read_text(encoding="utf-8", errors="replace").splitlines(keepends=True)
    except OSError as exc:
        return f"diff unavailable: {exc}"
    return "".join(difflib.unified_diff(left, right, fromfile=str(a), tofile=str(b)))


class LlcppgGenerator:
    """Generator that drives the llcppg binary.

    ``dir`` holds llcppg.cfg and is also the submitted tree under review.
    ``pc_dir`` holds the ``*.pc`` files produced by the upstream installer.
    """

    def __init__(
        self,
        dir: Path,
        package_name: str,
        pc_dir: Path,
        settings: ToolSettings | None = None,
    ):
        self.dir = Path(dir).resolve()
        self.package_name = package_name
        self.pc_dir = Path(pc_dir)
        self.settings = settings or ToolSettings()

    def module_path(self) -> str:
        """Module path for the package, e.g. github.com/luoliwoshang/goplus-llpkg/cjson."""
        return self.settings.module_root + self.package_name

    def toolchain_env(self) -> dict[str, str]:
        """Env overlay pinning the Go toolchain and the pkg-config search path."""
        env = pkg_config_env(self.pc_dir)
        env["GOTOOLCHAIN"] = f"go{self.settings.go_version}"
        return env

    def _find_symb_json(self) -> str | None:
        matches = sorted(self.dir.glob(SYMB_JSON_PATTERN))
        if matches:
            return matches[0].name
        return None

    def _copy_config_files_to(self, path: Path) -> None:
        config_file = self.settings.config_file
        if not (self.dir / config_file).is_file():
            raise GenerateError(f"{config_file} not found in {self.dir}")
        if self.dir == path:
            return

        copy_file(self.dir / config_file, path / config_file)
        optional = [PUB_FILE]
        symb = self._find_symb_json()
        if symb is not None:
            optional.append(symb)
        for name in optional:
            source = self.dir / name
            if source.is_file():
                copy_file(source, path / name)
                logger.debug("copied %s into %s", name, path)

    def generate(self, to_dir: Path) -> None:
        """Run llcppg into ``to_dir`` and merge its package output there.

        Raises:
            GenerateError: missing config, failed process, or a merge collision.
            CheckError: llcppg exited cleanly but produced no package directory.
        """
        path = Path(to_dir).resolve()
        try:
            self._copy_config_files_to(path)
        except OSError as exc:
            raise GenerateError(f"cannot prepare {path}: {exc}") from exc

        argv = [
            self.settings.generator,
            "-mod",
            self.module_path(),
            self.settings.config_file,
        ]
        logger.info("running %s in %s", " ".join(argv), path)
        # llcppg may write to stderr and still succeed; only the exit code counts.
        try:
            result = run_command(
                argv,
                cwd=path,
                env=self.toolchain_env(),
                check=False,
                capture=False,
            )
        except OSError as exc:
            raise GenerateError(f"cannot run {self.settings.generator}: {exc}") from exc
        if not result.ok:
            raise GenerateError(f"{self.settings.generator} exited with status {result.returncode}")

        generated_path = path / self.package_name
        if not generated_path.is_dir():
            raise CheckError("generate fail")

        # generated output must never replace files already present in path
        try:
            copied = copy_tree(path, generated_path, allow_overwrite=False)
        except CollisionError as exc:
            raise GenerateError(str(exc)) from exc
        except OSError as exc:
            raise GenerateError(f"cannot merge generated output: {exc}") from exc
        logger.info("merged %d generated file(s) into %s", len(copied), path)

        try:
            shutil.rmtree(generated_path)
        except OSError as exc:
            raise GenerateError(f"cannot remove {generated_path}: {exc}") from exc

    def check(self, reference_dir: Path) -> VerificationOutcome:
        """Compare the submitted tree (``dir``) against ``reference_dir``."""
        base_dir = Path(reference_dir).resolve()
        try:
            generated = hash_dir(base_dir, can_hash)
            user_generated = hash_dir(self.dir, can_hash)
        except OSError as exc:
            raise CheckError(str(exc)) from exc

        mismatched: list[Mismatch] = []
        unexpected: list[str] = []
        for name in sorted(user_generated):
            generated_hash = generated.get(name)
            if generated_hash is None:
                if can_hash(name):
                    unexpected.append(name)
                continue
            if user_generated[name] != generated_hash:
                mismatched.append(
                    Mismatch(path=name, diff=diff_two_files(self.dir / name, base_dir / name))
                )
        missing = sorted(name for name in generated if name not in user_generated)

        outcome = VerificationOutcome(
            mismatched=tuple(mismatched),
            missing=tuple(missing),
            unexpected=tuple(unexpected),
        )
        logger.info(
            "checked %s: %d mismatched, %d missing, %d unexpected",
            self.package_name,
            len(outcome.mismatched),
            len(outcome.missing),
            len(outcome.unexpected),
        )
        return outcome

    def verify(self) -> VerificationOutcome:
        """Regenerate into a scratch directory and check the submitted tree against it."""
        with tempfile.TemporaryDirectory(prefix="llpkg-verify-") as scratch:
            self.generate(Path(scratch))
            return self.check(Path(scratch))
