"""End-to-end generate and verify flows for a single llpkg directory."""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from llpkgstore.actions.exec import run_command
from llpkgstore.actions.file import copy_file_pattern
from llpkgstore.actions.generator import GenerateError, LlcppgGenerator, VerificationOutcome
from llpkgstore.actions.installer import new_installer
from llpkgstore.actions.pc import pkg_config_env
from llpkgstore.config import LLPKG_CONFIG_FILE, load_llpkg_config
from llpkgstore.settings import ToolSettings

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "llpkg-tool"


@contextmanager
def installed_upstream(pkg_dir: Path) -> Iterator[tuple[str, str, Path]]:
    """Install the upstream package of ``pkg_dir`` into a scratch directory.

    Yields ``(package_name, pc_name, scratch_dir)``. The scratch directory is
    removed when the block exits, whether or not it raised.
    """
    cfg = load_llpkg_config(pkg_dir / LLPKG_CONFIG_FILE)
    package = cfg.upstream.package
    installer = new_installer(cfg.upstream.installer)
    with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as scratch:
        scratch_dir = Path(scratch)
        pc_name = installer.install(package, scratch_dir)
        yield package.name, pc_name, scratch_dir


def ensure_llcppg_config(pkg_dir: Path, pc_name: str, pc_dir: Path, settings: ToolSettings) -> None:
    """Create llcppg.cfg with llcppcfg when the package does not ship one."""
    if (pkg_dir / settings.config_file).exists():
        return
    logger.info("%s missing in %s, running llcppcfg %s", settings.config_file, pkg_dir, pc_name)
    try:
        result = run_command(
            ["llcppcfg", pc_name],
            cwd=pkg_dir,
            env=pkg_config_env(pc_dir),
            check=False,
        )
    except OSError as exc:
        raise GenerateError(f"cannot run llcppcfg: {exc}") from exc
    if not result.ok:
        raise GenerateError(f"llcppcfg execute fail: {result.output.strip()}")


def run_generate(pkg_dir: Path, settings: ToolSettings | None = None) -> None:
    """Install upstream, then generate the llpkg into ``pkg_dir`` in place."""
    settings = settings or ToolSettings()
    pkg_dir = Path(pkg_dir).resolve()
    with installed_upstream(pkg_dir) as (package_name, pc_name, scratch_dir):
        logger.info("Start to generate %s", package_name)
        # keep the .pc files next to the package for debugging
        try:
            copy_file_pattern(scratch_dir, pkg_dir, "*.pc")
        except OSError as exc:
            raise GenerateError(f"cannot copy pkg-config files into {pkg_dir}: {exc}") from exc
        ensure_llcppg_config(pkg_dir, pc_name, scratch_dir, settings)
        generator = LlcppgGenerator(pkg_dir, package_name, scratch_dir, settings)
        generator.generate(pkg_dir)


def run_verify(pkg_dir: Path, settings: ToolSettings | None = None) -> VerificationOutcome:
    """Regenerate the llpkg in a scratch directory and compare ``pkg_dir`` against it."""
    settings = settings or ToolSettings()
    pkg_dir = Path(pkg_dir).resolve()
    with installed_upstream(pkg_dir) as (package_name, _pc_name, scratch_dir):
        logger.info("Start to verify %s", package_name)
        generator = LlcppgGenerator(pkg_dir, package_name, scratch_dir, settings)
        return generator.verify()
