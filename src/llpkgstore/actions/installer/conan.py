"""Conan-backed upstream installer."""

from __future__ import annotations

import logging
from pathlib import Path

from llpkgstore.actions.exec import ExecError, run_command
from llpkgstore.actions.installer.types import InstallError
from llpkgstore.config import PackageConfig

logger = logging.getLogger(__name__)


class ConanInstaller:
    """Install packages with ``conan install`` and emit ``*.pc`` files via PkgConfigDeps."""

    name = "conan"

    def __init__(self, config: dict[str, str] | None = None):
        self.config = dict(config or {})

    def install_argv(self, package: PackageConfig, output_dir: Path) -> list[str]:
        argv = [
            "conan",
            "install",
            "--requires",
            f"{package.name}/{package.version}",
            "--generator",
            "PkgConfigDeps",
            "--build",
            "missing",
            "--output-folder",
            str(output_dir),
        ]
        options = self.config.get("options", "").strip()
        if options:
            for option in options.split(","):
                option = option.strip()
                if option:
                    argv.extend(["--options", option])
        return argv

    def install(self, package: PackageConfig, output_dir: Path) -> str:
        """Install ``package`` into ``output_dir`` and return its pc name."""
        argv = self.install_argv(package, output_dir)
        logger.info("installing %s/%s with conan", package.name, package.version)
        try:
            run_command(argv, cwd=output_dir)
        except ExecError as exc:
            raise InstallError(f"conan install failed for {package.name}: {exc}") from exc
        except OSError as exc:
            raise InstallError(f"cannot run conan: {exc}") from exc
        return package.name


def detect_profile(cwd: Path) -> None:
    """Run ``conan profile detect``; an existing profile makes it fail, which is fine."""
    try:
        result = run_command(["conan", "profile", "detect"], cwd=cwd, check=False)
    except OSError as exc:
        logger.debug("conan profile detect unavailable: %s", exc)
        return
    if not result.ok:
        logger.debug("conan profile detect: %s", result.output.strip())
