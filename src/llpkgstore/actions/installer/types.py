"""Types for upstream installers."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from llpkgstore.config import PackageConfig


class InstallError(RuntimeError):
    """Raised when an upstream package cannot be installed."""


class Installer(Protocol):
    """Installs an upstream C package and returns the pkg-config name it provides."""

    name: str

    def install(self, package: PackageConfig, output_dir: Path) -> str: ...
