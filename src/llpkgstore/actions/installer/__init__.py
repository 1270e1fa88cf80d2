"""Upstream installers that fetch C libraries and their pkg-config files."""

from llpkgstore.actions.installer.conan import ConanInstaller, detect_profile
from llpkgstore.actions.installer.types import InstallError, Installer
from llpkgstore.config import ConfigError, InstallerConfig


def new_installer(config: InstallerConfig) -> Installer:
    """Instantiate the installer named in llpkg.cfg."""
    if config.name == ConanInstaller.name:
        return ConanInstaller(config.config)
    raise ConfigError(f"unsupported installer: {config.name}")


__all__ = [
    "ConanInstaller",
    "InstallError",
    "Installer",
    "detect_profile",
    "new_installer",
]
