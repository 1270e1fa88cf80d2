"""llpkg.cfg loader.

An llpkg directory carries an ``llpkg.cfg`` JSON file describing where the C
library comes from::

    {
      "upstream": {
        "installer": {"name": "conan", "config": {"options": "cjson/*:utils=True"}},
        "package": {"name": "cjson", "version": "1.7.18"}
      }
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

LLPKG_CONFIG_FILE = "llpkg.cfg"


class ConfigError(RuntimeError):
    """Raised when llpkg.cfg is missing, malformed or structurally invalid."""


@dataclass(frozen=True)
class PackageConfig:
    """Upstream C package coordinates."""

    name: str
    version: str


@dataclass(frozen=True)
class InstallerConfig:
    """Installer selection plus installer-specific options."""

    name: str = "conan"
    config: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class UpstreamConfig:
    """Upstream section of llpkg.cfg."""

    installer: InstallerConfig
    package: PackageConfig


@dataclass(frozen=True)
class LLPkgConfig:
    """Parsed llpkg.cfg."""

    upstream: UpstreamConfig

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LLPkgConfig":
        """Parse and validate config dict into LLPkgConfig."""
        upstream = data["upstream"]
        package = upstream["package"]
        name = str(package["name"]).strip()
        if not name:
            raise ValueError("upstream.package.name must not be empty")
        installer_data = upstream.get("installer") or {}
        raw_options = installer_data.get("config") or {}
        if not isinstance(raw_options, dict):
            raise TypeError("upstream.installer.config must be an object")
        installer = InstallerConfig(
            name=str(installer_data.get("name", "conan")),
            config={str(k): str(v) for k, v in raw_options.items()},
        )
        return cls(
            upstream=UpstreamConfig(
                installer=installer,
                package=PackageConfig(name=name, version=str(package.get("version", ""))),
            )
        )


def load_llpkg_config(path: Path) -> LLPkgConfig:
    """Load llpkg.cfg from ``path``.

    Raises:
        ConfigError: If the file is missing, not JSON, or lacks required keys.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed JSON config at {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config structure in {path}: expected an object")
    try:
        return LLPkgConfig.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config structure in {path}: {e}") from e
