"""pkg-config path helpers."""

from __future__ import annotations

from pathlib import Path

PKG_CONFIG_PATH_ENV = "PKG_CONFIG_PATH"


def pkg_config_env(pc_dir: Path) -> dict[str, str]:
    """Env overlay that points pkg-config at the ``*.pc`` files in ``pc_dir``."""
    return {PKG_CONFIG_PATH_ENV: str(pc_dir.resolve())}
