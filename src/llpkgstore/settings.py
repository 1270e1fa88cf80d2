"""Tool-level settings for llcppg invocations.

Values default to the registry's pinned toolchain and can be overridden via
``LLPKG_*`` environment variables for local experiments.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_MODULE_ROOT = "github.com/luoliwoshang/goplus-llpkg/"
DEFAULT_GO_VERSION = "1.20.14"
DEFAULT_GENERATOR = "llcppg"
LLCPPG_CONFIG_FILE = "llcppg.cfg"


@dataclass(frozen=True)
class ToolSettings:
    """Pinned values used when invoking the generator."""

    module_root: str = DEFAULT_MODULE_ROOT
    go_version: str = DEFAULT_GO_VERSION
    generator: str = DEFAULT_GENERATOR
    config_file: str = LLCPPG_CONFIG_FILE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ToolSettings":
        """Build settings from ``LLPKG_*`` variables, ignoring empty values."""
        source = os.environ if environ is None else environ

        def _pick(key: str, default: str) -> str:
            value = source.get(key, "").strip()
            return value or default

        module_root = _pick("LLPKG_MODULE_ROOT", DEFAULT_MODULE_ROOT)
        if not module_root.endswith("/"):
            module_root += "/"
        return cls(
            module_root=module_root,
            go_version=_pick("LLPKG_GO_VERSION", DEFAULT_GO_VERSION),
            generator=_pick("LLPKG_GENERATOR", DEFAULT_GENERATOR),
        )
