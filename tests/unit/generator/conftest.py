"""Fixtures for generator tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def pkg_dir(tmp_path: Path) -> Path:
    """An llpkg directory with llcppg.cfg, llcppg.pub and a symbol table."""
    root = tmp_path / "cjson"
    root.mkdir()
    (root / "llcppg.cfg").write_text('{"name": "cjson"}\n', encoding="utf-8")
    (root / "llcppg.pub").write_text("cJSON\n", encoding="utf-8")
    (root / "llcppg.symb.json").write_text("[]\n", encoding="utf-8")
    return root


@pytest.fixture
def pc_dir(tmp_path: Path) -> Path:
    scratch = tmp_path / "pc"
    scratch.mkdir()
    return scratch
