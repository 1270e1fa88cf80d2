"""Content hashing helpers for generated trees."""

from __future__ import annotations

import hashlib
import os
from collections.abc import Callable
from pathlib import Path

HashablePolicy = Callable[[str], bool]

_CHUNK_SIZE = 65536


def hash_file(path: Path) -> bytes:
    """Compute the SHA-256 digest of a file's bytes."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        while True:
            chunk = handle.read(_CHUNK_SIZE)
            if not chunk:
                break
            digest.update(chunk)
    return digest.digest()


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def hash_dir(root: Path, policy: HashablePolicy) -> dict[str, bytes]:
    """Hash every regular file under ``root`` accepted by ``policy``.

    Keys are posix-style paths relative to ``root``. Files rejected by the
    policy are never opened. Any walk or read error aborts the whole
    collection, so callers never see a partial map.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"hash root does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"hash root is not a directory: {root}")

    hashes: dict[str, bytes] = {}
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        for filename in filenames:
            path = Path(dirpath) / filename
            if not path.is_file():
                continue
            rel = path.relative_to(root).as_posix()
            if not policy(rel):
                continue
            hashes[rel] = hash_file(path)
    return hashes
