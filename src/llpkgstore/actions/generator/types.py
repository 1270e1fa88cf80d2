"""Types shared by llpkg generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


class GenerationError(RuntimeError):
    """Base error for generator failures, prefixed with a component marker."""

    marker = "generator"

    def __init__(self, message: str):
        super().__init__(f"{self.marker}: {message}")
        self.detail = message


class GenerateError(GenerationError):
    """The generator could not produce output."""

    marker = "llcppg: cannot generate"


class CheckError(GenerationError):
    """Generated output could not be found or compared."""

    marker = "llcppg: check fail"


@dataclass(frozen=True)
class Mismatch:
    """A hashable file whose content differs from the reference tree."""

    path: str
    diff: str


@dataclass(frozen=True)
class VerificationOutcome:
    """Classified differences between a submitted tree and its reference."""

    mismatched: tuple[Mismatch, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    unexpected: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_equal(self) -> bool:
        return not (self.mismatched or self.missing or self.unexpected)

    def render(self) -> str:
        """Render a path-by-path report including literal diff text."""
        if self.is_equal:
            return "generated files match"
        lines: list[str] = []
        for item in self.mismatched:
            lines.append(f"file not equal: {item.path}")
            if item.diff:
                lines.append(item.diff.rstrip("\n"))
        for path in self.missing:
            lines.append(f"missing file: {path}")
        for path in self.unexpected:
            lines.append(f"unexpected file: {path}")
        return "\n".join(lines)


class Generator(Protocol):
    """Produces an llpkg tree and verifies submitted trees against it."""

    def generate(self, to_dir: Path) -> None: ...

    def check(self, reference_dir: Path) -> VerificationOutcome: ...
