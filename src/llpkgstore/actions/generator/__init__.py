"""Generators that produce llpkg binding trees."""

from llpkgstore.actions.generator.llcppg import LlcppgGenerator, can_hash
from llpkgstore.actions.generator.types import (
    CheckError,
    GenerateError,
    GenerationError,
    Generator,
    Mismatch,
    VerificationOutcome,
)

__all__ = [
    "CheckError",
    "GenerateError",
    "GenerationError",
    "Generator",
    "LlcppgGenerator",
    "Mismatch",
    "VerificationOutcome",
    "can_hash",
]
