"""Validation of generated rounds."""

from beachrank.validation.round_checker import (
    CheckResult,
    CheckStatus,
    RoundChecker,
    ValidationReport,
    ViolationType,
)

__all__ = [
    "CheckResult",
    "CheckStatus",
    "RoundChecker",
    "ValidationReport",
    "ViolationType",
]
